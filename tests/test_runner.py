"""Tests for the background runner."""
from unittest.mock import Mock

from admin_dashboard.http import ApplicationError
from admin_dashboard.runner import BackgroundRunner


class TestBackgroundRunner:
    """Results are delivered through the host after the worker finishes."""

    def test_success_is_posted_to_host(self, host):
        on_success = Mock()
        thread = BackgroundRunner(host).run(lambda: 42, on_success=on_success)
        thread.join(timeout=5)

        on_success.assert_not_called()
        host.advance(0)
        on_success.assert_called_once_with(42)

    def test_api_error_is_posted_to_host(self, host, caplog):
        error = ApplicationError(500, "boom")
        on_success = Mock()
        on_error = Mock()

        def call():
            raise error

        thread = BackgroundRunner(host).run(
            call, on_success=on_success, on_error=on_error, description="load stats"
        )
        thread.join(timeout=5)
        host.advance(0)

        on_success.assert_not_called()
        on_error.assert_called_once_with(error)
        assert "Failed to load stats: boom" in caplog.text

    def test_unexpected_error_is_logged(self, host, caplog):
        on_error = Mock()

        def call():
            raise KeyError("total_users")

        thread = BackgroundRunner(host).run(call, on_error=on_error, description="load stats")
        thread.join(timeout=5)
        host.advance(0)

        assert isinstance(on_error.call_args[0][0], KeyError)
        assert "Unexpected error while trying to load stats" in caplog.text

    def test_callbacks_are_optional(self, host):
        thread = BackgroundRunner(host).run(lambda: None)
        thread.join(timeout=5)
        host.advance(0)
        assert host.pending == 0
