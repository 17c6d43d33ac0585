"""Tests for the dashboard controller."""
from unittest.mock import Mock, patch

import pytest

from admin_dashboard.apis import ActivityApi, AdminApi
from admin_dashboard.controller import DashboardController
from admin_dashboard.http import AuthorizationError, ApplicationError, FORBIDDEN_MESSAGE
from admin_dashboard.models import DashboardStats, Severity
from admin_dashboard.scheduler import RefreshScheduler
from admin_dashboard.services import DashboardService

from conftest import ImmediateRunner, make_response


@pytest.fixture
def view():
    view = Mock()
    view.confirm.return_value = True
    return view


@pytest.fixture
def service():
    service = Mock(spec=DashboardService)
    service.refresh_interval_ms = 30000
    return service


@pytest.fixture
def controller(service, notifier, host, view):
    return DashboardController(
        service=service,
        notifier=notifier,
        scheduler=RefreshScheduler(host),
        runner=ImmediateRunner(),
        view=view,
        login_url="https://example.test/login.html",
    )


class TestSections:
    """Tests for section navigation."""

    def test_dashboard_loads_stats_audits_activities(self, controller, service, view):
        """The dashboard section loads its three widgets."""
        service.load_stats.return_value = DashboardStats(1, 2, 3)
        controller.show_section("dashboard")

        view.show_section.assert_called_once_with("dashboard")
        view.render_stats.assert_called_once_with(DashboardStats(1, 2, 3))
        service.load_audits.assert_called_once_with()
        service.load_activities.assert_called_once_with()
        service.load_users.assert_not_called()

    def test_users_section(self, controller, service):
        controller.show_section("users")
        service.load_users.assert_called_once_with()
        service.load_stats.assert_not_called()

    def test_analytics_section(self, controller, service):
        controller.show_section("analytics")
        service.load_activity_stats.assert_called_once_with()
        service.load_user_growth.assert_called_once_with()

    def test_unknown_section(self, controller, view):
        with pytest.raises(ValueError):
            controller.show_section("settings")
        view.show_section.assert_not_called()

    def test_failed_widget_does_not_block_siblings(self, controller, service, view):
        """A failed load renders a placeholder and the others still render."""
        service.load_stats.side_effect = ApplicationError(500, "boom")
        service.load_audits.return_value = []
        service.load_activities.return_value = []

        controller.show_section("dashboard")

        view.render_stats.assert_called_once_with(None)
        view.render_audits.assert_called_once_with([])
        view.render_activities.assert_called_once_with([])


class TestDeletes:
    """Tests for delete flows."""

    def test_cancelled_confirmation(self, controller, service, view):
        """Nothing is deleted when the user declines."""
        view.confirm.return_value = False
        controller.delete_audit(7)
        service.delete_audit.assert_not_called()

    def test_delete_audit_success(self, controller, service, view, notifier):
        """A deleted audit is announced and the audit list reloads."""
        controller.delete_audit(7)

        assert "cannot be undone" in view.confirm.call_args[0][0]
        service.delete_audit.assert_called_once_with(7)
        assert notifier.visible[0].message == "Audit deleted successfully"
        assert notifier.visible[0].severity == Severity.SUCCESS
        service.load_audits.assert_called_once_with()

    def test_delete_user_success_reloads_users_and_stats(self, controller, service, view, notifier):
        """Deleting a user refreshes both the list and the stats."""
        controller.delete_user(42, "sam")

        assert '"sam"' in view.confirm.call_args[0][0]
        service.delete_user.assert_called_once_with(42)
        assert notifier.visible[0].message == 'User "sam" deleted successfully'
        service.load_users.assert_called_once_with()
        service.load_stats.assert_called_once_with()

    def test_delete_user_failure_skips_reload(self, controller, service, notifier):
        """A failed delete reloads nothing and adds no success message."""
        service.delete_user.side_effect = AuthorizationError()
        controller.delete_user(42, "sam")

        service.load_users.assert_not_called()
        service.load_stats.assert_not_called()
        assert notifier.visible == []

    def test_forbidden_delete_through_request_client(self, client, host, notifier, toasts, view):
        """DELETE /admin/user/42 answered with 403 shows one error and no reload."""
        service = DashboardService(client, AdminApi(client), ActivityApi(client), 30000, 20)
        controller = DashboardController(
            service=service,
            notifier=notifier,
            scheduler=RefreshScheduler(host),
            runner=ImmediateRunner(),
            view=view,
            login_url="https://example.test/login.html",
        )

        with patch.object(client._session, "send", return_value=make_response(403)) as send:
            controller.delete_user(42, "sam")
            host.advance(0)

        assert send.call_count == 1
        assert send.call_args[0][0].method == "DELETE"
        assert [t.notification.message for t in toasts] == [FORBIDDEN_MESSAGE]
        view.render_users.assert_not_called()
        view.render_stats.assert_not_called()


class TestAutoRefresh:
    """Tests for the auto refresh loop."""

    def test_refreshes_stats_and_activities(self, controller, service, host):
        """Each tick reloads stats and the activity feed."""
        controller.start_auto_refresh()
        host.advance(90000)

        assert service.load_stats.call_count == 3
        assert service.load_activities.call_count == 3
        service.load_audits.assert_not_called()

    def test_start_twice_does_not_duplicate(self, controller, service, host):
        controller.start_auto_refresh()
        controller.start_auto_refresh()
        host.advance(60000)
        assert service.load_stats.call_count == 2

    def test_stop(self, controller, service, host):
        controller.start_auto_refresh()
        controller.stop_auto_refresh()
        controller.stop_auto_refresh()
        host.advance(60000)
        service.load_stats.assert_not_called()


class TestSession:
    """Tests for logout and the login redirect."""

    def test_redirect_stops_refresh_and_opens_login(self, controller, service, view, host):
        controller.start_auto_refresh()
        controller.redirect_to_login()

        view.open_login.assert_called_once_with("https://example.test/login.html")
        assert controller.signed_out
        host.advance(60000)
        service.load_stats.assert_not_called()

    def test_redirect_only_once(self, controller, view):
        """Repeated redirects (logout plus a late 401) open login once."""
        controller.redirect_to_login()
        controller.redirect_to_login()
        view.open_login.assert_called_once()

    def test_logout(self, controller, service, host):
        controller.start_auto_refresh()
        controller.logout()
        service.logout.assert_called_once_with()
        host.advance(60000)
        service.load_stats.assert_not_called()

    def test_resume(self, controller, service, view, host):
        """Reconnecting reloads the dashboard and restarts the refresh."""
        controller.redirect_to_login()
        controller.resume()

        assert not controller.signed_out
        view.show_section.assert_called_with("dashboard")
        host.advance(30000)
        assert service.load_stats.call_count == 2
