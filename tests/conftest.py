"""Shared pytest fixtures for admin dashboard tests."""
import json
from http import HTTPStatus
from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests

from admin_dashboard.config import AppSettings
from admin_dashboard.http import RequestClient
from admin_dashboard.notifier import Notifier
from admin_dashboard.scheduler import RefreshScheduler


class FakeHost:
    """Virtual-clock replacement for a Tk widget's after/after_cancel."""

    def __init__(self):
        self.now = 0
        self._tasks = {}
        self._counter = 0

    def after(self, ms, callback):
        self._counter += 1
        timer_id = f"after#{self._counter}"
        self._tasks[timer_id] = (self.now + ms, self._counter, callback)
        return timer_id

    def after_cancel(self, timer_id):
        self._tasks.pop(timer_id, None)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def advance(self, ms: int = 0) -> None:
        """Run every callback due within the next ``ms`` milliseconds, in order."""
        target = self.now + ms
        while True:
            due = [
                (when, order, timer_id)
                for timer_id, (when, order, _) in self._tasks.items()
                if when <= target
            ]
            if not due:
                break
            when, _, timer_id = min(due)
            _, _, callback = self._tasks.pop(timer_id)
            self.now = max(self.now, when)
            callback()
        self.now = target


class FakeToast:
    def __init__(self, notification):
        self.notification = notification
        self.shown = False
        self.exiting = False
        self.destroyed = False

    def show(self):
        self.shown = True

    def begin_exit(self):
        self.exiting = True

    def destroy(self):
        self.destroyed = True


class ImmediateRunner:
    """Runs calls inline, mirroring BackgroundRunner's success/error hand-off."""

    def __init__(self):
        self.descriptions = []

    def run(self, call, on_success=None, on_error=None, description="request"):
        self.descriptions.append(description)
        try:
            result = call()
        except Exception as exc:
            if on_error is not None:
                on_error(exc)
            return None
        if on_success is not None:
            on_success(result)
        return None


def make_response(
    status: int,
    body: Any = None,
    raw: Optional[str] = None,
    reason: Optional[str] = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = reason if reason is not None else HTTPStatus(status).phrase
    if raw is not None:
        response._content = raw.encode("utf-8")
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    response.encoding = "utf-8"
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture(autouse=True)
def reset_active_scheduler():
    RefreshScheduler._active = None
    yield
    RefreshScheduler._active = None


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        base_url="https://api.example.test",
        login_url="https://example.test/login.html",
        debug_mode=False,
        refresh_interval_ms=30000,
        session_cookie_name="connect.sid",
        session_cookie="s%3Aabc123",
        timeout_seconds=15,
        notification_duration_ms=5000,
        activity_limit=20,
    )


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def toasts() -> list:
    return []


@pytest.fixture
def notifier(host, toasts) -> Notifier:
    def factory(notification):
        toast = FakeToast(notification)
        toasts.append(toast)
        return toast

    return Notifier(host, factory, duration_ms=5000)


@pytest.fixture
def redirect() -> Mock:
    return Mock(name="redirect_to_login")


@pytest.fixture
def client(settings, notifier, host, redirect) -> RequestClient:
    request_client = RequestClient(settings, notifier, host, on_login_required=redirect)
    yield request_client
    request_client.close()
