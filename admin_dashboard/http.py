from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from admin_dashboard.config import AppSettings
from admin_dashboard.models import (
    AuthRequired,
    Endpoint,
    Failure,
    Forbidden,
    HttpMethod,
    ResponseOutcome,
    Severity,
    Success,
)
from admin_dashboard.notifier import Notifier

logger = logging.getLogger(__name__)

LOGIN_REDIRECT_DELAY_MS = 2000
LOGOUT_PATH = "/logout"

CONNECTIVITY_MESSAGE = "Unable to reach the server. Check your network connection."
INVALID_JSON_MESSAGE = "Received an invalid response from the server."
AUTH_REQUIRED_MESSAGE = AuthRequired().message
FORBIDDEN_MESSAGE = Forbidden().message

# Raised after their own notification already went out.
_ALREADY_NOTIFIED = frozenset({AUTH_REQUIRED_MESSAGE, FORBIDDEN_MESSAGE})


class ApiHttpError(RuntimeError):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    @property
    def outcome(self) -> ResponseOutcome:
        return Failure(self.message, self.status_code or None)


class TransportError(ApiHttpError):
    def __init__(self, message: str = CONNECTIVITY_MESSAGE):
        super().__init__(0, message)


class AuthenticationError(ApiHttpError):
    def __init__(self, message: str = AUTH_REQUIRED_MESSAGE):
        super().__init__(401, message)

    @property
    def outcome(self) -> ResponseOutcome:
        return AuthRequired(self.message)


class AuthorizationError(ApiHttpError):
    def __init__(self, message: str = FORBIDDEN_MESSAGE):
        super().__init__(403, message)

    @property
    def outcome(self) -> ResponseOutcome:
        return Forbidden(self.message)


class ApplicationError(ApiHttpError):
    pass


class ParseError(ApplicationError):
    def __init__(self, status_code: int, message: str = INVALID_JSON_MESSAGE):
        super().__init__(status_code, message)


def parse_response(response: requests.Response) -> Any:
    """Return the JSON payload of a 2xx response or raise the matching ApiHttpError."""
    status = response.status_code
    if status == 401:
        raise AuthenticationError()
    if status == 403:
        raise AuthorizationError()
    if not 200 <= status < 300:
        raise ApplicationError(status, _error_message(response))

    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as error:
        raise ParseError(status) from error


def classify_response(response: requests.Response) -> ResponseOutcome:
    try:
        return Success(parse_response(response))
    except ApiHttpError as error:
        return error.outcome


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        message = body.get("message")
        if message is not None and message != "":
            return str(message)
    return f"HTTP {response.status_code}: {response.reason or ''}".rstrip()


class RequestClient:
    """Calls the admin API and reports failures to the user.

    ``host`` is anything with Tk's ``after(ms, callback)``. Notifications and
    the login redirect are posted through it so they run on the UI thread
    even when the call itself happens on a worker thread.
    """

    def __init__(
        self,
        settings: AppSettings,
        notifier: Notifier,
        host,
        on_login_required: Callable[[], None],
    ):
        self._settings = settings
        self._notifier = notifier
        self._host = host
        self._on_login_required = on_login_required
        self._session = requests.Session()
        self._session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )
        if settings.session_cookie:
            self._session.cookies.set(settings.session_cookie_name, settings.session_cookie)

    def request(
        self,
        path: str,
        method: HttpMethod | str = HttpMethod.GET,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Success:
        endpoint = Endpoint(
            path=path,
            method=HttpMethod(method.upper()),
            body=body,
            headers=headers,
        )
        return self.send(endpoint)

    def send(self, endpoint: Endpoint) -> Success:
        url = f"{self._settings.base_url}{endpoint.path}"
        method = endpoint.method.value

        try:
            response = self._session.request(
                method,
                url,
                headers=endpoint.headers,
                json=endpoint.body,
                timeout=self._settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            error = TransportError()
            self._report(error)
            raise error from exc

        try:
            payload = parse_response(response)
        except ApiHttpError as error:
            self._debug_log(method, url, response.status_code, error.message)
            self._report(error)
            raise

        self._debug_log(method, url, response.status_code, payload)
        return Success(payload)

    def logout(self) -> None:
        try:
            self.request(LOGOUT_PATH, HttpMethod.POST)
        except ApiHttpError as exc:
            logger.warning("Logout request failed, redirecting anyway: %s", exc)
        except Exception:
            logger.exception("Unexpected error during logout, redirecting anyway")
        finally:
            self._host.after(0, self._on_login_required)

    def close(self) -> None:
        self._session.close()

    def _report(self, error: ApiHttpError) -> None:
        if isinstance(error, AuthenticationError):
            self._post_notification(error.message, Severity.ERROR)
            self._host.after(LOGIN_REDIRECT_DELAY_MS, self._on_login_required)
            return

        if isinstance(error, AuthorizationError):
            self._post_notification(error.message, Severity.ERROR)
            return

        if error.message in _ALREADY_NOTIFIED:
            return
        self._post_notification(error.message, Severity.ERROR)

    def _post_notification(self, message: str, severity: Severity) -> None:
        self._host.after(0, lambda: self._notifier.notify(message, severity))

    def _debug_log(self, method: str, url: str, status: int, payload: Any) -> None:
        if self._settings.debug_mode:
            logger.info("%s %s -> %s %r", method, url, status, payload)
