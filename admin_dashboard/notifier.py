from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable

from admin_dashboard.models import DEFAULT_NOTIFICATION_DURATION_MS, Notification, Severity

logger = logging.getLogger(__name__)

EXIT_TRANSITION_MS = 300


@dataclass(eq=False)
class _ActiveToast:
    notification: Notification
    toast: Any
    timer: Any = field(default=None)


class Notifier:
    """Shows one transient message at a time.

    ``toast_factory`` builds a widget for a notification. The widget must
    provide ``show()``, ``begin_exit()`` and ``destroy()``. Timers run on
    ``host`` (a Tk widget or anything with ``after``/``after_cancel``), so
    ``notify`` has to be called from the UI thread.
    """

    def __init__(
        self,
        host,
        toast_factory: Callable[[Notification], Any],
        duration_ms: int = DEFAULT_NOTIFICATION_DURATION_MS,
        exit_ms: int = EXIT_TRANSITION_MS,
    ):
        self._host = host
        self._toast_factory = toast_factory
        self._duration_ms = duration_ms
        self._exit_ms = exit_ms
        self._active: list[_ActiveToast] = []

    @property
    def visible(self) -> list[Notification]:
        return [entry.notification for entry in self._active]

    def notify(self, message: str, severity: Severity | str = Severity.INFO) -> Notification:
        notification = Notification(
            message=message,
            severity=Severity(severity),
            duration_ms=self._duration_ms,
        )
        self.clear()

        entry = _ActiveToast(notification=notification, toast=self._toast_factory(notification))
        self._active.append(entry)
        entry.toast.show()
        entry.timer = self._host.after(self._duration_ms, lambda: self._begin_exit(entry))
        logger.debug("Notification shown (%s): %s", notification.severity.value, message)
        return notification

    def clear(self) -> None:
        for entry in self._active:
            if entry.timer is not None:
                self._host.after_cancel(entry.timer)
            entry.toast.destroy()
        self._active.clear()

    def _begin_exit(self, entry: _ActiveToast) -> None:
        if entry not in self._active:
            return
        entry.toast.begin_exit()
        entry.timer = self._host.after(self._exit_ms, lambda: self._remove(entry))

    def _remove(self, entry: _ActiveToast) -> None:
        if entry not in self._active:
            return
        self._active.remove(entry)
        entry.toast.destroy()
