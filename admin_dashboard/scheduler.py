from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs an action every ``interval_ms`` on a Tk-style host.

    Only one scheduler is active per process: starting one stops whichever
    was running before. ``stop()`` cancels future ticks only; work an earlier
    tick already dispatched keeps running.
    """

    _active: Optional["RefreshScheduler"] = None

    def __init__(self, host):
        self._host = host
        self._action: Optional[Callable[[], Any]] = None
        self._interval_ms = 0
        self._timer = None

    @property
    def is_running(self) -> bool:
        return self._action is not None

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def start(self, action: Callable[[], Any], interval_ms: int) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be greater than 0")

        self.stop()
        previous = RefreshScheduler._active
        if previous is not None and previous is not self:
            previous.stop()

        self._action = action
        self._interval_ms = interval_ms
        RefreshScheduler._active = self
        self._timer = self._host.after(interval_ms, self._tick)
        logger.info("Auto refresh started (every %d ms)", interval_ms)

    def stop(self) -> None:
        if self._timer is not None:
            self._host.after_cancel(self._timer)
            self._timer = None

        was_running = self._action is not None
        self._action = None
        if RefreshScheduler._active is self:
            RefreshScheduler._active = None
        if was_running:
            logger.info("Auto refresh stopped")

    def bind_to(self, window) -> None:
        """Stop when ``window`` is destroyed."""

        def on_destroy(event):
            if event.widget is window:
                self.stop()

        window.bind("<Destroy>", on_destroy, add="+")

    def _tick(self) -> None:
        action = self._action
        if action is None:
            return

        # Re-arm first so a slow or failing action cannot stall the schedule.
        self._timer = self._host.after(self._interval_ms, self._tick)
        try:
            action()
        except Exception:
            logger.exception("Auto refresh action failed")
