from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from admin_dashboard.http import ApiHttpError

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """Runs blocking calls on worker threads and hands results back to the UI thread."""

    def __init__(self, host):
        self._host = host

    def run(
        self,
        call: Callable[[], Any],
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        description: str = "request",
    ) -> threading.Thread:
        def worker():
            try:
                result = call()
            except ApiHttpError as exc:
                logger.warning("Failed to %s: %s", description, exc)
                if on_error is not None:
                    self._host.after(0, lambda error=exc: on_error(error))
                return
            except Exception as exc:
                logger.exception("Unexpected error while trying to %s", description)
                if on_error is not None:
                    self._host.after(0, lambda error=exc: on_error(error))
                return

            if on_success is not None:
                self._host.after(0, lambda: on_success(result))

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread
