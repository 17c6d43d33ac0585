"""
Logging setup for the admin dashboard.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = "[%(asctime)s] [ADMIN] %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(debug: bool = False, format_string: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger for the dashboard process.

    Args:
        debug: Log at DEBUG instead of INFO
        format_string: Custom format string (default provided)
    """
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=format_string or LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # urllib3 is chatty at DEBUG and repeats what the request client logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger = logging.getLogger("admin_dashboard")
    logger.info("Logging initialized (level=%s)", logging.getLevelName(level))
    return logger
