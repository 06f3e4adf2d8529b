"""Notification side-channel: a callable taking (severity, message)."""
import logging
from typing import Callable

SUCCESS = "success"
ERROR = "error"
INFO = "info"

Notifier = Callable[[str, str], None]

logger = logging.getLogger(__name__)


def log_notifier(severity: str, message: str) -> None:
    """Notifier that only writes to the log. Default when no UI is attached."""
    level = logging.ERROR if severity == ERROR else logging.INFO
    logger.log(level, f"[{severity}] {message}")
