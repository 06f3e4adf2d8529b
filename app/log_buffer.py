"""Ring buffer of formatted log records, served to the dashboard at /api/logs."""
import logging
import threading
from collections import deque

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class RingBufferHandler(logging.Handler):
    """Keeps the last max_lines formatted records; older lines fall off the front."""

    def __init__(self, max_lines: int):
        super().__init__()
        self.lines: deque[str] = deque(maxlen=max_lines)
        self._buffer_lock = threading.Lock()
        self.setFormatter(logging.Formatter(LOG_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            with self._buffer_lock:
                self.lines.append(msg)
        except Exception:
            self.handleError(record)

    def snapshot(self) -> list[str]:
        with self._buffer_lock:
            return list(self.lines)


_handler: RingBufferHandler | None = None


def install_log_buffer_handler(max_lines: int = 1000) -> RingBufferHandler:
    """Attach the buffer to the root logger once; later calls return the same handler."""
    global _handler
    if _handler is None:
        _handler = RingBufferHandler(max_lines)
        _handler.setLevel(logging.DEBUG)
        logging.getLogger().addHandler(_handler)
    return _handler


def get_log_lines() -> list[str]:
    """Copy of the buffered lines, oldest first. Empty until the handler is installed."""
    if _handler is None:
        return []
    return _handler.snapshot()
