"""Thread-safe logging with a circular buffer.

Log calls come from the capture worker, the hotkey listener thread and
the Qt main thread, so the buffer:
- Keeps at most LOG_BUFFER_SIZE entries
- Guards every access with a lock
- Notifies listeners (console, overlays) outside the lock
"""

import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Callable, Optional

from .constants import LOG_BUFFER_SIZE


class LogLevel(IntEnum):
    """Log entry severity levels (ordered)."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


@dataclass(frozen=True)
class LogEntry:
    """One logged line.

    Attributes:
        timestamp: Creation time
        level: Severity
        message: Text
        state: Capture loop state at the time, if known
    """

    timestamp: datetime
    level: LogLevel
    message: str
    state: Optional[str] = None

    def format(self) -> str:
        """Render as "[HH:MM:SS] [LEVEL] [State] message"."""
        prefix = f"[{self.timestamp:%H:%M:%S}] [{self.level.name}]"
        if self.state:
            prefix += f" [{self.state}]"
        return f"{prefix} {self.message}"


Listener = Callable[[LogEntry], None]


class LogBuffer:
    """Ring buffer of recent entries with change listeners."""

    def __init__(self, max_size: int = LOG_BUFFER_SIZE) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=max_size)
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._entries.maxlen

    def add(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)
            listeners = tuple(self._listeners)

        # Outside the lock: a listener may log again
        for notify in listeners:
            try:
                notify(entry)
            except Exception:
                pass  # listener failures never reach the caller

    def get_all(self) -> list[LogEntry]:
        with self._lock:
            return list(self._entries)

    def get_recent(self, count: int) -> list[LogEntry]:
        """Last `count` entries, oldest first."""
        with self._lock:
            entries = list(self._entries)
        return entries[-count:] if count > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def add_listener(self, callback: Listener) -> None:
        with self._lock:
            self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        with self._lock:
            try:
                self._listeners.remove(callback)
            except ValueError:
                pass

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class Logger:
    """Front end used by every component.

    Entries are tagged with the loop state last reported through
    state_change() or set_state().
    """

    def __init__(self, buffer: Optional[LogBuffer] = None) -> None:
        self._buffer = buffer if buffer is not None else LogBuffer()
        self._state: Optional[str] = None

    @property
    def buffer(self) -> LogBuffer:
        return self._buffer

    def set_state(self, state: Optional[str]) -> None:
        self._state = state

    def log(self, level: LogLevel, message: str) -> LogEntry:
        entry = LogEntry(datetime.now(), level, message, self._state)
        self._buffer.add(entry)
        return entry

    def debug(self, message: str) -> LogEntry:
        return self.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> LogEntry:
        return self.log(LogLevel.INFO, message)

    def warning(self, message: str) -> LogEntry:
        return self.log(LogLevel.WARNING, message)

    def error(self, message: str) -> LogEntry:
        return self.log(LogLevel.ERROR, message)

    def exception(self, message: str, exc: BaseException) -> LogEntry:
        """Log an error together with the exception type and text."""
        return self.error(f"{message}: {type(exc).__name__}: {exc}")

    def state_change(self, old_state: str, new_state: str) -> LogEntry:
        """Record a loop state transition and tag later entries with it."""
        self._state = new_state
        return self.debug(f"state: {old_state} -> {new_state}")


def console_listener(
    min_level: LogLevel = LogLevel.INFO,
    write: Callable[[str], object] = print,
) -> Listener:
    """Create a listener that writes entries at or above min_level."""

    def _listener(entry: LogEntry) -> None:
        if entry.level >= min_level:
            write(entry.format())

    return _listener


_default_logger: Optional[Logger] = None


def get_logger() -> Logger:
    """Process-wide logger, created on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = Logger()
    return _default_logger


def set_logger(logger: Logger) -> None:
    global _default_logger
    _default_logger = logger
