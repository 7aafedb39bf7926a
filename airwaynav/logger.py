"""File logging that records each message with time, level, line, file and function."""

from __future__ import annotations

import logging
from datetime import datetime

TIME_FORMAT = "%d-%m-%Y %H:%M:%S"

CONTEXT_NAMES = {
    logging.DEBUG: "Debug   ",
    logging.INFO: "Info    ",
    logging.WARNING: "Warning ",
    logging.ERROR: "Critical",
    logging.CRITICAL: "Fatal   ",
}


def _section(text: str, sep: str, start: int, end: int = -1) -> str:
    """Return the fields of ``text`` split on ``sep`` from ``start`` to ``end``.

    Negative positions count from the end; an empty string is returned
    when the range lies outside the fields.
    """
    parts = text.split(sep)
    count = len(parts)
    if start < 0:
        start += count
    if end < 0:
        end += count
    if start >= count or end < 0 or start > end:
        return ""
    return sep.join(parts[max(start, 0) : end + 1])


def file_basename(path: str) -> str:
    """Return the file name of ``path`` without its directories."""
    return _section(_section(path, "\\", -1), "/", -1)


def function_name(signature: str) -> str:
    """Return the bare function name from a full function signature."""
    name = _section(signature, "(", -2, -2)
    name = _section(name, " ", -1)
    return _section(name, ":", -1)


def format_record(
    level: int,
    msg: str,
    line: int,
    file: str,
    function: str,
    when: datetime | None = None,
) -> str:
    """Format one log line in the file's ``time | level | line | file | function | msg`` layout."""
    when = when or datetime.now()
    return (
        f"{when.strftime(TIME_FORMAT)} | {CONTEXT_NAMES.get(level, '')} | "
        f"{line} | {file_basename(file)} | {function_name(function)} | {msg}\n"
    )


class FileLogHandler(logging.Handler):
    """A logging handler that appends formatted records to a file."""

    def __init__(self, path: str) -> None:
        super().__init__(logging.NOTSET)
        self.path = path
        self._stream = open(path, "a")

    def emit(self, record: logging.LogRecord) -> None:
        try:
            text = format_record(
                record.levelno,
                record.getMessage(),
                record.lineno,
                record.pathname,
                f"{record.funcName}()",
                datetime.fromtimestamp(record.created),
            )
            self._stream.write(text)
            self._stream.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.acquire()
        try:
            if not self._stream.closed:
                self._stream.close()
        finally:
            self.release()
        super().close()


_handler: FileLogHandler | None = None
_previous_level: int = logging.WARNING


def initialize(file_name: str) -> None:
    """Send every log message to ``file_name``; does nothing if already initialized."""
    global _handler, _previous_level
    if _handler is not None:
        return
    root = logging.getLogger()
    _handler = FileLogHandler(file_name)
    root.addHandler(_handler)
    _previous_level = root.level
    root.setLevel(logging.DEBUG)


def is_initialized() -> bool:
    """Return whether the file logger is active."""
    return _handler is not None


def clean() -> None:
    """Close the log file and stop redirecting messages to it."""
    global _handler
    if _handler is None:
        return
    root = logging.getLogger()
    root.removeHandler(_handler)
    _handler.close()
    root.setLevel(_previous_level)
    _handler = None