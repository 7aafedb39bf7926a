"""Collecting and reporting OpenGL error codes."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Iterable, Sequence

_log = logging.getLogger(__name__)

MAX_ERRORS = 16


class GLError(IntEnum):
    """OpenGL error codes as returned by glGetError."""

    NO_ERROR = 0
    INVALID_ENUM = 0x0500
    INVALID_VALUE = 0x0501
    INVALID_OPERATION = 0x0502
    OUT_OF_MEMORY = 0x0505


_DESCRIPTIONS = {
    GLError.NO_ERROR: "No error",
    GLError.INVALID_ENUM: "Invalid enum",
    GLError.INVALID_VALUE: "Invalid value",
    GLError.INVALID_OPERATION: "Invalid operation",
    GLError.OUT_OF_MEMORY: "Out of memory",
}


def str_error(code: int) -> str:
    """Return a human readable description of an OpenGL error code."""
    return _DESCRIPTIONS.get(code, "Unknown error")


def collect_errors(codes: Iterable[int], max_num: int = MAX_ERRORS) -> list[tuple[int, str]]:
    """Read error codes until ``NO_ERROR`` or ``max_num`` errors.

    ``codes`` plays the part of successive glGetError calls; once it runs
    out it reports ``NO_ERROR``. Returns ``(code, description)`` pairs.
    """
    source = iter(codes)
    errors: list[tuple[int, str]] = []
    code = next(source, GLError.NO_ERROR)
    while code != GLError.NO_ERROR and len(errors) < max_num:
        errors.append((int(code), str_error(code)))
        code = next(source, GLError.NO_ERROR)
    return errors


def format_errors(max_errors: int, num_errors: int, errors: Sequence[tuple[int, str]]) -> str:
    """Format a list of errors as a multi-line report."""
    lines = [f"{num_errors} OpenGL errors detected"]
    for index, (code, description) in enumerate(errors[: min(num_errors, max_errors)]):
        lines.append(f" {index} : ({code}) {description}")
    if num_errors > max_errors:
        lines.append(f"More than {max_errors} detected! The remainder are not reported")
    return "\n".join(lines) + "\n"


def error_report(message: str, codes: Iterable[int]) -> str | None:
    """Log and return a report of pending errors, or ``None`` when there are none."""
    errors = collect_errors(codes, MAX_ERRORS)
    if not errors:
        return None
    report = f"{message}\n" + format_errors(MAX_ERRORS, len(errors), errors)
    _log.debug(report)
    return report