"""HTTP wire constants and status helpers."""

from __future__ import annotations

import re
from typing import Any

CRLF = "\r\n"
NEWLINE = "\n"
STATUS = "Status: "
NAME_VALUE_SEPARATOR = ": "
CONNECTION_CLOSE = "Connection: close"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def status_code(status: Any) -> int:
    """Coerce ``status`` to an integer code.

    Integers (including :class:`http.HTTPStatus` members) pass through. Strings
    contribute their leading integer, so ``"404 Not Found"`` yields ``404`` and
    a string without leading digits, or ``None``, yields ``0``.
    """

    if status is None:
        return 0
    if isinstance(status, bytes):
        status = status.decode("latin-1")
    if isinstance(status, str):
        match = _LEADING_INT.match(status)
        return int(match.group(1)) if match else 0
    return int(status)


def status_line(code: int, reason: str) -> str:
    return f"HTTP/1.1 {code} {reason}{CRLF}"


__all__ = [
    "CONNECTION_CLOSE",
    "CRLF",
    "NAME_VALUE_SEPARATOR",
    "NEWLINE",
    "STATUS",
    "status_code",
    "status_line",
]
