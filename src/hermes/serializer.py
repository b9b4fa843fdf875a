"""Serialization of application results onto an output channel."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .body import BodyKind, classify_body, encode_chunk
from .config import AdapterConfig
from .exceptions import HeaderError
from .http import CONNECTION_CLOSE, CRLF, NAME_VALUE_SEPARATOR, NEWLINE, STATUS, status_code, status_line
from .output import OutputChannel

logger = logging.getLogger(__name__)

HeaderCollection = Mapping[str, Any] | Iterable[tuple[str, Any]]


def _header_items(headers: HeaderCollection) -> Iterable[tuple[str, Any]]:
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


def _split_values(value: str) -> list[str]:
    # trailing empty segments produce no header line
    values = value.split(NEWLINE)
    while values and not values[-1]:
        values.pop()
    return values


def header_lines(headers: HeaderCollection) -> list[tuple[str, str]]:
    """Flatten ``headers`` into one ``(name, value)`` pair per emitted line.

    String values are split on line feeds; other values are treated as a
    sequence of already separated values.
    """

    lines: list[tuple[str, str]] = []
    for name, values in _header_items(headers):
        if isinstance(values, str):
            values = _split_values(values)
        elif isinstance(values, (bytes, bytearray)) or not isinstance(values, Iterable):
            raise HeaderError(name, values)
        for value in values:
            if not isinstance(value, str):
                raise HeaderError(name, value)
            lines.append((name, value))
    return lines


def header_block(
    status: Any,
    headers: HeaderCollection,
    *,
    full_http_response: bool = False,
    config: AdapterConfig | None = None,
) -> list[bytes]:
    """Return the encoded header block, terminated by an empty line."""

    cfg = config or AdapterConfig()
    code = status_code(status)
    parts: list[str] = []
    if full_http_response:
        parts.append(status_line(code, cfg.reason_phrase))
        parts.append(f"{CONNECTION_CLOSE}{CRLF}")
    parts.append(f"{STATUS}{code}{CRLF}")
    for name, value in header_lines(headers):
        parts.append(f"{name}{NAME_VALUE_SEPARATOR}{value}{CRLF}")
    parts.append(CRLF)
    return [part.encode(cfg.header_encoding) for part in parts]


def close_body(body: Any) -> None:
    close = getattr(body, "close", None)
    if callable(close):
        close()


def write_response(
    output: OutputChannel,
    status: Any,
    headers: HeaderCollection,
    body: Any,
    *,
    full_http_response: bool = False,
    config: AdapterConfig | None = None,
) -> None:
    """Write ``status``, ``headers`` and ``body`` to ``output``.

    The body is closed exactly once after writing, whether or not writing
    succeeded.
    """

    cfg = config or AdapterConfig()
    try:
        head = header_block(status, headers, full_http_response=full_http_response, config=cfg)
        tagged = classify_body(body)
        logger.debug("Writing %s body after %d header block parts", tagged.kind, len(head))
        if tagged.kind is BodyKind.FIXED:
            output.writev(head, [encode_chunk(chunk, cfg.body_encoding) for chunk in tagged.chunks])
        elif tagged.kind is BodyKind.BUFFER:
            head.append(encode_chunk(tagged.chunks[0], cfg.body_encoding))
            output.writev(head)
        else:
            output.writev(head)
            for chunk in tagged.iter_chunks():
                output.write(encode_chunk(chunk, cfg.body_encoding))
    finally:
        close_body(body)


__all__ = ["HeaderCollection", "close_body", "header_block", "header_lines", "write_response"]
