"""Tagged response bodies."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Iterator

import msgspec


class BodyKind(str, Enum):
    """Shapes an application body can take on the wire."""

    FIXED = "fixed"
    BUFFER = "buffer"
    STREAM = "stream"
    EMPTY = "empty"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.value


class ResponseBody(msgspec.Struct, frozen=True):
    """Application body tagged with the write strategy it needs.

    ``chunks`` holds the materialized chunks for ``FIXED`` bodies and the
    single buffer for ``BUFFER`` bodies. ``source`` is the object the
    application returned; it is iterated for ``STREAM`` bodies.
    """

    kind: BodyKind
    chunks: tuple[Any, ...] = ()
    source: Any = None

    def iter_chunks(self) -> Iterator[Any]:
        if self.kind is BodyKind.STREAM:
            return iter(self.source)
        return iter(self.chunks)


_BUFFER_TYPES = (bytes, bytearray, memoryview, str)


def classify_body(body: Any) -> ResponseBody:
    """Tag ``body`` once so the writer can dispatch on :class:`BodyKind`."""

    if body is None:
        return ResponseBody(kind=BodyKind.EMPTY)
    if isinstance(body, (list, tuple)):
        return ResponseBody(kind=BodyKind.FIXED, chunks=tuple(body), source=body)
    if isinstance(body, _BUFFER_TYPES):
        return ResponseBody(kind=BodyKind.BUFFER, chunks=(body,), source=body)
    if isinstance(body, Iterable):
        return ResponseBody(kind=BodyKind.STREAM, source=body)
    raise TypeError(f"Unsupported response body type: {type(body).__name__}")


def encode_chunk(chunk: Any, encoding: str) -> bytes:
    """Return ``chunk`` as bytes, encoding text with ``encoding``."""

    if isinstance(chunk, bytes):
        return chunk
    if isinstance(chunk, str):
        return chunk.encode(encoding)
    if isinstance(chunk, (bytearray, memoryview)):
        return bytes(chunk)
    raise TypeError(f"Response body chunks must be bytes or str, got {type(chunk).__name__}")


__all__ = ["BodyKind", "ResponseBody", "classify_body", "encode_chunk"]
