"""Rewindable request input."""

from __future__ import annotations

import io
import tempfile
from typing import IO, Any, Iterator, Mapping, Protocol

from .config import AdapterConfig

CONTENT_LENGTH = "CONTENT_LENGTH"
READ_CHUNK_BYTES = 16 * 1024


class RewindableInput(Protocol):
    def read(self, size: int = -1) -> bytes: ...

    def readline(self, size: int = -1) -> bytes: ...

    def rewind(self) -> None: ...

    def close(self) -> None: ...


class InputProvider(Protocol):
    def __call__(self, raw: IO[bytes], fields: Mapping[str, Any]) -> RewindableInput: ...


def _content_length(fields: Mapping[str, Any]) -> int | None:
    raw = fields.get(CONTENT_LENGTH)
    if raw is None or raw == "":
        return None
    try:
        length = int(raw)
    except (TypeError, ValueError):
        return None
    return length if length >= 0 else None


class TeeInput:
    """Request body reader that can be rewound and read again.

    Bytes pulled from the raw input are copied into a spooled temporary file
    that stays in memory up to ``config.input_spool_bytes`` and spills to
    disk beyond that. At most ``CONTENT_LENGTH`` bytes are read from the raw
    input; without a usable length the raw input is read until EOF. The raw
    input itself is never closed here.
    """

    def __init__(
        self,
        raw: IO[bytes],
        fields: Mapping[str, Any],
        *,
        config: AdapterConfig | None = None,
    ) -> None:
        cfg = config or AdapterConfig()
        self._raw = raw
        self._remaining = _content_length(fields)
        self._spool = tempfile.SpooledTemporaryFile(max_size=cfg.input_spool_bytes)
        self._buffered = 0
        self._pos = 0
        self._exhausted = self._remaining == 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed input")

    def _fill(self, size: int) -> int:
        if self._exhausted:
            return 0
        want = size if self._remaining is None else min(size, self._remaining)
        data = self._raw.read(want) if want > 0 else b""
        if not data:
            self._exhausted = True
            return 0
        self._spool.seek(0, io.SEEK_END)
        self._spool.write(data)
        self._buffered += len(data)
        if self._remaining is not None:
            self._remaining -= len(data)
            self._exhausted = self._remaining <= 0
        return len(data)

    def _take(self, reader: Any, *args: int) -> bytes:
        self._spool.seek(self._pos)
        data = reader(*args)
        self._pos += len(data)
        return data

    def read(self, size: int | None = -1) -> bytes:
        self._check_open()
        if size is None or size < 0:
            while self._fill(READ_CHUNK_BYTES):
                pass
            return self._take(self._spool.read)
        while self._buffered - self._pos < size and self._fill(size - (self._buffered - self._pos)):
            pass
        return self._take(self._spool.read, size)

    def readline(self, size: int | None = -1) -> bytes:
        self._check_open()
        limit = -1 if size is None else size
        line = b""
        while True:
            wanted = -1 if limit < 0 else limit - len(line)
            if wanted == 0:
                return line
            line += self._take(self._spool.readline, wanted)
            if line.endswith(b"\n"):
                return line
            if not self._fill(READ_CHUNK_BYTES):
                return line

    def readlines(self, hint: int = -1) -> list[bytes]:
        lines: list[bytes] = []
        total = 0
        for line in self:
            lines.append(line)
            total += len(line)
            if 0 < hint <= total:
                break
        return lines

    def __iter__(self) -> Iterator[bytes]:
        while True:
            line = self.readline()
            if not line:
                return
            yield line

    def tell(self) -> int:
        self._check_open()
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the read position; only absolute positions are supported."""

        self._check_open()
        if whence != io.SEEK_SET:
            raise ValueError("TeeInput only supports absolute seeks")
        if offset < 0:
            raise ValueError(f"negative seek position {offset}")
        while self._buffered < offset and self._fill(offset - self._buffered):
            pass
        self._pos = min(offset, self._buffered)
        return self._pos

    def rewind(self) -> None:
        self.seek(0)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._spool.close()


__all__ = ["InputProvider", "RewindableInput", "TeeInput"]
