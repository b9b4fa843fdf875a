"""Output channels the serializer writes responses to."""

from __future__ import annotations

import socket
import threading
from typing import BinaryIO, Iterable, Protocol


class OutputChannel(Protocol):
    def write(self, chunk: bytes) -> None:
        """Write a single chunk."""

    def writev(self, first: Iterable[bytes], second: Iterable[bytes] = ()) -> None:
        """Write ``first`` followed by ``second`` without interleaving other writers."""


class StreamOutput:
    """Output channel over a binary file-like object."""

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream
        self._lock = threading.Lock()

    def write(self, chunk: bytes) -> None:
        with self._lock:
            self.stream.write(chunk)

    def writev(self, first: Iterable[bytes], second: Iterable[bytes] = ()) -> None:
        payload = b"".join((*first, *second))
        with self._lock:
            self.stream.write(payload)

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()


class SocketOutput:
    """Output channel over a connected socket."""

    def __init__(self, sock: socket.socket) -> None:
        self.sock = sock
        self._lock = threading.Lock()

    def write(self, chunk: bytes) -> None:
        with self._lock:
            self.sock.sendall(chunk)

    def writev(self, first: Iterable[bytes], second: Iterable[bytes] = ()) -> None:
        payload = b"".join((*first, *second))
        with self._lock:
            self.sock.sendall(payload)


__all__ = ["OutputChannel", "SocketOutput", "StreamOutput"]
