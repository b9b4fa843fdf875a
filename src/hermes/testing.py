"""Testing helpers."""

from __future__ import annotations

import io
from typing import Any, Iterable, Mapping

from .config import AdapterConfig
from .handler import Application, RequestHandler


class RecordingOutput:
    """Output channel that records every write operation in order."""

    __test__ = False

    def __init__(self) -> None:
        self.operations: list[tuple[str, bytes]] = []

    def write(self, chunk: bytes) -> None:
        self.operations.append(("write", bytes(chunk)))

    def writev(self, first: Iterable[bytes], second: Iterable[bytes] = ()) -> None:
        self.operations.append(("writev", b"".join((*first, *second))))

    def getvalue(self) -> bytes:
        return b"".join(data for _, data in self.operations)


def call_app(
    app: Application,
    fields: Mapping[str, Any] | None = None,
    *,
    body: bytes = b"",
    full_http_response: bool = False,
    config: AdapterConfig | None = None,
) -> RecordingOutput:
    """Run ``app`` through a :class:`RequestHandler` and return the recorded output."""

    request_fields = {"REQUEST_METHOD": "GET", "PATH_INFO": "/", **(fields or {})}
    if body:
        request_fields.setdefault("CONTENT_LENGTH", str(len(body)))
    output = RecordingOutput()
    handler = RequestHandler(app, config=config, errors=io.StringIO())
    handler.handle(request_fields, io.BytesIO(body), output, full_http_response)
    return output


__all__ = ["RecordingOutput", "call_app"]
