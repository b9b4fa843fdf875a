"""Bridge from PEP 3333 applications to the ``(status, headers, body)`` callback."""

from __future__ import annotations

from types import TracebackType
from typing import Any, Callable, Iterable, Iterator

from .environ import Environment
from .exceptions import AdapterError
from .handler import Application, ApplicationResult
from .serializer import close_body

ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]
StartResponse = Callable[..., Callable[[bytes], None]]
WSGIApplication = Callable[[Environment, StartResponse], Iterable[bytes]]


class _ResponseState:
    __slots__ = ("headers", "sent", "status", "written")

    def __init__(self) -> None:
        self.status: str | None = None
        self.headers: dict[str, list[str]] = {}
        self.written: list[bytes] = []
        self.sent = False

    def start_response(
        self,
        status: str,
        response_headers: list[tuple[str, str]],
        exc_info: ExcInfo | None = None,
    ) -> Callable[[bytes], None]:
        if exc_info is not None:
            if self.sent:
                raise exc_info[1].with_traceback(exc_info[2])
        elif self.status is not None:
            raise AdapterError("start_response() called twice without exc_info")
        grouped: dict[str, list[str]] = {}
        for name, value in response_headers:
            grouped.setdefault(name, []).append(value)
        self.status = status
        self.headers = grouped
        return self.written.append


class WSGIBody:
    """Response iterable that replays ``write()`` output and closes the application iterable."""

    def __init__(
        self,
        written: list[bytes],
        pending: list[bytes],
        iterator: Iterator[bytes],
        result: Iterable[bytes],
    ) -> None:
        self._written = written
        self._pending = pending
        self._iterator = iterator
        self._result = result

    def _drain(self) -> Iterator[bytes]:
        chunks = list(self._written)
        self._written.clear()
        return iter(chunks)

    def __iter__(self) -> Iterator[bytes]:
        # write() output is flushed ahead of the chunk produced after it
        yield from self._drain()
        yield from self._pending
        for chunk in self._iterator:
            yield from self._drain()
            yield chunk
        yield from self._drain()

    def close(self) -> None:
        close_body(self._result)


def wsgi_callback(app: WSGIApplication) -> Application:
    """Wrap a PEP 3333 ``app`` so it can drive a :class:`~hermes.handler.RequestHandler`."""

    def callback(env: Environment) -> ApplicationResult:
        state = _ResponseState()
        result = app(env, state.start_response)
        try:
            iterator = iter(result)
            pending: list[bytes] = []
            if state.status is None:
                # the status is only known once the first chunk is produced
                for chunk in iterator:
                    pending.append(chunk)
                    break
            if state.status is None:
                raise AdapterError("application did not call start_response()")
        except BaseException:
            close_body(result)
            raise
        state.sent = True
        return state.status, state.headers, WSGIBody(state.written, pending, iterator, result)

    return callback


__all__ = ["StartResponse", "WSGIApplication", "WSGIBody", "wsgi_callback"]
