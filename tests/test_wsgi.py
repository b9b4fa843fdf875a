from __future__ import annotations

import sys
from typing import Any, Iterator

import pytest

from hermes.exceptions import AdapterError
from hermes.testing import call_app
from hermes.wsgi import wsgi_callback


class ClosingIterable:
    def __init__(self, chunks: list[bytes]) -> None:
        self.chunks = chunks
        self.closed = 0

    def __iter__(self) -> Iterator[bytes]:
        return iter(self.chunks)

    def close(self) -> None:
        self.closed += 1


def test_wsgi_application_is_served() -> None:
    def app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
        start_response("200 OK", [("Content-Type", "text/plain"), ("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
        return [b"hi ", environ["wsgi.url_scheme"].encode()]

    output = call_app(wsgi_callback(app), {"HTTPS": "1"})
    assert output.getvalue() == (
        b"Status: 200\r\nContent-Type: text/plain\r\nSet-Cookie: a=1\r\nSet-Cookie: b=2\r\n\r\nhi https"
    )


def test_write_callable_output_precedes_iterable() -> None:
    def app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
        write = start_response("404 Not Found", [])
        write(b"early ")
        return [b"late"]

    output = call_app(wsgi_callback(app))
    assert output.getvalue() == b"Status: 404\r\n\r\nearly late"


def test_generator_that_starts_response_lazily() -> None:
    def app(environ: dict[str, Any], start_response: Any) -> Iterator[bytes]:
        start_response("201 Created", [])
        yield b"a"
        yield b"b"

    output = call_app(wsgi_callback(app))
    assert output.operations == [
        ("writev", b"Status: 201\r\n\r\n"),
        ("write", b"a"),
        ("write", b"b"),
    ]


def test_iterable_close_is_called() -> None:
    body = ClosingIterable([b"x"])

    def app(environ: dict[str, Any], start_response: Any) -> ClosingIterable:
        start_response("200 OK", [])
        return body

    call_app(wsgi_callback(app))
    assert body.closed == 1


def test_missing_start_response_raises_and_closes() -> None:
    body = ClosingIterable([])

    def app(environ: dict[str, Any], start_response: Any) -> ClosingIterable:
        return body

    with pytest.raises(AdapterError):
        call_app(wsgi_callback(app))
    assert body.closed == 1


def test_second_start_response_requires_exc_info() -> None:
    def app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
        start_response("200 OK", [])
        start_response("500 Internal Server Error", [])
        return []

    with pytest.raises(AdapterError):
        call_app(wsgi_callback(app))


def test_exc_info_replaces_pending_status() -> None:
    def app(environ: dict[str, Any], start_response: Any) -> list[bytes]:
        start_response("200 OK", [("X-Stage", "first")])
        try:
            raise RuntimeError("late failure")
        except RuntimeError:
            start_response("500 Internal Server Error", [("X-Stage", "error")], sys.exc_info())
        return [b"failed"]

    output = call_app(wsgi_callback(app))
    assert output.getvalue() == b"Status: 500\r\nX-Stage: error\r\n\r\nfailed"


def test_write_during_iteration_keeps_order() -> None:
    def app(environ: dict[str, Any], start_response: Any) -> Iterator[bytes]:
        write = start_response("200 OK", [])
        yield b"a"
        write(b"b")
        yield b"c"
        write(b"d")

    output = call_app(wsgi_callback(app))
    assert output.getvalue() == b"Status: 200\r\n\r\nabcd"
    assert [data for _, data in output.operations[1:]] == [b"a", b"b", b"c", b"d"]
