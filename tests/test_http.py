from __future__ import annotations

from http import HTTPStatus

import pytest

from hermes.http import status_code, status_line


def test_status_code_passes_integers_through() -> None:
    assert status_code(200) == 200
    assert status_code(HTTPStatus.NOT_FOUND) == 404


def test_status_code_uses_leading_integer_of_strings() -> None:
    assert status_code("404 Not Found") == 404
    assert status_code(" 302") == 302
    assert status_code(b"500 Internal Server Error") == 500
    assert status_code("Whatever") == 0
    assert status_code(None) == 0


def test_status_code_rejects_unconvertible_values() -> None:
    with pytest.raises(TypeError):
        status_code(object())


def test_status_line_format() -> None:
    assert status_line(200, "Whatever") == "HTTP/1.1 200 Whatever\r\n"
