from __future__ import annotations

import io

import pytest

from hermes.config import AdapterConfig
from hermes.tee_input import TeeInput


def make_input(data: bytes, length: int | None = None, **kwargs: object) -> tuple[TeeInput, io.BytesIO]:
    raw = io.BytesIO(data)
    fields = {} if length is None else {"CONTENT_LENGTH": str(length)}
    return TeeInput(raw, fields, **kwargs), raw  # type: ignore[arg-type]


def test_read_respects_content_length() -> None:
    tee, raw = make_input(b"hello world", length=5)
    assert tee.read() == b"hello"
    assert tee.read() == b""
    assert raw.read() == b" world"


def test_read_until_eof_without_length() -> None:
    tee, _ = make_input(b"abc")
    assert tee.read() == b"abc"


def test_invalid_content_length_reads_until_eof() -> None:
    raw = io.BytesIO(b"abc")
    tee = TeeInput(raw, {"CONTENT_LENGTH": "nope"})
    assert tee.read() == b"abc"


def test_partial_reads_and_rewind() -> None:
    tee, _ = make_input(b"abcdef", length=6)
    assert tee.read(2) == b"ab"
    assert tee.read(3) == b"cde"
    assert tee.tell() == 5
    tee.rewind()
    assert tee.read(4) == b"abcd"
    assert tee.read() == b"ef"


def test_readline_and_iteration() -> None:
    tee, _ = make_input(b"one\ntwo\nthree", length=13)
    assert tee.readline() == b"one\n"
    assert tee.readline(2) == b"tw"
    assert list(tee) == [b"o\n", b"three"]
    tee.rewind()
    assert tee.readlines() == [b"one\n", b"two\n", b"three"]


def test_seek_reads_ahead_when_needed() -> None:
    tee, _ = make_input(b"0123456789", length=10)
    assert tee.seek(4) == 4
    assert tee.read(2) == b"45"
    assert tee.seek(0) == 0
    assert tee.read(3) == b"012"
    with pytest.raises(ValueError):
        tee.seek(0, io.SEEK_END)
    with pytest.raises(ValueError):
        tee.seek(-1)


def test_spills_to_disk_beyond_threshold() -> None:
    payload = b"x" * 64
    tee, _ = make_input(payload, length=64, config=AdapterConfig(input_spool_bytes=8))
    assert tee.read() == payload
    tee.rewind()
    assert tee.read() == payload


def test_close_is_idempotent_and_blocks_reads() -> None:
    tee, raw = make_input(b"abc", length=3)
    tee.close()
    tee.close()
    assert tee.closed
    assert not raw.closed
    with pytest.raises(ValueError):
        tee.read()
