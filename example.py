"""Minimal Hermes adapter run that ships with the package.

Run ``uv sync`` once, then ``uv run example.py`` to push one already parsed
request through a :class:`~hermes.handler.RequestHandler` and print the raw
response bytes to stdout. Set ``EXAMPLE_HTTPS=on`` to see the scheme switch,
``EXAMPLE_FULL_RESPONSE=1`` to emit the ``HTTP/1.1`` status line, and any
``HERMES_*`` variable to tweak the adapter configuration.
"""

from __future__ import annotations

import io
import logging
import os
import sys
from typing import Any, Iterator

from hermes import RequestHandler, StreamOutput, load_config, wsgi_callback


def application(environ: dict[str, Any], start_response: Any) -> Iterator[bytes]:
    """Echo the request body back along with the resolved URL scheme."""

    payload = environ["wsgi.input"].read()
    start_response(
        "200 OK",
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("Set-Cookie", "seen=1"),
            ("Set-Cookie", f"scheme={environ['wsgi.url_scheme']}"),
        ],
    )
    yield b"scheme: " + environ["wsgi.url_scheme"].encode() + b"\n"
    yield b"body: " + payload + b"\n"


def main() -> None:
    """Serve one request from in-memory channels."""

    logging.basicConfig(level=os.getenv("EXAMPLE_LOG_LEVEL", "INFO"))
    body = os.getenv("EXAMPLE_BODY", "hello from hermes").encode()
    fields = {
        "REQUEST_METHOD": "POST",
        "PATH_INFO": "/echo",
        "CONTENT_LENGTH": str(len(body)),
        "HTTPS": os.getenv("EXAMPLE_HTTPS", "off"),
    }
    full_response = os.getenv("EXAMPLE_FULL_RESPONSE", "0") in {"1", "yes", "on"}
    handler = RequestHandler(wsgi_callback(application), config=load_config())
    output = StreamOutput(sys.stdout.buffer)
    handler.handle(fields, io.BytesIO(body), output, full_response)
    output.flush()


if __name__ == "__main__":
    main()
