"""Request handlers that drive an application callback."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import IO, Any, Callable, Mapping

from .config import AdapterConfig
from .environ import Environment, build_environment
from .output import OutputChannel
from .serializer import HeaderCollection, write_response
from .tee_input import InputProvider, TeeInput

logger = logging.getLogger(__name__)

ApplicationResult = tuple[Any, HeaderCollection, Any]
Application = Callable[[Environment], ApplicationResult]


class AbstractRequestHandler(ABC):
    """Base class for handlers fed with already parsed requests."""

    def handle(
        self,
        fields: Mapping[str, Any],
        input: IO[bytes],
        output: OutputChannel,
        full_http_response: bool = False,
    ) -> None:
        """Process one request, logging failures before re-raising them."""

        logger.debug(
            "Processing %s %s",
            fields.get("REQUEST_METHOD", "-"),
            fields.get("PATH_INFO") or fields.get("REQUEST_URI", "-"),
        )
        try:
            self.process_request(fields, input, output, full_http_response)
        except Exception:
            logger.exception("Request processing failed")
            raise

    @abstractmethod
    def process_request(
        self,
        fields: Mapping[str, Any],
        input: IO[bytes],
        output: OutputChannel,
        full_http_response: bool = False,
    ) -> None:
        """Serve a single request described by ``fields``."""


class RequestHandler(AbstractRequestHandler):
    """Adapter between parsed requests and an application callback.

    The callback receives the request environment and returns a
    ``(status, headers, body)`` triple which is written to the output channel.
    """

    def __init__(
        self,
        app: Application,
        *,
        config: AdapterConfig | None = None,
        errors: IO[str] | None = None,
        input_provider: InputProvider | None = None,
    ) -> None:
        self.app = app
        self.config = config or AdapterConfig()
        self.errors = errors
        self._input_provider = input_provider or self._tee_input

    def _tee_input(self, raw: IO[bytes], fields: Mapping[str, Any]) -> TeeInput:
        return TeeInput(raw, fields, config=self.config)

    def process_request(
        self,
        fields: Mapping[str, Any],
        input: IO[bytes],
        output: OutputChannel,
        full_http_response: bool = False,
    ) -> None:
        rewindable_input = self._input_provider(input, fields)
        try:
            env = build_environment(fields, rewindable_input, errors=self.errors, config=self.config)
            status, headers, body = self.app(env)
            write_response(
                output,
                status,
                headers,
                body,
                full_http_response=full_http_response,
                config=self.config,
            )
        finally:
            rewindable_input.close()


__all__ = ["AbstractRequestHandler", "Application", "ApplicationResult", "RequestHandler"]
