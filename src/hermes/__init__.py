"""Hermes request/response adapter."""

from .body import BodyKind, ResponseBody, classify_body
from .config import AdapterConfig, load_config
from .environ import build_environment, url_scheme
from .exceptions import AdapterError, ConfigurationError, HeaderError, HermesError
from .handler import AbstractRequestHandler, Application, RequestHandler
from .http import status_code
from .output import OutputChannel, SocketOutput, StreamOutput
from .serializer import header_block, header_lines, write_response
from .tee_input import TeeInput
from .testing import RecordingOutput, call_app
from .wsgi import wsgi_callback

__all__ = [
    "AbstractRequestHandler",
    "AdapterConfig",
    "AdapterError",
    "Application",
    "BodyKind",
    "ConfigurationError",
    "HeaderError",
    "HermesError",
    "OutputChannel",
    "RecordingOutput",
    "RequestHandler",
    "ResponseBody",
    "SocketOutput",
    "StreamOutput",
    "TeeInput",
    "build_environment",
    "call_app",
    "classify_body",
    "header_block",
    "header_lines",
    "load_config",
    "status_code",
    "url_scheme",
    "wsgi_callback",
    "write_response",
]
