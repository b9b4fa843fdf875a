"""Request environment construction."""

from __future__ import annotations

import sys
from typing import IO, Any, Mapping

from .config import AdapterConfig

WSGI_VERSION = "wsgi.version"
WSGI_INPUT = "wsgi.input"
WSGI_ERRORS = "wsgi.errors"
WSGI_MULTITHREAD = "wsgi.multithread"
WSGI_MULTIPROCESS = "wsgi.multiprocess"
WSGI_RUN_ONCE = "wsgi.run_once"
WSGI_URL_SCHEME = "wsgi.url_scheme"

HTTPS_FIELD = "HTTPS"
HTTPS = "https"
HTTP = "http"
HTTPS_ENABLED_VALUES: frozenset[str] = frozenset({"yes", "on", "1"})

Environment = dict[str, Any]


def url_scheme(fields: Mapping[str, Any]) -> str:
    """Return ``"https"`` when the ``HTTPS`` field is exactly ``yes``, ``on`` or ``1``."""

    value = fields.get(HTTPS_FIELD)
    if isinstance(value, str) and value in HTTPS_ENABLED_VALUES:
        return HTTPS
    return HTTP


def build_environment(
    fields: Mapping[str, Any],
    rewindable_input: Any,
    *,
    errors: IO[str] | None = None,
    config: AdapterConfig | None = None,
) -> Environment:
    """Return a fresh environment for one application call.

    ``fields`` is copied; the caller's mapping is left untouched. The process
    model keys are constants: workers are single threaded and run as separate
    processes that serve many requests.
    """

    cfg = config or AdapterConfig()
    env: Environment = dict(fields)
    env[WSGI_VERSION] = cfg.interface_version
    env[WSGI_INPUT] = rewindable_input
    env[WSGI_ERRORS] = errors if errors is not None else sys.stderr
    env[WSGI_MULTITHREAD] = False
    env[WSGI_MULTIPROCESS] = True
    env[WSGI_RUN_ONCE] = False
    env[WSGI_URL_SCHEME] = url_scheme(fields)
    return env


__all__ = [
    "HTTPS_ENABLED_VALUES",
    "Environment",
    "WSGI_ERRORS",
    "WSGI_INPUT",
    "WSGI_MULTIPROCESS",
    "WSGI_MULTITHREAD",
    "WSGI_RUN_ONCE",
    "WSGI_URL_SCHEME",
    "WSGI_VERSION",
    "build_environment",
    "url_scheme",
]
