"""Adapter configuration objects."""

from __future__ import annotations

import os
from typing import Any, Mapping

import msgspec

from .exceptions import ConfigurationError

ENV_PREFIX = "HERMES_"


class AdapterConfig(msgspec.Struct, frozen=True):
    """Typed configuration for a :class:`~hermes.handler.RequestHandler`."""

    interface_version: tuple[int, int] = (1, 0)
    reason_phrase: str = "Whatever"
    header_encoding: str = "latin-1"
    body_encoding: str = "utf-8"
    input_spool_bytes: int = 1_048_576

    def __post_init__(self) -> None:
        if self.input_spool_bytes < 0:
            raise ConfigurationError("input_spool_bytes must not be negative")
        if any(char in self.reason_phrase for char in "\r\n"):
            raise ConfigurationError("reason_phrase must not contain line breaks")


def _env_value(field: str, raw: str) -> Any:
    if field == "interface_version":
        return tuple(part.strip() for part in raw.split("."))
    return raw


def load_config(env: Mapping[str, str] | None = None) -> AdapterConfig:
    """Build an :class:`AdapterConfig` from ``HERMES_*`` variables in ``env``."""

    source = os.environ if env is None else env
    payload: dict[str, Any] = {}
    for field in AdapterConfig.__struct_fields__:
        raw = source.get(f"{ENV_PREFIX}{field.upper()}")
        if raw:
            payload[field] = _env_value(field, raw)
    try:
        return msgspec.convert(payload, type=AdapterConfig, strict=False)
    except msgspec.ValidationError as exc:
        raise ConfigurationError(f"Invalid adapter configuration: {exc}") from exc


__all__ = ["ENV_PREFIX", "AdapterConfig", "load_config"]
