"""Adapter exception types."""

from __future__ import annotations

from typing import Any


class HermesError(Exception):
    """Base error type."""


class AdapterError(HermesError):
    """Raised when an application misuses the adapter protocol."""


class HeaderError(HermesError):
    """Header value that is neither a string nor a sequence of strings."""

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(f"Invalid value for header {name!r}: {type(value).__name__}")
        self.name = name
        self.value = value


class ConfigurationError(HermesError):
    """Invalid adapter configuration."""
