"""Exception types raised by tokensmith."""

from __future__ import annotations


class TokenInputError(ValueError):
    """Raised when a token document is not a usable tree at all."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


class EmitterError(RuntimeError):
    """Raised when an emitter plugin cannot be loaded."""


__all__ = ["ConfigError", "EmitterError", "TokenInputError"]
