"""Exception types raised by chefmuse."""

from __future__ import annotations


class ChefMuseError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(ChefMuseError, RuntimeError):
    """A required setting (usually an API key) is missing."""


class ResponseParseError(ChefMuseError, ValueError):
    """The model answered, but not with the JSON shape we asked for.

    `raw_text` keeps the offending payload so callers can log or display it.
    """

    def __init__(self, message: str, raw_text: str | None, kind: str = "response"):
        super().__init__(message)
        self.raw_text = raw_text
        self.kind = kind

    def snippet(self, limit: int = 200) -> str:
        if not self.raw_text:
            return ""
        return self.raw_text[:limit]


class ImageBackendError(ChefMuseError, RuntimeError):
    """An image backend returned a non-image payload or an error status."""
