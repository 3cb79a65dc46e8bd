"""Application settings loaded from environment (and .env).

This module provides a small Settings holder backed by environment variables.
Keep this file simple and import `settings` from other modules.
"""
from __future__ import annotations

from dataclasses import dataclass
import os

from chefmuse.errors import ConfigurationError


def _get(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v


def _get_number(name: str, default, cast):
    v = _get(name)
    if v is None:
        return default
    try:
        return cast(v)
    except ValueError:
        raise ConfigurationError(f"{name} must be a {cast.__name__}, got {v!r}") from None


def _get_float(name: str, default: float | None) -> float | None:
    return _get_number(name, default, float)


def _get_int(name: str, default: int) -> int:
    return _get_number(name, default, int)


@dataclass
class Settings:
    # API keys
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"

    # Image generation backends, tried in this order
    PRIMARY_IMAGE_URL: str = "https://api-inference.huggingface.co/models/stabilityai/stable-diffusion-2-1"
    SECONDARY_IMAGE_URL: str = "https://image.pollinations.ai/prompt"
    # Optional bearer token for the primary endpoint
    HF_API_TOKEN: str | None = None
    IMAGE_WIDTH: int = 512
    IMAGE_HEIGHT: int = 512
    IMAGE_STEPS: int = 25
    IMAGE_GUIDANCE: float = 8.0
    # Seconds; unset means requests waits as long as the caller lets it
    IMAGE_HTTP_TIMEOUT: float | None = None

    # When set, raw model responses are written here for debugging
    ARTIFACTS_DIR: str | None = None

    # Logging configuration
    # LOG_LEVEL can be DEBUG, INFO, WARNING, ERROR, or CRITICAL
    LOG_LEVEL: str = "INFO"
    # Optional path to write logs to a file; if unset, logs go to stderr
    LOG_FILE: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            GEMINI_API_KEY=_get("GEMINI_API_KEY"),
            GEMINI_MODEL=_get("GEMINI_MODEL", cls.GEMINI_MODEL),
            PRIMARY_IMAGE_URL=_get("PRIMARY_IMAGE_URL", cls.PRIMARY_IMAGE_URL),
            SECONDARY_IMAGE_URL=_get("SECONDARY_IMAGE_URL", cls.SECONDARY_IMAGE_URL),
            HF_API_TOKEN=_get("HF_API_TOKEN"),
            IMAGE_WIDTH=_get_int("IMAGE_WIDTH", cls.IMAGE_WIDTH),
            IMAGE_HEIGHT=_get_int("IMAGE_HEIGHT", cls.IMAGE_HEIGHT),
            IMAGE_STEPS=_get_int("IMAGE_STEPS", cls.IMAGE_STEPS),
            IMAGE_GUIDANCE=_get_float("IMAGE_GUIDANCE", cls.IMAGE_GUIDANCE),
            IMAGE_HTTP_TIMEOUT=_get_float("IMAGE_HTTP_TIMEOUT", None),
            ARTIFACTS_DIR=_get("ARTIFACTS_DIR"),
            LOG_LEVEL=_get("LOG_LEVEL", cls.LOG_LEVEL),
            LOG_FILE=_get("LOG_FILE"),
        )


settings = Settings.from_env()


def validate_required() -> None:
    """Validate required secrets and raise a helpful error if missing.

    This function checks environment variables at runtime so callers can load a .env first.
    """
    missing = []
    if not os.getenv("GEMINI_API_KEY"):
        missing.append("GEMINI_API_KEY (Gemini / Google Generative AI key)")
    if missing:
        msg = (
            "Missing required environment variables: "
            + ", ".join(missing)
            + "\nPlease set them in your .env or environment and try again."
        )
        raise ConfigurationError(msg)
