"""
Gemini 2.5 Flash text backend with structured (JSON) output.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Optional, Protocol

from chefmuse.errors import ConfigurationError
from chefmuse.models.dto import GenerationRequest
from chefmuse.settings import settings

logger = logging.getLogger(__name__)


class TextGenerationBackend(Protocol):
    """Anything that takes an instruction plus schema and answers with text."""

    def generate(self, request: GenerationRequest) -> str:
        ...


def _extract_response_text(resp) -> str | None:
    for attr in ("text", "output_text"):
        raw = getattr(resp, attr, None)
        if raw:
            return raw
    candidates = getattr(resp, "candidates", None) or []
    for cand in candidates:
        content = getattr(cand, "content", None)
        if content is None:
            continue
        parts = getattr(content, "parts", None) or []
        for part in parts:
            text_value = getattr(part, "text", None)
            if text_value:
                return text_value
            if isinstance(part, str):
                return part
    return None


def _write_artifacts(raw: str, kind: str, directory: Optional[str]) -> None:
    """Persist the raw Gemini answer for debugging when ARTIFACTS_DIR is set."""
    if not directory:
        return
    try:
        os.makedirs(directory, exist_ok=True)
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        raw_path = os.path.join(directory, f"gemini_{kind}_{ts}.txt")
        with open(raw_path, "w", encoding="utf-8") as f:
            f.write(raw)
        logger.info("Wrote Gemini raw response -> %s", raw_path)
    except OSError:
        logger.exception("Failed to write Gemini artifacts")


class GeminiBackend:
    """`TextGenerationBackend` backed by the google-genai SDK."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, client=None):
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self._client = client

    @property
    def client(self):
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("GEMINI_API_KEY not configured.")
            # Lazy import to avoid hard dependency at module import time during tests
            try:
                import google.genai as genai
            except ImportError as e:
                raise ConfigurationError("google-genai is required to call the Gemini API: " + str(e))
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _contents(self, request: GenerationRequest, types):
        if request.image is None:
            return request.instruction
        return [
            types.Part.from_bytes(data=request.image.data, mime_type=request.image.mime_type),
            request.instruction,
        ]

    def generate(self, request: GenerationRequest) -> str:
        from google.genai import types

        logger.debug("Gemini request | kind=%s model=%s persona=%s", request.kind, self.model, request.persona_id)
        resp = self.client.models.generate_content(
            model=self.model,
            contents=self._contents(request, types),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=request.schema.as_dict(),
            ),
        )
        raw = _extract_response_text(resp)
        if not raw:
            logger.warning("No content from Gemini response | kind=%s", request.kind)
            return ""
        _write_artifacts(raw, request.kind, settings.ARTIFACTS_DIR)
        return raw
