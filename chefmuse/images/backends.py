"""HTTP image-generation backends used by the fallback chain."""

from __future__ import annotations

import base64
import logging
import random
from dataclasses import dataclass
from typing import Optional, Protocol
from urllib.parse import quote

import filetype
import requests

from chefmuse.errors import ImageBackendError
from chefmuse.settings import settings

logger = logging.getLogger(__name__)

USER_AGENT = "chefmuse/1.0 (+https://example.com)"


@dataclass(frozen=True)
class ImageResult:
    data: bytes
    mime_type: str

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class ImageBackend(Protocol):
    name: str

    def generate(self, prompt: str) -> ImageResult:
        ...


def _image_result(resp, backend: str) -> ImageResult:
    """Validate an HTTP response body as an image. Raises on anything else."""
    body = resp.content or b""
    if not body:
        raise ImageBackendError(f"{backend} returned an empty body")
    content_type = (resp.headers.get("Content-Type") or "").split(";")[0].strip().lower()
    if content_type.startswith("image/"):
        return ImageResult(body, content_type)
    kind = filetype.guess(body)
    if kind is not None and kind.mime.startswith("image/"):
        return ImageResult(body, kind.mime)
    raise ImageBackendError(f"{backend} returned non-image content ({content_type or 'unknown'})")


class HuggingFaceImageBackend:
    """Text-to-image inference endpoint taking a JSON body with generation parameters."""

    name = "huggingface"

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        steps: Optional[int] = None,
        guidance: Optional[float] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        timeout: Optional[float] = None,
        session=None,
    ):
        self.url = url or settings.PRIMARY_IMAGE_URL
        self.token = token if token is not None else settings.HF_API_TOKEN
        self.steps = steps if steps is not None else settings.IMAGE_STEPS
        self.guidance = guidance if guidance is not None else settings.IMAGE_GUIDANCE
        self.width = width if width is not None else settings.IMAGE_WIDTH
        self.height = height if height is not None else settings.IMAGE_HEIGHT
        self.timeout = timeout if timeout is not None else settings.IMAGE_HTTP_TIMEOUT
        self.session = session

    def generate(self, prompt: str) -> ImageResult:
        http = self.session or requests
        headers = {"Content-Type": "application/json", "User-Agent": USER_AGENT}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        body = {
            "inputs": prompt,
            "parameters": {
                "num_inference_steps": self.steps,
                "guidance_scale": self.guidance,
                "width": self.width,
                "height": self.height,
            },
        }
        logger.debug("POST %s (prompt %d chars)", self.url, len(prompt))
        resp = http.post(self.url, json=body, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        logger.info("Image backend %s -> status %s", self.name, resp.status_code)
        return _image_result(resp, self.name)


class PollinationsImageBackend:
    """Prompt-in-path GET endpoint; the prompt is URL-encoded into the path."""

    name = "pollinations"

    def __init__(
        self,
        base_url: Optional[str] = None,
        width: Optional[int] = None,
        height: Optional[int] = None,
        timeout: Optional[float] = None,
        session=None,
        seed: Optional[int] = None,
    ):
        self.base_url = (base_url or settings.SECONDARY_IMAGE_URL).rstrip("/")
        self.width = width if width is not None else settings.IMAGE_WIDTH
        self.height = height if height is not None else settings.IMAGE_HEIGHT
        self.timeout = timeout if timeout is not None else settings.IMAGE_HTTP_TIMEOUT
        self.session = session
        self.seed = seed

    def url_for(self, prompt: str) -> str:
        return f"{self.base_url}/{quote(prompt, safe='')}"

    def generate(self, prompt: str) -> ImageResult:
        http = self.session or requests
        seed = self.seed if self.seed is not None else random.randint(0, 999999)
        params = {"width": self.width, "height": self.height, "seed": seed}
        url = self.url_for(prompt)
        logger.debug("GET %s", url)
        resp = http.get(url, params=params, headers={"User-Agent": USER_AGENT}, timeout=self.timeout)
        resp.raise_for_status()
        logger.info("Image backend %s -> status %s", self.name, resp.status_code)
        return _image_result(resp, self.name)
