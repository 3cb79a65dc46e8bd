"""Caller-facing operations.

Each function builds a request, sends it through a text backend (Gemini
unless the caller passes another `TextGenerationBackend`), and parses the
answer into typed objects. Errors from recipe and schedule calls propagate;
ingredient identification and image generation always return a value.
"""

from __future__ import annotations

import base64
import logging
from typing import List, Optional, Sequence, Union

import filetype

from chefmuse.images.chain import ImageFallbackChain
from chefmuse.llm.gemini import GeminiBackend, TextGenerationBackend
from chefmuse.llm.parse_response import parse_cooking_schedule, parse_ingredients, parse_recipes
from chefmuse.models.recipe_schema import (
    ChefPersonality,
    CookingPathRequest,
    CookingSchedule,
    Recipe,
    RecipeReinventionRequest,
)
from chefmuse.prompts.builder import (
    FilterValue,
    build_ingredient_request,
    build_recipe_request,
    build_reinvention_request,
    build_schedule_request,
)

logger = logging.getLogger(__name__)
_DEFAULT_BACKEND: TextGenerationBackend | None = None


def _backend(backend: Optional[TextGenerationBackend]) -> TextGenerationBackend:
    global _DEFAULT_BACKEND
    if backend is not None:
        return backend
    if _DEFAULT_BACKEND is None:
        _DEFAULT_BACKEND = GeminiBackend()
    return _DEFAULT_BACKEND


def decode_image(image: Union[bytes, str]) -> tuple[bytes, str]:
    """Accept raw bytes, a data URL, or bare base64 text. Returns (bytes, mime)."""
    mime = None
    if isinstance(image, str):
        text = image.strip()
        if text.startswith("data:"):
            header, _, text = text.partition(",")
            mime = header[5:].split(";")[0] or None
        # MIME-style base64 is wrapped every 76 characters
        data = base64.b64decode("".join(text.split()), validate=True)
    else:
        data = bytes(image)
    if not data:
        raise ValueError("Empty image")
    if mime is None:
        kind = filetype.guess(data)
        mime = kind.mime if kind is not None else "image/jpeg"
    return data, mime


def identify_ingredients(image: Union[bytes, str], backend: Optional[TextGenerationBackend] = None) -> List[str]:
    """List the food ingredients visible in `image`; [] on any failure."""
    stage = "decode"
    try:
        data, mime = decode_image(image)
        stage = "generate"
        raw = _backend(backend).generate(build_ingredient_request(data, mime))
    except ValueError as e:
        logger.warning("Ingredient identification skipped | stage=%s error=%s", stage, e)
        return []
    except Exception:
        logger.exception("Ingredient identification failed | stage=%s", stage)
        return []
    ingredients = parse_ingredients(raw)
    logger.info("Identified %d ingredients", len(ingredients))
    return ingredients


def generate_recipes(
    ingredients: Sequence[str],
    preference: FilterValue,
    exclusions: FilterValue = None,
    persona: Union[ChefPersonality, str, None] = ChefPersonality.NORMAL,
    flavor: FilterValue = None,
    style: FilterValue = None,
    backend: Optional[TextGenerationBackend] = None,
) -> List[Recipe]:
    request = build_recipe_request(ingredients, preference, exclusions, persona, flavor, style)
    logger.info("Recipes start | ingredients=%d persona=%s", len(ingredients), request.persona_id)
    raw = _backend(backend).generate(request)
    return parse_recipes(raw, request.persona_id)


def reinvent_recipe(
    request: Union[RecipeReinventionRequest, dict],
    backend: Optional[TextGenerationBackend] = None,
) -> List[Recipe]:
    if not isinstance(request, RecipeReinventionRequest):
        request = RecipeReinventionRequest.model_validate(request)
    gen = build_reinvention_request(request)
    logger.info("Reinvention start | dish=%s persona=%s", request.dish_name, gen.persona_id)
    raw = _backend(backend).generate(gen)
    return parse_recipes(raw, gen.persona_id, kind="reinvented recipe")


def generate_cooking_schedule(
    request: Union[CookingPathRequest, dict],
    backend: Optional[TextGenerationBackend] = None,
) -> CookingSchedule:
    if not isinstance(request, CookingPathRequest):
        request = CookingPathRequest.model_validate(request)
    logger.info("Schedule start | recipes=%d skill=%s", len(request.recipes), request.skill_level.value)
    raw = _backend(backend).generate(build_schedule_request(request))
    return parse_cooking_schedule(raw)


def generate_recipe_image(recipe, chain: Optional[ImageFallbackChain] = None) -> str:
    """Return a data URL for `recipe`. Never raises."""
    return (chain or ImageFallbackChain()).generate_for(recipe)
