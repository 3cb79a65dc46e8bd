"""Ordered image-generation fallback: primary, secondary, then a local placeholder.

Tiers run one after another, never concurrently. Any failure in a remote
tier moves on to the next one; the placeholder tier cannot fail, so callers
always get an image and never learn which tier produced it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Sequence

from chefmuse.images.backends import (
    HuggingFaceImageBackend,
    ImageBackend,
    PollinationsImageBackend,
)
from chefmuse.images.placeholder import render_placeholder, render_svg
from chefmuse.prompts.builder import build_image_prompt, build_short_image_prompt

logger = logging.getLogger(__name__)


class ImageTier(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    PLACEHOLDER = "placeholder"


NEXT_TIER = {
    ImageTier.PRIMARY: ImageTier.SECONDARY,
    ImageTier.SECONDARY: ImageTier.PLACEHOLDER,
}


def _field(recipe, attr: str, key: str, default):
    if isinstance(recipe, dict):
        return recipe.get(key, recipe.get(attr, default))
    return getattr(recipe, attr, default)


class ImageFallbackChain:
    def __init__(
        self,
        primary: Optional[ImageBackend] = None,
        secondary: Optional[ImageBackend] = None,
        placeholder: Callable[[str], str] = render_placeholder,
    ):
        self.primary = primary if primary is not None else HuggingFaceImageBackend()
        self.secondary = secondary if secondary is not None else PollinationsImageBackend()
        self.placeholder = placeholder

    def _attempt(self, tier: ImageTier, name: str, ingredients: Sequence[str], instructions: Sequence[str]) -> str:
        if tier is ImageTier.PRIMARY:
            prompt = build_image_prompt(name, ingredients, instructions)
            return self.primary.generate(prompt).to_data_url()
        prompt = build_short_image_prompt(name, ingredients)
        return self.secondary.generate(prompt).to_data_url()

    def _terminal(self, name: str) -> str:
        try:
            return self.placeholder(name)
        except Exception:
            logger.exception("Placeholder renderer failed; using SVG | recipe=%s", name)
            return render_svg(name or "Recipe")

    def generate(self, recipe_name: str, ingredients: Sequence[str], instructions: Sequence[str]) -> str:
        tier = ImageTier.PRIMARY
        while tier is not ImageTier.PLACEHOLDER:
            try:
                image = self._attempt(tier, recipe_name, list(ingredients), list(instructions))
                logger.info("Recipe image ready | tier=%s recipe=%s", tier.value, recipe_name)
                return image
            except Exception:
                logger.exception("Image generation failed | tier=%s recipe=%s", tier.value, recipe_name)
                tier = NEXT_TIER[tier]
        logger.info("Recipe image ready | tier=%s recipe=%s", tier.value, recipe_name)
        return self._terminal(recipe_name)

    def generate_for(self, recipe) -> str:
        """Accept a Recipe model or a plain dict with recipeName/ingredients/instructions."""
        return self.generate(
            _field(recipe, "recipe_name", "recipeName", "") or "",
            _field(recipe, "ingredients", "ingredients", None) or [],
            _field(recipe, "instructions", "instructions", None) or [],
        )
