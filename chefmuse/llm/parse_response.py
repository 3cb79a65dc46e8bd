"""
Turn raw model text into typed objects.

Parsing is lenient about wrapping (Markdown fences, chatter around the JSON)
and strict about content: a missing required key or field raises
ResponseParseError carrying the raw text. Ingredient identification is the
one best-effort path and returns an empty list instead.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from chefmuse.errors import ResponseParseError
from chefmuse.models.recipe_schema import CookingSchedule, Recipe
from chefmuse.models.schema_registry import (
    COOKING_SCHEDULE_SCHEMA,
    INGREDIENTS_SCHEMA,
    RECIPES_SCHEMA,
)

logger = logging.getLogger(__name__)


def _strip_markdown_fence(raw: str) -> str:
    if not raw:
        return raw
    stripped = raw.strip()
    if stripped.startswith("```"):
        content = stripped[3:]
    else:
        fence_start = stripped.find("```")
        if fence_start == -1:
            return raw
        content = stripped[fence_start + 3 :]
    content = content.lstrip()
    if content.lower().startswith("json"):
        content = content[4:]
    content = content.lstrip()
    closing = content.rfind("```")
    if closing != -1:
        content = content[:closing]
    return content.strip() or raw


def _extract_json_fragment(raw: str) -> str | None:
    """Return the longest balanced top-level {...} span, ignoring braces in strings."""
    start = None
    depth = 0
    in_string = False
    escape = False
    best: tuple[int, int] | None = None
    for idx, ch in enumerate(raw):
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == "{":
            if depth == 0:
                start = idx
            depth += 1
        elif ch == "}":
            if depth:
                depth -= 1
                if depth == 0 and start is not None:
                    if best is None or (idx - start) > (best[1] - best[0]):
                        best = (start, idx + 1)
    if best is None:
        return None
    return raw[best[0] : best[1]]


def _parse_candidate_json(raw: str) -> Any:
    candidates: list[str] = []

    def _add(value: str | None) -> None:
        if not value:
            return
        if value not in candidates:
            candidates.append(value)

    _add(raw.strip())
    _add(_strip_markdown_fence(raw))
    _add(_extract_json_fragment(raw))

    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None


def parse_json_payload(raw: Optional[str], kind: str = "response") -> dict:
    """Parse `raw` into a JSON object or raise ResponseParseError."""
    if not raw or not raw.strip():
        raise ResponseParseError(f"Empty {kind} payload from model.", raw, kind)
    data = _parse_candidate_json(raw)
    if data is None:
        logger.error("Model output missing JSON block | kind=%s snippet=%s", kind, raw[:200])
        raise ResponseParseError(f"Could not parse {kind} data from AI.", raw, kind)
    if not isinstance(data, dict):
        logger.error("Model output is not a JSON object | kind=%s snippet=%s", kind, raw[:200])
        raise ResponseParseError(f"Expected a JSON object for {kind}, got {type(data).__name__}.", raw, kind)
    return data


def _require(data: dict, keys: Iterable[str], raw: str, kind: str, where: str = "response") -> None:
    missing = [k for k in keys if k not in data or data[k] is None]
    if missing:
        logger.error("Model %s missing required fields %s | kind=%s", where, missing, kind)
        raise ResponseParseError(
            f"Could not parse {kind} data from AI: {where} is missing {', '.join(missing)}.",
            raw,
            kind,
        )


def _list_of_objects(data: dict, key: str, raw: str, kind: str) -> List[dict]:
    items = data[key]
    if not isinstance(items, list) or not all(isinstance(i, dict) for i in items):
        raise ResponseParseError(f"Could not parse {kind} data from AI: '{key}' must be a list of objects.", raw, kind)
    return items


def _none_to_empty(item: dict, *keys: str) -> dict:
    for key in keys:
        if item.get(key) is None:
            item[key] = []
    return item


def parse_ingredients(raw: Optional[str]) -> List[str]:
    """Best-effort: anything unparseable yields an empty list."""
    try:
        data = parse_json_payload(raw, INGREDIENTS_SCHEMA.name)
    except ResponseParseError as e:
        logger.error("Failed to parse ingredients from Gemini response: %s", e.snippet())
        return []
    ingredients = data.get("ingredients") or []
    if not isinstance(ingredients, list):
        logger.warning("Ingredients payload is not a list; ignoring")
        return []
    return [i.strip() for i in ingredients if isinstance(i, str) and i.strip()]


def parse_recipes(raw: Optional[str], persona_id: Optional[str], kind: str = "recipes") -> List[Recipe]:
    """Parse a recipes payload and stamp each recipe with `persona_id`."""
    data = parse_json_payload(raw, kind)
    _require(data, RECIPES_SCHEMA.required_keys, raw, kind)
    required = RECIPES_SCHEMA.item_required("recipes")

    recipes: List[Recipe] = []
    for idx, item in enumerate(_list_of_objects(data, "recipes", raw, kind)):
        _require(item, required, raw, kind, where=f"recipe {idx + 1}")
        item = _none_to_empty(dict(item), "personalityTips")
        item.pop("servingAdjustment", None)
        item["chefPersonality"] = persona_id
        try:
            recipes.append(Recipe.model_validate(item))
        except ValidationError as e:
            logger.warning("Pydantic validation failed for recipe %d: %s", idx + 1, e)
            raise ResponseParseError(f"Could not parse {kind} data from AI: {e}", raw, kind) from e

    logger.info("Parsed %d %s | persona=%s", len(recipes), kind, persona_id)
    return recipes


def parse_cooking_schedule(raw: Optional[str]) -> CookingSchedule:
    kind = COOKING_SCHEDULE_SCHEMA.name
    data = parse_json_payload(raw, kind)
    _require(data, COOKING_SCHEDULE_SCHEMA.required_keys, raw, kind)

    step_required: Sequence[str] = COOKING_SCHEDULE_SCHEMA.item_required("steps")
    steps = []
    for idx, step in enumerate(_list_of_objects(data, "steps", raw, kind)):
        _require(step, step_required, raw, kind, where=f"step {idx + 1}")
        steps.append(_none_to_empty(dict(step), "equipment"))

    finish_required = COOKING_SCHEDULE_SCHEMA.item_required("recipes")
    for idx, entry in enumerate(_list_of_objects(data, "recipes", raw, kind)):
        _require(entry, finish_required, raw, kind, where=f"recipe estimate {idx + 1}")

    try:
        schedule = CookingSchedule.model_validate({**data, "steps": steps})
    except ValidationError as e:
        logger.warning("Pydantic validation failed for cooking schedule: %s", e)
        raise ResponseParseError(f"Could not parse {kind} data from AI: {e}", raw, kind) from e

    logger.info("Parsed cooking schedule | steps=%d total_min=%s", len(schedule.steps), schedule.total_time)
    return schedule
