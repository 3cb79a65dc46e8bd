"""Response schemas declared to the generation backend.

The JSON files under ``chefmuse/schemas`` are loaded once so they can be
edited without touching code. A descriptor only declares a shape; checking a
response against it is done by ``chefmuse.llm.parse_response``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import copy
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Tuple

_SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"

INGREDIENTS = "ingredients"
RECIPES = "recipes"
COOKING_SCHEDULE = "cooking_schedule"


@dataclass(frozen=True)
class SchemaDescriptor:
    name: str
    schema: Mapping[str, Any] = field(repr=False)
    required_keys: Tuple[str, ...] = ()

    def as_dict(self) -> dict:
        """Return a mutable deep copy suitable for an SDK request."""
        return copy.deepcopy(dict(self.schema))

    def item_required(self, key: str) -> Tuple[str, ...]:
        """Required field names of the objects inside array property `key`."""
        prop = self.schema.get("properties", {}).get(key, {})
        items = prop.get("items", {})
        return tuple(items.get("required", ()))


def _load(name: str) -> SchemaDescriptor:
    path = _SCHEMA_DIR / f"{name}_response_schema.json"
    with open(path, "r", encoding="utf8") as fh:
        schema = json.load(fh)
    return SchemaDescriptor(
        name=name,
        schema=schema,
        required_keys=tuple(schema.get("required", ())),
    )


_REGISTRY: Mapping[str, SchemaDescriptor] = MappingProxyType(
    {name: _load(name) for name in (INGREDIENTS, RECIPES, COOKING_SCHEDULE)}
)


def get_schema(name: str) -> SchemaDescriptor:
    try:
        return _REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown response schema: {name!r}") from None


INGREDIENTS_SCHEMA = get_schema(INGREDIENTS)
RECIPES_SCHEMA = get_schema(RECIPES)
COOKING_SCHEDULE_SCHEMA = get_schema(COOKING_SCHEDULE)
