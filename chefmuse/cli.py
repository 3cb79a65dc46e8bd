"""Typer CLI for chefmuse (identify, recipes, reinvent, schedule, image)."""

from __future__ import annotations

import base64
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from dotenv import load_dotenv
# load .env immediately so subsequent imports (which read settings at import time)
# pick up values from the .env file
load_dotenv()

# Configure top-level logging early so other modules pick it up.
import logging
from chefmuse.settings import settings

log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))
logging.basicConfig(
    level=log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    handlers=handlers,
)

# Quiet noisy third-party loggers while keeping our app logs
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("google_genai").setLevel(logging.WARNING)
logging.getLogger("PIL").setLevel(logging.WARNING)

from chefmuse.models.recipe_schema import CookingPathRequest, RecipeReinventionRequest
from chefmuse.orchestrate import run as orchestrator
from chefmuse.settings import validate_required

app = typer.Typer()
_SUFFIXES = {"image/jpeg": ".jpg", "image/png": ".png", "image/webp": ".webp", "image/svg+xml": ".svg"}
console = Console()


def _dump(models) -> None:
    if isinstance(models, list):
        data = [m.model_dump(mode="json", by_alias=True) for m in models]
    else:
        data = models.model_dump(mode="json", by_alias=True)
    console.print_json(json.dumps(data, ensure_ascii=False))


def _fail(e: Exception) -> None:
    console.print(f"[red]Error:[/red] {e}")
    raise typer.Exit(code=1)


@app.command()
def identify(image: Path):
    """List the ingredients visible in a photo."""
    try:
        validate_required()
        ingredients = orchestrator.identify_ingredients(image.read_bytes())
    except Exception as e:
        _fail(e)
    console.print_json(json.dumps({"ingredients": ingredients}, ensure_ascii=False))


@app.command()
def recipes(
    ingredients: List[str],
    preference: str = "None",
    exclude: Optional[str] = None,
    persona: str = "normal",
    flavor: Optional[str] = None,
    style: Optional[str] = None,
):
    """Generate three recipes from the given ingredients."""
    try:
        validate_required()
        _dump(orchestrator.generate_recipes(ingredients, preference, exclude, persona, flavor, style))
    except Exception as e:
        _fail(e)


@app.command()
def reinvent(
    dish: str,
    persona: str = "normal",
    preference: Optional[str] = None,
    exclude: Optional[str] = None,
    flavor: Optional[str] = None,
    style: Optional[str] = None,
):
    """Reinvent a classic dish in a chef persona's style."""
    try:
        validate_required()
        request = RecipeReinventionRequest(
            dish_name=dish,
            chef_personality=persona,
            dietary_preference=preference,
            exclude_ingredients=exclude,
            flavor_profile=flavor,
            recipe_style=style,
        )
        _dump(orchestrator.reinvent_recipe(request))
    except Exception as e:
        _fail(e)


@app.command()
def schedule(
    recipes_file: Path,
    skill: str = "intermediate",
    equipment: Optional[List[str]] = typer.Option(None),
    serve_at: Optional[str] = None,
):
    """Plan a combined cooking timeline for recipes saved as JSON."""
    try:
        validate_required()
        loaded = json.loads(recipes_file.read_text(encoding="utf-8"))
        if isinstance(loaded, dict) and "recipes" in loaded:
            loaded = loaded["recipes"]
        request = CookingPathRequest(
            recipes=loaded,
            skill_level=skill,
            kitchen_equipment=equipment or [],
            preferred_serving_time=serve_at,
        )
        _dump(orchestrator.generate_cooking_schedule(request))
    except Exception as e:
        _fail(e)


@app.command()
def image(recipe_file: Path, out: Path = Path("recipe_image")):
    """Render an image for one recipe saved as JSON; always writes a file."""
    recipe = json.loads(recipe_file.read_text(encoding="utf-8"))
    data_url = orchestrator.generate_recipe_image(recipe)
    header, _, encoded = data_url.partition(",")
    mime = header[5:].split(";")[0]
    suffix = _SUFFIXES.get(mime, ".img")
    target = out.with_suffix(suffix)
    target.write_bytes(base64.b64decode(encoded))
    console.print(f"Wrote {target}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
