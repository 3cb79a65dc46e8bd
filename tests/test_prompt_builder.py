from chefmuse.models.recipe_schema import (
    ChefPersonality,
    CookingPathRequest,
    FlavorProfile,
    Recipe,
    RecipeReinventionRequest,
    RecipeStyle,
)
from chefmuse.models.schema_registry import COOKING_SCHEDULE_SCHEMA, INGREDIENTS_SCHEMA, RECIPES_SCHEMA
from chefmuse.prompts import builder
from chefmuse.prompts.personas import get_persona

from conftest import make_recipe


def _recipes_prompt(**kwargs):
    params = {"ingredients": ["chicken", "lemon"], "preference": "None"}
    params.update(kwargs)
    return builder.build_recipe_request(**params)


def test_empty_exclusion_adds_no_clause():
    for empty in ("", "   ", None):
        req = _recipes_prompt(exclusions=empty)
        assert "Do NOT include" not in req.instruction
        assert req.exclusions is None


def test_exclusion_clause_appears_once_verbatim():
    req = _recipes_prompt(exclusions="peanuts, shellfish")
    assert req.instruction.count("Do NOT include") == 1
    assert "any recipe: peanuts, shellfish. Avoid them completely." in req.instruction
    assert req.exclusions == "peanuts, shellfish"


def test_no_preference_sentinel_omits_flavor_and_style():
    req = _recipes_prompt(flavor=FlavorProfile.NONE, style="No Preference")
    assert "FLAVOR FOCUS" not in req.instruction
    assert "RECIPE STYLE" not in req.instruction


def test_flavor_and_style_clauses():
    req = _recipes_prompt(flavor=FlavorProfile.SPICY, style=RecipeStyle.THAI)
    assert "emphasize Spicy flavors" in req.instruction
    assert "in Thai cuisine style" in req.instruction
    assert req.flavor == "Spicy"


def test_dietary_none_is_spelled_out():
    assert "dietary preference: no specific preference." in _recipes_prompt().instruction
    assert "dietary preference: Vegan." in _recipes_prompt(preference="Vegan").instruction


def test_persona_text_precedes_task():
    req = _recipes_prompt(persona=ChefPersonality.MICHELIN)
    text = get_persona(ChefPersonality.MICHELIN).text
    assert req.instruction.startswith(text)
    assert req.instruction.index(text) < req.instruction.index("Given the following ingredients")
    assert req.persona_id == "michelin"
    assert req.schema is RECIPES_SCHEMA


def test_building_is_deterministic():
    assert _recipes_prompt(exclusions="nuts") == _recipes_prompt(exclusions="nuts")


def test_ingredient_request_carries_image():
    req = builder.build_ingredient_request(b"\xff\xd8\xff", "image/png")
    assert req.schema is INGREDIENTS_SCHEMA
    assert req.image.data == b"\xff\xd8\xff"
    assert req.image.mime_type == "image/png"
    assert '"ingredients"' in req.instruction


def test_reinvention_request():
    req = builder.build_reinvention_request(
        RecipeReinventionRequest(
            dish_name="Fish Finger",
            chef_personality="quick_chef",
            exclude_ingredients="dairy",
            recipe_style=RecipeStyle.NONE.value,
            flavor_profile="Smoky",
        )
    )
    assert 'Take the classic dish "Fish Finger"' in req.instruction
    assert req.instruction.startswith(get_persona("quick_chef").text)
    assert "any recipe: dairy." in req.instruction
    assert "Create reinvented versions that emphasize Smoky flavors" in req.instruction
    assert "RECIPE STYLE" not in req.instruction
    assert "Dietary preference: no specific preference" in req.instruction
    assert req.persona_id == "quick_chef"


def test_schedule_request_mentions_adjusted_servings():
    pasta = Recipe.model_validate(make_recipe("Garlic Butter Pasta", servingAdjustment=1.5))
    chicken = Recipe.model_validate(make_recipe())
    req = builder.build_schedule_request(CookingPathRequest(recipes=[chicken, pasta]))
    assert req.schema is COOKING_SCHEDULE_SCHEMA
    assert "Recipe 1: Lemon Garlic Chicken" in req.instruction
    assert "Recipe 2: Garlic Butter Pasta" in req.instruction
    assert "- Garlic Butter Pasta: 1.5x servings (Serves 2)" in req.instruction
    assert "Standard home kitchen" in req.instruction
    assert "Preferred Serving Time: ASAP" in req.instruction


def test_schedule_request_has_single_timing_section():
    req = builder.build_schedule_request(
        CookingPathRequest(
            recipes=[Recipe.model_validate(make_recipe())],
            kitchen_equipment=["oven", "wok"],
            preferred_serving_time="19:00",
        )
    )
    assert req.instruction.count("TIMING") == 1
    assert "All recipes are at their original serving sizes." in req.instruction
    assert "oven, wok" in req.instruction
    assert "19:00" in req.instruction


def test_cooking_method_keywords():
    assert builder.select_cooking_method(["Bake for 20 minutes."]) == "baked to perfection"
    assert builder.select_cooking_method(["Plate and serve."]) == builder.DEFAULT_METHOD
    assert builder.select_cooking_method([]) == builder.DEFAULT_METHOD
    assert builder.select_cooking_method(["Toss with dressing."]) == "artfully combined"


def test_cooking_method_first_match_wins():
    assert builder.select_cooking_method(["Grill the peppers.", "Bake the bread."]) == "baked to perfection"
    assert builder.select_cooking_method(["Simmer, then grill."]) == "grilled with char marks"


def test_presentation_style_keywords():
    assert builder.select_presentation_style("Caesar Salad", []).startswith("fresh greens")
    assert builder.select_presentation_style("Veggie Stir Bowl", ["1 cup rice"]).startswith("fluffy rice")
    assert builder.select_presentation_style("Chocolate Mousse", ["sugar"]).startswith("elegant plating")
    assert builder.select_presentation_style("Mystery Dish", ["water"]) == builder.DEFAULT_PRESENTATION
    # name keywords are checked before ingredient keywords further down the table
    assert builder.select_presentation_style("Chicken Curry", ["rice"]).startswith("tender protein")


def test_image_prompts():
    ingredients = ["a", "b", "c", "d", "e", "f"]
    prompt = builder.build_image_prompt("Tomato Soup", ingredients, ["Simmer gently."])
    assert '"Tomato Soup" featuring a, b, c, d, e.' in prompt
    assert "simmered carefully" in prompt
    assert "ceramic bowl" in prompt

    short = builder.build_short_image_prompt("Tomato Soup", ingredients)
    assert short == "professional food photography Tomato Soup with a b c beautifully plated restaurant quality"
    assert len(short) < len(prompt)
