import json

import pytest

from chefmuse.errors import ResponseParseError
from chefmuse.llm.parse_response import (
    parse_cooking_schedule,
    parse_ingredients,
    parse_json_payload,
    parse_recipes,
)
from chefmuse.models.recipe_schema import Difficulty, StepKind, StepPriority

from conftest import make_recipe, make_schedule


def test_fenced_json_is_unwrapped():
    raw = 'Here you go:\n```json\n{"ingredients": ["tomato", "basil"]}\n```'
    assert parse_json_payload(raw) == {"ingredients": ["tomato", "basil"]}


def test_json_embedded_in_chatter():
    raw = 'Sure! {"ingredients": ["egg"]} Enjoy {cooking}.'
    assert parse_json_payload(raw)["ingredients"] == ["egg"]


def test_non_object_payload_is_rejected():
    with pytest.raises(ResponseParseError):
        parse_json_payload('["tomato"]', "ingredients")


def test_ingredients_garbage_returns_empty_list():
    assert parse_ingredients("I could not see any food, sorry!") == []
    assert parse_ingredients("") == []
    assert parse_ingredients(None) == []


def test_ingredients_are_cleaned():
    raw = json.dumps({"ingredients": [" tomato ", "", 3, "basil"]})
    assert parse_ingredients(raw) == ["tomato", "basil"]
    assert parse_ingredients(json.dumps({"other": 1})) == []


def test_recipes_are_stamped_with_requested_persona(recipes_raw):
    recipes = parse_recipes(recipes_raw, "michelin")
    assert [r.recipe_name for r in recipes] == ["Lemon Garlic Chicken", "Garlic Butter Pasta"]
    assert all(r.chef_personality == "michelin" for r in recipes)
    assert recipes[0].difficulty is Difficulty.EASY
    assert recipes[0].nutrition.sodium == "420mg"


def test_persona_in_response_is_overridden():
    raw = json.dumps({"recipes": [make_recipe(chefPersonality="budget_mom")]})
    assert parse_recipes(raw, "quick_chef")[0].chef_personality == "quick_chef"


def test_optional_tips_are_normalized():
    recipe = make_recipe()
    del recipe["personalityTips"]
    raw = json.dumps({"recipes": [recipe, make_recipe(personalityTips=None)]})
    assert [r.personality_tips for r in parse_recipes(raw, "normal")] == [[], []]


def test_missing_recipes_key_raises_with_raw_text():
    raw = json.dumps({"dishes": [make_recipe()]})
    with pytest.raises(ResponseParseError) as exc:
        parse_recipes(raw, "normal")
    assert exc.value.raw_text == raw
    assert "recipes" in str(exc.value)


def test_unparseable_recipes_raise():
    raw = "The chef is on a break."
    with pytest.raises(ResponseParseError) as exc:
        parse_recipes(raw, "normal")
    assert exc.value.raw_text == raw


def test_missing_required_recipe_field_raises():
    recipe = make_recipe()
    del recipe["cookTime"]
    raw = json.dumps({"recipes": [recipe]})
    with pytest.raises(ResponseParseError) as exc:
        parse_recipes(raw, "normal")
    assert "cookTime" in str(exc.value)
    assert exc.value.raw_text == raw


def test_invalid_nested_field_raises():
    raw = json.dumps({"recipes": [make_recipe(nutrition={"protein": "10g"})]})
    with pytest.raises(ResponseParseError):
        parse_recipes(raw, "normal")


def test_bad_difficulty_raises():
    raw = json.dumps({"recipes": [make_recipe(difficulty="Impossible")]})
    with pytest.raises(ResponseParseError):
        parse_recipes(raw, "normal")


def test_schedule_parses(schedule_raw):
    schedule = parse_cooking_schedule(schedule_raw)
    assert schedule.total_time == 45
    assert [s.id for s in schedule.steps] == ["step1", "step2"]
    assert schedule.steps[0].kind is StepKind.PREP
    assert schedule.steps[0].equipment == []
    assert schedule.steps[0].tips is None
    assert schedule.steps[1].priority is StepPriority.HIGH
    assert schedule.steps[1].equipment == ["skillet"]
    assert schedule.recipes[0].estimated_finish_time == "35 minutes"


def test_schedule_missing_summary_raises():
    data = make_schedule()
    del data["timelineSummary"]
    raw = json.dumps(data)
    with pytest.raises(ResponseParseError) as exc:
        parse_cooking_schedule(raw)
    assert exc.value.raw_text == raw


def test_schedule_step_missing_field_raises():
    data = make_schedule()
    del data["steps"][1]["startTime"]
    with pytest.raises(ResponseParseError) as exc:
        parse_cooking_schedule(json.dumps(data))
    assert "startTime" in str(exc.value)
