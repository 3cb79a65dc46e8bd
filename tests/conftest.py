import json

import pytest


def make_recipe(name="Lemon Garlic Chicken", **overrides):
    recipe = {
        "recipeName": name,
        "ingredients": ["2 chicken breasts", "1 lemon", "3 cloves garlic"],
        "cookingTime": "30 minutes",
        "difficulty": "Easy",
        "instructions": ["Season the chicken.", "Pan sear for 6 minutes a side.", "Finish with lemon."],
        "calories": "320 calories",
        "servingSize": "Serves 2",
        "nutrition": {"protein": "35g", "carbs": "6g", "fat": "14g", "fiber": "1g", "sodium": "420mg"},
        "prepTime": "10 minutes",
        "cookTime": "20 minutes",
        "personalityTips": ["Let the pan get properly hot."],
    }
    recipe.update(overrides)
    return recipe


def make_schedule(**overrides):
    schedule = {
        "totalTime": 45,
        "servingTime": "7:00 PM",
        "steps": [
            {
                "id": "step1",
                "recipeId": "recipe1",
                "recipeName": "Lemon Garlic Chicken",
                "step": "Chop garlic and zest the lemon",
                "startTime": 0,
                "duration": 10,
                "type": "prep",
                "priority": "medium",
            },
            {
                "id": "step2",
                "recipeId": "recipe1",
                "recipeName": "Lemon Garlic Chicken",
                "step": "Sear the chicken",
                "startTime": 10,
                "duration": 15,
                "type": "active",
                "priority": "high",
                "equipment": ["skillet"],
                "tips": "Don't move it for the first 3 minutes.",
            },
        ],
        "recipes": [{"recipeName": "Lemon Garlic Chicken", "estimatedFinishTime": "35 minutes"}],
        "efficiencyTips": ["Zest before juicing."],
        "timelineSummary": "Prep first, then sear.",
    }
    schedule.update(overrides)
    return schedule


class FakeBackend:
    """Text backend that returns a canned answer and records requests."""

    def __init__(self, raw="", error=None):
        self.raw = raw
        self.error = error
        self.requests = []

    def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.raw


@pytest.fixture
def recipe_dict():
    return make_recipe()


@pytest.fixture
def recipes_raw():
    return json.dumps({"recipes": [make_recipe(), make_recipe("Garlic Butter Pasta")]})


@pytest.fixture
def schedule_raw():
    return json.dumps(make_schedule())
