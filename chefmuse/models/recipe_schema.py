from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChefPersonality(str, Enum):
    MICHELIN = "michelin"
    BUDGET_MOM = "budget_mom"
    QUICK_CHEF = "quick_chef"
    NORMAL = "normal"


NO_PREFERENCE = "No Preference"


class FlavorProfile(str, Enum):
    NONE = NO_PREFERENCE
    SPICY = "Spicy"
    SWEET = "Sweet"
    SAVORY = "Savory"
    TANGY = "Tangy"
    SMOKY = "Smoky"
    UMAMI = "Umami"
    HERBY = "Herby"


class RecipeStyle(str, Enum):
    NONE = NO_PREFERENCE
    ITALIAN = "Italian"
    MEXICAN = "Mexican"
    INDIAN = "Indian"
    CHINESE = "Chinese"
    JAPANESE = "Japanese"
    THAI = "Thai"
    MEDITERRANEAN = "Mediterranean"
    FRENCH = "French"
    AMERICAN = "American"


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class StepKind(str, Enum):
    PREP = "prep"
    ACTIVE = "active"
    PASSIVE = "passive"


class StepPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Nutrition(_CamelModel):
    protein: str
    carbs: str
    fat: str
    fiber: str
    sodium: str


class Recipe(_CamelModel):
    recipe_name: str
    ingredients: List[str]
    cooking_time: str
    difficulty: Difficulty
    instructions: List[str]
    calories: str
    serving_size: str
    nutrition: Nutrition
    prep_time: str
    cook_time: str
    chef_personality: Optional[str] = None
    personality_tips: List[str] = Field(default_factory=list)
    # Caller-side multiplier; never declared to the model.
    serving_adjustment: float = 1.0


class Step(_CamelModel):
    id: str
    recipe_id: str
    recipe_name: str
    step: str
    start_time: float
    duration: float
    kind: StepKind = Field(alias="type")
    priority: StepPriority
    equipment: List[str] = Field(default_factory=list)
    tips: Optional[str] = None


class RecipeCompletion(_CamelModel):
    recipe_name: str
    estimated_finish_time: str


class CookingSchedule(_CamelModel):
    total_time: float
    serving_time: str
    steps: List[Step]
    recipes: List[RecipeCompletion]
    efficiency_tips: List[str]
    timeline_summary: str


class CookingPathRequest(_CamelModel):
    recipes: List[Recipe]
    skill_level: SkillLevel = SkillLevel.INTERMEDIATE
    kitchen_equipment: List[str] = Field(default_factory=list)
    preferred_serving_time: Optional[str] = None


class RecipeReinventionRequest(_CamelModel):
    dish_name: str
    chef_personality: str = ChefPersonality.NORMAL.value
    dietary_preference: Optional[str] = None
    exclude_ingredients: Optional[str] = None
    flavor_profile: Optional[str] = None
    recipe_style: Optional[str] = None
