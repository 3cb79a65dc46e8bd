"""Compose generation requests from domain parameters.

Everything here is plain data-to-text: no network calls and no parsing.
Optional filters become one instruction clause each, and are left out
entirely when empty or set to the "No Preference" sentinel.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple, Union

from chefmuse.models.dto import GenerationRequest, ImageAttachment
from chefmuse.models.recipe_schema import (
    NO_PREFERENCE,
    ChefPersonality,
    CookingPathRequest,
    Recipe,
    RecipeReinventionRequest,
)
from chefmuse.models.schema_registry import (
    COOKING_SCHEDULE_SCHEMA,
    INGREDIENTS_SCHEMA,
    RECIPES_SCHEMA,
)
from chefmuse.prompts.personas import get_persona, persona_id

JSON_ONLY = "Respond with ONLY a JSON object that matches the specified schema."

DEFAULT_METHOD = "expertly prepared"
DEFAULT_PRESENTATION = "artisanal presentation with modern plating on neutral background"

# First match wins; order matters.
COOKING_METHODS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("bake", "oven"), "baked to perfection"),
    (("fry", "pan"), "pan-fried until golden"),
    (("grill",), "grilled with char marks"),
    (("boil", "simmer"), "simmered carefully"),
    (("steam",), "steamed delicately"),
    (("roast",), "roasted until tender"),
    (("sauté", "saute"), "sautéed with herbs"),
    (("mix", "toss"), "artfully combined"),
)

_NAME = "name"
_INGREDIENTS = "ingredients"
_DESSERT = "elegant plating with decorative elements on fine dinnerware"

PRESENTATION_STYLES: Tuple[Tuple[Tuple[str, ...], str, str], ...] = (
    (("salad",), _NAME, "fresh greens and colorful vegetables arranged elegantly on a clean white plate"),
    (("soup", "broth"), _NAME, "served in a beautiful ceramic bowl with garnish on a marble surface"),
    (("pasta", "noodle"), _NAME, "perfectly twirled pasta with sauce coating on an elegant plate"),
    (("steak", "chicken", "fish"), _NAME, "tender protein as the centerpiece with sides on a slate board"),
    (("curry", "stew"), _NAME, "rich, aromatic sauce with visible ingredients in a traditional serving bowl"),
    (("sandwich", "burger"), _NAME, "layered ingredients and toasted bread on parchment paper with a clean background"),
    (("pizza",), _NAME, "golden crust with melted cheese and toppings on a pizza stone"),
    (("dessert", "cake"), _NAME, _DESSERT),
    (("sugar",), _INGREDIENTS, _DESSERT),
    (("rice",), _INGREDIENTS, "fluffy rice with colorful ingredients mixed in a beautiful serving dish"),
    (("smoothie", "drink"), _NAME, "in a stylish glass with garnish against a clean backdrop"),
)

FilterValue = Union[str, Enum, None]


def _value(v: FilterValue) -> Optional[str]:
    if isinstance(v, Enum):
        v = v.value
    return v


def is_set(v: FilterValue) -> bool:
    """True when a filter carries a real value (not blank, not the sentinel)."""
    text = _value(v)
    if text is None or not str(text).strip():
        return False
    return str(text).strip().lower() != NO_PREFERENCE.lower()


def exclusion_clause(exclusions: FilterValue, subject: str = "recipe") -> Optional[str]:
    if not is_set(exclusions):
        return None
    return (
        f"IMPORTANT: Do NOT include any of these ingredients or foods in any {subject}: "
        f"{_value(exclusions)}. Avoid them completely."
    )


def flavor_clause(flavor: FilterValue, target: str = "recipes") -> Optional[str]:
    if not is_set(flavor):
        return None
    return f"FLAVOR FOCUS: Create {target} that emphasize {_value(flavor)} flavors and taste profiles."


def style_clause(style: FilterValue, target: str = "recipes") -> Optional[str]:
    if not is_set(style):
        return None
    return f"RECIPE STYLE: Create {target} in {_value(style)} cuisine style with authentic flavors and techniques."


def _dietary(preference: FilterValue) -> str:
    text = _value(preference)
    if text is None or not str(text).strip() or str(text).strip().lower() == "none":
        return "no specific preference"
    return str(text)


def _join(*sections: str) -> str:
    return "\n\n".join(s for s in sections if s)


def _lines(*lines: Optional[str]) -> str:
    return "\n".join(line for line in lines if line is not None)


def build_ingredient_request(image_bytes: bytes, mime_type: str = "image/jpeg") -> GenerationRequest:
    instruction = (
        "Analyze the provided image and identify all food ingredients visible. "
        "Respond ONLY with a JSON object that adheres to the provided schema. "
        'The JSON object must contain a single key, "ingredients", which holds an array of strings. '
        "If no ingredients are found, return an object with an empty ingredients array."
    )
    return GenerationRequest(
        instruction=instruction,
        schema=INGREDIENTS_SCHEMA,
        image=ImageAttachment(data=image_bytes, mime_type=mime_type),
    )


def build_recipe_request(
    ingredients: Sequence[str],
    preference: FilterValue,
    exclusions: FilterValue = None,
    persona: Union[ChefPersonality, str, None] = ChefPersonality.NORMAL,
    flavor: FilterValue = None,
    style: FilterValue = None,
) -> GenerationRequest:
    directive = get_persona(persona)
    filters = _lines(
        f"Given the following ingredients: {', '.join(ingredients)}.",
        f"And the dietary preference: {_dietary(preference)}.",
        exclusion_clause(exclusions),
        flavor_clause(flavor),
        style_clause(style),
    )
    task = _lines(
        "Generate 3 creative recipes that match your chef personality. For each recipe, provide:",
        "1. A unique recipe name that reflects your cooking style",
        "2. A complete list of all required ingredients with approximate quantities (including the ones provided)",
        '3. The total cooking time (e.g., "30 minutes") - IMPORTANT: This should equal prep time + cook time',
        "4. A difficulty level ('Easy', 'Medium', or 'Hard')",
        "5. Step-by-step cooking instructions written in your personality style",
        '6. Accurate calorie count per serving (e.g., "320 calories")',
        '7. Serving size (e.g., "Serves 4" or "2 portions")',
        "8. Detailed nutritional information per serving including:",
        '   - Protein content (e.g., "25g")',
        '   - Carbohydrates (e.g., "45g")',
        '   - Fat content (e.g., "12g")',
        '   - Fiber content (e.g., "8g")',
        '   - Sodium content (e.g., "450mg")',
        '9. Prep time (e.g., "10 minutes") - Time for chopping, measuring, marinating',
        '10. Cook time (e.g., "20 minutes") - Actual cooking/baking time',
        "11. Chef personality tips specific to your cooking style (personalityTips array)",
    )
    timing = _lines(
        "CRITICAL TIMING RULES:",
        "- Prep time + Cook time should approximately equal Total cooking time",
        "- Keep times realistic (most home recipes are 15-60 minutes total)",
        "- Don't use extremely long times unless it's a slow-cook recipe that explicitly requires it",
        '- Be consistent: if total time is "30 minutes", prep + cook should add up to around 30 minutes',
    )
    accuracy = _lines(
        "Calculate nutritional values based on standard ingredient nutritional data and typical serving sizes.",
        "Be accurate with calorie calculations considering cooking methods and portion sizes.",
        "Write instructions and tips that reflect your chef personality throughout.",
    )
    return GenerationRequest(
        instruction=_join(directive.text, filters, task, timing, accuracy, JSON_ONLY),
        schema=RECIPES_SCHEMA,
        persona_id=persona_id(persona),
        exclusions=_value(exclusions) if is_set(exclusions) else None,
        flavor=_value(flavor) if is_set(flavor) else None,
        style=_value(style) if is_set(style) else None,
    )


def build_reinvention_request(request: RecipeReinventionRequest) -> GenerationRequest:
    dish = request.dish_name
    directive = get_persona(request.chef_personality)
    challenge = _lines(
        f'RECIPE REINVENTION CHALLENGE: Take the classic dish "{dish}" and completely reinvent it with your chef personality!',
        "",
        f'Your task is to create 3 innovative versions of "{dish}" that:',
        "1. Keep the essence and recognizable elements of the original dish",
        "2. Add your unique chef personality twist and creativity",
        "3. Use modern techniques, interesting ingredient swaps, or presentation styles",
        f'4. Maintain the spirit of "{dish}" while making it distinctly YOUR creation',
    )
    filters = _lines(
        f"Dietary preference: {_dietary(request.dietary_preference)}",
        exclusion_clause(request.exclude_ingredients),
        flavor_clause(request.flavor_profile, target="reinvented versions"),
        style_clause(request.recipe_style, target="reinvented versions"),
    )
    task = _lines(
        "For each reinvented recipe, provide:",
        f'1. A creative new name that shows it\'s an innovative version of "{dish}"',
        "2. Complete ingredient list with quantities (reinvented but recognizable)",
        "3. Total cooking time (realistic: prep time + cook time)",
        "4. Difficulty level ('Easy', 'Medium', or 'Hard')",
        "5. Step-by-step instructions that reflect your chef personality",
        "6. Accurate calorie count per serving",
        "7. Serving size information",
        "8. Detailed nutritional breakdown per serving",
        "9. Prep time and cook time that add up to total time",
        "10. Personality tips that explain your reinvention approach",
    )
    ideas = _lines(
        "REINVENTION IDEAS for different chef personalities:",
        "- Michelin Chef: Elevate with premium ingredients, advanced techniques, refined presentation",
        "- Budget Mom: Make it family-friendly, cost-effective, kid-approved with smart substitutions",
        "- Quick Chef: Speed it up with shortcuts, one-pot methods, meal prep friendly versions",
        "- Normal Chef: Balance tradition with modern touches, accessible improvements",
    )
    examples = _lines(
        "Examples of good reinventions:",
        '- "Maggi" → Gourmet Truffle Ramen, Veggie-Packed Family Noodles, 5-Minute Protein Bowl',
        '- "Fish Finger" → Herb-Crusted Fish Goujons, Baked Cod Nuggets, Spicy Fish Tacos',
        '- "Chicken Dum Biryani" → Saffron Chicken Rice Bowl, Quick Chicken Biryani Skillet, Layered Biryani Casserole',
        "",
        "Make each version distinct while honoring the original dish. Be creative but practical!",
    )
    return GenerationRequest(
        instruction=_join(directive.text, challenge, filters, task, ideas, examples, JSON_ONLY),
        schema=RECIPES_SCHEMA,
        persona_id=persona_id(request.chef_personality),
        exclusions=request.exclude_ingredients if is_set(request.exclude_ingredients) else None,
        flavor=request.flavor_profile if is_set(request.flavor_profile) else None,
        style=request.recipe_style if is_set(request.recipe_style) else None,
    )


def _factor(value: float) -> str:
    return f"{value:g}x"


def _recipe_block(index: int, recipe: Recipe) -> str:
    adjustment = recipe.serving_adjustment
    serving_size = recipe.serving_size or "Serves 2-4"
    note = f" (Serving size adjusted by {_factor(adjustment)} - {serving_size})" if adjustment != 1 else ""
    return _lines(
        f"Recipe {index}: {recipe.recipe_name}",
        f"- Serving Size: {serving_size}{note}",
        f"- Prep Time: {recipe.prep_time or '10 minutes'}",
        f"- Cook Time: {recipe.cook_time or recipe.cooking_time}",
        f"- Total Time: {recipe.cooking_time}",
        f"- Difficulty: {_value(recipe.difficulty)}",
        f"- Serving Adjustment Factor: {_factor(adjustment)}",
        f"- Key Ingredients: {', '.join(recipe.ingredients[:5])}",
        f"- Brief Instructions: {' | '.join(recipe.instructions[:3])}",
    )


def _serving_section(recipes: Iterable[Recipe]) -> str:
    adjusted = [r for r in recipes if r.serving_adjustment != 1]
    if not adjusted:
        return _lines("SERVING SIZE CONSIDERATIONS:", "All recipes are at their original serving sizes.")
    return _lines(
        "SERVING SIZE CONSIDERATIONS:",
        "IMPORTANT: Some recipes have been adjusted for different serving sizes:",
        *(f"- {r.recipe_name}: {_factor(r.serving_adjustment)} servings ({r.serving_size})" for r in adjusted),
        "",
        "When creating the schedule, account for these serving adjustments:",
        "- Larger portions may require bigger pots/pans and longer cooking times",
        "- Multiple smaller batches might be needed if equipment is limited",
        "- Consider if cooking in batches is more efficient than one large batch",
    )


def build_schedule_request(request: CookingPathRequest) -> GenerationRequest:
    recipes_text = "\n\n".join(_recipe_block(i, r) for i, r in enumerate(request.recipes, start=1))
    equipment = ", ".join(request.kitchen_equipment) or "Standard home kitchen"
    setup = _lines(
        "KITCHEN SETUP:",
        f"- Skill Level: {_value(request.skill_level)}",
        f"- Available Equipment: {equipment}",
        f"- Preferred Serving Time: {request.preferred_serving_time or 'ASAP'}",
    )
    goals = _lines(
        "CREATE AN OPTIMIZED COOKING SCHEDULE that:",
        "1. Minimizes total cooking time through parallel preparation",
        "2. Reduces kitchen downtime (e.g., start marinating while prep continues)",
        "3. Coordinates multiple dishes to finish simultaneously or in logical sequence",
        "4. Considers equipment limitations (only one oven, limited stovetop space)",
        "5. Accounts for skill level and provides appropriate guidance",
        "6. Provides clear, actionable descriptions for each step",
    )
    # One list of timing rules; serving-size scaling lives here too.
    timing = _lines(
        "TIMING RULES:",
        "- Use each recipe's actual prep and cook times; if a recipe says prep 15min + cook 20min, don't schedule it for 4 hours",
        "- If a preferred serving time is given, work backwards from it; otherwise assume cooking starts now",
        "- Add 5-10 minutes of buffer for coordination between critical steps",
        "- For serving adjustments above 1.5x, add 20-30% more prep time; below 0.8x, prep may shrink by 10-15%",
        "- Prep steps: typically 5-15 minutes each",
        "- Active cooking: 3-20 minutes depending on technique",
        "- Passive cooking: 10-60 minutes (baking, simmering, etc.)",
        "- No step shorter than 2 minutes",
        "- Start times should be multiples of 5 minutes for clarity",
        "- Total schedule time should be reasonable (usually 30 minutes to 2 hours max)",
    )
    vocabulary = _lines(
        "STEP TYPES:",
        '- "prep": Chopping, measuring, marinating (can be done in parallel)',
        '- "active": Requires constant attention (stirring, sautéing)',
        '- "passive": Hands-off cooking (baking, simmering, marinating)',
        "",
        "PRIORITY LEVELS:",
        '- "high": Critical timing, cannot be delayed',
        '- "medium": Some flexibility in timing',
        '- "low": Can be done whenever convenient',
    )
    fields = _lines(
        "For each step, provide:",
        "- Unique ID (step1, step2, etc.)",
        "- Recipe ID (recipe1, recipe2, etc.)",
        "- Clear, actionable step description",
        "- Start time in minutes from cooking start (0 = begin immediately)",
        "- Duration in minutes",
        "- Step type and priority",
        "- Required equipment if specific",
        "- Pro tips for efficiency",
        "",
        "For each recipe, give its estimated finish time.",
        "Provide efficiency tips and a summary timeline that explains the cooking flow.",
    )
    return GenerationRequest(
        instruction=_join(
            "You are a professional kitchen scheduler tasked with creating an optimized cooking timeline for multiple recipes.",
            "RECIPES TO COORDINATE:\n\n" + recipes_text,
            setup,
            _serving_section(request.recipes),
            goals,
            timing,
            vocabulary,
            fields,
            JSON_ONLY,
        ),
        schema=COOKING_SCHEDULE_SCHEMA,
    )


def _first_match(table, text: str, default: str) -> str:
    for keywords, phrase in table:
        if any(k in text for k in keywords):
            return phrase
    return default


def select_cooking_method(instructions: Sequence[str]) -> str:
    text = " ".join(instructions).lower()
    return _first_match(COOKING_METHODS, text, DEFAULT_METHOD)


def select_presentation_style(recipe_name: str, ingredients: Sequence[str]) -> str:
    sources = {_NAME: recipe_name.lower(), _INGREDIENTS: " ".join(ingredients).lower()}
    for keywords, source, phrase in PRESENTATION_STYLES:
        if any(k in sources[source] for k in keywords):
            return phrase
    return DEFAULT_PRESENTATION


def build_image_prompt(recipe_name: str, ingredients: Sequence[str], instructions: Sequence[str]) -> str:
    main_ingredients = ", ".join(ingredients[:5])
    method = select_cooking_method(instructions)
    presentation = select_presentation_style(recipe_name, ingredients)
    return (
        f'A professional, high-resolution food photography of "{recipe_name}" featuring {main_ingredients}. '
        f"The dish is {method} and beautifully plated with {presentation}. "
        "Studio lighting, appetizing, restaurant-quality presentation, garnished appropriately, "
        "clean modern styling, natural lighting, culinary art, food styling"
    )


def build_short_image_prompt(recipe_name: str, ingredients: Sequence[str]) -> str:
    main_ingredients = " ".join(ingredients[:3])
    return f"professional food photography {recipe_name} with {main_ingredients} beautifully plated restaurant quality"
