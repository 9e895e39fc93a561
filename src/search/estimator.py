"""Cook-time estimation for TheMealDB recipes.

TheMealDB carries no preparation time, so one is derived from the number of
ingredients and the length of the instructions. The heuristic is crude but
deterministic, and its constants are fixed so results are reproducible:

    minutes = ceil((ingredients * 3 + len(instructions) / 50) / 5) * 5

Recipes without instructions get NO_INSTRUCTIONS_MINUTES, which is above any
time limit a user can pick, so they never pass a time filter.
"""

import math

from src.models.models import Recipe

NO_INSTRUCTIONS_MINUTES = 999
MINUTES_PER_INGREDIENT = 3
INSTRUCTION_CHARS_PER_MINUTE = 50
ROUND_UP_TO_MINUTES = 5


def estimate_cook_time(recipe: Recipe) -> int:
    """Estimate preparation time in minutes, rounded up to a multiple of 5."""
    if not recipe.instructions or not recipe.instructions.strip():
        return NO_INSTRUCTIONS_MINUTES

    raw_minutes = (
        len(recipe.ingredients) * MINUTES_PER_INGREDIENT
        + len(recipe.instructions) / INSTRUCTION_CHARS_PER_MINUTE
    )
    return math.ceil(raw_minutes / ROUND_UP_TO_MINUTES) * ROUND_UP_TO_MINUTES
