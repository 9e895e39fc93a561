"""Shared fixtures for unit tests: TheMealDB-shaped meal payloads and recipes."""

from typing import Optional, Sequence, Tuple, Union

import pytest

from src.models.models import MAX_INGREDIENT_SLOTS, Recipe

IngredientSpec = Union[str, Tuple[str, str]]


def build_meal(
    meal_id: str = "52772",
    name: str = "Teriyaki Chicken Casserole",
    area: Optional[str] = "Japanese",
    category: Optional[str] = "Chicken",
    instructions: Optional[str] = "Preheat oven to 350F. Combine everything and bake for 30 minutes.",
    ingredients: Sequence[IngredientSpec] = ("chicken breasts", "soy sauce", "brown rice"),
    **extra,
) -> dict:
    """Build a lookup.php-style meal dict with all 20 ingredient/measure slots."""
    meal = {
        "idMeal": meal_id,
        "strMeal": name,
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
        "strArea": area,
        "strCategory": category,
        "strInstructions": instructions,
    }
    for index in range(MAX_INGREDIENT_SLOTS):
        if index < len(ingredients):
            spec = ingredients[index]
            ingredient, measure = spec if isinstance(spec, tuple) else (spec, "1 cup")
        else:
            ingredient, measure = "", ""
        meal[f"strIngredient{index + 1}"] = ingredient
        meal[f"strMeasure{index + 1}"] = measure
    meal.update(extra)
    return meal


def build_stub(meal_id: str, name: str = "Recipe") -> dict:
    """Build a filter.php-style stub dict."""
    return {
        "idMeal": meal_id,
        "strMeal": name,
        "strMealThumb": f"https://www.themealdb.com/images/media/meals/{meal_id}.jpg",
    }


@pytest.fixture
def make_meal():
    return build_meal


@pytest.fixture
def make_stub():
    return build_stub


@pytest.fixture
def make_recipe():
    def _make_recipe(**kwargs) -> Recipe:
        return Recipe.model_validate(build_meal(**kwargs))

    return _make_recipe
