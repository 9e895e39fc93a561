"""Recipe predicates applied by the advanced search filter stage.

Each predicate takes ``(recipe, criteria)`` and returns True when the recipe
satisfies that one constraint. They are independent; the chain built by
active_predicates() only fixes evaluation order so the cheap mandatory check
runs first and the estimator runs last:

1. has_all_ingredients  - always active
2. matches_cuisine      - active when a cuisine is given
3. has_no_exclusions    - active when exclusions are given
4. within_time_limit    - active when max_time is below NO_TIME_LIMIT

All string comparisons are case-insensitive. Ingredient checks use substring
containment, so "chicken" matches "Chicken Breast".
"""

from typing import Callable, List, Optional, Sequence

from src.models.models import Recipe, SearchCriteria
from src.search.estimator import estimate_cook_time
from src.utils.logger import logger

Predicate = Callable[[Recipe, SearchCriteria], bool]


def _lowered_names(recipe: Recipe) -> List[str]:
    return [name.lower() for name in recipe.ingredient_names]


def _mentions(names: Sequence[str], term: str) -> bool:
    term = term.lower()
    return any(term in name for name in names)


def has_all_ingredients(recipe: Recipe, criteria: SearchCriteria) -> bool:
    """Every required ingredient is a substring of some recipe ingredient."""
    names = _lowered_names(recipe)
    return all(_mentions(names, required) for required in criteria.ingredients)


def matches_cuisine(recipe: Recipe, criteria: SearchCriteria) -> bool:
    """Recipe area equals the requested cuisine. A recipe without an area never matches."""
    if not recipe.area or not criteria.cuisine:
        return False
    return recipe.area.lower() == criteria.cuisine.lower()


def has_no_exclusions(recipe: Recipe, criteria: SearchCriteria) -> bool:
    """No excluded term is a substring of any recipe ingredient."""
    names = _lowered_names(recipe)
    return not any(_mentions(names, excluded) for excluded in criteria.exclusions)


def within_time_limit(recipe: Recipe, criteria: SearchCriteria) -> bool:
    """Estimated cook time does not exceed max_time."""
    return estimate_cook_time(recipe) <= criteria.max_time


def active_predicates(criteria: SearchCriteria) -> List[Predicate]:
    """Build the ordered predicate chain for a set of criteria."""
    predicates: List[Predicate] = [has_all_ingredients]
    if criteria.cuisine:
        predicates.append(matches_cuisine)
    if criteria.exclusions:
        predicates.append(has_no_exclusions)
    if criteria.has_time_limit:
        predicates.append(within_time_limit)
    return predicates


def matches_criteria(
    recipe: Recipe,
    criteria: SearchCriteria,
    predicates: Optional[Sequence[Predicate]] = None,
) -> bool:
    """Apply the predicate chain, stopping at the first predicate that fails.

    Args:
        recipe: Full recipe record.
        criteria: Search criteria.
        predicates: Pre-built chain from active_predicates(); built on demand if omitted.

    Returns:
        True if the recipe passes every active predicate.
    """
    if predicates is None:
        predicates = active_predicates(criteria)

    for predicate in predicates:
        if not predicate(recipe, criteria):
            logger.debug(f"Rejected '{recipe.name}' by {predicate.__name__}", extra={"recipe_id": recipe.id})
            return False
    return True
