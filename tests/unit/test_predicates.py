"""Unit tests for the recipe predicate chain."""

from src.models.models import SearchCriteria
from src.search.predicates import (
    active_predicates,
    has_all_ingredients,
    has_no_exclusions,
    matches_criteria,
    matches_cuisine,
    within_time_limit,
)


def criteria(**kwargs) -> SearchCriteria:
    kwargs.setdefault("ingredients", ["chicken"])
    return SearchCriteria(**kwargs)


class TestHasAllIngredients:
    """Test mandatory ingredient coverage (case-insensitive substring)."""

    def test_all_required_present(self, make_recipe):
        recipe = make_recipe(ingredients=["Chicken Breast", "Rice"])
        assert has_all_ingredients(recipe, criteria(ingredients=["chicken", "rice"])) is True

    def test_one_required_missing(self, make_recipe):
        recipe = make_recipe(ingredients=["Chicken Breast", "Rice"])
        assert has_all_ingredients(recipe, criteria(ingredients=["chicken", "beef"])) is False

    def test_substring_not_token_match(self, make_recipe):
        recipe = make_recipe(ingredients=["Chicken Thighs"])
        assert has_all_ingredients(recipe, criteria(ingredients=["CHICK"])) is True

    def test_required_term_is_not_matched_in_reverse(self, make_recipe):
        recipe = make_recipe(ingredients=["Egg"])
        assert has_all_ingredients(recipe, criteria(ingredients=["eggplant"])) is False

    def test_recipe_without_ingredients_fails(self, make_recipe):
        assert has_all_ingredients(make_recipe(ingredients=[]), criteria()) is False


class TestMatchesCuisine:
    """Test cuisine equality (case-insensitive, exact)."""

    def test_case_insensitive_equality(self, make_recipe):
        assert matches_cuisine(make_recipe(area="Italian"), criteria(cuisine="italian")) is True

    def test_substring_is_not_enough(self, make_recipe):
        assert matches_cuisine(make_recipe(area="Italian"), criteria(cuisine="Ital")) is False

    def test_different_cuisine_fails(self, make_recipe):
        assert matches_cuisine(make_recipe(area="Mexican"), criteria(cuisine="Italian")) is False

    def test_missing_area_never_matches(self, make_recipe):
        assert matches_cuisine(make_recipe(area=None), criteria(cuisine="Italian")) is False


class TestHasNoExclusions:
    """Test exclusion check (case-insensitive substring)."""

    def test_no_excluded_ingredient(self, make_recipe):
        recipe = make_recipe(ingredients=["Chicken", "Rice"])
        assert has_no_exclusions(recipe, criteria(exclusions=["peanut"])) is True

    def test_excluded_ingredient_present(self, make_recipe):
        recipe = make_recipe(ingredients=["Chicken", "Peanut Butter"])
        assert has_no_exclusions(recipe, criteria(exclusions=["shrimp", "PEANUT"])) is False


class TestWithinTimeLimit:
    """Test estimated cook time ceiling."""

    def test_quick_recipe_passes(self, make_recipe):
        # 2 * 3 + 100 / 50 = 8 -> 10 minutes
        recipe = make_recipe(ingredients=["chicken", "rice"], instructions="x" * 100)
        assert within_time_limit(recipe, criteria(max_time=10)) is True

    def test_slow_recipe_fails(self, make_recipe):
        recipe = make_recipe(ingredients=["chicken", "rice"], instructions="x" * 100)
        assert within_time_limit(recipe, criteria(max_time=5)) is False

    def test_recipe_without_instructions_fails(self, make_recipe):
        assert within_time_limit(make_recipe(instructions=None), criteria(max_time=90)) is False


class TestActivePredicates:
    """Test which predicates are active and their order."""

    def test_only_ingredients_by_default(self):
        assert active_predicates(criteria()) == [has_all_ingredients]

    def test_sentinel_max_time_disables_time_check(self):
        assert within_time_limit not in active_predicates(criteria(max_time=105))

    def test_all_predicates_in_fixed_order(self):
        chain = active_predicates(criteria(cuisine="Indian", exclusions=["nuts"], max_time=30))
        assert chain == [has_all_ingredients, matches_cuisine, has_no_exclusions, within_time_limit]


class TestMatchesCriteria:
    """Test applying the chain."""

    def test_recipe_passing_everything(self, make_recipe):
        recipe = make_recipe(
            area="Indian",
            ingredients=["Chicken Thighs", "Yogurt"],
            instructions="x" * 100,
        )
        assert matches_criteria(recipe, criteria(cuisine="indian", exclusions=["nuts"], max_time=15)) is True

    def test_absent_area_fails_when_cuisine_requested(self, make_recipe):
        recipe = make_recipe(area=None, ingredients=["Chicken"])
        assert matches_criteria(recipe, criteria(cuisine="Indian")) is False

    def test_stops_at_first_failing_predicate(self, make_recipe):
        calls = []

        def rejects(recipe, search_criteria):
            calls.append("rejects")
            return False

        def never_reached(recipe, search_criteria):
            calls.append("never_reached")
            return True

        assert matches_criteria(make_recipe(), criteria(), [rejects, never_reached]) is False
        assert calls == ["rejects"]
