"""Live integration tests against TheMealDB.

Exercises the client, the search pipeline and the HTTP API end to end with
real upstream calls. Results depend on TheMealDB's catalogue, so assertions
check invariants (every result satisfies the criteria) rather than exact ids.

Run with: RUN_LIVE_TESTS=true pytest tests/integration -m live -v
"""

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.models.models import SearchCriteria
from src.search.estimator import estimate_cook_time
from src.search.orchestrator import advanced_search
from src.sources.mealdb import DetailStatus, MealDBClient

pytestmark = pytest.mark.live


class TestMealDBClientLive:
    @pytest.mark.asyncio
    async def test_lookup_known_recipe(self):
        async with MealDBClient() as client:
            result = await client.fetch_detail("52772")

        assert result.status is DetailStatus.FOUND
        assert result.recipe.name == "Teriyaki Chicken Casserole"
        assert result.recipe.ingredient_names

    @pytest.mark.asyncio
    async def test_lookup_unknown_recipe_is_absent(self):
        async with MealDBClient() as client:
            result = await client.fetch_detail("1")

        assert result.status is DetailStatus.ABSENT

    @pytest.mark.asyncio
    async def test_list_by_cuisine(self):
        async with MealDBClient() as client:
            stubs = await client.list_by_cuisine("Italian")

        assert len(stubs) > 0
        assert all(stub.id for stub in stubs)


class TestAdvancedSearchLive:
    @pytest.mark.asyncio
    async def test_every_result_contains_the_ingredient(self):
        results = await advanced_search(SearchCriteria(ingredients=["chicken"]))

        assert len(results) > 0
        for recipe in results:
            assert any("chicken" in name.lower() for name in recipe.ingredient_names)

    @pytest.mark.asyncio
    async def test_cuisine_and_time_limit(self):
        criteria = SearchCriteria(ingredients=["garlic"], cuisine="Italian", max_time=45)
        results = await advanced_search(criteria)

        for recipe in results:
            assert recipe.area.lower() == "italian"
            assert estimate_cook_time(recipe) <= 45


class TestApiLive:
    def test_advanced_search_endpoint(self):
        with TestClient(create_app()) as client:
            response = client.post(
                "/api/recipes/advanced-search",
                json={"ingredients": ["chicken"], "exclusions": ["garlic"], "maxTime": "60"},
            )

        assert response.status_code == 200
        for meal in response.json()["meals"]:
            names = [meal[f"strIngredient{i}"] or "" for i in range(1, 21)]
            assert not any("garlic" in name.lower() for name in names)

    def test_recipe_endpoint(self):
        with TestClient(create_app()) as client:
            response = client.get("/api/recipe/52772")

        assert response.status_code == 200
        assert response.json()["meals"][0]["idMeal"] == "52772"
