"""HTTP routes for recipe search."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Request

from src.models.errors import RecipeNotFoundError, UpstreamUnavailableError
from src.models.models import ErrorResponse, SearchCriteria, SearchResponse
from src.search.orchestrator import RecipeSearch
from src.sources.mealdb import DetailStatus, MealDBClient

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_mealdb(request: Request) -> MealDBClient:
    """FastAPI dependency: the TheMealDB client opened in the app lifespan."""
    return request.app.state.mealdb


def get_recipe_search(request: Request) -> RecipeSearch:
    """FastAPI dependency: the shared RecipeSearch orchestrator."""
    return request.app.state.recipe_search


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/api/recipes/advanced-search", response_model=SearchResponse, responses=ERROR_RESPONSES)
async def advanced_search(
    criteria: SearchCriteria,
    search: Annotated[RecipeSearch, Depends(get_recipe_search)],
) -> SearchResponse:
    """Find recipes containing all given ingredients, with optional cuisine, exclusions and time limit."""
    recipes = await search.advanced_search(criteria)
    return SearchResponse.from_recipes(recipes)


@router.get("/api/search", response_model=SearchResponse, responses=ERROR_RESPONSES)
async def search_by_name(
    q: Annotated[str, Query(min_length=1, max_length=100, description="Recipe name to search for")],
    mealdb: Annotated[MealDBClient, Depends(get_mealdb)],
) -> SearchResponse:
    """Search recipes by name."""
    recipes = await mealdb.search_by_name(q.strip())
    return SearchResponse.from_recipes(recipes)


@router.get(
    "/api/recipe/{meal_id}",
    response_model=SearchResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_recipe(
    meal_id: Annotated[str, Path(min_length=1, max_length=20)],
    mealdb: Annotated[MealDBClient, Depends(get_mealdb)],
) -> SearchResponse:
    """Look up a single recipe by TheMealDB id."""
    result = await mealdb.fetch_detail(meal_id)
    if result.status is DetailStatus.FAILED:
        raise UpstreamUnavailableError(result.error or f"lookup of {meal_id} failed")
    if result.status is DetailStatus.ABSENT:
        raise RecipeNotFoundError(meal_id)
    return SearchResponse.from_recipes([result.recipe])
