"""FastAPI application factory for PantryChef Recipe Search Service.

The lifespan opens one TheMealDB client (a shared aiohttp connection pool)
for the whole process and closes it on shutdown. Concurrent requests share
the client and the RecipeSearch orchestrator; neither holds per-search state.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api.errors import (
    not_found_error_handler,
    request_validation_error_handler,
    search_validation_error_handler,
    unhandled_error_handler,
    upstream_error_handler,
)
from src.api.routes import router
from src.models.errors import RecipeNotFoundError, SearchValidationError, UpstreamUnavailableError
from src.search.orchestrator import RecipeSearch
from src.sources.mealdb import MealDBClient
from src.utils.config import config
from src.utils.logger import logger


def create_app(mealdb: Optional[MealDBClient] = None) -> FastAPI:
    """Build the API application.

    Args:
        mealdb: Optional pre-built TheMealDB client (e.g. pointed at a test
            server). A default client from configuration is created otherwise.

    Returns:
        Configured FastAPI instance.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = mealdb or MealDBClient()
        await client.open()
        app.state.mealdb = client
        app.state.recipe_search = RecipeSearch(client)
        logger.info(
            f"✓ TheMealDB client ready: {client.base_url} "
            f"(timeout={client.timeout.total}s, max_concurrency={config.MAX_CONCURRENT_FETCHES})"
        )
        try:
            yield
        finally:
            await client.close()

    app = FastAPI(
        title="PantryChef Recipe Search API",
        description="Find TheMealDB recipes you can cook with the ingredients you have",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(SearchValidationError, search_validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(UpstreamUnavailableError, upstream_error_handler)
    app.add_exception_handler(RecipeNotFoundError, not_found_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Credentials can't be combined with a wildcard origin
    allow_any = "*" in config.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_any else config.CORS_ORIGINS,
        allow_credentials=not allow_any,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app
