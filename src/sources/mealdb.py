"""TheMealDB client: candidate discovery and recipe detail lookups (async).

This module provides the MealDBClient class wrapping the upstream queries the
search pipeline needs:

- filter.php?a=<area>        -> recipe stubs by cuisine
- filter.php?i=<ingredient>  -> recipe stubs by single ingredient
- lookup.php?i=<id>          -> full recipe detail by id
- search.php?s=<name>        -> full recipes by name

All requests share one aiohttp.ClientSession (connection pool) and carry a
finite total timeout. Transport failures (timeouts, connection errors, non-2xx
statuses, malformed JSON) are translated into UpstreamUnavailableError here;
aiohttp exceptions never leave this module. A response without a ``meals``
list means zero results, not an error.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

import aiohttp
from pydantic import ValidationError

from src.models.errors import UpstreamUnavailableError
from src.models.models import Recipe, RecipeStub, SearchCriteria
from src.utils.config import config
from src.utils.logger import logger


class DetailStatus(str, Enum):
    """Outcome of a single recipe detail lookup."""

    FOUND = "found"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True)
class DetailResult:
    """Recipe-or-absent-or-failed result of :meth:`MealDBClient.fetch_detail`."""

    recipe_id: str
    status: DetailStatus
    recipe: Optional[Recipe] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, recipe: Recipe) -> "DetailResult":
        return cls(recipe_id=recipe.id, status=DetailStatus.FOUND, recipe=recipe)

    @classmethod
    def absent(cls, recipe_id: str) -> "DetailResult":
        return cls(recipe_id=recipe_id, status=DetailStatus.ABSENT)

    @classmethod
    def failed(cls, recipe_id: str, error: str) -> "DetailResult":
        return cls(recipe_id=recipe_id, status=DetailStatus.FAILED, error=error)


def _meals(payload: dict[str, Any]) -> List[dict[str, Any]]:
    """Extract the ``meals`` list from a TheMealDB response.

    TheMealDB answers "no results" with ``{"meals": null}`` (and on some
    endpoints a string); both mean an empty result set.
    """
    meals = payload.get("meals")
    if not isinstance(meals, list):
        return []
    return [meal for meal in meals if isinstance(meal, dict)]


class MealDBClient:
    """Async client for TheMealDB JSON API.

    Use as an async context manager, or call :meth:`open` / :meth:`close`
    explicitly (the API server does this in its lifespan). A single client is
    safe to share between concurrent searches: it holds no per-search state.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """Initialize MealDBClient with configuration.

        Args:
            base_url: TheMealDB API root. Defaults to MEALDB_BASE_URL.
            timeout_seconds: Total timeout per request. Defaults to REQUEST_TIMEOUT_SECONDS.
            session: Optional externally managed aiohttp session (not closed by this client).

        Raises:
            ValueError: If base_url is empty or timeout_seconds is not positive.
        """
        base_url = base_url if base_url is not None else config.MEALDB_BASE_URL
        if not base_url:
            raise ValueError("MEALDB_BASE_URL is required")

        timeout_seconds = timeout_seconds if timeout_seconds is not None else config.REQUEST_TIMEOUT_SECONDS
        if timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be greater than 0, got: {timeout_seconds}")

        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "MealDBClient":
        await self.open()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def open(self) -> None:
        """Create the shared HTTP session if this client owns one."""
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            logger.debug(f"Opened TheMealDB session for {self.base_url}")

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            logger.debug("Closed TheMealDB session")

    async def _get_json(self, endpoint: str, params: dict[str, str]) -> dict[str, Any]:
        """GET ``{base_url}/{endpoint}`` and return the decoded JSON object.

        Raises:
            UpstreamUnavailableError: On timeout, connection failure, non-2xx
                status, invalid JSON or a non-object payload.
            RuntimeError: If the client session was never opened.
        """
        if self._session is None:
            raise RuntimeError("MealDBClient is not open; use 'async with MealDBClient()' or call open()")

        url = f"{self.base_url}/{endpoint}"
        try:
            async with self._session.get(url, params=params, timeout=self.timeout) as response:
                response.raise_for_status()
                # TheMealDB sometimes labels JSON as text/html, so skip the content-type check
                payload = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise UpstreamUnavailableError(
                f"{endpoint} timed out after {self.timeout.total}s"
            ) from e
        except aiohttp.ClientResponseError as e:
            raise UpstreamUnavailableError(f"{endpoint} returned HTTP {e.status}") from e
        except aiohttp.ClientError as e:
            raise UpstreamUnavailableError(f"{endpoint} request failed: {e}") from e
        except ValueError as e:
            raise UpstreamUnavailableError(f"{endpoint} returned malformed JSON") from e

        if not isinstance(payload, dict):
            raise UpstreamUnavailableError(
                f"{endpoint} returned unexpected payload type: {type(payload).__name__}"
            )
        return payload

    async def _list_stubs(self, params: dict[str, str]) -> List[RecipeStub]:
        payload = await self._get_json("filter.php", params)

        stubs = []
        for meal in _meals(payload):
            try:
                stubs.append(RecipeStub.model_validate(meal))
            except ValidationError as e:
                logger.warning(f"Skipping recipe stub without a usable id: {e.error_count()} validation error(s)")
        return stubs

    async def list_by_cuisine(self, cuisine: str) -> List[RecipeStub]:
        """List recipe stubs for a cuisine/area label (e.g. 'Italian')."""
        return await self._list_stubs({"a": cuisine})

    async def list_by_ingredient(self, ingredient: str) -> List[RecipeStub]:
        """List recipe stubs containing a single main ingredient."""
        return await self._list_stubs({"i": ingredient})

    async def discover_candidates(self, criteria: SearchCriteria) -> List[RecipeStub]:
        """Find candidate recipes for a search.

        Queries by cuisine when one is given, otherwise by the first listed
        ingredient only. The result is a superset that the predicate chain
        narrows down afterwards; the remaining ingredients are not sent
        upstream.

        Args:
            criteria: Search criteria with at least one ingredient.

        Returns:
            Candidate stubs, possibly empty.

        Raises:
            UpstreamUnavailableError: If the discovery request fails.
        """
        if criteria.cuisine:
            logger.debug(f"Discovering candidates by cuisine: {criteria.cuisine}")
            return await self.list_by_cuisine(criteria.cuisine)

        primary_ingredient = criteria.ingredients[0]
        logger.debug(f"Discovering candidates by ingredient: {primary_ingredient}")
        return await self.list_by_ingredient(primary_ingredient)

    async def fetch_detail(self, recipe_id: str) -> DetailResult:
        """Fetch the full record for one recipe id.

        Never raises for upstream problems: a failed lookup is reported as
        ``DetailStatus.FAILED`` and a missing record as ``DetailStatus.ABSENT``
        so the caller can drop the candidate and carry on.

        Args:
            recipe_id: TheMealDB recipe id.

        Returns:
            DetailResult with status FOUND, ABSENT or FAILED.
        """
        try:
            payload = await self._get_json("lookup.php", {"i": recipe_id})
        except UpstreamUnavailableError as e:
            logger.warning(f"Recipe lookup failed: {e}", extra={"recipe_id": recipe_id})
            return DetailResult.failed(recipe_id, str(e))

        meals = _meals(payload)
        if not meals:
            logger.debug("Recipe lookup returned no record", extra={"recipe_id": recipe_id})
            return DetailResult.absent(recipe_id)

        try:
            recipe = Recipe.model_validate(meals[0])
        except ValidationError as e:
            logger.warning(
                f"Recipe lookup returned a malformed record: {e.error_count()} validation error(s)",
                extra={"recipe_id": recipe_id},
            )
            return DetailResult.failed(recipe_id, "malformed recipe payload")

        return DetailResult.found(recipe)

    async def search_by_name(self, name: str) -> List[Recipe]:
        """Search full recipes whose name contains ``name``.

        Raises:
            UpstreamUnavailableError: If the request fails.
        """
        payload = await self._get_json("search.php", {"s": name})

        recipes = []
        for meal in _meals(payload):
            try:
                recipes.append(Recipe.model_validate(meal))
            except ValidationError as e:
                logger.warning(f"Skipping malformed recipe in name search: {e.error_count()} validation error(s)")
        return recipes
