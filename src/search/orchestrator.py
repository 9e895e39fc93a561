"""Advanced recipe search orchestration.

Pipeline for one search (single pass, nothing is cached between searches):

1. Validate criteria (at least one ingredient) before any network activity
2. Discover candidate stubs by cuisine, or by the first ingredient
3. Fetch every candidate's full record concurrently (bounded by a semaphore)
4. Wait for all lookups to settle, keep the ones that returned a recipe
5. Filter with the predicate chain and return survivors in candidate order

Failure policy: a failed discovery call fails the whole search with
UpstreamUnavailableError. A failed or empty detail lookup only drops that
candidate.
"""

import asyncio
import time
import uuid
from typing import List, Optional

from src.models.errors import SearchValidationError
from src.models.models import Recipe, RecipeStub, SearchCriteria
from src.search.predicates import active_predicates, matches_criteria
from src.sources.mealdb import DetailResult, DetailStatus, MealDBClient
from src.utils.config import config
from src.utils.logger import logger


class RecipeSearch:
    """Runs advanced searches against a TheMealDB client.

    Holds no per-search state, so one instance can serve concurrent searches.
    """

    def __init__(self, source: MealDBClient, max_concurrency: Optional[int] = None) -> None:
        """Initialize RecipeSearch.

        Args:
            source: Open TheMealDB client used for discovery and lookups.
            max_concurrency: Detail lookups in flight per search. Defaults to MAX_CONCURRENT_FETCHES.

        Raises:
            ValueError: If max_concurrency is less than 1.
        """
        max_concurrency = max_concurrency if max_concurrency is not None else config.MAX_CONCURRENT_FETCHES
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got: {max_concurrency}")

        self.source = source
        self.max_concurrency = max_concurrency

    async def advanced_search(self, criteria: SearchCriteria) -> List[Recipe]:
        """Find recipes matching every active constraint in ``criteria``.

        Args:
            criteria: Ingredients (required), optional cuisine, exclusions and max_time.

        Returns:
            Matching recipes in candidate order. An empty list means no matches.

        Raises:
            SearchValidationError: If no ingredients were supplied (no upstream call is made).
            UpstreamUnavailableError: If candidate discovery fails.
        """
        if not criteria.ingredients:
            raise SearchValidationError("At least one ingredient is required.")

        log_ctx = {"search_id": uuid.uuid4().hex[:8]}
        started = time.perf_counter()
        logger.info(
            f"Advanced search: ingredients={list(criteria.ingredients)}, cuisine={criteria.cuisine!r}, "
            f"exclusions={list(criteria.exclusions)}, max_time={criteria.max_time}",
            extra=log_ctx,
        )

        stubs = await self.source.discover_candidates(criteria)
        if not stubs:
            logger.info("No candidates found upstream", extra=log_ctx)
            return []
        logger.info(f"Discovered {len(stubs)} candidate(s), fetching details...", extra=log_ctx)

        results = await self._fetch_details(stubs)
        recipes = [result.recipe for result in results if result.status is DetailStatus.FOUND]

        failed = sum(1 for result in results if result.status is DetailStatus.FAILED)
        absent = sum(1 for result in results if result.status is DetailStatus.ABSENT)
        if failed or absent:
            logger.warning(
                f"Dropped {failed + absent} candidate(s): {failed} failed, {absent} without a record",
                extra=log_ctx,
            )

        predicates = active_predicates(criteria)
        matches = [recipe for recipe in recipes if matches_criteria(recipe, criteria, predicates)]

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"✓ {len(matches)}/{len(recipes)} recipe(s) matched "
            f"({', '.join(p.__name__ for p in predicates)}) in {elapsed_ms}ms",
            extra=log_ctx,
        )
        return matches

    async def _fetch_details(self, stubs: List[RecipeStub]) -> List[DetailResult]:
        """Look up all candidates concurrently and wait for every lookup to settle.

        Results come back in the same order as ``stubs``.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _bounded_fetch(stub: RecipeStub) -> DetailResult:
            async with semaphore:
                return await self.source.fetch_detail(stub.id)

        return list(await asyncio.gather(*(_bounded_fetch(stub) for stub in stubs)))


async def advanced_search(criteria: SearchCriteria, source: Optional[MealDBClient] = None) -> List[Recipe]:
    """Run one advanced search, opening a short-lived client when none is given.

    Convenience wrapper for scripts; long-running callers should keep one
    MealDBClient open and reuse a RecipeSearch.
    """
    if source is not None:
        return await RecipeSearch(source).advanced_search(criteria)

    if not criteria.ingredients:
        raise SearchValidationError("At least one ingredient is required.")

    async with MealDBClient() as client:
        return await RecipeSearch(client).advanced_search(criteria)
