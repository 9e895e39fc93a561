"""Exceptions reported to callers of the recipe search pipeline.

Every failure a caller can observe is one of these types. Transport
exceptions from aiohttp are translated into them at the TheMealDB client
boundary and never escape further.
"""


class SearchError(Exception):
    """Base class for recipe search failures."""


class SearchValidationError(SearchError, ValueError):
    """Search criteria rejected before any upstream call was made."""


class UpstreamUnavailableError(SearchError):
    """TheMealDB could not be reached or returned an unusable response."""


class RecipeNotFoundError(SearchError, LookupError):
    """A single recipe lookup found no record for the requested id."""

    def __init__(self, recipe_id: str) -> None:
        super().__init__(f"Recipe {recipe_id} not found")
        self.recipe_id = recipe_id
