"""Data models and schemas for PantryChef recipe search service.

Defines Pydantic models for request/response validation and the domain objects
exchanged with TheMealDB. All models use Pydantic v2.

TheMealDB payload field names (idMeal, strMeal, strIngredient1, ...) are kept as
aliases so upstream records validate directly and serialize back unchanged.
"""

from typing import Annotated, Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Slider maximum in the search UI; a max_time at or above it means "no time limit"
NO_TIME_LIMIT = 105

# TheMealDB exposes at most 20 ingredient/measure slots per meal
MAX_INGREDIENT_SLOTS = 20


def _clean_terms(value: Any) -> Any:
    """Normalize an ingredient/exclusion list: strip entries and drop blank ones.

    Accepts a list, tuple, comma-separated string or None. Anything else is
    returned untouched so Pydantic reports the type error.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return value

    cleaned = []
    for item in value:
        if isinstance(item, str):
            item = item.strip()
            if not item:
                continue
        cleaned.append(item)
    return tuple(cleaned)


class SearchCriteria(BaseModel):
    """Caller-supplied criteria for one advanced search.

    Frozen: a search never mutates its criteria once started. An empty
    ingredient tuple is representable here on purpose; the orchestrator
    rejects it before any upstream call so the failure is reported as a
    search validation error rather than a schema error.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    ingredients: Annotated[
        Tuple[str, ...],
        Field(default=(), description="Ingredients the user has; every one must appear in a result"),
    ]
    cuisine: Annotated[
        Optional[str],
        Field(None, max_length=100, description="Cuisine/area label (e.g. 'Italian'); empty means any"),
    ]
    exclusions: Annotated[
        Tuple[str, ...],
        Field(default=(), description="Ingredients that must not appear in a result"),
    ]
    max_time: Annotated[
        int,
        Field(
            NO_TIME_LIMIT,
            ge=0,
            alias="maxTime",
            description=f"Maximum estimated cook time in minutes ({NO_TIME_LIMIT} or more means no limit)",
        ),
    ]

    @field_validator("ingredients", "exclusions", mode="before")
    @classmethod
    def clean_terms(cls, value: Any) -> Any:
        return _clean_terms(value)

    @field_validator("cuisine", mode="after")
    @classmethod
    def blank_cuisine_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @field_validator("max_time", mode="before")
    @classmethod
    def default_max_time(cls, value: Any) -> Any:
        """Treat null/empty maxTime (as sent by some clients) as no limit."""
        if value is None or value == "":
            return NO_TIME_LIMIT
        return value

    @property
    def has_time_limit(self) -> bool:
        return self.max_time < NO_TIME_LIMIT


class RecipeStub(BaseModel):
    """Minimal recipe identity returned by TheMealDB filter endpoints."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: Annotated[str, Field(alias="idMeal", min_length=1)]
    name: Annotated[Optional[str], Field(None, alias="strMeal")]
    thumbnail: Annotated[Optional[str], Field(None, alias="strMealThumb")]


class IngredientSlot(BaseModel):
    """One (ingredient, measure) pair of a recipe."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, coerce_numbers_to_str=True)

    name: Annotated[str, Field(min_length=1)]
    measure: Annotated[Optional[str], Field(None)]

    @field_validator("measure", mode="after")
    @classmethod
    def blank_measure_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None


class Recipe(BaseModel):
    """Full recipe record from TheMealDB lookup/search endpoints.

    Ingredient slots are collected from ``strIngredient1..20`` and
    ``strMeasure1..20``. The first missing or blank ingredient name ends the
    list, so slots are always contiguous. Missing instructions, area or
    category are valid and left as None.

    Upstream fields without a dedicated attribute (strTags, strYoutube,
    strSource, ...) are kept as extras and returned by :meth:`to_meal`.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="allow",
    )

    id: Annotated[str, Field(alias="idMeal", min_length=1, description="TheMealDB recipe id")]
    name: Annotated[Optional[str], Field(None, alias="strMeal")]
    thumbnail: Annotated[Optional[str], Field(None, alias="strMealThumb")]
    area: Annotated[Optional[str], Field(None, alias="strArea", description="Cuisine/area label")]
    category: Annotated[Optional[str], Field(None, alias="strCategory")]
    instructions: Annotated[Optional[str], Field(None, alias="strInstructions")]
    ingredients: Annotated[
        Tuple[IngredientSlot, ...],
        Field(default=(), max_length=MAX_INGREDIENT_SLOTS, description="Contiguous ingredient slots"),
    ]

    @model_validator(mode="before")
    @classmethod
    def collect_ingredient_slots(cls, data: Any) -> Any:
        """Fold TheMealDB's numbered ingredient/measure fields into ``ingredients``."""
        if not isinstance(data, dict) or "ingredients" in data:
            return data

        data = dict(data)
        slots = []
        ended = False
        for index in range(1, MAX_INGREDIENT_SLOTS + 1):
            name = data.pop(f"strIngredient{index}", None)
            measure = data.pop(f"strMeasure{index}", None)
            if ended:
                continue
            if name is None or not str(name).strip():
                ended = True
                continue
            slots.append({"name": name, "measure": measure})

        data["ingredients"] = slots
        return data

    @property
    def ingredient_names(self) -> List[str]:
        return [slot.name for slot in self.ingredients]

    def to_meal(self) -> dict[str, Any]:
        """Serialize back to TheMealDB's flat meal shape."""
        meal = self.model_dump(by_alias=True, exclude={"ingredients"})
        for index in range(MAX_INGREDIENT_SLOTS):
            slot = self.ingredients[index] if index < len(self.ingredients) else None
            meal[f"strIngredient{index + 1}"] = slot.name if slot else None
            meal[f"strMeasure{index + 1}"] = slot.measure if slot else None
        return meal


class SearchResponse(BaseModel):
    """Successful search envelope: ``{"meals": [...]}``. An empty list is a valid result."""

    meals: Annotated[List[dict[str, Any]], Field(default_factory=list)]

    @classmethod
    def from_recipes(cls, recipes: Sequence[Recipe]) -> "SearchResponse":
        return cls(meals=[recipe.to_meal() for recipe in recipes])


class ErrorResponse(BaseModel):
    """Error envelope returned for validation, lookup and upstream failures."""

    error: Annotated[str, Field(description="Human-readable error message")]
    code: Annotated[str, Field(description="Machine-readable error code")]
    details: Annotated[Optional[Any], Field(None, description="Optional structured details")]
