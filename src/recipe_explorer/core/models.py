"""Recipe value types shared by the caches and the resolver."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

ENGLISH = "en"


class LoadingState(str, Enum):
    """Caller-side status of a guarded fetch."""
    IDLE = "IDLE"
    LOADING = "LOADING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class Content(BaseModel):
    """Immutable model serialized with camelCase keys, matching the LLM schemas."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        coerce_numbers_to_str=True,
    )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class Category(Content):
    id: str
    name: str
    description: str


class RecipeSummary(Content):
    id: str
    name: str
    category: str
    short_description: str
    prep_time: str
    calories: str


class RecipeDetail(RecipeSummary):
    ingredients: Tuple[str, ...] = ()
    instructions: Tuple[str, ...] = ()
    tips: Tuple[str, ...] = ()


def normalize_key(name: str) -> str:
    """Canonical cache key for a recipe name or search query."""
    return name.strip().lower()
