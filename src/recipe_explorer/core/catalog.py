"""Build-time static recipe catalog shipped with the package."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .models import Category, RecipeDetail, RecipeSummary

CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


class StaticCatalog:
    """Immutable English-only lookup tables for categories and curated recipes."""

    def __init__(
        self,
        categories: List[Category],
        category_recipes: List[RecipeSummary],
        fallback_recipes: List[RecipeSummary],
        details: List[RecipeDetail],
    ) -> None:
        self._categories: Tuple[Category, ...] = tuple(categories)
        self._summaries: Tuple[RecipeSummary, ...] = tuple(category_recipes)
        self._fallback: Tuple[RecipeSummary, ...] = tuple(fallback_recipes)
        self._details: Dict[str, RecipeDetail] = {detail.name: detail for detail in details}

    @classmethod
    def load(cls, path: Path = CATALOG_PATH) -> "StaticCatalog":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            categories=[Category.model_validate(item) for item in data["categories"]],
            category_recipes=[RecipeSummary.model_validate(item) for item in data["category_recipes"]],
            fallback_recipes=[RecipeSummary.model_validate(item) for item in data["fallback_recipes"]],
            details=[RecipeDetail.model_validate(item) for item in data["recipes"]],
        )

    @property
    def categories(self) -> List[Category]:
        return list(self._categories)

    @property
    def all_summaries(self) -> List[RecipeSummary]:
        return list(self._summaries)

    @property
    def fallback_recipes(self) -> List[RecipeSummary]:
        return list(self._fallback)

    def category_recipes(self, category: str) -> List[RecipeSummary]:
        """Curated list for a category name, compared case-insensitively."""
        wanted = category.lower()
        return [recipe for recipe in self._summaries if recipe.category.lower() == wanted]

    def detail(self, name: str) -> Optional[RecipeDetail]:
        """Exact-name lookup; the catalog is keyed by the English display name."""
        return self._details.get(name)
