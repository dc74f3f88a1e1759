"""Cache -> canonical English -> translate resolution of recipes and listings."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import ValidationError

from ..config.schemas import SearchConfig
from .cache import RecipeContentStore
from .catalog import StaticCatalog
from .errors import ProviderError
from .memo import TranslationMemo
from .models import ENGLISH, Category, Content, RecipeDetail, RecipeSummary
from .prompts import (
    CATEGORY_CHOICES,
    RECIPE_DETAIL_PROMPT,
    RECIPE_DETAIL_SCHEMA,
    RECIPE_LIST_PROMPT,
    SUMMARY_LIST_SCHEMA,
)
from .providers import GenerationProvider

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Content)
SummaryList = Tuple[RecipeSummary, ...]


class ContentResolver:
    """Resolve recipe content in a target language with as few provider calls as possible.

    English content is the source of truth. It is persisted as soon as it is known so a
    later translation failure, or a concurrent request in another language, can reuse it.
    """

    def __init__(
        self,
        catalog: StaticCatalog,
        recipes: RecipeContentStore[RecipeDetail],
        searches: RecipeContentStore[SummaryList],
        memo: TranslationMemo,
        generator: Optional[GenerationProvider],
        search_config: SearchConfig = SearchConfig(),
    ) -> None:
        self._catalog = catalog
        self._recipes = recipes
        self._searches = searches
        self._memo = memo
        self._generator = generator
        self._search_config = search_config

    async def resolve_recipe(self, name: str, language: str) -> Optional[RecipeDetail]:
        """Return the recipe in ``language``, or None when it cannot be found or generated."""
        cached = self._recipes.get(name, language)
        if cached is not None:
            logger.debug("Recipe cache hit: %r (%s)", name, language)
            return cached

        logger.debug("Recipe cache miss: %r (%s)", name, language)
        english = await self._resolve_english_recipe(name)
        if english is None or language == ENGLISH:
            return english

        # a fallback to English is stored under the language key as well
        translated = await self._translate_one(english, RecipeDetail, language)
        self._recipes.put(name, english, language, translated)
        return translated

    async def resolve_search_results(self, query: str, language: str) -> List[RecipeSummary]:
        """Return summaries matching ``query``; never empty thanks to the editorial list."""
        english_query = await self._memo.translate_query(query, language)

        cached = self._searches.get(english_query, language)
        if cached is not None:
            logger.debug("Search cache hit: %r (%s)", english_query, language)
            return list(cached)

        english_results = self._searches.get(english_query, ENGLISH)
        if english_results is None:
            english_results, cacheable = await self._search_english(english_query)
            if not cacheable:
                return await self._translate_many(english_results, RecipeSummary, language)
            self._searches.put(english_query, english_results, ENGLISH)

        if language == ENGLISH:
            return list(english_results)

        translated = await self._translate_many(english_results, RecipeSummary, language)
        self._searches.put(english_query, english_results, language, tuple(translated))
        return translated

    async def resolve_categories(self, language: str) -> List[Category]:
        return await self._translate_many(self._catalog.categories, Category, language)

    async def _resolve_english_recipe(self, name: str) -> Optional[RecipeDetail]:
        english = self._recipes.get(name, ENGLISH)
        if english is not None:
            return english

        english = self._catalog.detail(name)
        if english is None:
            english = await self._generate_recipe(name)
            if english is None:
                logger.info("Recipe not found: %r", name)
                return None

        self._recipes.put(name, english, ENGLISH)
        return english

    async def _search_english(self, query: str) -> Tuple[SummaryList, bool]:
        """Return English results and whether they may be cached for this query."""
        needle = query.strip().lower()
        if not needle:
            return tuple(self._catalog.fallback_recipes), False

        category_recipes = self._catalog.category_recipes(needle)
        if category_recipes:
            return tuple(category_recipes), True

        if len(needle) >= self._search_config.min_match_length:
            matches = [recipe for recipe in self._catalog.all_summaries if needle in recipe.name.lower()]
            if 0 < len(matches) <= self._search_config.max_exact_matches:
                return tuple(matches), True

        generated = await self._generate_summaries(query)
        if generated:
            return tuple(generated), True

        return tuple(self._catalog.fallback_recipes), False

    async def _generate_recipe(self, name: str) -> Optional[RecipeDetail]:
        if self._generator is None:
            return None
        prompt = RECIPE_DETAIL_PROMPT.format(name=name, categories=CATEGORY_CHOICES)
        try:
            data = await self._generator.generate(prompt, RECIPE_DETAIL_SCHEMA)
            return RecipeDetail.model_validate(data) if data else None
        except ProviderError as exc:
            logger.warning("Recipe generation failed for %r: %s", name, exc)
        except ValidationError as exc:
            logger.warning("Generated recipe for %r did not match the schema: %s", name, exc)
        return None

    async def _generate_summaries(self, query: str) -> List[RecipeSummary]:
        if self._generator is None:
            return []
        prompt = RECIPE_LIST_PROMPT.format(count=self._search_config.generated_count, query=query)
        try:
            data = await self._generator.generate(prompt, SUMMARY_LIST_SCHEMA)
            if not isinstance(data, list):
                logger.warning("Generated search results for %r were not a list", query)
                return []
            return [RecipeSummary.model_validate(item) for item in data]
        except ProviderError as exc:
            logger.warning("Search generation failed for %r: %s", query, exc)
        except ValidationError as exc:
            logger.warning("Generated search results for %r did not match the schema: %s", query, exc)
        return []

    async def _translate_one(self, item: ModelT, model: Type[ModelT], language: str) -> ModelT:
        translated = await self._memo.translate_structured(item.to_payload(), language)
        return self._validate(translated, model, item)

    async def _translate_many(self, items: Sequence[ModelT], model: Type[ModelT], language: str) -> List[ModelT]:
        if language == ENGLISH:
            return list(items)
        translated = await self._memo.translate_structured([item.to_payload() for item in items], language)
        return [self._validate(data, model, original) for data, original in zip(translated, items)]

    @staticmethod
    def _validate(data: Any, model: Type[ModelT], original: ModelT) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning("Translated %s did not validate, keeping English: %s", model.__name__, exc)
            return original
