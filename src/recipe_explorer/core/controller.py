"""Core controller exposing recipe resolution to callers."""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Union

from ..config.schemas import AppConfig
from .cache import CacheStats, RecipeContentStore
from .catalog import StaticCatalog
from .image_search import UnsplashClient
from .images import ImageLookupCache
from .llm import ChatCompletionClient
from .memo import MemoStats, TranslationMemo
from .models import Category, RecipeDetail, RecipeSummary
from .providers import GenerationProvider, ImageSearchProvider, TranslationProvider
from .resolver import ContentResolver, SummaryList

logger = logging.getLogger(__name__)

_SUBJECT_SUFFIX = re.compile(r"\s+(meal|category)$", re.IGNORECASE)


class RecipeController:
    """Own the process-wide caches and wire them to the providers.

    One instance is built at startup and shared by every caller.
    """

    def __init__(
        self,
        config: AppConfig,
        catalog: StaticCatalog,
        generator: Optional[GenerationProvider] = None,
        translator: Optional[TranslationProvider] = None,
        image_search: Optional[ImageSearchProvider] = None,
    ) -> None:
        self._config = config
        cache_config = config.cache
        self._recipes: RecipeContentStore[RecipeDetail] = RecipeContentStore(
            max_records=cache_config.max_records, expiry_seconds=cache_config.expiry_seconds
        )
        self._searches: RecipeContentStore[SummaryList] = RecipeContentStore(
            max_records=cache_config.max_records, expiry_seconds=cache_config.expiry_seconds
        )
        self._memo = TranslationMemo(translator, fingerprint_length=cache_config.fingerprint_length)
        self._images = ImageLookupCache(image_search, config.images)
        self._resolver = ContentResolver(
            catalog=catalog,
            recipes=self._recipes,
            searches=self._searches,
            memo=self._memo,
            generator=generator,
            search_config=config.search,
        )

    @classmethod
    def from_config(cls, config: AppConfig, catalog: Optional[StaticCatalog] = None) -> "RecipeController":
        """Build a controller with the default HTTP providers."""
        llm = ChatCompletionClient(config.api)
        if not llm.available:
            logger.warning("No LLM API key configured; generation and translation are disabled")
            llm = None
        return cls(
            config=config,
            catalog=catalog or StaticCatalog.load(),
            generator=llm,
            translator=llm,
            image_search=UnsplashClient(config.images),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def resolve_recipe(self, name: str, language: Optional[str] = None) -> Optional[RecipeDetail]:
        return await self._resolver.resolve_recipe(name, language or self._config.default_language)

    async def resolve_search_results(self, query: str, language: Optional[str] = None) -> List[RecipeSummary]:
        return await self._resolver.resolve_search_results(query, language or self._config.default_language)

    async def resolve_categories(self, language: Optional[str] = None) -> List[Category]:
        return await self._resolver.resolve_categories(language or self._config.default_language)

    async def resolve_image(self, subject: str, width: int = 800, height: int = 600) -> str:
        """Return a photo URL for a dish; always usable, falling back to a placeholder."""
        subject = _SUBJECT_SUFFIX.sub("", subject).strip()
        return await self._images.resolve(subject, width, height)

    def clear_caches(self) -> None:
        self._recipes.clear()
        self._searches.clear()
        self._memo.clear()
        self._images.clear()

    def cache_stats(self) -> Dict[str, Union[CacheStats, MemoStats]]:
        return {
            "recipe": self._recipes.stats(),
            "search": self._searches.stats(),
            "translation": self._memo.stats(),
            "image": self._images.stats(),
        }

    @property
    def config(self) -> AppConfig:
        return self._config
