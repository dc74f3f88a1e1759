"""Shared fixtures and in-memory provider doubles."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest

from recipe_explorer.config.schemas import AppConfig, CacheConfig, ImageConfig
from recipe_explorer.core.catalog import StaticCatalog
from recipe_explorer.core.controller import RecipeController
from recipe_explorer.core.errors import ProviderError, ProviderResponseError


def tag_strings(data: Any, tag: str) -> Any:
    if isinstance(data, str):
        return f"[{tag}] {data}"
    if isinstance(data, list):
        return [tag_strings(item, tag) for item in data]
    if isinstance(data, dict):
        return {key: tag_strings(value, tag) for key, value in data.items()}
    return data


class DummyGenerator:
    def __init__(self, responses: Optional[List[Any]] = None, fail: bool = False) -> None:
        self.responses = list(responses or [])
        self.fail = fail
        self.calls: List[str] = []

    async def generate(self, prompt: str, schema: Dict[str, Any]) -> Any:
        self.calls.append(prompt)
        if self.fail:
            raise ProviderError("llm", "generation failed")
        if not self.responses:
            raise ProviderResponseError("llm", "no canned response")
        return self.responses.pop(0)


class DummyTranslator:
    """Tag every string of the prompt payload with the language, like a fake LLM."""

    def __init__(
        self,
        tag: str = "ES",
        fail: bool = False,
        raw: Optional[str] = None,
        queries: Optional[Dict[str, str]] = None,
    ) -> None:
        self.tag = tag
        self.fail = fail
        self.raw = raw
        self.queries = queries or {}
        self.calls: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.calls.append(prompt)
        if self.fail:
            raise ProviderError("llm", "translation failed")
        if self.raw is not None:
            return self.raw
        body = prompt.split("\n\n", 1)[1]
        if "search query to English" in prompt:
            return self.queries.get(body, body)
        try:
            data = json.loads(body)
        except ValueError:
            return f"[{self.tag}] {body}"
        return "```json\n" + json.dumps(tag_strings(data, self.tag)) + "\n```"


class DummyImageSearch:
    def __init__(self, url: Optional[str] = None, fail: bool = False, available: bool = True) -> None:
        self.url = url
        self.fail = fail
        self.available = available
        self.queries: List[str] = []

    async def search(self, query: str, orientation: str = "landscape") -> Optional[str]:
        self.queries.append(query)
        if self.fail:
            raise ProviderError("unsplash", "search failed")
        return self.url


@pytest.fixture(scope="session")
def catalog() -> StaticCatalog:
    return StaticCatalog.load()


@pytest.fixture
def make_controller(catalog: StaticCatalog):
    def build(
        generator: Optional[DummyGenerator] = None,
        translator: Optional[DummyTranslator] = None,
        image_search: Optional[DummyImageSearch] = None,
        **cache: Any,
    ) -> RecipeController:
        config = AppConfig(cache=CacheConfig(**cache), images=ImageConfig(access_key="test-key"))
        return RecipeController(
            config=config,
            catalog=catalog,
            generator=generator,
            translator=translator,
            image_search=image_search,
        )

    return build
