"""Narrow contracts the core expects from external providers."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class GenerationProvider(Protocol):
    async def generate(self, prompt: str, schema: Dict[str, Any]) -> Any: ...


class TranslationProvider(Protocol):
    async def complete(self, prompt: str) -> str: ...


class ImageSearchProvider(Protocol):
    @property
    def available(self) -> bool: ...

    async def search(self, query: str, orientation: str = "landscape") -> Optional[str]: ...
