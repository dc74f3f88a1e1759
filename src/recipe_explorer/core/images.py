"""Memoized representative photo lookup."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from ..config.schemas import ImageConfig
from .errors import ProviderError
from .memo import MemoStats
from .providers import ImageSearchProvider

logger = logging.getLogger(__name__)

ImageKey = Tuple[str, int, int]


def sized_url(base_url: str, width: int, height: int) -> str:
    separator = "&" if "?" in base_url else "?"
    return f"{base_url}{separator}w={width}&h={height}&fit=crop&q=80"


class ImageLookupCache:
    """Map (subject, width, height) to a usable image URL for the process lifetime.

    Failed lookups are cached as the placeholder too, so a subject that has no photo
    does not hit the provider again.
    """

    def __init__(self, provider: Optional[ImageSearchProvider], image_config: ImageConfig) -> None:
        self._provider = provider
        self._image_config = image_config
        self._urls: Dict[ImageKey, str] = {}

    async def resolve(self, subject: str, width: int = 800, height: int = 600) -> str:
        key = (subject.lower(), width, height)
        cached = self._urls.get(key)
        if cached is not None:
            return cached

        url = await self._lookup(subject, width, height)
        self._urls[key] = url
        return url

    def placeholder(self, width: int, height: int) -> str:
        return sized_url(self._image_config.default_image, width, height)

    def clear(self) -> None:
        self._urls.clear()

    def stats(self) -> MemoStats:
        return MemoStats(size=len(self._urls), keys=[f"{name}:{w}x{h}" for name, w, h in self._urls])

    async def _lookup(self, subject: str, width: int, height: int) -> str:
        if self._provider is None or not self._provider.available:
            return self.placeholder(width, height)

        query = f"{subject} {self._image_config.query_suffix}".strip()
        try:
            raw_url = await self._provider.search(query, "landscape")
        except ProviderError as exc:
            logger.warning("Image lookup failed for %r: %s", subject, exc)
            return self.placeholder(width, height)

        if not raw_url:
            logger.debug("No image found for %r", subject)
            return self.placeholder(width, height)
        return sized_url(raw_url, width, height)
