"""Photo search client for the Unsplash API."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

import requests

from ..config.schemas import ImageConfig
from .errors import ProviderError, ProviderResponseError, ProviderTimeoutError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class UnsplashClient:
    """Return the raw URL of the best matching photo for a search phrase."""

    provider = "unsplash"

    def __init__(self, image_config: ImageConfig) -> None:
        self._image_config = image_config

    @property
    def available(self) -> bool:
        return bool(self._image_config.access_key)

    async def search(self, query: str, orientation: str = "landscape") -> Optional[str]:
        return await asyncio.to_thread(self._search, query, orientation)

    def _search(self, query: str, orientation: str) -> Optional[str]:
        if not self.available:
            raise ProviderUnavailableError(self.provider)

        params = {"query": query, "per_page": 1, "orientation": orientation}
        headers = {"Authorization": f"Client-ID {self._image_config.access_key}"}
        logger.debug("Searching photos for %r", query)
        started = time.monotonic()
        try:
            response = requests.get(
                self._image_config.endpoint,
                params=params,
                headers=headers,
                timeout=self._image_config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.Timeout as exc:
            raise ProviderTimeoutError(self.provider, self._image_config.timeout_seconds) from exc
        except requests.RequestException as exc:
            raise ProviderError(self.provider, str(exc)) from exc
        finally:
            logger.debug("Photo search for %r took %.0f ms", query, (time.monotonic() - started) * 1000)

        try:
            results = response.json().get("results") or []
            if not results:
                return None
            return results[0]["urls"]["raw"]
        except (ValueError, AttributeError, KeyError, IndexError, TypeError) as exc:
            raise ProviderResponseError(self.provider, "unexpected search payload") from exc
