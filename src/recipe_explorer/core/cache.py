"""Per-recipe content cache holding English content and its translations."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Generic, List, Optional, TypeVar

from .models import ENGLISH, normalize_key

logger = logging.getLogger(__name__)

ContentT = TypeVar("ContentT")


@dataclass
class RecipeRecord(Generic[ContentT]):
    canonical_key: str
    english: ContentT
    translations: Dict[str, ContentT] = field(default_factory=dict)
    written_at: float = 0.0


@dataclass
class CacheStats:
    size: int
    max_size: int
    expiry_seconds: float
    entries: List[str]

    @property
    def expiry_minutes(self) -> float:
        return self.expiry_seconds / 60


class RecipeContentStore(Generic[ContentT]):
    """Bounded, expiring map of canonical key -> English content plus translations.

    A record older than ``expiry_seconds`` is purged on the next lookup. When a new
    key arrives at capacity the least recently written record is evicted.
    """

    def __init__(self, max_records: int = 100, expiry_seconds: float = 30 * 60) -> None:
        self._max_records = max_records
        self._expiry = expiry_seconds
        self._records: Dict[str, RecipeRecord[ContentT]] = {}

    def get(self, name: str, language: str) -> Optional[ContentT]:
        record = self._live_record(normalize_key(name))
        if record is None:
            return None
        if language == ENGLISH:
            return record.english
        return record.translations.get(language)

    def put(
        self,
        name: str,
        english: ContentT,
        language: str = ENGLISH,
        translated: Optional[ContentT] = None,
    ) -> None:
        key = normalize_key(name)
        record = self._live_record(key)
        if record is None:
            if len(self._records) >= self._max_records:
                self._evict_oldest()
            record = RecipeRecord(canonical_key=key, english=english)
            self._records[key] = record

        if translated is not None and language != ENGLISH:
            record.translations[language] = translated

        record.written_at = time.monotonic()

    def clear(self) -> None:
        self._records.clear()

    def stats(self) -> CacheStats:
        for key in list(self._records):
            self._live_record(key)
        return CacheStats(
            size=len(self._records),
            max_size=self._max_records,
            expiry_seconds=self._expiry,
            entries=list(self._records),
        )

    def __len__(self) -> int:
        return len(self._records)

    def _live_record(self, key: str) -> Optional[RecipeRecord[ContentT]]:
        record = self._records.get(key)
        if record is None:
            return None
        if time.monotonic() - record.written_at >= self._expiry:
            logger.debug("Cache entry expired: %s", key)
            del self._records[key]
            return None
        return record

    def _evict_oldest(self) -> None:
        oldest = min(self._records.values(), key=lambda record: record.written_at)
        logger.debug("Evicting cache entry: %s", oldest.canonical_key)
        del self._records[oldest.canonical_key]
