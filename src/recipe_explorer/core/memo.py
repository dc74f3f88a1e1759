"""Content-keyed memo of free-text and structured translations."""

from __future__ import annotations

import copy
import hashlib
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import ProviderError
from .llm import parse_json_content
from .models import ENGLISH
from .prompts import (
    QUERY_TRANSLATION_PROMPT,
    STRUCTURED_TRANSLATION_PROMPT,
    TEXT_TRANSLATION_PROMPT,
    language_name,
)
from .providers import TranslationProvider

logger = logging.getLogger(__name__)

MemoKey = Tuple[str, str, str]

_SCRIPTS = (
    ("hi", re.compile(r"[\u0900-\u097F]")),
    ("ja", re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")),
    ("th", re.compile(r"[\u0E00-\u0E7F]")),
    ("es", re.compile(r"[áéíóúñü]", re.IGNORECASE)),
)


@dataclass
class MemoStats:
    size: int
    keys: List[str]


class ShapeMismatchError(ValueError):
    pass


def fingerprint(text: str, length: int = 32) -> str:
    """Bounded-length digest of ``text`` used as part of a memo key."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]


def detect_language(text: str) -> str:
    """Guess a language code from the script used; defaults to English."""
    for code, pattern in _SCRIPTS:
        if pattern.search(text):
            return code
    return ENGLISH


def conform(source: Any, candidate: Any, preserved_keys: Iterable[str] = ("id",)) -> Any:
    """Return ``candidate`` checked against the shape of ``source``.

    Only string leaves are taken from the candidate; identifiers in ``preserved_keys``
    and non-string leaves keep their source values.
    """
    preserved = frozenset(preserved_keys)
    if isinstance(source, dict):
        if not isinstance(candidate, dict) or set(candidate) != set(source):
            raise ShapeMismatchError("object keys differ")
        return {
            key: value if key in preserved else conform(value, candidate[key], preserved)
            for key, value in source.items()
        }
    if isinstance(source, list):
        if not isinstance(candidate, list) or len(candidate) != len(source):
            raise ShapeMismatchError("list lengths differ")
        return [conform(item, other, preserved) for item, other in zip(source, candidate)]
    if isinstance(source, str):
        if not isinstance(candidate, str):
            raise ShapeMismatchError("expected a string")
        return candidate
    return source


class TranslationMemo:
    """Memoize translations by (source language, target language, content fingerprint).

    English is the pivot language and is never a translation target. Provider failures
    return the input unchanged and are not memoized.
    """

    def __init__(
        self,
        provider: Optional[TranslationProvider],
        fingerprint_length: int = 32,
        preserved_keys: Iterable[str] = ("id",),
    ) -> None:
        self._provider = provider
        self._fingerprint_length = fingerprint_length
        self._preserved_keys = tuple(preserved_keys)
        self._entries: Dict[MemoKey, Any] = {}

    async def translate(self, text: str, target_language: str, source_language: str = "auto") -> str:
        if target_language in (source_language, ENGLISH) or not text.strip():
            return text
        prompt = TEXT_TRANSLATION_PROMPT.format(language=language_name(target_language), text=text)
        return await self._translate_text(text, source_language, target_language, prompt)

    async def translate_query(self, query: str, source_language: str = "auto") -> str:
        """Translate a search query into English for matching against the catalog."""
        if source_language == "auto":
            source_language = detect_language(query)
        if source_language == ENGLISH or not query.strip():
            return query
        prompt = QUERY_TRANSLATION_PROMPT.format(query=query)
        return await self._translate_text(query, source_language, ENGLISH, prompt)

    async def translate_structured(self, content: Any, target_language: str) -> Any:
        """Translate every text value of a JSON-like object in one provider call."""
        if target_language == ENGLISH or not content:
            return content

        serialized = json.dumps(content, sort_keys=True, ensure_ascii=False)
        key = self._key(ENGLISH, target_language, serialized)
        if key in self._entries:
            logger.debug("Structured translation memo hit (%s)", target_language)
            return copy.deepcopy(self._entries[key])
        if self._provider is None:
            return content

        prompt = STRUCTURED_TRANSLATION_PROMPT.format(
            language=language_name(target_language),
            payload=json.dumps(content, indent=2, ensure_ascii=False),
        )
        try:
            raw = await self._provider.complete(prompt)
            translated = conform(content, parse_json_content(raw), self._preserved_keys)
        except ProviderError as exc:
            logger.warning("Structured translation to %s failed: %s", target_language, exc)
            return content
        except ShapeMismatchError as exc:
            logger.warning("Structured translation to %s changed shape: %s", target_language, exc)
            return content

        self._entries[key] = translated
        return copy.deepcopy(translated)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> MemoStats:
        return MemoStats(size=len(self._entries), keys=["-".join(key) for key in self._entries])

    def _key(self, source_language: str, target_language: str, text: str) -> MemoKey:
        return (source_language, target_language, fingerprint(text, self._fingerprint_length))

    async def _translate_text(self, text: str, source_language: str, target_language: str, prompt: str) -> str:
        key = self._key(source_language, target_language, text)
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug("Translation memo hit (%s -> %s)", source_language, target_language)
            return cached
        if self._provider is None:
            return text

        try:
            translated = (await self._provider.complete(prompt)).strip()
        except ProviderError as exc:
            logger.warning("Translation %s -> %s failed: %s", source_language, target_language, exc)
            return text
        if not translated:
            return text

        self._entries[key] = translated
        return translated
