"""LLM provider client using the OpenAI-compatible chat completions schema."""

from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from typing import Any, Dict

import requests

from ..config.schemas import ApiConfig
from .errors import ProviderError, ProviderResponseError, ProviderTimeoutError, ProviderUnavailableError

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"```(?:json)?\s*\n?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences the model may wrap JSON in."""
    return _FENCE.sub("", text).strip()


def parse_json_content(text: str, provider: str = "llm") -> Any:
    try:
        return json.loads(strip_code_fences(text))
    except ValueError as exc:
        raise ProviderResponseError(provider, f"unparsable JSON ({exc})") from exc


class ChatCompletionClient:
    """Call an external chat completions API for generation and translation.

    Requests are blocking and are moved off the event loop with ``asyncio.to_thread``.
    """

    provider = "llm"

    def __init__(self, api_config: ApiConfig) -> None:
        self._api_config = api_config

    @property
    def available(self) -> bool:
        return bool(self._api_config.api_key)

    async def complete(self, prompt: str) -> str:
        """Return the model's free-text answer to ``prompt``."""
        payload = self._payload(prompt)
        return await asyncio.to_thread(self._send, payload)

    async def generate(self, prompt: str, schema: Dict[str, Any]) -> Any:
        """Return structured data conforming to ``schema``.

        Chat completions only accept object roots for JSON schemas, so any other
        schema is wrapped in a ``result`` property and unwrapped again here.
        """
        wrapped = schema.get("type") != "object"
        root = {"type": "object", "properties": {"result": schema}, "required": ["result"]} if wrapped else schema

        payload = self._payload(prompt)
        payload["response_format"] = {
            "type": "json_schema",
            "json_schema": {"name": "recipe_output", "schema": root},
        }
        content = await asyncio.to_thread(self._send, payload)
        data = parse_json_content(content, self.provider)
        if wrapped:
            if not isinstance(data, dict) or "result" not in data:
                raise ProviderResponseError(self.provider, "missing result field")
            return data["result"]
        return data

    def _payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self._api_config.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0.2,
            "stream": False,
        }

    def _send(self, payload: Dict[str, Any]) -> str:
        if not self.available:
            raise ProviderUnavailableError(self.provider)

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_config.api_key}",
        }
        logger.debug("Requesting model %s at %s", self._api_config.model, self._api_config.endpoint)
        started = time.monotonic()
        try:
            response = requests.post(
                self._api_config.endpoint,
                json=payload,
                headers=headers,
                timeout=self._api_config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.Timeout as exc:
            raise ProviderTimeoutError(self.provider, self._api_config.timeout_seconds) from exc
        except requests.RequestException as exc:
            raise ProviderError(self.provider, str(exc)) from exc
        finally:
            logger.debug("Model %s call took %.0f ms", self._api_config.model, (time.monotonic() - started) * 1000)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ProviderResponseError(self.provider, "unexpected completion payload") from exc

        if not isinstance(content, str) or not content.strip():
            raise ProviderResponseError(self.provider, "empty content")
        return content.strip()
