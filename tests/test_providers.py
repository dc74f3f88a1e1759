"""Tests for the HTTP provider clients with requests patched out."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import pytest
import requests

from recipe_explorer.config.schemas import ApiConfig, ImageConfig
from recipe_explorer.core.errors import (
    ProviderError,
    ProviderResponseError,
    ProviderTimeoutError,
    ProviderUnavailableError,
)
from recipe_explorer.core.image_search import UnsplashClient
from recipe_explorer.core.llm import ChatCompletionClient, strip_code_fences
from recipe_explorer.core.prompts import RECIPE_DETAIL_SCHEMA, SUMMARY_LIST_SCHEMA


class DummyResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, json_error: bool = False) -> None:
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        if self.json_error:
            raise ValueError("no json")
        return self.payload


def completion(content: str) -> DummyResponse:
    return DummyResponse({"choices": [{"message": {"content": content}}]})


def _client() -> ChatCompletionClient:
    return ChatCompletionClient(ApiConfig(api_key="secret", model="test-model", timeout_seconds=5))


class CallLog(list):
    pass


@pytest.fixture
def llm_calls(monkeypatch) -> CallLog:
    log = CallLog()
    log.responses = []

    def fake_post(url, json=None, headers=None, timeout=None):  # noqa: A002 - mirrors requests
        log.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        response = log.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr("recipe_explorer.core.llm.requests.post", fake_post)
    return log


def test_complete_returns_stripped_content(llm_calls) -> None:
    llm_calls.responses.append(completion("  Hola  \n"))

    assert asyncio.run(_client().complete("Translate hello")) == "Hola"
    call = llm_calls[0]
    assert call["headers"]["Authorization"] == "Bearer secret"
    assert call["json"]["model"] == "test-model"
    assert call["json"]["messages"] == [{"role": "user", "content": "Translate hello"}]
    assert call["timeout"] == 5


def test_generate_object_schema(llm_calls) -> None:
    llm_calls.responses.append(completion('```json\n{"name": "Pad Thai"}\n```'))

    data = asyncio.run(_client().generate("Generate", RECIPE_DETAIL_SCHEMA))

    assert data == {"name": "Pad Thai"}
    response_format = llm_calls[0]["json"]["response_format"]
    assert response_format["json_schema"]["schema"] is RECIPE_DETAIL_SCHEMA


def test_generate_array_schema_is_wrapped(llm_calls) -> None:
    llm_calls.responses.append(completion(json.dumps({"result": [{"name": "Tacos"}]})))

    data = asyncio.run(_client().generate("Generate", SUMMARY_LIST_SCHEMA))

    assert data == [{"name": "Tacos"}]
    schema = llm_calls[0]["json"]["response_format"]["json_schema"]["schema"]
    assert schema["properties"]["result"] is SUMMARY_LIST_SCHEMA


def test_generate_rejects_missing_wrapper(llm_calls) -> None:
    llm_calls.responses.append(completion("[]"))

    with pytest.raises(ProviderResponseError):
        asyncio.run(_client().generate("Generate", SUMMARY_LIST_SCHEMA))


def test_generate_rejects_unparsable_json(llm_calls) -> None:
    llm_calls.responses.append(completion("Sure! Here is your recipe"))

    with pytest.raises(ProviderResponseError):
        asyncio.run(_client().generate("Generate", RECIPE_DETAIL_SCHEMA))


@pytest.mark.parametrize(
    ("response", "error"),
    [
        (requests.Timeout("slow"), ProviderTimeoutError),
        (requests.ConnectionError("down"), ProviderError),
        (DummyResponse(status_code=429), ProviderError),
        (DummyResponse(json_error=True), ProviderResponseError),
        (DummyResponse({"choices": []}), ProviderResponseError),
        (completion("   "), ProviderResponseError),
    ],
)
def test_transport_failures_become_provider_errors(llm_calls, response, error) -> None:
    llm_calls.responses.append(response)

    with pytest.raises(error):
        asyncio.run(_client().complete("Translate hello"))


def test_missing_api_key_is_unavailable(llm_calls) -> None:
    client = ChatCompletionClient(ApiConfig())

    assert client.available is False
    with pytest.raises(ProviderUnavailableError):
        asyncio.run(client.complete("Translate hello"))
    assert list(llm_calls) == []


def test_strip_code_fences() -> None:
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('{"a": 1}') == '{"a": 1}'


def test_timeout_error_carries_seconds() -> None:
    error = ProviderTimeoutError("llm", 30)

    assert "30" in str(error)
    assert error.provider == "llm"
    assert isinstance(error, ProviderError)


def test_unsplash_search_returns_raw_url(monkeypatch) -> None:
    captured = {}

    def fake_get(url, params=None, headers=None, timeout=None):
        captured.update(url=url, params=params, headers=headers)
        return DummyResponse({"results": [{"urls": {"raw": "https://images.example/raw?ixid=1"}}]})

    monkeypatch.setattr("recipe_explorer.core.image_search.requests.get", fake_get)
    client = UnsplashClient(ImageConfig(access_key="abc"))

    url = asyncio.run(client.search("Pad Thai food dish"))

    assert url == "https://images.example/raw?ixid=1"
    assert captured["params"] == {"query": "Pad Thai food dish", "per_page": 1, "orientation": "landscape"}
    assert captured["headers"] == {"Authorization": "Client-ID abc"}


def test_unsplash_search_without_results(monkeypatch) -> None:
    monkeypatch.setattr(
        "recipe_explorer.core.image_search.requests.get",
        lambda *args, **kwargs: DummyResponse({"results": []}),
    )

    assert asyncio.run(UnsplashClient(ImageConfig(access_key="abc")).search("Nothing")) is None


def test_unsplash_http_error(monkeypatch) -> None:
    monkeypatch.setattr(
        "recipe_explorer.core.image_search.requests.get",
        lambda *args, **kwargs: DummyResponse(status_code=500),
    )

    with pytest.raises(ProviderError):
        asyncio.run(UnsplashClient(ImageConfig(access_key="abc")).search("Pad Thai"))


def test_unsplash_without_key_is_unavailable() -> None:
    client = UnsplashClient(ImageConfig())

    assert client.available is False
    with pytest.raises(ProviderUnavailableError):
        asyncio.run(client.search("Pad Thai"))


def test_completion_duration_is_logged(llm_calls, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="recipe_explorer.core.llm")
    llm_calls.responses.append(requests.ConnectionError("down"))

    with pytest.raises(ProviderError):
        asyncio.run(_client().complete("Translate hello"))

    assert "Model test-model call took" in caplog.text


def test_photo_search_duration_is_logged(monkeypatch, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="recipe_explorer.core.image_search")
    monkeypatch.setattr(
        "recipe_explorer.core.image_search.requests.get",
        lambda *args, **kwargs: DummyResponse({"results": []}),
    )

    asyncio.run(UnsplashClient(ImageConfig(access_key="abc")).search("Baklava"))

    assert "Photo search for 'Baklava' took" in caplog.text
