"""Pydantic schemas for application configuration."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ApiConfig(BaseModel):
    """Credentials and endpoint configuration for the LLM provider."""

    endpoint: str = "https://api.openai.com/v1/chat/completions"
    api_key: Optional[str] = Field(default=None, repr=False)
    model: str = "gpt-4o-mini"
    timeout_seconds: float = Field(30.0, gt=0)


class ImageConfig(BaseModel):
    """Photo search provider settings."""

    endpoint: str = "https://api.unsplash.com/search/photos"
    access_key: Optional[str] = Field(default=None, repr=False)
    default_image: str = "https://images.unsplash.com/photo-1504674900247-0877df9cc836"
    query_suffix: str = "food dish"
    timeout_seconds: float = Field(10.0, gt=0)


class CacheConfig(BaseModel):
    """Bounds for the recipe content store and translation keys."""

    max_records: int = Field(100, ge=1)
    expiry_seconds: float = Field(30 * 60, gt=0)
    fingerprint_length: int = Field(32, ge=8, le=64)


class SearchConfig(BaseModel):
    """Parameters controlling search result resolution."""

    generated_count: int = Field(6, ge=1, le=20)
    min_match_length: int = Field(4, ge=1)
    max_exact_matches: int = Field(3, ge=1)


class AppConfig(BaseModel):
    """Root configuration model for the application."""

    default_language: str = "en"
    api: ApiConfig = ApiConfig()
    images: ImageConfig = ImageConfig()
    cache: CacheConfig = CacheConfig()
    search: SearchConfig = SearchConfig()
