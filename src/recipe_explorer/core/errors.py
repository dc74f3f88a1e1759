"""Exception types raised by provider clients."""

from __future__ import annotations


class RecipeExplorerError(Exception):
    pass


class ProviderError(RecipeExplorerError):
    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class ProviderUnavailableError(ProviderError):
    def __init__(self, provider: str) -> None:
        super().__init__(provider, "no credential configured")


class ProviderResponseError(ProviderError):
    def __init__(self, provider: str, reason: str) -> None:
        super().__init__(provider, f"invalid response: {reason}")
        self.reason = reason


class ProviderTimeoutError(ProviderError):
    def __init__(self, provider: str, timeout_seconds: float) -> None:
        super().__init__(provider, f"timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds
