"""Caller-side holders of the currently displayed recipe and image."""

from __future__ import annotations

from typing import Optional

from .controller import RecipeController
from .fetch_guard import FetchGuard, FetchOutcome
from .models import LoadingState, RecipeDetail


class RecipeSubscription:
    """Loading state for one displayed recipe; only the latest load is committed."""

    def __init__(self, controller: RecipeController) -> None:
        self._controller = controller
        self._guard = FetchGuard("recipe")
        self.recipe: Optional[RecipeDetail] = None
        self.status = LoadingState.IDLE

    async def load(self, name: Optional[str], language: str) -> FetchOutcome[RecipeDetail]:
        if not name:
            self._guard.cancel()
            self.recipe = None
            self.status = LoadingState.IDLE
            return FetchOutcome()

        self.status = LoadingState.LOADING
        outcome = await self._guard.fetch(
            (name, language), lambda: self._controller.resolve_recipe(name, language)
        )
        if outcome.stale:
            return outcome

        self.recipe = outcome.value
        self.status = LoadingState.SUCCESS if outcome.value is not None else LoadingState.ERROR
        return outcome

    @property
    def is_loading(self) -> bool:
        return self.status is LoadingState.LOADING

    def close(self) -> None:
        self._guard.cancel()


class ImageSubscription:
    """Latest photo URL for one displayed subject."""

    def __init__(self, controller: RecipeController, width: int = 800, height: int = 600) -> None:
        self._controller = controller
        self._guard = FetchGuard("image")
        self._width = width
        self._height = height
        self.image_url = ""
        self.is_loading = False

    async def load(self, subject: Optional[str]) -> FetchOutcome[str]:
        if not subject:
            return FetchOutcome()

        self.is_loading = True
        outcome = await self._guard.fetch(
            (subject, self._width, self._height),
            lambda: self._controller.resolve_image(subject, self._width, self._height),
        )
        if not outcome.stale:
            self.image_url = outcome.value or ""
            self.is_loading = False
        return outcome

    def close(self) -> None:
        self._guard.cancel()
