"""Edamam Recipe Search API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class RecipeProviderClient(Protocol):
    """Interface for the external recipe provider."""

    async def search_recipes(
        self, query: str, meal_type: str | None = None, limit: int = 20
    ) -> dict[str, object]:
        """Search recipes and return raw API data."""


@dataclass
class HttpxRecipeProviderClient(RecipeProviderClient):
    """HTTPX-backed Edamam recipe client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient
    cuisine_type: str = "Korean"
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls, app_id: str, app_key: str, base_url: str, timeout_seconds: float = 10
    ) -> "HttpxRecipeProviderClient":
        """Create a recipe client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_recipes(
        self, query: str, meal_type: str | None = None, limit: int = 20
    ) -> dict[str, object]:
        """Search public recipes for the configured cuisine."""
        params: dict[str, str | int] = {
            "type": "public",
            "q": query,
            "app_id": self.app_id,
            "app_key": self.app_key,
            "cuisineType": self.cuisine_type,
        }
        if meal_type:
            params["mealType"] = meal_type.capitalize()
        response = await self.http_client.get(
            self.base_url,
            params=params,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        payload = response.json()
        hits = payload.get("hits", [])
        return {**payload, "hits": hits[:limit]}

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
