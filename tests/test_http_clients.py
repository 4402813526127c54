"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from diet_engine.adapters.recipe_provider_client import HttpxRecipeProviderClient
from tests.conftest import provider_hit


def test_recipe_provider_search_sends_query_params() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(dict(request.url.params))
        return httpx.Response(
            200, json={"hits": [provider_hit("Japchae", 300), provider_hit("Bulgogi", 400)]}
        )

    transport = httpx.MockTransport(handler)
    client = HttpxRecipeProviderClient(
        app_id="id",
        app_key="key",
        base_url="https://api.edamam.com/api/recipes/v2",
        http_client=httpx.AsyncClient(transport=transport),
    )

    payload = asyncio.run(client.search_recipes("side dish", meal_type="lunch", limit=1))

    assert seen["q"] == "side dish"
    assert seen["type"] == "public"
    assert seen["mealType"] == "Lunch"
    assert seen["cuisineType"] == "Korean"
    assert seen["app_id"] == "id"
    assert len(payload["hits"]) == 1


def test_recipe_provider_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "unauthorized"})

    transport = httpx.MockTransport(handler)
    client = HttpxRecipeProviderClient(
        app_id="id",
        app_key="bad",
        base_url="https://api.edamam.com/api/recipes/v2",
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.search_recipes("soup"))


def test_recipe_provider_create_and_close() -> None:
    client = HttpxRecipeProviderClient.create(
        app_id="id", app_key="key", base_url="https://api.edamam.com/api/recipes/v2"
    )

    asyncio.run(client.close())

    assert client.http_client.is_closed
