"""Dependency container wiring for the engine."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_engine.adapters.recipe_provider_client import HttpxRecipeProviderClient
from diet_engine.adapters.supabase_profile_repository import SupabaseProfileRepository
from diet_engine.app_logging import configure_logging
from diet_engine.config import Settings
from diet_engine.services.cache import InMemoryCache
from diet_engine.services.catalog import RecipeCatalogService
from diet_engine.services.composer import MealComposer
from diet_engine.services.household import HouseholdPlanner


@dataclass
class AppContainer:
    """Holds engine-wide dependencies."""

    settings: Settings
    catalog_service: RecipeCatalogService
    meal_composer: MealComposer
    household_planner: HouseholdPlanner
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    configure_logging()
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)

    provider_client = None
    if resolved_settings.recipe_provider_enabled:
        provider_client = HttpxRecipeProviderClient.create(
            app_id=resolved_settings.recipe_provider_app_id,
            app_key=resolved_settings.recipe_provider_app_key,
            base_url=resolved_settings.recipe_provider_base_url,
            timeout_seconds=resolved_settings.recipe_provider_timeout_seconds,
        )
    catalog_service = RecipeCatalogService(
        provider=provider_client,
        cache=InMemoryCache(),
        rng=random.Random(),
        cache_ttl_seconds=resolved_settings.recipe_cache_ttl_seconds,
        timeout_seconds=resolved_settings.recipe_provider_timeout_seconds,
        retry_attempts=resolved_settings.recipe_provider_retry_attempts,
    )
    meal_composer = MealComposer(catalog=catalog_service)
    household_planner = HouseholdPlanner(
        profiles=profile_repository,
        composer=meal_composer,
        max_attempts=resolved_settings.plan_max_attempts,
    )

    async def close_resources() -> None:
        if provider_client is not None:
            await provider_client.close()

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        meal_composer=meal_composer,
        household_planner=household_planner,
        close_resources=close_resources,
    )
