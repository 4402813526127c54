"""Recipe catalog search with provider lookup and static fallback."""

import asyncio
import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from diet_engine.adapters.recipe_provider_client import RecipeProviderClient
from diet_engine.data.fallback_recipes import FALLBACK_RECIPES
from diet_engine.domain.recipes import (
    ALL_SLOTS,
    CourseCategory,
    DishRecord,
    Ingredient,
    MealSlot,
    NutritionFacts,
    SearchCriteria,
)
from diet_engine.services.cache import Cache

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_PROVIDER_QUERIES = {
    CourseCategory.STAPLE: "rice",
    CourseCategory.SIDE: "side dish",
    CourseCategory.SOUP_OR_STEW: "soup",
}

_ALLERGEN_KEYWORDS = {
    "egg": ("egg",),
    "milk": ("milk", "cheese", "butter", "cream"),
    "soy": ("soy", "tofu"),
    "wheat": ("wheat", "flour", "noodle"),
    "peanut": ("peanut",),
    "tree_nut": ("almond", "walnut", "pine nut"),
    "fish": ("anchov", "pollock", "mackerel", "fish"),
    "shellfish": ("shrimp", "crab", "clam", "oyster", "mussel"),
    "sesame": ("sesame",),
    "pork": ("pork",),
    "beef": ("beef",),
}

# Per-dish nutrient ceilings by condition. Missing nutrient values pass.
_DISH_LIMITS: dict[str, dict[str, float]] = {
    "diabetes": {"carbs_g": 50},
    "hypertension": {"sodium_mg": 700},
    "kidney_disease": {
        "potassium_mg": 200,
        "phosphorus_mg": 200,
        "protein_g": 30,
        "sodium_mg": 700,
    },
    "cardiovascular_disease": {"sodium_mg": 400, "fat_g": 20},
    "heart_disease": {"sodium_mg": 400, "fat_g": 20},
}
_RICE_CARB_LIMIT_G = 100

_logger = logging.getLogger(__name__)


@dataclass
class RecipeCatalogService:
    """Catalog search over the recipe provider with a static fallback."""

    provider: RecipeProviderClient | None
    cache: Cache
    rng: random.Random = field(default_factory=random.Random)
    fallback_recipes: list[DishRecord] = field(default_factory=lambda: list(FALLBACK_RECIPES))
    cache_ttl_seconds: int = 3600
    timeout_seconds: float = 5.0
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    provider_page_size: int = 20

    async def search(self, criteria: SearchCriteria) -> list[DishRecord]:
        """Return shuffled catalog matches for the criteria.

        Provider results are used when they yield at least one match; any
        provider failure or empty result falls back to the static catalog.
        """
        provider_records = await self._provider_records(criteria)
        matches = filter_records(provider_records, criteria)
        if not matches:
            matches = filter_records(self.fallback_recipes, criteria)
        return _shuffle_and_truncate(matches, criteria.limit, self.rng)

    async def _provider_records(self, criteria: SearchCriteria) -> list[DishRecord]:
        if self.provider is None:
            return []
        categories = criteria.course_categories or frozenset(_PROVIDER_QUERIES)
        records: list[DishRecord] = []
        for category in sorted(categories, key=lambda item: item.value):
            if category not in _PROVIDER_QUERIES:
                continue
            try:
                records.extend(await self._fetch_category(category, criteria.meal_slot))
            except Exception as exc:
                _logger.warning(
                    "Recipe provider unavailable, using static catalog: category=%s error=%s",
                    category.value,
                    exc,
                )
                return []
        return records

    async def _fetch_category(
        self, category: CourseCategory, meal_slot: MealSlot | None
    ) -> list[DishRecord]:
        slot_key = meal_slot.value if meal_slot else "any"
        cache_key = f"recipes:{category.value}:{slot_key}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        provider = self.provider
        payload = await self._call_with_retry(
            lambda: provider.search_recipes(
                _PROVIDER_QUERIES[category],
                meal_type=meal_slot.value if meal_slot else None,
                limit=self.provider_page_size,
            ),
            action=f"search:{category.value}:{slot_key}",
        )
        records = parse_provider_hits(payload, category)
        self.cache.set(cache_key, records, ttl_seconds=self.cache_ttl_seconds)
        _logger.info(
            "Recipe provider search: category=%s slot=%s results=%s",
            category.value,
            slot_key,
            len(records),
        )
        return records

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call the provider with a timeout and a short retry."""
        attempt = 0
        while True:
            try:
                return await asyncio.wait_for(func(), timeout=self.timeout_seconds)
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Recipe provider %s failed (attempt %s/%s, status=%s): %r",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def search_static_catalog(
    criteria: SearchCriteria,
    rng: random.Random | None = None,
    recipes: list[DishRecord] | None = None,
) -> list[DishRecord]:
    """Search the static catalog without touching the provider."""
    matches = filter_records(FALLBACK_RECIPES if recipes is None else recipes, criteria)
    return _shuffle_and_truncate(matches, criteria.limit, rng or random.Random())


def filter_records(records: Iterable[DishRecord], criteria: SearchCriteria) -> list[DishRecord]:
    """Apply category, meal slot and exclusion filters."""
    matches = []
    for record in records:
        if criteria.course_categories and not (
            record.categories & criteria.course_categories
        ):
            continue
        if criteria.meal_slot is not None and criteria.meal_slot not in record.meal_slots:
            continue
        if record.title in criteria.exclude_titles:
            continue
        matches.append(record)
    return matches


def contains_allergen(record: DishRecord, allergies: Iterable[str]) -> bool:
    """Return True when any ingredient matches one of the allergy codes."""
    names = [ingredient.name.lower() for ingredient in record.ingredients]
    for allergy in allergies:
        code = allergy.lower()
        keywords = _ALLERGEN_KEYWORDS.get(code, (code.replace("_", " "),))
        if any(keyword in name for keyword in keywords for name in names):
            return True
    return False


def exceeds_condition_limits(record: DishRecord, conditions: Iterable[str]) -> bool:
    """Return True when a nutrient is above a per-dish limit of any condition.

    Rice dishes get a looser carbohydrate limit since rice is the meal's staple.
    """
    is_rice = "rice" in record.title.lower()
    for code in conditions:
        for nutrient, limit in _DISH_LIMITS.get(code, {}).items():
            value = getattr(record.nutrition, nutrient)
            if value is None:
                continue
            if nutrient == "carbs_g" and is_rice:
                limit = max(limit * 2, _RICE_CARB_LIMIT_G)
            if value > limit:
                return True
    return False


def parse_provider_hits(payload: dict[str, object], category: CourseCategory) -> list[DishRecord]:
    """Convert raw provider hits into per-serving dish records."""
    records = []
    for hit in payload.get("hits", []):
        recipe = hit.get("recipe") or {}
        title = recipe.get("label")
        if not title:
            continue
        servings = float(recipe.get("yield") or 1) or 1.0
        nutrients = recipe.get("totalNutrients") or {}
        calories = _nutrient(nutrients, "ENERC_KCAL", servings)
        if calories is None:
            calories = float(recipe.get("calories") or 0) / servings
        records.append(
            DishRecord(
                title=title,
                ingredients=tuple(
                    Ingredient(
                        name=item.get("food") or item.get("text", ""),
                        amount=_format_amount(item.get("quantity")),
                        unit=item.get("measure") or "",
                    )
                    for item in recipe.get("ingredients", [])
                ),
                preparation=recipe.get("url") or "",
                nutrition=NutritionFacts(
                    calories=calories,
                    protein_g=_nutrient(nutrients, "PROCNT", servings) or 0.0,
                    carbs_g=_nutrient(nutrients, "CHOCDF", servings) or 0.0,
                    fat_g=_nutrient(nutrients, "FAT", servings) or 0.0,
                    sodium_mg=_nutrient(nutrients, "NA", servings),
                    fiber_g=_nutrient(nutrients, "FIBTG", servings),
                    potassium_mg=_nutrient(nutrients, "K", servings),
                    phosphorus_mg=_nutrient(nutrients, "P", servings),
                ),
                categories=frozenset({category}),
                meal_slots=_parse_meal_slots(recipe.get("mealType")),
                source="provider",
            )
        )
    return records


def _nutrient(nutrients: dict[str, object], key: str, servings: float) -> float | None:
    entry = nutrients.get(key)
    if not isinstance(entry, dict) or entry.get("quantity") is None:
        return None
    return float(entry["quantity"]) / servings


def _format_amount(quantity: object) -> str:
    if quantity is None:
        return ""
    value = float(quantity)
    return str(int(value)) if value.is_integer() else f"{value:g}"


def _parse_meal_slots(meal_types: object) -> frozenset[MealSlot]:
    if not isinstance(meal_types, list):
        return ALL_SLOTS
    slots = set()
    for meal_type in meal_types:
        for part in str(meal_type).lower().split("/"):
            try:
                slots.add(MealSlot(part.strip()))
            except ValueError:
                continue
    return frozenset(slots) or ALL_SLOTS


def _shuffle_and_truncate(
    records: list[DishRecord], limit: int | None, rng: random.Random
) -> list[DishRecord]:
    shuffled = list(records)
    rng.shuffle(shuffled)
    if limit is not None:
        return shuffled[:limit]
    return shuffled


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
