"""Recipe catalog domain models."""

from dataclasses import dataclass
from enum import Enum


class CourseCategory(str, Enum):
    """Composition slot a dish can fill in a Korean-style meal."""

    STAPLE = "staple"
    SIDE = "side"
    SOUP_OR_STEW = "soup_or_stew"
    SNACK = "snack"


class MealSlot(str, Enum):
    """Main meal of the day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


ALL_SLOTS = frozenset(MealSlot)


@dataclass(frozen=True)
class Ingredient:
    """A recipe ingredient line."""

    name: str
    amount: str
    unit: str


@dataclass(frozen=True)
class NutritionFacts:
    """Nutrition vector for one serving."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    sodium_mg: float | None = None
    fiber_g: float | None = None
    potassium_mg: float | None = None
    phosphorus_mg: float | None = None


@dataclass(frozen=True)
class DishRecord:
    """Immutable catalog entry."""

    title: str
    ingredients: tuple[Ingredient, ...]
    preparation: str
    nutrition: NutritionFacts
    categories: frozenset[CourseCategory]
    meal_slots: frozenset[MealSlot] = ALL_SLOTS
    source: str = "fallback"
    season_months: frozenset[int] = frozenset()
    avoid_for_conditions: frozenset[str] = frozenset()


@dataclass(frozen=True)
class SearchCriteria:
    """Catalog query."""

    course_categories: frozenset[CourseCategory] | None = None
    meal_slot: MealSlot | None = None
    exclude_titles: frozenset[str] = frozenset()
    limit: int | None = None
