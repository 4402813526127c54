"""Daily meal plan domain models."""

from dataclasses import dataclass
from datetime import date

from diet_engine.domain.conflicts import EligibilityResult
from diet_engine.domain.energy import CalorieBudget
from diet_engine.domain.recipes import DishRecord, MealSlot, NutritionFacts


@dataclass(frozen=True)
class MealComposition:
    """Staple, sides and soup or stew for one meal slot."""

    slot: MealSlot
    target_calories: float
    staple: DishRecord | None
    sides: tuple[DishRecord, ...]
    soup_or_stew: DishRecord | None
    totals: NutritionFacts

    @property
    def dishes(self) -> list[DishRecord]:
        """Return the selected dishes in serving order."""
        selected = [self.staple, *self.sides, self.soup_or_stew]
        return [dish for dish in selected if dish is not None]

    @property
    def composition_summary(self) -> list[str]:
        """Return dish titles in serving order."""
        return [dish.title for dish in self.dishes]


@dataclass(frozen=True)
class DailyMealPlan:
    """One day's composed meals for one person."""

    day: date
    breakfast: MealComposition | None
    lunch: MealComposition | None
    dinner: MealComposition | None
    snack: DishRecord | None
    budget: CalorieBudget
    eligibility: EligibilityResult
    totals: NutritionFacts

    def meal(self, slot: MealSlot) -> MealComposition | None:
        """Return the composition for a slot."""
        return {
            MealSlot.BREAKFAST: self.breakfast,
            MealSlot.LUNCH: self.lunch,
            MealSlot.DINNER: self.dinner,
        }[slot]
