"""Energy budget domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CalorieAdjustment:
    """A named step applied on top of the base energy value."""

    kind: str
    magnitude: float
    reason: str


@dataclass(frozen=True)
class MacroRange:
    """Daily range for one macronutrient in grams and kcal."""

    min_g: int
    max_g: int
    min_kcal: int
    max_kcal: int


@dataclass(frozen=True)
class MacroTargets:
    """Carbohydrate, protein and fat ranges for a day."""

    carbs: MacroRange
    protein: MacroRange
    fat: MacroRange


@dataclass(frozen=True)
class MicronutrientCeilings:
    """Condition-driven daily mineral ceilings in mg."""

    sodium_mg: int | None = None
    potassium_mg: int | None = None
    phosphorus_mg: int | None = None


@dataclass(frozen=True)
class CalorieBudget:
    """Derived daily energy target with its macro and mineral limits."""

    formula: str
    base_value: float | None
    adjustments: list[CalorieAdjustment]
    final_calories: int
    macros: MacroTargets
    micronutrients: MicronutrientCeilings
