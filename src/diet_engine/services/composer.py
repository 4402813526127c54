"""Daily meal plan composition."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from diet_engine.data.fallback_recipes import BANANA_TITLE, STRAWBERRY_TITLE
from diet_engine.domain.energy import MicronutrientCeilings
from diet_engine.domain.errors import PlanGenerationError
from diet_engine.domain.plans import DailyMealPlan, MealComposition
from diet_engine.domain.profile import DIET_MODE, HealthProfile
from diet_engine.domain.recipes import (
    CourseCategory,
    DishRecord,
    MealSlot,
    NutritionFacts,
    SearchCriteria,
)
from diet_engine.services.catalog import (
    RecipeCatalogService,
    contains_allergen,
    exceeds_condition_limits,
)
from diet_engine.services.eligibility import check_conflicts, is_diet_mode_blocked
from diet_engine.services.energy import ADULT_AGE, CalorieContext, compute_daily_calories

ADULT_SPLIT = {
    MealSlot.BREAKFAST: 0.30,
    MealSlot.LUNCH: 0.35,
    MealSlot.DINNER: 0.30,
    CourseCategory.SNACK: 0.05,
}
MINOR_SPLIT = {
    MealSlot.BREAKFAST: 0.25,
    MealSlot.LUNCH: 0.35,
    MealSlot.DINNER: 0.30,
    CourseCategory.SNACK: 0.10,
}
STAPLE_SHARE = 0.35
SIDES_SHARE = 0.45
SOUP_SHARE = 0.20
MIN_MEAL_COMPONENTS = 3

_logger = logging.getLogger(__name__)


@dataclass
class GenerationWindow:
    """Dish titles already served per course category.

    Share one window across several ``compose_plan`` calls to avoid repeats
    over a week. A category whose catalog is exhausted starts over.
    """

    used: dict[CourseCategory, set[str]] = field(default_factory=dict)

    def excluded(self, category: CourseCategory) -> frozenset[str]:
        """Return the titles to exclude for a category."""
        return frozenset(self.used.get(category, ()))

    def record(self, category: CourseCategory, title: str) -> None:
        """Mark a title as served."""
        self.used.setdefault(category, set()).add(title)

    def reset(self, category: CourseCategory) -> None:
        """Forget every served title of a category."""
        self.used.pop(category, None)

    def snapshot(self) -> dict[CourseCategory, frozenset[str]]:
        """Return an immutable copy of the window state."""
        return {category: frozenset(titles) for category, titles in self.used.items()}

    def restore(self, snapshot: dict[CourseCategory, frozenset[str]]) -> None:
        """Replace the window state with a snapshot."""
        self.used = {category: set(titles) for category, titles in snapshot.items()}


@dataclass(frozen=True)
class ComposeOptions:
    """Options for one plan generation."""

    meal_slots: tuple[MealSlot, ...] = (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER)
    side_count: int = 3
    include_snack: bool = True
    window: GenerationWindow | None = None
    max_attempts: int = 3
    subject: str = "self"
    pregnancy_trimester: int | None = None


@dataclass
class MealComposer:
    """Compose a day's meals from eligibility, budget and catalog."""

    catalog: RecipeCatalogService
    shortlist_size: int = 10

    async def compose_plan(
        self, profile: HealthProfile, day: date, options: ComposeOptions | None = None
    ) -> DailyMealPlan:
        """Compose and validate a daily plan, regenerating on invalid meals.

        Raises PlanGenerationError when no valid plan is produced within
        ``options.max_attempts``.
        """
        options = options or ComposeOptions()
        eligibility = check_conflicts(
            profile, pregnant=options.pregnancy_trimester is not None
        )
        budget = compute_daily_calories(
            profile,
            CalorieContext(
                subject=options.subject,
                pregnancy_trimester=options.pregnancy_trimester,
                diet_mode_allowed=not is_diet_mode_blocked(eligibility, DIET_MODE),
            ),
        )
        split = meal_split(profile)
        window = options.window if options.window is not None else GenerationWindow()

        problems: list[str] = []
        for attempt in range(1, options.max_attempts + 1):
            snapshot = window.snapshot()
            meals: dict[MealSlot, MealComposition] = {}
            for slot in options.meal_slots:
                meals[slot] = await self._compose_meal(
                    slot,
                    budget.final_calories * split[slot],
                    meal_mineral_allowance(budget.micronutrients, split[slot]),
                    profile,
                    window,
                    options.side_count,
                )
            snack = (
                await self._pick_snack(
                    profile, day, budget.final_calories * split[CourseCategory.SNACK]
                )
                if options.include_snack
                else None
            )

            problems = validate_meals(meals.values(), options.side_count)
            if not problems:
                extras = [snack] if snack else []
                totals = sum_nutrition(
                    [meal.totals for meal in meals.values()]
                    + [dish.nutrition for dish in extras]
                )
                _logger.info(
                    "Meal plan composed: day=%s attempt=%s target=%s total=%.0f",
                    day.isoformat(),
                    attempt,
                    budget.final_calories,
                    totals.calories,
                )
                return DailyMealPlan(
                    day=day,
                    breakfast=meals.get(MealSlot.BREAKFAST),
                    lunch=meals.get(MealSlot.LUNCH),
                    dinner=meals.get(MealSlot.DINNER),
                    snack=snack,
                    budget=budget,
                    eligibility=eligibility,
                    totals=totals,
                )

            _logger.warning(
                "Invalid meal plan, regenerating: day=%s attempt=%s/%s problems=%s",
                day.isoformat(),
                attempt,
                options.max_attempts,
                problems,
            )
            window.restore(snapshot)

        raise PlanGenerationError(day, options.max_attempts, problems)

    async def _compose_meal(
        self,
        slot: MealSlot,
        target_calories: float,
        allowance: dict[str, float],
        profile: HealthProfile,
        window: GenerationWindow,
        side_count: int,
    ) -> MealComposition:
        plate: set[str] = set()
        staple = await self._pick(
            CourseCategory.STAPLE,
            slot,
            target_calories * STAPLE_SHARE,
            allowance,
            profile,
            window,
            plate,
        )
        sides = []
        side_target = target_calories * SIDES_SHARE / max(side_count, 1)
        for _ in range(side_count):
            side = await self._pick(
                CourseCategory.SIDE, slot, side_target, allowance, profile, window, plate
            )
            if side is not None:
                sides.append(side)
        soup = await self._pick(
            CourseCategory.SOUP_OR_STEW,
            slot,
            target_calories * SOUP_SHARE,
            allowance,
            profile,
            window,
            plate,
        )
        dishes = [dish for dish in (staple, *sides, soup) if dish is not None]
        return MealComposition(
            slot=slot,
            target_calories=target_calories,
            staple=staple,
            sides=tuple(sides),
            soup_or_stew=soup,
            totals=sum_nutrition(dish.nutrition for dish in dishes),
        )

    async def _pick(
        self,
        category: CourseCategory,
        slot: MealSlot,
        target_calories: float,
        allowance: dict[str, float],
        profile: HealthProfile,
        window: GenerationWindow,
        plate: set[str],
    ) -> DishRecord | None:
        """Pick the shortlisted dish closest to its calorie share.

        Dishes that keep the meal within its mineral allowance are preferred;
        when none does, the lowest-sodium candidate is taken.
        """
        excluded = window.excluded(category)
        on_plate = frozenset(plate)
        candidates = await self._shortlist(category, slot, excluded | on_plate, profile)
        if not candidates and excluded:
            candidates = await self._shortlist(category, slot, on_plate, profile)
            if candidates:
                _roll_over(window, category)
        if not candidates:
            candidates = await self._lowest_sodium(category, slot, excluded | on_plate, profile)
        if not candidates and excluded:
            candidates = await self._lowest_sodium(category, slot, on_plate, profile)
            if candidates:
                _roll_over(window, category)
        if not candidates:
            return None

        within = [record for record in candidates if _fits_allowance(record, allowance)]
        if within:
            dish = min(within, key=lambda record: abs(record.nutrition.calories - target_calories))
        else:
            dish = min(candidates, key=lambda record: _mineral(record, "sodium_mg"))
        _consume_allowance(allowance, dish)
        window.record(category, dish.title)
        plate.add(dish.title)
        return dish

    async def _shortlist(
        self,
        category: CourseCategory,
        slot: MealSlot,
        exclude_titles: frozenset[str],
        profile: HealthProfile,
    ) -> list[DishRecord]:
        conditions = profile.condition_codes
        allowed = await self._allergen_free(category, slot, exclude_titles, profile.allergies)
        suitable = [
            record for record in allowed if not exceeds_condition_limits(record, conditions)
        ]
        return suitable[: self.shortlist_size]

    async def _lowest_sodium(
        self,
        category: CourseCategory,
        slot: MealSlot,
        exclude_titles: frozenset[str],
        profile: HealthProfile,
    ) -> list[DishRecord]:
        """Return the single lowest-sodium allergen-free dish, ignoring condition limits."""
        allowed = await self._allergen_free(category, slot, exclude_titles, profile.allergies)
        if not allowed:
            return []
        _logger.warning(
            "No dish within condition limits, using lowest sodium: category=%s slot=%s",
            category.value,
            slot.value,
        )
        return [min(allowed, key=lambda record: _mineral(record, "sodium_mg"))]

    async def _allergen_free(
        self,
        category: CourseCategory,
        slot: MealSlot,
        exclude_titles: frozenset[str],
        allergies: tuple[str, ...],
    ) -> list[DishRecord]:
        matches = await self.catalog.search(
            SearchCriteria(
                course_categories=frozenset({category}),
                meal_slot=slot,
                exclude_titles=exclude_titles,
            )
        )
        return [record for record in matches if not contains_allergen(record, allergies)]

    async def _pick_snack(
        self, profile: HealthProfile, day: date, target_calories: float
    ) -> DishRecord | None:
        """Pick the in-season fruit closest to the snack share that suits the person."""
        conditions = set(profile.condition_codes)
        fruits = await self.catalog.search(
            SearchCriteria(course_categories=frozenset({CourseCategory.SNACK}))
        )
        eligible = [
            fruit
            for fruit in fruits
            if day.month in fruit.season_months
            and not fruit.avoid_for_conditions & conditions
            and not contains_allergen(fruit, profile.allergies)
        ]
        if eligible:
            return min(
                eligible, key=lambda fruit: abs(fruit.nutrition.calories - target_calories)
            )

        by_title = {
            record.title: record
            for record in self.catalog.fallback_recipes
            if CourseCategory.SNACK in record.categories
        }
        banana = by_title.get(BANANA_TITLE)
        if banana is not None and not (banana.avoid_for_conditions & conditions):
            return banana
        return by_title.get(STRAWBERRY_TITLE, banana)


def meal_split(profile: HealthProfile) -> dict[MealSlot | CourseCategory, float]:
    """Return the breakfast, lunch, dinner and snack calorie shares."""
    if profile.age is not None and profile.age < ADULT_AGE:
        return MINOR_SPLIT
    return ADULT_SPLIT


def validate_meals(meals: Iterable[MealComposition | None], side_count: int = 3) -> list[str]:
    """Return structural problems of composed meals; empty means valid."""
    problems = []
    required = max(MIN_MEAL_COMPONENTS, 2 + side_count)
    for meal in meals:
        if meal is None:
            continue
        components = len(meal.composition_summary)
        if components < required:
            problems.append(
                f"{meal.slot.value}: {components} components, expected at least {required}"
            )
        if meal.totals.calories <= 0:
            problems.append(f"{meal.slot.value}: non-positive calories")
    return problems


def sum_nutrition(items: Iterable[NutritionFacts]) -> NutritionFacts:
    """Add nutrition vectors; optional fields stay None when no item has them."""
    items = list(items)
    return NutritionFacts(
        calories=sum(item.calories for item in items),
        protein_g=sum(item.protein_g for item in items),
        carbs_g=sum(item.carbs_g for item in items),
        fat_g=sum(item.fat_g for item in items),
        sodium_mg=_sum_optional(item.sodium_mg for item in items),
        fiber_g=_sum_optional(item.fiber_g for item in items),
        potassium_mg=_sum_optional(item.potassium_mg for item in items),
        phosphorus_mg=_sum_optional(item.phosphorus_mg for item in items),
    )


def meal_mineral_allowance(
    ceilings: MicronutrientCeilings, share: float
) -> dict[str, float]:
    """Return one meal's share of each daily mineral ceiling that is set."""
    limits = {
        "sodium_mg": ceilings.sodium_mg,
        "potassium_mg": ceilings.potassium_mg,
        "phosphorus_mg": ceilings.phosphorus_mg,
    }
    return {name: limit * share for name, limit in limits.items() if limit is not None}


def _roll_over(window: GenerationWindow, category: CourseCategory) -> None:
    _logger.info("Generation window exhausted, rolling over: category=%s", category.value)
    window.reset(category)


def _mineral(record: DishRecord, name: str) -> float:
    return getattr(record.nutrition, name) or 0.0


def _fits_allowance(record: DishRecord, allowance: dict[str, float]) -> bool:
    return all(_mineral(record, name) <= left for name, left in allowance.items())


def _consume_allowance(allowance: dict[str, float], record: DishRecord) -> None:
    for name in allowance:
        allowance[name] -= _mineral(record, name)


def _sum_optional(values: Iterable[float | None]) -> float | None:
    known = [value for value in values if value is not None]
    return sum(known) if known else None
