"""Daily energy, macro and mineral budget calculator."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from diet_engine.domain.energy import (
    CalorieAdjustment,
    CalorieBudget,
    MacroRange,
    MacroTargets,
    MicronutrientCeilings,
)
from diet_engine.domain.errors import MissingAgeError
from diet_engine.domain.profile import HealthProfile, Sex
from diet_engine.services.formulas import (
    TRIMESTER_ADDITIONS,
    Formula,
    FormulaResult,
    auto_select,
    ckd_calories,
    ideal_body_weight,
    maternity_calories,
)

DEFAULT_SELF_AGE = 30
ADULT_AGE = 19
MALE_FLOOR_KCAL = 1500
FEMALE_FLOOR_KCAL = 1200
CARDIOVASCULAR_DEFICIT_KCAL = 750
DIET_MODE_MULTIPLIER = 0.85

KIDNEY_DISEASE = "kidney_disease"
HEART_CONDITIONS = ("heart_disease", "cardiovascular_disease")
CARDIOVASCULAR_CONDITIONS = (*HEART_CONDITIONS, "hypertension")

_AGE_BANDS: list[tuple[int, int, int]] = [
    # (upper age, male kcal, female kcal)
    (2, 1000, 1000),
    (5, 1400, 1400),
    (8, 1700, 1500),
    (11, 2100, 1800),
    (14, 2500, 2000),
    (18, 2700, 2000),
    (29, 2600, 2100),
    (49, 2400, 1900),
    (64, 2200, 1800),
]
_AGE_BAND_65_PLUS = (2000, 1600)

_DISEASE_MULTIPLIERS = {
    "diabetes": 0.80,
    "hyperlipidemia": 0.85,
    "obesity": 0.80,
    "gout": 0.90,
    KIDNEY_DISEASE: 0.90,
    "heart_disease": 0.90,
    "cardiovascular_disease": 0.90,
}

_SODIUM_LIMITS_MG = {
    "hypertension": 2000,
    KIDNEY_DISEASE: 1500,
    "heart_disease": 1500,
    "cardiovascular_disease": 1500,
}
_KIDNEY_POTASSIUM_MG = 2000
_KIDNEY_PHOSPHORUS_MG = 800

_KCAL_PER_GRAM = {"carbs": 4, "protein": 4, "fat": 9}
_CKD_PROTEIN_G_PER_KG = (0.6, 0.8)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalorieContext:
    """Caller-supplied context for one calorie computation.

    ``subject`` is ``"self"`` for the account owner and ``"family"`` for a
    household member. ``diet_mode_allowed`` lets the composer suppress the
    premium diet mode when eligibility blocks it.
    """

    subject: str = "self"
    pregnancy_trimester: int | None = None
    diet_mode_allowed: bool = True
    bmr_formula: Formula | None = None


def compute_daily_calories(
    profile: HealthProfile, context: CalorieContext | None = None
) -> CalorieBudget:
    """Compute the daily calorie budget for a profile.

    Paths are evaluated in a fixed order and the first match wins: manual
    goal, pregnancy, chronic kidney disease, generic formula, age-band table.
    The adult floor is applied last on every computed path.
    """
    context = context or CalorieContext()
    age = _resolve_age(profile, context)
    conditions = set(profile.condition_codes)
    diet_mode = profile.diet_mode_selected and context.diet_mode_allowed

    if profile.daily_calorie_goal:
        final = int(profile.daily_calorie_goal)
        _logger.debug("Manual calorie goal used: calories=%s", final)
        return _build_budget(
            profile=profile,
            age=age,
            formula=Formula.MANUAL,
            base_value=None,
            adjustments=[],
            final_calories=final,
            diet_mode=diet_mode,
        )

    adjustments: list[CalorieAdjustment] = []
    has_biometrics = bool(profile.weight_kg and profile.height_cm)

    if context.pregnancy_trimester is not None:
        result = _pregnancy_calories(profile, age, context.pregnancy_trimester)
        adjustments.append(
            CalorieAdjustment(
                kind="trimester",
                magnitude=TRIMESTER_ADDITIONS[context.pregnancy_trimester],
                reason=f"Trimester {context.pregnancy_trimester} energy addition",
            )
        )
        formula, base_value, running = result.formula, result.base, result.calories
    elif KIDNEY_DISEASE in conditions and has_biometrics:
        result = ckd_calories(profile.sex, profile.height_cm)
        formula, base_value, running = result.formula, result.base, result.calories
    elif age >= 3 and has_biometrics:
        result = auto_select(
            profile.sex,
            profile.weight_kg,
            profile.height_cm,
            age,
            profile.activity_level,
            preferred=context.bmr_formula,
        )
        formula, base_value, running = result.formula, result.base, result.calories
        running = _apply_cardiovascular_deficit(profile, conditions, running, adjustments)
        running = _apply_diet_mode(diet_mode, running, adjustments)
    else:
        formula = Formula.AGE_TABLE
        base_value = float(age_band_calories(age, profile.sex))
        running = _apply_table_adjustments(profile, conditions, base_value, adjustments)
        running = _apply_diet_mode(diet_mode, running, adjustments)

    if age >= ADULT_AGE:
        floor = sex_floor(profile.sex)
        if running < floor:
            adjustments.append(
                CalorieAdjustment(
                    kind="adult_floor",
                    magnitude=floor - running,
                    reason=f"Raised to the adult minimum of {floor} kcal",
                )
            )
            running = floor

    final = round(running)
    _logger.debug(
        "Calorie budget computed: formula=%s base=%s final=%s adjustments=%s",
        formula.value,
        base_value,
        final,
        len(adjustments),
    )
    return _build_budget(
        profile=profile,
        age=age,
        formula=formula,
        base_value=base_value,
        adjustments=adjustments,
        final_calories=final,
        diet_mode=diet_mode,
    )


def sex_floor(sex: Sex) -> int:
    """Return the adult minimum daily calories for a sex category."""
    return MALE_FLOOR_KCAL if sex.is_male else FEMALE_FLOOR_KCAL


def age_band_calories(age: int, sex: Sex) -> int:
    """Look up the recommended calories for an age band.

    Ages below 3 use the 1-2 band; ``other`` uses the female row.
    """
    for upper, male_kcal, female_kcal in _AGE_BANDS:
        if age <= upper:
            return male_kcal if sex.is_male else female_kcal
    male_kcal, female_kcal = _AGE_BAND_65_PLUS
    return male_kcal if sex.is_male else female_kcal


def body_mass_index(weight_kg: float, height_cm: float) -> float:
    """Return BMI in kg/m^2."""
    height_m = height_cm / 100
    return weight_kg / (height_m * height_m)


def _resolve_age(profile: HealthProfile, context: CalorieContext) -> int:
    if profile.age is not None:
        return profile.age
    if context.subject == "self":
        return DEFAULT_SELF_AGE
    raise MissingAgeError("Age is required to compute calories for a family member")


def _pregnancy_calories(profile: HealthProfile, age: int, trimester: int) -> FormulaResult:
    if trimester not in TRIMESTER_ADDITIONS:
        raise ValueError(f"Unsupported pregnancy trimester: {trimester}")
    if profile.weight_kg and profile.height_cm:
        return maternity_calories(
            profile.sex,
            profile.weight_kg,
            profile.height_cm,
            age,
            profile.activity_level,
            trimester,
        )
    table_value = float(age_band_calories(age, profile.sex))
    return FormulaResult(
        formula=Formula.MATERNITY,
        base=table_value,
        calories=table_value + TRIMESTER_ADDITIONS[trimester],
    )


def _apply_cardiovascular_deficit(
    profile: HealthProfile,
    conditions: set[str],
    running: float,
    adjustments: list[CalorieAdjustment],
) -> float:
    if not conditions.intersection(CARDIOVASCULAR_CONDITIONS):
        return running
    bmi = body_mass_index(profile.weight_kg, profile.height_cm)
    if bmi < 25:
        return running
    adjusted = max(running - CARDIOVASCULAR_DEFICIT_KCAL, sex_floor(profile.sex))
    adjustments.append(
        CalorieAdjustment(
            kind="cardiovascular_deficit",
            magnitude=adjusted - running,
            reason=f"Weight-loss deficit for cardiovascular risk at BMI {bmi:.1f}",
        )
    )
    return adjusted


def _apply_table_adjustments(
    profile: HealthProfile,
    conditions: set[str],
    base_value: float,
    adjustments: list[CalorieAdjustment],
) -> float:
    coefficient = profile.activity_level.coefficient()
    activity_multiplier = 1 + (coefficient - 1.2) * 0.15
    running = base_value * activity_multiplier
    adjustments.append(
        CalorieAdjustment(
            kind="activity",
            magnitude=activity_multiplier,
            reason=f"Activity level {profile.activity_level.value}",
        )
    )

    matched = [
        (multiplier, code)
        for code, multiplier in _DISEASE_MULTIPLIERS.items()
        if code in conditions
    ]
    if matched:
        multiplier, code = min(matched)
        running *= multiplier
        adjustments.append(
            CalorieAdjustment(
                kind="disease",
                magnitude=multiplier,
                reason=f"Calorie restriction for {code}",
            )
        )
    return running


def _apply_diet_mode(
    diet_mode: bool, running: float, adjustments: list[CalorieAdjustment]
) -> float:
    if not diet_mode:
        return running
    adjustments.append(
        CalorieAdjustment(
            kind="diet_mode",
            magnitude=DIET_MODE_MULTIPLIER,
            reason="Premium diet mode calorie deficit",
        )
    )
    return running * DIET_MODE_MULTIPLIER


def _build_budget(
    *,
    profile: HealthProfile,
    age: int,
    formula: Formula,
    base_value: float | None,
    adjustments: list[CalorieAdjustment],
    final_calories: int,
    diet_mode: bool,
) -> CalorieBudget:
    return CalorieBudget(
        formula=formula.value,
        base_value=base_value,
        adjustments=adjustments,
        final_calories=final_calories,
        macros=macro_targets(profile, age, final_calories, diet_mode=diet_mode),
        micronutrients=micronutrient_ceilings(profile.condition_codes),
    )


def macro_targets(
    profile: HealthProfile, age: int, calories: int, *, diet_mode: bool = False
) -> MacroTargets:
    """Derive carbohydrate, protein and fat ranges from daily calories."""
    conditions = set(profile.condition_codes)
    bands = {"carbs": (45, 55), "protein": (15, 20), "fat": (20, 30)}
    if age < ADULT_AGE:
        bands["carbs"] = (50, 60)
        bands["fat"] = (25, 30)
    if "diabetes" in conditions:
        bands["carbs"] = (40, 50)
    if conditions.intersection(CARDIOVASCULAR_CONDITIONS):
        bands["fat"] = (20, 25)
    if diet_mode:
        bands["protein"] = (25, 35)

    ranges = {name: _percent_range(calories, name, *band) for name, band in bands.items()}
    if KIDNEY_DISEASE in conditions and profile.height_cm:
        ranges["protein"] = _ckd_protein_range(profile)
    return MacroTargets(
        carbs=ranges["carbs"],
        protein=ranges["protein"],
        fat=ranges["fat"],
    )


def micronutrient_ceilings(condition_codes: Iterable[str]) -> MicronutrientCeilings:
    """Return the tightest mineral ceilings implied by the conditions."""
    codes = set(condition_codes)
    sodium_limits = [limit for code, limit in _SODIUM_LIMITS_MG.items() if code in codes]
    kidney = KIDNEY_DISEASE in codes
    return MicronutrientCeilings(
        sodium_mg=min(sodium_limits) if sodium_limits else None,
        potassium_mg=_KIDNEY_POTASSIUM_MG if kidney else None,
        phosphorus_mg=_KIDNEY_PHOSPHORUS_MG if kidney else None,
    )


def _percent_range(calories: int, macro: str, low_pct: int, high_pct: int) -> MacroRange:
    kcal_per_gram = _KCAL_PER_GRAM[macro]
    min_kcal = round(calories * low_pct / 100)
    max_kcal = round(calories * high_pct / 100)
    return MacroRange(
        min_g=round(min_kcal / kcal_per_gram),
        max_g=round(max_kcal / kcal_per_gram),
        min_kcal=min_kcal,
        max_kcal=max_kcal,
    )


def _ckd_protein_range(profile: HealthProfile) -> MacroRange:
    ibw = ideal_body_weight(profile.sex, profile.height_cm)
    low, high = _CKD_PROTEIN_G_PER_KG
    min_g = round(ibw * low)
    max_g = round(ibw * high)
    return MacroRange(
        min_g=min_g,
        max_g=max_g,
        min_kcal=min_g * _KCAL_PER_GRAM["protein"],
        max_kcal=max_g * _KCAL_PER_GRAM["protein"],
    )
