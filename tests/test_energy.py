"""Tests for the calorie and macro calculator."""

import itertools

import pytest

from diet_engine.domain.errors import MissingAgeError
from diet_engine.domain.profile import ActivityLevel, Sex
from diet_engine.services.energy import (
    CalorieContext,
    age_band_calories,
    compute_daily_calories,
    micronutrient_ceilings,
)
from diet_engine.services.formulas import Formula, ideal_body_weight
from tests.conftest import make_profile


def test_mifflin_st_jeor_with_activity_coefficient() -> None:
    budget = compute_daily_calories(make_profile())

    assert budget.formula == "mifflin_st_jeor"
    assert budget.base_value == pytest.approx(1270.25)
    assert budget.final_calories == 1524
    assert budget.adjustments == []


def test_mifflin_male_moderate_activity() -> None:
    profile = make_profile(
        age=30, sex=Sex.MALE, height_cm=175, weight_kg=70,
        activity_level=ActivityLevel.MODERATE,
    )

    assert compute_daily_calories(profile).final_calories == 2556


def test_harris_benedict_when_requested() -> None:
    profile = make_profile(age=30, sex=Sex.MALE, height_cm=175, weight_kg=70)

    budget = compute_daily_calories(
        profile, CalorieContext(bmr_formula=Formula.HARRIS_BENEDICT)
    )

    assert budget.formula == "harris_benedict"
    assert budget.final_calories == 2035


def test_manual_goal_returned_verbatim() -> None:
    profile = make_profile(
        daily_calorie_goal=1000, conditions=("hypertension",), premium_features=("diet",)
    )

    budget = compute_daily_calories(profile)

    assert budget.formula == "manual"
    assert budget.final_calories == 1000
    assert budget.adjustments == []
    assert budget.base_value is None


def test_missing_age_defaults_to_thirty_for_self() -> None:
    budget = compute_daily_calories(make_profile(age=None))

    assert budget.final_calories == 1584


def test_missing_age_raises_for_family_member() -> None:
    with pytest.raises(MissingAgeError):
        compute_daily_calories(make_profile(age=None), CalorieContext(subject="family"))


def test_table_path_when_biometrics_missing() -> None:
    budget = compute_daily_calories(make_profile(weight_kg=None))

    assert budget.formula == "age_table"
    assert budget.base_value == 1900
    assert budget.final_calories == 1900


def test_table_path_damped_activity() -> None:
    profile = make_profile(height_cm=None, activity_level=ActivityLevel.ACTIVE)

    assert compute_daily_calories(profile).final_calories == 2050


def test_table_path_applies_only_lowest_disease_multiplier() -> None:
    profile = make_profile(weight_kg=None, conditions=("hyperlipidemia", "diabetes", "gout"))

    budget = compute_daily_calories(profile)

    disease_steps = [step for step in budget.adjustments if step.kind == "disease"]
    assert len(disease_steps) == 1
    assert disease_steps[0].magnitude == 0.80
    assert budget.final_calories == 1520


def test_table_path_used_below_age_three_even_with_biometrics() -> None:
    profile = make_profile(age=2, sex=Sex.MALE, height_cm=88, weight_kg=12)

    budget = compute_daily_calories(profile)

    assert budget.formula == "age_table"
    assert budget.final_calories == 1000


@pytest.mark.parametrize(
    ("age", "sex", "expected"),
    [
        (1, Sex.MALE, 1000),
        (4, Sex.FEMALE, 1400),
        (7, Sex.MALE, 1700),
        (7, Sex.FEMALE, 1500),
        (13, Sex.MALE, 2500),
        (25, Sex.OTHER, 2100),
        (55, Sex.MALE, 2200),
        (70, Sex.MALE, 2000),
        (70, Sex.FEMALE, 1600),
    ],
)
def test_age_band_table(age: int, sex: Sex, expected: int) -> None:
    assert age_band_calories(age, sex) == expected


def test_eer_for_school_age_girl() -> None:
    profile = make_profile(
        age=10, height_cm=140, weight_kg=35, activity_level=ActivityLevel.LIGHT
    )

    budget = compute_daily_calories(profile)

    assert budget.formula == "eer"
    assert budget.final_calories == 1775


def test_eer_for_young_boy_includes_smaller_growth_energy() -> None:
    profile = make_profile(age=6, sex=Sex.MALE, height_cm=120, weight_kg=22)

    assert compute_daily_calories(profile).final_calories == 1408


def test_cardiovascular_deficit_floored_at_sex_minimum() -> None:
    profile = make_profile(
        age=50, sex=Sex.MALE, height_cm=175, weight_kg=90, conditions=("hypertension",)
    )

    budget = compute_daily_calories(profile)

    assert budget.final_calories == 1500
    assert [step.kind for step in budget.adjustments] == ["cardiovascular_deficit"]
    assert budget.adjustments[0].magnitude == pytest.approx(-598.5)


def test_cardiovascular_deficit_subtracts_fixed_amount() -> None:
    profile = make_profile(
        age=40,
        sex=Sex.MALE,
        height_cm=180,
        weight_kg=101,
        activity_level=ActivityLevel.MODERATE,
        conditions=("heart_disease",),
    )

    budget = compute_daily_calories(profile)

    assert budget.adjustments[0].magnitude == pytest.approx(-750)
    assert budget.final_calories == 2257


def test_no_cardiovascular_deficit_below_bmi_25() -> None:
    profile = make_profile(conditions=("hypertension",))

    budget = compute_daily_calories(profile)

    assert budget.adjustments == []
    assert budget.final_calories == 1524


def test_premium_diet_mode_multiplier() -> None:
    budget = compute_daily_calories(make_profile(premium_features=("diet",)))

    assert [step.kind for step in budget.adjustments] == ["diet_mode"]
    assert budget.final_calories == 1296


def test_diet_mode_suppressed_when_not_allowed() -> None:
    profile = make_profile(premium_features=("diet",))

    budget = compute_daily_calories(profile, CalorieContext(diet_mode_allowed=False))

    assert budget.final_calories == 1524


def test_malformed_premium_flags_treated_as_empty() -> None:
    profile = make_profile(premium_features="diet")  # type: ignore[arg-type]

    assert compute_daily_calories(profile).final_calories == 1524


def test_adult_floor_applied() -> None:
    profile = make_profile(age=80, height_cm=150, weight_kg=40)

    budget = compute_daily_calories(profile)

    assert budget.final_calories == 1200
    assert budget.adjustments[-1].kind == "adult_floor"


def test_floor_not_applied_to_minors() -> None:
    profile = make_profile(age=2, weight_kg=None, premium_features=("diet",))

    assert compute_daily_calories(profile).final_calories == 850


def test_pregnancy_uses_maternity_formula() -> None:
    profile = make_profile(age=30)

    budget = compute_daily_calories(profile, CalorieContext(pregnancy_trimester=2))

    assert budget.formula == "maternity"
    assert budget.base_value == pytest.approx(1584.3)
    assert budget.final_calories == 1924
    assert [step.kind for step in budget.adjustments] == ["trimester"]


def test_pregnancy_without_biometrics_uses_table_value() -> None:
    profile = make_profile(age=30, weight_kg=None)

    budget = compute_daily_calories(profile, CalorieContext(pregnancy_trimester=3))

    assert budget.final_calories == 2352


def test_pregnancy_takes_precedence_over_kidney_disease() -> None:
    profile = make_profile(age=30, conditions=("kidney_disease",))

    budget = compute_daily_calories(profile, CalorieContext(pregnancy_trimester=1))

    assert budget.formula == "maternity"


def test_unsupported_trimester_rejected() -> None:
    with pytest.raises(ValueError):
        compute_daily_calories(make_profile(), CalorieContext(pregnancy_trimester=4))


def test_ckd_formula_uses_ideal_body_weight() -> None:
    profile = make_profile(
        age=50, sex=Sex.MALE, height_cm=175, weight_kg=80, conditions=("kidney_disease",)
    )

    budget = compute_daily_calories(profile)

    assert budget.formula == "ckd"
    assert budget.final_calories == 2293
    assert budget.macros.protein.min_g == 42
    assert budget.macros.protein.max_g == 56
    assert budget.macros.protein.min_kcal == 168
    assert budget.micronutrients.sodium_mg == 1500
    assert budget.micronutrients.potassium_mg == 2000
    assert budget.micronutrients.phosphorus_mg == 800


def test_ckd_without_biometrics_falls_back_to_table() -> None:
    profile = make_profile(weight_kg=None, conditions=("kidney_disease",))

    budget = compute_daily_calories(profile)

    assert budget.formula == "age_table"
    assert budget.final_calories == 1710


def test_ideal_body_weight_by_sex() -> None:
    assert ideal_body_weight(Sex.MALE, 175) == pytest.approx(70.566)
    assert ideal_body_weight(Sex.FEMALE, 160) == pytest.approx(52.416)


def test_default_macro_bands() -> None:
    budget = compute_daily_calories(make_profile(daily_calorie_goal=2000))

    assert (budget.macros.carbs.min_kcal, budget.macros.carbs.max_kcal) == (900, 1100)
    assert (budget.macros.carbs.min_g, budget.macros.carbs.max_g) == (225, 275)
    assert (budget.macros.protein.min_g, budget.macros.protein.max_g) == (75, 100)
    assert (budget.macros.fat.min_g, budget.macros.fat.max_g) == (44, 67)


def test_condition_specific_macro_bands() -> None:
    diabetic = compute_daily_calories(
        make_profile(daily_calorie_goal=2000, conditions=("diabetes",))
    )
    cardiac = compute_daily_calories(
        make_profile(daily_calorie_goal=2000, conditions=("heart_disease",))
    )
    dieting = compute_daily_calories(
        make_profile(daily_calorie_goal=2000, premium_features=("diet",))
    )

    assert diabetic.macros.carbs.max_kcal == 1000
    assert cardiac.macros.fat.max_kcal == 500
    assert dieting.macros.protein.min_kcal == 500


def test_minor_macro_bands() -> None:
    budget = compute_daily_calories(make_profile(age=10, daily_calorie_goal=2000))

    assert budget.macros.carbs.min_kcal == 1000
    assert budget.macros.fat.min_kcal == 500


def test_sodium_ceiling_tightest_wins() -> None:
    assert micronutrient_ceilings(["hypertension"]).sodium_mg == 2000
    assert micronutrient_ceilings(["hypertension", "heart_disease"]).sodium_mg == 1500
    assert micronutrient_ceilings(["hypertension"]).potassium_mg is None
    assert micronutrient_ceilings(["gout"]).sodium_mg is None


_CONDITION_SETS = [(), ("diabetes", "obesity"), ("hypertension",), ("kidney_disease",)]


@pytest.mark.parametrize(
    ("sex", "weight_kg", "conditions", "premium"),
    list(
        itertools.product(
            [Sex.MALE, Sex.FEMALE, Sex.OTHER],
            [None, 38, 120],
            _CONDITION_SETS,
            [(), ("diet",)],
        )
    ),
)
def test_adult_floor_holds_for_computed_paths(
    sex: Sex, weight_kg: float | None, conditions: tuple[str, ...], premium: tuple[str, ...]
) -> None:
    profile = make_profile(
        age=85,
        sex=sex,
        height_cm=150,
        weight_kg=weight_kg,
        conditions=conditions,
        premium_features=premium,
    )

    budget = compute_daily_calories(profile)

    floor = 1500 if sex is Sex.MALE else 1200
    assert budget.final_calories >= floor
