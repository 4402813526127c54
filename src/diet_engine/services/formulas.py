"""Energy formula variants used by the calorie calculator.

Each function returns a ``FormulaResult`` so the calculator can dispatch on a
closed set of variants and record which one produced the base value.
"""

from dataclasses import dataclass
from enum import Enum

from diet_engine.domain.profile import ActivityLevel, Sex

CKD_KCAL_PER_KG = 32.5
TRIMESTER_ADDITIONS = {1: 0, 2: 340, 3: 452}

_EER_PA_3_TO_8 = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.13,
    ActivityLevel.MODERATE: 1.26,
    ActivityLevel.ACTIVE: 1.42,
    ActivityLevel.VERY_ACTIVE: 1.42,
}
_EER_PA_9_TO_18_MALE = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.11,
    ActivityLevel.MODERATE: 1.25,
    ActivityLevel.ACTIVE: 1.48,
    ActivityLevel.VERY_ACTIVE: 1.48,
}
_EER_PA_9_TO_18_FEMALE = {
    ActivityLevel.SEDENTARY: 1.0,
    ActivityLevel.LIGHT: 1.16,
    ActivityLevel.MODERATE: 1.31,
    ActivityLevel.ACTIVE: 1.56,
    ActivityLevel.VERY_ACTIVE: 1.56,
}


class Formula(str, Enum):
    """Formula tag recorded on every calorie budget."""

    MANUAL = "manual"
    MIFFLIN_ST_JEOR = "mifflin_st_jeor"
    HARRIS_BENEDICT = "harris_benedict"
    EER = "eer"
    MATERNITY = "maternity"
    CKD = "ckd"
    AGE_TABLE = "age_table"


@dataclass(frozen=True)
class FormulaResult:
    """Output of one formula variant.

    ``base`` is the value the variant starts from (BMR, EER, pre-pregnancy
    TDEE) and ``calories`` is the variant's daily energy figure.
    """

    formula: Formula
    base: float
    calories: float


def mifflin_st_jeor_bmr(sex: Sex, weight_kg: float, height_cm: float, age: int) -> float:
    """Calculate BMR with the Mifflin-St Jeor equation.

    Formula:
        Men:   BMR = 10 x weight(kg) + 6.25 x height(cm) - 5 x age + 5
        Women: BMR = 10 x weight(kg) + 6.25 x height(cm) - 5 x age - 161

    The ``other`` category uses the female constant.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if sex.is_male:
        return base + 5
    return base - 161


def harris_benedict_bmr(sex: Sex, weight_kg: float, height_cm: float, age: int) -> float:
    """Calculate BMR with the revised Harris-Benedict equation."""
    if sex.is_male:
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.33 * age


def ideal_body_weight(sex: Sex, height_cm: float) -> float:
    """Return the standard body weight used by renal formulas.

    Men: 50 kg + 0.91 x (height - 152.4); women and other: 45.5 kg + the same term.
    """
    base = 50.0 if sex.is_male else 45.5
    return base + 0.91 * (height_cm - 152.4)


def adult_tdee(
    sex: Sex,
    weight_kg: float,
    height_cm: float,
    age: int,
    activity_level: ActivityLevel,
    formula: Formula = Formula.MIFFLIN_ST_JEOR,
) -> FormulaResult:
    """Return BMR x activity coefficient for the requested adult formula."""
    if formula is Formula.HARRIS_BENEDICT:
        bmr = harris_benedict_bmr(sex, weight_kg, height_cm, age)
    else:
        formula = Formula.MIFFLIN_ST_JEOR
        bmr = mifflin_st_jeor_bmr(sex, weight_kg, height_cm, age)
    return FormulaResult(
        formula=formula,
        base=bmr,
        calories=bmr * activity_level.coefficient(),
    )


def estimated_energy_requirement(
    sex: Sex,
    weight_kg: float,
    height_cm: float,
    age: int,
    activity_level: ActivityLevel,
) -> FormulaResult:
    """Calculate EER for children and adolescents (ages 3-18).

    Formula:
        Boys:  88.5 - 61.9 x age + PA x (26.7 x weight + 903 x height(m)) + growth
        Girls: 135.3 - 30.8 x age + PA x (10 x weight + 934 x height(m)) + growth

    Growth energy is 20 kcal up to age 8 and 25 kcal above. The physical
    activity (PA) factor already carries the activity level, so no TDEE
    multiplier is applied on top.
    """
    if age <= 8:
        pa = _EER_PA_3_TO_8[activity_level]
    elif sex.is_male:
        pa = _EER_PA_9_TO_18_MALE[activity_level]
    else:
        pa = _EER_PA_9_TO_18_FEMALE[activity_level]
    growth_energy = 20 if age <= 8 else 25
    height_m = height_cm / 100
    if sex.is_male:
        eer = 88.5 - 61.9 * age + pa * (26.7 * weight_kg + 903 * height_m)
    else:
        eer = 135.3 - 30.8 * age + pa * (10 * weight_kg + 934 * height_m)
    eer += growth_energy
    return FormulaResult(formula=Formula.EER, base=eer, calories=eer)


def maternity_calories(
    sex: Sex,
    weight_kg: float,
    height_cm: float,
    age: int,
    activity_level: ActivityLevel,
    trimester: int,
) -> FormulaResult:
    """Mifflin-St Jeor TDEE plus the trimester energy addition."""
    tdee = adult_tdee(sex, weight_kg, height_cm, age, activity_level)
    return FormulaResult(
        formula=Formula.MATERNITY,
        base=tdee.calories,
        calories=tdee.calories + TRIMESTER_ADDITIONS[trimester],
    )


def ckd_calories(sex: Sex, height_cm: float) -> FormulaResult:
    """Energy for chronic kidney disease: 32.5 kcal per kg ideal body weight."""
    ibw = ideal_body_weight(sex, height_cm)
    calories = ibw * CKD_KCAL_PER_KG
    return FormulaResult(formula=Formula.CKD, base=calories, calories=calories)


def auto_select(
    sex: Sex,
    weight_kg: float,
    height_cm: float,
    age: int,
    activity_level: ActivityLevel,
    preferred: Formula | None = None,
) -> FormulaResult:
    """Pick the generic formula for the age band.

    Ages 3-18 use EER; adults use Mifflin-St Jeor unless the caller prefers
    Harris-Benedict.
    """
    if 3 <= age <= 18:
        return estimated_energy_requirement(
            sex, weight_kg, height_cm, age, activity_level
        )
    return adult_tdee(
        sex,
        weight_kg,
        height_cm,
        age,
        activity_level,
        formula=preferred or Formula.MIFFLIN_ST_JEOR,
    )
