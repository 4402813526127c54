"""Health profile domain models."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from uuid import UUID

DIET_MODE = "diet_mode"
PREMIUM_DIET_FLAG = "diet"


class Sex(str, Enum):
    """Biological sex category used by the energy formulas."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @classmethod
    def parse(cls, value: object) -> "Sex":
        """Parse a stored value, mapping unknown values to OTHER."""
        if isinstance(value, Sex):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.OTHER

    @property
    def is_male(self) -> bool:
        """Return True for the male-coded row of every table."""
        return self is Sex.MALE


class ActivityLevel(str, Enum):
    """Physical activity level.

    - SEDENTARY: little or no exercise
    - LIGHT: light exercise 1-3 days/week
    - MODERATE: moderate exercise 3-5 days/week
    - ACTIVE: hard exercise 6-7 days/week
    - VERY_ACTIVE: very hard exercise or a physical job
    """

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @classmethod
    def parse(cls, value: object) -> "ActivityLevel":
        """Parse a stored value, defaulting to SEDENTARY."""
        if isinstance(value, ActivityLevel):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.SEDENTARY

    def coefficient(self) -> float:
        """Return the TDEE multiplier applied to BMR."""
        return _ACTIVITY_COEFFICIENTS[self]


_ACTIVITY_COEFFICIENTS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


@dataclass(frozen=True)
class ConditionEntry:
    """A diagnosed condition with an optional free-text label."""

    code: str
    label: str | None = None


@dataclass(frozen=True)
class HealthProfile:
    """Biometric and medical inputs for one person."""

    age: int | None
    sex: Sex = Sex.OTHER
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    conditions: tuple[ConditionEntry, ...] = ()
    allergies: tuple[str, ...] = ()
    dietary_preferences: tuple[str, ...] = ()
    premium_features: tuple[str, ...] = ()
    daily_calorie_goal: int | None = None
    id: UUID | None = None

    @property
    def condition_codes(self) -> list[str]:
        """Return condition codes in profile order."""
        return [condition.code for condition in self.conditions]

    def has_condition(self, *codes: str) -> bool:
        """Return True if any of the given condition codes is present."""
        wanted = set(codes)
        return any(condition.code in wanted for condition in self.conditions)

    @property
    def diet_mode_selected(self) -> bool:
        """Return True when the premium diet mode is unlocked and switched on.

        Malformed feature flags (anything but a collection of strings) count as empty.
        """
        flags = self.premium_features
        if not isinstance(flags, (list, tuple, set, frozenset)):
            return False
        return PREMIUM_DIET_FLAG in flags


@dataclass(frozen=True)
class FamilyMember:
    """A household member record owned by the account holder."""

    id: UUID
    name: str
    birth_date: date | None
    sex: Sex = Sex.OTHER
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    conditions: tuple[str, ...] = ()
    allergies: tuple[str, ...] = ()
    dietary_preferences: tuple[str, ...] = ()

    def age_on(self, today: date) -> int | None:
        """Return the member's age in whole years on the given day."""
        if self.birth_date is None:
            return None
        years = today.year - self.birth_date.year
        if (today.month, today.day) < (self.birth_date.month, self.birth_date.day):
            years -= 1
        return max(years, 0)

    def to_health_profile(self, today: date) -> HealthProfile:
        """Adapt the member into the profile shape the engine reads."""
        return HealthProfile(
            id=self.id,
            age=self.age_on(today),
            sex=self.sex,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            conditions=tuple(ConditionEntry(code=code) for code in self.conditions),
            allergies=self.allergies,
            dietary_preferences=self.dietary_preferences,
        )
