"""Supabase-backed health profile repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from diet_engine.domain.profile import (
    ActivityLevel,
    ConditionEntry,
    FamilyMember,
    HealthProfile,
    Sex,
)
from diet_engine.services.household import ProfileRepository

_PROFILE_COLUMNS = (
    "id, user_id, age, gender, height_cm, weight_kg, activity_level, diseases, "
    "allergies, dietary_preferences, premium_features, daily_calorie_goal"
)
_MEMBER_COLUMNS = (
    "id, name, birth_date, gender, height_cm, weight_kg, activity_level, diseases, "
    "allergies, dietary_preferences"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for reading profiles and family members."""

    client: Client

    def get_health_profile(self, user_id: str) -> HealthProfile | None:
        """Return the health profile row for a user, if present."""
        response = (
            self.client.table("user_health_profiles")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return HealthProfile(
            id=UUID(row["id"]) if row.get("id") else None,
            age=row.get("age"),
            sex=Sex.parse(row.get("gender")),
            height_cm=_optional_float(row.get("height_cm")),
            weight_kg=_optional_float(row.get("weight_kg")),
            activity_level=ActivityLevel.parse(row.get("activity_level")),
            conditions=tuple(_condition(item) for item in row.get("diseases") or []),
            allergies=tuple(_code(item) for item in row.get("allergies") or []),
            dietary_preferences=tuple(row.get("dietary_preferences") or []),
            premium_features=_premium_features(row.get("premium_features")),
            daily_calorie_goal=row.get("daily_calorie_goal") or None,
        )

    def list_family_members(self, user_id: str) -> list[FamilyMember]:
        """Return family members for a user, oldest record first."""
        response = (
            self.client.table("family_members")
            .select(_MEMBER_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at")
            .execute()
        )
        return [
            FamilyMember(
                id=UUID(row["id"]),
                name=row.get("name") or "",
                birth_date=date.fromisoformat(row["birth_date"]) if row.get("birth_date") else None,
                sex=Sex.parse(row.get("gender")),
                height_cm=_optional_float(row.get("height_cm")),
                weight_kg=_optional_float(row.get("weight_kg")),
                activity_level=ActivityLevel.parse(row.get("activity_level")),
                conditions=tuple(_code(item) for item in row.get("diseases") or []),
                allergies=tuple(_code(item) for item in row.get("allergies") or []),
                dietary_preferences=tuple(row.get("dietary_preferences") or []),
            )
            for row in response.data or []
        ]


def _condition(item: object) -> ConditionEntry:
    if isinstance(item, dict):
        return ConditionEntry(code=str(item.get("code", "")), label=item.get("custom_name"))
    return ConditionEntry(code=str(item))


def _code(item: object) -> str:
    if isinstance(item, dict):
        return str(item.get("code", ""))
    return str(item)


def _premium_features(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(flag for flag in value if isinstance(flag, str))


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
