"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

from diet_engine.adapters.supabase_profile_repository import SupabaseProfileRepository
from diet_engine.domain.profile import ActivityLevel, Sex


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: list[list[dict[str, object]]] = field(default_factory=list)
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    ordered_by: list[str] = field(default_factory=list)

    def queue(self, data: list[dict[str, object]]) -> None:
        self.response_queue.append(data)

    def select(self, *_args) -> "FakeTable":
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.ordered_by.append(column)
        return self

    def execute(self) -> FakeResponse:
        data = self.response_queue.pop(0) if self.response_queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_profile_repository_maps_profile_row() -> None:
    client = FakeSupabaseClient()
    profiles_table = client.table("user_health_profiles")
    profile_id = str(uuid4())
    profiles_table.queue(
        [
            {
                "id": profile_id,
                "user_id": "user-1",
                "age": 42,
                "gender": "male",
                "height_cm": "172.5",
                "weight_kg": 80,
                "activity_level": "moderate",
                "diseases": [{"code": "gout", "custom_name": None}, "diabetes"],
                "allergies": [{"code": "egg", "custom_name": None}],
                "dietary_preferences": ["fitness"],
                "premium_features": ["diet", 3],
                "daily_calorie_goal": 0,
            }
        ]
    )

    repository = SupabaseProfileRepository(client)
    profile = repository.get_health_profile("user-1")

    assert profile is not None
    assert str(profile.id) == profile_id
    assert profile.sex is Sex.MALE
    assert profile.height_cm == 172.5
    assert profile.activity_level is ActivityLevel.MODERATE
    assert profile.condition_codes == ["gout", "diabetes"]
    assert profile.allergies == ("egg",)
    assert profile.premium_features == ("diet",)
    assert profile.daily_calorie_goal is None
    assert profiles_table.last_filters == [("user_id", "user-1")]


def test_supabase_profile_repository_missing_profile() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    assert repository.get_health_profile("nobody") is None


def test_supabase_profile_repository_lists_family_members() -> None:
    client = FakeSupabaseClient()
    members_table = client.table("family_members")
    member_id = str(uuid4())
    members_table.queue(
        [
            {
                "id": member_id,
                "name": "Minji",
                "birth_date": "2015-06-01",
                "gender": "unknown",
                "height_cm": None,
                "weight_kg": None,
                "activity_level": None,
                "diseases": ["kidney_disease"],
                "allergies": None,
                "dietary_preferences": ["low_carb"],
            }
        ]
    )

    repository = SupabaseProfileRepository(client)
    members = repository.list_family_members("user-1")

    assert len(members) == 1
    member = members[0]
    assert str(member.id) == member_id
    assert member.birth_date == date(2015, 6, 1)
    assert member.sex is Sex.OTHER
    assert member.activity_level is ActivityLevel.SEDENTARY
    assert member.conditions == ("kidney_disease",)
    assert member.allergies == ()
    assert members_table.ordered_by == ["created_at"]
