"""Household-wide eligibility checks and plan fan-out."""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from diet_engine.domain.conflicts import EligibilityResult, MemberEligibility
from diet_engine.domain.errors import ProfileNotFoundError
from diet_engine.domain.plans import DailyMealPlan
from diet_engine.domain.profile import FamilyMember, HealthProfile
from diet_engine.services.composer import ComposeOptions, MealComposer
from diet_engine.services.eligibility import check_all_conflicts

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Read-only access to health profiles and family members."""

    def get_health_profile(self, user_id: str) -> HealthProfile | None:
        """Return the account owner's health profile, if present."""

    def list_family_members(self, user_id: str) -> list[FamilyMember]:
        """Return the family members owned by the account."""


@dataclass(frozen=True)
class MemberPlan:
    """A composed plan labelled with the household member it belongs to."""

    who: str
    member_id: UUID | None
    name: str | None
    eligibility: EligibilityResult
    plan: DailyMealPlan


@dataclass
class HouseholdPlanner:
    """Plans a day for the account owner and every family member."""

    profiles: ProfileRepository
    composer: MealComposer
    max_attempts: int = 3

    def check_household(
        self, user_id: str, today: date | None = None
    ) -> list[MemberEligibility]:
        """Return eligibility for the owner and each member, owner first."""
        owner, members = self._load(user_id)
        return check_all_conflicts(owner, members, today)

    async def plan_day(self, user_id: str, day: date) -> list[MemberPlan]:
        """Compose one plan per household member concurrently."""
        owner, members = self._load(user_id)
        labelled = check_all_conflicts(owner, members, day)

        jobs = [
            self.composer.compose_plan(
                owner, day, ComposeOptions(max_attempts=self.max_attempts)
            )
        ]
        for member in members:
            jobs.append(
                self.composer.compose_plan(
                    member.to_health_profile(day),
                    day,
                    ComposeOptions(max_attempts=self.max_attempts, subject="family"),
                )
            )
        plans = await asyncio.gather(*jobs)
        _logger.info(
            "Household plans composed: user_id=%s day=%s people=%s",
            user_id,
            day.isoformat(),
            len(plans),
        )
        return [
            MemberPlan(
                who=entry.who,
                member_id=entry.member_id,
                name=entry.name,
                eligibility=entry.result,
                plan=plan,
            )
            for entry, plan in zip(labelled, plans, strict=True)
        ]

    def _load(self, user_id: str) -> tuple[HealthProfile, list[FamilyMember]]:
        owner = self.profiles.get_health_profile(user_id)
        if owner is None:
            raise ProfileNotFoundError(user_id)
        return owner, self.profiles.list_family_members(user_id)
