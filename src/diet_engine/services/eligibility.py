"""Diet-mode eligibility resolver."""

import logging
from collections.abc import Iterable, Mapping
from datetime import date

from diet_engine.domain.conflict_rules import AGE_RULES, CONDITION_RULES, PREGNANCY_RULES
from diet_engine.domain.conflicts import (
    AGE_RESTRICTION,
    PREGNANCY,
    ConflictRule,
    DietConflict,
    EligibilityResult,
    MemberEligibility,
    Severity,
)
from diet_engine.domain.profile import DIET_MODE, FamilyMember, HealthProfile

SELF_LABEL = "self"
MINOR_AGE_LIMIT = 18

_logger = logging.getLogger(__name__)


def check_conflicts(profile: HealthProfile, pregnant: bool = False) -> EligibilityResult:
    """Evaluate every rule layer against the profile's selected diet modes.

    Matches from all layers are kept. Unknown condition or diet-mode codes
    produce no match. Profiles carry no pregnancy state, so the pregnancy
    layer runs only when the caller passes ``pregnant=True``.
    """
    modes = selected_modes(profile)
    conflicts: list[DietConflict] = []
    for code in profile.condition_codes:
        rules = CONDITION_RULES.get(code)
        if rules:
            conflicts.extend(_match(code, rules, modes))
    if profile.age is not None and profile.age < MINOR_AGE_LIMIT:
        conflicts.extend(_match(AGE_RESTRICTION, AGE_RULES, modes))
    if pregnant:
        conflicts.extend(_match(PREGNANCY, PREGNANCY_RULES, modes))

    result = _route(conflicts)
    if result.has_conflict:
        _logger.info(
            "Diet conflicts found: total=%s blocked=%s warnings=%s cautions=%s",
            len(result.conflicts),
            sorted(result.blocked_modes),
            len(result.warnings),
            len(result.cautions),
        )
    return result


def check_family_member_conflicts(
    member: FamilyMember, today: date | None = None
) -> EligibilityResult:
    """Check a household member, deriving age from the birth date."""
    return check_conflicts(member.to_health_profile(today or date.today()))


def check_all_conflicts(
    self_profile: HealthProfile,
    members: Iterable[FamilyMember],
    today: date | None = None,
) -> list[MemberEligibility]:
    """Check the account owner and each member, owner first."""
    today = today or date.today()
    results = [
        MemberEligibility(
            who=SELF_LABEL,
            member_id=self_profile.id,
            name=None,
            result=check_conflicts(self_profile),
        )
    ]
    for member in members:
        results.append(
            MemberEligibility(
                who=str(member.id),
                member_id=member.id,
                name=member.name,
                result=check_family_member_conflicts(member, today),
            )
        )
    return results


def is_diet_mode_blocked(result: EligibilityResult, mode: str) -> bool:
    """Return True when the mode has an absolute conflict."""
    return mode in result.blocked_modes


def has_diet_mode_warning(result: EligibilityResult, mode: str) -> bool:
    """Return True when the mode has a warning-severity conflict."""
    return any(conflict.diet_mode == mode for conflict in result.warnings)


def selected_modes(profile: HealthProfile) -> list[str]:
    """Return the diet-mode preferences plus the premium diet mode, deduplicated."""
    modes: list[str] = []
    candidates = list(profile.dietary_preferences)
    if profile.diet_mode_selected:
        candidates.append(DIET_MODE)
    for mode in candidates:
        if mode not in modes:
            modes.append(mode)
    return modes


def _match(
    condition_code: str, rules: Mapping[str, ConflictRule], modes: list[str]
) -> list[DietConflict]:
    matches = []
    for mode in modes:
        rule = rules.get(mode)
        if rule is None:
            continue
        matches.append(
            DietConflict(
                condition_code=condition_code,
                diet_mode=mode,
                severity=rule.severity,
                reason=rule.reason,
                source=rule.source,
                alternative=rule.alternative,
            )
        )
    return matches


def _route(conflicts: list[DietConflict]) -> EligibilityResult:
    return EligibilityResult(
        conflicts=conflicts,
        blocked_modes=frozenset(
            conflict.diet_mode
            for conflict in conflicts
            if conflict.severity is Severity.ABSOLUTE
        ),
        warnings=[c for c in conflicts if c.severity is Severity.WARNING],
        cautions=[c for c in conflicts if c.severity is Severity.CAUTION],
    )
