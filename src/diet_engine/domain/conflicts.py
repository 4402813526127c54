"""Diet-mode conflict domain models."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

AGE_RESTRICTION = "age_restriction"
PREGNANCY = "pregnancy"


class Severity(str, Enum):
    """Enforcement tier of a conflict.

    - ABSOLUTE: hard block, the mode cannot be selected
    - WARNING: requires explicit acknowledgement before proceeding
    - CAUTION: informational only
    """

    ABSOLUTE = "absolute"
    WARNING = "warning"
    CAUTION = "caution"


@dataclass(frozen=True)
class ConflictRule:
    """Rule data for one condition and diet-mode pair."""

    severity: Severity
    reason: str
    source: str
    alternative: str | None = None


@dataclass(frozen=True)
class DietConflict:
    """A matched rule for a person's condition and a selected diet mode."""

    condition_code: str
    diet_mode: str
    severity: Severity
    reason: str
    source: str
    alternative: str | None = None


@dataclass(frozen=True)
class EligibilityResult:
    """Conflicts for one person, routed by severity."""

    conflicts: list[DietConflict] = field(default_factory=list)
    blocked_modes: frozenset[str] = frozenset()
    warnings: list[DietConflict] = field(default_factory=list)
    cautions: list[DietConflict] = field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        """Return True when at least one rule matched."""
        return bool(self.conflicts)


@dataclass(frozen=True)
class MemberEligibility:
    """Eligibility result labelled with the household member it belongs to."""

    who: str
    member_id: UUID | None
    name: str | None
    result: EligibilityResult
