"""Domain exceptions for the diet planning engine."""

from datetime import date


class DietEngineError(Exception):
    """Base exception for engine errors."""


class MissingAgeError(DietEngineError):
    """Raised when a family member's energy is computed without an age."""


class ProfileNotFoundError(DietEngineError):
    """Raised when the profile provider has no profile for a user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Health profile not found: {user_id}")
        self.user_id = user_id


class PlanGenerationError(DietEngineError):
    """Raised when no structurally valid plan could be composed."""

    def __init__(self, day: date, attempts: int, problems: list[str]) -> None:
        detail = "; ".join(problems) if problems else "no details"
        super().__init__(
            f"Could not generate a valid plan for {day.isoformat()} "
            f"after {attempts} attempts: {detail}"
        )
        self.day = day
        self.attempts = attempts
        self.problems = problems
