"""Nutrition plan and volume calculation domain models."""

from dataclasses import dataclass
from enum import Enum

SUCCESS_COLOR = "#4CAF50"
WARNING_COLOR = "#FFC107"
ERROR_COLOR = "#FF5252"
ORANGE_COLOR = "#FF9800"


@dataclass(frozen=True)
class BmiCategory:
    """BMI classification with its display color."""

    category: str
    color: str


@dataclass(frozen=True)
class NutritionDay:
    """Calorie and protein targets for one day of the ramp."""

    day: int
    calories: int
    protein: float
    protein_with_kidney_failure: float | None = None
    protein_with_dialysis: float | None = None


@dataclass(frozen=True)
class NutritionPlan:
    """Seven consecutive nutrition days."""

    days: tuple[NutritionDay, ...]

    def get_day(self, day: int) -> NutritionDay | None:
        """Return the entry for a day number, if present."""
        for entry in self.days:
            if entry.day == day:
                return entry
        return None


@dataclass(frozen=True)
class VolumeResult:
    """Infusion volume for one mixture on one day and what it delivers."""

    volume: int
    delivered_calories: int
    delivered_protein: float
    target_calories: int
    target_protein: float
    calorie_deviation: float
    protein_deviation: float


class Severity(Enum):
    """How far a delivered amount deviates from its target."""

    WITHIN_NORM = "within_norm"
    MODERATE = "moderate"
    SEVERE = "severe"

    @property
    def color(self) -> str:
        return _SEVERITY_COLORS[self]


_SEVERITY_COLORS = {
    Severity.WITHIN_NORM: SUCCESS_COLOR,
    Severity.MODERATE: WARNING_COLOR,
    Severity.SEVERE: ERROR_COLOR,
}
