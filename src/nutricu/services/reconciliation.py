"""Volume reconciliation between a day's targets and a mixture's density."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from nutricu.domain.mixtures import Mixture
from nutricu.domain.nutrition import NutritionDay, Severity, VolumeResult
from nutricu.services.numbers import round1, round_int
from nutricu.services.planning import target_protein

VOLUME_STEP_ML = 10
WITHIN_NORM_PERCENT = 7.0
MODERATE_PERCENT = 15.0

_logger = logging.getLogger(__name__)


def required_volume(day: NutritionDay, mixture: Mixture) -> int:
    """Volume in mL that covers the day's calories, never negative."""
    return max(0, round_int(day.calories / mixture.calories_per_ml))


def reconcile_volume(
    day: NutritionDay,
    mixture: Mixture,
    override: int | None = None,
    step_delta: int = 0,
    *,
    has_kidney_failure: bool = False,
) -> VolumeResult:
    """Compute the volume in effect and what it delivers against the targets.

    ``override`` supersedes the computed volume when present (0 is a valid
    override). ``step_delta`` is added to whichever value is in effect and the
    result is floored at 0.
    """
    volume = override if override is not None else required_volume(day, mixture)
    volume = max(0, volume + step_delta)
    delivered_calories = round_int(volume * mixture.calories_per_ml)
    delivered_protein = round1(volume * mixture.protein_per_ml)
    protein_target = target_protein(day, has_kidney_failure)
    return VolumeResult(
        volume=volume,
        delivered_calories=delivered_calories,
        delivered_protein=delivered_protein,
        target_calories=day.calories,
        target_protein=protein_target,
        calorie_deviation=deviation_percent(delivered_calories, day.calories),
        protein_deviation=deviation_percent(delivered_protein, protein_target),
    )


def deviation_percent(delivered: float, target: float) -> float:
    """Signed percentage difference, negative when under target.

    A zero target yields ``inf`` (``nan`` if nothing is delivered either).
    """
    if target == 0:
        if delivered == 0:
            return math.nan
        return math.copysign(math.inf, delivered)
    return round1(delivered / target * 100 - 100)


def classify_deviation(deviation: float) -> Severity:
    """Classify a deviation by its absolute value, inclusive at boundaries.

    A non-finite deviation (zero target) is severe.
    """
    if not math.isfinite(deviation):
        return Severity.SEVERE
    magnitude = abs(deviation)
    if magnitude <= WITHIN_NORM_PERCENT:
        return Severity.WITHIN_NORM
    if magnitude <= MODERATE_PERCENT:
        return Severity.MODERATE
    return Severity.SEVERE


def resolve_mixtures(
    mixture_ids: Iterable[str], mixtures: Iterable[Mixture]
) -> list[Mixture]:
    """Return mixtures in requested order, skipping unknown and repeated ids."""
    by_id = {mixture.id: mixture for mixture in mixtures}
    resolved = []
    seen: set[str] = set()
    for mixture_id in mixture_ids:
        if mixture_id in seen:
            continue
        seen.add(mixture_id)
        mixture = by_id.get(mixture_id)
        if mixture is None:
            _logger.info("Skipping unknown mixture: id=%s", mixture_id)
            continue
        resolved.append(mixture)
    return resolved


@dataclass
class VolumeAdjustments:
    """Manual volume overrides keyed by day and mixture id.

    A missing entry means the computed volume is used; an entry of 0 mL is a
    real override.
    """

    overrides: dict[int, dict[str, int]] = field(default_factory=dict)

    @classmethod
    def from_mapping(
        cls, raw: Mapping[int, Mapping[str, int]] | None
    ) -> "VolumeAdjustments":
        """Build adjustments from a plain nested mapping."""
        adjustments = cls()
        for day, volumes in (raw or {}).items():
            for mixture_id, volume in volumes.items():
                adjustments.set(int(day), mixture_id, volume)
        return adjustments

    def get(self, day: int, mixture_id: str) -> int | None:
        """Return the override for a day and mixture, if any."""
        return self.overrides.get(day, {}).get(mixture_id)

    def has_override(self, day: int, mixture_id: str) -> bool:
        return self.get(day, mixture_id) is not None

    def set(self, day: int, mixture_id: str, volume: int) -> None:
        """Store an override, clamped at 0 mL."""
        self.overrides.setdefault(day, {})[mixture_id] = max(0, volume)

    def adjust(self, day: NutritionDay, mixture: Mixture, delta: int) -> int:
        """Apply a step to the volume in effect and store it as the override."""
        current = self.get(day.day, mixture.id)
        if current is None:
            current = required_volume(day, mixture)
        self.set(day.day, mixture.id, current + delta)
        return self.overrides[day.day][mixture.id]

    def clear(self, day: int | None = None) -> None:
        """Drop overrides for one day, or for all days."""
        if day is None:
            self.overrides.clear()
            return
        self.overrides.pop(day, None)

    def to_mapping(self) -> dict[int, dict[str, int]]:
        return {day: dict(volumes) for day, volumes in self.overrides.items()}


@dataclass
class ExportSelection:
    """At most one mixture per day chosen for the exported report."""

    selected_ids: dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[int, str | None] | None) -> "ExportSelection":
        """Build a selection, ignoring days mapped to an empty value."""
        return cls(
            selected_ids={
                int(day): mixture_id
                for day, mixture_id in (raw or {}).items()
                if mixture_id
            }
        )

    def selected(self, day: int) -> str | None:
        """Return the mixture id selected for a day, if any."""
        return self.selected_ids.get(day)

    def toggle(self, day: int, mixture_id: str) -> str | None:
        """Select a mixture for a day, or clear it when already selected."""
        if self.selected_ids.get(day) == mixture_id:
            self.selected_ids.pop(day)
            return None
        self.selected_ids[day] = mixture_id
        return mixture_id

    def to_mapping(self) -> dict[int, str]:
        return dict(self.selected_ids)
