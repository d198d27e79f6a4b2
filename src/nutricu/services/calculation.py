"""Interactive mixture calculation session for one patient."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from nutricu.domain.mixtures import Mixture
from nutricu.domain.nutrition import NutritionDay, NutritionPlan, VolumeResult
from nutricu.domain.patients import Patient
from nutricu.services.localization import Translator
from nutricu.services.planning import build_nutrition_plan
from nutricu.services.reconciliation import (
    ExportSelection,
    VolumeAdjustments,
    reconcile_volume,
    resolve_mixtures,
)
from nutricu.services.report import format_report


def has_diabetic_warning(patient: Patient, mixtures: Iterable[Mixture]) -> bool:
    """Return True when a diabetic patient gets a non-diabetic mixture."""
    if not patient.has_diabetes:
        return False
    return any(not mixture.is_diabetic for mixture in mixtures)


def has_semi_elemental_warning(mixtures: Iterable[Mixture]) -> bool:
    """Return True when any selected mixture is semi-elemental."""
    return any(mixture.is_semi_elemental for mixture in mixtures)


@dataclass(frozen=True)
class MixtureDayResult:
    """Reconciliation of one mixture on one day."""

    day: int
    mixture: Mixture
    result: VolumeResult
    selected_for_export: bool


@dataclass
class CalculationSession:
    """Ephemeral state behind the mixture calculation screen.

    Holds the plan, the mixtures being compared, manual volume overrides and
    the per-day export selection. Nothing here is persisted.
    """

    patient: Patient
    plan: NutritionPlan
    mixtures: list[Mixture]
    adjustments: VolumeAdjustments = field(default_factory=VolumeAdjustments)
    export_selection: ExportSelection = field(default_factory=ExportSelection)

    @classmethod
    def start(
        cls,
        patient: Patient,
        mixture_ids: Iterable[str],
        catalog: Iterable[Mixture],
    ) -> "CalculationSession":
        """Open a session for the requested mixtures, skipping unknown ids."""
        return cls(
            patient=patient,
            plan=build_nutrition_plan(patient),
            mixtures=resolve_mixtures(mixture_ids, catalog),
        )

    def result(self, day: int, mixture_id: str) -> VolumeResult | None:
        """Return the reconciliation for a day and mixture, if both exist."""
        nutrition_day = self.plan.get_day(day)
        mixture = self._mixture(mixture_id)
        if nutrition_day is None or mixture is None:
            return None
        return self._reconcile(nutrition_day, mixture)

    def results(self) -> list[MixtureDayResult]:
        """Return the full grid of day x mixture reconciliations."""
        grid = []
        for nutrition_day in self.plan.days:
            selected_id = self.export_selection.selected(nutrition_day.day)
            for mixture in self.mixtures:
                grid.append(
                    MixtureDayResult(
                        day=nutrition_day.day,
                        mixture=mixture,
                        result=self._reconcile(nutrition_day, mixture),
                        selected_for_export=selected_id == mixture.id,
                    )
                )
        return grid

    def adjust_volume(self, day: int, mixture_id: str, delta: int) -> int | None:
        """Step a volume up or down; returns the new override in mL."""
        nutrition_day = self.plan.get_day(day)
        mixture = self._mixture(mixture_id)
        if nutrition_day is None or mixture is None:
            return None
        return self.adjustments.adjust(nutrition_day, mixture, delta)

    def toggle_export(self, day: int, mixture_id: str) -> str | None:
        """Toggle the export selection for a day."""
        return self.export_selection.toggle(day, mixture_id)

    def diabetic_warning(self) -> bool:
        return has_diabetic_warning(self.patient, self.mixtures)

    def semi_elemental_warning(self) -> bool:
        return has_semi_elemental_warning(self.mixtures)

    def report(self, localize: Translator) -> str:
        """Render the shareable text report for the current state."""
        return format_report(
            self.patient,
            self.plan,
            self.mixtures,
            self.export_selection,
            localize,
            adjustments=self.adjustments,
        )

    def _mixture(self, mixture_id: str) -> Mixture | None:
        for mixture in self.mixtures:
            if mixture.id == mixture_id:
                return mixture
        return None

    def _reconcile(self, day: NutritionDay, mixture: Mixture) -> VolumeResult:
        return reconcile_volume(
            day,
            mixture,
            self.adjustments.get(day.day, mixture.id),
            has_kidney_failure=self.patient.has_kidney_failure,
        )
