"""Pydantic models for calculation requests and responses."""

import math

from pydantic import BaseModel, Field

from nutricu.services.calculation import CalculationSession, MixtureDayResult
from nutricu.services.reconciliation import VOLUME_STEP_ML, classify_deviation


class VolumeStep(BaseModel):
    """One +/- tap on a day's mixture volume."""

    day: int = Field(ge=1, le=7)
    mixture_id: str
    delta: int = VOLUME_STEP_ML


class CalculationRequest(BaseModel):
    """Client-held calculation state sent with every request."""

    mixture_ids: list[str] = Field(min_length=1)
    overrides: dict[int, dict[str, int]] = Field(default_factory=dict)
    steps: list[VolumeStep] = Field(default_factory=list)
    export_selection: dict[int, str | None] = Field(default_factory=dict)


class MixtureDayResultOut(BaseModel):
    """Serialized reconciliation of one mixture on one day."""

    day: int
    mixture_id: str
    mixture_name: str
    volume: int
    delivered_calories: int
    delivered_protein: float
    target_calories: int
    target_protein: float
    calorie_deviation: float | None
    protein_deviation: float | None
    calorie_severity: str
    protein_severity: str
    selected_for_export: bool

    @classmethod
    def from_result(cls, item: MixtureDayResult) -> "MixtureDayResultOut":
        result = item.result
        return cls(
            day=item.day,
            mixture_id=item.mixture.id,
            mixture_name=item.mixture.name,
            volume=result.volume,
            delivered_calories=result.delivered_calories,
            delivered_protein=result.delivered_protein,
            target_calories=result.target_calories,
            target_protein=result.target_protein,
            calorie_deviation=_finite_or_none(result.calorie_deviation),
            protein_deviation=_finite_or_none(result.protein_deviation),
            calorie_severity=classify_deviation(result.calorie_deviation).value,
            protein_severity=classify_deviation(result.protein_deviation).value,
            selected_for_export=item.selected_for_export,
        )


class CalculationWarnings(BaseModel):
    """Advisories shown for the chosen mixtures."""

    diabetic: bool
    semi_elemental: bool


class CalculationResponse(BaseModel):
    """Full state of a calculation after applying the request."""

    patient_id: str
    mixture_ids: list[str]
    results: list[MixtureDayResultOut]
    overrides: dict[int, dict[str, int]]
    export_selection: dict[int, str]
    warnings: CalculationWarnings

    @classmethod
    def from_session(cls, session: CalculationSession) -> "CalculationResponse":
        return cls(
            patient_id=session.patient.id,
            mixture_ids=[mixture.id for mixture in session.mixtures],
            results=[MixtureDayResultOut.from_result(r) for r in session.results()],
            overrides=session.adjustments.to_mapping(),
            export_selection=session.export_selection.to_mapping(),
            warnings=CalculationWarnings(
                diabetic=session.diabetic_warning(),
                semi_elemental=session.semi_elemental_warning(),
            ),
        )


def _finite_or_none(value: float) -> float | None:
    if math.isfinite(value):
        return value
    return None
