"""Patient, plan and calculation endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse

from nutricu.api.schemas import CalculationRequest, CalculationResponse
from nutricu.config import resolve_language
from nutricu.domain.nutrition import NutritionPlan
from nutricu.domain.patients import Patient, PatientInput
from nutricu.services.calculation import CalculationSession
from nutricu.services.localization import get_translator
from nutricu.services.reconciliation import ExportSelection, VolumeAdjustments
from nutricu.services.report import format_plan_report

if TYPE_CHECKING:
    from nutricu.containers import AppContainer

router = APIRouter(prefix="/patients", tags=["patients"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("")
async def list_patients(request: Request) -> dict[str, list[Patient]]:
    """Return patients, newest first."""
    return {"patients": _container(request).patient_service.list_patients()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_patient(payload: PatientInput, request: Request) -> Patient:
    """Create a patient and compute derived weights."""
    return _container(request).patient_service.create(payload)


@router.get("/{patient_id}")
async def get_patient(patient_id: str, request: Request) -> Patient:
    return _container(request).patient_service.get(patient_id)


@router.put("/{patient_id}")
async def update_patient(
    patient_id: str, payload: PatientInput, request: Request
) -> Patient:
    """Update a patient and recompute derived weights."""
    return _container(request).patient_service.update(patient_id, payload)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(patient_id: str, request: Request) -> None:
    _container(request).patient_service.delete(patient_id)


@router.get("/{patient_id}/plan")
async def get_plan(patient_id: str, request: Request) -> NutritionPlan:
    """Return the seven-day ramp plan."""
    return _container(request).patient_service.plan(patient_id)


@router.get("/{patient_id}/report", response_class=PlainTextResponse)
async def get_plan_report(
    patient_id: str, request: Request, language: str | None = None
) -> str:
    """Return the patient summary and plan as plain text."""
    container = _container(request)
    patient = container.patient_service.get(patient_id)
    translator = get_translator(
        resolve_language(language, container.settings.default_language)
    )
    return format_plan_report(
        patient, container.patient_service.plan(patient_id), translator
    )


@router.post("/{patient_id}/calculation")
async def calculate(
    patient_id: str, payload: CalculationRequest, request: Request
) -> CalculationResponse:
    """Reconcile mixture volumes against the plan for the given state."""
    session = _build_session(_container(request), patient_id, payload)
    return CalculationResponse.from_session(session)


@router.post("/{patient_id}/calculation/report", response_class=PlainTextResponse)
async def calculation_report(
    patient_id: str,
    payload: CalculationRequest,
    request: Request,
    language: str | None = None,
) -> str:
    """Return the calculation as plain text for copy or share."""
    container = _container(request)
    session = _build_session(container, patient_id, payload)
    translator = get_translator(
        resolve_language(language, container.settings.default_language)
    )
    return session.report(translator)


def _build_session(
    container: AppContainer, patient_id: str, payload: CalculationRequest
) -> CalculationSession:
    patient = container.patient_service.get(patient_id)
    session = CalculationSession.start(
        patient,
        payload.mixture_ids,
        container.mixture_service.list_mixtures(),
    )
    session.adjustments = VolumeAdjustments.from_mapping(payload.overrides)
    session.export_selection = ExportSelection.from_mapping(payload.export_selection)
    for step in payload.steps:
        session.adjust_volume(step.day, step.mixture_id, step.delta)
    return session
