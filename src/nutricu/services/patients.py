"""Patient lifecycle business logic."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from nutricu.domain.errors import PatientExistsError, PatientNotFoundError
from nutricu.domain.nutrition import NutritionPlan
from nutricu.domain.patients import Patient, PatientInput
from nutricu.services.anthropometrics import compute_derived_patient_fields
from nutricu.services.planning import build_nutrition_plan

_logger = logging.getLogger(__name__)


class PatientRepository(Protocol):
    """Persistence interface for patients."""

    def list_patients(self) -> list[Patient]:
        """Return all patients."""

    def get_patient(self, patient_id: str) -> Patient | None:
        """Return a patient by id, if present."""

    def create_patient(self, patient: Patient) -> Patient:
        """Insert a patient and return it."""

    def update_patient(self, patient: Patient) -> Patient:
        """Replace a patient and return it."""

    def delete_patient(self, patient_id: str) -> None:
        """Delete a patient by id."""

    def patient_exists(self, patient_id: str) -> bool:
        """Return True when the id is taken."""


@dataclass
class PatientService:
    """Application service for patient records."""

    repository: PatientRepository

    def create(self, payload: PatientInput) -> Patient:
        """Create a patient with derived weights and a creation timestamp."""
        if self.repository.patient_exists(payload.id):
            raise PatientExistsError(f"Patient already exists: {payload.id}")
        patient = compute_derived_patient_fields(
            payload.to_patient(created_at=datetime.now(tz=UTC))
        )
        created = self.repository.create_patient(patient)
        _logger.info("Patient created: id=%s", created.id)
        return created

    def update(self, patient_id: str, payload: PatientInput) -> Patient:
        """Update biometrics and flags, recomputing derived weights.

        The id is immutable, so ``payload.id`` is ignored.
        """
        existing = self.get(patient_id)
        patient = replace(
            payload.to_patient(created_at=existing.created_at), id=patient_id
        )
        updated = self.repository.update_patient(
            compute_derived_patient_fields(patient)
        )
        _logger.info("Patient updated: id=%s", patient_id)
        return updated

    def delete(self, patient_id: str) -> None:
        self.get(patient_id)
        self.repository.delete_patient(patient_id)
        _logger.info("Patient deleted: id=%s", patient_id)

    def get(self, patient_id: str) -> Patient:
        """Return a patient or raise when it does not exist."""
        patient = self.repository.get_patient(patient_id)
        if patient is None:
            raise PatientNotFoundError(f"Unknown patient: {patient_id}")
        return patient

    def list_patients(self) -> list[Patient]:
        """Return patients newest first; records without a timestamp go last."""
        return sorted(
            self.repository.list_patients(),
            key=lambda patient: (
                patient.created_at or datetime.min.replace(tzinfo=UTC)
            ),
            reverse=True,
        )

    def plan(self, patient_id: str) -> NutritionPlan:
        """Return the ramp plan for a stored patient."""
        return build_nutrition_plan(self.get(patient_id))
