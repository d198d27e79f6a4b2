"""Supabase-backed patient repository."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutricu.domain.patients import Gender, Patient
from nutricu.services.patients import PatientRepository


@dataclass
class SupabasePatientRepository(PatientRepository):
    """Supabase implementation for patient persistence."""

    client: Client

    def list_patients(self) -> list[Patient]:
        """Return all patients."""
        response = self.client.table("patients").select("*").execute()
        return [_parse_patient(row) for row in response.data or []]

    def get_patient(self, patient_id: str) -> Patient | None:
        """Return a patient by id, if present."""
        response = (
            self.client.table("patients")
            .select("*")
            .eq("id", patient_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_patient(response.data[0])

    def create_patient(self, patient: Patient) -> Patient:
        """Insert a patient row and return it."""
        response = (
            self.client.table("patients").insert(_serialize_patient(patient)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create patient")
        return _parse_patient(response.data[0])

    def update_patient(self, patient: Patient) -> Patient:
        """Update a patient row and return it."""
        payload = _serialize_patient(patient)
        payload.pop("id")
        payload.pop("created_at")
        response = (
            self.client.table("patients")
            .update(payload)
            .eq("id", patient.id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update patient")
        return _parse_patient(response.data[0])

    def delete_patient(self, patient_id: str) -> None:
        """Delete a patient row."""
        self.client.table("patients").delete().eq("id", patient_id).execute()

    def patient_exists(self, patient_id: str) -> bool:
        """Return True when a row with this id exists."""
        response = (
            self.client.table("patients")
            .select("id")
            .eq("id", patient_id)
            .limit(1)
            .execute()
        )
        return bool(response.data)


def _serialize_patient(patient: Patient) -> dict[str, object]:
    return {
        "id": patient.id,
        "gender": patient.gender.value,
        "height": patient.height,
        "weight": patient.weight,
        "age": patient.age,
        "has_diabetes": patient.has_diabetes,
        "has_kidney_failure": patient.has_kidney_failure,
        "has_refeeding_risk": patient.has_refeeding_risk,
        "bmi": patient.bmi,
        "ideal_weight": patient.ideal_weight,
        "adjusted_weight": patient.adjusted_weight,
        "calculation_weight": patient.calculation_weight,
        "created_at": patient.created_at.isoformat() if patient.created_at else None,
    }


def _parse_patient(row: dict[str, object]) -> Patient:
    """Parse a patient row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    if created_at is not None and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return Patient(
        id=str(row["id"]),
        gender=Gender(row["gender"]),
        height=float(row["height"]),
        weight=float(row["weight"]),
        age=int(row["age"]),
        has_diabetes=bool(row.get("has_diabetes", False)),
        has_kidney_failure=bool(row.get("has_kidney_failure", False)),
        has_refeeding_risk=bool(row.get("has_refeeding_risk", False)),
        bmi=_optional_float(row.get("bmi")),
        ideal_weight=_optional_float(row.get("ideal_weight")),
        adjusted_weight=_optional_float(row.get("adjusted_weight")),
        calculation_weight=_optional_float(row.get("calculation_weight")),
        created_at=created_at,
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
