"""Domain models for ICU patients."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class Gender(StrEnum):
    """Patient gender as used by the Devine formula."""

    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class Patient:
    """Patient record with biometrics, comorbidities and derived weights."""

    id: str
    gender: Gender
    height: float
    weight: float
    age: int
    has_diabetes: bool = False
    has_kidney_failure: bool = False
    has_refeeding_risk: bool = False
    bmi: float | None = None
    ideal_weight: float | None = None
    adjusted_weight: float | None = None
    calculation_weight: float | None = None
    created_at: datetime | None = None


class PatientInput(BaseModel):
    """Validated patient form payload."""

    id: str = Field(min_length=1)
    gender: Gender
    height: float = Field(gt=0)
    weight: float = Field(gt=0)
    age: int = Field(gt=0)
    has_diabetes: bool = False
    has_kidney_failure: bool = False
    has_refeeding_risk: bool = False

    @field_validator("id")
    @classmethod
    def _strip_id(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("Patient id is required")
        return cleaned

    def to_patient(self, created_at: datetime | None = None) -> Patient:
        """Build a patient record without derived fields."""
        return Patient(
            id=self.id,
            gender=self.gender,
            height=self.height,
            weight=self.weight,
            age=self.age,
            has_diabetes=self.has_diabetes,
            has_kidney_failure=self.has_kidney_failure,
            has_refeeding_risk=self.has_refeeding_risk,
            created_at=created_at,
        )
