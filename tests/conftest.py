"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from nutricu.config import Settings
from nutricu.containers import AppContainer
from nutricu.domain.mixtures import Mixture
from nutricu.domain.patients import Gender, Patient
from nutricu.services.mixtures import MixtureRepository, MixtureService
from nutricu.services.patients import PatientRepository, PatientService


@dataclass
class InMemoryPatientRepository(PatientRepository):
    """In-memory patient repository for tests."""

    patients: dict[str, Patient] = field(default_factory=dict)

    def list_patients(self) -> list[Patient]:
        return list(self.patients.values())

    def get_patient(self, patient_id: str) -> Patient | None:
        return self.patients.get(patient_id)

    def create_patient(self, patient: Patient) -> Patient:
        self.patients[patient.id] = patient
        return patient

    def update_patient(self, patient: Patient) -> Patient:
        self.patients[patient.id] = patient
        return patient

    def delete_patient(self, patient_id: str) -> None:
        self.patients.pop(patient_id, None)

    def patient_exists(self, patient_id: str) -> bool:
        return patient_id in self.patients


@dataclass
class InMemoryMixtureRepository(MixtureRepository):
    """In-memory mixture repository for tests."""

    mixtures: list[Mixture] = field(default_factory=list)

    def list_mixtures(self) -> list[Mixture]:
        return list(self.mixtures)

    def get_mixture(self, mixture_id: str) -> Mixture | None:
        for mixture in self.mixtures:
            if mixture.id == mixture_id:
                return mixture
        return None

    def create_mixture(self, mixture: Mixture) -> Mixture:
        self.mixtures.append(mixture)
        return mixture

    def update_mixture(self, mixture: Mixture) -> Mixture:
        self.mixtures = [
            mixture if existing.id == mixture.id else existing
            for existing in self.mixtures
        ]
        return mixture

    def delete_mixture(self, mixture_id: str) -> None:
        self.mixtures = [m for m in self.mixtures if m.id != mixture_id]

    def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        return any(
            m.name.lower() == name.lower() and m.id != exclude_id
            for m in self.mixtures
        )


def make_patient(**overrides: object) -> Patient:
    """Build a 170 cm / 70 kg male patient with optional overrides."""
    values: dict[str, object] = {
        "id": "P-1",
        "gender": Gender.MALE,
        "height": 170.0,
        "weight": 70.0,
        "age": 54,
    }
    values.update(overrides)
    return Patient(**values)  # type: ignore[arg-type]


def make_mixture(**overrides: object) -> Mixture:
    """Build a 2 kcal/mL, 0.1 g/mL mixture with optional overrides."""
    values: dict[str, object] = {
        "id": "2",
        "name": "Фрезубин ВП 2 ккал",
        "calories_per_1000ml": 2000,
        "protein_per_1000ml": 100,
    }
    values.update(overrides)
    return Mixture(**values)  # type: ignore[arg-type]


def echo_translator(key: str) -> str:
    """Translator that returns keys unchanged."""
    return key


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def patient_repository() -> InMemoryPatientRepository:
    return InMemoryPatientRepository()


@pytest.fixture
def mixture_repository() -> InMemoryMixtureRepository:
    return InMemoryMixtureRepository()


@pytest.fixture
def container(
    settings: Settings,
    patient_repository: InMemoryPatientRepository,
    mixture_repository: InMemoryMixtureRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        patient_service=PatientService(patient_repository),
        mixture_service=MixtureService(mixture_repository),
    )
