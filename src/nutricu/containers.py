"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutricu.adapters.supabase_mixture_repository import SupabaseMixtureRepository
from nutricu.adapters.supabase_patient_repository import SupabasePatientRepository
from nutricu.config import Settings
from nutricu.services.mixtures import MixtureService
from nutricu.services.patients import PatientService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    patient_service: PatientService
    mixture_service: MixtureService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    patient_repository = SupabasePatientRepository(supabase_client)
    mixture_repository = SupabaseMixtureRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        patient_service=PatientService(patient_repository),
        mixture_service=MixtureService(mixture_repository),
    )
