"""Services for managing the mixture collection."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from nutricu.domain.errors import MixtureNameExistsError, MixtureNotFoundError
from nutricu.domain.mixtures import Mixture, MixtureInput
from nutricu.services.catalog import missing_defaults, next_mixture_id
from nutricu.services.reconciliation import resolve_mixtures

_logger = logging.getLogger(__name__)


class MixtureRepository(Protocol):
    """Persistence interface for mixtures."""

    def list_mixtures(self) -> list[Mixture]:
        """Return all mixtures in insertion order."""

    def get_mixture(self, mixture_id: str) -> Mixture | None:
        """Return a mixture by id, if present."""

    def create_mixture(self, mixture: Mixture) -> Mixture:
        """Insert a mixture and return it."""

    def update_mixture(self, mixture: Mixture) -> Mixture:
        """Replace a mixture and return it."""

    def delete_mixture(self, mixture_id: str) -> None:
        """Delete a mixture by id."""

    def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        """Return True when another mixture has this name (case-insensitive)."""


@dataclass
class MixtureService:
    """Application service for mixture lifecycle actions."""

    repository: MixtureRepository

    def seed_defaults(self) -> list[Mixture]:
        """Add catalog entries that are missing; existing ones are kept as is."""
        added = [
            self.repository.create_mixture(mixture)
            for mixture in missing_defaults(self.repository.list_mixtures())
        ]
        if added:
            _logger.info("Seeded default mixtures: count=%s", len(added))
        return added

    def create(self, payload: MixtureInput) -> Mixture:
        """Create a user mixture with the next sequential id."""
        if self.repository.name_exists(payload.name):
            raise MixtureNameExistsError(f"Mixture already exists: {payload.name}")
        mixture = Mixture(
            id=next_mixture_id(self.repository.list_mixtures()),
            name=payload.name,
            calories_per_1000ml=payload.calories_per_1000ml,
            protein_per_1000ml=payload.protein_per_1000ml,
            is_diabetic=payload.is_diabetic,
            is_semi_elemental=payload.is_semi_elemental,
        )
        created = self.repository.create_mixture(mixture)
        _logger.info("Mixture created: id=%s", created.id)
        return created

    def update(self, mixture_id: str, payload: MixtureInput) -> Mixture:
        """Update a mixture; default mixtures are editable too."""
        existing = self.get(mixture_id)
        if self.repository.name_exists(payload.name, exclude_id=mixture_id):
            raise MixtureNameExistsError(f"Mixture already exists: {payload.name}")
        updated = self.repository.update_mixture(
            Mixture(
                id=mixture_id,
                name=payload.name,
                calories_per_1000ml=payload.calories_per_1000ml,
                protein_per_1000ml=payload.protein_per_1000ml,
                is_diabetic=payload.is_diabetic,
                is_semi_elemental=payload.is_semi_elemental,
                is_default=existing.is_default,
            )
        )
        _logger.info("Mixture updated: id=%s", mixture_id)
        return updated

    def delete(self, mixture_id: str) -> None:
        """Delete a mixture, including seeded defaults."""
        self.get(mixture_id)
        self.repository.delete_mixture(mixture_id)
        _logger.info("Mixture deleted: id=%s", mixture_id)

    def get(self, mixture_id: str) -> Mixture:
        """Return a mixture or raise when it does not exist."""
        mixture = self.repository.get_mixture(mixture_id)
        if mixture is None:
            raise MixtureNotFoundError(f"Unknown mixture: {mixture_id}")
        return mixture

    def list_mixtures(self) -> list[Mixture]:
        return self.repository.list_mixtures()

    def resolve(self, mixture_ids: Iterable[str]) -> list[Mixture]:
        """Return the requested mixtures, skipping ids that no longer exist."""
        return resolve_mixtures(mixture_ids, self.repository.list_mixtures())
