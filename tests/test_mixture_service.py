"""Tests for mixture service and catalog seeding."""

from dataclasses import replace

import pytest

from nutricu.domain.errors import MixtureNameExistsError, MixtureNotFoundError
from nutricu.domain.mixtures import MixtureInput
from nutricu.services.catalog import DEFAULT_MIXTURES, next_mixture_id
from nutricu.services.mixtures import MixtureService
from tests.conftest import InMemoryMixtureRepository


def _input(**overrides: object) -> MixtureInput:
    values: dict[str, object] = {
        "name": "Нутрикомп Стандарт",
        "calories_per_1000ml": 1000,
        "protein_per_1000ml": 40,
    }
    values.update(overrides)
    return MixtureInput(**values)  # type: ignore[arg-type]


def test_seed_defaults_on_empty_collection() -> None:
    repository = InMemoryMixtureRepository()
    service = MixtureService(repository)

    added = service.seed_defaults()

    assert len(added) == 12
    assert [m.id for m in repository.mixtures] == [str(i) for i in range(1, 13)]
    assert all(m.is_default for m in repository.mixtures)


def test_seed_defaults_is_idempotent() -> None:
    repository = InMemoryMixtureRepository()
    service = MixtureService(repository)
    service.seed_defaults()

    assert service.seed_defaults() == []
    assert len(repository.mixtures) == 12


def test_seed_defaults_keeps_user_edits_and_restores_missing() -> None:
    edited = replace(DEFAULT_MIXTURES[0], calories_per_1000ml=1300)
    repository = InMemoryMixtureRepository(mixtures=[edited])
    service = MixtureService(repository)

    added = service.seed_defaults()

    assert len(added) == 11
    assert repository.get_mixture("1").calories_per_1000ml == 1300


def test_create_assigns_sequential_ids() -> None:
    repository = InMemoryMixtureRepository()
    service = MixtureService(repository)
    service.seed_defaults()

    first = service.create(_input())
    second = service.create(_input(name="Другая смесь"))

    assert first.id == "13"
    assert second.id == "14"
    assert not first.is_default


def test_next_mixture_id_on_empty_collection() -> None:
    assert next_mixture_id([]) == "13"


def test_create_rejects_duplicate_name_case_insensitive() -> None:
    service = MixtureService(InMemoryMixtureRepository())
    service.seed_defaults()

    with pytest.raises(MixtureNameExistsError):
        service.create(_input(name="ПЕПТАМЕН АФ"))


def test_update_allows_same_name_for_itself() -> None:
    service = MixtureService(InMemoryMixtureRepository())
    service.seed_defaults()

    updated = service.update(
        "6", _input(name="Пептамен АФ", calories_per_1000ml=1500)
    )

    assert updated.calories_per_1000ml == 1500
    assert updated.is_default


def test_update_rejects_name_of_another_mixture() -> None:
    service = MixtureService(InMemoryMixtureRepository())
    service.seed_defaults()

    with pytest.raises(MixtureNameExistsError):
        service.update("6", _input(name="Ресурс 2,0"))


def test_defaults_can_be_deleted() -> None:
    repository = InMemoryMixtureRepository()
    service = MixtureService(repository)
    service.seed_defaults()

    service.delete("1")

    assert repository.get_mixture("1") is None
    with pytest.raises(MixtureNotFoundError):
        service.get("1")


def test_resolve_skips_deleted_mixtures() -> None:
    service = MixtureService(InMemoryMixtureRepository())
    service.seed_defaults()
    service.delete("2")

    resolved = service.resolve(["2", "5"])

    assert [m.id for m in resolved] == ["5"]


def test_input_validation() -> None:
    with pytest.raises(ValueError):
        _input(calories_per_1000ml=0)
    with pytest.raises(ValueError):
        _input(name=" ")
