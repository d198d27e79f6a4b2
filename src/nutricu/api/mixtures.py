"""Mixture catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from nutricu.domain.mixtures import Mixture, MixtureInput

if TYPE_CHECKING:
    from nutricu.containers import AppContainer

router = APIRouter(prefix="/mixtures", tags=["mixtures"])


@router.get("")
async def list_mixtures(request: Request) -> dict[str, list[Mixture]]:
    """Return all mixtures."""
    container: AppContainer = request.app.state.container
    return {"mixtures": container.mixture_service.list_mixtures()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_mixture(payload: MixtureInput, request: Request) -> Mixture:
    """Create a user mixture."""
    container: AppContainer = request.app.state.container
    return container.mixture_service.create(payload)


@router.get("/{mixture_id}")
async def get_mixture(mixture_id: str, request: Request) -> Mixture:
    container: AppContainer = request.app.state.container
    return container.mixture_service.get(mixture_id)


@router.put("/{mixture_id}")
async def update_mixture(
    mixture_id: str, payload: MixtureInput, request: Request
) -> Mixture:
    """Update any mixture, including seeded defaults."""
    container: AppContainer = request.app.state.container
    return container.mixture_service.update(mixture_id, payload)


@router.delete("/{mixture_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mixture(mixture_id: str, request: Request) -> None:
    container: AppContainer = request.app.state.container
    container.mixture_service.delete(mixture_id)
