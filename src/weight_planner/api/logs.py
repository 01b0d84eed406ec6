"""Weight log endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from weight_planner.api.schemas import LogPayload, LogUpdatePayload
from weight_planner.domain.models import WeightLog

if TYPE_CHECKING:
    from weight_planner.containers import AppContainer

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get("")
async def list_logs(request: Request) -> dict[str, list[WeightLog]]:
    """Return the log series, oldest-first."""
    container: AppContainer = request.app.state.container
    return {"logs": container.weight_log_service.list_logs()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_weight(payload: LogPayload, request: Request) -> WeightLog:
    """Record a measurement; a second entry on the same day replaces the first."""
    container: AppContainer = request.app.state.container
    return container.weight_log_service.log_weight(payload.weight, payload.logged_at)


@router.put("/{log_id}")
async def edit_log(
    log_id: str, payload: LogUpdatePayload, request: Request
) -> WeightLog:
    """Update a measurement."""
    container: AppContainer = request.app.state.container
    return container.weight_log_service.edit_log(
        log_id, payload.weight, payload.logged_at
    )


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_log(log_id: str, request: Request) -> None:
    """Delete a measurement."""
    container: AppContainer = request.app.state.container
    container.weight_log_service.delete_log(log_id)
