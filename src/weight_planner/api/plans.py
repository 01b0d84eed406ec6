"""Goal plan endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from weight_planner.api.schemas import PlanPayload
from weight_planner.domain.models import Plan

if TYPE_CHECKING:
    from weight_planner.containers import AppContainer

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("")
async def list_plans(request: Request) -> dict[str, list[Plan]]:
    """Return every plan of the profile."""
    container: AppContainer = request.app.state.container
    return {"plans": container.plan_service.list_plans()}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_plan(payload: PlanPayload, request: Request) -> Plan:
    """Create a plan; the first plan becomes active."""
    container: AppContainer = request.app.state.container
    return container.plan_service.create(
        name=payload.name,
        start_date=payload.start_date,
        target_date=payload.target_date,
        target_weight=payload.target_weight,
        notes=payload.notes,
    )


@router.put("/{plan_id}")
async def edit_plan(plan_id: str, payload: PlanPayload, request: Request) -> Plan:
    """Replace a plan's fields, keeping its activation."""
    container: AppContainer = request.app.state.container
    return container.plan_service.edit(
        plan_id,
        name=payload.name,
        start_date=payload.start_date,
        target_date=payload.target_date,
        target_weight=payload.target_weight,
        notes=payload.notes,
    )


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(plan_id: str, request: Request) -> None:
    """Delete a plan."""
    container: AppContainer = request.app.state.container
    container.plan_service.delete(plan_id)


@router.post("/{plan_id}/activate")
async def activate_plan(plan_id: str, request: Request) -> dict[str, list[Plan]]:
    """Make a plan the only active plan."""
    container: AppContainer = request.app.state.container
    return {"plans": container.plan_service.activate(plan_id)}
