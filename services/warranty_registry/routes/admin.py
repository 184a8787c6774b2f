"""
Administration API Endpoints.

Admin role transfer, recovery of stray funds, and the notification log.
"""

from __future__ import annotations

from fastapi import APIRouter, Query
from pydantic import BaseModel, Field

from shared.blockchain import LedgerEvent
from services.warranty_registry.dependencies import ContextDep, RegistryDep


router = APIRouter(tags=["admin"])


class AdminResponse(BaseModel):
    admin: str


class AdminTransferRequest(BaseModel):
    """Request to hand over the admin role."""

    new_admin: str = Field(..., description="Address of the new admin")


class RescueRequest(BaseModel):
    """Request to recover native funds held by the registry."""

    destination: str = Field(..., description="Address to send the balance to")


class RescueResponse(BaseModel):
    destination: str
    amount: int


@router.get("/admin", response_model=AdminResponse, summary="Get the current admin")
async def get_admin(registry: RegistryDep) -> AdminResponse:
    return AdminResponse(admin=registry.admin)


@router.post(
    "/admin/transfer",
    response_model=AdminResponse,
    summary="Transfer the admin role",
)
async def transfer_admin(
    request: AdminTransferRequest,
    ctx: ContextDep,
    registry: RegistryDep,
) -> AdminResponse:
    """
    Replace the admin immediately.

    There is no acceptance step; only the new admin can undo it.
    """
    new_admin = await registry.transfer_admin(ctx, request.new_admin)
    return AdminResponse(admin=new_admin)


@router.post(
    "/admin/rescue",
    response_model=RescueResponse,
    summary="Recover funds sent to the registry",
)
async def rescue_funds(
    request: RescueRequest,
    ctx: ContextDep,
    registry: RegistryDep,
) -> RescueResponse:
    amount = await registry.rescue_funds(ctx, request.destination)
    return RescueResponse(destination=request.destination.lower(), amount=amount)


@router.get(
    "/events",
    response_model=list[LedgerEvent],
    summary="Read the notification log",
)
async def list_events(
    registry: RegistryDep,
    name: str | None = Query(default=None, description="Event name filter"),
    from_block: int | None = Query(default=None, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
) -> list[LedgerEvent]:
    """Committed events in commit order, oldest first."""
    return await registry.ledger.get_events(name=name, from_block=from_block, limit=limit)
