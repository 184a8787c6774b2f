"""
Issuer Management API Endpoints.

Admin-only authorization and revocation of warranty issuers.
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from services.warranty_registry.dependencies import ContextDep, RegistryDep


router = APIRouter(prefix="/issuers", tags=["issuers"])


class IssuerStatusResponse(BaseModel):
    """Issuer flag for an address."""

    address: str
    authorized: bool


class IssuerListResponse(BaseModel):
    issuers: list[str]


@router.get("", response_model=IssuerListResponse, summary="List authorized issuers")
async def list_issuers(registry: RegistryDep) -> IssuerListResponse:
    return IssuerListResponse(issuers=registry.authorized_issuers())


@router.get(
    "/{address}",
    response_model=IssuerStatusResponse,
    summary="Check issuer status",
)
async def get_issuer(address: str, registry: RegistryDep) -> IssuerStatusResponse:
    authorized = registry.is_authorized_issuer(address)
    return IssuerStatusResponse(address=address.lower(), authorized=authorized)


@router.put(
    "/{address}",
    response_model=IssuerStatusResponse,
    summary="Authorize an issuer",
)
async def authorize_issuer(
    address: str,
    ctx: ContextDep,
    registry: RegistryDep,
) -> IssuerStatusResponse:
    """
    Authorize ``address`` to issue warranties.

    Admin only. Authorizing an existing issuer succeeds without change.
    """
    issuer = await registry.authorize_issuer(ctx, address)
    return IssuerStatusResponse(address=issuer, authorized=True)


@router.delete(
    "/{address}",
    response_model=IssuerStatusResponse,
    summary="Revoke an issuer",
)
async def revoke_issuer(
    address: str,
    ctx: ContextDep,
    registry: RegistryDep,
) -> IssuerStatusResponse:
    """
    Revoke ``address``'s issuer status.

    Admin only. Warranties it already issued stay valid.
    """
    issuer = await registry.revoke_issuer(ctx, address)
    return IssuerStatusResponse(address=issuer, authorized=False)
