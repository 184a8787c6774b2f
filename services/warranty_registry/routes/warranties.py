"""
Warranty Record API Endpoints.

Issuance and read-back of warranty records.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field, StrictBool, StrictInt

from services.warranty_registry.dependencies import ContextDep, RegistryDep
from services.warranty_registry.registry import WarrantyRecord


router = APIRouter(tags=["warranties"])


class WarrantyCreateRequest(BaseModel):
    """Request to issue a new warranty."""

    owner: str = Field(..., description="Address the warranty is issued to")
    product_id: str = Field(..., description="Serial number, SKU or UPC")
    product_model: str = Field(..., description="Human-readable model name")
    purchase_date: StrictInt = Field(..., description="Purchase time, seconds since epoch")
    duration: StrictInt = Field(..., description="Validity window in seconds")
    terms_hash: str = Field(..., description="Hash or URI of the warranty terms")
    extended: StrictBool = Field(default=False, description="Extended warranty flag")


class WarrantyCreatedResponse(BaseModel):
    """Id assigned to a newly issued warranty."""

    warranty_id: int


class WarrantyResponse(BaseModel):
    """Warranty record response."""

    warranty_id: int
    issuer: str
    owner: str
    product_id: str
    product_model: str
    purchase_date: int
    duration: int
    terms_hash: str
    extended: bool
    record_hash: str

    @classmethod
    def from_record(cls, record: WarrantyRecord) -> WarrantyResponse:
        """Create response from WarrantyRecord."""
        return cls(**record.to_dict(), record_hash=record.content_hash())


class WarrantyStatusResponse(BaseModel):
    """Validity window of a warranty at a point in time."""

    warranty_id: int
    expiry: int
    evaluated_at: int
    is_active: bool


class WarrantyCountResponse(BaseModel):
    total: int


class OwnerWarrantiesResponse(BaseModel):
    owner: str
    warranty_ids: list[int]


@router.post(
    "/warranties",
    response_model=WarrantyCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue a new warranty",
)
async def create_warranty(
    request: WarrantyCreateRequest,
    ctx: ContextDep,
    registry: RegistryDep,
) -> WarrantyCreatedResponse:
    """
    Issue a new warranty record.

    The caller must be an authorized issuer.
    """
    warranty_id = await registry.create_warranty(
        ctx,
        owner=request.owner,
        product_id=request.product_id,
        product_model=request.product_model,
        purchase_date=request.purchase_date,
        duration=request.duration,
        terms_hash=request.terms_hash,
        extended=request.extended,
    )
    return WarrantyCreatedResponse(warranty_id=warranty_id)


@router.get(
    "/warranties/count",
    response_model=WarrantyCountResponse,
    summary="Count issued warranties",
)
async def count_warranties(registry: RegistryDep) -> WarrantyCountResponse:
    return WarrantyCountResponse(total=await registry.total_warranties())


@router.get(
    "/warranties/{warranty_id}",
    response_model=WarrantyResponse,
    summary="Get warranty by ID",
)
async def get_warranty(warranty_id: int, registry: RegistryDep) -> WarrantyResponse:
    """Get warranty record by ID."""
    record = await registry.get_warranty(warranty_id)
    return WarrantyResponse.from_record(record)


@router.get(
    "/warranties/{warranty_id}/status",
    response_model=WarrantyStatusResponse,
    summary="Check whether a warranty is active",
)
async def get_warranty_status(
    warranty_id: int,
    registry: RegistryDep,
    at: int | None = Query(default=None, ge=0, description="Timestamp to evaluate at"),
) -> WarrantyStatusResponse:
    """
    Compute expiry and the active flag.

    Evaluated at the current block time unless ``at`` is given.
    """
    evaluated_at = at if at is not None else await registry.ledger.current_timestamp()
    expiry = await registry.expiry_of(warranty_id)
    return WarrantyStatusResponse(
        warranty_id=warranty_id,
        expiry=expiry,
        evaluated_at=evaluated_at,
        is_active=evaluated_at <= expiry,
    )


@router.get(
    "/owners/{owner}/warranties",
    response_model=OwnerWarrantiesResponse,
    summary="List warranty ids issued to an owner",
)
async def get_owner_warranties(owner: str, registry: RegistryDep) -> OwnerWarrantiesResponse:
    warranty_ids = await registry.get_warranties_by_owner(owner)
    return OwnerWarrantiesResponse(owner=owner.lower(), warranty_ids=warranty_ids)
