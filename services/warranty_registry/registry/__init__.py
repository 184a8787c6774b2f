"""Warranty registry core."""

from services.warranty_registry.registry.errors import (
    ArithmeticOverflowError,
    InvalidArgumentError,
    InvalidWarrantyIdError,
    RegistryError,
    TransferFailedError,
    UnauthorizedError,
)
from services.warranty_registry.registry.models import (
    UINT256_MAX,
    RegistryEvent,
    WarrantyRecord,
)
from services.warranty_registry.registry.registry import WarrantyRegistry

__all__ = [
    "WarrantyRegistry",
    "WarrantyRecord",
    "RegistryEvent",
    "UINT256_MAX",
    # Errors
    "RegistryError",
    "UnauthorizedError",
    "InvalidArgumentError",
    "InvalidWarrantyIdError",
    "ArithmeticOverflowError",
    "TransferFailedError",
]
