"""Warranty record and registry event types."""

from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

# Numbers in the registry are unsigned 256-bit integers
UINT256_MAX = 2**256 - 1


class RegistryEvent(str, Enum):
    """Names of the notifications the registry emits."""

    ISSUER_AUTHORIZED = "IssuerAuthorized"
    ISSUER_REVOKED = "IssuerRevoked"
    ADMIN_TRANSFERRED = "AdminTransferred"
    RECORD_CREATED = "RecordCreated"
    FUNDS_RESCUED = "FundsRescued"


@dataclass(frozen=True)
class WarrantyRecord:
    """Immutable warranty record."""

    warranty_id: int
    issuer: str
    owner: str
    product_id: str
    product_model: str
    purchase_date: int
    duration: int
    terms_hash: str
    extended: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert WarrantyRecord to a plain dictionary."""
        return asdict(self)

    def content_hash(self) -> str:
        """SHA-256 over the canonical JSON form of every field."""
        return hashlib.sha256(
            json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":")).encode()
        ).hexdigest()
