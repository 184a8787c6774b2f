"""
Warranty Registry Service.

Append-only registry of product warranty records on a ledger.

Key Features:
- Admin-managed set of authorized issuers
- Gapless, monotonically increasing warranty ids
- Owner index and active-window queries
- Hash-chained notification log for off-chain indexers
"""

from services.warranty_registry.registry import (
    WarrantyRecord,
    WarrantyRegistry,
)

__all__ = [
    "WarrantyRecord",
    "WarrantyRegistry",
]
