"""Derived, read-only facts about stored warranties."""

from __future__ import annotations

from services.warranty_registry.registry.errors import ArithmeticOverflowError
from services.warranty_registry.registry.models import UINT256_MAX
from services.warranty_registry.registry.store import RecordStore


class QueryEngine:
    """Expiry and active-window checks, recomputed on every call."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def expiry_of(self, warranty_id: int) -> int:
        """
        Last second the warranty is active: ``purchase_date + duration``.

        Raises:
            InvalidWarrantyIdError: If the id does not exist.
            ArithmeticOverflowError: If the sum does not fit in 256 bits.
        """
        record = self._store.get(warranty_id)
        expiry = record.purchase_date + record.duration
        if expiry > UINT256_MAX:
            raise ArithmeticOverflowError(
                warranty_id, record.purchase_date, record.duration
            )
        return expiry

    def is_active(self, warranty_id: int, now: int) -> bool:
        """True while ``now <= purchase_date + duration``."""
        return now <= self.expiry_of(warranty_id)
