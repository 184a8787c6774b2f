"""
Warranty Record Store.

Append-only storage of warranty records keyed by id, plus a secondary
index from owner address to the ids recorded for that owner.
"""

from __future__ import annotations

from services.warranty_registry.registry.access import (
    AccessController,
    parse_principal,
    require_principal,
)
from services.warranty_registry.registry.allocator import IdentifierAllocator
from services.warranty_registry.registry.errors import (
    InvalidArgumentError,
    InvalidWarrantyIdError,
)
from services.warranty_registry.registry.models import UINT256_MAX, WarrantyRecord


def _check_uint(value: object, argument: str, minimum: int = 0) -> int:
    # bool is an int subclass but never a valid timestamp or duration
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidArgumentError(argument, "must be an integer")
    if value < minimum:
        raise InvalidArgumentError(argument, f"must be at least {minimum}")
    if value > UINT256_MAX:
        raise InvalidArgumentError(argument, "exceeds 2**256 - 1")
    return value


def _check_str(value: object, argument: str) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(argument, "must be a string")
    return value


class RecordStore:
    """
    Warranty records and the owner index.

    Records are never updated or removed. ``create`` runs every check
    before allocating an id, and the write that follows (allocate, store,
    index) cannot fail part way.
    """

    def __init__(
        self,
        access: AccessController,
        allocator: IdentifierAllocator | None = None,
    ) -> None:
        self._access = access
        self._allocator = allocator or IdentifierAllocator()
        self._records: dict[int, WarrantyRecord] = {}
        self._owner_index: dict[str, list[int]] = {}

    def create(
        self,
        caller: str,
        owner: str,
        product_id: str,
        product_model: str,
        purchase_date: int,
        duration: int,
        terms_hash: str,
        extended: bool,
    ) -> WarrantyRecord:
        """
        Record a new warranty issued by ``caller``.

        Args:
            caller: Issuer address; must be authorized.
            owner: Address the warranty is issued to.
            product_id: Serial number, SKU or UPC.
            product_model: Human-readable model name.
            purchase_date: Seconds since epoch; not checked against the clock.
            duration: Validity window in seconds; must be positive.
            terms_hash: Hash or URI of the full warranty terms.
            extended: Extended-warranty flag.

        Returns:
            The stored WarrantyRecord.

        Raises:
            UnauthorizedError: If caller is not an authorized issuer.
            InvalidArgumentError: For a null owner, non-positive duration or
                a field of the wrong type.
        """
        self._access.require_issuer(caller)
        owner = require_principal(owner, "owner")
        purchase_date = _check_uint(purchase_date, "purchase_date")
        duration = _check_uint(duration, "duration", minimum=1)
        product_id = _check_str(product_id, "product_id")
        product_model = _check_str(product_model, "product_model")
        terms_hash = _check_str(terms_hash, "terms_hash")
        if not isinstance(extended, bool):
            raise InvalidArgumentError("extended", "must be a boolean")

        record = WarrantyRecord(
            warranty_id=self._allocator.peek(),
            issuer=caller.lower(),
            owner=owner,
            product_id=product_id,
            product_model=product_model,
            purchase_date=purchase_date,
            duration=duration,
            terms_hash=terms_hash,
            extended=extended,
        )

        warranty_id = self._allocator.allocate()
        self._records[warranty_id] = record
        self._owner_index.setdefault(owner, []).append(warranty_id)
        return record

    def get(self, warranty_id: int) -> WarrantyRecord:
        """
        Get a record by id.

        Raises:
            InvalidWarrantyIdError: If the id is not in ``1..total_count()``.
        """
        total = self._allocator.highest
        if (
            not isinstance(warranty_id, int)
            or isinstance(warranty_id, bool)
            or not 0 < warranty_id <= total
        ):
            raise InvalidWarrantyIdError(warranty_id, total)
        return self._records[warranty_id]

    def ids_by_owner(self, owner: str) -> list[int]:
        """Ids recorded for ``owner`` in creation order."""
        owner = parse_principal(owner, "owner")
        return list(self._owner_index.get(owner, []))

    def total_count(self) -> int:
        return self._allocator.highest

    def rebuild_owner_index(self) -> dict[str, list[int]]:
        """Derive the owner index from the records alone."""
        index: dict[str, list[int]] = {}
        for warranty_id in sorted(self._records):
            index.setdefault(self._records[warranty_id].owner, []).append(warranty_id)
        return index

    def owner_index_consistent(self) -> bool:
        """Check the live owner index against one rebuilt from records."""
        return self.rebuild_owner_index() == self._owner_index
