"""
Warranty Registry.

Append-only, tamper-evident warranty records issued by authorized
principals on a ledger. Each mutating call runs as one ledger
transaction: checks first, then the state change, then the event. A
call that raises leaves state and the event log untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from shared.blockchain import (
    BlockchainClient,
    ExecutionContext,
    TransferRejectedError,
)
from shared.logging import get_logger
from services.warranty_registry.registry.access import (
    AccessController,
    parse_principal,
    require_principal,
)
from services.warranty_registry.registry.errors import (
    RegistryError,
    TransferFailedError,
)
from services.warranty_registry.registry.models import RegistryEvent, WarrantyRecord
from services.warranty_registry.registry.queries import QueryEngine
from services.warranty_registry.registry.store import RecordStore


logger = get_logger(__name__)


@contextmanager
def _log_rejection(operation: str, caller: str) -> Iterator[None]:
    try:
        yield
    except RegistryError as e:
        logger.warning(
            "registry_call_rejected",
            operation=operation,
            caller=caller,
            code=e.code,
            reason=e.message,
        )
        raise


class WarrantyRegistry:
    """
    Warranty registry deployed on a ledger.

    Features:
    - Admin-managed set of authorized issuers
    - Gapless, never-reused warranty ids starting at 1
    - Owner index of issued warranties
    - Expiry / active-window queries against block time
    - Recovery of native funds sent to the registry by mistake
    """

    def __init__(
        self,
        ledger: BlockchainClient,
        admin: str,
        contract_address: str,
    ) -> None:
        """
        Deploy a registry.

        Args:
            ledger: Ledger the registry runs on.
            admin: Deploying principal; becomes admin and an authorized issuer.
            contract_address: Address whose native balance the registry holds.
        """
        self.ledger = ledger
        self.contract_address = require_principal(contract_address, "contract_address")
        self.access = AccessController(admin)
        self.store = RecordStore(self.access)
        self.queries = QueryEngine(self.store)

        logger.info(
            "warranty_registry_deployed",
            admin=self.access.admin,
            contract_address=self.contract_address,
        )

    # =========================================================================
    # Access Control
    # =========================================================================

    @property
    def admin(self) -> str:
        return self.access.admin

    def is_admin(self, address: str) -> bool:
        return self.access.is_admin(parse_principal(address, "address"))

    def is_authorized_issuer(self, address: str) -> bool:
        return self.access.is_authorized_issuer(parse_principal(address, "address"))

    def authorized_issuers(self) -> list[str]:
        return self.access.authorized_issuers()

    async def authorize_issuer(self, ctx: ExecutionContext, issuer: str) -> str:
        """
        Allow ``issuer`` to create warranties.

        Args:
            ctx: Execution context; caller must be the admin.
            issuer: Address to authorize.

        Returns:
            The normalized issuer address.
        """
        with _log_rejection("authorize_issuer", ctx.caller):
            async with self.ledger.transaction(ctx) as tx:
                issuer = self.access.authorize_issuer(ctx.caller, issuer)
                tx.emit(RegistryEvent.ISSUER_AUTHORIZED.value, issuer=issuer)

        logger.info("issuer_authorized", issuer=issuer, admin=ctx.caller, tx_hash=tx.tx_hash)
        return issuer

    async def revoke_issuer(self, ctx: ExecutionContext, issuer: str) -> str:
        """
        Stop ``issuer`` from creating warranties.

        Warranties it already issued are unaffected.
        """
        with _log_rejection("revoke_issuer", ctx.caller):
            async with self.ledger.transaction(ctx) as tx:
                issuer = self.access.revoke_issuer(ctx.caller, issuer)
                tx.emit(RegistryEvent.ISSUER_REVOKED.value, issuer=issuer)

        logger.info("issuer_revoked", issuer=issuer, admin=ctx.caller, tx_hash=tx.tx_hash)
        return issuer

    async def transfer_admin(self, ctx: ExecutionContext, new_admin: str) -> str:
        """
        Hand the admin role to ``new_admin`` in one step.

        Returns:
            The normalized new admin address.
        """
        with _log_rejection("transfer_admin", ctx.caller):
            async with self.ledger.transaction(ctx) as tx:
                previous = self.access.transfer_admin(ctx.caller, new_admin)
                new_admin = self.access.admin
                tx.emit(
                    RegistryEvent.ADMIN_TRANSFERRED.value,
                    previous=previous,
                    new=new_admin,
                )

        logger.info(
            "admin_transferred",
            previous=previous,
            new=new_admin,
            tx_hash=tx.tx_hash,
        )
        return new_admin

    # =========================================================================
    # Warranty Records
    # =========================================================================

    async def create_warranty(
        self,
        ctx: ExecutionContext,
        owner: str,
        product_id: str,
        product_model: str,
        purchase_date: int,
        duration: int,
        terms_hash: str,
        extended: bool = False,
    ) -> int:
        """
        Issue a new warranty record.

        Args:
            ctx: Execution context; caller must be an authorized issuer.
            owner: Address the warranty is issued to.
            product_id: Serial number, SKU or UPC.
            product_model: Human-readable model name.
            purchase_date: Seconds since epoch.
            duration: Validity window in seconds.
            terms_hash: Hash or URI of the warranty terms.
            extended: Extended-warranty flag.

        Returns:
            The new warranty id.
        """
        with _log_rejection("create_warranty", ctx.caller):
            async with self.ledger.transaction(ctx) as tx:
                record = self.store.create(
                    ctx.caller,
                    owner=owner,
                    product_id=product_id,
                    product_model=product_model,
                    purchase_date=purchase_date,
                    duration=duration,
                    terms_hash=terms_hash,
                    extended=extended,
                )
                tx.emit(
                    RegistryEvent.RECORD_CREATED.value,
                    id=record.warranty_id,
                    issuer=record.issuer,
                    owner=record.owner,
                    productId=record.product_id,
                )

        logger.info(
            "warranty_created",
            warranty_id=record.warranty_id,
            issuer=record.issuer,
            owner=record.owner,
            product_id=record.product_id,
            tx_hash=tx.tx_hash,
        )
        return record.warranty_id

    async def get_warranty(self, warranty_id: int) -> WarrantyRecord:
        """Get warranty record by ID."""
        return self.store.get(warranty_id)

    async def get_warranties_by_owner(self, owner: str) -> list[int]:
        """Ids of the warranties issued to ``owner``, oldest first."""
        return self.store.ids_by_owner(owner)

    async def total_warranties(self) -> int:
        return self.store.total_count()

    async def expiry_of(self, warranty_id: int) -> int:
        return self.queries.expiry_of(warranty_id)

    async def is_warranty_active(
        self,
        warranty_id: int,
        at: int | None = None,
    ) -> bool:
        """
        Check whether a warranty is inside its validity window.

        Args:
            warranty_id: Warranty identifier.
            at: Timestamp to evaluate at; defaults to the current block time.
        """
        now = at if at is not None else await self.ledger.current_timestamp()
        return self.queries.is_active(warranty_id, now)

    # =========================================================================
    # Administrative Utility
    # =========================================================================

    async def rescue_funds(self, ctx: ExecutionContext, destination: str) -> int:
        """
        Move the registry's whole native balance to ``destination``.

        Returns:
            Amount transferred.

        Raises:
            TransferFailedError: If the ledger rejects the transfer.
        """
        with _log_rejection("rescue_funds", ctx.caller):
            async with self.ledger.transaction(ctx) as tx:
                self.access.require_admin(ctx.caller)
                destination = require_principal(destination, "destination")
                amount = await self.ledger.balance_of(self.contract_address)
                try:
                    tx.transfer(self.contract_address, destination, amount)
                except TransferRejectedError as e:
                    raise TransferFailedError(destination, amount, e.reason) from e
                tx.emit(
                    RegistryEvent.FUNDS_RESCUED.value,
                    destination=destination,
                    amount=amount,
                )

        logger.info(
            "funds_rescued",
            destination=destination,
            amount=amount,
            tx_hash=tx.tx_hash,
        )
        return amount
