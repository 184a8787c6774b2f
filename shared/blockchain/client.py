"""
Blockchain Client Interface
===========================

Abstract base class and models for the ledger the warranty registry
runs on. The ledger supplies:

- an execution context (caller address, block timestamp)
- serialized, all-or-nothing transactions
- an append-only, hash-chained event log
- native balances and a value-transfer primitive

Version: 0.1.0
"""

import hashlib
import json
from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shared.blockchain.address import normalize_address
from shared.config import settings, BlockchainMode
from shared.logging import get_logger

logger = get_logger(__name__)


class BlockchainError(Exception):
    """Base class for ledger errors."""


class TransferRejectedError(BlockchainError):
    """Raised when the ledger refuses a value transfer."""

    def __init__(self, destination: str, amount: int, reason: str) -> None:
        super().__init__(
            f"Transfer of {amount} to {destination} rejected: {reason}"
        )
        self.destination = destination
        self.amount = amount
        self.reason = reason


class ExecutionContext(BaseModel):
    """Identity of the invoking principal and the time it acts at."""

    model_config = ConfigDict(frozen=True)

    caller: str = Field(..., description="Normalized address of the caller")
    timestamp: int = Field(..., ge=0, description="Block timestamp, seconds since epoch")

    @classmethod
    def for_caller(cls, caller: str, timestamp: int) -> "ExecutionContext":
        """Build a context, normalizing the caller address."""
        return cls(caller=normalize_address(caller), timestamp=timestamp)


class LedgerEvent(BaseModel):
    """A committed notification in the ledger's event log."""

    model_config = ConfigDict(frozen=True)

    name: str
    args: dict[str, Any] = Field(default_factory=dict)
    block_number: int
    log_index: int = Field(..., description="Position within the transaction")
    tx_hash: str
    timestamp: int
    previous_hash: str | None = Field(default=None, description="Hash of previous event")
    event_hash: str = ""

    def compute_hash(self) -> str:
        """SHA-256 over every field except ``event_hash`` itself."""
        payload = self.model_dump(exclude={"event_hash"})
        return hashlib.sha256(
            json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str).encode()
        ).hexdigest()


class Transaction(ABC):
    """
    Handle for one in-flight transaction.

    Events and transfers staged here become visible only when the
    transaction commits; a transaction that raises leaves no trace.
    """

    def __init__(self, context: ExecutionContext, tx_hash: str) -> None:
        self.context = context
        self.tx_hash = tx_hash
        self.pending_events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, name: str, **args: Any) -> None:
        """Stage an event for the log."""
        self.pending_events.append((name, args))

    @abstractmethod
    def transfer(self, source: str, destination: str, amount: int) -> None:
        """
        Stage a native value transfer.

        Raises:
            TransferRejectedError: If the ledger would refuse the transfer.
        """
        ...


class BlockchainClient(ABC):
    """
    Abstract base class for blockchain clients.

    Implements the Strategy pattern for different blockchain modes.
    """

    @property
    @abstractmethod
    def mode(self) -> BlockchainMode:
        """Get the blockchain mode."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the blockchain network."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the blockchain network."""
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Check blockchain health."""
        ...

    # =========================================================================
    # Execution Context
    # =========================================================================

    @abstractmethod
    async def current_timestamp(self) -> int:
        """Timestamp of the block the next transaction lands in."""
        ...

    async def context(self, caller: str) -> ExecutionContext:
        """Build an execution context for ``caller`` at the current block time."""
        return ExecutionContext.for_caller(caller, await self.current_timestamp())

    @abstractmethod
    def transaction(
        self,
        context: ExecutionContext,
    ) -> AbstractAsyncContextManager[Transaction]:
        """
        Open a serialized transaction.

        Usage:
            async with client.transaction(ctx) as tx:
                ...  # validate, mutate
                tx.emit("RecordCreated", id=1)

        Args:
            context: Caller and time the transaction executes with

        Returns:
            Async context manager yielding a Transaction. Staged events and
            transfers are committed on clean exit and discarded on error.
        """
        ...

    # =========================================================================
    # Event Log
    # =========================================================================

    @abstractmethod
    async def get_events(
        self,
        name: str | None = None,
        from_block: int | None = None,
        limit: int | None = None,
    ) -> list[LedgerEvent]:
        """
        Read committed events in commit order.

        Args:
            name: Only events with this name
            from_block: Only events at or after this block
            limit: Maximum events to return (oldest first)

        Returns:
            List of LedgerEvents, oldest first
        """
        ...

    @abstractmethod
    async def verify_event_chain(self) -> bool:
        """
        Recompute the event hash chain.

        Returns:
            True if no event has been altered, dropped or reordered
        """
        ...

    # =========================================================================
    # Native Balances
    # =========================================================================

    @abstractmethod
    async def balance_of(self, address: str) -> int:
        """
        Get the native balance held by an address.

        Args:
            address: Account address

        Returns:
            Balance in the ledger's smallest unit
        """
        ...


def seal_event(event: LedgerEvent) -> LedgerEvent:
    """Return a copy of ``event`` with its ``event_hash`` filled in."""
    return event.model_copy(update={"event_hash": event.compute_hash()})


def utc_timestamp() -> int:
    """Current wall-clock time in whole seconds."""
    return int(datetime.now(UTC).timestamp())


# Global client instance
_client: BlockchainClient | None = None


def get_blockchain_client() -> BlockchainClient:
    """
    Get the configured blockchain client instance.

    Returns:
        BlockchainClient instance based on settings
    """
    global _client

    if _client is None:
        mode = settings.blockchain.mode

        if mode == BlockchainMode.MOCK:
            from shared.blockchain.mock import MockBlockchainClient

            _client = MockBlockchainClient(
                genesis_timestamp=settings.blockchain.genesis_timestamp,
            )
        elif mode in (BlockchainMode.TESTNET, BlockchainMode.MAINNET):
            raise NotImplementedError(
                f"Blockchain mode '{mode.value}' not yet implemented. "
                "Use BLOCKCHAIN_MODE=mock for development."
            )
        else:
            raise ValueError(f"Unknown blockchain mode: {mode}")

        logger.info(
            "blockchain_client_initialized",
            mode=mode.value,
        )

    return _client


def set_blockchain_client(client: BlockchainClient) -> None:
    """
    Set a custom blockchain client.

    Args:
        client: BlockchainClient instance
    """
    global _client
    _client = client
    logger.info(
        "blockchain_client_set",
        mode=client.mode.value,
    )


def reset_blockchain_client() -> None:
    """Reset the client to be re-initialized."""
    global _client
    _client = None
