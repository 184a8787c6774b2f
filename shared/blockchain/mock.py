"""
Mock Blockchain Client
======================

In-memory mock implementation for development and testing.

Version: 0.1.0
"""

import asyncio
import hashlib
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from shared.blockchain.address import normalize_address
from shared.blockchain.client import (
    BlockchainClient,
    ExecutionContext,
    LedgerEvent,
    Transaction,
    TransferRejectedError,
    seal_event,
    utc_timestamp,
)
from shared.config import BlockchainMode
from shared.logging import get_logger, transaction_context

logger = get_logger(__name__)


class MockTransaction(Transaction):
    """Transaction against the in-memory ledger."""

    def __init__(
        self,
        client: "MockBlockchainClient",
        context: ExecutionContext,
        tx_hash: str,
    ) -> None:
        super().__init__(context, tx_hash)
        self._client = client
        self.pending_transfers: list[tuple[str, str, int]] = []

    def transfer(self, source: str, destination: str, amount: int) -> None:
        """Stage a transfer after checking the destination and balance."""
        source = normalize_address(source)
        destination = normalize_address(destination)

        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative, got {amount}")

        if destination in self._client._rejecting:
            raise TransferRejectedError(
                destination, amount, "destination does not accept funds"
            )

        staged = sum(a for s, _, a in self.pending_transfers if s == source)
        available = self._client._balances.get(source, 0) - staged
        if amount > available:
            raise TransferRejectedError(
                destination, amount, f"insufficient balance ({available})"
            )

        self.pending_transfers.append((source, destination, amount))


class MockBlockchainClient(BlockchainClient):
    """
    In-memory mock blockchain client.

    Simulates a single-node chain: every committed transaction mines one
    block and transactions are serialized by a lock. Without a genesis
    timestamp the block clock follows the wall clock; with one it only moves
    when a test moves it. Manual moves act as a floor either way, so the
    clock never runs backwards.

    Data is stored in memory and lost on restart.
    """

    def __init__(self, genesis_timestamp: int | None = None) -> None:
        """Initialize mock client with in-memory storage."""
        self._connected = False
        self._block_number = 1000
        self._genesis_timestamp = (
            genesis_timestamp if genesis_timestamp is not None else utc_timestamp()
        )
        self._timestamp = self._genesis_timestamp
        self._follows_wall_clock = genesis_timestamp is None
        self._lock = asyncio.Lock()

        # In-memory storage
        self._events: list[LedgerEvent] = []
        self._balances: dict[str, int] = {}
        self._rejecting: set[str] = set()

        logger.debug("mock_blockchain_initialized", timestamp=self._timestamp)

    @property
    def mode(self) -> BlockchainMode:
        return BlockchainMode.MOCK

    async def connect(self) -> None:
        """Simulate connection."""
        self._connected = True
        logger.info("mock_blockchain_connected")

    async def disconnect(self) -> None:
        """Simulate disconnection."""
        self._connected = False
        logger.info("mock_blockchain_disconnected")

    async def health_check(self) -> dict[str, Any]:
        """Check mock blockchain health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "connected": self._connected,
            "block_number": self._block_number,
            "timestamp": self._now(),
            "events": len(self._events),
        }

    def _generate_tx_hash(self) -> str:
        """Generate a mock transaction hash."""
        return "0x" + hashlib.sha256(uuid.uuid4().bytes).hexdigest()

    def _next_block(self) -> int:
        """Get next block number."""
        self._block_number += 1
        return self._block_number

    # =========================================================================
    # Execution Context
    # =========================================================================

    def _now(self) -> int:
        if self._follows_wall_clock:
            self._timestamp = max(utc_timestamp(), self._timestamp)
        return self._timestamp

    async def current_timestamp(self) -> int:
        return self._now()

    @asynccontextmanager
    async def transaction(
        self,
        context: ExecutionContext,
    ) -> AsyncIterator[MockTransaction]:
        """Run one serialized transaction; commit only on clean exit."""
        async with self._lock:
            tx = MockTransaction(self, context, self._generate_tx_hash())
            with transaction_context(tx.tx_hash, context.timestamp):
                try:
                    yield tx
                except Exception:
                    logger.debug("mock_transaction_reverted", caller=context.caller)
                    raise
                self._commit(tx)

    def _commit(self, tx: MockTransaction) -> None:
        """Mine a block holding the transaction's transfers and events."""
        block_number = self._next_block()

        for source, destination, amount in tx.pending_transfers:
            self._balances[source] = self._balances.get(source, 0) - amount
            self._balances[destination] = self._balances.get(destination, 0) + amount

        previous_hash = self._events[-1].event_hash if self._events else None
        for log_index, (name, args) in enumerate(tx.pending_events):
            event = seal_event(
                LedgerEvent(
                    name=name,
                    args=args,
                    block_number=block_number,
                    log_index=log_index,
                    tx_hash=tx.tx_hash,
                    timestamp=tx.context.timestamp,
                    previous_hash=previous_hash,
                )
            )
            self._events.append(event)
            previous_hash = event.event_hash

        logger.debug(
            "mock_transaction_committed",
            block_number=block_number,
            events=len(tx.pending_events),
            transfers=len(tx.pending_transfers),
        )

    # =========================================================================
    # Event Log
    # =========================================================================

    async def get_events(
        self,
        name: str | None = None,
        from_block: int | None = None,
        limit: int | None = None,
    ) -> list[LedgerEvent]:
        """Get committed events, oldest first."""
        events = [
            e
            for e in self._events
            if (name is None or e.name == name)
            and (from_block is None or e.block_number >= from_block)
        ]
        if limit is not None:
            events = events[:limit]
        return events

    async def verify_event_chain(self) -> bool:
        """Walk the log and recompute every link."""
        previous_hash = None
        for event in self._events:
            if event.previous_hash != previous_hash:
                logger.warning(
                    "mock_event_chain_broken",
                    block_number=event.block_number,
                    log_index=event.log_index,
                )
                return False
            if event.compute_hash() != event.event_hash:
                logger.warning(
                    "mock_event_hash_mismatch",
                    block_number=event.block_number,
                    log_index=event.log_index,
                )
                return False
            previous_hash = event.event_hash
        return True

    # =========================================================================
    # Native Balances
    # =========================================================================

    async def balance_of(self, address: str) -> int:
        return self._balances.get(normalize_address(address), 0)

    # =========================================================================
    # Test Utilities
    # =========================================================================

    def deposit(self, address: str, amount: int) -> None:
        """Credit native funds to an address outside any transaction."""
        address = normalize_address(address)
        self._balances[address] = self._balances.get(address, 0) + amount
        logger.debug("mock_funds_deposited", address=address, amount=amount)

    def reject_transfers_to(self, address: str) -> None:
        """Make every future transfer to ``address`` fail."""
        self._rejecting.add(normalize_address(address))

    def set_timestamp(self, timestamp: int) -> None:
        """Move the block clock to ``timestamp``; it never runs backwards."""
        current = self._now()
        if timestamp < current:
            raise ValueError(
                f"Block time cannot go backwards ({timestamp} < {current})"
            )
        self._timestamp = timestamp

    def advance_time(self, seconds: int) -> None:
        """Move the block clock forward."""
        self.set_timestamp(self._now() + seconds)

    def clear_all(self) -> None:
        """Clear all mock data (for testing)."""
        self._events.clear()
        self._balances.clear()
        self._rejecting.clear()
        self._block_number = 1000
        self._timestamp = self._genesis_timestamp
        logger.debug("mock_blockchain_cleared")

    def get_stats(self) -> dict[str, int]:
        """Get storage statistics."""
        return {
            "events": len(self._events),
            "accounts": len(self._balances),
            "block_number": self._block_number,
            "timestamp": self._now(),
        }
