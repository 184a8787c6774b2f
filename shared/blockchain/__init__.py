"""
Blockchain Module
=================

Abstraction layer for the ledger the warranty registry runs on.

Supports:
- Mock (development/testing)
- Testnet / Mainnet (not yet implemented)

Features:
- Execution context (caller address, block timestamp)
- Serialized all-or-nothing transactions
- Hash-chained event log
- Native balances and value transfer

Usage:
    from shared.blockchain import get_blockchain_client

    client = get_blockchain_client()

    ctx = await client.context(caller="0xabc...")
    async with client.transaction(ctx) as tx:
        tx.emit("IssuerAuthorized", issuer="0xdef...")

    events = await client.get_events(name="IssuerAuthorized")
"""

from shared.blockchain.address import (
    ZERO_ADDRESS,
    InvalidAddressError,
    is_valid_address,
    is_zero_address,
    normalize_address,
)
from shared.blockchain.client import (
    BlockchainClient,
    BlockchainError,
    ExecutionContext,
    LedgerEvent,
    Transaction,
    TransferRejectedError,
    get_blockchain_client,
    reset_blockchain_client,
    set_blockchain_client,
)
from shared.blockchain.mock import MockBlockchainClient

__all__ = [
    # Client
    "BlockchainClient",
    "Transaction",
    "get_blockchain_client",
    "set_blockchain_client",
    "reset_blockchain_client",
    # Models
    "ExecutionContext",
    "LedgerEvent",
    # Errors
    "BlockchainError",
    "TransferRejectedError",
    "InvalidAddressError",
    # Addresses
    "ZERO_ADDRESS",
    "is_valid_address",
    "is_zero_address",
    "normalize_address",
    # Implementations
    "MockBlockchainClient",
]
