"""
Test Configuration
==================

Pytest fixtures for warranty registry tests.
"""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["BLOCKCHAIN_MODE"] = "mock"

ADMIN = "0x00000000000000000000000000000000000000a1"
ISSUER = "0x00000000000000000000000000000000000000b2"
OWNER = "0x00000000000000000000000000000000000000c3"
OUTSIDER = "0x00000000000000000000000000000000000000d4"
CONTRACT = "0x0000000000000000000000000000000000c0ffee"

GENESIS_TIMESTAMP = 1_000


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def ledger():
    """Fresh in-memory ledger with a fixed clock."""
    from shared.blockchain import MockBlockchainClient

    return MockBlockchainClient(genesis_timestamp=GENESIS_TIMESTAMP)


@pytest.fixture
def registry(ledger):
    """Registry deployed by ADMIN on the mock ledger."""
    from services.warranty_registry.registry import WarrantyRegistry

    return WarrantyRegistry(ledger=ledger, admin=ADMIN, contract_address=CONTRACT)


@pytest.fixture
def warranty_data() -> dict:
    """Sample warranty fields for tests."""
    return {
        "owner": OWNER,
        "product_id": "SN-123456789",
        "product_model": "Model X100 Laptop",
        "purchase_date": 1_000,
        "duration": 500,
        "terms_hash": "ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi",
        "extended": False,
    }


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Generate bearer headers for a principal address."""
    from shared.auth import create_access_token

    def _headers(address: str) -> dict[str, str]:
        token = create_access_token({"sub": address})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest_asyncio.fixture
async def registry_client(registry) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the warranty registry service."""
    from services.warranty_registry.dependencies import reset_registry, set_registry
    from services.warranty_registry.main import app

    set_registry(registry)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    reset_registry()
