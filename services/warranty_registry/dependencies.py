"""
Request dependencies for the warranty registry API.

Holds the process-wide registry instance, deployed lazily on the
configured ledger with the configured admin.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from shared.auth import Principal, get_current_principal
from shared.blockchain import ExecutionContext, get_blockchain_client
from shared.config import settings
from services.warranty_registry.registry import WarrantyRegistry


# Global registry instance
_registry: WarrantyRegistry | None = None


def get_registry() -> WarrantyRegistry:
    """Get the deployed registry, deploying it on first use."""
    global _registry

    if _registry is None:
        _registry = WarrantyRegistry(
            ledger=get_blockchain_client(),
            admin=settings.registry.admin_address,
            contract_address=settings.registry.contract_address,
        )

    return _registry


def set_registry(registry: WarrantyRegistry) -> None:
    """Replace the registry instance (tests, custom deployments)."""
    global _registry
    _registry = registry


def reset_registry() -> None:
    """Drop the registry so the next request deploys a fresh one."""
    global _registry
    _registry = None


async def get_execution_context(
    principal: Annotated[Principal, Depends(get_current_principal)],
    registry: Annotated[WarrantyRegistry, Depends(get_registry)],
) -> ExecutionContext:
    """Context for a mutating call: the authenticated caller at block time."""
    return await registry.ledger.context(principal.address)


RegistryDep = Annotated[WarrantyRegistry, Depends(get_registry)]
ContextDep = Annotated[ExecutionContext, Depends(get_execution_context)]
