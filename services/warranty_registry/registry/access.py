"""
Access Controller.

Tracks the single admin principal and the set of authorized issuers.
Every mutating registry operation passes through one of the two gates
here (``require_admin`` / ``require_issuer``) before touching state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shared.blockchain.address import (
    InvalidAddressError,
    is_zero_address,
    normalize_address,
)
from services.warranty_registry.registry.errors import (
    InvalidArgumentError,
    UnauthorizedError,
)


def parse_principal(value: str, argument: str) -> str:
    """Normalize an address supplied as ``argument``; the zero address is allowed."""
    try:
        return normalize_address(value)
    except InvalidAddressError as e:
        raise InvalidArgumentError(argument, "malformed address") from e


def require_principal(value: str, argument: str) -> str:
    """Normalize an address that must name a real principal."""
    address = parse_principal(value, argument)
    if is_zero_address(address):
        raise InvalidArgumentError(argument, "zero address")
    return address


@dataclass
class AccessState:
    """Admin identity plus the authorized issuer set."""

    admin: str
    issuers: set[str] = field(default_factory=set)


class AccessController:
    """
    Role enforcement for the registry.

    The deploying admin starts out as an authorized issuer. That flag is an
    ordinary one: the admin may revoke it, and transferring admin does not
    move it.
    """

    def __init__(self, admin: str) -> None:
        admin = require_principal(admin, "admin")
        self._state = AccessState(admin=admin, issuers={admin})

    @property
    def admin(self) -> str:
        return self._state.admin

    def is_admin(self, caller: str) -> bool:
        return caller.lower() == self._state.admin

    def is_authorized_issuer(self, caller: str) -> bool:
        return caller.lower() in self._state.issuers

    def authorized_issuers(self) -> list[str]:
        """Sorted snapshot of the issuer set."""
        return sorted(self._state.issuers)

    def require_admin(self, caller: str) -> None:
        if not self.is_admin(caller):
            raise UnauthorizedError(caller, "admin")

    def require_issuer(self, caller: str) -> None:
        if not self.is_authorized_issuer(caller):
            raise UnauthorizedError(caller, "issuer")

    def authorize_issuer(self, caller: str, target: str) -> str:
        """Grant issuer status to ``target``. Idempotent."""
        self.require_admin(caller)
        target = require_principal(target, "issuer")
        self._state.issuers.add(target)
        return target

    def revoke_issuer(self, caller: str, target: str) -> str:
        """Withdraw issuer status from ``target``. Idempotent."""
        self.require_admin(caller)
        target = require_principal(target, "issuer")
        self._state.issuers.discard(target)
        return target

    def transfer_admin(self, caller: str, new_admin: str) -> str:
        """Replace the admin immediately; returns the previous admin."""
        self.require_admin(caller)
        new_admin = require_principal(new_admin, "new_admin")
        previous = self._state.admin
        self._state.admin = new_admin
        return previous
