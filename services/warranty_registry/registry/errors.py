"""Registry error taxonomy.

Every error rejects the whole operation: state and the event log are
left exactly as they were before the call.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for all warranty registry errors."""

    def __init__(self, message: str, code: str = "REGISTRY_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class UnauthorizedError(RegistryError):
    """
    Raised when the caller lacks the role an operation requires.

    Attributes:
        caller: Address of the rejected caller.
        required_role: "admin" or "issuer".
    """

    def __init__(self, caller: str, required_role: str) -> None:
        super().__init__(
            f"Caller {caller} is not the {required_role}"
            if required_role == "admin"
            else f"Caller {caller} is not an authorized {required_role}",
            code="UNAUTHORIZED",
        )
        self.caller = caller
        self.required_role = required_role


class InvalidArgumentError(RegistryError):
    """Raised for a null/malformed principal or an out-of-range number."""

    def __init__(self, argument: str, reason: str) -> None:
        super().__init__(f"Invalid {argument}: {reason}", code="INVALID_ARGUMENT")
        self.argument = argument
        self.reason = reason


class InvalidWarrantyIdError(RegistryError):
    """Raised when an id is not in ``1..total_count``."""

    def __init__(self, warranty_id: int, total: int) -> None:
        super().__init__(
            f"Warranty id {warranty_id} is invalid; {total} warranties exist",
            code="INVALID_WARRANTY_ID",
        )
        self.warranty_id = warranty_id
        self.total = total


class ArithmeticOverflowError(RegistryError):
    """Raised when the expiry of a warranty does not fit in 256 bits."""

    def __init__(self, warranty_id: int, purchase_date: int, duration: int) -> None:
        super().__init__(
            f"Expiry of warranty {warranty_id} overflows: "
            f"{purchase_date} + {duration} exceeds 2**256 - 1",
            code="ARITHMETIC_OVERFLOW",
        )
        self.warranty_id = warranty_id


class TransferFailedError(RegistryError):
    """Raised when the ledger rejects the rescue transfer."""

    def __init__(self, destination: str, amount: int, reason: str) -> None:
        super().__init__(
            f"Transfer of {amount} to {destination} failed: {reason}",
            code="TRANSFER_FAILED",
        )
        self.destination = destination
        self.amount = amount
