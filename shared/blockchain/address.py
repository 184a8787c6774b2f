"""
Address Helpers
===============

Principal addresses are 20-byte hex strings (``0x`` + 40 hex digits).
They compare case-insensitively, so every address entering the system
is normalized to lowercase.

Version: 0.1.0
"""

import re

ZERO_ADDRESS = "0x" + "0" * 40

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


class InvalidAddressError(ValueError):
    """Raised when a string is not a well-formed address."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Malformed address: {value!r}")
        self.value = value


def is_valid_address(value: object) -> bool:
    """Check that ``value`` is a well-formed address string."""
    return isinstance(value, str) and bool(_ADDRESS_RE.match(value))


def normalize_address(value: object) -> str:
    """
    Validate and lowercase an address.

    Raises:
        InvalidAddressError: If the value is not a well-formed address.
    """
    if not is_valid_address(value):
        raise InvalidAddressError(value)
    return str(value).lower()


def is_zero_address(value: str) -> bool:
    """Check whether ``value`` is the null principal."""
    return value.lower() == ZERO_ADDRESS
