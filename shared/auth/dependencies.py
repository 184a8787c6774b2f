"""
FastAPI Authentication Dependencies
===================================

Resolves the calling principal from the bearer token. Authorization
(admin / issuer checks) is enforced by the registry, not here.

Version: 0.1.0
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from pydantic import BaseModel, Field

from shared.auth.jwt import decode_token
from shared.blockchain.address import is_valid_address, normalize_address
from shared.logging import bind_context, get_logger


logger = get_logger(__name__)

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl="/auth/token",
    auto_error=False,
)


class Principal(BaseModel):
    """Authenticated caller."""

    address: str = Field(..., description="Normalized principal address")


async def get_current_principal(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Principal:
    """
    Extract and validate the calling principal from a JWT token.

    Args:
        token: JWT token from Authorization header

    Returns:
        Principal: Authenticated caller

    Raises:
        HTTPException: 401 if token is missing, invalid, or its subject is
            not an address
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if token is None:
        logger.warning("auth_token_missing")
        raise credentials_exception

    token_data = decode_token(token, verify_type="access")

    if token_data is None:
        logger.warning("auth_token_invalid")
        raise credentials_exception

    if not is_valid_address(token_data.sub):
        logger.warning("auth_subject_not_address", sub=token_data.sub)
        raise credentials_exception

    address = normalize_address(token_data.sub)
    bind_context(caller=address)
    logger.debug("principal_authenticated", caller=address)

    return Principal(address=address)
