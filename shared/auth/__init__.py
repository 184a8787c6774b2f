"""
Authentication Module
=====================

JWT-based caller identification for the warranty registry API.

Features:
- JWT token generation and validation
- FastAPI dependency resolving the calling principal address

Usage:
    from shared.auth import create_access_token, get_current_principal

    token = create_access_token({"sub": "0xabc..."})

    @app.post("/warranties")
    async def create(principal: Principal = Depends(get_current_principal)):
        return {"caller": principal.address}
"""

from shared.auth.jwt import (
    create_access_token,
    decode_token,
    TokenData,
)
from shared.auth.dependencies import (
    Principal,
    get_current_principal,
    oauth2_scheme,
)

__all__ = [
    # JWT
    "create_access_token",
    "decode_token",
    "TokenData",
    # Dependencies
    "Principal",
    "get_current_principal",
    "oauth2_scheme",
]
