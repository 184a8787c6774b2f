"""
Shared Models
=============

Pydantic models shared across service APIs.

Models:
- ErrorResponse: body of every rejected request
- HealthResponse: service health check
"""

from shared.models.common import (
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
]
