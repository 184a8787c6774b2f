"""Warranty registry API routes."""

from services.warranty_registry.routes.warranties import router as warranties_router
from services.warranty_registry.routes.issuers import router as issuers_router
from services.warranty_registry.routes.admin import router as admin_router

__all__ = [
    "warranties_router",
    "issuers_router",
    "admin_router",
]
