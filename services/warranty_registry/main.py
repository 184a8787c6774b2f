"""
Warranty Registry Service.

Main FastAPI application exposing warranty issuance, read-back,
issuer management and the notification log.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config.settings import get_settings
from shared.logging import clear_context, get_logger, setup_logging
from shared.models.common import ErrorResponse, HealthResponse
from services.warranty_registry.dependencies import RegistryDep, get_registry
from services.warranty_registry.registry import (
    ArithmeticOverflowError,
    InvalidArgumentError,
    InvalidWarrantyIdError,
    RegistryError,
    TransferFailedError,
    UnauthorizedError,
)
from services.warranty_registry.routes import (
    admin_router,
    issuers_router,
    warranties_router,
)


logger = get_logger(__name__)
settings = get_settings()

SERVICE_VERSION = "0.1.0"

_ERROR_STATUS: dict[type[RegistryError], int] = {
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    InvalidWarrantyIdError: status.HTTP_404_NOT_FOUND,
    ArithmeticOverflowError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    TransferFailedError: status.HTTP_502_BAD_GATEWAY,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging(
        log_level=settings.log_level.value,
        json_logs=settings.json_logs,
        service_name=settings.service_name,
    )
    registry = get_registry()
    await registry.ledger.connect()
    logger.info(
        "Starting warranty registry service",
        port=settings.registry.port,
        admin=registry.admin,
    )
    yield
    await registry.ledger.disconnect()
    logger.info("Shutting down warranty registry service")


app = FastAPI(
    title="Warranty Registry",
    description="Append-only registry of product warranty records",
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "warranties", "description": "Warranty issuance and read-back"},
        {"name": "issuers", "description": "Authorized issuer management"},
        {"name": "admin", "description": "Admin role, fund rescue and event log"},
        {"name": "health", "description": "Service health checks"},
    ],
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins_list or ["*"],
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(warranties_router, prefix="/api/v1")
app.include_router(issuers_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.middleware("http")
async def reset_log_context(request: Request, call_next):
    clear_context()
    return await call_next(request)


@app.exception_handler(RegistryError)
async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    """Translate registry rejections into error responses."""
    status_code = next(
        (code for cls, code in _ERROR_STATUS.items() if isinstance(exc, cls)),
        status.HTTP_400_BAD_REQUEST,
    )
    body = ErrorResponse(error=exc.message, error_code=exc.code)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check(registry: RegistryDep) -> HealthResponse:
    """Service health check endpoint."""
    return HealthResponse(
        service=settings.service_name,
        version=SERVICE_VERSION,
        components={
            "ledger": await registry.ledger.health_check(),
            "registry": {
                "status": "healthy",
                "admin": registry.admin,
                "warranties": await registry.total_warranties(),
            },
        },
    )


@app.get("/", tags=["health"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": "Warranty Registry",
        "description": "Append-only registry of product warranty records",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "services.warranty_registry.main:app",
        host="0.0.0.0",
        port=settings.registry.port,
        reload=settings.debug,
    )
