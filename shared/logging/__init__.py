"""
Logging Module
==============

Structured logging using structlog with JSON output for production
and colored console output for development.

Usage:
    from shared.logging import get_logger, setup_logging

    # Setup at application start
    setup_logging()

    # Get logger for a module
    logger = get_logger(__name__)

    # Log with context
    logger.info("issuer_authorized", issuer="0xabc...", admin="0xdef...")
    logger.warning("registry_call_rejected", code="UNAUTHORIZED")
"""

from shared.logging.logger import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
    transaction_context,
)


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "transaction_context",
]
