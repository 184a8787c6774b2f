"""
Warranty Registry Shared Library
================================

Common utilities, configuration, and abstractions used by the registry
service.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - auth: JWT caller identification
    - blockchain: Ledger interface (mock/testnet/mainnet)
    - models: Shared Pydantic response models

Version: 0.1.0
"""

__version__ = "0.1.0"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
