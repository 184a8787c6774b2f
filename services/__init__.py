"""
Warranty Registry Services
==========================

Services:
- warranty_registry: append-only warranty records with issuer management
"""

__all__ = [
    "warranty_registry",
]
