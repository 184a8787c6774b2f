"""
Warranty Registry Test Suite
============================

Test organization:
- tests/unit/                        - Shared library tests (no external dependencies)
- tests/services/warranty_registry/  - Registry core and HTTP API tests

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
"""
