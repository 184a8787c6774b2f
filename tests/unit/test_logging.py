"""
Unit tests for logging setup.
"""

import structlog

from shared.logging import bind_context, clear_context, transaction_context
from shared.logging.logger import _add_service_context, _censor_secrets


class TestProcessors:
    """Tests for the custom structlog processors."""

    def test_censor_secrets(self) -> None:
        event = _censor_secrets(
            None,
            "info",
            {
                "event": "token_issued",
                "access_token": "eyJ...",
                "Authorization": "Bearer eyJ...",
                "tx_hash": "0xabc",
                "caller": "0x00000000000000000000000000000000000000a1",
            },
        )

        assert event["access_token"] == "***REDACTED***"
        assert event["Authorization"] == "***REDACTED***"
        assert event["tx_hash"] == "0xabc"
        assert event["caller"].startswith("0x")

    def test_service_context(self) -> None:
        event = _add_service_context(None, "info", {"event": "x"})

        assert event["service"] == "warranty-registry"


class TestContext:
    """Tests for contextvars binding."""

    def test_transaction_context_is_scoped(self) -> None:
        clear_context()
        bind_context(caller="0xabc")

        with transaction_context("0xdead", 1_000):
            bound = structlog.contextvars.get_contextvars()
            assert bound == {"caller": "0xabc", "tx_hash": "0xdead", "block_time": 1_000}

        assert structlog.contextvars.get_contextvars() == {"caller": "0xabc"}
        clear_context()
