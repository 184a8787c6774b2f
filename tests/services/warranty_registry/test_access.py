"""Tests for the access controller."""

import pytest

from services.warranty_registry.registry.access import (
    AccessController,
    parse_principal,
    require_principal,
)
from services.warranty_registry.registry.errors import (
    InvalidArgumentError,
    UnauthorizedError,
)
from shared.blockchain import ZERO_ADDRESS
from tests.conftest import ADMIN, ISSUER, OUTSIDER


@pytest.fixture
def access() -> AccessController:
    return AccessController(ADMIN)


class TestAccessController:
    """Tests for AccessController."""

    def test_deployer_is_admin_and_issuer(self, access: AccessController) -> None:
        assert access.admin == ADMIN
        assert access.is_admin(ADMIN)
        assert access.is_authorized_issuer(ADMIN)
        assert access.authorized_issuers() == [ADMIN]

    def test_zero_admin_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            AccessController(ZERO_ADDRESS)

    def test_authorize_issuer(self, access: AccessController) -> None:
        assert access.authorize_issuer(ADMIN, ISSUER) == ISSUER
        assert access.is_authorized_issuer(ISSUER)

    def test_authorize_is_idempotent(self, access: AccessController) -> None:
        access.authorize_issuer(ADMIN, ISSUER)
        access.authorize_issuer(ADMIN, ISSUER)

        assert access.authorized_issuers() == sorted([ADMIN, ISSUER])

    def test_revoke_is_idempotent(self, access: AccessController) -> None:
        access.revoke_issuer(ADMIN, ISSUER)
        access.authorize_issuer(ADMIN, ISSUER)
        access.revoke_issuer(ADMIN, ISSUER)
        access.revoke_issuer(ADMIN, ISSUER)

        assert not access.is_authorized_issuer(ISSUER)

    def test_admin_can_revoke_own_issuer_flag(self, access: AccessController) -> None:
        access.revoke_issuer(ADMIN, ADMIN)

        assert access.is_admin(ADMIN)
        assert not access.is_authorized_issuer(ADMIN)
        assert access.authorized_issuers() == []

    @pytest.mark.parametrize("operation", ["authorize_issuer", "revoke_issuer", "transfer_admin"])
    def test_non_admin_rejected(self, access: AccessController, operation: str) -> None:
        with pytest.raises(UnauthorizedError) as exc_info:
            getattr(access, operation)(OUTSIDER, ISSUER)

        assert exc_info.value.code == "UNAUTHORIZED"
        assert access.admin == ADMIN
        assert access.authorized_issuers() == [ADMIN]

    @pytest.mark.parametrize("operation", ["authorize_issuer", "revoke_issuer", "transfer_admin"])
    def test_null_target_rejected(self, access: AccessController, operation: str) -> None:
        with pytest.raises(InvalidArgumentError):
            getattr(access, operation)(ADMIN, ZERO_ADDRESS)

        assert access.admin == ADMIN

    def test_unauthorized_checked_before_arguments(self, access: AccessController) -> None:
        with pytest.raises(UnauthorizedError):
            access.authorize_issuer(OUTSIDER, ZERO_ADDRESS)

    def test_transfer_admin(self, access: AccessController) -> None:
        previous = access.transfer_admin(ADMIN, OUTSIDER)

        assert previous == ADMIN
        assert access.admin == OUTSIDER
        assert not access.is_admin(ADMIN)
        # Issuer flag stays with the old admin
        assert access.is_authorized_issuer(ADMIN)
        assert not access.is_authorized_issuer(OUTSIDER)

        with pytest.raises(UnauthorizedError):
            access.authorize_issuer(ADMIN, ISSUER)

    def test_checks_ignore_address_case(self, access: AccessController) -> None:
        assert access.is_admin(ADMIN.replace("a1", "A1"))


class TestPrincipalValidation:
    """Tests for principal argument helpers."""

    def test_parse_allows_zero(self) -> None:
        assert parse_principal(ZERO_ADDRESS, "owner") == ZERO_ADDRESS

    def test_parse_rejects_malformed(self) -> None:
        with pytest.raises(InvalidArgumentError, match="owner: malformed address"):
            parse_principal("0x1234", "owner")

    def test_require_rejects_zero(self) -> None:
        with pytest.raises(InvalidArgumentError, match="zero address"):
            require_principal(ZERO_ADDRESS, "owner")
