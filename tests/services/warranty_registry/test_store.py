"""Tests for id allocation, the record store and expiry queries."""

import pytest

from services.warranty_registry.registry.access import AccessController
from services.warranty_registry.registry.allocator import IdentifierAllocator
from services.warranty_registry.registry.errors import (
    ArithmeticOverflowError,
    InvalidArgumentError,
    InvalidWarrantyIdError,
    UnauthorizedError,
)
from services.warranty_registry.registry.models import UINT256_MAX, WarrantyRecord
from services.warranty_registry.registry.queries import QueryEngine
from services.warranty_registry.registry.store import RecordStore
from shared.blockchain import ZERO_ADDRESS
from tests.conftest import ADMIN, ISSUER, OUTSIDER, OWNER


@pytest.fixture
def store() -> RecordStore:
    access = AccessController(ADMIN)
    access.authorize_issuer(ADMIN, ISSUER)
    return RecordStore(access)


@pytest.fixture
def queries(store: RecordStore) -> QueryEngine:
    return QueryEngine(store)


class TestIdentifierAllocator:
    """Tests for IdentifierAllocator."""

    def test_starts_at_one(self) -> None:
        allocator = IdentifierAllocator()

        assert allocator.highest == 0
        assert allocator.peek() == 1
        assert [allocator.allocate() for _ in range(3)] == [1, 2, 3]
        assert allocator.highest == 3

    def test_peek_does_not_advance(self) -> None:
        allocator = IdentifierAllocator()

        allocator.peek()
        allocator.peek()

        assert allocator.allocate() == 1


class TestRecordStore:
    """Tests for RecordStore."""

    def test_create_and_get(self, store: RecordStore, warranty_data: dict) -> None:
        record = store.create(ISSUER, **warranty_data)

        assert record == WarrantyRecord(warranty_id=1, issuer=ISSUER, **warranty_data)
        assert store.get(1) is record
        assert store.total_count() == 1

    def test_ids_gapless_across_failures(self, store: RecordStore, warranty_data: dict) -> None:
        ids = [store.create(ISSUER, **warranty_data).warranty_id]

        with pytest.raises(UnauthorizedError):
            store.create(OUTSIDER, **warranty_data)
        with pytest.raises(InvalidArgumentError):
            store.create(ISSUER, **{**warranty_data, "duration": 0})
        with pytest.raises(InvalidArgumentError):
            store.create(ISSUER, **{**warranty_data, "owner": ZERO_ADDRESS})

        ids.append(store.create(ISSUER, **warranty_data).warranty_id)
        ids.append(store.create(ADMIN, **warranty_data).warranty_id)

        assert ids == [1, 2, 3]
        assert store.total_count() == 3

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("duration", 0),
            ("duration", -5),
            ("duration", UINT256_MAX + 1),
            ("duration", True),
            ("purchase_date", -1),
            ("purchase_date", "1000"),
            ("owner", "0x1234"),
            ("product_id", None),
            ("terms_hash", 123),
            ("extended", "yes"),
        ],
    )
    def test_invalid_arguments(
        self, store: RecordStore, warranty_data: dict, field: str, value: object
    ) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            store.create(ISSUER, **{**warranty_data, field: value})

        assert exc_info.value.argument == field
        assert store.total_count() == 0

    def test_permissive_fields_accepted(self, store: RecordStore, warranty_data: dict) -> None:
        record = store.create(
            ISSUER,
            **{
                **warranty_data,
                "product_id": "",
                "terms_hash": "not a hash",
                "purchase_date": 0,
                "duration": UINT256_MAX,
            },
        )

        assert record.purchase_date == 0
        assert record.duration == UINT256_MAX

    @pytest.mark.parametrize("warranty_id", [0, -1, 2, 999, True])
    def test_get_invalid_id(self, store: RecordStore, warranty_data: dict, warranty_id: int) -> None:
        store.create(ISSUER, **warranty_data)

        with pytest.raises(InvalidWarrantyIdError) as exc_info:
            store.get(warranty_id)

        assert exc_info.value.code == "INVALID_WARRANTY_ID"

    def test_owner_index(self, store: RecordStore, warranty_data: dict) -> None:
        store.create(ISSUER, **warranty_data)
        store.create(ISSUER, **{**warranty_data, "owner": OUTSIDER})
        store.create(ISSUER, **{**warranty_data, "owner": OWNER.replace("c3", "C3")})

        assert store.ids_by_owner(OWNER) == [1, 3]
        assert store.ids_by_owner(OUTSIDER) == [2]
        assert store.ids_by_owner(ADMIN) == []
        assert store.ids_by_owner(ZERO_ADDRESS) == []

    def test_owner_index_returns_copy(self, store: RecordStore, warranty_data: dict) -> None:
        store.create(ISSUER, **warranty_data)

        store.ids_by_owner(OWNER).append(42)

        assert store.ids_by_owner(OWNER) == [1]

    def test_rebuild_owner_index(self, store: RecordStore, warranty_data: dict) -> None:
        for owner in (OWNER, OUTSIDER, OWNER, ADMIN):
            store.create(ISSUER, **{**warranty_data, "owner": owner})

        assert store.rebuild_owner_index() == {
            OWNER: [1, 3],
            OUTSIDER: [2],
            ADMIN: [4],
        }
        assert store.owner_index_consistent() is True

    def test_records_are_immutable(self, store: RecordStore, warranty_data: dict) -> None:
        record = store.create(ISSUER, **warranty_data)

        with pytest.raises(AttributeError):
            record.owner = OUTSIDER  # type: ignore[misc]

    def test_content_hash_stable(self, store: RecordStore, warranty_data: dict) -> None:
        first = store.create(ISSUER, **warranty_data)
        second = store.create(ISSUER, **warranty_data)

        assert first.content_hash() == store.get(1).content_hash()
        assert first.content_hash() != second.content_hash()
        assert len(first.content_hash()) == 64


class TestQueryEngine:
    """Tests for QueryEngine."""

    def test_expiry(self, store: RecordStore, queries: QueryEngine, warranty_data: dict) -> None:
        store.create(ISSUER, **warranty_data)

        assert queries.expiry_of(1) == 1_500

    @pytest.mark.parametrize(
        ("now", "active"),
        [(0, True), (999, True), (1_400, True), (1_500, True), (1_501, False), (1_600, False)],
    )
    def test_is_active(
        self,
        store: RecordStore,
        queries: QueryEngine,
        warranty_data: dict,
        now: int,
        active: bool,
    ) -> None:
        store.create(ISSUER, **warranty_data)

        assert queries.is_active(1, now) is active

    def test_overflow_fails(self, store: RecordStore, queries: QueryEngine, warranty_data: dict) -> None:
        store.create(
            ISSUER,
            **{**warranty_data, "purchase_date": UINT256_MAX, "duration": 1},
        )

        with pytest.raises(ArithmeticOverflowError) as exc_info:
            queries.is_active(1, 0)

        assert exc_info.value.code == "ARITHMETIC_OVERFLOW"

    def test_max_expiry_does_not_overflow(
        self, store: RecordStore, queries: QueryEngine, warranty_data: dict
    ) -> None:
        store.create(
            ISSUER,
            **{**warranty_data, "purchase_date": UINT256_MAX - 10, "duration": 10},
        )

        assert queries.expiry_of(1) == UINT256_MAX
        assert queries.is_active(1, UINT256_MAX) is True

    def test_unknown_id(self, queries: QueryEngine) -> None:
        with pytest.raises(InvalidWarrantyIdError):
            queries.is_active(1, 0)
