"""택배 레포지토리 테스트.

Package repository tests — Uniqueness mapping, notes merge, predicates, store errors.
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from parcel_desk.models.package import Package, PackageStatus
from parcel_desk.repositories.base import Predicate
from parcel_desk.repositories.package_repository import package_repository
from parcel_desk.utils.exceptions import ConflictError, NotFoundError, StoreError


def _record(tracking_number: str = "T1", **overrides) -> dict:
    record = {
        "tracking_number": tracking_number,
        "carrier": "SF",
        "room_number": "101",
        "received_by": "Alice",
    }
    record.update(overrides)
    return record


class TestInsert:
    """삽입 테스트."""

    async def test_insert_forces_received(self, db: AsyncSession):
        """상태 값은 항상 RECEIVED로 강제."""
        package: Package = await package_repository.insert(
            db, _record(status=PackageStatus.PICKED_UP.value)
        )
        assert package.status == PackageStatus.RECEIVED
        assert package.pickup_time is None
        assert package.receive_time is not None
        assert package.guest_name == "unnamed"

    async def test_exists(self, db: AsyncSession):
        """존재 여부 확인."""
        assert await package_repository.exists(db, "T1") is False
        await package_repository.insert(db, _record())
        assert await package_repository.exists(db, "T1") is True

    async def test_duplicate_insert_maps_to_conflict(self, db: AsyncSession):
        """사전 확인 없이 중복 삽입 — 고유 제약 위반은 ConflictError."""
        await package_repository.insert(db, _record(notes="original"))
        await db.commit()

        with pytest.raises(ConflictError):
            await package_repository.insert(db, _record(carrier="YT"))

        package = await package_repository.find_by_tracking_number(db, "T1")
        assert package is not None
        assert package.carrier == "SF"
        assert package.notes == "original"


class TestMarkPickedUp:
    """수령 처리 테스트."""

    async def test_unknown_tracking_number(self, db: AsyncSession):
        """없는 운송장 번호는 NotFoundError."""
        with pytest.raises(NotFoundError):
            await package_repository.mark_picked_up(db, "NOPE", "Bob", "A")

    async def test_merge_rules(self, db: AsyncSession):
        """빈 비고는 새 비고로, 기존 비고에는 쉼표로 이어 붙임."""
        await package_repository.insert(db, _record(notes=""))

        package = await package_repository.mark_picked_up(db, "T1", "Bob", "A")
        assert package.notes == "A"
        package = await package_repository.mark_picked_up(db, "T1", "Bob", "B")
        assert package.notes == "A,B"
        assert package.status == PackageStatus.PICKED_UP
        assert package.picked_up_by == "Bob"
        assert package.pickup_time is not None

    async def test_absent_addition_on_existing_notes(self, db: AsyncSession):
        """추가 비고가 없으면 구분자만 붙음 (기존 동작 유지)."""
        await package_repository.insert(db, _record(notes="X"))
        package = await package_repository.mark_picked_up(db, "T1", "Bob", None)
        assert package.notes == "X,"


class TestSearchPredicates:
    """검색 조건 결합 테스트."""

    async def test_contains_and_eq(self, db: AsyncSession):
        """부분 일치와 정확 일치를 AND로 결합."""
        await package_repository.insert(db, _record("T1", carrier="SF Express"))
        await package_repository.insert(db, _record("T2", carrier="YT", room_number="102"))

        found = await package_repository.search(db, [Predicate("carrier", "contains", "Express")])
        assert [p.tracking_number for p in found] == ["T1"]

        found = await package_repository.search(db, [
            Predicate("room_number", "contains", "10"),
            Predicate("status", "eq", PackageStatus.RECEIVED.value),
        ])
        assert {p.tracking_number for p in found} == {"T1", "T2"}

        assert len(await package_repository.search(db, [])) == 2
        assert len(await package_repository.list_all(db)) == 2

    async def test_unknown_operator(self, db: AsyncSession):
        """알 수 없는 연산자는 ValueError."""
        with pytest.raises(ValueError):
            await package_repository.search(db, [Predicate("carrier", "startswith", "S")])


class TestStoreError:
    """저장소 오류 변환 테스트."""

    async def test_missing_table_is_store_error(self):
        """테이블이 없는 저장소 — StoreError, 원본 메시지 포함."""
        engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        try:
            async with factory() as session:
                with pytest.raises(StoreError) as exc_info:
                    await package_repository.list_all(session)
            assert exc_info.value.status_code == 500
            assert "packages" in exc_info.value.detail
        finally:
            await engine.dispose()


class TestInsertConstraintErrors:
    """고유 제약 외 제약 위반 테스트."""

    async def test_missing_carrier_is_store_error(self, db: AsyncSession):
        """NOT NULL 위반은 충돌이 아니라 StoreError."""
        with pytest.raises(StoreError) as exc_info:
            await package_repository.insert(db, {"tracking_number": "T9", "room_number": "1"})
        assert "carrier" in exc_info.value.detail
        assert await package_repository.exists(db, "T9") is False

    async def test_commit_failure_is_store_error(self, db: AsyncSession, monkeypatch):
        """커밋 실패도 StoreError로 변환."""
        async def _fail_commit() -> None:
            raise OperationalError("COMMIT", {}, Exception("connection lost"))

        monkeypatch.setattr(db, "commit", _fail_commit)
        with pytest.raises(StoreError) as exc_info:
            await package_repository.commit(db)
        assert "connection lost" in exc_info.value.detail
