"""택배 레포지토리 — 택배 테이블 쿼리.

Package Repository — Queries against the packages table.
Owns the tracking-number uniqueness mapping and the append-only
notes merge applied at check-out.
"""

from datetime import datetime, timezone
from typing import Any, Sequence

from sqlalchemy import case, literal, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.types import Text

from parcel_desk.models.package import Package, PackageStatus
from parcel_desk.repositories.base import BaseRepository, Predicate, store_operation
from parcel_desk.utils.exceptions import ConflictError, NotFoundError

# 비고 구분자 — 이스케이프 없음, 비고에 쉼표가 있으면 분리 시 모호함
# Notes delimiter; no escaping, so notes containing commas are ambiguous on split
NOTES_DELIMITER: str = ","


class PackageRepository(BaseRepository[Package]):
    """택배 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the packages table.
    Every public method translates store failures into StoreError.
    """

    def __init__(self) -> None:
        super().__init__(Package)

    @store_operation
    async def exists(self, db: AsyncSession, tracking_number: str) -> bool:
        """운송장 번호 존재 여부를 확인합니다 (전체 조회 없이).

        Return True iff a row with this tracking number is present.
        Uses a count query rather than fetching the row.
        """
        return await self.exists_by(db, {"tracking_number": tracking_number})

    @store_operation
    async def insert(self, db: AsyncSession, record: dict[str, Any]) -> Package:
        """새 택배를 RECEIVED 상태로 생성합니다.

        Create a new package row with status forced to RECEIVED.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record: 컬럼 값 딕셔너리 (Column values; any status is overridden)

        Returns:
            Package: 생성된 택배 (The created package)

        Raises:
            ConflictError: 운송장 번호가 이미 존재할 때 (Unique constraint violated)
            StoreError: 그 밖의 제약 위반 (Any other constraint violation)
        """
        data: dict[str, Any] = {**record, "status": PackageStatus.RECEIVED.value}
        tracking_number = record.get("tracking_number")
        try:
            return await self.create(db, data)
        except IntegrityError:
            await db.rollback()
            # 사전 확인과 삽입 사이의 경합만 충돌로 처리 — only a race on the tracking number is a conflict
            if tracking_number is not None and await self.exists_by(
                db, {"tracking_number": tracking_number}
            ):
                raise ConflictError(f"Package {tracking_number} is already checked in")
            raise

    @store_operation
    async def commit(self, db: AsyncSession) -> None:
        """현재 트랜잭션을 커밋합니다.

        Commit the session; a failure surfaces as StoreError like any other store call.
        """
        await db.commit()

    @store_operation
    async def find_by_tracking_number(
        self,
        db: AsyncSession,
        tracking_number: str,
    ) -> Package | None:
        """운송장 번호로 택배를 조회합니다.

        Retrieve a package by tracking number, or None if absent.
        """
        return await self.get_one_by(db, {"tracking_number": tracking_number})

    @store_operation
    async def search(
        self,
        db: AsyncSession,
        predicates: Sequence[Predicate],
    ) -> list[Package]:
        """검색 조건에 맞는 택배 목록을 조회합니다.

        Retrieve packages matching all predicates (logical AND), store-native order.
        """
        return await self.get_all(db, predicates)

    @store_operation
    async def list_all(self, db: AsyncSession) -> list[Package]:
        """전체 택배 목록을 조회합니다.

        Unfiltered dump of the packages table.
        """
        return await self.get_all(db)

    @store_operation
    async def mark_picked_up(
        self,
        db: AsyncSession,
        tracking_number: str,
        picked_up_by: str,
        additional_notes: str | None = None,
    ) -> Package:
        """택배를 수령 처리하고 비고를 이어 붙입니다.

        Mark a package as picked up in a single UPDATE statement.
        Sets status to PICKED_UP, stamps pickup_time and picked_up_by, and
        merges notes: ``existing + "," + additional`` when existing notes are
        non-empty, otherwise ``additional``. The current status is not checked,
        so repeated calls keep appending notes and advancing pickup_time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            tracking_number: 운송장 번호 (Tracking number)
            picked_up_by: 전달 직원 (Releasing staff member)
            additional_notes: 추가할 비고, None은 빈 문자열로 취급
                              (Notes to append; None is treated as "")

        Returns:
            Package: 수정된 택배 (The updated package)

        Raises:
            NotFoundError: 운송장 번호가 없을 때 (Unknown tracking number)
        """
        addition = literal(additional_notes or "", Text)
        merged_notes = case(
            (or_(Package.notes.is_(None), Package.notes == ""), addition),
            else_=Package.notes + NOTES_DELIMITER + addition,
        )
        stmt = (
            update(Package)
            .where(Package.tracking_number == tracking_number)
            .values(
                status=PackageStatus.PICKED_UP.value,
                pickup_time=datetime.now(timezone.utc),
                picked_up_by=picked_up_by,
                notes=merged_notes,
            )
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError(f"Package {tracking_number} not found")

        package: Package | None = await self.get_one_by(db, {"tracking_number": tracking_number})
        if package is None:
            raise NotFoundError(f"Package {tracking_number} not found")
        return package


# 싱글턴 인스턴스 — Singleton instance
package_repository: PackageRepository = PackageRepository()
