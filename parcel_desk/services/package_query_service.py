"""택배 검색 서비스.

Package Query Service — Builds ad-hoc filtered searches from an open set
of optional criteria. Text criteria match as substrings, status matches
exactly, and all criteria combine with AND.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from parcel_desk.models.package import Package
from parcel_desk.repositories.base import Predicate
from parcel_desk.repositories.package_repository import PackageRepository, package_repository
from parcel_desk.schemas.package import PackageSearchParams

# 부분 일치 검색 필드 — Fields matched as substrings
SUBSTRING_FIELDS: tuple[str, ...] = (
    "tracking_number",
    "carrier",
    "guest_name",
    "room_number",
    "guest_phone",
)


def build_predicates(criteria: PackageSearchParams) -> list[Predicate]:
    """검색 조건을 Predicate 목록으로 변환합니다.

    Turn search criteria into structured predicates.
    Absent or empty criteria impose no constraint.
    """
    predicates: list[Predicate] = [
        Predicate(field, "contains", getattr(criteria, field))
        for field in SUBSTRING_FIELDS
        if getattr(criteria, field)
    ]
    if criteria.status is not None:
        predicates.append(Predicate("status", "eq", criteria.status.value))
    return predicates


class PackageQueryService:
    """택배 검색/목록 조회 서비스."""

    def __init__(self, repository: PackageRepository = package_repository) -> None:
        self.repository: PackageRepository = repository

    async def search(self, db: AsyncSession, criteria: PackageSearchParams) -> list[Package]:
        """조건에 맞는 택배를 저장소 기본 순서로 반환합니다.

        Return matching packages in store-native order; no ordering is guaranteed.
        """
        return await self.repository.search(db, build_predicates(criteria))

    async def list_all(self, db: AsyncSession) -> list[Package]:
        """전체 택배 목록 — 조건 없는 검색과 같습니다."""
        return await self.repository.list_all(db)


# 싱글턴 인스턴스 — Singleton instance
package_query_service: PackageQueryService = PackageQueryService()
