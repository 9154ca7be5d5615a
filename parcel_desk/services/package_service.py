"""택배 수명주기 서비스 — 접수(check-in)와 수령(check-out).

Package Lifecycle Service — Check-in and check-out business logic.
Enforces required fields, the room-or-phone requirement, tracking-number
uniqueness and the RECEIVED → PICKED_UP transition.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from parcel_desk.models.package import Package
from parcel_desk.repositories.package_repository import PackageRepository, package_repository
from parcel_desk.schemas.package import PackageCheckIn, PackageCheckOut
from parcel_desk.utils.exceptions import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

# 투숙객 이름 기본값 — Placeholder guest name when none is given
UNNAMED_GUEST: str = "unnamed"


def _clean(value: str | None) -> str | None:
    """공백을 제거하고 빈 값은 None으로 바꿉니다."""
    if value is None:
        return None
    value = value.strip()
    return value or None


class PackageService:
    """택배 접수/수령 비즈니스 로직을 처리하는 서비스.

    Service handling the package lifecycle.
    The repository is injected so callers and tests can supply their own.
    """

    def __init__(self, repository: PackageRepository = package_repository) -> None:
        self.repository: PackageRepository = repository

    async def check_in(self, db: AsyncSession, data: PackageCheckIn) -> Package:
        """택배를 접수합니다.

        Record a parcel's arrival and associate it with a guest.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 접수 요청 데이터 (Check-in request data)

        Returns:
            Package: 생성된 택배, 상태 RECEIVED (Created package, status RECEIVED)

        Raises:
            InvalidInputError: 필수 항목 누락 또는 객실/연락처 모두 없음
                               (Missing required field, or neither room nor phone)
            ConflictError: 이미 접수된 운송장 번호 (Tracking number already checked in)
        """
        tracking_number = _clean(data.tracking_number)
        carrier = _clean(data.carrier)
        received_by = _clean(data.received_by)
        room_number = _clean(data.room_number)
        guest_phone = _clean(data.guest_phone)

        missing: list[str] = [
            name
            for name, value in (
                ("tracking_number", tracking_number),
                ("carrier", carrier),
                ("received_by", received_by),
            )
            if value is None
        ]
        messages: list[str] = []
        if missing:
            messages.append(f"Missing required field(s): {', '.join(missing)}")
        if room_number is None and guest_phone is None:
            missing += ["room_number", "guest_phone"]
            messages.append("At least one of room_number or guest_phone is required")
        if missing:
            logger.warning("Check-in rejected: %s", "; ".join(messages))
            raise InvalidInputError(missing, "; ".join(messages))

        # 중복 접수 확인 — Pre-check; the unique constraint still guards the insert
        if await self.repository.exists(db, tracking_number):
            logger.warning("Check-in rejected: %s already checked in", tracking_number)
            raise ConflictError(f"Package {tracking_number} is already checked in")

        package: Package = await self.repository.insert(
            db,
            {
                "tracking_number": tracking_number,
                "carrier": carrier,
                "guest_name": _clean(data.guest_name) or UNNAMED_GUEST,
                "room_number": room_number,
                "guest_phone": guest_phone,
                "received_by": received_by,
                "notes": _clean(data.notes),
            },
        )
        logger.info("Checked in %s (carrier=%s) by %s", tracking_number, carrier, received_by)
        return package

    async def check_out(self, db: AsyncSession, data: PackageCheckOut) -> Package:
        """택배를 수령 처리합니다.

        Record a parcel's release to the guest. Trimmed notes are appended to any
        existing notes; a repeated check-out is applied again, not rejected.

        Raises:
            InvalidInputError: 필수 항목 누락 (Missing tracking_number or picked_up_by)
            NotFoundError: 운송장 번호가 없을 때 (Unknown tracking number)
        """
        tracking_number = _clean(data.tracking_number)
        picked_up_by = _clean(data.picked_up_by)

        missing: list[str] = []
        if tracking_number is None:
            missing.append("tracking_number")
        if picked_up_by is None:
            missing.append("picked_up_by")
        if missing:
            logger.warning("Check-out rejected: missing %s", ", ".join(missing))
            raise InvalidInputError(missing, f"Missing required field(s): {', '.join(missing)}")

        existing: Package | None = await self.repository.find_by_tracking_number(db, tracking_number)
        if existing is None:
            logger.warning("Check-out rejected: %s not found", tracking_number)
            raise NotFoundError(f"Package {tracking_number} not found")

        package: Package = await self.repository.mark_picked_up(
            db, tracking_number, picked_up_by, _clean(data.notes)
        )
        logger.info("Checked out %s by %s", tracking_number, picked_up_by)
        return package

    async def get_package(self, db: AsyncSession, tracking_number: str) -> Package:
        """운송장 번호로 택배를 조회합니다.

        Raises:
            NotFoundError: 운송장 번호가 없을 때 (Unknown tracking number)
        """
        package: Package | None = await self.repository.find_by_tracking_number(db, tracking_number)
        if package is None:
            raise NotFoundError(f"Package {tracking_number} not found")
        return package

    async def commit(self, db: AsyncSession) -> None:
        """요청 단위 트랜잭션 커밋 — Commit the request's unit of work (StoreError on failure)."""
        await self.repository.commit(db)


# 싱글턴 인스턴스 — Singleton instance
package_service: PackageService = PackageService()
