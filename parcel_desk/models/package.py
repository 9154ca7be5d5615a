"""택배(Package) SQLAlchemy ORM 모델 정의.

Package SQLAlchemy ORM model definition.
One row per physical parcel held at the front desk on behalf of a guest.

Tables:
    - packages: 접수된 택배 (Parcels received for guests)
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from parcel_desk.database import Base


class PackageStatus(str, enum.Enum):
    """택배 상태.

    Package status. The only transition is RECEIVED → PICKED_UP.
    """

    RECEIVED = "RECEIVED"
    PICKED_UP = "PICKED_UP"


class Package(Base):
    """택배 모델 — 프런트 데스크에서 보관 중이거나 수령된 택배.

    Package model — A parcel held at, or released from, the front desk.
    Created only by check-in and mutated only by check-out. Never deleted.

    Attributes:
        id: 자동 증가 기본키 (Auto-increment primary key)
        tracking_number: 운송장 번호, 전역 고유 (Carrier tracking number, globally unique)
        carrier: 택배사 (Carrier name)
        guest_name: 투숙객 이름 (Guest name, "unnamed" placeholder when absent)
        room_number: 객실 번호 (Room number, optional)
        guest_phone: 투숙객 연락처 (Guest phone, optional)
        status: 상태 (RECEIVED or PICKED_UP)
        received_by: 접수 직원 (Staff member who accepted the parcel)
        picked_up_by: 전달 직원 (Staff member who released the parcel)
        receive_time: 접수 일시 UTC (Check-in timestamp)
        pickup_time: 수령 일시 UTC (Check-out timestamp, null until picked up)
        notes: 비고, 추가만 가능 (Free-text notes, append-only)
    """

    __tablename__ = "packages"

    # 기본키 — Store-assigned integer identity
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 운송장 번호 — Business identity, all lookups key on this
    tracking_number: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    carrier: Mapped[str] = mapped_column(String(50), nullable=False)

    # 투숙객 정보 — Guest information
    guest_name: Mapped[str] = mapped_column(String(100), nullable=False, default="unnamed")
    room_number: Mapped[str | None] = mapped_column(String(10), nullable=True)
    guest_phone: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # 상태 관리 — "RECEIVED" → "PICKED_UP"
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=PackageStatus.RECEIVED.value)
    receive_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    pickup_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # 담당 직원 — Front-desk staff on each side of the lifecycle
    received_by: Mapped[str] = mapped_column(String(50), nullable=False)
    picked_up_by: Mapped[str | None] = mapped_column(String(50), nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
