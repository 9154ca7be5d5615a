"""택배 Pydantic 요청/응답 스키마 정의.

Package request/response schema definitions.
Schemas describe the request shape only; required-field and
room-or-phone rules are enforced by PackageService so that library
callers and HTTP callers get the same InvalidInputError.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from parcel_desk.models.package import PackageStatus


class PackageCheckIn(BaseModel):
    """택배 접수 요청 스키마.

    Check-in request schema.
    tracking_number, carrier and received_by are required and at least
    one of room_number / guest_phone must be present.

    Attributes:
        tracking_number: 운송장 번호 (Carrier tracking number)
        carrier: 택배사 (Carrier name)
        guest_name: 투숙객 이름 (Guest name, optional)
        room_number: 객실 번호 (Room number, optional)
        guest_phone: 투숙객 연락처 (Guest phone, optional)
        received_by: 접수 직원 (Receiving staff member)
        notes: 비고 (Initial notes, optional)
    """

    tracking_number: str = ""  # 운송장 번호 (Tracking number)
    carrier: str = ""  # 택배사 (Carrier)
    guest_name: str | None = None  # 투숙객 이름 — 없으면 "unnamed" (Defaults to placeholder)
    room_number: str | None = None  # 객실 번호 (Room number)
    guest_phone: str | None = None  # 투숙객 연락처 (Guest phone)
    received_by: str = ""  # 접수 직원 (Receiving staff)
    notes: str | None = None  # 비고 (Notes)


class PackageCheckOut(BaseModel):
    """택배 수령 요청 스키마.

    Check-out request schema. Notes are appended to any existing notes.
    """

    tracking_number: str = ""  # 운송장 번호 (Tracking number)
    picked_up_by: str = ""  # 전달 직원 (Releasing staff)
    notes: str | None = None  # 추가 비고 (Notes to append)


class PackageSearchParams(BaseModel):
    """택배 검색 조건.

    Search criteria. Every field is optional; text fields match as
    substrings and status matches exactly. Criteria combine with AND.
    """

    tracking_number: str | None = None
    carrier: str | None = None
    guest_name: str | None = None
    room_number: str | None = None
    guest_phone: str | None = None
    status: PackageStatus | None = None


class PackageResponse(BaseModel):
    """택배 응답 스키마.

    Package response schema built from the ORM row.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    tracking_number: str
    carrier: str
    guest_name: str
    room_number: str | None
    guest_phone: str | None
    status: PackageStatus
    received_by: str
    picked_up_by: str | None
    receive_time: datetime
    pickup_time: datetime | None
    notes: str | None
