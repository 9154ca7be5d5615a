"""택배 라우터 — 접수, 수령, 검색, 목록, 단건 조회 엔드포인트.

Package Router — Check-in, check-out, search, list and lookup endpoints.
Routers own the transaction boundary: they commit after a successful
service call and leave rollback to the session on error.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_desk.database import get_db
from parcel_desk.models.package import Package, PackageStatus
from parcel_desk.schemas.package import (
    PackageCheckIn,
    PackageCheckOut,
    PackageResponse,
    PackageSearchParams,
)
from parcel_desk.services.package_query_service import package_query_service
from parcel_desk.services.package_service import package_service

router: APIRouter = APIRouter()


@router.post("/checkin", response_model=PackageResponse, status_code=201)
async def check_in(
    data: PackageCheckIn,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    """택배를 접수합니다.

    Check a parcel in. 422 on missing fields, 409 if already checked in.
    """
    package: Package = await package_service.check_in(db, data)
    await package_service.commit(db)
    return PackageResponse.model_validate(package)


@router.post("/checkout", response_model=PackageResponse)
async def check_out(
    data: PackageCheckOut,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    """택배를 수령 처리합니다.

    Check a parcel out. 404 if the tracking number is unknown.
    """
    package: Package = await package_service.check_out(db, data)
    await package_service.commit(db)
    return PackageResponse.model_validate(package)


@router.get("/search", response_model=list[PackageResponse])
async def search_packages(
    db: Annotated[AsyncSession, Depends(get_db)],
    tracking_number: str | None = None,
    carrier: str | None = None,
    guest_name: str | None = None,
    room_number: str | None = None,
    guest_phone: str | None = None,
    status: PackageStatus | None = None,
) -> list[PackageResponse]:
    """조건으로 택배를 검색합니다. 모든 조건은 선택 사항.

    Search packages by optional criteria (substring match, exact status).
    """
    criteria = PackageSearchParams(
        tracking_number=tracking_number,
        carrier=carrier,
        guest_name=guest_name,
        room_number=room_number,
        guest_phone=guest_phone,
        status=status,
    )
    packages = await package_query_service.search(db, criteria)
    return [PackageResponse.model_validate(p) for p in packages]


@router.get("/getlist", response_model=list[PackageResponse])
async def list_packages(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[PackageResponse]:
    """전체 택배 목록을 조회합니다."""
    packages = await package_query_service.list_all(db)
    return [PackageResponse.model_validate(p) for p in packages]


@router.get("/{tracking_number}", response_model=PackageResponse)
async def get_package(
    tracking_number: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PackageResponse:
    """운송장 번호로 택배를 조회합니다.

    Look up a single package. 404 if the tracking number is unknown.
    """
    package: Package = await package_service.get_package(db, tracking_number)
    return PackageResponse.model_validate(package)
