"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates endpoint routers for inclusion in the
FastAPI application.

Included routers:
    - packages: 택배 접수/수령/검색 (Package check-in, check-out, search)
"""

from fastapi import APIRouter

from parcel_desk.api.packages import router as packages_router

api_router: APIRouter = APIRouter()
api_router.include_router(packages_router, prefix="/packages", tags=["Packages"])
