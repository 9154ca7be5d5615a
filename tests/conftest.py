"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh schema; the app's get_db dependency is overridden
with the test session.
"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from parcel_desk.database import Base, get_db, init_db
from parcel_desk.main import app
from parcel_desk.schemas.package import PackageCheckIn
from parcel_desk.services.package_service import package_service

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

URL = "/api/packages"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 스키마를 생성하고 종료 시 삭제합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(eng)
    yield eng
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
def checkin_payload(**overrides: str | None) -> dict[str, str | None]:
    """기본 접수 요청 본문을 만듭니다."""
    payload: dict[str, str | None] = {
        "tracking_number": "SF123",
        "carrier": "SF Express",
        "room_number": "305",
        "received_by": "Alice",
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def received_package(db: AsyncSession):
    """서비스를 통해 접수된 택배를 생성합니다 (비고 "X")."""
    package = await package_service.check_in(
        db, PackageCheckIn(**checkin_payload(tracking_number="YT900", carrier="YTO", notes="X"))
    )
    await db.commit()
    return package
