"""애플리케이션 환경 설정 모듈.

Application configuration module using pydantic-settings.
All settings can be overridden via environment variables or a .env file.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# .env 파일 절대 경로 — CWD와 무관하게 항상 프로젝트 루트의 .env를 참조
# Absolute path to .env file — ensures correct loading regardless of CWD
_ENV_FILE: Path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """애플리케이션 전역 설정 — 환경 변수 기반 구성.

    Global application settings loaded from environment variables.

    Attributes:
        DATABASE_URL: 비동기 DB 연결 문자열 (Async database URL, sqlite+aiosqlite or postgresql+asyncpg)
        DB_POOL_SIZE: 커넥션 풀 크기 (Connection pool size, ignored for SQLite)
        DB_MAX_OVERFLOW: 풀 초과 허용 연결 수 (Pool overflow, ignored for SQLite)
        CORS_ORIGINS: 허용된 CORS 출처 목록 (Allowed CORS origin URLs)
        APP_NAME: 애플리케이션 표시 이름 (Application display name)
        DEBUG: 디버그 모드 플래그 (Debug mode flag, enables SQL echo)
        LOG_LEVEL: 표준 로거 레벨 (Root logger level name)
    """

    # 데이터베이스 — 로컬은 SQLite, 운영은 PostgreSQL(asyncpg) 사용
    DATABASE_URL: str = "sqlite+aiosqlite:///./parcels.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # CORS 설정 — 프런트 데스크 단말 UI 출처 (Front-desk terminal UI origins)
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # 앱 메타데이터 — Application metadata
    APP_NAME: str = "Parcel Desk API"
    DEBUG: bool = False  # True이면 SQLAlchemy SQL 로그 출력 (Enables SQL echo when True)
    LOG_LEVEL: str = "INFO"

    # Axiom 로깅 설정 — Axiom observability platform settings
    AXIOM_API_TOKEN: str = ""  # Axiom API 토큰 (API token from Axiom dashboard)
    AXIOM_DATASET: str = ""  # Axiom 데이터셋 이름 (Dataset name for API logs)

    model_config = {"env_file": _ENV_FILE, "env_file_encoding": "utf-8"}


# 전역 설정 싱글턴 인스턴스 — Global settings singleton instance
settings: Settings = Settings()
