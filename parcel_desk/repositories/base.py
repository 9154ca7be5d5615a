"""기본 레포지토리 — 모든 레포지토리의 부모 클래스.

Base Repository — Parent class for domain repositories.
Provides generic create/read helpers, structured predicate folding for
ad-hoc searches, and translation of store failures into StoreError.

Usage:
    class PackageRepository(BaseRepository[Package]):
        def __init__(self) -> None:
            super().__init__(Package)
"""

import functools
from typing import Any, Awaitable, Callable, Generic, NamedTuple, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from parcel_desk.database import Base
from parcel_desk.utils.exceptions import StoreError

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)
T = TypeVar("T")


class Predicate(NamedTuple):
    """검색 조건 하나 — (필드, 연산자, 값).

    A single search constraint: (field, operator, value).
    Supported operators: "contains" (substring LIKE) and "eq" (exact match).
    """

    field: str
    op: str
    value: Any


def store_operation(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """저장소 오류를 StoreError로 변환하는 데코레이터.

    Decorator that re-raises any SQLAlchemyError escaping a repository
    coroutine as StoreError, with the underlying message attached.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise StoreError(f"{type(exc).__name__}: {exc}") from exc

    return wrapper


class BaseRepository(Generic[ModelType]):
    """제네릭 레포지토리.

    Generic repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        self.model: type[ModelType] = model

    async def get_one_by(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> ModelType | None:
        """조건에 맞는 단일 레코드를 조회합니다.

        Retrieve a single record matching all equality filters.
        Rows already in the session identity map are refreshed from the store.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 {'컬럼명': 값} (Equality filters)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).execution_options(populate_existing=True)
        for column_name, value in filters.items():
            query = query.where(getattr(self.model, column_name) == value)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(
        self,
        db: AsyncSession,
        predicates: Sequence[Predicate] = (),
    ) -> list[ModelType]:
        """조건에 맞는 모든 레코드를 조회합니다.

        Retrieve all records matching the given predicates, in store-native order.
        An empty predicate list matches every row.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            predicates: 검색 조건 목록 (Predicates combined with AND)

        Returns:
            list[ModelType]: 조회된 레코드 목록 (List of matching records)
        """
        query: Select = self.apply_predicates(select(self.model), predicates)
        result = await db.execute(query)
        return list(result.scalars().all())

    def apply_predicates(self, query: Select, predicates: Sequence[Predicate]) -> Select:
        """검색 조건을 쿼리에 AND로 결합합니다.

        Fold predicates into the query as parameterized WHERE clauses.
        "contains" uses LIKE with autoescape, so % and _ in the value match literally.

        Raises:
            ValueError: 알 수 없는 필드 또는 연산자 (Unknown field or operator)
        """
        for predicate in predicates:
            column = getattr(self.model, predicate.field, None)
            if column is None:
                raise ValueError(f"Unknown field: {predicate.field}")
            if predicate.op == "contains":
                query = query.where(column.contains(predicate.value, autoescape=True))
            elif predicate.op == "eq":
                query = query.where(column == predicate.value)
            else:
                raise ValueError(f"Unknown operator: {predicate.op}")
        return query

    async def create(
        self,
        db: AsyncSession,
        obj_data: dict[str, Any],
    ) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드 (The created record)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def exists_by(
        self,
        db: AsyncSession,
        filters: dict[str, Any],
    ) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching the given filters exists.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 검색 조건 딕셔너리 (Filter criteria dictionary)

        Returns:
            bool: 레코드 존재 여부 (Whether a matching record exists)
        """
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in filters.items():
            query = query.where(getattr(self.model, column_name) == value)

        count: int = (await db.execute(query)).scalar() or 0
        return count > 0
