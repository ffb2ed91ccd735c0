"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Executes list/count QueryPlans and provides Create, Read, Update, Delete
operations that each run in a single transaction.

Records returned to callers are plain dicts restricted to the resource's
public projection, so storage internals (e.g. password hashes) never leave
the repository.

Usage:
    class MenuRepository(BaseRepository[Menu]):
        def __init__(self) -> None:
            super().__init__(Menu, MENU_COLUMNS, resource="Menu")
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, asc, desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.utils.change_events import (
    ACTION_CREATED,
    ACTION_DELETED,
    ACTION_UPDATED,
    ChangeEvent,
    ChangeNotifier,
    change_notifier,
)
from app.utils.exceptions import DuplicateError, InternalError
from app.utils.pagination import PageDescriptor
from app.utils.query_builder import (
    ColumnWhitelist,
    ContainsPredicate,
    EqualsPredicate,
    Predicate,
    QueryMode,
    QueryPlan,
    build_list_query,
)

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)

Record = dict[str, Any]


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
        whitelist: 공개 컬럼 화이트리스트 (Public column whitelist)
        resource: 오류 메시지용 리소스 이름 (Resource name for error messages)
        unique: 고유 제약 컬럼 — 모델의 unique=True 컬럼 (Unique columns, read from the ORM table)
    """

    def __init__(
        self,
        model: type[ModelType],
        whitelist: ColumnWhitelist,
        resource: str,
        unique: Sequence[str] | None = None,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self.model: type[ModelType] = model
        self.whitelist: ColumnWhitelist = whitelist
        self.resource: str = resource
        if unique is None:
            unique = [column.name for column in model.__table__.columns if column.unique]
        self.unique: tuple[str, ...] = tuple(unique)
        self._notifier: ChangeNotifier = notifier or change_notifier

    # ------------------------------------------------------------------
    # 쿼리 계획 컴파일 — QueryPlan compilation
    # ------------------------------------------------------------------

    def _column(self, name: str) -> Any:
        return getattr(self.model, name)

    def _predicate_clause(self, predicate: Predicate) -> Any:
        column = self._column(predicate.column)
        if isinstance(predicate, ContainsPredicate):
            return column.ilike(predicate.pattern, escape=predicate.escape)
        if isinstance(predicate, EqualsPredicate):
            return column == predicate.value
        raise TypeError(f"Unsupported predicate: {predicate!r}")

    def compile_plan(self, plan: QueryPlan) -> Select:
        """QueryPlan을 SQLAlchemy SELECT 문으로 변환합니다.

        Compile a QueryPlan into a SQLAlchemy statement. Predicates are
        applied in order; COUNT plans count the primary key only.
        """
        if plan.mode is QueryMode.COUNT:
            query: Select = select(func.count(self._column(plan.projection[0])))
        else:
            query = select(*(self._column(name) for name in plan.projection))

        for predicate in plan.predicates:
            query = query.where(self._predicate_clause(predicate))

        for order in plan.order_by:
            column = self._column(order.column)
            query = query.order_by(desc(column) if order.direction == "desc" else asc(column))

        if plan.offset is not None:
            query = query.offset(plan.offset)
        if plan.limit is not None:
            query = query.limit(plan.limit)
        return query

    def to_record(self, entity: ModelType) -> Record:
        """ORM 객체를 공개 컬럼 dict로 변환 (Project an entity onto public columns)."""
        return {name: getattr(entity, name) for name in self.whitelist.projection}

    # ------------------------------------------------------------------
    # 조회 — Read
    # ------------------------------------------------------------------

    async def list(self, db: AsyncSession, descriptor: PageDescriptor) -> list[Record]:
        """현재 페이지의 레코드 목록을 조회합니다.

        Fetch the current page of records for a descriptor.
        """
        plan = build_list_query(descriptor, self.whitelist, QueryMode.DATA)
        result = await db.execute(self.compile_plan(plan))
        return [dict(row) for row in result.mappings().all()]

    async def count(self, db: AsyncSession, descriptor: PageDescriptor) -> int:
        """페이지와 같은 조건의 전체 레코드 수를 조회합니다.

        Count all rows matching the descriptor's filters, ignoring pagination.
        """
        plan = build_list_query(descriptor, self.whitelist, QueryMode.COUNT)
        return (await db.execute(self.compile_plan(plan))).scalar() or 0

    async def list_page(self, db: AsyncSession, descriptor: PageDescriptor) -> tuple[list[Record], int]:
        """(레코드 목록, 전체 개수) — (Page of records, total count)."""
        items = await self.list(db, descriptor)
        total = await self.count(db, descriptor)
        return items, total

    async def get_entity(self, db: AsyncSession, record_id: int) -> ModelType | None:
        """ID로 ORM 객체를 조회합니다 (Load the full entity, internal use)."""
        return await db.get(self.model, record_id)

    async def get_by_id(self, db: AsyncSession, record_id: int) -> Record | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by id, projected onto public columns.

        Returns:
            Record | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(*(self._column(name) for name in self.whitelist.projection)).where(
            self._column(self.whitelist.primary_key) == record_id
        )
        row = (await db.execute(query)).mappings().first()
        return dict(row) if row is not None else None

    async def find_conflicts(
        self,
        db: AsyncSession,
        values: dict[str, Any],
        exclude_id: int | None = None,
    ) -> list[str]:
        """고유 컬럼 중 이미 사용 중인 값을 찾습니다.

        Return the unique columns whose value in ``values`` is already taken
        by another row. ``exclude_id`` skips the row being updated.
        """
        conflicts: list[str] = []
        pk = self._column(self.whitelist.primary_key)
        for column_name in self.unique:
            if values.get(column_name) is None:
                continue
            query: Select = select(func.count(pk)).where(self._column(column_name) == values[column_name])
            if exclude_id is not None:
                query = query.where(pk != exclude_id)
            if ((await db.execute(query)).scalar() or 0) > 0:
                conflicts.append(column_name)
        return conflicts

    # ------------------------------------------------------------------
    # 쓰기 — Write
    # ------------------------------------------------------------------

    def prepare_create(self, values: dict[str, Any]) -> dict[str, Any]:
        """저장 전 필드 변환 훅 (Field transformation before insert)."""
        return values

    def prepare_update(self, values: dict[str, Any]) -> dict[str, Any]:
        """저장 전 필드 변환 훅 (Field transformation before update)."""
        return values

    async def _commit(
        self,
        db: AsyncSession,
        values: dict[str, Any],
        exclude_id: int | None = None,
    ) -> None:
        """트랜잭션을 커밋하고, 실패 시 전체를 롤백합니다.

        Commit the pending write; on failure roll back so no partial write
        survives. Unique constraint violations become DuplicateError.
        """
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            conflicts = await self.find_conflicts(db, values, exclude_id) or list(self.unique)
            raise DuplicateError(self.duplicate_messages(conflicts))
        except SQLAlchemyError:
            await db.rollback()
            raise InternalError()

    def duplicate_messages(self, columns: Sequence[str]) -> dict[str, str]:
        messages: dict[str, str] = {}
        for column_name in columns:
            field = self.whitelist.public_name(column_name)
            messages[field] = f"The {field} has already been taken."
        return messages

    async def create(self, db: AsyncSession, values: dict[str, Any]) -> Record:
        """새 레코드를 생성합니다.

        Create a new record in a single transaction and publish a change event.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            values: 저장소 컬럼명 → 값 (Storage column → value)

        Returns:
            Record: 생성된 레코드 (The created record)

        Raises:
            DuplicateError: 고유 제약 위반 (Unique constraint violated)
        """
        data = self.prepare_create(dict(values))
        entity: ModelType = self.model(**data)
        db.add(entity)
        await self._commit(db, data)
        await db.refresh(entity)

        record = self.to_record(entity)
        self._notifier.publish(
            ChangeEvent(
                table=self.model.__tablename__,
                action=ACTION_CREATED,
                record_id=record[self.whitelist.primary_key],
                fields=tuple(data),
            )
        )
        return record

    async def update(
        self,
        db: AsyncSession,
        record_id: int,
        values: dict[str, Any],
    ) -> Record | None:
        """기존 레코드를 업데이트합니다.

        Update an existing record in a single transaction.

        Returns:
            Record | None: 업데이트된 레코드, 없으면 None (Updated record or None)

        Raises:
            DuplicateError: 고유 제약 위반 (Unique constraint violated)
        """
        entity: ModelType | None = await self.get_entity(db, record_id)
        if entity is None:
            return None

        data = self.prepare_update(dict(values))
        data.pop(self.whitelist.primary_key, None)
        for column_name, value in data.items():
            if hasattr(entity, column_name):
                setattr(entity, column_name, value)

        await self._commit(db, data, exclude_id=record_id)
        await db.refresh(entity)

        self._notifier.publish(
            ChangeEvent(
                table=self.model.__tablename__,
                action=ACTION_UPDATED,
                record_id=record_id,
                fields=tuple(data),
            )
        )
        return self.to_record(entity)

    async def delete_by_id(self, db: AsyncSession, record_id: int) -> bool:
        """레코드를 삭제합니다.

        Delete a record by id.

        Returns:
            bool: 삭제 여부, 없으면 False (False when the record does not exist)
        """
        entity: ModelType | None = await self.get_entity(db, record_id)
        if entity is None:
            return False

        await db.delete(entity)
        await self._commit(db, {})

        self._notifier.publish(
            ChangeEvent(table=self.model.__tablename__, action=ACTION_DELETED, record_id=record_id)
        )
        return True
