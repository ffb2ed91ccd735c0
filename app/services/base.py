"""기본 CRUD 서비스 — 존재 확인, 고유성 검사, 응답 변환.

Base CRUD Service — Existence checks, uniqueness checks and response
conversion shared by the user and menu services.

Order of checks on writes: request schema (ValidationError, raised by FastAPI
before the route runs) → existence (NotFoundError) → uniqueness
(DuplicateError) → repository write.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from app.repositories.base import BaseRepository, Record
from app.schemas.common import PartialRequestModel, RequestModel
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.pagination import PageDescriptor, PageMeta

ResponseType = TypeVar("ResponseType", bound=BaseModel)


class CrudService(Generic[ResponseType]):
    """제네릭 CRUD 서비스.

    Attributes:
        repository: 대상 레포지토리 (Backing repository)
        response_model: 응답 스키마 (Response schema)
    """

    def __init__(
        self,
        repository: BaseRepository[Any],
        response_model: type[ResponseType],
    ) -> None:
        self.repository: BaseRepository[Any] = repository
        self.response_model: type[ResponseType] = response_model

    def _to_response(self, record: Record) -> ResponseType:
        return self.response_model.model_validate(record)

    async def _ensure_unique(
        self,
        db: AsyncSession,
        values: dict[str, Any],
        exclude_id: int | None = None,
    ) -> None:
        conflicts = await self.repository.find_conflicts(db, values, exclude_id)
        if conflicts:
            raise DuplicateError(self.repository.duplicate_messages(conflicts))

    async def list_page(
        self,
        db: AsyncSession,
        descriptor: PageDescriptor,
    ) -> tuple[list[ResponseType], PageMeta]:
        """목록 페이지와 페이지 메타데이터를 조회합니다.

        Return the current page of records and its PageMeta. Both queries are
        built from the same descriptor and therefore the same filters.
        """
        records, total = await self.repository.list_page(db, descriptor)
        return [self._to_response(r) for r in records], PageMeta.build(descriptor, total)

    async def get(self, db: AsyncSession, record_id: int) -> ResponseType:
        record = await self.repository.get_by_id(db, record_id)
        if record is None:
            raise NotFoundError(self.repository.resource, record_id)
        return self._to_response(record)

    async def create(self, db: AsyncSession, payload: RequestModel) -> ResponseType:
        """새 레코드를 생성합니다.

        Raises:
            DuplicateError: 고유 필드 중복 (Unique field already taken)
        """
        values = payload.model_dump()
        await self._ensure_unique(db, values)
        record = await self.repository.create(db, values)
        return self._to_response(record)

    async def update(self, db: AsyncSession, record_id: int, payload: PartialRequestModel) -> ResponseType:
        """레코드를 부분 수정합니다.

        Partial update: only the fields present in the payload change.
        Uniqueness checks exclude the record being updated.

        Raises:
            NotFoundError: 레코드 없음 (Record does not exist)
            DuplicateError: 고유 필드 중복 (Unique field already taken)
        """
        values = payload.model_dump(exclude_unset=True)
        if await self.repository.get_by_id(db, record_id) is None:
            raise NotFoundError(self.repository.resource, record_id)
        await self._ensure_unique(db, values, exclude_id=record_id)

        record = await self.repository.update(db, record_id, values)
        if record is None:
            raise NotFoundError(self.repository.resource, record_id)
        return self._to_response(record)

    async def delete(self, db: AsyncSession, record_id: int) -> None:
        deleted = await self.repository.delete_by_id(db, record_id)
        if not deleted:
            raise NotFoundError(self.repository.resource, record_id)
