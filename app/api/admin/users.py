"""관리자 사용자 라우터 — 사용자 CRUD 엔드포인트.

Admin User Router — CRUD endpoints for user management.
Provides paged user listing with search/sort, detail retrieval, creation,
partial update and deletion.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import RecordId, get_page_descriptor
from app.database import get_db
from app.schemas.common import ErrorResponse
from app.schemas.user import UserCreate, UserResponse, UserUpdate
from app.services.user_service import user_service
from app.utils.pagination import PageDescriptor
from app.utils.response import DataResponse, ListResponse, wrap

router: APIRouter = APIRouter()

_ERRORS: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


@router.get("", response_model=ListResponse[UserResponse])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    descriptor: Annotated[PageDescriptor, Depends(get_page_descriptor)],
) -> dict[str, Any]:
    """사용자 목록을 페이지 단위로 조회합니다.

    List users. Query: ``page``, ``limit``, ``sort`` (asc|desc),
    ``sortColumn`` (id, name, email, status, userType, loginIp, loginTime,
    createdAt, updatedAt) and ``search[name|email|status|userType]``.
    """
    items, meta = await user_service.list_page(db, descriptor)
    return wrap(items, meta)


@router.get("/{user_id}", response_model=DataResponse[UserResponse], responses=_ERRORS)
async def get_user(
    user_id: RecordId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """사용자 상세 정보를 조회합니다.

    Retrieve a single user.
    """
    return wrap(await user_service.get(db, user_id))


@router.post("", response_model=DataResponse[UserResponse], status_code=201, responses=_ERRORS)
async def create_user(
    payload: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """새 사용자를 생성합니다.

    Create a user. Body: name, email, password, status, userType, remark.
    """
    return wrap(await user_service.create(db, payload))


@router.put("/{user_id}", response_model=DataResponse[UserResponse], responses=_ERRORS)
async def update_user(
    user_id: RecordId,
    payload: UserUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """사용자 정보를 수정합니다.

    Partially update a user. An empty password keeps the current one.
    """
    return wrap(await user_service.update(db, user_id, payload))


@router.delete("/{user_id}", response_model=DataResponse[None], responses=_ERRORS)
async def delete_user(
    user_id: RecordId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """사용자를 삭제합니다 (Delete a user)."""
    await user_service.delete(db, user_id)
    return wrap(None)
