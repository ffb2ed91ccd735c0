"""관리자 메뉴 라우터 — 메뉴 CRUD 엔드포인트.

Admin Menu Router — CRUD endpoints for menu management.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import RecordId, get_page_descriptor
from app.database import get_db
from app.schemas.common import ErrorResponse
from app.schemas.menu import MenuCreate, MenuResponse, MenuUpdate
from app.services.menu_service import menu_service
from app.utils.pagination import PageDescriptor
from app.utils.response import DataResponse, ListResponse, wrap

router: APIRouter = APIRouter()

_ERRORS: dict[int | str, dict[str, Any]] = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}


@router.get("", response_model=ListResponse[MenuResponse])
async def list_menus(
    db: Annotated[AsyncSession, Depends(get_db)],
    descriptor: Annotated[PageDescriptor, Depends(get_page_descriptor)],
) -> dict[str, Any]:
    """메뉴 목록을 페이지 단위로 조회합니다.

    List menus. ``search[name|key|url|feature|status|parent]`` filters;
    ``sortColumn`` accepts id, name, key, url, feature, status, parent,
    weight, createdAt, updatedAt.
    """
    items, meta = await menu_service.list_page(db, descriptor)
    return wrap(items, meta)


@router.get("/{menu_id}", response_model=DataResponse[MenuResponse], responses=_ERRORS)
async def get_menu(
    menu_id: RecordId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    return wrap(await menu_service.get(db, menu_id))


@router.post("", response_model=DataResponse[MenuResponse], status_code=201, responses=_ERRORS)
async def create_menu(
    payload: MenuCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """새 메뉴를 생성합니다.

    Create a menu. Body: name, key, url, feature (T|P|F), status,
    parent, weight, remark.
    """
    return wrap(await menu_service.create(db, payload))


@router.put("/{menu_id}", response_model=DataResponse[MenuResponse], responses=_ERRORS)
async def update_menu(
    menu_id: RecordId,
    payload: MenuUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    """메뉴 정보를 수정합니다 (Partially update a menu)."""
    return wrap(await menu_service.update(db, menu_id, payload))


@router.delete("/{menu_id}", response_model=DataResponse[None], responses=_ERRORS)
async def delete_menu(
    menu_id: RecordId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict[str, Any]:
    await menu_service.delete(db, menu_id)
    return wrap(None)
