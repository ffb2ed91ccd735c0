"""메뉴 레포지토리 — 메뉴 CRUD 및 목록 쿼리.

Menu Repository — CRUD and list queries for menus.
"""

from typing import Any

from app.models.menu import Menu
from app.repositories.base import BaseRepository
from app.utils.query_builder import ColumnSpec, ColumnWhitelist, MatchKind

# 메뉴 공개 컬럼 — 검색/정렬 허용 목록 (Searchable/sortable public fields)
MENU_COLUMNS: ColumnWhitelist = ColumnWhitelist(
    {
        "id": ColumnSpec(column="id", value_type=int, searchable=False),
        "name": ColumnSpec(column="name", match=MatchKind.CONTAINS),
        "key": ColumnSpec(column="key", match=MatchKind.CONTAINS),
        "url": ColumnSpec(column="url", match=MatchKind.CONTAINS),
        "feature": ColumnSpec(column="feature"),
        "status": ColumnSpec(column="status", value_type=bool),
        "parent": ColumnSpec(column="parent", value_type=int),
        "weight": ColumnSpec(column="weight", value_type=int, searchable=False),
        "createdAt": ColumnSpec(column="created_at", searchable=False),
        "updatedAt": ColumnSpec(column="updated_at", searchable=False),
    },
    projection=(
        "id", "name", "key", "url", "feature", "status", "parent",
        "weight", "remark", "created_at", "updated_at",
    ),
)


class MenuRepository(BaseRepository[Menu]):
    """메뉴 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the menus table.
    """

    def __init__(self) -> None:
        super().__init__(Menu, MENU_COLUMNS, resource="Menu")

    def prepare_create(self, values: dict[str, Any]) -> dict[str, Any]:
        # 상위 메뉴 미지정 시 최상위 — Missing parent means top level
        if values.get("parent") is None:
            values["parent"] = 0
        return values

    def prepare_update(self, values: dict[str, Any]) -> dict[str, Any]:
        if "parent" in values and values["parent"] is None:
            values["parent"] = 0
        return values


# 싱글턴 인스턴스 — Singleton instance
menu_repository: MenuRepository = MenuRepository()
