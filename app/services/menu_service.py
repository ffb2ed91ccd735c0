"""메뉴 서비스 — 메뉴 CRUD 비즈니스 로직.

Menu Service — Business logic for menu CRUD operations.
"""

from app.repositories.menu_repository import menu_repository
from app.schemas.menu import MenuResponse
from app.services.base import CrudService


class MenuService(CrudService[MenuResponse]):
    """메뉴 관련 비즈니스 로직을 처리하는 서비스 (Menu business logic)."""

    def __init__(self) -> None:
        super().__init__(menu_repository, MenuResponse)


# 싱글턴 인스턴스 — Singleton instance
menu_service: MenuService = MenuService()
