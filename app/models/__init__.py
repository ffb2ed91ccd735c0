"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations.

Modules:
    user: 사용자 계정 (User accounts)
    menu: 관리 콘솔 메뉴 (Admin console menus)
"""

from app.models.user import User
from app.models.menu import Menu

__all__ = [
    "User",
    "Menu",
]
