"""메뉴 SQLAlchemy ORM 모델 정의.

Menu SQLAlchemy ORM model definition.
Menus form a tree through the ``parent`` column (0 = top level).

Tables:
    - menus: 관리 콘솔 메뉴 항목 (Admin console navigation entries)
"""

from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Menu(Base):
    """메뉴 모델 — 관리 콘솔 내비게이션 항목.

    Menu model — Admin console navigation entry.

    Attributes:
        id: 자동 증가 정수 식별자 (Auto-increment identifier)
        name: 메뉴 이름, 고유 (Menu name, unique)
        key: 메뉴 키, 고유 (Menu key used by the frontend router, unique)
        url: 이동 경로 (Target URL)
        feature: 기능 코드 T/P/F (Feature code)
        status: 활성 상태 (Enabled flag)
        parent: 상위 메뉴 ID, 0이면 최상위 (Parent menu id, 0 for root)
        weight: 정렬 가중치 (Display ordering weight)
        remark: 비고 (Free-text remark)
    """

    __tablename__ = "menus"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    key: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    # T = 상단 탭 (top tab), P = 페이지 (page), F = 기능 버튼 (function)
    feature: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    parent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    weight: Mapped[int | None] = mapped_column(Integer, nullable=True)
    remark: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
