"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.

Tables:
    - users: 관리 콘솔 사용자 계정 (Admin console user accounts)
"""

from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# 사용자 유형 — User type codes (1 = administrator, 2 = general user)
USER_TYPE_ADMIN: int = 1
USER_TYPE_GENERAL: int = 2


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    Email is globally unique and used as the login identifier.

    Attributes:
        id: 자동 증가 정수 식별자 (Auto-increment identifier)
        name: 표시 이름 (Display name)
        email: 이메일, 고유 (Email address, unique)
        password: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        status: 활성 상태 (Enabled flag)
        user_type: 사용자 유형 코드 (1=admin, 2=general)
        remark: 비고 (Free-text remark)
        login_ip: 마지막 로그인 IP (Last login IP address)
        login_time: 마지막 로그인 일시 (Last login timestamp)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    # 이메일 — 전역 고유 (Globally unique login identifier)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    user_type: Mapped[int] = mapped_column(Integer, nullable=False, default=USER_TYPE_GENERAL)
    remark: Mapped[str | None] = mapped_column(Text, nullable=True)
    login_ip: Mapped[str | None] = mapped_column(String(45), nullable=True)
    login_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
