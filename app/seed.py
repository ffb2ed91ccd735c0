"""초기 데이터 시드 스크립트 — 관리자 계정 및 기본 메뉴 생성.

Seed script — Creates the first administrator and the default menus.
Run this script once to bootstrap the database with required initial data.

Usage:
    python -m app.seed

Creates:
    - 1개 관리자 계정: SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD (1 admin user)
    - 기본 메뉴: 사용자 관리, 메뉴 관리 (Default menus: users, menus)
"""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import async_session, engine, Base
from app.models import User
from app.models.user import USER_TYPE_ADMIN
from app.repositories.menu_repository import menu_repository
from app.repositories.user_repository import user_repository

# 기본 메뉴 — (name, key, url, feature, weight)
DEFAULT_MENUS: list[tuple[str, str, str, str, int]] = [
    ("User Management", "user", "/user", "P", 10),
    ("Menu Management", "menu", "/menu", "P", 20),
]


async def seed_data(db: AsyncSession) -> bool:
    """관리자 계정과 기본 메뉴를 생성합니다.

    Insert the admin user and default menus through the repositories so the
    password is hashed the same way as through the API.

    Returns:
        bool: 새로 시드했으면 True, 이미 시드된 경우 False (False when already seeded)
    """
    # 사용자가 하나라도 있으면 건너뜀 (Skip when any user exists)
    result = await db.execute(select(User.id).limit(1))
    if result.scalar_one_or_none() is not None:
        return False

    await user_repository.create(
        db,
        {
            "name": "System Admin",
            "email": settings.SEED_ADMIN_EMAIL,
            "password": settings.SEED_ADMIN_PASSWORD,
            "status": True,
            "user_type": USER_TYPE_ADMIN,
        },
    )
    for name, key, url, feature, weight in DEFAULT_MENUS:
        await menu_repository.create(
            db,
            {"name": name, "key": key, "url": url, "feature": feature, "status": True, "weight": weight},
        )
    return True


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Create tables if they don't exist, then insert the initial data.
    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        if not await seed_data(db):
            print("Already seeded. Skipping.")
            return
        print(f"Seeded: admin user={settings.SEED_ADMIN_EMAIL}, menus={len(DEFAULT_MENUS)}")


if __name__ == "__main__":
    asyncio.run(seed())
