"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh in-memory database (StaticPool keeps the single
connection alive), so no cleanup between tests is needed.
"""

import os

# 앱 임포트 전에 테스트 설정 적용 — Must run before app.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ["AXIOM_API_TOKEN"] = ""

from collections.abc import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import *  # noqa: F401,F403,E402 — register all models with metadata
from app.models.menu import Menu  # noqa: E402
from app.models.user import User, USER_TYPE_ADMIN, USER_TYPE_GENERAL  # noqa: E402
from app.utils.password import hash_password  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 새 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def make_user(
    db: AsyncSession,
    name: str,
    email: str,
    status: bool = True,
    user_type: int = USER_TYPE_GENERAL,
    password: str = "secret123",
) -> User:
    """테스트 사용자를 직접 삽입합니다."""
    user = User(
        name=name,
        email=email,
        password=hash_password(password),
        status=status,
        user_type=user_type,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def make_menu(
    db: AsyncSession,
    name: str,
    key: str,
    feature: str = "P",
    status: bool = True,
    parent: int = 0,
    weight: int | None = None,
) -> Menu:
    """테스트 메뉴를 직접 삽입합니다."""
    menu = Menu(
        name=name,
        key=key,
        url=f"/{key}",
        feature=feature,
        status=status,
        parent=parent,
        weight=weight,
    )
    db.add(menu)
    await db.commit()
    await db.refresh(menu)
    return menu


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    return await make_user(db, "admin", "admin@test.com", user_type=USER_TYPE_ADMIN, password="admin123!")


@pytest_asyncio.fixture
async def users(db: AsyncSession) -> list[User]:
    """검색/정렬 테스트용 사용자 5명 (Five users with varied fields)."""
    rows = [
        ("alice", "alice@example.com", True, USER_TYPE_ADMIN),
        ("bob", "bob@example.com", False, USER_TYPE_GENERAL),
        ("Foobar", "foobar@example.com", True, USER_TYPE_GENERAL),
        ("carol", "carol@sample.org", True, USER_TYPE_GENERAL),
        ("dave", "dave@sample.org", False, USER_TYPE_ADMIN),
    ]
    return [await make_user(db, name, email, status, user_type) for name, email, status, user_type in rows]


@pytest_asyncio.fixture
async def menus(db: AsyncSession) -> list[Menu]:
    """메뉴 트리 — 최상위 2개, 하위 3개 (Two root menus, three children)."""
    root_a = await make_menu(db, "dashboard", "dashboard", feature="T", weight=1)
    root_b = await make_menu(db, "settings", "settings", feature="T", weight=2)
    children = [
        await make_menu(db, "user list", "user-list", parent=root_b.id, weight=10),
        await make_menu(db, "menu list", "menu-list", parent=root_b.id, weight=20, status=False),
        await make_menu(db, "export", "export", feature="F", parent=root_a.id, weight=5),
    ]
    return [root_a, root_b, *children]


async def stored_password(db: AsyncSession, user_id: int) -> str:
    """저장된 비밀번호 해시를 직접 조회합니다 (Read the stored hash bypassing the projection)."""
    return (await db.execute(select(User.password).where(User.id == user_id))).scalar_one()
