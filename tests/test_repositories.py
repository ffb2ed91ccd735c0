"""레포지토리 및 변경 알림 테스트.

Repository-level tests — projection, storage-level unique violations,
post-commit change events, and seeding.
"""

import bcrypt
import pytest
from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.menu import Menu
from app.models.user import User, USER_TYPE_ADMIN
from app.repositories.menu_repository import menu_repository
from app.repositories.user_repository import user_repository
from app.seed import DEFAULT_MENUS, seed_data
from app.utils.change_events import (
    ACTION_CREATED,
    ACTION_DELETED,
    ACTION_UPDATED,
    ChangeEvent,
    ChangeNotifier,
    change_notifier,
)
from app.utils.exceptions import DuplicateError
from app.utils.pagination import normalize_page_query
from tests.conftest import stored_password

USER_VALUES = {
    "name": "repo",
    "email": "repo@example.com",
    "password": "plain-pass",
    "status": True,
    "user_type": 2,
}


@pytest.fixture
def events():
    """변경 이벤트 수집 — Collect published change events for one test."""
    received: list[ChangeEvent] = []
    change_notifier.subscribe(received.append)
    yield received
    change_notifier.unsubscribe(received.append)


class TestUserRepository:
    """사용자 레포지토리 테스트."""

    async def test_create_hashes_password(self, db: AsyncSession):
        record = await user_repository.create(db, dict(USER_VALUES))
        assert "password" not in record
        stored = await stored_password(db, record["id"])
        assert bcrypt.checkpw(b"plain-pass", stored.encode())

    async def test_unique_violation_rolls_back(self, db: AsyncSession):
        """DB 고유 제약 위반 → DuplicateError, 부분 저장 없음."""
        await user_repository.create(db, dict(USER_VALUES))
        with pytest.raises(DuplicateError) as exc:
            await user_repository.create(db, {**USER_VALUES, "name": "other"})
        assert exc.value.field_errors == {"email": "The email has already been taken."}

        total = (await db.execute(select(func.count(User.id)))).scalar()
        assert total == 1

    async def test_list_and_count_agree(self, db: AsyncSession, users):
        descriptor = normalize_page_query({"search[status]": "true", "limit": "2"})
        items, total = await user_repository.list_page(db, descriptor)
        assert len(items) == 2
        assert total == 3
        assert all(item["status"] is True for item in items)

    async def test_get_by_id_missing(self, db: AsyncSession):
        assert await user_repository.get_by_id(db, 12345) is None
        assert await user_repository.update(db, 12345, {"name": "x"}) is None
        assert await user_repository.delete_by_id(db, 12345) is False

    async def test_find_conflicts_excludes_self(self, db: AsyncSession, admin_user):
        assert await user_repository.find_conflicts(db, {"email": "admin@test.com"}) == ["email"]
        assert await user_repository.find_conflicts(db, {"email": "admin@test.com"}, exclude_id=admin_user.id) == []

    def test_unique_columns_from_model(self):
        """고유 컬럼은 ORM 모델의 unique 선언에서 가져옴."""
        assert user_repository.unique == ("email",)
        assert menu_repository.unique == ("name", "key")


class TestChangeEvents:
    """쓰기 후 변경 이벤트 발행 테스트."""

    async def test_create_update_delete_events(self, db: AsyncSession, events):
        record = await menu_repository.create(
            db, {"name": "m", "key": "m", "url": "/m", "feature": "P", "status": True}
        )
        await menu_repository.update(db, record["id"], {"weight": 4})
        await menu_repository.delete_by_id(db, record["id"])

        assert [(e.table, e.action, e.record_id) for e in events] == [
            ("menus", ACTION_CREATED, record["id"]),
            ("menus", ACTION_UPDATED, record["id"]),
            ("menus", ACTION_DELETED, record["id"]),
        ]
        assert events[1].fields == ("weight",)

    async def test_password_value_never_in_event(self, db: AsyncSession, events):
        await user_repository.create(db, dict(USER_VALUES))
        payload = events[0].as_dict()
        assert "password" in payload["fields"]
        assert "plain-pass" not in str(payload)

    def test_event_as_dict_is_json_safe(self):
        event = ChangeEvent(table="menus", action=ACTION_UPDATED, record_id=3, fields=("weight", "remark"))
        payload = event.as_dict()
        assert payload["fields"] == ["weight", "remark"]
        assert isinstance(payload["occurred_at"], str)

    def test_event_is_frozen(self):
        event = ChangeEvent(table="menus", action=ACTION_DELETED, record_id=3)
        with pytest.raises(ValidationError):
            event.action = ACTION_CREATED

    async def test_no_event_on_failed_write(self, db: AsyncSession, events, admin_user):
        with pytest.raises(DuplicateError):
            await user_repository.create(db, {**USER_VALUES, "email": "admin@test.com"})
        assert events == []

    def test_notifier_subscription(self):
        notifier = ChangeNotifier()
        seen: list[ChangeEvent] = []
        notifier.subscribe(seen.append)
        notifier.subscribe(seen.append)
        notifier.publish(ChangeEvent(table="users", action=ACTION_CREATED, record_id=1))
        assert len(seen) == 1

        notifier.clear()
        notifier.publish(ChangeEvent(table="users", action=ACTION_DELETED, record_id=1))
        assert len(seen) == 1


class TestSeed:
    """초기 데이터 시드 테스트."""

    async def test_seed_creates_admin_and_menus(self, db: AsyncSession):
        assert await seed_data(db) is True

        admin = (await db.execute(select(User).where(User.email == settings.SEED_ADMIN_EMAIL))).scalar_one()
        assert admin.user_type == USER_TYPE_ADMIN
        assert bcrypt.checkpw(settings.SEED_ADMIN_PASSWORD.encode(), admin.password.encode())

        total = (await db.execute(select(func.count(Menu.id)))).scalar()
        assert total == len(DEFAULT_MENUS)

    async def test_seed_is_idempotent(self, db: AsyncSession):
        await seed_data(db)
        assert await seed_data(db) is False
