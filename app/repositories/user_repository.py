"""사용자 레포지토리 — 사용자 CRUD 및 목록 쿼리.

User Repository — CRUD and list queries for users.
Declares the public column whitelist for the users table and hashes
passwords before they are persisted.
"""

from typing import Any

from app.models.user import User
from app.repositories.base import BaseRepository
from app.utils.password import hash_password
from app.utils.query_builder import ColumnSpec, ColumnWhitelist, MatchKind

# 사용자 공개 컬럼 — 검색/정렬 허용 목록 (Searchable/sortable public fields)
USER_COLUMNS: ColumnWhitelist = ColumnWhitelist(
    {
        "id": ColumnSpec(column="id", value_type=int, searchable=False),
        "name": ColumnSpec(column="name", match=MatchKind.CONTAINS),
        "email": ColumnSpec(column="email", match=MatchKind.CONTAINS),
        "status": ColumnSpec(column="status", value_type=bool),
        "userType": ColumnSpec(column="user_type", value_type=int),
        "loginIp": ColumnSpec(column="login_ip", searchable=False),
        "loginTime": ColumnSpec(column="login_time", searchable=False),
        "createdAt": ColumnSpec(column="created_at", searchable=False),
        "updatedAt": ColumnSpec(column="updated_at", searchable=False),
    },
    # password 컬럼은 절대 조회하지 않음 — The password hash is never projected
    projection=(
        "id", "name", "email", "status", "user_type", "remark",
        "login_ip", "login_time", "created_at", "updated_at",
    ),
)


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User, USER_COLUMNS, resource="User")

    def prepare_create(self, values: dict[str, Any]) -> dict[str, Any]:
        """평문 비밀번호를 bcrypt 해시로 교체합니다 (Replace the plaintext password with its hash)."""
        values["password"] = hash_password(values["password"])
        return values

    def prepare_update(self, values: dict[str, Any]) -> dict[str, Any]:
        """비어 있는 비밀번호는 기존 해시를 유지합니다.

        An empty or missing password never overwrites the stored hash.
        """
        password = values.pop("password", None)
        if password:
            values["password"] = hash_password(password)
        return values


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
