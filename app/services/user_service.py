"""사용자 서비스 — 사용자 CRUD 비즈니스 로직.

User Service — Business logic for user CRUD operations.
Requests arrive as UserCreate / UserUpdate; password hashing happens in the repository.
"""

from app.repositories.user_repository import user_repository
from app.schemas.user import UserResponse
from app.services.base import CrudService


class UserService(CrudService[UserResponse]):
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.
    """

    def __init__(self) -> None:
        super().__init__(user_repository, UserResponse)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
