"""비밀번호 해싱 유틸리티 모듈.

Password hashing utility module.
Uses bcrypt directly for secure password storage; only hashing is needed,
since this service never checks credentials itself.
Passwords are never stored in plain text — always hashed with bcrypt.
"""

import bcrypt

from app.config import settings


def hash_password(password: str, rounds: int | None = None) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt.
    The resulting hash includes a random salt, making each hash unique
    even for identical passwords.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)
        rounds: bcrypt cost factor, 기본값은 설정값 (Defaults to settings.PASSWORD_HASH_ROUNDS)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)

    Example:
        hashed = hash_password("my-secret-password")
        # "$2b$12$LJ3m4ys3..."
    """
    cost: int = rounds if rounds is not None else settings.PASSWORD_HASH_ROUNDS
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("utf-8")
