"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Provides pre-configured HTTPException subclasses for the error kinds the API
reports. Each carries a ``kind`` (rendered as ``error.kind`` in the response
envelope) and, where relevant, a field → message map.

Usage:
    from app.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("User", 42)
    raise DuplicateError({"email": "The email has already been taken."})
"""

from typing import Any

from fastapi import HTTPException, status

# 오류 종류 — Error kinds exposed as error.kind
KIND_VALIDATION: str = "ValidationError"
KIND_NOT_FOUND: str = "NotFound"
KIND_DUPLICATE: str = "DuplicateKey"
KIND_INTERNAL: str = "InternalError"


class AppError(HTTPException):
    """API 오류의 공통 부모 클래스.

    Common parent for API errors.

    Args:
        status_code: HTTP 상태 코드 (HTTP status code)
        kind: 오류 종류 (Error kind)
        message: 오류 메시지 (Human readable message)
        field_errors: 필드별 오류 메시지 (Per-field error messages, optional)
    """

    def __init__(
        self,
        status_code: int,
        kind: str,
        message: str,
        field_errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.kind: str = kind
        self.message: str = message
        self.field_errors: dict[str, str] | None = field_errors or None


class ValidationError(AppError):
    """422 Unprocessable Entity 예외 — 필드 검증 실패 시 사용.

    Raised when request fields fail their rule table (missing required field,
    type mismatch, enum violation, too long, pattern mismatch).
    """

    def __init__(
        self,
        field_errors: dict[str, str],
        message: str = "The given data was invalid.",
    ) -> None:
        super().__init__(422, KIND_VALIDATION, message, field_errors)


class NotFoundError(AppError):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Args:
        resource: 리소스 이름 (Resource name, e.g. "User")
        record_id: 조회한 식별자 (Requested identifier, optional)
    """

    def __init__(self, resource: str = "Resource", record_id: Any = None) -> None:
        message = f"{resource} not found" if record_id is None else f"{resource} {record_id} not found"
        super().__init__(status.HTTP_404_NOT_FOUND, KIND_NOT_FOUND, message)
        self.resource: str = resource
        self.record_id: Any = record_id


class DuplicateError(AppError):
    """409 Conflict 예외 — 고유 제약 위반 시 사용.

    Raised when a create/update would violate a uniqueness constraint.
    The offending fields are reported as field errors.
    """

    def __init__(
        self,
        field_errors: dict[str, str],
        message: str = "Duplicate value for a unique field.",
    ) -> None:
        super().__init__(status.HTTP_409_CONFLICT, KIND_DUPLICATE, message, field_errors)


class InternalError(AppError):
    """500 Internal Server Error 예외 — 예상치 못한 저장소 오류.

    The message is deliberately generic; internals never reach the client.
    """

    def __init__(self, message: str = "An unexpected error occurred.") -> None:
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, KIND_INTERNAL, message)
