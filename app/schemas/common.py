"""공통 Pydantic 스키마 정의.

Common Pydantic schema definitions shared by all resources: the request
body bases and the envelope models documented on every endpoint.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError


class RequestModel(BaseModel):
    """요청 본문 베이스 — camelCase 키로 입력받고 모르는 키는 무시합니다.

    Request body base. Keys arrive in camelCase (``userType``); field names
    are the storage column names, so ``model_dump()`` is ready for the
    repository.
    """

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class PartialRequestModel(RequestModel):
    """부분 수정 요청 베이스.

    Partial update base. Every field is optional and only the keys present in
    the body are written (``model_dump(exclude_unset=True)``). An explicit
    null is accepted only for the fields listed in ``nullable``.
    """

    nullable: ClassVar[frozenset[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable:
            raise PydanticCustomError("not_null", "Value may not be null")
        return value


class HealthResponse(BaseModel):
    """서버 상태 응답 (Health check response)."""

    status: str


class ErrorDetail(BaseModel):
    """오류 본문 — ``error`` 키의 값 (Body of the ``error`` key).

    Attributes:
        kind: 오류 종류 (ValidationError, NotFound, DuplicateKey, InternalError)
        message: 오류 메시지 (Human readable message)
        fieldErrors: 필드별 오류 (Per-field messages, optional)
    """

    kind: str
    message: str
    fieldErrors: dict[str, str] | None = None


class ErrorResponse(BaseModel):
    """오류 응답 봉투 (Error envelope), documented on every endpoint."""

    error: ErrorDetail
