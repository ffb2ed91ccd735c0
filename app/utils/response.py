"""표준 JSON 응답 봉투 모듈.

Standardized JSON response envelope module.
Successful results are wrapped as ``{data, meta?}``; errors as
``{error: {kind, message, fieldErrors?}}``. No business logic lives here.
"""

from typing import Any, Generic, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.exceptions import (
    KIND_INTERNAL,
    KIND_NOT_FOUND,
    KIND_VALIDATION,
    AppError,
)
from app.utils.pagination import PageMeta
from app.utils.validation import field_errors

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """단건 응답 봉투: ``{ data: {...} }`` (Single-item envelope)."""

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class ListResponse(BaseModel, Generic[T]):
    """목록 응답 봉투: ``{ data: [...], meta: {...} }`` (Paginated list envelope)."""

    data: list[T]
    meta: PageMeta

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def wrap(payload: Any = None, meta: PageMeta | None = None) -> dict[str, Any]:
    """결과를 성공 봉투로 감쌉니다.

    Wrap a payload (model, list of models, mapping or None) into the success
    envelope, serialized with camelCase keys.
    """
    body: dict[str, Any] = {"data": jsonable_encoder(payload, by_alias=True)}
    if meta is not None:
        body["meta"] = meta.model_dump(by_alias=True)
    return body


def error_body(kind: str, message: str, field_errors: dict[str, str] | None = None) -> dict[str, Any]:
    """오류 봉투를 만듭니다 (Build the error envelope)."""
    error: dict[str, Any] = {"kind": kind, "message": message}
    if field_errors:
        error["fieldErrors"] = field_errors
    return {"error": error}


def _kind_for_status(status_code: int) -> str:
    if status_code == status.HTTP_404_NOT_FOUND:
        return KIND_NOT_FOUND
    if status_code >= 500:
        return KIND_INTERNAL
    return "HttpError"


def register_exception_handlers(app: FastAPI) -> None:
    """모든 예외 핸들러를 FastAPI 앱에 등록합니다.

    Attach exception handlers that render every error through the envelope.
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.kind, exc.message, exc.field_errors),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=error_body(KIND_VALIDATION, "The given data was invalid.", field_errors(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(_kind_for_status(exc.status_code), str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(KIND_INTERNAL, "An unexpected error occurred."),
        )
