"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Every admin API call becomes one Axiom event: method, path, masked query
string and body, path params, status code and duration. Error responses
add the envelope's ``kind``, ``message`` and the names of rejected fields.
Values under credential-like keys never leave the process.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

# 마스킹 대상 키 — Keys whose values are replaced by MASK
SENSITIVE_KEYS = re.compile(r"pass(word|wd)?|secret|token|authorization|api_?key|credential", re.IGNORECASE)
MASK = "***"

# 문서/헬스체크는 기록하지 않음 — Health and docs routes are not logged
SKIP_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json"})

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})
_MAX_DEPTH = 5
_MAX_ITEMS = 20
_MAX_TEXT = 500


def _clip(text: str, limit: int = _MAX_TEXT) -> str:
    return text if len(text) <= limit else f"{text[:limit]}...(truncated)"


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 값 마스킹 및 크기 제한.

    Copy ``data`` with credential-like keys masked, lists capped at
    ``_MAX_ITEMS``, long strings clipped and nesting cut at ``_MAX_DEPTH``.
    """
    if depth > _MAX_DEPTH:
        return "..."
    if isinstance(data, dict):
        return {
            key: MASK if SENSITIVE_KEYS.search(str(key)) else mask_sensitive(value, depth + 1)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:_MAX_ITEMS]]
    if isinstance(data, str):
        return _clip(data, _MAX_TEXT * 4)
    return data


async def request_event(request: Request) -> dict[str, Any]:
    """요청 정보로 로그 이벤트의 기본 필드를 만듭니다."""
    event: dict[str, Any] = {"method": request.method, "path": request.url.path}
    if request.query_params:
        event["query_params"] = mask_sensitive(dict(request.query_params))
    if request.method in _BODY_METHODS:
        raw = await request.body()
        if raw:
            try:
                event["request_body"] = mask_sensitive(json.loads(raw))
            except (json.JSONDecodeError, UnicodeDecodeError):
                event["request_body"] = "(non-json body)"
    return event


def error_summary(body: bytes) -> dict[str, Any]:
    """오류 응답 봉투에서 종류와 메시지를 추출합니다.

    Extract ``error.kind``, ``error.message`` and the names (never values)
    of fields with errors from an error envelope.
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {"error": _clip(body.decode("utf-8", errors="replace"))}

    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return {"error": _clip(str(payload))}

    summary: dict[str, Any] = {
        "error_kind": error.get("kind"),
        "error": _clip(str(error.get("message", ""))),
    }
    if isinstance(error.get("fieldErrors"), dict):
        summary["error_fields"] = sorted(error["fieldErrors"])
    return summary


async def drain(response: Response) -> tuple[bytes, Response]:
    """스트리밍 응답 본문을 읽고 같은 내용의 응답을 다시 만듭니다.

    Returns:
        tuple[bytes, Response]: 본문과 재구성된 응답 (Body and an equivalent response)
    """
    chunks: list[bytes] = []
    async for chunk in response.body_iterator:
        chunks.append(chunk if isinstance(chunk, bytes) else chunk.encode("utf-8"))
    body = b"".join(chunks)
    rebuilt = Response(
        content=body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type,
    )
    return body, rebuilt


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """관리 API 요청마다 Axiom 이벤트 하나를 전송하는 미들웨어.

    Passes requests through untouched when no Axiom client can be built
    (no token or no dataset configured).

    Args:
        app: 감쌀 ASGI 앱 (Wrapped ASGI app)
        client: 주입할 Axiom 클라이언트, 없으면 설정으로 생성 (Injected client)
        dataset: 대상 데이터셋, 없으면 AXIOM_DATASET (Target dataset)
    """

    def __init__(
        self,
        app: Any,
        client: AxiomClient | None = None,
        dataset: str | None = None,
    ) -> None:
        super().__init__(app)
        self._dataset: str = dataset if dataset is not None else settings.AXIOM_DATASET
        self._client: AxiomClient | None = client
        if self._client is None and settings.AXIOM_API_TOKEN and self._dataset:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self._client is None or request.url.path in SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        event = await request_event(request)
        event["status_code"] = 500
        try:
            response = await call_next(request)
            event["status_code"] = response.status_code
            if response.status_code >= 400:
                body, response = await drain(response)
                event.update(error_summary(body))
            return response
        except Exception as exc:
            event["error"] = _clip(f"{type(exc).__name__}: {exc}")
            raise
        finally:
            if request.path_params:
                event["path_params"] = dict(request.path_params)
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._ingest(event)

    def _ingest(self, event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure
