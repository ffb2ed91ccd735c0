"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러, 라우터 등록.

FastAPI application entry point — Middleware, exception handler and router
registration.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.middleware.axiom_logging import AxiomLoggingMiddleware
from app.schemas.common import HealthResponse
from app.utils.change_events import AxiomChangeListener, change_notifier
from app.utils.response import register_exception_handlers

app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Axiom API 로깅 미들웨어 — Axiom API request/response logging
# CORS보다 먼저 등록하여 모든 요청을 캡처 (Registered before CORS to capture all requests)
app.add_middleware(AxiomLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 모든 오류를 {error: {...}} 봉투로 — Render every error through the envelope
register_exception_handlers(app)

# 레코드 변경 이벤트 → Axiom — Ship committed change events to Axiom when configured
if settings.AXIOM_API_TOKEN and settings.AXIOM_CHANGE_DATASET:
    change_notifier.subscribe(AxiomChangeListener(settings.AXIOM_API_TOKEN, settings.AXIOM_CHANGE_DATASET))


@app.get("/health", response_model=HealthResponse)
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# 라우터 등록 — Router registration
# ---------------------------------------------------------------------------
from app.api.admin import admin_router  # noqa: E402

app.include_router(admin_router, prefix="/api/v1")
