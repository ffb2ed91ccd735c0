"""FastAPI 의존성 주입 모듈 — 목록 요청 정규화, 경로 ID.

FastAPI dependency injection module — List request normalization and the
record id path parameter.
Reads ``page``, ``limit``, ``sort``, ``sortColumn`` and the nested
``search[<field>]`` group straight from the query string, since FastAPI
cannot declare bracketed parameter groups.
"""

from typing import Annotated

from fastapi import Path, Request

from app.database import INT_MAX
from app.utils.pagination import PageDescriptor, normalize_page_query

# 레코드 ID 경로 파라미터 — Integer primary key, bounded by the column range
RecordId = Annotated[int, Path(ge=1, le=INT_MAX)]


async def get_page_descriptor(request: Request) -> PageDescriptor:
    """쿼리 문자열에서 PageDescriptor를 생성합니다.

    Build a PageDescriptor from the request query string. Never fails;
    malformed values fall back to defaults.
    """
    return normalize_page_query(request.query_params)
