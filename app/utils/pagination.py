"""페이지네이션 유틸리티 모듈.

Pagination utility module.
Normalizes raw list query parameters (``page``, ``limit``, ``sort``,
``sortColumn`` and the ``search[<field>]`` group) into an immutable
PageDescriptor, and derives the PageMeta block returned with every list.

Normalization never fails: malformed values degrade to their defaults.
Column validity is decided later against each resource's whitelist.
"""

import math
import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from app.config import settings

SortDirection = Literal["asc", "desc"]

DEFAULT_PAGE: int = 1
DEFAULT_SORT: SortDirection = "asc"
DEFAULT_SORT_COLUMN: str = "id"

# OFFSET은 64-bit 부호 정수 — SQL OFFSET must fit a signed BIGINT
MAX_OFFSET: int = 2**63 - 1

# search[name]=foo 형태의 중첩 파라미터 — Nested search parameter group
_SEARCH_KEY = re.compile(r"^search\[([^\[\]]+)\]$")


class PageDescriptor(BaseModel):
    """정규화된 목록 요청 — 페이지, 크기, 정렬, 검색 조건.

    Normalized list request. Immutable once built; discarded after the query runs.

    Attributes:
        page: 요청 페이지 번호, 1부터 시작 (Page number, 1-based)
        limit: 페이지당 항목 수 (Items per page)
        sort: 정렬 방향 (Sort direction)
        sort_column: 정렬 공개 필드명 (Public field name to sort by)
        search: 공개 필드명 → 검색값 (Public field name → filter value)
    """

    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=10, ge=1)
    sort: SortDirection = DEFAULT_SORT
    sort_column: str = DEFAULT_SORT_COLUMN
    search: dict[str, str | bool] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    """목록 응답의 페이지 메타데이터.

    Pagination metadata attached to list responses as ``meta``.

    Attributes:
        current_page: 현재 페이지 번호 (Current page number)
        limit: 페이지당 항목 수 (Items per page)
        total_count: 조건에 맞는 전체 항목 수 (Total matching rows)
        total_pages: 전체 페이지 수 (ceil(total_count / limit))
    """

    current_page: int
    limit: int
    total_count: int
    total_pages: int

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }

    @classmethod
    def build(cls, descriptor: PageDescriptor, total_count: int) -> "PageMeta":
        return cls(
            current_page=descriptor.page,
            limit=descriptor.limit,
            total_count=total_count,
            total_pages=math.ceil(total_count / descriptor.limit) if descriptor.limit else 1,
        )


def _positive_int(value: Any, default: int) -> int:
    """양의 정수로 변환, 실패 시 기본값 (Parse a positive int or fall back)."""
    if isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


def _sort_direction(value: Any) -> SortDirection:
    text = str(value or "").strip().lower()
    if text == "desc":
        return "desc"
    return DEFAULT_SORT


def _search_terms(raw: Mapping[str, Any]) -> dict[str, str | bool]:
    """``search[...]`` 그룹을 추출합니다.

    Extract the ``search[<field>]`` group. Also accepts an already nested
    ``search`` mapping. Empty values are dropped; unknown field names are
    kept and filtered later by whitelist membership.
    """
    terms: dict[str, str | bool] = {}

    nested = raw.get("search")
    if isinstance(nested, Mapping):
        for field, value in nested.items():
            terms[str(field)] = value

    for key, value in raw.items():
        match = _SEARCH_KEY.match(str(key))
        if match:
            terms[match.group(1).strip()] = value

    cleaned: dict[str, str | bool] = {}
    for field, value in terms.items():
        if not field or value is None:
            continue
        if isinstance(value, bool):
            cleaned[field] = value
            continue
        text = str(value).strip()
        if text:
            cleaned[field] = text
    return cleaned


def normalize_page_query(raw: Mapping[str, Any] | None) -> PageDescriptor:
    """원시 쿼리 파라미터를 PageDescriptor로 정규화합니다.

    Normalize raw query parameters into a PageDescriptor.

    Args:
        raw: 쿼리 파라미터 매핑 (Query parameter mapping, may be None)

    Returns:
        PageDescriptor: 정규화된 요청 (Normalized descriptor)
    """
    raw = raw or {}

    limit = _positive_int(raw.get("limit"), settings.PAGE_DEFAULT_LIMIT)
    # 상한 적용 — Clamp to the configured maximum page size
    limit = min(limit, settings.PAGE_MAX_LIMIT)

    page = _positive_int(raw.get("page"), DEFAULT_PAGE)
    # 범위 밖 페이지는 빈 페이지 — Out-of-range pages stay empty instead of overflowing OFFSET
    page = min(page, MAX_OFFSET // limit + 1)

    sort_column = str(raw.get("sortColumn") or "").strip() or DEFAULT_SORT_COLUMN

    return PageDescriptor(
        page=page,
        limit=limit,
        sort=_sort_direction(raw.get("sort")),
        sort_column=sort_column,
        search=_search_terms(raw),
    )
