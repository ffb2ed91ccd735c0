"""목록 쿼리 계획 빌더 테스트.

QueryPlan builder tests — whitelist filtering, predicate kinds, sort fallback,
and agreement between the DATA and COUNT plans.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.database import INT_MAX, INT_MIN
from app.repositories.menu_repository import MENU_COLUMNS
from app.repositories.user_repository import USER_COLUMNS
from app.utils.exceptions import ValidationError
from app.utils.pagination import normalize_page_query
from app.utils.query_builder import (
    ColumnSpec,
    ContainsPredicate,
    EqualsPredicate,
    OrderBy,
    QueryMode,
    build_list_query,
)

# 인메모리 평가용 샘플 행 — Sample rows for in-memory plan evaluation
ROWS = [
    {"id": 1, "name": "alice", "email": "alice@example.com", "status": True, "user_type": 1},
    {"id": 2, "name": "bob", "email": "bob@example.com", "status": False, "user_type": 2},
    {"id": 3, "name": "Foobar", "email": "foobar@example.com", "status": True, "user_type": 2},
    {"id": 4, "name": "carol", "email": "carol@sample.org", "status": True, "user_type": 2},
    {"id": 5, "name": "dave", "email": None, "status": False, "user_type": 1},
]


def plans(raw):
    descriptor = normalize_page_query(raw)
    return (
        build_list_query(descriptor, USER_COLUMNS, QueryMode.DATA),
        build_list_query(descriptor, USER_COLUMNS, QueryMode.COUNT),
    )


class TestPredicates:
    """검색 조건 생성 테스트."""

    def test_no_search(self):
        data, count = plans({})
        assert data.predicates == ()
        assert count.predicates == ()

    def test_contains_for_text_columns(self):
        data, _ = plans({"search[name]": "foo"})
        assert data.predicates == (ContainsPredicate(column="name", term="foo"),)

    def test_exact_bool(self):
        data, _ = plans({"search[status]": "1"})
        assert data.predicates == (EqualsPredicate(column="status", value=True),)

    def test_exact_int_maps_to_storage_column(self):
        """공개 필드명 userType → 저장소 컬럼 user_type."""
        data, _ = plans({"search[userType]": "2"})
        assert data.predicates == (EqualsPredicate(column="user_type", value=2),)

    def test_unknown_keys_dropped(self):
        """화이트리스트에 없는 키는 무시."""
        data, _ = plans({"search[password]": "x", "search[; DROP TABLE users]": "1"})
        assert data.predicates == ()

    def test_non_searchable_key_dropped(self):
        data, _ = plans({"search[createdAt]": "2024"})
        assert data.predicates == ()

    def test_invalid_bool_rejected(self):
        with pytest.raises(ValidationError) as exc:
            plans({"search[status]": "maybe"})
        assert "search[status]" in exc.value.field_errors

    def test_invalid_int_rejected(self):
        with pytest.raises(ValidationError) as exc:
            plans({"search[userType]": "admin"})
        assert "search[userType]" in exc.value.field_errors

    def test_int_bounds(self):
        """Integer 컬럼 범위 안의 값만 허용."""
        data, _ = plans({"search[userType]": str(INT_MIN)})
        assert data.predicates == (EqualsPredicate(column="user_type", value=INT_MIN),)
        for value in (INT_MAX + 1, INT_MIN - 1, 10**19):
            with pytest.raises(ValidationError) as exc:
                plans({"search[userType]": str(value)})
            assert list(exc.value.field_errors) == ["search[userType]"]

    def test_bool_words(self):
        data, _ = plans({"search[status]": "no"})
        assert data.predicates == (EqualsPredicate(column="status", value=False),)

    def test_int_column_rejects_bool(self):
        descriptor = normalize_page_query({"search": {"userType": True}})
        with pytest.raises(ValidationError):
            build_list_query(descriptor, USER_COLUMNS)

    def test_contains_pattern_escapes_wildcards(self):
        """% 와 _ 는 문자 그대로 검색."""
        pred = ContainsPredicate(column="name", term="50%_off\\")
        assert pred.pattern == "%50\\%\\_off\\\\%"

    def test_value_objects_frozen(self):
        spec = ColumnSpec(column="name")
        with pytest.raises(PydanticValidationError):
            spec.column = "password"


class TestOrdering:
    """정렬 기준 테스트."""

    def test_default_order(self):
        data, _ = plans({})
        assert data.order_by == (OrderBy(column="id", direction="asc"),)

    def test_sort_by_public_name(self):
        """정렬 컬럼 뒤에 id 동률 정렬 추가."""
        data, _ = plans({"sortColumn": "userType", "sort": "desc"})
        assert data.order_by == (
            OrderBy(column="user_type", direction="desc"),
            OrderBy(column="id", direction="asc"),
        )

    def test_id_desc(self):
        data, _ = plans({"sortColumn": "id", "sort": "desc"})
        assert data.order_by == (OrderBy(column="id", direction="desc"),)

    def test_invalid_column_falls_back(self):
        """허용되지 않은 컬럼은 (id, asc)로 대체 — 요청 방향 무시."""
        data, _ = plans({"sortColumn": "password", "sort": "desc"})
        assert data.order_by == (OrderBy(column="id", direction="asc"),)

    def test_storage_name_not_accepted(self):
        data, _ = plans({"sortColumn": "user_type", "sort": "desc"})
        assert data.order_by == (OrderBy(column="id", direction="asc"),)


class TestPlanShape:
    """DATA / COUNT 계획 형태 테스트."""

    def test_data_plan_pagination(self):
        data, _ = plans({"page": "3", "limit": "20"})
        assert data.mode is QueryMode.DATA
        assert data.offset == 40
        assert data.limit == 20
        assert "password" not in data.projection

    def test_count_plan_counts_primary_key_only(self):
        _, count = plans({"page": "3", "sortColumn": "name"})
        assert count.mode is QueryMode.COUNT
        assert count.projection == ("id",)
        assert count.order_by == ()
        assert count.offset is None
        assert count.limit is None

    def test_count_and_data_share_predicates(self):
        data, count = plans({"search[name]": "a", "search[status]": "true", "search[userType]": "2"})
        assert data.predicates == count.predicates
        assert len(data.predicates) == 3

    def test_menu_whitelist(self):
        descriptor = normalize_page_query({"search[feature]": "T", "search[parent]": "0", "sortColumn": "weight"})
        plan = build_list_query(descriptor, MENU_COLUMNS)
        assert plan.predicates == (
            EqualsPredicate(column="feature", value="T"),
            EqualsPredicate(column="parent", value=0),
        )
        assert plan.order_by[0] == OrderBy(column="weight", direction="asc")


class TestInMemoryEvaluation:
    """계획의 인메모리 평가 — count는 필터된 전체 행 수와 일치."""

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            {"search[name]": "foo"},
            {"search[name]": "A"},
            {"search[email]": "example"},
            {"search[status]": "0"},
            {"search[userType]": "2", "search[status]": "true"},
            {"search[name]": "nobody"},
        ],
    )
    def test_count_matches_filtered_rows(self, raw):
        data, count = plans(raw)
        expected = [row for row in ROWS if all(p.matches(row) for p in data.predicates)]
        assert sum(1 for row in ROWS if count.matches(row)) == len(expected)

    def test_contains_is_case_insensitive(self):
        """'foo' 검색 시 'Foobar' 포함."""
        data, _ = plans({"search[name]": "foo"})
        assert [row["id"] for row in ROWS if data.matches(row)] == [3]

    def test_contains_skips_null(self):
        data, _ = plans({"search[email]": "a"})
        assert 5 not in [row["id"] for row in ROWS if data.matches(row)]
