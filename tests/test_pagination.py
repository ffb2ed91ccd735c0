"""목록 요청 정규화 테스트.

PageDescriptor normalization tests — defaults, clamping, sort direction and
the ``search[...]`` parameter group.
"""

from starlette.datastructures import QueryParams

from app.config import settings
from app.utils.pagination import MAX_OFFSET, PageDescriptor, PageMeta, normalize_page_query


class TestNormalizeDefaults:
    """기본값 테스트."""

    def test_empty_query(self):
        """빈 요청은 기본값으로."""
        d = normalize_page_query({})
        assert d.page == 1
        assert d.limit == settings.PAGE_DEFAULT_LIMIT
        assert d.sort == "asc"
        assert d.sort_column == "id"
        assert d.search == {}

    def test_none_query(self):
        assert normalize_page_query(None) == normalize_page_query({})

    def test_garbage_values_fall_back(self):
        """잘못된 값은 기본값으로 대체."""
        d = normalize_page_query({"page": "abc", "limit": "-3", "sort": "sideways", "sortColumn": "  "})
        assert d.page == 1
        assert d.limit == settings.PAGE_DEFAULT_LIMIT
        assert d.sort == "asc"
        assert d.sort_column == "id"

    def test_zero_page(self):
        assert normalize_page_query({"page": "0"}).page == 1

    def test_huge_page_clamped(self):
        """OFFSET이 64-bit 범위를 넘지 않도록 페이지 제한."""
        d = normalize_page_query({"page": "9" * 40, "limit": "7"})
        assert d.page == MAX_OFFSET // 7 + 1
        assert d.offset <= MAX_OFFSET

    def test_last_safe_page_kept(self):
        page = MAX_OFFSET // 10 + 1
        assert normalize_page_query({"page": str(page), "limit": "10"}).page == page


class TestNormalizeValues:
    """정상 값 파싱 테스트."""

    def test_page_and_limit(self):
        d = normalize_page_query({"page": "3", "limit": "25"})
        assert d.page == 3
        assert d.limit == 25
        assert d.offset == 50

    def test_limit_clamped(self):
        """상한 초과 limit은 잘림."""
        d = normalize_page_query({"limit": str(settings.PAGE_MAX_LIMIT * 10)})
        assert d.limit == settings.PAGE_MAX_LIMIT

    def test_sort_case_insensitive(self):
        assert normalize_page_query({"sort": "DESC"}).sort == "desc"

    def test_sort_column_kept_verbatim(self):
        """화이트리스트 검사는 나중에 — Column validity is checked later."""
        assert normalize_page_query({"sortColumn": "password"}).sort_column == "password"


class TestSearchGroup:
    """search[...] 그룹 파싱 테스트."""

    def test_bracket_keys(self):
        d = normalize_page_query(QueryParams("search[name]=foo&search[status]=1&page=2"))
        assert d.search == {"name": "foo", "status": "1"}
        assert d.page == 2

    def test_nested_mapping(self):
        d = normalize_page_query({"search": {"email": "example.com"}})
        assert d.search == {"email": "example.com"}

    def test_empty_values_dropped(self):
        """빈 검색값은 제외."""
        d = normalize_page_query({"search[name]": "   ", "search[email]": "", "search[status]": "0"})
        assert d.search == {"status": "0"}

    def test_values_trimmed(self):
        assert normalize_page_query({"search[name]": "  bob "}).search == {"name": "bob"}

    def test_unrelated_keys_ignored(self):
        d = normalize_page_query({"searchname": "x", "search[]": "y", "filter[name]": "z"})
        assert d.search == {}


class TestPageMeta:
    """페이지 메타데이터 테스트."""

    def test_total_pages_ceil(self):
        meta = PageMeta.build(PageDescriptor(page=2, limit=10), 21)
        assert meta.current_page == 2
        assert meta.total_count == 21
        assert meta.total_pages == 3

    def test_empty_result(self):
        assert PageMeta.build(PageDescriptor(), 0).total_pages == 0

    def test_camel_case_dump(self):
        dumped = PageMeta.build(PageDescriptor(limit=5), 5).model_dump(by_alias=True)
        assert dumped == {"currentPage": 1, "limit": 5, "totalCount": 5, "totalPages": 1}
