"""목록 쿼리 계획 빌더 모듈.

List query plan builder module.
Turns a PageDescriptor plus a resource's ColumnWhitelist into a QueryPlan:
a storage-independent description of a filtered, sorted and paginated fetch
(DATA) or of the matching row count (COUNT). Repositories compile plans to
SQLAlchemy statements.

Both modes are built from the same predicate list, so the count always
describes the same subset of rows as the page.

Usage:
    data_plan = build_list_query(descriptor, USER_COLUMNS, QueryMode.DATA)
    count_plan = build_list_query(descriptor, USER_COLUMNS, QueryMode.COUNT)
"""

import enum
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Annotated, Any, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.database import INT_MAX, INT_MIN
from app.utils.exceptions import ValidationError
from app.utils.pagination import PageDescriptor, SortDirection

# 검색값 변환기 — Search value coercion, bounded by the Integer column range
_SEARCH_ADAPTERS: dict[type, TypeAdapter[Any]] = {
    bool: TypeAdapter(bool),
    int: TypeAdapter(Annotated[int, Field(ge=INT_MIN, le=INT_MAX)]),
}

_SEARCH_MESSAGES: dict[type, str] = {
    bool: "The search {name} field must be true or false.",
    int: "The search {name} must be an integer between {low} and {high}.",
}


class MatchKind(str, enum.Enum):
    """검색 방식 — How a search value is compared against a column."""

    EXACT = "exact"  # 동등 비교 (Equality)
    CONTAINS = "contains"  # 대소문자 무시 부분 일치 (Case-insensitive substring)


class QueryMode(str, enum.Enum):
    """계획 종류 — Page of rows or scalar count."""

    DATA = "data"
    COUNT = "count"


class ColumnSpec(BaseModel):
    """공개 필드 하나의 저장소 매핑 (Storage mapping for one public field).

    Attributes:
        column: 저장소 컬럼명 (Storage column name)
        match: 검색 비교 방식 (Search comparison kind)
        value_type: 검색값 변환 타입 — str, int, bool (Type search values are coerced to)
        searchable: 검색 허용 여부 (Whether the field may be searched)
        sortable: 정렬 허용 여부 (Whether the field may be sorted on)
    """

    column: str
    match: MatchKind = MatchKind.EXACT
    value_type: type = str
    searchable: bool = True
    sortable: bool = True

    model_config = ConfigDict(frozen=True)


class ColumnWhitelist:
    """리소스별 허용 컬럼 목록 — 읽기 전용.

    Per-resource immutable mapping of public field name → ColumnSpec, plus the
    fixed projection of public storage columns returned by list and detail
    queries. Anything not declared here can never reach a query.
    """

    def __init__(
        self,
        columns: Mapping[str, ColumnSpec],
        projection: Sequence[str],
        primary_key: str = "id",
    ) -> None:
        self._columns: Mapping[str, ColumnSpec] = MappingProxyType(dict(columns))
        self.projection: tuple[str, ...] = tuple(projection)
        self.primary_key: str = primary_key

    def __contains__(self, name: object) -> bool:
        return name in self._columns

    def get(self, name: str) -> ColumnSpec | None:
        return self._columns.get(name)

    def searchable(self, name: str) -> ColumnSpec | None:
        spec = self._columns.get(name)
        return spec if spec is not None and spec.searchable else None

    def sortable(self, name: str) -> ColumnSpec | None:
        spec = self._columns.get(name)
        return spec if spec is not None and spec.sortable else None

    def public_name(self, column: str) -> str:
        """저장소 컬럼명을 공개 필드명으로 역변환 (Reverse lookup, falls back to column)."""
        for name, spec in self._columns.items():
            if spec.column == column:
                return name
        return column


class EqualsPredicate(BaseModel):
    """동등 비교 조건 (column = value)."""

    column: str
    value: Any

    model_config = ConfigDict(frozen=True)

    def matches(self, row: Mapping[str, Any]) -> bool:
        return row.get(self.column) == self.value


class ContainsPredicate(BaseModel):
    """대소문자 무시 부분 일치 조건 (column ILIKE %term%).

    The term is matched literally: ``%``, ``_`` and the escape character
    are escaped in :attr:`pattern`.
    """

    column: str
    term: str
    escape: str = "\\"

    model_config = ConfigDict(frozen=True)

    @property
    def pattern(self) -> str:
        escaped = (
            self.term.replace(self.escape, self.escape * 2)
            .replace("%", f"{self.escape}%")
            .replace("_", f"{self.escape}_")
        )
        return f"%{escaped}%"

    def matches(self, row: Mapping[str, Any]) -> bool:
        value = row.get(self.column)
        if value is None:
            return False
        return self.term.lower() in str(value).lower()


Predicate = Union[EqualsPredicate, ContainsPredicate]


class OrderBy(BaseModel):
    column: str
    direction: SortDirection = "asc"

    model_config = ConfigDict(frozen=True)


class QueryPlan(BaseModel):
    """실행 전 쿼리 계획 (Not-yet-executed fetch or count).

    Attributes:
        mode: DATA 또는 COUNT
        projection: 조회 컬럼 — COUNT이면 기본 키만 (Selected columns; primary key only for COUNT)
        predicates: 순서대로 AND 결합되는 조건 (Predicates AND-ed in order)
        order_by: 정렬 기준, COUNT이면 비어 있음 (Ordering, empty for COUNT)
        offset: 건너뛸 행 수 (Rows to skip, None for COUNT)
        limit: 최대 행 수 (Maximum rows, None for COUNT)
    """

    mode: QueryMode
    projection: tuple[str, ...]
    predicates: tuple[Predicate, ...] = ()
    order_by: tuple[OrderBy, ...] = ()
    offset: int | None = None
    limit: int | None = None

    model_config = ConfigDict(frozen=True)

    def matches(self, row: Mapping[str, Any]) -> bool:
        """행이 모든 조건을 만족하는지 검사 (In-memory evaluation of the predicates)."""
        return all(predicate.matches(row) for predicate in self.predicates)


def _coerce_search_value(name: str, spec: ColumnSpec, value: str | bool) -> Any:
    """검색값을 컬럼 타입으로 변환합니다.

    Exact-match values are validated with pydantic against the column type;
    integers must also fit the Integer column range.

    Raises:
        ValidationError: 변환할 수 없는 값 (Value cannot be coerced or is out of range)
    """
    adapter = _SEARCH_ADAPTERS.get(spec.value_type)
    if adapter is None:
        return str(value)
    message = _SEARCH_MESSAGES[spec.value_type].format(name=name, low=INT_MIN, high=INT_MAX)
    # bool은 int의 하위 타입 — True must not search an integer column as 1
    if spec.value_type is int and isinstance(value, bool):
        raise ValidationError({f"search[{name}]": message})
    raw = value.strip() if isinstance(value, str) else value
    try:
        return adapter.validate_python(raw)
    except PydanticValidationError:
        raise ValidationError({f"search[{name}]": message})


def build_predicates(descriptor: PageDescriptor, whitelist: ColumnWhitelist) -> tuple[Predicate, ...]:
    """화이트리스트에 있는 검색 키만 조건으로 변환합니다.

    Convert the descriptor's search terms into predicates. Keys missing from
    the whitelist (or not searchable) are dropped silently.
    """
    predicates: list[Predicate] = []
    for name, value in descriptor.search.items():
        spec = whitelist.searchable(name)
        if spec is None:
            continue
        if spec.match is MatchKind.CONTAINS:
            predicates.append(ContainsPredicate(column=spec.column, term=str(value)))
        else:
            predicates.append(EqualsPredicate(column=spec.column, value=_coerce_search_value(name, spec, value)))
    return tuple(predicates)


def resolve_order(descriptor: PageDescriptor, whitelist: ColumnWhitelist) -> tuple[OrderBy, ...]:
    """정렬 기준을 결정합니다.

    A sort column outside the whitelist falls back to (primary key, asc)
    whatever direction was requested. Non-key sorts get the primary key as
    an ascending tie-breaker so pages are stable.
    """
    spec = whitelist.sortable(descriptor.sort_column)
    if spec is None:
        return (OrderBy(column=whitelist.primary_key, direction="asc"),)
    primary = OrderBy(column=spec.column, direction=descriptor.sort)
    if spec.column == whitelist.primary_key:
        return (primary,)
    return (primary, OrderBy(column=whitelist.primary_key, direction="asc"))


def build_list_query(
    descriptor: PageDescriptor,
    whitelist: ColumnWhitelist,
    mode: QueryMode = QueryMode.DATA,
) -> QueryPlan:
    """PageDescriptor로부터 DATA 또는 COUNT 쿼리 계획을 만듭니다.

    Build the DATA or COUNT plan for a descriptor.

    Args:
        descriptor: 정규화된 목록 요청 (Normalized list request)
        whitelist: 리소스 허용 컬럼 (Resource column whitelist)
        mode: 계획 종류 (Plan kind)

    Returns:
        QueryPlan: 실행 전 쿼리 계획 (Unexecuted plan)
    """
    predicates = build_predicates(descriptor, whitelist)

    if mode is QueryMode.COUNT:
        return QueryPlan(
            mode=QueryMode.COUNT,
            projection=(whitelist.primary_key,),
            predicates=predicates,
        )

    return QueryPlan(
        mode=QueryMode.DATA,
        projection=whitelist.projection,
        predicates=predicates,
        order_by=resolve_order(descriptor, whitelist),
        offset=descriptor.offset,
        limit=descriptor.limit,
    )
