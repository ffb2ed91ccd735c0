"""메뉴 관련 요청/응답 Pydantic 스키마 정의.

Menu request/response Pydantic schema definitions.
"""

from datetime import datetime
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, Field, StringConstraints
from pydantic.alias_generators import to_camel

from app.database import INT_MAX, INT_MIN
from app.schemas.common import PartialRequestModel, RequestModel

MenuName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
MenuKey = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=150)]
MenuUrl = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
# T = 상단 탭, P = 페이지, F = 기능 (top tab, page, function)
Feature = Literal["T", "P", "F"]
ParentId = Annotated[int, Field(ge=0, le=INT_MAX)]
Weight = Annotated[int, Field(ge=INT_MIN, le=INT_MAX)]
Remark = Annotated[str, Field(max_length=5000)]


# === 메뉴 (Menu) 스키마 ===

class MenuCreate(RequestModel):
    """메뉴 생성 요청 스키마.

    Menu creation request schema. A missing or null parent means top level.
    """

    name: MenuName
    key: MenuKey
    url: MenuUrl
    feature: Feature
    status: bool
    parent: ParentId | None = None
    weight: Weight | None = None
    remark: Remark | None = None


class MenuUpdate(PartialRequestModel):
    """메뉴 수정 요청 스키마 (부분 업데이트)."""

    nullable: ClassVar[frozenset[str]] = frozenset({"parent", "weight", "remark"})

    name: MenuName | None = None
    key: MenuKey | None = None
    url: MenuUrl | None = None
    feature: Feature | None = None
    status: bool | None = None
    parent: ParentId | None = None
    weight: Weight | None = None
    remark: Remark | None = None


class MenuResponse(BaseModel):
    """메뉴 응답 스키마 (Menu response schema)."""

    id: int
    name: str
    key: str
    url: str
    feature: str
    status: bool
    parent: int = 0
    weight: int | None = None
    remark: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }
