"""사용자 관련 요청/응답 Pydantic 스키마 정의.

User request/response Pydantic schema definitions.
Request bodies use camelCase keys; field names are the storage columns.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar, Literal

from pydantic import AfterValidator, BaseModel, EmailStr, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from app.schemas.common import PartialRequestModel, RequestModel

EMAIL_MAX_LENGTH: int = 100


def _email_length(value: str) -> str:
    if len(value) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(
            "string_too_long",
            "String should have at most {max_length} characters",
            {"max_length": EMAIL_MAX_LENGTH},
        )
    return value


# 필드 타입 — Shared field types for create and update
UserName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
UserEmail = Annotated[EmailStr, AfterValidator(_email_length)]
Password = Annotated[str, Field(min_length=1, max_length=50)]
Remark = Annotated[str, Field(max_length=5000)]
# 1 = 관리자, 2 = 일반 사용자 (USER_TYPE_ADMIN, USER_TYPE_GENERAL)
UserType = Literal[1, 2]


# === 사용자 (User) 스키마 ===

class UserCreate(RequestModel):
    """사용자 생성 요청 스키마.

    User creation request schema.

    Attributes:
        name: 표시 이름 (Display name, max 50)
        email: 이메일, 고유 (Email address, unique, max 100)
        password: 비밀번호 — 평문, 저장 전 해싱 (Plain text, hashed before insert)
        status: 활성 상태 (Enabled flag)
        user_type: 사용자 유형 — 요청 키 ``userType`` (1=admin, 2=general)
        remark: 비고 (Remark, optional)
    """

    name: UserName
    email: UserEmail
    password: Password
    status: bool
    user_type: UserType
    remark: Remark | None = None


class UserUpdate(PartialRequestModel):
    """사용자 수정 요청 스키마 (부분 업데이트).

    User update request schema (partial update).
    Only provided fields are updated; an empty password keeps the current one.
    """

    nullable: ClassVar[frozenset[str]] = frozenset({"remark"})

    name: UserName | None = None
    email: UserEmail | None = None
    password: Password | None = None
    status: bool | None = None
    user_type: UserType | None = None
    remark: Remark | None = None

    @model_validator(mode="before")
    @classmethod
    def _blank_password_is_unset(cls, data: Any) -> Any:
        # 빈 비밀번호는 미입력 — "" means "leave the password alone"
        if isinstance(data, dict) and data.get("password") == "":
            return {key: value for key, value in data.items() if key != "password"}
        return data


class UserResponse(BaseModel):
    """사용자 응답 스키마 — 비밀번호 해시는 포함하지 않음.

    User response schema. The password hash is never part of it.

    Attributes:
        id: 사용자 ID (User identifier)
        name: 표시 이름 (Display name)
        email: 이메일 (Email address)
        status: 활성 상태 (Enabled flag)
        user_type: 사용자 유형 (1=admin, 2=general)
        remark: 비고 (Remark)
        login_ip: 마지막 로그인 IP (Last login IP)
        login_time: 마지막 로그인 일시 (Last login timestamp)
        created_at: 생성 일시 (Creation timestamp)
        updated_at: 수정 일시 (Last update timestamp)
    """

    id: int
    name: str
    email: str
    status: bool
    user_type: int
    remark: str | None = None
    login_ip: str | None = None
    login_time: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
        "from_attributes": True,
    }
