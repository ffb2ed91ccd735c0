"""검증 오류 메시지 변환 모듈.

Validation error translation module.
Request bodies are validated by the pydantic schemas in ``app.schemas``;
this module turns pydantic's error list into the flat ``field → message``
map carried by ``ValidationError`` (rendered as ``error.fieldErrors``).

Usage:
    try:
        UserCreate.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(field_errors(exc.errors()))
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

# pydantic 오류 유형 → 메시지 템플릿 — Message templates per pydantic error type
_MESSAGES: dict[str, str] = {
    "missing": "The {label} field is required.",
    "string_too_short": "The {label} field is required.",
    "not_null": "The {label} field may not be null.",
    "string_too_long": "The {label} may not be greater than {max_length} characters.",
    "string_type": "The {label} must be a string.",
    "bool_type": "The {label} field must be true or false.",
    "bool_parsing": "The {label} field must be true or false.",
    "int_type": "The {label} must be an integer.",
    "int_parsing": "The {label} must be an integer.",
    "int_from_float": "The {label} must be an integer.",
    "int_parsing_size": "The {label} is out of range.",
    "less_than_equal": "The {label} may not be greater than {le}.",
    "greater_than_equal": "The {label} must be at least {ge}.",
    "literal_error": "The selected {label} is invalid.",
    "value_error": "The {label} format is invalid.",
    "model_type": "The request body must be a JSON object.",
    "model_attributes_type": "The request body must be a JSON object.",
    "dict_type": "The request body must be a JSON object.",
    "json_invalid": "The request body is not valid JSON.",
}

# 요청 위치 접두사 — Location prefixes FastAPI adds to ``loc``
_LOCATIONS = {"body", "path", "query"}


def label(field: str) -> str:
    """필드명을 메시지용 문구로 변환 (userType → user type, menu_id → menu id)."""
    return re.sub(r"(?<!^)(?=[A-Z])", " ", field).replace("_", " ").lower()


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part not in _LOCATIONS]
    # JSON 파싱 오류는 위치(오프셋)만 있음 — JSON errors only carry an offset
    if not parts or all(part.isdigit() for part in parts):
        return "body"
    return ".".join(parts)


def field_errors(errors: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """pydantic 오류 목록을 필드별 메시지 맵으로 변환합니다.

    Flatten pydantic/FastAPI errors into ``field → message``. Only the first
    error per field is kept; unknown error types fall back to pydantic's own
    message.

    Args:
        errors: ``ValidationError.errors()`` 또는 ``RequestValidationError.errors()``

    Returns:
        dict[str, str]: 필드명(camelCase) → 메시지 (Field name → message)
    """
    result: dict[str, str] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        if field in result:
            continue
        template = _MESSAGES.get(str(error.get("type")))
        if template is None:
            result[field] = str(error.get("msg", "Invalid value"))
            continue
        context = {str(k): v for k, v in (error.get("ctx") or {}).items()}
        result[field] = template.format(label=label(field.rsplit(".", 1)[-1]), **context)
    return result
