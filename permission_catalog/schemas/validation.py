"""pydantic 校验结果到项目 ValidationError 的转换."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from permission_catalog.errors import ValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_VALIDATION_MESSAGE = "参数校验失败"


class SchemaMessageKeyError(ValueError):
    """validator 中抛出, 携带对外暴露的 message_key."""

    def __init__(self, message: str, *, message_key: str) -> None:
        super().__init__(message)
        self.message_key = message_key


def validate_or_raise(model: type[ModelT], payload: object, *, message_key: str | None = None) -> ModelT:
    """校验 payload, 失败时抛出 ValidationError.

    只取 pydantic 报告的第一条错误. validator 通过 SchemaMessageKeyError 指定的
    message_key 优先于调用方传入的默认值; 出错位置写入 extra["location"].
    """
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        errors = exc.errors()
        if not errors:
            raise ValidationError(DEFAULT_VALIDATION_MESSAGE, message_key=message_key) from None
        first = errors[0]
        message, schema_message_key = _describe_error(first)
        location = _format_location(first)
        raise ValidationError(
            message,
            message_key=schema_message_key or message_key,
            extra={"location": location} if location else None,
        ) from None


def _describe_error(error: ErrorDetails) -> tuple[str, str | None]:
    raw_error = (error.get("ctx") or {}).get("error")
    if isinstance(raw_error, SchemaMessageKeyError):
        return str(raw_error), raw_error.message_key
    if isinstance(raw_error, BaseException):
        return str(raw_error), None

    msg = error.get("msg")
    if isinstance(msg, str) and msg.strip():
        return msg, None
    return DEFAULT_VALIDATION_MESSAGE, None


def _format_location(error: ErrorDetails) -> str:
    # ("permissions", 0, "code") -> "permissions.0.code"
    return ".".join(str(part) for part in error.get("loc", ()))
