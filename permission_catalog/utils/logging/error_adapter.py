"""异常到错误封套字段的适配."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import has_request_context, request as current_request
from werkzeug.exceptions import HTTPException

from permission_catalog.constants import HttpStatus
from permission_catalog.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity
from permission_catalog.errors import AppError
from permission_catalog.utils.logging.context_vars import request_id_var

_DEFAULT_SUGGESTIONS = ("联系管理员", "查看错误日志")
_SUGGESTIONS: dict[ErrorCategory, tuple[str, ...]] = {
    ErrorCategory.VALIDATION: ("检查请求体是否为 JSON 对象", "根据 message_code 修正权限列表"),
    ErrorCategory.BUSINESS: ("确认请求路径与方法",),
    ErrorCategory.CONFIGURATION: ("检查 PERMISSION_TAXONOMY_CONFIG 指向的文件", "联系管理员"),
}


@dataclass(slots=True)
class ErrorContext:
    """一次错误的标识与请求信息.

    error_id 每次新建, request_id 取自当前请求的 contextvar;
    url 与 method 在 `ensure_request` 时从请求对象补齐.
    """

    error: Exception
    request: Any | None = None
    error_id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    request_id: str | None = field(default_factory=request_id_var.get)
    url: str | None = None
    method: str | None = None

    def ensure_request(self) -> None:
        if self.request is None and has_request_context():
            self.request = current_request
        if self.request is None:
            return
        self.url = self.url or getattr(self.request, "path", None)
        self.method = self.method or getattr(self.request, "method", None)


@dataclass(slots=True)
class ErrorMetadata:
    """错误封套所需的分类信息."""

    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    message_key: str
    message: str
    recoverable: bool


def derive_error_metadata(error: Exception) -> ErrorMetadata:
    """推导错误元数据.

    AppError 使用自身字段. HTTPException 中 4xx 视为可恢复的请求错误, 5xx 视为系统错误.
    其他异常一律按系统错误处理, 对外只给通用文案, 不泄露异常文本.
    """
    if isinstance(error, AppError):
        return ErrorMetadata(
            status_code=error.status_code,
            category=error.category,
            severity=error.severity,
            message_key=error.message_key,
            message=error.message,
            recoverable=error.recoverable,
        )

    if isinstance(error, HTTPException):
        status_code = error.code or HttpStatus.INTERNAL_SERVER_ERROR
        if status_code < HttpStatus.INTERNAL_SERVER_ERROR:
            return ErrorMetadata(
                status_code=status_code,
                category=ErrorCategory.BUSINESS,
                severity=ErrorSeverity.MEDIUM,
                message_key="INVALID_REQUEST",
                message=error.description or ErrorMessages.INVALID_REQUEST,
                recoverable=True,
            )
        return _system_error_metadata(status_code)

    return _system_error_metadata(HttpStatus.INTERNAL_SERVER_ERROR)


def _system_error_metadata(status_code: int) -> ErrorMetadata:
    return ErrorMetadata(
        status_code=status_code,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        message_key="INTERNAL_ERROR",
        message=ErrorMessages.INTERNAL_ERROR,
        recoverable=False,
    )


def build_public_context(context: ErrorContext) -> dict[str, Any]:
    """封套中的 context: request_id 恒定输出, url 与 method 仅在请求内输出."""
    context.ensure_request()
    payload: dict[str, Any] = {"request_id": context.request_id}
    if context.url:
        payload["url"] = context.url
    if context.method:
        payload["method"] = context.method
    return payload


def get_error_suggestions(category: ErrorCategory) -> list[str]:
    return list(_SUGGESTIONS.get(category, _DEFAULT_SUGGESTIONS))


__all__ = [
    "ErrorContext",
    "ErrorMetadata",
    "build_public_context",
    "derive_error_metadata",
    "get_error_suggestions",
]
