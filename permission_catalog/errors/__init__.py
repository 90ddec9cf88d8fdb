"""权限目录服务 - 异常定义.

每个异常类通过 `metadata` 声明 HTTP 状态码、错误分类、严重度与默认 message_key,
实例化时可以逐项覆盖. 错误封套与日志都只读取这些字段.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from werkzeug.exceptions import HTTPException

from permission_catalog.constants import HttpStatus
from permission_catalog.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from permission_catalog.types import LoggerExtra

RECOVERABLE_SEVERITIES = frozenset({ErrorSeverity.LOW, ErrorSeverity.MEDIUM})


def resolve_message(message_key: str) -> str:
    """message_key 对应的 ErrorMessages 文案, 未登记的键回退为通用内部错误."""
    return getattr(ErrorMessages, message_key, ErrorMessages.INTERNAL_ERROR)


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常类级别的默认元信息."""

    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """项目异常基类.

    Args:
        message: 对外文案, 为空时由 message_key 查表.
        message_key: 错误封套中的 message_code.
        extra: 原样写入错误封套 extra 的诊断字段.
        severity: 覆盖默认严重度.
        category: 覆盖默认分类.
        status_code: 覆盖默认 HTTP 状态码.

    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or resolve_message(self.message_key)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        self.status_code = int(status_code or self.metadata.status_code)
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """低/中严重度的错误可由调用方修正后重试."""
        return self.severity in RECOVERABLE_SEVERITIES


class ValidationError(AppError):
    """请求体或配置文件未通过校验, 返回 400."""

    metadata = ExceptionMetadata(
        status_code=HttpStatus.BAD_REQUEST,
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class ConfigurationError(AppError):
    """权限分类覆盖配置缺失或非法.

    启动阶段抛出, 应用不会带着错误配置继续运行.
    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.HIGH,
        default_message_key="TAXONOMY_CONFIG_INVALID",
    )


class SystemError(AppError):
    """非预期异常的对外包装, 返回 500."""

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )


def map_exception_to_status(error: BaseException, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """异常对应的 HTTP 状态码: AppError 取自身状态码, HTTPException 取 code, 其余取 default."""
    if isinstance(error, AppError):
        return error.status_code
    if isinstance(error, HTTPException) and error.code is not None:
        return int(error.code)
    return default


__all__ = [
    "RECOVERABLE_SEVERITIES",
    "AppError",
    "ConfigurationError",
    "ExceptionMetadata",
    "SystemError",
    "ValidationError",
    "map_exception_to_status",
    "resolve_message",
]
