"""常量模块.

- ErrorCategory / ErrorSeverity: 错误封套的分类与严重度
- ErrorMessages / SuccessMessages: 对外文案
- HttpStatus / HttpHeaders: HTTP 状态码与头名称
"""

from http import HTTPStatus as HttpStatus

from .http_headers import HttpHeaders
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    LogLevel,
    SuccessMessages,
)

__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpHeaders",
    "HttpStatus",
    "LogLevel",
    "SuccessMessages",
]
