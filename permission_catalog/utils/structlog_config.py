"""权限目录服务的结构化日志配置.

处理器链: 调试过滤 -> 时间戳 -> 级别 -> 堆栈 -> 请求上下文 -> 全局上下文 -> 控制台渲染.
业务代码只通过 `get_logger` / `get_system_logger` / `log_debug` 取日志,
错误封套由 `enhanced_error_handler` 统一生成并按严重度落日志.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, current_app, has_request_context

from permission_catalog.constants.system_constants import ErrorSeverity
from permission_catalog.errors import AppError
from permission_catalog.settings import APP_VERSION
from permission_catalog.types import ContextDict, JsonValue, LoggerExtra, StructlogEventDict
from permission_catalog.utils.logging.context_vars import request_id_var
from permission_catalog.utils.logging.error_adapter import (
    ErrorContext,
    ErrorMetadata,
    build_public_context,
    derive_error_metadata,
    get_error_suggestions,
)
from permission_catalog.utils.logging.handlers import DebugFilter

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, Processor

LogField = JsonValue | ContextDict | LoggerExtra
ErrorPayload = dict[str, LogField]

DEFAULT_APP_NAME = "权限目录"

_SEVERITY_LOG_METHODS: dict[ErrorSeverity, str] = {
    ErrorSeverity.CRITICAL: "critical",
    ErrorSeverity.HIGH: "error",
}


class StructlogConfig:
    """structlog 的一次性配置与应用绑定.

    Attributes:
        debug_filter: 按 ENABLE_DEBUG_LOG 丢弃 DEBUG 事件的处理器.
        configured: structlog.configure 是否已执行.

    """

    def __init__(self) -> None:
        self.debug_filter = DebugFilter(enabled=False)
        self.configured = False

    def configure(self, app: Flask | None = None) -> None:
        """配置处理器链, 重复调用只会重新绑定 app."""
        if not self.configured:
            structlog.configure(
                processors=cast("list[Processor]", self._build_processors()),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            self.configured = True

        if app is not None:
            self._bind_app(app)

    def _build_processors(self) -> list[object]:
        return [
            self.debug_filter,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            _add_request_context,
            _add_global_context,
            _console_renderer(),
        ]

    def _bind_app(self, app: Flask) -> None:
        enable_debug = bool(app.config.get("ENABLE_DEBUG_LOG", False))
        self.debug_filter.set_enabled(enabled=enable_debug)

        level_name = str(app.config.get("LOG_LEVEL", "INFO"))
        level = logging.DEBUG if enable_debug else getattr(logging, level_name, logging.INFO)
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter("%(message)s"))
            root_logger.addHandler(handler)
        root_logger.setLevel(level)


def _add_request_context(
    _logger: BindableLogger,
    _method_name: str,
    event_dict: StructlogEventDict,
) -> StructlogEventDict:
    if has_request_context():
        event_dict["request_id"] = request_id_var.get()
    return event_dict


def _add_global_context(
    logger: BindableLogger,
    _method_name: str,
    event_dict: StructlogEventDict,
) -> StructlogEventDict:
    """附加应用名称、版本与 logger 名称, 应用上下文外使用默认值."""
    try:
        event_dict["app_name"] = current_app.config["APP_NAME"]
        event_dict["app_version"] = current_app.config["APP_VERSION"]
        event_dict["environment"] = current_app.config.get("ENV", "development")
    except (RuntimeError, KeyError):
        event_dict["app_name"] = DEFAULT_APP_NAME
        event_dict["app_version"] = APP_VERSION
    event_dict["logger_name"] = getattr(logger, "name", "unknown")
    return event_dict


def _console_renderer() -> Processor:
    if sys.stdout.isatty():
        return structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=10),
        )
    return structlog.dev.ConsoleRenderer(colors=False)


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器, 首次调用时完成配置."""
    structlog_config.configure()
    return structlog.get_logger(name)


def get_system_logger() -> structlog.stdlib.BoundLogger:
    return get_logger("system")


def configure_structlog(app: Flask) -> None:
    """绑定应用配置并在应用上下文销毁时记录未处理异常."""
    structlog_config.configure(app)

    @app.teardown_appcontext
    def log_teardown_error(exception: BaseException | None) -> None:
        if exception:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))


def should_log_debug() -> bool:
    """是否记录调试日志, 应用上下文外沿用最近一次绑定的配置."""
    try:
        return bool(current_app.config.get("ENABLE_DEBUG_LOG", False))
    except RuntimeError:
        return structlog_config.debug_filter.enabled


def log_debug(message: str, module: str = "app", **kwargs: LogField) -> None:
    """记录调试级别日志.

    Example:
        >>> log_debug('权限分类树构建完成', module='permission_taxonomy', canonical_count=12)

    """
    if not should_log_debug():
        return
    get_logger("app").debug(message, module=module, **kwargs)


def enhanced_error_handler(
    error: Exception,
    context: ErrorContext | None = None,
    *,
    extra: LoggerExtra | None = None,
) -> ErrorPayload:
    """将异常转换为错误封套并记录日志.

    Args:
        error: 异常对象.
        context: 错误上下文, 未提供时按当前请求自动创建.
        extra: 追加到封套 `extra` 的诊断字段, 与 AppError.extra 合并.

    Returns:
        错误封套字典, 字段包括 error_id、category、severity、message_code、message、
        timestamp、recoverable、suggestions、context 以及可选的 extra.

    """
    context = context or ErrorContext(error)
    context.ensure_request()

    metadata = derive_error_metadata(error)

    extra_payload: dict[str, JsonValue] = {}
    if isinstance(error, AppError) and error.extra:
        extra_payload.update(error.extra)
    if extra:
        extra_payload.update(extra)

    payload: ErrorPayload = {
        "error": True,
        "error_id": context.error_id,
        "category": metadata.category.value,
        "severity": metadata.severity.value,
        "message_code": metadata.message_key,
        "message": metadata.message,
        "timestamp": context.timestamp.isoformat(),
        "recoverable": metadata.recoverable,
        "suggestions": get_error_suggestions(metadata.category),
        "context": build_public_context(context),
    }
    if extra_payload:
        payload["extra"] = extra_payload

    _log_error_payload(error, metadata, payload)
    return payload


def _log_error_payload(error: Exception, metadata: ErrorMetadata, payload: ErrorPayload) -> None:
    method_name = _SEVERITY_LOG_METHODS.get(metadata.severity, "warning")
    fields: dict[str, LogField] = {
        "module": "error_handler",
        "error_id": payload["error_id"],
        "category": payload["category"],
        "severity": payload["severity"],
        "context": payload["context"],
    }
    if "extra" in payload:
        fields["extra"] = payload["extra"]

    logger = get_logger("app")
    if method_name == "warning":
        logger.warning(metadata.message, exception=str(error), **fields)
        return
    # 仅高严重度错误附带堆栈
    getattr(logger, method_name)(metadata.message, error=str(error), exc_info=error, **fields)


__all__ = [
    "ErrorContext",
    "ErrorMetadata",
    "configure_structlog",
    "enhanced_error_handler",
    "get_logger",
    "get_system_logger",
    "log_debug",
    "should_log_debug",
    "structlog_config",
]
