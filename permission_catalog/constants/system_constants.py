"""错误分类、严重度与对外文案."""

from enum import Enum


class LogLevel(Enum):
    """LOG_LEVEL 允许的取值."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """错误封套中的 category 字段."""

    VALIDATION = "validation"
    BUSINESS = "business"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重度, 决定日志级别与 recoverable 标记."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """message_key -> 对外文案."""

    INTERNAL_ERROR = "服务器内部错误"
    INVALID_REQUEST = "无效的请求"
    VALIDATION_ERROR = "数据验证失败"
    JSON_REQUIRED = "请求必须是JSON格式"

    PERMISSION_PAYLOAD_INVALID = "权限列表格式无效"
    PERMISSION_PAYLOAD_TOO_LARGE = "权限数量超过上限 {limit}"
    TAXONOMY_CONFIG_INVALID = "权限分类配置无效"


class SuccessMessages:
    """成功封套中的 message."""

    OPERATION_SUCCESS = "操作成功"
    TAXONOMY_BUILT = "权限分类树构建成功"
    AUDIT_COMPLETED = "权限目录检查完成"
    CONFIG_LOADED = "权限分类配置获取成功"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "LogLevel",
    "SuccessMessages",
]
