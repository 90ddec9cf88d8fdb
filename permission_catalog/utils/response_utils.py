"""统一响应封套.

成功封套: success / error / message / timestamp, 可选 data 与 meta.
错误封套由 `enhanced_error_handler` 生成, 这里只补 success=false 与 HTTP 状态码.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, cast

from flask import Response, jsonify

from permission_catalog.constants import HttpStatus
from permission_catalog.constants.system_constants import SuccessMessages
from permission_catalog.errors import map_exception_to_status
from permission_catalog.utils.structlog_config import ErrorContext, enhanced_error_handler

if TYPE_CHECKING:
    from collections.abc import Mapping

    from permission_catalog.types import JsonDict, JsonValue


def unified_success_response(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
    meta: Mapping[str, object] | None = None,
) -> tuple[JsonDict, int]:
    """构造成功封套, message 缺省为"操作成功", 空 meta 不输出."""
    payload: JsonDict = {
        "success": True,
        "error": False,
        "message": SuccessMessages.OPERATION_SUCCESS if message is None else str(message),
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if data is not None:
        payload["data"] = cast("JsonValue", data)
    if meta:
        payload["meta"] = cast("JsonDict", dict(meta))
    return payload, status


def unified_error_response(
    error: BaseException,
    *,
    status_code: int | None = None,
    extra: Mapping[str, JsonValue] | None = None,
    context: ErrorContext | None = None,
) -> tuple[JsonDict, int]:
    """构造错误封套.

    Args:
        error: 异常对象, 非 Exception 的 BaseException 按文本包装.
        status_code: 显式状态码, 缺省时按异常类型映射.
        extra: 追加到封套 extra 的字段.
        context: 错误上下文, 缺省时按当前请求创建.

    Returns:
        (错误封套, HTTP 状态码).

    """
    if not isinstance(error, Exception):
        error = Exception(str(error))
    payload = cast("JsonDict", enhanced_error_handler(error, context or ErrorContext(error), extra=extra))
    payload["success"] = False
    return payload, status_code or map_exception_to_status(error, default=HttpStatus.INTERNAL_SERVER_ERROR)


def jsonify_unified_success(
    data: object | None = None,
    message: object | None = None,
    *,
    status: int = HttpStatus.OK,
    meta: Mapping[str, object] | None = None,
) -> tuple[Response, int]:
    payload, status_code = unified_success_response(data, message, status=status, meta=meta)
    return jsonify(payload), status_code


def jsonify_unified_error(error: BaseException, *, context: ErrorContext | None = None) -> Response:
    """错误封套的 Response 形式, 状态码已写入 response.status_code."""
    payload, status_code = unified_error_response(error, context=context)
    response = jsonify(payload)
    response.status_code = status_code
    return response


__all__ = [
    "jsonify_unified_error",
    "jsonify_unified_success",
    "unified_error_response",
    "unified_success_response",
]
