"""视图层的异常收口.

资源方法把业务逻辑包成闭包交给 `safe_route_call`: 已知异常(AppError / HTTPException)
记 warning 后原样抛出, 其余异常记 error 并转换为对外文案固定的 fallback 异常,
最终都由 Api.handle_error 渲染为错误封套.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar, Unpack

from werkzeug.exceptions import HTTPException

from permission_catalog.errors import AppError, SystemError
from permission_catalog.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from permission_catalog.types import ContextDict, RouteSafetyOptions

R = TypeVar("R")

PASSTHROUGH_EXCEPTIONS: tuple[type[BaseException], ...] = (AppError, HTTPException)


def safe_route_call(
    func: Callable[[], R],
    *,
    module: str,
    action: str,
    public_error: str,
    **options: Unpack[RouteSafetyOptions],
) -> R:
    """执行视图闭包并统一记录失败日志.

    Args:
        func: 无参闭包, 返回视图响应.
        module: 日志中的 module 字段.
        action: 日志中的 action 字段, 例如 "build_permission_taxonomy".
        public_error: 非预期异常时对外返回的文案.
        **options: context / extra 附加日志字段; expected_exceptions 追加直接透传的异常;
            fallback_exception 替换默认的 SystemError; log_event 替换默认事件名.

    Returns:
        闭包的返回值.

    Raises:
        AppError: 闭包抛出的业务异常, 或由非预期异常转换出的 fallback 异常.

    """
    passthrough = PASSTHROUGH_EXCEPTIONS + tuple(options.get("expected_exceptions") or ())
    fields: ContextDict = {"module": module, "action": action}
    fields.update(options.get("context") or {})
    fields.update(options.get("extra") or {})
    event = options.get("log_event") or f"{action}执行失败"
    logger = get_logger("app")

    try:
        return func()
    except passthrough as exc:
        logger.warning(event, error_type=type(exc).__name__, error_message=str(exc), **fields)
        raise
    except Exception as exc:
        logger.error(event, error_type=type(exc).__name__, unexpected=True, **fields)
        fallback = options.get("fallback_exception", SystemError)
        raise fallback(public_error) from exc


__all__ = ["PASSTHROUGH_EXCEPTIONS", "safe_route_call"]
