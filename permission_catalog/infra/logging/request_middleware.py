"""请求关联 ID 与每请求一条的完成日志(Infra).

- before_request: 采纳合法的 X-Request-ID, 否则生成新 ID, 写入 contextvar 与 g.
- after_request: 回写 X-Request-ID 响应头并记录 http_request_completed.
- teardown_request: 还原 contextvar, 请求之间不串号.
"""

from __future__ import annotations

import re
import time
from contextlib import suppress
from typing import TYPE_CHECKING
from uuid import uuid4

from flask import Flask, g, request

from permission_catalog.constants import HttpHeaders
from permission_catalog.utils.logging.context_vars import request_id_var
from permission_catalog.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from werkzeug.wrappers.response import Response

REQUEST_ID_PREFIX = "req_"
# 首字符为字母或数字, 总长不超过 128
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.:-]{0,127}")


def generate_request_id() -> str:
    return f"{REQUEST_ID_PREFIX}{uuid4().hex}"


def sanitize_request_id(raw_value: str | None) -> str | None:
    """去掉首尾空白后校验格式, 不合法时返回 None."""
    value = (raw_value or "").strip()
    if value and _REQUEST_ID_PATTERN.fullmatch(value):
        return value
    return None


def _elapsed_ms() -> int | None:
    started_at = g.get("request_started_at")
    if started_at is None:
        return None
    return round((time.perf_counter() - started_at) * 1000)


def register_request_logging(app: Flask) -> None:
    """在 app 上注册请求关联 ID 的三个钩子."""
    logger = get_logger("http")

    @app.before_request
    def _bind_request_id() -> None:
        request_id = sanitize_request_id(request.headers.get(HttpHeaders.X_REQUEST_ID)) or generate_request_id()
        g.request_id = request_id
        g.request_id_token = request_id_var.set(request_id)
        g.request_started_at = time.perf_counter()

    @app.after_request
    def _log_request_completed(response: Response) -> Response:
        request_id = g.get("request_id") or generate_request_id()
        response.headers.setdefault(HttpHeaders.X_REQUEST_ID, request_id)

        url_rule = request.url_rule
        logger.info(
            "http_request_completed",
            module="http",
            method=request.method,
            path=request.path,
            route=url_rule.rule if url_rule is not None else None,
            endpoint=request.endpoint,
            status_code=response.status_code,
            outcome="success" if response.status_code < 400 else "error",
            duration_ms=_elapsed_ms(),
        )
        return response

    @app.teardown_request
    def _release_request_id(_exc: BaseException | None) -> None:
        token = g.pop("request_id_token", None)
        # token 来自其他 Context 时 reset 会抛 ValueError
        if token is not None:
            with suppress(ValueError):
                request_id_var.reset(token)


__all__ = ["REQUEST_ID_PREFIX", "generate_request_id", "register_request_logging", "sanitize_request_id"]
