"""Flask-RESTX Api 定制.

RestX 内部产生的错误(404/405/校验失败等)与业务异常共用同一错误封套.
"""

from __future__ import annotations

from flask import Response, request
from flask_restx import Api

from permission_catalog.utils.response_utils import jsonify_unified_error, jsonify_unified_success
from permission_catalog.utils.structlog_config import ErrorContext


class PermissionCatalogApi(Api):
    """统一错误封套的 RestX Api."""

    def render_root(self) -> tuple[Response, int]:  # type: ignore[override]
        """`/api/v1/` 入口, 列出文档与主要资源地址."""
        prefix = request.path.rstrip("/")
        docs_url = f"{prefix}{self._doc}" if self._doc else None
        return jsonify_unified_success(
            data={
                "docs_url": docs_url,
                "openapi_url": f"{prefix}/openapi.json",
                "health_ping_url": f"{prefix}/health/ping",
                "taxonomy_url": f"{prefix}/permissions/taxonomy",
            },
            message="API v1 已就绪",
        )

    def handle_error(self, e: Exception) -> Response:  # type: ignore[override]
        return jsonify_unified_error(e, context=ErrorContext(e, request))
