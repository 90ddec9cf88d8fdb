"""API v1 资源基类."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar, Unpack

from flask_restx import Resource

from permission_catalog.utils.response_utils import jsonify_unified_success
from permission_catalog.utils.route_safety import safe_route_call

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from flask import Response

    from permission_catalog.types import RouteSafetyOptions

R = TypeVar("R")


class BaseResource(Resource):
    """资源方法通过 success 返回成功封套, 通过 safe_call 收口异常."""

    def success(
        self,
        data: object | None = None,
        message: object | None = None,
        *,
        status: int = 200,
        meta: Mapping[str, object] | None = None,
    ) -> tuple[Response, int]:
        return jsonify_unified_success(data, message, status=status, meta=meta)

    def safe_call(
        self,
        func: Callable[[], R],
        *,
        module: str,
        action: str,
        public_error: str,
        **options: Unpack[RouteSafetyOptions],
    ) -> R:
        return safe_route_call(func, module=module, action=action, public_error=public_error, **options)
