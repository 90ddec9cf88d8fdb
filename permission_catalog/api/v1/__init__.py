"""API v1 (Flask-RESTX).

该包仅承载对外 JSON API 的路由层与 OpenAPI 文档能力.
分类计算与目录检查复用 services 层.
"""

from __future__ import annotations

from typing import cast

from flask import Blueprint, Response, jsonify

from permission_catalog.api.v1.api import PermissionCatalogApi
from permission_catalog.api.v1.namespaces.health import ns as health_ns
from permission_catalog.api.v1.namespaces.permissions import ns as permissions_ns
from permission_catalog.settings import Settings


def create_api_v1_blueprint(settings: Settings) -> Blueprint:
    """创建并配置 `/api/v1` Blueprint.

    - Swagger UI: `/api/v1/docs`(可配置关闭)
    - OpenAPI JSON: `/api/v1/openapi.json`
    """
    blueprint = Blueprint("api_v1", __name__)

    docs_path = "/docs" if settings.api_v1_docs_enabled else cast(str, False)
    api = PermissionCatalogApi(
        blueprint,
        title=settings.app_name,
        version=settings.app_version,
        doc=docs_path,
    )

    api.add_namespace(health_ns, path="/health")
    api.add_namespace(permissions_ns, path="/permissions")

    @blueprint.get("/openapi.json")
    def openapi_json() -> tuple[Response, int]:
        return jsonify(api.__schema__), 200

    return blueprint
