"""Permissions namespace: 权限分类树与目录检查."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TypeVar

from flask import current_app, request
from flask_restx import Namespace, fields

from permission_catalog.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from permission_catalog.api.v1.resources.base import BaseResource
from permission_catalog.constants.system_constants import ErrorMessages, SuccessMessages
from permission_catalog.core.types.permission_taxonomy import PermissionModuleGroup, PermissionRecord
from permission_catalog.errors import ValidationError
from permission_catalog.schemas.permissions import PermissionListPayload, PermissionTaxonomyPayload
from permission_catalog.schemas.validation import validate_or_raise
from permission_catalog.services.permission_audit import audit_permission_catalog
from permission_catalog.services.permission_browser import summarize_selection
from permission_catalog.services.permission_taxonomy import (
    TAXONOMY_SERVICE_EXTENSION,
    PermissionTaxonomyService,
    find_match_span,
)
from permission_catalog.settings import DEFAULT_PERMISSION_PAYLOAD_MAX_ITEMS
from permission_catalog.types import JsonDict

ns = Namespace("permissions", description="权限分类")

PayloadT = TypeVar("PayloadT", PermissionListPayload, PermissionTaxonomyPayload)

ErrorEnvelope = get_error_envelope_model(ns)

PermissionItemPayload = ns.model(
    "PermissionItemPayload",
    {
        "id": fields.String(required=True, description="权限 ID"),
        "code": fields.String(required=True, description="权限编码", example="pig.record.view"),
        "name": fields.String(required=True, description="权限名称"),
        "module": fields.String(required=False, description="显式模块(可选)"),
        "description": fields.String(required=False, description="描述(可选)"),
    },
)

PermissionListRequest = ns.model(
    "PermissionListRequest",
    {
        "permissions": fields.List(
            fields.Nested(PermissionItemPayload),
            required=False,
            description="原始权限列表",
        ),
    },
)

PermissionTaxonomyRequest = ns.clone(
    "PermissionTaxonomyRequest",
    PermissionListRequest,
    {
        "search_query": fields.String(required=False, description="搜索关键字"),
        "selected_module": fields.String(required=False, description="选中的模块"),
        "selected_ids": fields.List(fields.String, required=False, description="已勾选的权限 ID"),
    },
)

PermissionTaxonomyData = ns.model(
    "PermissionTaxonomyData",
    {
        "groups": fields.Raw(required=True, description="筛选后的分类树"),
        "module_options": fields.Raw(required=True, description="模块下拉选项(基于完整树)"),
        "stats": fields.Raw(required=True, description="基于规范权限全集的统计"),
        "selection": fields.Raw(required=True, description="勾选统计"),
    },
)

PermissionTaxonomySuccessEnvelope = make_success_envelope_model(
    ns,
    "PermissionTaxonomySuccessEnvelope",
    PermissionTaxonomyData,
)
PermissionAuditSuccessEnvelope = make_success_envelope_model(ns, "PermissionAuditSuccessEnvelope")
PermissionConfigSuccessEnvelope = make_success_envelope_model(ns, "PermissionConfigSuccessEnvelope")


def _get_taxonomy_service() -> PermissionTaxonomyService:
    service = current_app.extensions.get(TAXONOMY_SERVICE_EXTENSION)
    if isinstance(service, PermissionTaxonomyService):
        return service
    return PermissionTaxonomyService()


def _parse_request(model: type[PayloadT]) -> PayloadT:
    raw_payload = request.get_json(silent=True)
    if raw_payload is None:
        raise ValidationError(message_key="JSON_REQUIRED")

    payload = validate_or_raise(model, raw_payload, message_key="VALIDATION_ERROR")
    limit = int(current_app.config.get("PERMISSION_PAYLOAD_MAX_ITEMS", DEFAULT_PERMISSION_PAYLOAD_MAX_ITEMS))
    if len(payload.permissions) > limit:
        raise ValidationError(
            ErrorMessages.PERMISSION_PAYLOAD_TOO_LARGE.format(limit=limit),
            message_key="PERMISSION_PAYLOAD_TOO_LARGE",
            extra={"limit": limit, "received": len(payload.permissions)},
        )
    return payload


def _serialize_permission(record: PermissionRecord, search_query: str) -> JsonDict:
    item = record.to_dict()
    if search_query.strip():
        item["highlight"] = {
            "name": _span_or_none(record.name, search_query),
            "code": _span_or_none(record.code, search_query),
            "description": _span_or_none(record.description, search_query),
        }
    return item


def _span_or_none(text: str | None, search_query: str) -> list[str] | None:
    span = find_match_span(text, search_query)
    return list(span) if span else None


def _serialize_groups(groups: Iterable[PermissionModuleGroup], search_query: str) -> list[JsonDict]:
    return [
        {
            "module": group.module,
            "module_name": group.module_name,
            "module_order": group.module_order,
            "permission_count": group.permission_count,
            "categories": [
                {
                    "category": category.category,
                    "category_name": category.category_name,
                    "permissions": [_serialize_permission(record, search_query) for record in category.permissions],
                }
                for category in group.categories
            ],
        }
        for group in groups
    ]


@ns.route("/taxonomy")
class PermissionTaxonomyResource(BaseResource):
    """权限分类树资源."""

    @ns.expect(PermissionTaxonomyRequest, validate=False)
    @ns.response(200, "OK", PermissionTaxonomySuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """构建权限分类树."""
        payload = _parse_request(PermissionTaxonomyPayload)

        def _execute():
            result = _get_taxonomy_service().build(
                payload.to_records(),
                search_query=payload.search_query,
                selected_module=payload.selected_module,
            )
            selection = summarize_selection(result.groups, payload.selected_ids)
            return self.success(
                data={
                    "groups": _serialize_groups(result.filtered_groups, payload.search_query),
                    "module_options": result.module_options,
                    "stats": result.stats.to_dict(),
                    "selection": selection.to_dict(),
                },
                message=SuccessMessages.TAXONOMY_BUILT,
                meta={
                    "filtered_total": result.filtered_total,
                    "search_query": payload.search_query.strip(),
                    "selected_module": payload.selected_module,
                },
            )

        return self.safe_call(
            _execute,
            module="permissions",
            action="build_permission_taxonomy",
            public_error="构建权限分类树失败",
            context={
                "permission_count": len(payload.permissions),
                "selected_module": payload.selected_module,
            },
        )


@ns.route("/audit")
class PermissionAuditResource(BaseResource):
    """权限目录检查资源."""

    @ns.expect(PermissionListRequest, validate=False)
    @ns.response(200, "OK", PermissionAuditSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """检查原始权限目录中的重复与命名问题."""
        payload = _parse_request(PermissionListPayload)

        def _execute():
            report = audit_permission_catalog(payload.to_records(), _get_taxonomy_service().config)
            return self.success(data=report.to_dict(), message=SuccessMessages.AUDIT_COMPLETED)

        return self.safe_call(
            _execute,
            module="permissions",
            action="audit_permission_catalog",
            public_error="权限目录检查失败",
            context={"permission_count": len(payload.permissions)},
        )


@ns.route("/config")
class PermissionConfigResource(BaseResource):
    """当前生效的权限分类配置."""

    @ns.response(200, "OK", PermissionConfigSuccessEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        def _execute():
            return self.success(
                data=_get_taxonomy_service().config.to_dict(),
                message=SuccessMessages.CONFIG_LOADED,
            )

        return self.safe_call(
            _execute,
            module="permissions",
            action="get_permission_taxonomy_config",
            public_error="获取权限分类配置失败",
        )
