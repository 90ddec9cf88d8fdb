"""OpenAPI 封套模型.

只用于文档; 运行时的封套由 response_utils 构造.
"""

from __future__ import annotations

from flask_restx import Model, Namespace, fields

ERROR_ENVELOPE_MODEL = "ErrorEnvelope"
_ISO_TIMESTAMP_EXAMPLE = "2025-01-01T00:00:00+00:00"


def _flag_fields(*, success: bool) -> dict[str, fields.Raw]:
    return {
        "success": fields.Boolean(required=True, example=success),
        "error": fields.Boolean(required=True, example=not success),
        "timestamp": fields.String(required=True, description="ISO8601 时间戳", example=_ISO_TIMESTAMP_EXAMPLE),
    }


def get_error_envelope_model(ns: Namespace) -> Model:
    """错误封套模型, 每个 namespace 只注册一次."""
    if ERROR_ENVELOPE_MODEL in ns.models:
        return ns.models[ERROR_ENVELOPE_MODEL]

    return ns.model(
        ERROR_ENVELOPE_MODEL,
        {
            **_flag_fields(success=False),
            "error_id": fields.String(required=True, example="9f1c2b7e4d6a4c0e8b3f5a7d2e1c0b9a"),
            "category": fields.String(required=True, enum=["validation", "business", "configuration", "system"]),
            "severity": fields.String(required=True, enum=["low", "medium", "high", "critical"]),
            "message_code": fields.String(required=True, example="PERMISSION_PAYLOAD_INVALID"),
            "message": fields.String(required=True, example="权限列表格式无效"),
            "recoverable": fields.Boolean(required=True, example=True),
            "suggestions": fields.List(fields.String, required=True),
            "context": fields.Raw(
                required=True,
                description="request_id, 请求内还包含 url 与 method",
                example={"request_id": "req_0f3c9a", "url": "/api/v1/permissions/taxonomy", "method": "POST"},
            ),
            "extra": fields.Raw(
                required=False,
                description="诊断字段, 例如超限时的 limit/received 或校验失败的 location",
                example={"limit": 5000, "received": 5200},
            ),
        },
    )


def make_success_envelope_model(ns: Namespace, name: str, data_model: Model | None = None) -> Model:
    """成功封套模型; 未给出 data_model 时 data 按任意 JSON 描述."""
    data_field = (
        fields.Raw(required=False, example={})
        if data_model is None
        else fields.Nested(data_model, required=False)
    )
    return ns.model(
        name,
        {
            **_flag_fields(success=True),
            "message": fields.String(required=True, example="权限分类树构建成功"),
            "data": data_field,
            "meta": fields.Raw(required=False, example={"filtered_total": 12}),
        },
    )
