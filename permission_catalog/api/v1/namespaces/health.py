"""Health namespace."""

from __future__ import annotations

from flask_restx import Namespace, fields

from permission_catalog.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from permission_catalog.api.v1.resources.base import BaseResource
from permission_catalog.constants.system_constants import SuccessMessages
from permission_catalog.services.health.health_checks_service import check_ping, get_basic_health

ns = Namespace("health", description="健康检查")

PingData = ns.model(
    "HealthPingData",
    {
        "status": fields.String(required=True, description="服务状态", example="ok"),
    },
)

PingSuccessEnvelope = make_success_envelope_model(ns, "HealthPingSuccessEnvelope", PingData)
ErrorEnvelope = get_error_envelope_model(ns)

BasicData = ns.model(
    "HealthBasicData",
    {
        "status": fields.String(required=True, description="服务状态", example="healthy"),
        "timestamp": fields.Float(required=True, description="时间戳(秒)"),
        "version": fields.String(required=True, description="版本号", example="0.3.0"),
        "uptime_seconds": fields.Float(required=True, description="进程运行时长(秒)"),
    },
)

BasicSuccessEnvelope = make_success_envelope_model(ns, "HealthBasicSuccessEnvelope", BasicData)


@ns.route("/ping")
class HealthPingResource(BaseResource):
    @ns.response(200, "OK", PingSuccessEnvelope)
    def get(self):
        return self.success(data=check_ping(), message="服务运行正常")


@ns.route("/basic")
class HealthBasicResource(BaseResource):
    @ns.response(200, "OK", BasicSuccessEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        def _execute():
            return self.success(data=get_basic_health(), message=SuccessMessages.OPERATION_SUCCESS)

        return self.safe_call(
            _execute,
            module="health",
            action="get_health_basic",
            public_error="获取基础健康状态失败",
        )
