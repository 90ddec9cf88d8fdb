"""权限目录 - Flask 应用初始化.

将原始权限列表整理为 模块 -> 分类 -> 权限 的分类树, 并以 JSON API 对外提供.
"""

from flask import Flask, request
from flask.typing import ResponseReturnValue

from permission_catalog.api import register_api_blueprints
from permission_catalog.infra.logging.request_middleware import register_request_logging
from permission_catalog.services.permission_taxonomy import (
    TAXONOMY_SERVICE_EXTENSION,
    PermissionTaxonomyService,
    load_taxonomy_config,
)
from permission_catalog.settings import Settings
from permission_catalog.utils.response_utils import jsonify_unified_error
from permission_catalog.utils.structlog_config import (
    ErrorContext,
    configure_structlog,
    get_system_logger,
)


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建 Flask 应用.

    顺序: 写入配置 -> 日志 -> 加载分类配置 -> 注册 API -> 全局错误处理.
    分类配置在启动时一次性加载, 覆盖文件有问题时直接失败.

    Args:
        settings: 显式传入的配置, 缺省时从环境变量读取.

    Returns:
        Flask: 应用实例.

    Raises:
        ConfigurationError: PERMISSION_TAXONOMY_CONFIG 指向的文件缺失或非法时抛出.

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)
    app.config.from_mapping(resolved_settings.to_flask_config())
    app.json.ensure_ascii = False

    configure_structlog(app)
    register_request_logging(app)

    configure_taxonomy(app, resolved_settings)
    register_api_blueprints(app, resolved_settings)

    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        return jsonify_unified_error(error, context=ErrorContext(error, request))

    get_system_logger().info(
        "权限目录应用已创建",
        module="system",
        environment=resolved_settings.environment,
        docs_enabled=resolved_settings.api_v1_docs_enabled,
    )
    return app


def configure_taxonomy(app: Flask, settings: Settings) -> None:
    """加载分类配置, 以 TAXONOMY_SERVICE_EXTENSION 为键挂载分类服务."""
    config = load_taxonomy_config(settings.permission_taxonomy_config)
    app.extensions[TAXONOMY_SERVICE_EXTENSION] = PermissionTaxonomyService(config)
