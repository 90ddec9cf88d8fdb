"""权限目录 - 运行时配置.

所有环境变量都在这里解析一次, `create_app(settings=...)` 之后只读 Settings.
本地 `.env` 可选, 已存在的环境变量优先.

生产环境(FLASK_ENV=production)的额外约束:
- SECRET_KEY 必填.
- DEBUG 默认关闭.
- API 文档默认关闭, 显式设置 API_V1_DOCS_ENABLED 时以显式值为准.
"""

from __future__ import annotations

import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from permission_catalog.constants import LogLevel

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

APP_VERSION = "0.3.0"
PRODUCTION_ENVIRONMENT = "production"

DEFAULT_PERMISSION_PAYLOAD_MAX_ITEMS = 5000
DEFAULT_MAX_CONTENT_LENGTH_BYTES = 16 * 1024 * 1024

LOG_LEVELS = frozenset(level.value for level in LogLevel)


class Settings(BaseSettings):
    """应用配置, 字段别名即环境变量名."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default="development", validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")
    secret_key: str = Field(default="", validation_alias="SECRET_KEY")

    app_name: str = Field(default="权限目录", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    log_level: str = Field(default=LogLevel.INFO.value, validation_alias="LOG_LEVEL")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")
    api_v1_docs_enabled: bool = Field(default=True, validation_alias="API_V1_DOCS_ENABLED")

    max_content_length_bytes: int = Field(
        default=DEFAULT_MAX_CONTENT_LENGTH_BYTES,
        validation_alias="MAX_CONTENT_LENGTH",
    )
    # 为空时使用内置分类表
    permission_taxonomy_config: str | None = Field(default=None, validation_alias="PERMISSION_TAXONOMY_CONFIG")
    permission_payload_max_items: int = Field(
        default=DEFAULT_PERMISSION_PAYLOAD_MAX_ITEMS,
        validation_alias="PERMISSION_PAYLOAD_MAX_ITEMS",
    )

    @classmethod
    def load(cls) -> Settings:
        """读取可选的 .env 后构造 Settings."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            allowed = "/".join(sorted(LOG_LEVELS))
            msg = f"LOG_LEVEL 仅支持 {allowed}"
            raise ValueError(msg)
        return level

    @field_validator("max_content_length_bytes", "permission_payload_max_items")
    @classmethod
    def _check_positive(cls, value: int, info: ValidationInfo) -> int:
        if value <= 0:
            env_name = cls.model_fields[info.field_name].validation_alias
            msg = f"{env_name} 必须为正整数"
            raise ValueError(msg)
        return value

    @field_validator("permission_taxonomy_config", mode="before")
    @classmethod
    def _blank_path_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @model_validator(mode="after")
    def _apply_environment_defaults(self) -> Settings:
        # frozen 模型只能通过 object.__setattr__ 回填推导值
        if "debug" not in self.model_fields_set:
            object.__setattr__(self, "debug", not self.is_production)
        if self.is_production and "api_v1_docs_enabled" not in self.model_fields_set:
            object.__setattr__(self, "api_v1_docs_enabled", False)

        if not self.secret_key:
            if not self.debug:
                msg = "SECRET_KEY environment variable must be set in production"
                raise ValueError(msg)
            object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
            logger.warning("未设置 SECRET_KEY, 已生成临时随机值, 生产环境请显式配置")
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == PRODUCTION_ENVIRONMENT

    def to_flask_config(self) -> dict[str, object]:
        """映射为 app.config 键值."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "SECRET_KEY": self.secret_key,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "LOG_LEVEL": self.log_level,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "API_V1_DOCS_ENABLED": self.api_v1_docs_enabled,
            "MAX_CONTENT_LENGTH": self.max_content_length_bytes,
            "PERMISSION_TAXONOMY_CONFIG": self.permission_taxonomy_config,
            "PERMISSION_PAYLOAD_MAX_ITEMS": self.permission_payload_max_items,
            "JSON_AS_ASCII": False,
        }
