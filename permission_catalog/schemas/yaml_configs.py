"""YAML 配置文件的 schema(一次性校验/规范化入口).

用于读取 `PERMISSION_TAXONOMY_CONFIG` 指向的权限分类覆盖配置:
- 在读取入口完成一次性 canonicalization + 校验
- 下游逻辑只消费已规整的 TaxonomyConfig, 避免运行期散落 `or` 兜底链
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, field_validator, model_validator

from permission_catalog.schemas.base import PayloadSchema


def _normalize_text_mapping(value: Any, *, field_name: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"{field_name} 必须为对象")  # noqa: TRY004
    normalized: dict[str, str] = {}
    for key, label in value.items():
        if not isinstance(key, str) or not key.strip():
            continue
        if not isinstance(label, str) or not label.strip():
            raise ValueError(f"{field_name}.{key} 必须为非空字符串")
        normalized[key.strip()] = label.strip()
    return normalized


class ModuleEntryConfig(PayloadSchema):
    """单个模块的显示配置."""

    label: str
    order: int

    @field_validator("label")
    @classmethod
    def _strip_label(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("label 不能为空")
        return value.strip()


class TaxonomyConfigFile(PayloadSchema):
    """权限分类覆盖配置文件结构.

    所有字段均为可选; 与默认配置合并时按键覆盖.
    """

    modules: dict[str, ModuleEntryConfig] = Field(default_factory=dict)
    category_names: dict[str, dict[str, str]] = Field(default_factory=dict)
    operation_names: dict[str, str] = Field(default_factory=dict)
    module_remaps: dict[str, str] = Field(default_factory=dict)
    prefix_modules: dict[str, str] = Field(default_factory=dict)
    legacy_prefixes: dict[str, str] = Field(default_factory=dict)
    fallback_module: str | None = None
    fallback_category: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _validate_root(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ValueError("配置文件格式错误，必须为 YAML mapping")  # noqa: TRY004
        return data

    @field_validator("modules", mode="before")
    @classmethod
    def _coerce_modules(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("modules 必须为对象")  # noqa: TRY004
        return {str(key).strip(): entry for key, entry in value.items() if str(key).strip()}

    @field_validator("category_names", mode="before")
    @classmethod
    def _coerce_category_names(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ValueError("category_names 必须为对象")  # noqa: TRY004
        return {
            str(module).strip(): _normalize_text_mapping(names, field_name=f"category_names.{module}")
            for module, names in value.items()
            if str(module).strip()
        }

    @field_validator("operation_names", "module_remaps", "prefix_modules", "legacy_prefixes", mode="before")
    @classmethod
    def _coerce_text_mapping(cls, value: Any, info: Any) -> dict[str, str]:
        return _normalize_text_mapping(value, field_name=info.field_name)

    @field_validator("fallback_module", "fallback_category", mode="before")
    @classmethod
    def _strip_blank_to_none(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip() or None
        return value


__all__ = ["ModuleEntryConfig", "TaxonomyConfigFile"]
