"""权限列表 payload schema.

目标:
- 将外部已反序列化的权限 JSON 收敛为 `PermissionRecord`
- 缺失/null 的权限列表视为空列表, 不报错
- 仅做类型规整, 不校验权限是否存在于策略库
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import Field, ValidationInfo, field_validator, model_validator

from permission_catalog.core.types.permission_taxonomy import PermissionRecord
from permission_catalog.schemas.base import PayloadSchema
from permission_catalog.schemas.validation import SchemaMessageKeyError


def _coerce_text(value: Any, *, field_name: str) -> str:
    # bool 是 int 的子类, 不应被当成编号.
    if isinstance(value, bool):
        raise ValueError(f"{field_name} 必须为字符串")
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise ValueError(f"{field_name} 必须为字符串")


def _coerce_optional_text(value: Any, *, field_name: str) -> str | None:
    if value is None:
        return None
    text = _coerce_text(value, field_name=field_name)
    return text if text.strip() else None


class PermissionRecordPayload(PayloadSchema):
    """单条权限记录."""

    id: str
    code: str
    name: str
    module: str | None = None
    description: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _ensure_mapping(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise SchemaMessageKeyError("权限记录必须为对象", message_key="PERMISSION_PAYLOAD_INVALID")
        return data

    @field_validator("id", "code", "name", mode="before")
    @classmethod
    def _parse_required_text(cls, value: Any, info: ValidationInfo) -> str:
        return _coerce_text(value, field_name=info.field_name)

    @field_validator("module", "description", mode="before")
    @classmethod
    def _parse_optional_text(cls, value: Any, info: ValidationInfo) -> str | None:
        return _coerce_optional_text(value, field_name=info.field_name)

    def to_record(self) -> PermissionRecord:
        return PermissionRecord(
            id=self.id,
            code=self.code,
            name=self.name,
            module=self.module,
            description=self.description,
        )


class PermissionListPayload(PayloadSchema):
    """携带权限列表的请求体."""

    permissions: list[PermissionRecordPayload] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _ensure_object(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise SchemaMessageKeyError("请求体必须为 JSON 对象", message_key="JSON_REQUIRED")
        return data

    @field_validator("permissions", mode="before")
    @classmethod
    def _parse_permissions(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise SchemaMessageKeyError("permissions 必须为数组", message_key="PERMISSION_PAYLOAD_INVALID")
        return list(value)

    def to_records(self) -> list[PermissionRecord]:
        return [item.to_record() for item in self.permissions]


class PermissionTaxonomyPayload(PermissionListPayload):
    """权限分类树请求体."""

    search_query: str = ""
    selected_module: str | None = None
    selected_ids: list[str] = Field(default_factory=list)

    @field_validator("search_query", mode="before")
    @classmethod
    def _parse_search_query(cls, value: Any) -> str:
        if value is None:
            return ""
        return _coerce_text(value, field_name="search_query")

    @field_validator("selected_module", mode="before")
    @classmethod
    def _parse_selected_module(cls, value: Any) -> str | None:
        parsed = _coerce_optional_text(value, field_name="selected_module")
        return parsed.strip() if parsed else None

    @field_validator("selected_ids", mode="before")
    @classmethod
    def _parse_selected_ids(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("selected_ids 必须为数组")  # noqa: TRY004
        return [_coerce_text(item, field_name="selected_ids") for item in value]


__all__ = [
    "PermissionListPayload",
    "PermissionRecordPayload",
    "PermissionTaxonomyPayload",
]
