"""权限分类相关类型定义.

所有结构均为不可变值对象: 每次输入变化都整体重新计算,不做原地修改.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypedDict

from permission_catalog.types import JsonDict


@dataclass(frozen=True, slots=True)
class PermissionRecord:
    """外部提供的单条权限记录.

    `id` 可能重复; `module`/`description` 缺省为 None.
    """

    id: str
    code: str
    name: str
    module: str | None = None
    description: str | None = None

    @property
    def code_prefix(self) -> str:
        """code 的首段(领域前缀)."""
        return self.code.split(".")[0]

    def to_dict(self) -> JsonDict:
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "module": self.module,
            "description": self.description,
        }


@dataclass(frozen=True, slots=True)
class PermissionClassification:
    """分类器输出的 (module, category) 对."""

    module: str
    category: str


@dataclass(frozen=True, slots=True)
class PermissionCategory:
    """模块内的子分类, permissions 按名称排序且非空."""

    category: str
    category_name: str
    permissions: tuple[PermissionRecord, ...]

    def to_dict(self) -> JsonDict:
        return {
            "category": self.category,
            "category_name": self.category_name,
            "permissions": [permission.to_dict() for permission in self.permissions],
        }


@dataclass(frozen=True, slots=True)
class PermissionModuleGroup:
    """模块分组, categories 按显示名称排序且非空."""

    module: str
    module_name: str
    module_order: int
    categories: tuple[PermissionCategory, ...]

    @property
    def permission_count(self) -> int:
        return sum(len(category.permissions) for category in self.categories)

    def to_dict(self) -> JsonDict:
        return {
            "module": self.module,
            "module_name": self.module_name,
            "module_order": self.module_order,
            "categories": [category.to_dict() for category in self.categories],
        }


@dataclass(frozen=True, slots=True)
class PermissionStats:
    """基于去重后全集(非筛选视图)的统计."""

    total: int
    module_counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "module_counts", MappingProxyType(dict(self.module_counts)))

    def to_dict(self) -> JsonDict:
        return {"total": self.total, "module_counts": dict(self.module_counts)}


class ModuleOption(TypedDict):
    """模块下拉选项结构."""

    value: str
    label: str


@dataclass(frozen=True, slots=True)
class ModuleConfig:
    """单个模块的显示配置."""

    label: str
    order: int


@dataclass(frozen=True, slots=True)
class TaxonomyConfig:
    """注入分类器与命名解析器的静态配置.

    Attributes:
        modules: module -> ModuleConfig(label, order).
        category_names: module -> {category -> label}.
        operation_names: 通用操作名 -> label.
        module_remaps: 显式 module 字段的旧值 -> 新值.
        prefix_modules: code 首段 -> module.
        legacy_prefixes: 旧 code 前缀 -> 取代它的新前缀.
        fallback_module: 兜底模块.
        fallback_category: 兜底分类.

    """

    modules: Mapping[str, ModuleConfig]
    category_names: Mapping[str, Mapping[str, str]]
    operation_names: Mapping[str, str]
    module_remaps: Mapping[str, str]
    prefix_modules: Mapping[str, str]
    legacy_prefixes: Mapping[str, str]
    fallback_module: str
    fallback_category: str

    def __post_init__(self) -> None:
        frozen_categories = MappingProxyType(
            {module: MappingProxyType(dict(names)) for module, names in self.category_names.items()},
        )
        object.__setattr__(self, "modules", MappingProxyType(dict(self.modules)))
        object.__setattr__(self, "category_names", frozen_categories)
        object.__setattr__(self, "operation_names", MappingProxyType(dict(self.operation_names)))
        object.__setattr__(self, "module_remaps", MappingProxyType(dict(self.module_remaps)))
        object.__setattr__(self, "prefix_modules", MappingProxyType(dict(self.prefix_modules)))
        object.__setattr__(self, "legacy_prefixes", MappingProxyType(dict(self.legacy_prefixes)))

        fallback = self.modules.get(self.fallback_module)
        if fallback is None:
            msg = f"兜底模块 {self.fallback_module} 未配置"
            raise ValueError(msg)
        higher = [name for name, module in self.modules.items() if module.order > fallback.order]
        if higher:
            msg = f"兜底模块 {self.fallback_module} 的 order 必须最大, 以下模块更大: {', '.join(sorted(higher))}"
            raise ValueError(msg)

    @property
    def current_prefixes(self) -> frozenset[str]:
        return frozenset(self.legacy_prefixes.values())

    def module_config(self, module: str) -> ModuleConfig:
        """返回模块配置, 未知模块使用兜底模块的配置."""
        return self.modules.get(module) or self.modules[self.fallback_module]

    def to_dict(self) -> JsonDict:
        return {
            "modules": [
                {"module": name, "label": module.label, "order": module.order}
                for name, module in sorted(self.modules.items(), key=lambda item: item[1].order)
            ],
            "fallback_module": self.fallback_module,
            "fallback_category": self.fallback_category,
            "legacy_prefixes": dict(self.legacy_prefixes),
            "module_remaps": dict(self.module_remaps),
        }


@dataclass(frozen=True, slots=True)
class CategorySelectionSummary:
    """单个分类的勾选统计."""

    category: str
    selected: int
    total: int


@dataclass(frozen=True, slots=True)
class ModuleSelectionSummary:
    """单个模块的勾选统计."""

    module: str
    selected: int
    total: int
    categories: tuple[CategorySelectionSummary, ...]


@dataclass(frozen=True, slots=True)
class SelectionSummary:
    """整棵树的勾选统计."""

    selected: int
    total: int
    modules: tuple[ModuleSelectionSummary, ...]

    def to_dict(self) -> JsonDict:
        return {
            "selected": self.selected,
            "total": self.total,
            "modules": [
                {
                    "module": module.module,
                    "selected": module.selected,
                    "total": module.total,
                    "categories": [
                        {"category": item.category, "selected": item.selected, "total": item.total}
                        for item in module.categories
                    ],
                }
                for module in self.modules
            ],
        }


@dataclass(frozen=True, slots=True)
class DuplicateCodeEntry:
    """被多条记录占用的 code."""

    code: str
    holders: tuple[PermissionRecord, ...]


@dataclass(frozen=True, slots=True)
class SharedNameEntry:
    """对应多个不同 code 的权限名称."""

    name: str
    codes: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SupersededCodeEntry:
    """旧前缀 code 与同时存在的新前缀 code."""

    legacy_code: str
    current_code: str


@dataclass(frozen=True, slots=True)
class CatalogAuditReport:
    """权限目录一致性检查结果."""

    total: int
    unique_codes: int
    duplicate_codes: tuple[DuplicateCodeEntry, ...]
    empty_names: tuple[PermissionRecord, ...]
    shared_names: tuple[SharedNameEntry, ...]
    superseded_codes: tuple[SupersededCodeEntry, ...]

    @property
    def redundant_records(self) -> int:
        return self.total - self.unique_codes

    @property
    def is_clean(self) -> bool:
        return not (self.duplicate_codes or self.empty_names or self.shared_names or self.superseded_codes)

    def to_dict(self) -> JsonDict:
        return {
            "total": self.total,
            "unique_codes": self.unique_codes,
            "redundant_records": self.redundant_records,
            "is_clean": self.is_clean,
            "duplicate_codes": [
                {
                    "code": entry.code,
                    "count": len(entry.holders),
                    "holders": [
                        {"id": holder.id, "name": holder.name, "description": holder.description}
                        for holder in entry.holders
                    ],
                }
                for entry in self.duplicate_codes
            ],
            "empty_names": [{"code": record.code, "name": record.name} for record in self.empty_names],
            "shared_names": [
                {"name": entry.name, "code_count": len(entry.codes), "codes": list(entry.codes)}
                for entry in self.shared_names
            ],
            "superseded_codes": [
                {"legacy_code": entry.legacy_code, "current_code": entry.current_code}
                for entry in self.superseded_codes
            ],
        }


__all__ = [
    "CatalogAuditReport",
    "CategorySelectionSummary",
    "DuplicateCodeEntry",
    "ModuleConfig",
    "ModuleOption",
    "ModuleSelectionSummary",
    "PermissionCategory",
    "PermissionClassification",
    "PermissionModuleGroup",
    "PermissionRecord",
    "PermissionStats",
    "SelectionSummary",
    "SharedNameEntry",
    "SupersededCodeEntry",
    "TaxonomyConfig",
]
