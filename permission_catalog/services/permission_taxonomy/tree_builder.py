"""权限分类树构建.

分组顺序不影响结果, 最终顺序完全由排序决定:
- 分类内权限按名称排序;
- 模块内分类按显示名称排序, 同名时按分类 key;
- 模块按配置的 order 升序, order 相同时按模块 key, 兜底模块始终最后.
排序均为稳定排序, 相同键保持输入相对顺序.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from permission_catalog.core.types.permission_taxonomy import (
    ModuleOption,
    PermissionCategory,
    PermissionModuleGroup,
    PermissionRecord,
)
from permission_catalog.services.permission_taxonomy.classifier import PermissionClassifier
from permission_catalog.services.permission_taxonomy.naming import PermissionNameResolver


def collation_key(text: str) -> str:
    """返回与进程 locale 无关的排序键(忽略大小写与重音)."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.casefold()


def build_permission_tree(
    canonical: Iterable[PermissionRecord],
    classifier: PermissionClassifier,
    naming: PermissionNameResolver,
) -> tuple[PermissionModuleGroup, ...]:
    """将规范权限分组为 模块 -> 分类 -> 权限 的有序树.

    Args:
        canonical: 去重后的规范权限.
        classifier: 权限分类器.
        naming: 显示名称解析器.

    Returns:
        排好序的模块分组, 不含空分类与空模块.

    """
    buckets: dict[str, dict[str, list[PermissionRecord]]] = {}
    for record in canonical:
        classification = classifier.classify(record)
        module_bucket = buckets.setdefault(classification.module, {})
        module_bucket.setdefault(classification.category, []).append(record)

    groups: list[PermissionModuleGroup] = []
    for module, categories in buckets.items():
        built_categories = [
            PermissionCategory(
                category=category,
                category_name=naming.category_name(module, category),
                permissions=tuple(sorted(records, key=lambda record: collation_key(record.name))),
            )
            for category, records in categories.items()
        ]
        non_empty = [category for category in built_categories if category.permissions]
        if not non_empty:
            continue
        # 不同分类可能解析出同一显示名称, 以分类 key 兜底
        non_empty.sort(key=lambda category: (collation_key(category.category_name), category.category))
        groups.append(
            PermissionModuleGroup(
                module=module,
                module_name=naming.module_name(module),
                module_order=naming.module_order(module),
                categories=tuple(non_empty),
            ),
        )

    # 同 order 的未配置模块按 key 排序, 兜底模块排在它们之后
    fallback_module = classifier.config.fallback_module
    groups.sort(key=lambda group: (group.module_order, group.module == fallback_module, group.module))
    return tuple(groups)


def build_module_options(groups: Iterable[PermissionModuleGroup]) -> list[ModuleOption]:
    """按树顺序输出模块下拉选项."""
    return [{"value": group.module, "label": group.module_name} for group in groups]


__all__ = ["build_module_options", "build_permission_tree", "collation_key"]
