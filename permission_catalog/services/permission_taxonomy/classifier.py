"""权限分类器.

将规范权限映射到 (module, category):

- module: 显式 module 字段优先(经旧值重定向), 其次按 code 首段查表, 最后落入兜底模块.
- category: code 第二段, 不足两段或第二段为空时落入兜底分类.
"""

from __future__ import annotations

from permission_catalog.core.types.permission_taxonomy import (
    PermissionClassification,
    PermissionRecord,
    TaxonomyConfig,
)


class PermissionClassifier:
    """基于 TaxonomyConfig 的分类器.

    Example:
        >>> classifier = PermissionClassifier(DEFAULT_TAXONOMY_CONFIG)
        >>> classifier.classify(PermissionRecord(id="1", code="pig.record.view", name="查看")).module
        'pig'

    """

    def __init__(self, config: TaxonomyConfig) -> None:
        self._config = config

    @property
    def config(self) -> TaxonomyConfig:
        return self._config

    def resolve_module(self, record: PermissionRecord) -> str:
        if record.module:
            return self._config.module_remaps.get(record.module, record.module)

        module = self._config.prefix_modules.get(record.code_prefix)
        if module:
            return module
        return self._config.fallback_module

    def resolve_category(self, code: str) -> str:
        parts = code.split(".")
        if len(parts) < 2 or not parts[1]:
            return self._config.fallback_category
        return parts[1]

    def classify(self, record: PermissionRecord) -> PermissionClassification:
        return PermissionClassification(
            module=self.resolve_module(record),
            category=self.resolve_category(record.code),
        )


__all__ = ["PermissionClassifier"]
