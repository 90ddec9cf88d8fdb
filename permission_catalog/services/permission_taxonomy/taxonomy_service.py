"""权限分类编排 Service.

职责:
- 串联 去重 -> 分类 -> 命名 -> 建树 -> 筛选 -> 统计
- 每次调用都整体重新计算, 不缓存、不持有可变状态
- 不做 Response、不解析请求
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from permission_catalog.core.types.permission_taxonomy import (
    ModuleOption,
    PermissionModuleGroup,
    PermissionRecord,
    PermissionStats,
    TaxonomyConfig,
)
from permission_catalog.services.permission_taxonomy.classifier import PermissionClassifier
from permission_catalog.services.permission_taxonomy.config_loader import DEFAULT_TAXONOMY_CONFIG
from permission_catalog.services.permission_taxonomy.deduplicator import deduplicate_permissions
from permission_catalog.services.permission_taxonomy.filters import filter_permission_tree
from permission_catalog.services.permission_taxonomy.naming import PermissionNameResolver
from permission_catalog.services.permission_taxonomy.stats import compute_permission_stats
from permission_catalog.services.permission_taxonomy.tree_builder import build_module_options, build_permission_tree
from permission_catalog.utils.structlog_config import log_debug

# app.extensions 中挂载分类服务的键
TAXONOMY_SERVICE_EXTENSION = "permission_taxonomy_service"


@dataclass(frozen=True, slots=True)
class PermissionTaxonomyResult:
    """一次完整计算的输出.

    Attributes:
        canonical: 去重后的规范权限.
        groups: 未筛选的完整树.
        filtered_groups: 按模块/关键字筛选后的视图.
        module_options: 由完整树派生的模块下拉选项.
        stats: 基于规范权限全集的统计.

    """

    canonical: tuple[PermissionRecord, ...]
    groups: tuple[PermissionModuleGroup, ...]
    filtered_groups: tuple[PermissionModuleGroup, ...]
    module_options: list[ModuleOption]
    stats: PermissionStats

    @property
    def filtered_total(self) -> int:
        return sum(group.permission_count for group in self.filtered_groups)


class PermissionTaxonomyService:
    """权限分类树读取服务."""

    def __init__(
        self,
        config: TaxonomyConfig | None = None,
        *,
        classifier: PermissionClassifier | None = None,
        naming: PermissionNameResolver | None = None,
    ) -> None:
        self._config = config or DEFAULT_TAXONOMY_CONFIG
        self._classifier = classifier or PermissionClassifier(self._config)
        self._naming = naming or PermissionNameResolver(self._config)

    @property
    def config(self) -> TaxonomyConfig:
        return self._config

    @property
    def classifier(self) -> PermissionClassifier:
        return self._classifier

    def build(
        self,
        records: Iterable[PermissionRecord] | None,
        *,
        search_query: str | None = None,
        selected_module: str | None = None,
    ) -> PermissionTaxonomyResult:
        """构建完整树与筛选视图.

        Args:
            records: 原始权限记录, None 视为空列表.
            search_query: 搜索关键字, 空白视为不过滤.
            selected_module: 选中的模块, None/空字符串视为不过滤.

        Returns:
            PermissionTaxonomyResult.

        """
        raw = list(records or ())
        canonical = deduplicate_permissions(raw, self._config)
        groups = build_permission_tree(canonical, self._classifier, self._naming)
        filtered = filter_permission_tree(groups, selected_module=selected_module, search_query=search_query)
        result = PermissionTaxonomyResult(
            canonical=canonical,
            groups=groups,
            filtered_groups=filtered,
            module_options=build_module_options(groups),
            stats=compute_permission_stats(canonical, self._classifier),
        )

        log_debug(
            "权限分类树构建完成",
            module="permission_taxonomy",
            raw_count=len(raw),
            canonical_count=len(canonical),
            dropped_count=len(raw) - len(canonical),
            module_count=len(groups),
            filtered_total=result.filtered_total,
        )
        return result


__all__ = ["TAXONOMY_SERVICE_EXTENSION", "PermissionTaxonomyResult", "PermissionTaxonomyService"]
