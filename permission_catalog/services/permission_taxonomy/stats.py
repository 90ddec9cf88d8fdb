"""权限统计.

基于规范权限全集计算, 与当前筛选视图无关, 便于展示 "X / Y".
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from permission_catalog.core.types.permission_taxonomy import PermissionRecord, PermissionStats
from permission_catalog.services.permission_taxonomy.classifier import PermissionClassifier


def compute_permission_stats(
    canonical: Sequence[PermissionRecord],
    classifier: PermissionClassifier,
) -> PermissionStats:
    module_counts = Counter(classifier.resolve_module(record) for record in canonical)
    return PermissionStats(total=len(canonical), module_counts=dict(module_counts))


__all__ = ["compute_permission_stats"]
