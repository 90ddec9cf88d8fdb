"""权限勾选状态辅助函数.

勾选集合以有序元组表示, 保持用户勾选顺序; 所有函数返回新值, 不修改输入.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from permission_catalog.core.types.permission_taxonomy import (
    CategorySelectionSummary,
    ModuleSelectionSummary,
    PermissionCategory,
    PermissionModuleGroup,
    SelectionSummary,
)


def toggle_permission(selected_ids: Sequence[str], permission_id: str) -> tuple[str, ...]:
    """已勾选则移除, 否则追加到末尾."""
    if permission_id in selected_ids:
        return tuple(item for item in selected_ids if item != permission_id)
    return (*selected_ids, permission_id)


def toggle_category_selection(selected_ids: Sequence[str], category: PermissionCategory) -> tuple[str, ...]:
    """整类勾选/取消.

    分类内权限全部已勾选时全部移除; 否则按分类内顺序追加缺失的权限.
    """
    category_ids = [permission.id for permission in category.permissions]
    selected = set(selected_ids)
    if category_ids and all(permission_id in selected for permission_id in category_ids):
        removing = set(category_ids)
        return tuple(item for item in selected_ids if item not in removing)
    missing = [permission_id for permission_id in category_ids if permission_id not in selected]
    return (*selected_ids, *missing)


def summarize_selection(
    groups: Iterable[PermissionModuleGroup],
    selected_ids: Iterable[str],
) -> SelectionSummary:
    """统计每个模块/分类的勾选数量, 不在树中的 id 被忽略."""
    selected = set(selected_ids)
    modules: list[ModuleSelectionSummary] = []
    for group in groups:
        categories = tuple(
            CategorySelectionSummary(
                category=category.category,
                selected=sum(1 for permission in category.permissions if permission.id in selected),
                total=len(category.permissions),
            )
            for category in group.categories
        )
        modules.append(
            ModuleSelectionSummary(
                module=group.module,
                selected=sum(item.selected for item in categories),
                total=sum(item.total for item in categories),
                categories=categories,
            ),
        )
    return SelectionSummary(
        selected=sum(item.selected for item in modules),
        total=sum(item.total for item in modules),
        modules=tuple(modules),
    )


__all__ = ["summarize_selection", "toggle_category_selection", "toggle_permission"]
