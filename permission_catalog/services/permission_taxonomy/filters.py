"""权限分类树筛选.

从完整树派生受限视图, 不修改输入:
- 模块筛选: 精确匹配 module, 先于文本搜索执行;
- 文本搜索: 去空白后小写, 对 name/code/description 做不区分大小写的子串匹配;
- 筛选后删除空分类, 再删除空模块.
空白查询等同于无查询.
"""

from __future__ import annotations

from collections.abc import Iterable

from permission_catalog.core.types.permission_taxonomy import (
    PermissionCategory,
    PermissionModuleGroup,
    PermissionRecord,
)


def normalize_search_query(search_query: str | None) -> str:
    return (search_query or "").strip().lower()


def permission_matches(record: PermissionRecord, normalized_query: str) -> bool:
    if normalized_query in record.name.lower():
        return True
    if normalized_query in record.code.lower():
        return True
    return bool(record.description) and normalized_query in record.description.lower()


def _filter_by_text(
    groups: Iterable[PermissionModuleGroup],
    normalized_query: str,
) -> tuple[PermissionModuleGroup, ...]:
    output: list[PermissionModuleGroup] = []
    for group in groups:
        categories: list[PermissionCategory] = []
        for category in group.categories:
            matched = tuple(record for record in category.permissions if permission_matches(record, normalized_query))
            if matched:
                categories.append(
                    PermissionCategory(
                        category=category.category,
                        category_name=category.category_name,
                        permissions=matched,
                    ),
                )
        if categories:
            output.append(
                PermissionModuleGroup(
                    module=group.module,
                    module_name=group.module_name,
                    module_order=group.module_order,
                    categories=tuple(categories),
                ),
            )
    return tuple(output)


def filter_permission_tree(
    groups: Iterable[PermissionModuleGroup],
    *,
    selected_module: str | None = None,
    search_query: str | None = None,
) -> tuple[PermissionModuleGroup, ...]:
    """返回按模块与关键字筛选后的新树.

    Args:
        groups: build_permission_tree 输出的完整树.
        selected_module: 选中的模块, None 或空字符串表示不过滤.
        search_query: 搜索关键字, 空白表示不过滤.

    Returns:
        与输入同构的筛选结果, 可能为空元组.

    """
    filtered = tuple(groups)

    module_key = (selected_module or "").strip()
    if module_key:
        filtered = tuple(group for group in filtered if group.module == module_key)

    normalized_query = normalize_search_query(search_query)
    if normalized_query:
        filtered = _filter_by_text(filtered, normalized_query)

    return filtered


def find_match_span(text: str | None, search_query: str | None) -> tuple[str, str, str] | None:
    """定位首个不区分大小写的匹配片段, 供前端高亮.

    Example:
        >>> find_match_span("查看 Records", "rec")
        ('查看 ', 'Rec', 'ords')

    """
    normalized_query = normalize_search_query(search_query)
    if not text or not normalized_query:
        return None
    index = text.lower().find(normalized_query)
    if index < 0:
        return None
    end = index + len(normalized_query)
    return text[:index], text[index:end], text[end:]


__all__ = [
    "filter_permission_tree",
    "find_match_span",
    "normalize_search_query",
    "permission_matches",
]
