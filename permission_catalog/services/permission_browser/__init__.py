"""权限浏览的展示侧状态(展开/勾选), 与分类引擎相互独立."""

from permission_catalog.services.permission_browser.expansion import ExpansionState
from permission_catalog.services.permission_browser.selection import (
    summarize_selection,
    toggle_category_selection,
    toggle_permission,
)

__all__ = [
    "ExpansionState",
    "summarize_selection",
    "toggle_category_selection",
    "toggle_permission",
]
