"""模块/分类的展开状态.

不可变值对象, 每个操作返回新的状态. 键不与分类树做校验:
树变化后残留的键只是不再被查询到.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field


def category_key(module: str, category: str) -> str:
    return f"{module}.{category}"


@dataclass(frozen=True, slots=True)
class ExpansionState:
    """展开状态.

    Attributes:
        modules: 已展开的模块键.
        categories: 已展开的 `module.category` 键.

    Example:
        >>> state = ExpansionState().toggle_module("pig")
        >>> state.is_module_expanded("pig")
        True
        >>> state.toggle_module("pig").is_module_expanded("pig")
        False

    """

    modules: frozenset[str] = field(default_factory=frozenset)
    categories: frozenset[str] = field(default_factory=frozenset)

    def toggle_module(self, module: str) -> ExpansionState:
        return ExpansionState(modules=self.modules ^ {module}, categories=self.categories)

    def toggle_category(self, module: str, category: str) -> ExpansionState:
        return ExpansionState(modules=self.modules, categories=self.categories ^ {category_key(module, category)})

    def expand_all_modules(self, modules: Iterable[str]) -> ExpansionState:
        """展开全部模块, 分类展开状态保持不变."""
        return ExpansionState(modules=frozenset(modules), categories=self.categories)

    def collapse_all_modules(self) -> ExpansionState:
        return ExpansionState(modules=frozenset(), categories=self.categories)

    def is_module_expanded(self, module: str) -> bool:
        return module in self.modules

    def is_category_expanded(self, module: str, category: str) -> bool:
        return category_key(module, category) in self.categories


__all__ = ["ExpansionState", "category_key"]
