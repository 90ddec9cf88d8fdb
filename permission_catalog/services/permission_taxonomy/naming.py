"""模块与分类显示名称解析.

分类名称按固定顺序逐级解析, 首个命中即返回:

1. 当前模块的分类表;
2. 其他模块的分类表(按配置顺序);
3. 通用操作名称表;
4. 机械格式化原始分类(下划线/驼峰拆词, 首字母大写).
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

from permission_catalog.core.types.permission_taxonomy import TaxonomyConfig

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")


def format_category_code(category: str) -> str:
    """将原始分类机械格式化为标题形式.

    Example:
        >>> format_category_code("reset_password")
        'Reset Password'
        >>> format_category_code("stockLedger")
        'Stock Ledger'

    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", category.replace("_", " ")).lower()
    formatted = " ".join(word[:1].upper() + word[1:] for word in spaced.split(" "))
    return formatted or category


class CategoryNameResolver(ABC):
    """分类名称解析策略的通用接口."""

    name: str

    @abstractmethod
    def resolve(self, module: str, category: str, config: TaxonomyConfig) -> str | None:
        """返回显示名称, 无法解析时返回 None."""


class ModuleScopedResolver(CategoryNameResolver):
    name = "module_scoped"

    def resolve(self, module: str, category: str, config: TaxonomyConfig) -> str | None:
        names = config.category_names.get(module)
        if names is None:
            return None
        return names.get(category) or None


class CrossModuleResolver(CategoryNameResolver):
    """在其他模块的分类表中查找同名分类(如 create/view 等跨模块共享的操作)."""

    name = "cross_module"

    def resolve(self, module: str, category: str, config: TaxonomyConfig) -> str | None:
        for other_module, names in config.category_names.items():
            if other_module == module:
                continue
            label = names.get(category)
            if label:
                return label
        return None


class OperationNameResolver(CategoryNameResolver):
    name = "operation"

    def resolve(self, module: str, category: str, config: TaxonomyConfig) -> str | None:
        return config.operation_names.get(category) or None


class FormattedNameResolver(CategoryNameResolver):
    """终止策略, 总能给出非空名称."""

    name = "formatted"

    def resolve(self, module: str, category: str, config: TaxonomyConfig) -> str | None:
        return format_category_code(category)


DEFAULT_CATEGORY_RESOLVERS: tuple[CategoryNameResolver, ...] = (
    ModuleScopedResolver(),
    CrossModuleResolver(),
    OperationNameResolver(),
    FormattedNameResolver(),
)


class PermissionNameResolver:
    """按策略链解析模块与分类的显示名称.

    Attributes:
        _config: 注入的分类配置.
        _resolvers: 有序的分类名称解析策略.

    """

    def __init__(
        self,
        config: TaxonomyConfig,
        resolvers: Sequence[CategoryNameResolver] | None = None,
    ) -> None:
        self._config = config
        self._resolvers = tuple(resolvers) if resolvers is not None else DEFAULT_CATEGORY_RESOLVERS

    @property
    def resolvers(self) -> tuple[CategoryNameResolver, ...]:
        return self._resolvers

    def module_name(self, module: str) -> str:
        return self._config.module_config(module).label

    def module_order(self, module: str) -> int:
        return self._config.module_config(module).order

    def category_name(self, module: str, category: str) -> str:
        for resolver in self._resolvers:
            label = resolver.resolve(module, category, self._config)
            if label:
                return label
        return category


__all__ = [
    "DEFAULT_CATEGORY_RESOLVERS",
    "CategoryNameResolver",
    "CrossModuleResolver",
    "FormattedNameResolver",
    "ModuleScopedResolver",
    "OperationNameResolver",
    "PermissionNameResolver",
    "format_category_code",
]
