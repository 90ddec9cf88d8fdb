"""权限分类配置加载.

默认配置来自 `core.constants.permission_taxonomy`; 可选的 YAML 覆盖文件与默认配置按键合并.
"""

from __future__ import annotations

from pathlib import Path

import yaml

from permission_catalog.core.constants import permission_taxonomy as defaults
from permission_catalog.core.types.permission_taxonomy import ModuleConfig, TaxonomyConfig
from permission_catalog.errors import ConfigurationError, ValidationError
from permission_catalog.schemas.validation import validate_or_raise
from permission_catalog.schemas.yaml_configs import TaxonomyConfigFile
from permission_catalog.utils.structlog_config import get_system_logger

logger = get_system_logger()


def build_default_taxonomy_config() -> TaxonomyConfig:
    return TaxonomyConfig(
        modules={module: ModuleConfig(label=label, order=order) for module, order, label in defaults.MODULE_TABLE},
        category_names=defaults.CATEGORY_NAMES,
        operation_names=defaults.OPERATION_NAMES,
        module_remaps=defaults.MODULE_REMAPS,
        prefix_modules=defaults.PREFIX_MODULES,
        legacy_prefixes=defaults.LEGACY_CODE_PREFIXES,
        fallback_module=defaults.FALLBACK_MODULE,
        fallback_category=defaults.FALLBACK_CATEGORY,
    )


DEFAULT_TAXONOMY_CONFIG = build_default_taxonomy_config()


def merge_taxonomy_config(base: TaxonomyConfig, override: TaxonomyConfigFile) -> TaxonomyConfig:
    """将覆盖配置按键合并到基础配置上, 返回新的配置对象."""
    modules = dict(base.modules)
    modules.update(
        {module: ModuleConfig(label=entry.label, order=entry.order) for module, entry in override.modules.items()},
    )

    category_names = {module: dict(names) for module, names in base.category_names.items()}
    for module, names in override.category_names.items():
        category_names.setdefault(module, {}).update(names)

    return TaxonomyConfig(
        modules=modules,
        category_names=category_names,
        operation_names={**base.operation_names, **override.operation_names},
        module_remaps={**base.module_remaps, **override.module_remaps},
        prefix_modules={**base.prefix_modules, **override.prefix_modules},
        legacy_prefixes={**base.legacy_prefixes, **override.legacy_prefixes},
        fallback_module=override.fallback_module or base.fallback_module,
        fallback_category=override.fallback_category or base.fallback_category,
    )


def load_taxonomy_config(config_path: str | Path | None = None) -> TaxonomyConfig:
    """加载权限分类配置.

    Args:
        config_path: YAML 覆盖文件路径, 为空时直接返回默认配置.

    Returns:
        TaxonomyConfig: 合并后的只读配置.

    Raises:
        ConfigurationError: 文件不存在、YAML 语法错误或内容校验失败时抛出.

    """
    if not config_path:
        return DEFAULT_TAXONOMY_CONFIG

    path = Path(config_path)
    if not path.exists():
        msg = f"权限分类配置文件不存在: {path}"
        raise ConfigurationError(msg)

    try:
        with path.open(encoding="utf-8") as buffer:
            raw_config = yaml.safe_load(buffer)
    except yaml.YAMLError as exc:
        logger.warning("解析权限分类配置失败", config_path=str(path), error=str(exc))
        msg = f"解析权限分类配置失败: {exc}"
        raise ConfigurationError(msg) from exc

    try:
        override = validate_or_raise(TaxonomyConfigFile, raw_config)
        config = merge_taxonomy_config(DEFAULT_TAXONOMY_CONFIG, override)
    except (ValidationError, ValueError) as exc:
        logger.warning("权限分类配置校验失败", config_path=str(path), error=str(exc))
        msg = f"权限分类配置校验失败: {exc}"
        raise ConfigurationError(msg) from exc

    logger.info("已加载权限分类覆盖配置", config_path=str(path), module_count=len(config.modules))
    return config


__all__ = [
    "DEFAULT_TAXONOMY_CONFIG",
    "build_default_taxonomy_config",
    "load_taxonomy_config",
    "merge_taxonomy_config",
]
