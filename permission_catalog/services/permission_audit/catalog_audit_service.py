"""权限目录一致性检查 Service.

职责:
- 在去重之前扫描原始权限列表, 找出需要清理的数据
- 只读、不抛异常, 结果用于运维报告与 API 展示
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from permission_catalog.core.types.permission_taxonomy import (
    CatalogAuditReport,
    DuplicateCodeEntry,
    PermissionRecord,
    SharedNameEntry,
    SupersededCodeEntry,
    TaxonomyConfig,
)
from permission_catalog.services.permission_taxonomy.config_loader import DEFAULT_TAXONOMY_CONFIG


def _find_duplicate_codes(records: list[PermissionRecord]) -> tuple[DuplicateCodeEntry, ...]:
    holders: dict[str, list[PermissionRecord]] = defaultdict(list)
    for record in records:
        holders[record.code].append(record)
    duplicates = [
        DuplicateCodeEntry(code=code, holders=tuple(items)) for code, items in holders.items() if len(items) > 1
    ]
    duplicates.sort(key=lambda entry: (-len(entry.holders), entry.code))
    return tuple(duplicates)


def _find_empty_names(records: list[PermissionRecord]) -> tuple[PermissionRecord, ...]:
    empty = [record for record in records if not record.name.strip()]
    empty.sort(key=lambda record: record.code)
    return tuple(empty)


def _find_shared_names(records: list[PermissionRecord]) -> tuple[SharedNameEntry, ...]:
    codes_by_name: dict[str, set[str]] = defaultdict(set)
    for record in records:
        codes_by_name[record.name].add(record.code)
    shared = [
        SharedNameEntry(name=name, codes=tuple(sorted(codes)))
        for name, codes in codes_by_name.items()
        if len(codes) > 1
    ]
    shared.sort(key=lambda entry: (-len(entry.codes), entry.name))
    return tuple(shared)


def _find_superseded_codes(records: list[PermissionRecord], config: TaxonomyConfig) -> tuple[SupersededCodeEntry, ...]:
    codes = {record.code for record in records}
    superseded: list[SupersededCodeEntry] = []
    for code in sorted(codes):
        prefix, dot, rest = code.partition(".")
        current_prefix = config.legacy_prefixes.get(prefix)
        if current_prefix is None:
            continue
        current_code = f"{current_prefix}{dot}{rest}"
        if current_code in codes:
            superseded.append(SupersededCodeEntry(legacy_code=code, current_code=current_code))
    return tuple(superseded)


def audit_permission_catalog(
    records: Iterable[PermissionRecord] | None,
    config: TaxonomyConfig | None = None,
) -> CatalogAuditReport:
    """检查原始权限目录.

    Args:
        records: 原始权限记录(未去重), None 视为空列表.
        config: 提供新旧前缀对照的分类配置, 默认使用内置配置.

    Returns:
        CatalogAuditReport.

    """
    items = list(records or ())
    active_config = config or DEFAULT_TAXONOMY_CONFIG
    return CatalogAuditReport(
        total=len(items),
        unique_codes=len({record.code for record in items}),
        duplicate_codes=_find_duplicate_codes(items),
        empty_names=_find_empty_names(items),
        shared_names=_find_shared_names(items),
        superseded_codes=_find_superseded_codes(items, active_config),
    )


__all__ = ["audit_permission_catalog"]
