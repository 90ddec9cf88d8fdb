"""权限记录去重.

三轮扫描, 结果保证 id 唯一、code 等价类唯一:

1. 按 id 去重, 保留首次出现的记录.
2. 按 code 等价类去重(旧前缀视同取代它的新前缀):
   - 候选使用新前缀且已有记录使用被它取代的旧前缀 -> 候选替换已有记录;
   - 已有记录不使用新前缀且候选 code 更长 -> 候选替换已有记录;
   - 其余情况保留先出现的记录.
3. 再按 id 过滤一次, 每条记录只能落入一个分类桶.
"""

from __future__ import annotations

from collections.abc import Iterable

from permission_catalog.core.types.permission_taxonomy import PermissionRecord, TaxonomyConfig


def code_equivalence_key(code: str, config: TaxonomyConfig) -> str:
    """返回 code 的等价类键: 旧前缀替换为新前缀, 其余段保持不变."""
    prefix, dot, rest = code.partition(".")
    current = config.legacy_prefixes.get(prefix)
    if current is None:
        return code
    return f"{current}{dot}{rest}"


def unique_by_id(records: Iterable[PermissionRecord] | None) -> list[PermissionRecord]:
    seen: set[str] = set()
    output: list[PermissionRecord] = []
    for record in records or ():
        if record.id in seen:
            continue
        seen.add(record.id)
        output.append(record)
    return output


def _candidate_wins(candidate: PermissionRecord, existing: PermissionRecord, config: TaxonomyConfig) -> bool:
    candidate_prefix = candidate.code_prefix
    existing_prefix = existing.code_prefix
    if candidate_prefix in config.current_prefixes and config.legacy_prefixes.get(existing_prefix) == candidate_prefix:
        return True
    if existing_prefix not in config.current_prefixes and len(candidate.code) > len(existing.code):
        return True
    return False


def unique_by_code(records: Iterable[PermissionRecord], config: TaxonomyConfig) -> list[PermissionRecord]:
    by_code: dict[str, PermissionRecord] = {}
    for record in records:
        key = code_equivalence_key(record.code, config)
        existing = by_code.get(key)
        if existing is None or _candidate_wins(record, existing, config):
            by_code[key] = record
    return list(by_code.values())


def deduplicate_permissions(
    records: Iterable[PermissionRecord] | None,
    config: TaxonomyConfig,
) -> tuple[PermissionRecord, ...]:
    """将原始权限列表收敛为规范权限集合.

    Args:
        records: 原始权限记录, None 视为空列表.
        config: 提供新旧前缀对照的分类配置.

    Returns:
        规范权限元组, 任意两条记录的 id 与 code 都不相同.

    """
    by_code = unique_by_code(unique_by_id(records), config)

    placed: set[str] = set()
    canonical: list[PermissionRecord] = []
    for record in by_code:
        if record.id in placed:
            continue
        placed.add(record.id)
        canonical.append(record)
    return tuple(canonical)


__all__ = [
    "code_equivalence_key",
    "deduplicate_permissions",
    "unique_by_code",
    "unique_by_id",
]
