#!/usr/bin/env python3
"""检查权限目录导出文件中的重复 code、空名称与同名不同 code.

用法:
  python3 scripts/check_permission_catalog.py permissions.json
  python3 scripts/check_permission_catalog.py permissions.json --strict
  python3 scripts/check_permission_catalog.py permissions.json --json

输入可以是权限数组, 也可以是带 `permissions` 字段的对象.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from permission_catalog.core.types.permission_taxonomy import CatalogAuditReport
from permission_catalog.errors import AppError
from permission_catalog.schemas.permissions import PermissionListPayload
from permission_catalog.schemas.validation import validate_or_raise
from permission_catalog.services.permission_audit import audit_permission_catalog
from permission_catalog.services.permission_taxonomy import load_taxonomy_config


def _echo(message: str = "") -> None:
    """向 stdout 输出一行文本,替代 print 避免 Ruff T201."""
    sys.stdout.write(f"{message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="检查权限目录导出文件的一致性.")
    parser.add_argument("input", type=Path, help="权限目录 JSON 文件路径")
    parser.add_argument("--config", type=Path, default=None, help="权限分类 YAML 覆盖配置(可选)")
    parser.add_argument("--json", action="store_true", help="以 JSON 输出检查结果")
    parser.add_argument("--strict", action="store_true", help="发现问题时返回非 0")
    return parser


def _load_payload(path: Path) -> object:
    raw = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(raw, list):
        return {"permissions": raw}
    return raw


def _render_report(report: CatalogAuditReport) -> None:
    _echo("=== 检查重复权限 ===")
    if not report.duplicate_codes:
        _echo("[OK] 没有发现重复的权限 code")
    else:
        _echo(f"[WARNING] 发现 {len(report.duplicate_codes)} 个重复的权限 code:")
        for entry in report.duplicate_codes:
            _echo(f"  {entry.code}: {len(entry.holders)} 条记录")
            for holder in entry.holders:
                _echo(f"    - ID: {holder.id}, Name: '{holder.name}', Description: {holder.description!r}")

    _echo()
    _echo("=== 检查空名称的权限 ===")
    if not report.empty_names:
        _echo("[OK] 没有发现空名称的权限")
    else:
        _echo(f"[WARNING] 发现 {len(report.empty_names)} 个空名称的权限:")
        for record in report.empty_names:
            _echo(f"  {record.code}: name = '{record.name}'")

    _echo()
    _echo("=== 检查权限名称重复 ===")
    if not report.shared_names:
        _echo("[OK] 没有发现重复的权限名称")
    else:
        _echo(f"[WARNING] 发现 {len(report.shared_names)} 个重复的权限名称:")
        for entry in report.shared_names:
            _echo(f"  '{entry.name}': {len(entry.codes)} 个不同的 code")
            _echo(f"    Codes: {', '.join(entry.codes)}")

    _echo()
    _echo("=== 检查旧前缀权限 ===")
    if not report.superseded_codes:
        _echo("[OK] 没有发现已被取代的旧前缀权限")
    else:
        for entry in report.superseded_codes:
            _echo(f"  {entry.legacy_code} -> {entry.current_code}")

    _echo()
    _echo("=== 统计信息 ===")
    _echo(f"总权限数: {report.total}")
    _echo(f"唯一 code 数: {report.unique_codes}")
    if report.redundant_records > 0:
        _echo(f"[WARNING] 有 {report.redundant_records} 条重复记录需要清理")


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config = load_taxonomy_config(args.config)
        payload = validate_or_raise(PermissionListPayload, _load_payload(args.input))
    except (OSError, json.JSONDecodeError, AppError) as exc:
        _echo(f"[ERROR] {exc}")
        return 2

    report = audit_permission_catalog(payload.to_records(), config)
    if args.json:
        _echo(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        _render_report(report)

    if args.strict and not report.is_clean:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
