from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[3] / "scripts" / "check_permission_catalog.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("check_permission_catalog", SCRIPT_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def script():
    return _load_script()


def _write(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "permissions.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.mark.unit
def test_clean_catalog_exits_zero(script, tmp_path, capsys) -> None:
    path = _write(tmp_path, [{"id": "1", "code": "pig.record.view", "name": "查看记录"}])

    assert script.main([str(path), "--strict"]) == 0
    output = capsys.readouterr().out
    assert "[OK] 没有发现重复的权限 code" in output
    assert "总权限数: 1" in output


@pytest.mark.unit
def test_strict_mode_fails_on_issues(script, tmp_path, capsys) -> None:
    path = _write(
        tmp_path,
        {
            "permissions": [
                {"id": "1", "code": "erp.stock.view", "name": "查看库存"},
                {"id": "2", "code": "erp.stock.view", "name": "库存查看"},
            ],
        },
    )

    assert script.main([str(path)]) == 0
    assert script.main([str(path), "--strict"]) == 1
    output = capsys.readouterr().out
    assert "erp.stock.view: 2 条记录" in output


@pytest.mark.unit
def test_json_output(script, tmp_path, capsys) -> None:
    path = _write(
        tmp_path,
        [
            {"id": "1", "code": "animal.record.view", "name": "旧"},
            {"id": "2", "code": "pig.record.view", "name": "新"},
        ],
    )

    assert script.main([str(path), "--json"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["superseded_codes"] == [{"legacy_code": "animal.record.view", "current_code": "pig.record.view"}]


@pytest.mark.unit
def test_unreadable_input_exits_two(script, tmp_path, capsys) -> None:
    assert script.main([str(tmp_path / "missing.json")]) == 2
    assert "[ERROR]" in capsys.readouterr().out


@pytest.mark.unit
def test_invalid_payload_exits_two(script, tmp_path, capsys) -> None:
    path = _write(tmp_path, {"permissions": "oops"})

    assert script.main([str(path)]) == 2
    assert "[ERROR]" in capsys.readouterr().out
