# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境隔离与常用的权限记录构造器.
"""

import pytest

from permission_catalog.core.types.permission_taxonomy import PermissionRecord


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - 避免开发者本机环境变量影响测试稳定性
    - 默认使用内置分类表, 不读取覆盖配置
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.delenv("PERMISSION_TAXONOMY_CONFIG", raising=False)
    monkeypatch.delenv("PERMISSION_PAYLOAD_MAX_ITEMS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("ENABLE_DEBUG_LOG", raising=False)
    monkeypatch.delenv("API_V1_DOCS_ENABLED", raising=False)
    monkeypatch.delenv("FLASK_DEBUG", raising=False)


@pytest.fixture
def make_record():
    """构造 PermissionRecord, name 默认取 code."""

    def _make(
        record_id: str,
        code: str,
        name: str | None = None,
        module: str | None = None,
        description: str | None = None,
    ) -> PermissionRecord:
        return PermissionRecord(
            id=record_id,
            code=code,
            name=name if name is not None else code,
            module=module,
            description=description,
        )

    return _make
