# tests/unit/api/conftest.py
"""API 单元测试 fixtures: 基于内置分类表创建应用实例."""

import pytest

from permission_catalog import create_app
from permission_catalog.settings import Settings


@pytest.fixture
def app():
    app = create_app(settings=Settings.load())
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
