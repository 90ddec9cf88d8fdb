"""请求级别 request_id 注入的单元测试门禁."""

from __future__ import annotations

import pytest

from permission_catalog import create_app
from permission_catalog.infra.logging.request_middleware import generate_request_id, sanitize_request_id
from permission_catalog.settings import Settings
from permission_catalog.utils.logging.context_vars import request_id_var


@pytest.fixture
def client():
    app = create_app(settings=Settings.load())
    app.config["TESTING"] = True

    @app.get("/_test/request-id")
    def _test_request_id():  # type: ignore[no-untyped-def]
        return {"request_id": request_id_var.get()}

    return app.test_client()


@pytest.mark.unit
def test_incoming_request_id_is_propagated(client) -> None:
    response = client.get("/_test/request-id", headers={"X-Request-ID": "req_test_123"})

    assert response.status_code == 200
    assert response.headers.get("X-Request-ID") == "req_test_123"
    assert response.get_json() == {"request_id": "req_test_123"}
    # teardown_request 应 reset contextvars(避免泄漏到后续请求/测试)
    assert request_id_var.get() is None


@pytest.mark.unit
def test_invalid_request_id_is_replaced(client) -> None:
    response = client.get("/_test/request-id", headers={"X-Request-ID": "bad id with spaces"})

    request_id = response.headers.get("X-Request-ID")
    assert request_id.startswith("req_")
    assert response.get_json() == {"request_id": request_id}


@pytest.mark.unit
def test_error_envelope_carries_request_id(client) -> None:
    response = client.post(
        "/api/v1/permissions/taxonomy",
        data="not json",
        content_type="text/plain",
        headers={"X-Request-ID": "req_error_1"},
    )

    assert response.status_code == 400
    assert response.headers.get("X-Request-ID") == "req_error_1"
    context = response.get_json()["context"]
    assert context["request_id"] == "req_error_1"
    assert context["url"] == "/api/v1/permissions/taxonomy"
    assert context["method"] == "POST"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("", None),
        ("  req_abc  ", "req_abc"),
        ("-leading-dash", None),
        ("x" * 129, None),
        ("trace:1.2-3_4", "trace:1.2-3_4"),
    ],
)
def test_sanitize_request_id(raw, expected) -> None:
    assert sanitize_request_id(raw) == expected


@pytest.mark.unit
def test_generate_request_id_is_unique() -> None:
    first = generate_request_id()

    assert first.startswith("req_")
    assert first != generate_request_id()
