import pytest
import structlog

from permission_catalog.errors import ValidationError
from permission_catalog.utils.logging.handlers import DebugFilter
from permission_catalog.utils.response_utils import unified_error_response, unified_success_response
from permission_catalog.utils.structlog_config import should_log_debug


@pytest.mark.unit
def test_debug_filter_drops_debug_events_when_disabled() -> None:
    debug_filter = DebugFilter(enabled=False)

    with pytest.raises(structlog.DropEvent):
        debug_filter(None, "debug", {"event": "x"})

    assert debug_filter(None, "info", {"event": "x"}) == {"event": "x"}


@pytest.mark.unit
def test_debug_filter_passes_debug_events_when_enabled() -> None:
    debug_filter = DebugFilter()
    debug_filter.set_enabled(enabled=True)

    assert debug_filter(None, "debug", {"event": "x"}) == {"event": "x"}


@pytest.mark.unit
def test_should_log_debug_reads_app_config() -> None:
    from permission_catalog import create_app
    from permission_catalog.settings import Settings

    app = create_app(settings=Settings.load())
    app.config["ENABLE_DEBUG_LOG"] = True

    with app.app_context():
        assert should_log_debug() is True


@pytest.mark.unit
def test_unified_success_response_shape() -> None:
    payload, status = unified_success_response(data={"a": 1}, meta={"page": 1})

    assert status == 200
    assert payload["success"] is True
    assert payload["error"] is False
    assert payload["message"] == "操作成功"
    assert payload["data"] == {"a": 1}
    assert payload["meta"] == {"page": 1}


@pytest.mark.unit
def test_unified_error_response_uses_app_error_metadata() -> None:
    error = ValidationError("bad", message_key="PERMISSION_PAYLOAD_INVALID", extra={"field": "permissions"})

    payload, status = unified_error_response(error)

    assert status == 400
    assert payload["success"] is False
    assert payload["message"] == "bad"
    assert payload["message_code"] == "PERMISSION_PAYLOAD_INVALID"
    assert payload["recoverable"] is True
    assert payload["extra"] == {"field": "permissions"}


@pytest.mark.unit
def test_unified_error_response_hides_unexpected_exception_text() -> None:
    payload, status = unified_error_response(RuntimeError("secret detail"))

    assert status == 500
    assert payload["message"] == "服务器内部错误"
    assert payload["category"] == "system"
