import pytest
from werkzeug.exceptions import NotFound

from permission_catalog.errors import ConfigurationError, SystemError, ValidationError
from permission_catalog.utils.route_safety import safe_route_call


@pytest.mark.unit
def test_safe_route_call_returns_result() -> None:
    result = safe_route_call(lambda: 42, module="permissions", action="noop", public_error="失败")

    assert result == 42


@pytest.mark.unit
@pytest.mark.parametrize("error", [ValidationError("bad"), NotFound()])
def test_safe_route_call_reraises_expected_errors(error) -> None:
    def _raise():
        raise error

    with pytest.raises(type(error)) as excinfo:
        safe_route_call(_raise, module="permissions", action="build", public_error="失败")

    assert excinfo.value is error


@pytest.mark.unit
def test_safe_route_call_wraps_unexpected_errors() -> None:
    def _raise():
        raise KeyError("modules")

    with pytest.raises(SystemError) as excinfo:
        safe_route_call(
            _raise,
            module="permissions",
            action="build",
            public_error="构建权限分类树失败",
            context={"permission_count": 3},
        )

    assert excinfo.value.message == "构建权限分类树失败"
    assert isinstance(excinfo.value.__cause__, KeyError)


@pytest.mark.unit
def test_safe_route_call_honours_custom_options() -> None:
    def _raise():
        raise LookupError("missing")

    with pytest.raises(LookupError):
        safe_route_call(
            _raise,
            module="permissions",
            action="config",
            public_error="失败",
            expected_exceptions=(LookupError,),
        )

    def _raise_runtime():
        raise RuntimeError("boom")

    with pytest.raises(ConfigurationError):
        safe_route_call(
            _raise_runtime,
            module="permissions",
            action="config",
            public_error="配置异常",
            fallback_exception=ConfigurationError,
        )
