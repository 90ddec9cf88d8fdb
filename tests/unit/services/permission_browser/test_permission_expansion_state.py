import pytest

from permission_catalog.services.permission_browser import ExpansionState
from permission_catalog.services.permission_browser.expansion import category_key


@pytest.mark.unit
def test_toggle_module_twice_restores_state() -> None:
    state = ExpansionState()

    expanded = state.toggle_module("pig")

    assert expanded.is_module_expanded("pig")
    assert not state.is_module_expanded("pig")
    assert expanded.toggle_module("pig") == state


@pytest.mark.unit
def test_toggle_category_uses_module_scoped_key() -> None:
    state = ExpansionState().toggle_category("pig", "record")

    assert state.is_category_expanded("pig", "record")
    assert not state.is_category_expanded("erp", "record")
    assert state.categories == frozenset({category_key("pig", "record")})


@pytest.mark.unit
def test_expand_all_replaces_modules_and_keeps_categories() -> None:
    state = ExpansionState().toggle_module("legacy").toggle_category("pig", "record")

    expanded = state.expand_all_modules(["pig", "erp"])

    assert expanded.modules == frozenset({"pig", "erp"})
    assert expanded.is_category_expanded("pig", "record")


@pytest.mark.unit
def test_collapse_all_keeps_categories() -> None:
    state = ExpansionState().expand_all_modules(["pig", "erp"]).toggle_category("erp", "stock")

    collapsed = state.collapse_all_modules()

    assert collapsed.modules == frozenset()
    assert collapsed.is_category_expanded("erp", "stock")
