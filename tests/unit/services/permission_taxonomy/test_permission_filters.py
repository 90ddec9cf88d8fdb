import pytest

from permission_catalog.services.permission_taxonomy.classifier import PermissionClassifier
from permission_catalog.services.permission_taxonomy.config_loader import DEFAULT_TAXONOMY_CONFIG
from permission_catalog.services.permission_taxonomy.filters import (
    filter_permission_tree,
    find_match_span,
    normalize_search_query,
    permission_matches,
)
from permission_catalog.services.permission_taxonomy.naming import PermissionNameResolver
from permission_catalog.services.permission_taxonomy.tree_builder import build_permission_tree


@pytest.fixture
def tree(make_record):
    records = [
        make_record("1", "pig.record.view", name="查看记录"),
        make_record("2", "pig.vet.approve", name="兽医审批", description="Vet sign-off"),
        make_record("3", "erp.stock.view", name="查看库存"),
        make_record("4", "user.create", name="创建用户"),
    ]
    return build_permission_tree(
        records,
        PermissionClassifier(DEFAULT_TAXONOMY_CONFIG),
        PermissionNameResolver(DEFAULT_TAXONOMY_CONFIG),
    )


def _codes(groups):
    return [record.code for group in groups for category in group.categories for record in category.permissions]


@pytest.mark.unit
def test_no_filters_returns_equal_tree(tree) -> None:
    assert filter_permission_tree(tree) == tree
    assert filter_permission_tree(tree, selected_module="", search_query="   ") == tree


@pytest.mark.unit
def test_module_filter_is_exact_match(tree) -> None:
    filtered = filter_permission_tree(tree, selected_module="pig")

    assert [group.module for group in filtered] == ["pig"]
    assert filter_permission_tree(tree, selected_module="pi") == ()


@pytest.mark.unit
def test_search_matches_name_code_and_description(tree) -> None:
    assert _codes(filter_permission_tree(tree, search_query="查看")) == ["pig.record.view", "erp.stock.view"]
    assert _codes(filter_permission_tree(tree, search_query="USER.")) == ["user.create"]
    assert _codes(filter_permission_tree(tree, search_query="sign-OFF")) == ["pig.vet.approve"]


@pytest.mark.unit
def test_search_prunes_empty_categories_and_modules(tree) -> None:
    filtered = filter_permission_tree(tree, search_query="record")

    assert len(filtered) == 1
    assert [category.category for category in filtered[0].categories] == ["record"]


@pytest.mark.unit
def test_module_filter_applies_before_search(tree) -> None:
    assert filter_permission_tree(tree, selected_module="erp", search_query="记录") == ()
    assert _codes(filter_permission_tree(tree, selected_module="pig", search_query="查看")) == ["pig.record.view"]


@pytest.mark.unit
def test_filtered_tree_is_subset_with_same_labels(tree) -> None:
    filtered = filter_permission_tree(tree, search_query="view")
    full = {(group.module, group.module_name): group for group in tree}

    for group in filtered:
        source = full[(group.module, group.module_name)]
        source_categories = {(category.category, category.category_name): category for category in source.categories}
        for category in group.categories:
            source_category = source_categories[(category.category, category.category_name)]
            assert set(category.permissions) <= set(source_category.permissions)


@pytest.mark.unit
def test_normalize_search_query() -> None:
    assert normalize_search_query("  Pig  ") == "pig"
    assert normalize_search_query(None) == ""


@pytest.mark.unit
def test_permission_matches_ignores_missing_description(make_record) -> None:
    assert not permission_matches(make_record("1", "pig.record.view", name="查看"), "sign")


@pytest.mark.unit
def test_find_match_span_splits_first_match() -> None:
    assert find_match_span("查看 Records", "rec") == ("查看 ", "Rec", "ords")
    assert find_match_span("pig.record.view", " VIEW ") == ("pig.record.", "view", "")


@pytest.mark.unit
def test_find_match_span_returns_none_without_match() -> None:
    assert find_match_span("pig.record.view", "erp") is None
    assert find_match_span("pig.record.view", "  ") is None
    assert find_match_span(None, "pig") is None
