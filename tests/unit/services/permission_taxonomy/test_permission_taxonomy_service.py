import pytest

from permission_catalog.services.permission_taxonomy import DEFAULT_TAXONOMY_CONFIG, PermissionTaxonomyService


@pytest.fixture
def service() -> PermissionTaxonomyService:
    return PermissionTaxonomyService()


@pytest.fixture
def catalog(make_record):
    return [
        make_record("1", "animal.record.view", name="View records"),
        make_record("2", "pig.record.view", name="View records"),
        make_record("3", "pig.vet.approve", name="Approve vet"),
        make_record("3", "pig.vet.reject", name="Reject vet"),
        make_record("4", "erp.stock.view", name="View stock"),
        make_record("5", "erp.stock.view", name="Stock view"),
        make_record("6", "user.reset_password", name="Reset password"),
        make_record("7", "aup.protocol.submit", name="Submit protocol"),
        make_record("8", "zzz_custom.thing", name="Custom thing"),
    ]


def _all_ids(groups):
    return [record.id for group in groups for category in group.categories for record in category.permissions]


@pytest.mark.unit
def test_service_uses_default_config(service) -> None:
    assert service.config is DEFAULT_TAXONOMY_CONFIG
    assert service.classifier.config is DEFAULT_TAXONOMY_CONFIG


@pytest.mark.unit
def test_build_runs_full_pipeline(service, catalog) -> None:
    result = service.build(catalog)

    assert [record.id for record in result.canonical] == ["2", "3", "4", "6", "7", "8"]
    assert [group.module for group in result.groups] == ["aup", "pig", "erp", "dev", "other"]
    assert result.filtered_groups == result.groups
    assert result.filtered_total == 6
    assert result.module_options[0] == {"value": "aup", "label": "AUP"}
    assert result.stats.total == 6
    assert result.stats.module_counts == {"pig": 2, "erp": 1, "dev": 1, "aup": 1, "other": 1}


@pytest.mark.unit
def test_build_is_idempotent(service, catalog) -> None:
    first = service.build(catalog, search_query="view", selected_module="pig")
    second = service.build(catalog, search_query="view", selected_module="pig")

    assert first == second


@pytest.mark.unit
def test_build_accepts_none(service) -> None:
    result = service.build(None)

    assert result.canonical == ()
    assert result.groups == ()
    assert result.module_options == []
    assert result.stats.total == 0


@pytest.mark.unit
def test_stats_match_canonical_count_for_any_view(service, catalog) -> None:
    result = service.build(catalog, search_query="stock")

    assert result.filtered_total == 1
    assert result.stats.total == len(result.canonical)
    assert sum(result.stats.module_counts.values()) == result.stats.total


@pytest.mark.unit
def test_coverage_every_canonical_record_placed_once(service, catalog) -> None:
    result = service.build(catalog)

    placed = _all_ids(result.groups)
    assert sorted(placed) == sorted(record.id for record in result.canonical)


@pytest.mark.unit
def test_module_options_ignore_filters(service, catalog) -> None:
    result = service.build(catalog, selected_module="pig")

    assert [group.module for group in result.filtered_groups] == ["pig"]
    assert [option["value"] for option in result.module_options] == ["aup", "pig", "erp", "dev", "other"]


@pytest.mark.unit
def test_scenario_legacy_and_current_code_collapse(service, make_record) -> None:
    result = service.build(
        [
            make_record("1", "animal.record.view"),
            make_record("2", "pig.record.view"),
        ],
    )

    assert [record.code for record in result.canonical] == ["pig.record.view"]


@pytest.mark.unit
def test_scenario_duplicate_id_keeps_first_record(service, make_record) -> None:
    result = service.build(
        [
            make_record("x", "animal.record.view"),
            make_record("x", "pig.record.edit"),
        ],
    )

    assert [record.code for record in result.canonical] == ["animal.record.view"]


@pytest.mark.unit
def test_scenario_unknown_prefix_goes_to_catch_all(service, make_record) -> None:
    result = service.build([make_record("1", "zzz_custom.thing")])

    (group,) = result.groups
    assert group.module == "other"
    assert group.module_name == "Other"
    assert group.categories[0].category_name == "Thing"


@pytest.mark.unit
def test_scenario_whitespace_query_is_no_filter(service, catalog) -> None:
    result = service.build(catalog, search_query="  ")

    assert result.filtered_groups == result.groups


@pytest.mark.unit
def test_scenario_module_without_permissions_yields_empty_view(service, make_record) -> None:
    records = [make_record("1", "pig.record.view"), make_record("2", "user.create")]
    unfiltered = service.build(records)

    result = service.build(records, selected_module="erp")

    assert result.filtered_groups == ()
    assert result.filtered_total == 0
    assert result.stats == unfiltered.stats


@pytest.mark.unit
def test_scenario_module_ordering(service, make_record) -> None:
    result = service.build(
        [
            make_record("1", "dev.user.create"),
            make_record("2", "erp.stock.view"),
            make_record("3", "aup.protocol.view"),
        ],
    )

    assert [group.module for group in result.groups] == ["aup", "erp", "dev"]
