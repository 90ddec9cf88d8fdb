from dataclasses import replace

import pytest

from permission_catalog.services.permission_taxonomy.config_loader import DEFAULT_TAXONOMY_CONFIG
from permission_catalog.services.permission_taxonomy.deduplicator import (
    code_equivalence_key,
    deduplicate_permissions,
    unique_by_code,
    unique_by_id,
)


@pytest.mark.unit
def test_code_equivalence_key_maps_legacy_prefix_to_current() -> None:
    assert code_equivalence_key("animal.record.view", DEFAULT_TAXONOMY_CONFIG) == "pig.record.view"
    assert code_equivalence_key("pig.record.view", DEFAULT_TAXONOMY_CONFIG) == "pig.record.view"
    assert code_equivalence_key("animal", DEFAULT_TAXONOMY_CONFIG) == "pig"
    assert code_equivalence_key("erp.stock.view", DEFAULT_TAXONOMY_CONFIG) == "erp.stock.view"


@pytest.mark.unit
def test_unique_by_id_keeps_first_occurrence(make_record) -> None:
    first = make_record("x", "erp.stock.view")
    second = make_record("x", "erp.stock.edit")
    third = make_record("y", "erp.stock.edit")

    assert unique_by_id([first, second, third]) == [first, third]


@pytest.mark.unit
def test_unique_by_id_treats_none_as_empty() -> None:
    assert unique_by_id(None) == []


@pytest.mark.unit
def test_current_prefix_replaces_legacy_record(make_record) -> None:
    legacy = make_record("1", "animal.record.view")
    current = make_record("2", "pig.record.view")

    assert unique_by_code([legacy, current], DEFAULT_TAXONOMY_CONFIG) == [current]


@pytest.mark.unit
def test_legacy_record_never_replaces_current(make_record) -> None:
    current = make_record("2", "pig.record.view")
    legacy = make_record("1", "animal.record.view")

    assert unique_by_code([current, legacy], DEFAULT_TAXONOMY_CONFIG) == [current]


@pytest.mark.unit
def test_identical_codes_keep_first_record(make_record) -> None:
    first = make_record("1", "erp.stock.view", name="查看库存")
    second = make_record("2", "erp.stock.view", name="库存查看")

    assert unique_by_code([first, second], DEFAULT_TAXONOMY_CONFIG) == [first]


@pytest.mark.unit
def test_longer_code_wins_when_existing_has_no_current_prefix(make_record) -> None:
    config = replace(
        DEFAULT_TAXONOMY_CONFIG,
        legacy_prefixes={"animal": "pig", "hog": "pig"},
    )
    short = make_record("1", "hog.record.view")
    longer = make_record("2", "animal.record.view")

    assert unique_by_code([short, longer], config) == [longer]
    assert unique_by_code([longer, short], config) == [longer]


@pytest.mark.unit
def test_deduplicate_permissions_guarantees_unique_id_and_code(make_record) -> None:
    records = [
        make_record("1", "animal.record.view"),
        make_record("2", "pig.record.view"),
        make_record("1", "erp.stock.view"),
        make_record("3", "erp.stock.view"),
        make_record("4", "erp.stock.view"),
        make_record("5", "dev.user.create"),
    ]

    canonical = deduplicate_permissions(records, DEFAULT_TAXONOMY_CONFIG)

    ids = [record.id for record in canonical]
    codes = [record.code for record in canonical]
    assert len(ids) == len(set(ids))
    assert len(codes) == len(set(codes))
    assert codes == ["pig.record.view", "erp.stock.view", "dev.user.create"]
    assert ids == ["2", "3", "5"]


@pytest.mark.unit
def test_deduplicate_permissions_accepts_none() -> None:
    assert deduplicate_permissions(None, DEFAULT_TAXONOMY_CONFIG) == ()


@pytest.mark.unit
def test_same_id_first_record_survives_regardless_of_prefix(make_record) -> None:
    legacy = make_record("x", "animal.record.view")
    current = make_record("x", "pig.record.edit")

    canonical = deduplicate_permissions([legacy, current], DEFAULT_TAXONOMY_CONFIG)

    assert canonical == (legacy,)
