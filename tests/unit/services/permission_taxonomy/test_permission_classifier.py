import pytest

from permission_catalog.services.permission_taxonomy.classifier import PermissionClassifier
from permission_catalog.services.permission_taxonomy.config_loader import DEFAULT_TAXONOMY_CONFIG


@pytest.fixture
def classifier() -> PermissionClassifier:
    return PermissionClassifier(DEFAULT_TAXONOMY_CONFIG)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("explicit_module", "expected"),
    [
        ("animal", "pig"),
        ("notification", "dev"),
        ("report", "erp"),
        ("aup", "aup"),
        ("custom", "custom"),
    ],
)
def test_explicit_module_wins_after_remap(classifier, make_record, explicit_module, expected) -> None:
    record = make_record("1", "erp.stock.view", module=explicit_module)

    assert classifier.resolve_module(record) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("pig.record.view", "pig"),
        ("animal.record.view", "pig"),
        ("warehouse.item.view", "erp"),
        ("po.create", "erp"),
        ("user.create", "dev"),
        ("notification.send", "dev"),
        ("aup.protocol.view", "aup"),
        ("zzz_custom.thing", "other"),
        ("nodot", "other"),
    ],
)
def test_module_falls_back_to_code_prefix(classifier, make_record, code, expected) -> None:
    assert classifier.resolve_module(make_record("1", code)) == expected


@pytest.mark.unit
def test_blank_explicit_module_uses_prefix(classifier, make_record) -> None:
    assert classifier.resolve_module(make_record("1", "pig.record.view", module="")) == "pig"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("pig.record.view", "record"),
        ("user.create", "create"),
        ("nodot", "other"),
        ("pig..view", "other"),
        ("pig.", "other"),
    ],
)
def test_category_is_second_code_segment(classifier, code, expected) -> None:
    assert classifier.resolve_category(code) == expected


@pytest.mark.unit
def test_classify_combines_module_and_category(classifier, make_record) -> None:
    classification = classifier.classify(make_record("1", "animal.vet.approve"))

    assert classification.module == "pig"
    assert classification.category == "vet"
