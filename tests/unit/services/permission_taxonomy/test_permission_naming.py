import pytest

from permission_catalog.services.permission_taxonomy.config_loader import DEFAULT_TAXONOMY_CONFIG
from permission_catalog.services.permission_taxonomy.naming import (
    DEFAULT_CATEGORY_RESOLVERS,
    FormattedNameResolver,
    OperationNameResolver,
    PermissionNameResolver,
    format_category_code,
)


@pytest.fixture
def naming() -> PermissionNameResolver:
    return PermissionNameResolver(DEFAULT_TAXONOMY_CONFIG)


@pytest.mark.unit
def test_module_name_and_order_come_from_table(naming) -> None:
    assert naming.module_name("pig") == "Pig"
    assert naming.module_order("pig") == 2
    assert naming.module_name("aup") == "AUP"
    assert naming.module_order("dev") == 4


@pytest.mark.unit
def test_unknown_module_uses_fallback_label_and_order(naming) -> None:
    assert naming.module_name("custom") == "Other"
    assert naming.module_order("custom") == 99


@pytest.mark.unit
def test_module_scoped_table_takes_precedence(naming) -> None:
    assert naming.category_name("pig", "record") == "Records"
    assert naming.category_name("erp", "report") == "Reports"
    assert naming.category_name("dev", "notification") == "Notifications"


@pytest.mark.unit
def test_cross_module_lookup_when_own_table_misses(naming) -> None:
    # aup 没有 create 分类, 从其他模块的表中借用
    assert naming.category_name("aup", "create") == "Create"
    assert naming.category_name("pig", "stk") == "Stocktake"
    assert naming.category_name("other", "warehouse") == "Warehouses"


@pytest.mark.unit
def test_unknown_category_is_formatted(naming) -> None:
    assert naming.category_name("other", "thing") == "Thing"
    assert naming.category_name("pig", "stock_ledger") == "Stock Ledger"


@pytest.mark.unit
def test_operation_table_used_when_category_tables_are_skipped() -> None:
    naming = PermissionNameResolver(
        DEFAULT_TAXONOMY_CONFIG,
        resolvers=[OperationNameResolver(), FormattedNameResolver()],
    )

    assert naming.category_name("pig", "reset_password") == "Reset Password"
    assert naming.category_name("pig", "record") == "Record"


@pytest.mark.unit
def test_default_chain_order() -> None:
    assert [resolver.name for resolver in DEFAULT_CATEGORY_RESOLVERS] == [
        "module_scoped",
        "cross_module",
        "operation",
        "formatted",
    ]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("category", "expected"),
    [
        ("reset_password", "Reset Password"),
        ("stockLedger", "Stock Ledger"),
        ("thing", "Thing"),
        ("UPPER", "Upper"),
    ],
)
def test_format_category_code(category, expected) -> None:
    assert format_category_code(category) == expected
