"""权限分类默认配置表.

说明:
- 所有表均为只读结构(MappingProxyType / tuple),下游通过 TaxonomyConfig 注入使用.
- 扩展模块或分类名称时只修改本文件(或通过 YAML 覆盖),不需要改动分类算法.
- 兜底模块的 order 必须是所有模块中的最大值,保证其始终排在最后.
"""

from __future__ import annotations

from types import MappingProxyType

FALLBACK_MODULE = "other"
FALLBACK_CATEGORY = "other"

# (module, order, label)
MODULE_TABLE: tuple[tuple[str, int, str], ...] = (
    ("aup", 1, "AUP"),
    ("pig", 2, "Pig"),
    ("erp", 3, "ERP"),
    ("dev", 4, "Dev"),
    ("notification", 5, "Notification"),
    ("report", 6, "Report"),
    (FALLBACK_MODULE, 99, "Other"),
)

CATEGORY_NAMES = MappingProxyType(
    {
        "aup": MappingProxyType(
            {
                "protocol": "Protocols",
                "review": "Reviews",
                "attachment": "Attachments",
                "version": "Versions",
            },
        ),
        "pig": MappingProxyType(
            {
                "pig": "Pigs",
                "record": "Records",
                "vet": "Vet",
                "export": "Export",
                "pathology": "Pathology",
            },
        ),
        "erp": MappingProxyType(
            {
                "warehouse": "Warehouses",
                "product": "Products",
                "partner": "Partners",
                "document": "Documents",
                "purchase": "Purchasing",
                "grn": "GRN",
                "pr": "PR",
                "sales": "Sales",
                "do": "DO",
                "stock": "Stock",
                "stocktake": "Stocktake",
                "report": "Reports",
                "po": "PO",
                "so": "SO",
                "tr": "Transfer",
                "stk": "Stocktake",
                "adj": "Adjustment",
                "inventory": "Inventory",
                "create": "Create",
                "approve": "Approve",
                "cancel": "Cancel",
                "submit": "Submit",
                "update": "Update",
                "delete": "Delete",
                "view": "View",
                "read": "Read",
                "edit": "Edit",
                "schedule": "Schedule",
                "download": "Download",
            },
        ),
        "dev": MappingProxyType(
            {
                "user": "Users",
                "role": "Roles",
                "permission": "Permissions",
                "system": "System",
                "audit": "Audit",
                "log": "Logs",
                "notification": "Notifications",
                "database": "Database",
                "create": "Create",
                "view": "View",
                "read": "Read",
                "edit": "Edit",
                "update": "Update",
                "delete": "Delete",
                "manage": "Manage",
                "assign": "Assign",
                "reset_password": "Reset Password",
                "export": "Export",
                "download": "Download",
                "query": "Query",
                "migrate": "Migrate",
                "seed": "Seed",
                "send": "Send",
                "backup": "Backup",
                "restore": "Restore",
                "trigger": "Trigger",
                "schedule": "Schedule",
                "upload": "Upload",
            },
        ),
        "notification": MappingProxyType(
            {
                "manage": "Manage",
                "send": "Send",
                "trigger": "Trigger",
                "view": "View",
            },
        ),
        "report": MappingProxyType(
            {
                "download": "Download",
                "schedule": "Schedule",
                "view": "View",
                "export": "Export",
            },
        ),
    },
)

OPERATION_NAMES = MappingProxyType(
    {
        "create": "Create",
        "approve": "Approve",
        "cancel": "Cancel",
        "submit": "Submit",
        "update": "Update",
        "delete": "Delete",
        "view": "View",
        "read": "Read",
        "edit": "Edit",
        "manage": "Manage",
        "assign": "Assign",
        "reset_password": "Reset Password",
        "export": "Export",
        "download": "Download",
        "query": "Query",
        "migrate": "Migrate",
        "seed": "Seed",
        "send": "Send",
        "backup": "Backup",
        "restore": "Restore",
        "upload": "Upload",
        "trigger": "Trigger",
        "schedule": "Schedule",
    },
)

# 显式 module 字段的旧值重定向
MODULE_REMAPS = MappingProxyType(
    {
        "animal": "pig",
        "notification": "dev",
        "report": "erp",
    },
)

_ERP_PREFIXES = (
    "erp",
    "warehouse",
    "product",
    "partner",
    "document",
    "purchase",
    "po",
    "pr",
    "grn",
    "sales",
    "so",
    "do",
    "stock",
    "stocktake",
    "inventory",
    "tr",
    "stk",
    "adj",
    "report",
)

_DEV_PREFIXES = (
    "dev",
    "admin",
    "user",
    "role",
    "permission",
    "system",
    "audit",
    "log",
    "notification",
    "database",
)

# code 首段 -> module
PREFIX_MODULES = MappingProxyType(
    {
        "aup": "aup",
        "pig": "pig",
        "animal": "pig",
        **{prefix: "erp" for prefix in _ERP_PREFIXES},
        **{prefix: "dev" for prefix in _DEV_PREFIXES},
    },
)

# 旧 code 前缀 -> 取代它的新前缀(同一能力的两套命名)
LEGACY_CODE_PREFIXES = MappingProxyType({"animal": "pig"})

__all__ = [
    "CATEGORY_NAMES",
    "FALLBACK_CATEGORY",
    "FALLBACK_MODULE",
    "LEGACY_CODE_PREFIXES",
    "MODULE_REMAPS",
    "MODULE_TABLE",
    "OPERATION_NAMES",
    "PREFIX_MODULES",
]
