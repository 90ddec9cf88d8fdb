"""权限目录一致性检查."""

from permission_catalog.services.permission_audit.catalog_audit_service import audit_permission_catalog

__all__ = ["audit_permission_catalog"]
