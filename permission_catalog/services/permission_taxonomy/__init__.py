"""权限分类引擎."""

from permission_catalog.services.permission_taxonomy.classifier import PermissionClassifier
from permission_catalog.services.permission_taxonomy.config_loader import (
    DEFAULT_TAXONOMY_CONFIG,
    load_taxonomy_config,
)
from permission_catalog.services.permission_taxonomy.deduplicator import deduplicate_permissions
from permission_catalog.services.permission_taxonomy.filters import filter_permission_tree, find_match_span
from permission_catalog.services.permission_taxonomy.naming import PermissionNameResolver
from permission_catalog.services.permission_taxonomy.stats import compute_permission_stats
from permission_catalog.services.permission_taxonomy.taxonomy_service import (
    TAXONOMY_SERVICE_EXTENSION,
    PermissionTaxonomyResult,
    PermissionTaxonomyService,
)
from permission_catalog.services.permission_taxonomy.tree_builder import build_module_options, build_permission_tree

__all__ = [
    "DEFAULT_TAXONOMY_CONFIG",
    "TAXONOMY_SERVICE_EXTENSION",
    "PermissionClassifier",
    "PermissionNameResolver",
    "PermissionTaxonomyResult",
    "PermissionTaxonomyService",
    "build_module_options",
    "build_permission_tree",
    "compute_permission_stats",
    "deduplicate_permissions",
    "filter_permission_tree",
    "find_match_span",
    "load_taxonomy_config",
]
