"""
EnrollPilot Catalog Packs

Schema validation and loading for catalog packs.

Catalog packs are YAML or JSON files that define which documents an
applicant company must upload: base groups, conditional groups and
carrier-specific addenda.

Usage:
    from enrollpilot.packs import load_catalog, CatalogLoader

    catalog = load_catalog("packs/enrollment/ca_small_group.yaml")

    loader = CatalogLoader(strict_conditions=True)
    catalog = loader.load("path/to/catalog.yaml")
"""
from __future__ import annotations

from .loader import (
    CatalogLoader,
    load_catalog,
    load_catalog_from_string,
    validate_reference_integrity,
)
from .schema import (
    SCHEMA_VERSION,
    CatalogPackSchema,
    DocumentRequirementSchema,
    RequirementGroupSchema,
    check_schema_version,
    validate_catalog_pack,
)

__all__ = [
    # Version
    "SCHEMA_VERSION",
    # Loader
    "CatalogLoader",
    "load_catalog",
    "load_catalog_from_string",
    "validate_reference_integrity",
    # Validation
    "validate_catalog_pack",
    "check_schema_version",
    # Schemas
    "CatalogPackSchema",
    "RequirementGroupSchema",
    "DocumentRequirementSchema",
]
