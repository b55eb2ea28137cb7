"""
EnrollPilot Catalog Pack Loader

Loads and validates catalog packs from YAML or JSON files.

Converts Pydantic schema models to EnrollPilot domain models.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..engine.catalog import RequirementCatalog
from ..engine.condition_evaluator import ConditionEvaluator
from ..exceptions import CatalogLoadError, CatalogValidationError, CatalogVersionMismatch
from ..models import DocumentRequirement, RequirementGroup, SatisfactionMode
from .schema import (
    SCHEMA_VERSION,
    CatalogPackSchema,
    DocumentRequirementSchema,
    RequirementGroupSchema,
    check_schema_version,
    validate_catalog_pack,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Reference Integrity Validation
# =============================================================================

def validate_reference_integrity(catalog: RequirementCatalog, path: str = "") -> None:
    """
    Validate cross-group consistency.

    Catches:
    - Duplicate group IDs across base and conditional groups
    - Carrier keys that are blank or carry surrounding whitespace

    Raises:
        ValueError: If reference integrity errors are found
    """
    errors = []

    seen_group_ids: set[str] = set()
    for group in catalog.base_groups() + catalog.conditional_groups():
        if group.id in seen_group_ids:
            errors.append(f"Duplicate group ID: '{group.id}'")
        seen_group_ids.add(group.id)

    for carrier in catalog.carriers():
        key = carrier.strip()
        if not key:
            errors.append("Blank carrier name in carrier_addenda")
        elif key != carrier:
            errors.append(f"Carrier name has surrounding whitespace: '{carrier}'")

    if errors:
        path_str = f" in {path}" if path else ""
        raise ValueError(
            f"Reference integrity errors{path_str}:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_requirement(schema: DocumentRequirementSchema) -> DocumentRequirement:
    """Convert DocumentRequirementSchema to DocumentRequirement model."""
    return DocumentRequirement(
        type=schema.type,
        label=schema.label,
        description=schema.description,
        required=schema.required,
        carrier_scope=frozenset(schema.carriers) if schema.carriers is not None else None,
        condition=schema.condition,
    )


def _convert_group(schema: RequirementGroupSchema) -> RequirementGroup:
    """Convert RequirementGroupSchema to RequirementGroup model."""
    return RequirementGroup(
        id=schema.id,
        label=schema.label,
        description=schema.description,
        requirements=tuple(_convert_requirement(r) for r in schema.requirements),
        satisfaction_mode=SatisfactionMode(schema.satisfaction),
        condition=schema.condition,
    )


def _convert_catalog_pack(schema: CatalogPackSchema) -> RequirementCatalog:
    """Convert CatalogPackSchema to RequirementCatalog."""
    return RequirementCatalog(
        id=schema.id,
        name=schema.name,
        version=schema.version,
        base=tuple(_convert_group(g) for g in schema.base_groups),
        conditional=tuple(_convert_group(g) for g in schema.conditional_groups),
        addenda={
            carrier: tuple(_convert_requirement(r) for r in requirements)
            for carrier, requirements in schema.carrier_addenda.items()
        },
        unknown_carrier_fallback=tuple(
            _convert_requirement(r) for r in schema.unknown_carrier_requirements
        ),
    )


# =============================================================================
# Catalog Pack Loader
# =============================================================================

class CatalogLoader:
    """
    Loads catalog packs from YAML or JSON files.

    Usage:
        loader = CatalogLoader()
        catalog = loader.load("packs/enrollment/ca_small_group.yaml")
    """

    def __init__(self, strict_version: bool = True, strict_conditions: bool = False):
        """
        Initialize the loader.

        Args:
            strict_version: If True, reject packs with incompatible schema versions
            strict_conditions: If True, reject packs naming unrecognised conditions
                (otherwise they are logged and left to the unknown-rule policy)
        """
        self.strict_version = strict_version
        self.strict_conditions = strict_conditions
        self._catalogs: dict[str, RequirementCatalog] = {}

    def load(self, path: Union[str, Path]) -> RequirementCatalog:
        """
        Load a catalog pack from a file.

        Raises:
            CatalogLoadError: If file cannot be read
            CatalogValidationError: If validation fails
            CatalogVersionMismatch: If schema version incompatible
        """
        path = Path(path)

        try:
            data = self._load_file(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise CatalogLoadError(
                message=f"Failed to load catalog pack: {e}",
                details={"path": str(path), "error": str(e)},
            )

        catalog = self.load_data(data, source=str(path))
        logger.info(
            "Loaded catalog pack %s v%s from %s (%d base, %d conditional, %d carriers)",
            catalog.id,
            catalog.version,
            path,
            len(catalog.base_groups()),
            len(catalog.conditional_groups()),
            len(catalog.carriers()),
        )
        return catalog

    def load_data(self, data: Any, source: str = "") -> RequirementCatalog:
        """
        Validate and convert already-parsed pack data.

        Raises:
            CatalogValidationError: If validation fails
            CatalogVersionMismatch: If schema version incompatible
        """
        if not isinstance(data, dict):
            raise CatalogValidationError(
                message="Catalog pack must be a mapping at the top level",
                details={"path": source, "type": type(data).__name__},
            )

        if self.strict_version and not check_schema_version(data):
            pack_version = data.get("schema_version", "unknown")
            raise CatalogVersionMismatch(
                message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
                details={
                    "pack_version": pack_version,
                    "expected_version": SCHEMA_VERSION,
                },
            )

        try:
            schema = validate_catalog_pack(data)
        except ValidationError as e:
            raise CatalogValidationError(
                message=f"Catalog pack validation failed: {e.error_count()} errors",
                details={
                    "errors": e.errors(
                        include_url=False, include_context=False, include_input=False
                    ),
                    "path": source,
                },
            )

        catalog = _convert_catalog_pack(schema)

        try:
            validate_reference_integrity(catalog, source)
        except ValueError as e:
            raise CatalogValidationError(
                message="Reference integrity validation failed",
                details={"errors": str(e), "path": source},
            )

        self._check_conditions(catalog, source)

        self._catalogs[catalog.id] = catalog
        return catalog

    def _check_conditions(self, catalog: RequirementCatalog, source: str) -> None:
        unknown = ConditionEvaluator().unrecognized(catalog.condition_names())
        if not unknown:
            return
        if self.strict_conditions:
            raise CatalogValidationError(
                message=f"Catalog pack names unrecognized conditions: {unknown}",
                details={"conditions": unknown, "path": source},
            )
        logger.warning(
            "Catalog pack %s names unrecognized conditions %s", catalog.id, unknown
        )

    def _load_file(self, path: Path) -> Any:
        """Load data from YAML or JSON file."""
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in {".yaml", ".yml"}:
                return yaml.safe_load(f)
            elif path.suffix.lower() == ".json":
                return json.load(f)
            else:
                # Try YAML first, then JSON
                content = f.read()
                try:
                    return yaml.safe_load(content)
                except yaml.YAMLError:
                    return json.loads(content)

    def get_catalog(self, catalog_id: str) -> Optional[RequirementCatalog]:
        """Get a cached catalog by ID."""
        return self._catalogs.get(catalog_id)

    def list_catalogs(self) -> list[str]:
        """List IDs of all loaded catalogs."""
        return list(self._catalogs.keys())


# =============================================================================
# Convenience Functions
# =============================================================================

def load_catalog(path: Union[str, Path], strict_conditions: bool = False) -> RequirementCatalog:
    """
    Load a catalog pack from a file.

    Convenience function that creates a temporary loader.
    """
    return CatalogLoader(strict_conditions=strict_conditions).load(path)


def load_catalog_from_string(
    content: str,
    format: str = "yaml",
) -> RequirementCatalog:
    """
    Load a catalog pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"
    """
    try:
        if format.lower() == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CatalogLoadError(
            message=f"Failed to parse catalog pack: {e}",
            details={"format": format, "error": str(e)},
        )
    return CatalogLoader().load_data(data)
