"""
EnrollPilot Catalog Pack Schemas

Pydantic models for validating catalog pack YAML/JSON files.

A catalog pack defines the document requirements for one enrollment
product: base groups, conditional groups and carrier addenda. The schemas
map to the domain models in enrollpilot.models.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


SatisfactionModeValue = Literal["all_required", "any_one"]


# =============================================================================
# Requirement Schemas
# =============================================================================

class DocumentRequirementSchema(BaseModel):
    """Schema for one document requirement."""
    type: str = Field(..., min_length=1, description="Document type identifier")
    label: str = Field("", description="Display name")
    description: str = Field("", description="Human-readable description")
    required: bool = Field(True, description="Blocks ALL_REQUIRED groups when missing")
    carriers: Optional[list[str]] = Field(
        None, description="Carriers this requirement is limited to (None = all)"
    )
    condition: Optional[str] = Field(None, description="Condition name gating this entry")

    model_config = {"extra": "forbid"}


class RequirementGroupSchema(BaseModel):
    """Schema for a requirement group."""
    id: str = Field(..., min_length=1, description="Unique identifier")
    label: str = Field(..., description="Display name")
    description: str = Field("", description="Description")
    satisfaction: SatisfactionModeValue = Field(
        "all_required", description="all_required | any_one"
    )
    condition: Optional[str] = Field(None, description="Condition name gating the group")
    requirements: list[DocumentRequirementSchema] = Field(
        ..., description="Ordered document requirements"
    )

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def validate_requirements(self) -> "RequirementGroupSchema":
        """Groups need at least one requirement and unique types."""
        if not self.requirements:
            raise ValueError(f"Group '{self.id}' has no requirements")

        seen: set[str] = set()
        duplicates: list[str] = []
        for requirement in self.requirements:
            if requirement.type in seen:
                duplicates.append(requirement.type)
            seen.add(requirement.type)
        if duplicates:
            raise ValueError(
                f"Group '{self.id}' has duplicate document types: {duplicates}"
            )
        return self


# =============================================================================
# Catalog Pack Schema (Top-Level)
# =============================================================================

class CatalogPackSchema(BaseModel):
    """
    Top-level schema for a catalog pack YAML/JSON file.
    """
    schema_version: str = Field(SCHEMA_VERSION, description="Schema version for compatibility")
    id: str = Field(..., description="Unique identifier (e.g., 'CA-SMALL-GROUP-2024')")
    name: str = Field(..., description="Human-readable name")
    version: str = Field(..., description="Version string (e.g., '2024.1')")
    description: Optional[str] = None
    jurisdiction: Optional[str] = Field(None, description="State the pack applies to")

    base_groups: list[RequirementGroupSchema] = Field(
        default_factory=list,
        description="Always-required groups"
    )
    conditional_groups: list[RequirementGroupSchema] = Field(
        default_factory=list,
        description="Groups gated by a condition"
    )
    carrier_addenda: dict[str, list[DocumentRequirementSchema]] = Field(
        default_factory=dict,
        description="Carrier-specific requirements keyed by carrier name"
    )
    unknown_carrier_requirements: list[DocumentRequirementSchema] = Field(
        default_factory=list,
        description="Requirements for unknown carriers when failing closed"
    )

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }

    @field_validator("jurisdiction")
    @classmethod
    def validate_jurisdiction(cls, v: Optional[str]) -> Optional[str]:
        """Normalize jurisdiction codes to upper case."""
        return v.upper() if v else v

    @model_validator(mode="after")
    def validate_conditions(self) -> "CatalogPackSchema":
        """Conditional groups must name a condition; base groups must not."""
        for group in self.base_groups:
            if group.condition:
                raise ValueError(
                    f"Base group '{group.id}' has a condition; "
                    "move it to conditional_groups"
                )
        for group in self.conditional_groups:
            if not group.condition:
                raise ValueError(f"Conditional group '{group.id}' has no condition")
        return self

    @model_validator(mode="after")
    def validate_addenda(self) -> "CatalogPackSchema":
        """Document types must be unique within each carrier's list."""
        lists = [
            (f"carrier_addenda['{carrier}']", requirements)
            for carrier, requirements in self.carrier_addenda.items()
        ]
        lists.append(("unknown_carrier_requirements", self.unknown_carrier_requirements))

        for name, requirements in lists:
            seen: set[str] = set()
            duplicates: list[str] = []
            for requirement in requirements:
                if requirement.type in seen:
                    duplicates.append(requirement.type)
                seen.add(requirement.type)
            if duplicates:
                raise ValueError(f"{name} has duplicate document types: {duplicates}")
        return self


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_catalog_pack(data: dict[str, Any]) -> CatalogPackSchema:
    """
    Validate a catalog pack dictionary against the schema.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return CatalogPackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """
    Check if a catalog pack's schema version is compatible.

    Only the major version has to match.
    """
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    pack_major = pack_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
