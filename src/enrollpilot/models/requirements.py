"""
EnrollPilot Document Requirements

Models for the documents an applicant may be asked to upload.

Key components:
- DocumentRequirement: One concrete document type
- RequirementGroup: A cluster of requirements sharing one satisfaction rule

Both are immutable: they are defined by catalog packs and rebuilt on
every resolution pass, never edited in place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import SatisfactionMode


# =============================================================================
# Document Requirement
# =============================================================================

@dataclass(frozen=True)
class DocumentRequirement:
    """
    A specific document that may be requested from an applicant.

    Attributes:
        type: Stable identifier, matched against uploaded document types
        label: Display name
        description: Human-readable description
        required: Whether this document blocks an ALL_REQUIRED group
        carrier_scope: Carriers this requirement is limited to (None = all)
        condition: Condition name gating this requirement (carrier addenda)
    """
    type: str
    label: str = ""
    description: str = ""
    required: bool = True
    carrier_scope: Optional[frozenset[str]] = None
    condition: Optional[str] = None

    def applies_to_carrier(self, carrier: Optional[str]) -> bool:
        """Check whether this requirement applies to the given carrier."""
        if self.carrier_scope is None:
            return True
        return carrier is not None and carrier in self.carrier_scope

    @property
    def display_label(self) -> str:
        """Label to show, falling back to the type identifier."""
        return self.label or self.type


# =============================================================================
# Requirement Group
# =============================================================================

@dataclass(frozen=True)
class RequirementGroup:
    """
    A named cluster of document requirements with a satisfaction rule.

    Satisfaction:
        ANY_ONE: any single uploaded requirement satisfies the group,
                 regardless of each requirement's required flag
        ALL_REQUIRED: every requirement with required=True must be uploaded

    Attributes:
        id: Unique identifier
        label: Display name
        description: Human-readable description
        requirements: Ordered requirements of this group
        satisfaction_mode: How uploads satisfy the group
        condition: Condition name gating inclusion (None = always included)
        carrier: Carrier this group was built for (carrier groups only)
    """
    id: str
    label: str
    description: str = ""
    requirements: tuple[DocumentRequirement, ...] = field(default_factory=tuple)
    satisfaction_mode: SatisfactionMode = SatisfactionMode.ALL_REQUIRED
    condition: Optional[str] = None
    carrier: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any sequence but store a tuple so the group stays hashable
        if not isinstance(self.requirements, tuple):
            object.__setattr__(self, "requirements", tuple(self.requirements))

    @property
    def document_types(self) -> tuple[str, ...]:
        """All requirement types in catalog order."""
        return tuple(r.type for r in self.requirements)

    @property
    def required_types(self) -> tuple[str, ...]:
        """Types whose required flag is set."""
        return tuple(r.type for r in self.requirements if r.required)

    @property
    def is_conditional(self) -> bool:
        """Check if inclusion depends on a condition."""
        return self.condition is not None

    @property
    def is_carrier_group(self) -> bool:
        """Check if this group holds carrier-specific addenda."""
        return self.carrier is not None

    def get_requirement(self, doc_type: str) -> Optional[DocumentRequirement]:
        """Get a requirement by type."""
        for requirement in self.requirements:
            if requirement.type == doc_type:
                return requirement
        return None
