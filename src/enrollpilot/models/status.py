"""
EnrollPilot Validation Status

Derived views over a resolved set of requirement groups. None of these
are persisted; they are recomputed whenever the uploads or the applicant
context change.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from .requirements import RequirementGroup


# =============================================================================
# Validation Status
# =============================================================================

@dataclass(frozen=True)
class ValidationStatus:
    """
    Completion summary of resolved requirement groups.

    is_complete is True iff missing_groups is empty; an empty group list
    is vacuously complete.
    """
    is_complete: bool
    satisfied_group_count: int
    total_group_count: int
    missing_groups: tuple[RequirementGroup, ...] = ()

    @property
    def missing_labels(self) -> list[str]:
        """Labels of unsatisfied groups, in resolution order."""
        return [g.label for g in self.missing_groups]

    @property
    def completion_percentage(self) -> float:
        """Share of satisfied groups (100.0 when nothing is required)."""
        if self.total_group_count == 0:
            return 100.0
        return self.satisfied_group_count / self.total_group_count * 100

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "is_complete": self.is_complete,
            "satisfied_group_count": self.satisfied_group_count,
            "total_group_count": self.total_group_count,
            "missing_groups": [g.id for g in self.missing_groups],
            "missing_labels": self.missing_labels,
            "completion_percentage": round(self.completion_percentage, 1),
        }


@dataclass(frozen=True)
class DocumentStatus:
    """Status of one document type against the resolved groups."""
    document_type: str
    is_uploaded: bool
    is_required: bool


# =============================================================================
# Server-side Validation
# =============================================================================

@dataclass(frozen=True)
class OverrideRecord:
    """Audit record of a document requirement override."""
    role: str
    reason: str
    overridden_by: Optional[str] = None
    company_id: Optional[str] = None
    overridden_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging/API responses."""
        return {
            "role": self.role,
            "reason": self.reason,
            "overridden_by": self.overridden_by,
            "company_id": self.company_id,
            "overridden_at": self.overridden_at.isoformat(),
        }


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating an applicant's uploads.

    errors holds one "Missing required documents: <label>" entry per
    missing group, or the override note when an override was applied.
    """
    is_valid: bool
    missing_requirements: list[str] = field(default_factory=list)
    satisfied_groups: int = 0
    total_groups: int = 0
    errors: list[str] = field(default_factory=list)
    override: Optional[OverrideRecord] = None

    @classmethod
    def from_status(cls, status: ValidationStatus) -> ValidationResult:
        """Build a result from a ValidationStatus."""
        missing = status.missing_labels
        return cls(
            is_valid=status.is_complete,
            missing_requirements=missing,
            satisfied_groups=status.satisfied_group_count,
            total_groups=status.total_group_count,
            errors=[f"Missing required documents: {label}" for label in missing],
        )

    @property
    def is_overridden(self) -> bool:
        """Check if validity comes from an override."""
        return self.override is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "is_valid": self.is_valid,
            "missing_requirements": list(self.missing_requirements),
            "satisfied_groups": self.satisfied_groups,
            "total_groups": self.total_groups,
            "errors": list(self.errors),
            "override": self.override.to_dict() if self.override else None,
        }
