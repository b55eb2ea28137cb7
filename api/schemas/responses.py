"""Response schemas for the API."""

from pydantic import BaseModel
from typing import Optional


class RequirementSummary(BaseModel):
    """A document requirement."""
    type: str
    label: str
    description: str
    required: bool
    carriers: Optional[list[str]] = None
    condition: Optional[str] = None


class GroupSummary(BaseModel):
    """A requirement group and its requirements."""
    id: str
    label: str
    description: str
    satisfaction_mode: str  # all_required|any_one
    condition: Optional[str] = None
    carrier: Optional[str] = None
    requirements: list[RequirementSummary]


class CatalogSummary(BaseModel):
    """The loaded catalog pack."""
    id: str
    name: str
    version: str
    catalog_hash: str
    base_groups: list[GroupSummary]
    conditional_groups: list[GroupSummary]
    carriers: list[str]
    document_types: list[str]


class CarrierSummary(BaseModel):
    """Carrier addenda for one carrier."""
    carrier: str
    requirements: list[RequirementSummary]


class ResolveResponse(BaseModel):
    """Requirement groups resolved for an applicant."""
    catalog_id: str
    catalog_hash: str
    groups: list[GroupSummary]


class GroupStatus(BaseModel):
    """Satisfaction of one resolved group."""
    id: str
    label: str
    satisfied: bool


class StatusResponse(BaseModel):
    """Completion status of an applicant's uploads."""
    is_complete: bool
    satisfied_group_count: int
    total_group_count: int
    missing_groups: list[str]
    missing_labels: list[str]
    completion_percentage: float
    groups: list[GroupStatus]


class DocumentStatusResponse(BaseModel):
    """Status of one document type."""
    document_type: str
    is_uploaded: bool
    is_required: bool


class OverrideInfo(BaseModel):
    """Audit record of an override."""
    role: str
    reason: str
    overridden_by: Optional[str] = None
    company_id: Optional[str] = None
    overridden_at: str


class ValidationResponse(BaseModel):
    """Server-side validation result."""
    is_valid: bool
    missing_requirements: list[str]
    satisfied_groups: int
    total_groups: int
    errors: list[str]
    override: Optional[OverrideInfo] = None


class OverrideResponse(BaseModel):
    """Result of an applied override."""
    success: bool
    message: str
    override: OverrideInfo
