"""Request schemas for the API."""

from pydantic import BaseModel, Field
from typing import Optional

from enrollpilot.models import ApplicantContext


class ApplicantContextInput(BaseModel):
    """Company attributes and uploads that drive requirement resolution."""
    company_id: Optional[str] = Field(default=None, description="Applicant company ID")
    has_prior_coverage: Optional[bool] = Field(
        default=None, description="Company had group coverage before this enrollment"
    )
    selected_carrier: Optional[str] = Field(
        default=None, description="Carrier chosen for the new plan, e.g., 'Kaiser'"
    )
    employee_count: Optional[int] = Field(default=None, description="Number of employees")
    company_state: Optional[str] = Field(default=None, description="Company's state")
    uploaded_document_types: list[str] = Field(
        default=[], description="Types of documents already uploaded"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "company_id": "42",
                    "has_prior_coverage": True,
                    "selected_carrier": "Kaiser",
                    "employee_count": 12,
                    "company_state": "CA",
                    "uploaded_document_types": ["DE-9C", "Business License"],
                }
            ]
        }
    }

    def to_context(self) -> ApplicantContext:
        """Build the engine's read-only context."""
        return ApplicantContext(
            has_prior_coverage=self.has_prior_coverage,
            selected_carrier=self.selected_carrier,
            employee_count=self.employee_count,
            uploaded_document_types=frozenset(self.uploaded_document_types),
            company_state=self.company_state,
            company_id=self.company_id,
        )


class DocumentStatusRequest(BaseModel):
    """Request for the status of one document type."""
    context: ApplicantContextInput
    document_type: str = Field(..., min_length=1, description="Document type, e.g., 'DE-9C'")


class ValidateDocumentsRequest(BaseModel):
    """Request to validate an applicant's uploads."""
    context: ApplicantContextInput
    role: Optional[str] = Field(
        default=None, description="Caller role: admin|owner|staff|employer|employee"
    )
    override_reason: Optional[str] = Field(
        default=None, description="Reason for overriding missing documents"
    )
    overridden_by: Optional[str] = Field(default=None, description="Caller user ID")


class OverrideRequest(BaseModel):
    """Request to override a company's document requirements."""
    company_id: str = Field(..., description="Applicant company ID")
    role: str = Field(..., description="Caller role: admin|owner|staff|employer|employee")
    reason: str = Field(default="", description="Why the requirements are overridden")
    overridden_by: Optional[str] = Field(default=None, description="Caller user ID")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "company_id": "42",
                    "role": "admin",
                    "reason": "DE-9C delayed by EDD, wage report on file",
                    "overridden_by": "7",
                }
            ]
        }
    }
