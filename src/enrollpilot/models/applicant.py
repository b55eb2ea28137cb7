"""
EnrollPilot Applicant Context

The read-only snapshot of company attributes and uploads that drives
requirement resolution. It is owned by the calling enrollment flow; the
engine only reads it.

Upload and removal are modelled as pure transitions that return a new
context (NOT_UPLOADED -> UPLOADED and back).
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from ..exceptions import ApplicantContextError
from .enums import DocumentState


@dataclass(frozen=True)
class ApplicantContext:
    """
    Input to requirement resolution.

    Attributes:
        has_prior_coverage: Company had group coverage before this enrollment
        selected_carrier: Carrier chosen for the new plan
        employee_count: Number of employees (>= 0)
        uploaded_document_types: Types of documents already uploaded
        company_state: Company's state (carried for callers, not evaluated)
        company_id: Identifier of the applicant company
    """
    has_prior_coverage: Optional[bool] = None
    selected_carrier: Optional[str] = None
    employee_count: Optional[int] = None
    uploaded_document_types: frozenset[str] = field(default_factory=frozenset)
    company_state: Optional[str] = None
    company_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.employee_count is not None and self.employee_count < 0:
            raise ApplicantContextError(
                message=f"employee_count must be >= 0, got {self.employee_count}",
                details={"employee_count": self.employee_count},
                company_id=self.company_id,
            )
        if not isinstance(self.uploaded_document_types, frozenset):
            object.__setattr__(
                self,
                "uploaded_document_types",
                frozenset(self.uploaded_document_types),
            )
        # A blank carrier selection is the same as no selection
        if self.selected_carrier is not None and not self.selected_carrier.strip():
            object.__setattr__(self, "selected_carrier", None)

    @classmethod
    def from_uploads(
        cls,
        uploads: Iterable[dict],
        **attributes,
    ) -> ApplicantContext:
        """
        Build a context from persisted upload records.

        Each record must expose a "type" key; records without one are ignored.
        """
        types = frozenset(
            record["type"] for record in uploads
            if record.get("type")
        )
        return cls(uploaded_document_types=types, **attributes)

    def document_state(self, doc_type: str) -> DocumentState:
        """Get the upload state of a document type."""
        if doc_type in self.uploaded_document_types:
            return DocumentState.UPLOADED
        return DocumentState.NOT_UPLOADED

    def with_upload(self, doc_type: str) -> ApplicantContext:
        """Return a copy with doc_type marked as uploaded."""
        if doc_type in self.uploaded_document_types:
            return self
        return replace(
            self,
            uploaded_document_types=self.uploaded_document_types | {doc_type},
        )

    def without_upload(self, doc_type: str) -> ApplicantContext:
        """Return a copy with doc_type removed from the uploads."""
        if doc_type not in self.uploaded_document_types:
            return self
        return replace(
            self,
            uploaded_document_types=self.uploaded_document_types - {doc_type},
        )
