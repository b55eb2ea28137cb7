"""
EnrollPilot Exception Hierarchy

Domain-specific exceptions for document-requirement resolution.
All exceptions include error codes for tracking and logging.

Exception codes follow the pattern: EP_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class EnrollPilotError(Exception):
    """
    Base exception for all EnrollPilot errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (EP_*)
        details: Additional context about the error
        company_id: Associated applicant company ID if applicable
    """
    message: str
    code: str = "EP_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    company_id: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.company_id:
            parts.append(f"(company: {self.company_id})")
        return " ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/API responses."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.company_id:
            result["company_id"] = self.company_id
        return result


# =============================================================================
# Catalog Errors
# =============================================================================

@dataclass
class CatalogLoadError(EnrollPilotError):
    """Failed to load catalog pack from file."""
    code: str = "EP_CATALOG_LOAD_ERROR"


@dataclass
class CatalogValidationError(EnrollPilotError):
    """Catalog pack schema or reference validation failed."""
    code: str = "EP_CATALOG_VALIDATION_ERROR"


@dataclass
class CatalogVersionMismatch(EnrollPilotError):
    """Catalog pack schema version doesn't match the supported version."""
    code: str = "EP_CATALOG_VERSION_MISMATCH"


@dataclass
class CatalogNotFoundError(EnrollPilotError):
    """Requested catalog entry not found."""
    code: str = "EP_CATALOG_NOT_FOUND"


# =============================================================================
# Applicant Context Errors
# =============================================================================

@dataclass
class ApplicantContextError(EnrollPilotError):
    """Applicant context is invalid."""
    code: str = "EP_APPLICANT_CONTEXT_ERROR"


# =============================================================================
# Condition Errors
# =============================================================================

@dataclass
class ConditionEvaluationError(EnrollPilotError):
    """Condition evaluation failed."""
    code: str = "EP_CONDITION_EVAL_ERROR"


# =============================================================================
# Override Errors
# =============================================================================

@dataclass
class OverrideError(EnrollPilotError):
    """Document requirement override failed."""
    code: str = "EP_OVERRIDE_ERROR"


@dataclass
class OverrideNotPermittedError(OverrideError):
    """Role is not allowed to override document requirements."""
    code: str = "EP_OVERRIDE_NOT_PERMITTED"


@dataclass
class OverrideReasonRequiredError(OverrideError):
    """An override was requested without a reason."""
    code: str = "EP_OVERRIDE_REASON_REQUIRED"
