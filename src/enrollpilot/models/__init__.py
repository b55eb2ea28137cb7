"""
EnrollPilot Models

All domain models for the document-requirement engine.

    from enrollpilot.models import (
        # Enums
        SatisfactionMode, ConditionKind, UnknownRulePolicy,
        # Conditions
        TriBool, ConditionRef, EvaluationResult,
        # Requirements
        DocumentRequirement, RequirementGroup,
        # Applicant
        ApplicantContext,
        # Status
        ValidationStatus, ValidationResult,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    ConditionKind,
    DocumentState,
    SatisfactionMode,
    UnknownRulePolicy,
    UserRole,
)

# =============================================================================
# Conditions
# =============================================================================
from .conditions import (
    ConditionRef,
    EvaluationResult,
    TriBool,
    normalize_token,
)

# =============================================================================
# Requirements
# =============================================================================
from .requirements import (
    DocumentRequirement,
    RequirementGroup,
)

# =============================================================================
# Applicant
# =============================================================================
from .applicant import ApplicantContext

# =============================================================================
# Status
# =============================================================================
from .status import (
    DocumentStatus,
    OverrideRecord,
    ValidationResult,
    ValidationStatus,
)

__all__ = [
    # Enums
    "ConditionKind",
    "DocumentState",
    "SatisfactionMode",
    "UnknownRulePolicy",
    "UserRole",
    # Conditions
    "ConditionRef",
    "EvaluationResult",
    "TriBool",
    "normalize_token",
    # Requirements
    "DocumentRequirement",
    "RequirementGroup",
    # Applicant
    "ApplicantContext",
    # Status
    "DocumentStatus",
    "OverrideRecord",
    "ValidationResult",
    "ValidationStatus",
]
