"""
EnrollPilot - Document Requirement Resolution for Group Enrollment

EnrollPilot decides which documents an applicant company must upload
before a group benefits enrollment can be submitted, and whether the
uploads it already has are enough.

Core Principle: "Rules live in the catalog. The engine only reads them."

Key Features:
- Catalog packs (YAML/JSON) of base, conditional and carrier requirements
- Named conditions with explicit unknown-condition policy
- Any-one and all-required group satisfaction
- Server-side validation with role-based overrides

Quick Start:
    from enrollpilot import (
        ApplicantContext, RequirementResolver, SatisfactionChecker,
        load_catalog,
    )

    catalog = load_catalog("packs/enrollment/ca_small_group.yaml")
    context = ApplicantContext(
        has_prior_coverage=True,
        selected_carrier="Kaiser",
        employee_count=12,
        uploaded_document_types={"DE-9C", "Business License"},
    )

    groups = RequirementResolver(catalog).resolve(context)
    result = SatisfactionChecker().status(groups, context.uploaded_document_types)
    print(result.missing_labels)

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "EnrollPilot Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    ConditionKind,
    DocumentState,
    SatisfactionMode,
    UnknownRulePolicy,
    UserRole,
    # Conditions
    ConditionRef,
    EvaluationResult,
    TriBool,
    # Requirements
    DocumentRequirement,
    RequirementGroup,
    # Applicant
    ApplicantContext,
    # Status
    DocumentStatus,
    OverrideRecord,
    ValidationResult,
    ValidationStatus,
)

# =============================================================================
# Engine
# =============================================================================
from .engine import (
    CARRIER_GROUP_ID,
    ConditionEvaluator,
    DocumentValidator,
    RequirementCatalog,
    RequirementResolver,
    SatisfactionChecker,
    can_override,
    evaluate_condition,
    resolve_requirements,
    validate_documents,
)

# =============================================================================
# Packs and Configuration
# =============================================================================
from .packs import CatalogLoader, load_catalog, load_catalog_from_string
from .config import EngineSettings, FeatureFlags
from .canon import compute_catalog_hash

# =============================================================================
# Exceptions
# =============================================================================
from .exceptions import (
    ApplicantContextError,
    CatalogLoadError,
    CatalogNotFoundError,
    CatalogValidationError,
    CatalogVersionMismatch,
    ConditionEvaluationError,
    EnrollPilotError,
    OverrideError,
    OverrideNotPermittedError,
    OverrideReasonRequiredError,
)

__all__ = [
    "__version__",
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
    # Engine
    "CARRIER_GROUP_ID",
    "ConditionEvaluator",
    "DocumentValidator",
    "RequirementCatalog",
    "RequirementResolver",
    "SatisfactionChecker",
    "can_override",
    "evaluate_condition",
    "resolve_requirements",
    "validate_documents",
    # Packs and configuration
    "CatalogLoader",
    "load_catalog",
    "load_catalog_from_string",
    "EngineSettings",
    "FeatureFlags",
    "compute_catalog_hash",
    # Exceptions
    "EnrollPilotError",
    "CatalogLoadError",
    "CatalogValidationError",
    "CatalogVersionMismatch",
    "CatalogNotFoundError",
    "ApplicantContextError",
    "ConditionEvaluationError",
    "OverrideError",
    "OverrideNotPermittedError",
    "OverrideReasonRequiredError",
]
