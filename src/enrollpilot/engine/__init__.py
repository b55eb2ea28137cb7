"""
EnrollPilot Engine

Document-requirement resolution:

- ConditionEvaluator: named conditions -> bool (unknown names per policy)
- RequirementCatalog: configured base, conditional and carrier requirements
- RequirementResolver: catalog + context -> ordered requirement groups
- SatisfactionChecker: groups + uploads -> ValidationStatus
- DocumentValidator: validation result and role-based overrides

Usage:
    from enrollpilot.engine import RequirementResolver, SatisfactionChecker

    resolver = RequirementResolver(catalog)
    groups = resolver.resolve(context)
    status = SatisfactionChecker().status(groups, context.uploaded_document_types)
"""
from __future__ import annotations

from .catalog import RequirementCatalog
from .condition_evaluator import (
    PREDICATES,
    ConditionEvaluator,
    evaluate_condition,
)
from .resolver import (
    CARRIER_GROUP_ID,
    RequirementResolver,
    build_carrier_group,
    resolve_requirements,
)
from .satisfaction import (
    SatisfactionChecker,
    document_status,
    is_group_satisfied,
    status,
)
from .validation import (
    DocumentValidator,
    can_override,
    validate_documents,
)

__all__ = [
    # Catalog
    "RequirementCatalog",
    # Conditions
    "PREDICATES",
    "ConditionEvaluator",
    "evaluate_condition",
    # Resolution
    "CARRIER_GROUP_ID",
    "RequirementResolver",
    "build_carrier_group",
    "resolve_requirements",
    # Satisfaction
    "SatisfactionChecker",
    "document_status",
    "is_group_satisfied",
    "status",
    # Validation
    "DocumentValidator",
    "can_override",
    "validate_documents",
]
