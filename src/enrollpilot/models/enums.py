"""
EnrollPilot Enumerations

All enumeration types used by the document-requirement engine.

All enums inherit from (str, Enum) for JSON serialization compatibility.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Satisfaction Mode
# =============================================================================

class SatisfactionMode(str, Enum):
    """
    How a requirement group is satisfied by uploaded documents.

    ANY_ONE groups are the "upload one of N" groups (e.g. proof of payroll).
    ALL_REQUIRED groups need every requirement flagged required.
    """
    ALL_REQUIRED = "all_required"
    ANY_ONE = "any_one"


# =============================================================================
# Conditions
# =============================================================================

class ConditionKind(str, Enum):
    """
    Closed set of predicates a requirement group can be gated on.

    Condition names in catalog packs are parsed into one of these kinds.
    Anything that does not parse is unrecognised.
    """
    HAS_PRIOR_COVERAGE = "has_prior_coverage"
    EMPLOYEE_COUNT_OVER = "employee_count_over"
    DOCUMENT_MISSING = "document_missing"


class UnknownRulePolicy(str, Enum):
    """
    What to do with a rule the engine does not recognise.

    FAIL_OPEN never requires documents based on an unknown rule.
    FAIL_CLOSED treats the unknown rule as applying.
    """
    FAIL_OPEN = "fail_open"
    FAIL_CLOSED = "fail_closed"


# =============================================================================
# Document State
# =============================================================================

class DocumentState(str, Enum):
    """Logical upload state of a single document type."""
    NOT_UPLOADED = "not_uploaded"
    UPLOADED = "uploaded"


# =============================================================================
# User Roles
# =============================================================================

class UserRole(str, Enum):
    """Roles of the enrollment application that matter for overrides."""
    ADMIN = "admin"
    OWNER = "owner"              # Broker agency owner
    STAFF = "staff"              # Broker staff
    EMPLOYER = "employer"
    EMPLOYEE = "employee"
