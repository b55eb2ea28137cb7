"""
EnrollPilot Named Conditions

Provides three-valued logic (TriBool) and the parsed form of the named
conditions that gate requirement groups.

Key components:
- TriBool: Three-valued condition outcome (TRUE, FALSE, UNKNOWN)
- ConditionRef: A condition name parsed into a closed ConditionKind
- EvaluationResult: Outcome of evaluating one named condition

Recognised condition names (case, spaces, '_' and '-' are ignored):
    hasPriorCoverage              -> HAS_PRIOR_COVERAGE
    employeeCount > 50            -> EMPLOYEE_COUNT_OVER(50)
    employee count over 50        -> EMPLOYEE_COUNT_OVER(50)
    missingDE9C                   -> DOCUMENT_MISSING("DE9C")
    document DE-9C still missing  -> DOCUMENT_MISSING("DE-9C")
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .enums import ConditionKind


# =============================================================================
# Three-Valued Logic (TriBool)
# =============================================================================

class TriBool(Enum):
    """
    Three-valued outcome of a named condition.

    - TRUE: Condition is definitely satisfied
    - FALSE: Condition is definitely not satisfied
    - UNKNOWN: Cannot determine (unrecognised condition)

    The evaluator turns UNKNOWN into a bool through an UnknownRulePolicy.
    """
    TRUE = True
    FALSE = False
    UNKNOWN = None

    @classmethod
    def from_bool(cls, value: Optional[bool]) -> TriBool:
        """Convert Python bool/None to TriBool."""
        if value is None:
            return cls.UNKNOWN
        return cls.TRUE if value else cls.FALSE

    def is_known(self) -> bool:
        """Check if value is known (not UNKNOWN)."""
        return self != TriBool.UNKNOWN


# =============================================================================
# Condition Name Parsing
# =============================================================================

_PRIOR_COVERAGE_TOKEN = "haspriorcoverage"
_EMPLOYEE_COUNT_RE = re.compile(r"^employeecount(?:>|over|greaterthan)(\d+)$")
_MISSING_PREFIX_RE = re.compile(r"^\s*missing[\s_-]*(?P<doc>\S.*?)\s*$", re.IGNORECASE)
_MISSING_SUFFIX_RE = re.compile(
    r"^\s*document\s+(?P<doc>\S.*?)\s+(?:still\s+)?missing\s*$", re.IGNORECASE
)


def normalize_token(value: str) -> str:
    """
    Reduce a name to lowercase alphanumerics.

    Used to compare condition names and document types loosely,
    so "DE-9C", "de 9c" and "DE9C" are the same document.
    """
    return "".join(ch for ch in value.lower() if ch.isalnum())


def _compact(value: str) -> str:
    """Lowercase and drop whitespace, '_' and '-' (keeps '>')."""
    return re.sub(r"[\s_\-]+", "", value.lower())


@dataclass(frozen=True)
class ConditionRef:
    """
    A condition name parsed into its kind and typed argument.

    Attributes:
        name: The condition name as written in the catalog
        kind: Which predicate this name refers to
        threshold: Employee count threshold (EMPLOYEE_COUNT_OVER only)
        document_type: Document that must still be missing (DOCUMENT_MISSING only)
    """
    name: str
    kind: ConditionKind
    threshold: Optional[int] = None
    document_type: Optional[str] = None

    @classmethod
    def parse(cls, name: str) -> Optional[ConditionRef]:
        """
        Parse a condition name.

        Returns None when the name does not refer to any known predicate.
        """
        if not name or not name.strip():
            return None

        compact = _compact(name)
        if compact == _PRIOR_COVERAGE_TOKEN:
            return cls(name=name, kind=ConditionKind.HAS_PRIOR_COVERAGE)

        match = _EMPLOYEE_COUNT_RE.match(compact)
        if match:
            return cls(
                name=name,
                kind=ConditionKind.EMPLOYEE_COUNT_OVER,
                threshold=int(match.group(1)),
            )

        match = _MISSING_SUFFIX_RE.match(name) or _MISSING_PREFIX_RE.match(name)
        if match:
            return cls(
                name=name,
                kind=ConditionKind.DOCUMENT_MISSING,
                document_type=match.group("doc"),
            )

        return None

    def describe(self) -> str:
        """Human-readable description of the predicate."""
        if self.kind == ConditionKind.HAS_PRIOR_COVERAGE:
            return "applicant has prior coverage"
        if self.kind == ConditionKind.EMPLOYEE_COUNT_OVER:
            return f"employee count over {self.threshold}"
        return f"document {self.document_type} still missing"


# =============================================================================
# Evaluation Result
# =============================================================================

@dataclass(frozen=True)
class EvaluationResult:
    """
    Result of evaluating a named condition.

    value is UNKNOWN only when the name did not parse; callers decide
    what UNKNOWN means through an UnknownRulePolicy.
    """
    condition_name: str
    value: TriBool
    explanation: str
    kind: Optional[ConditionKind] = None

    @property
    def is_satisfied(self) -> bool:
        """Check if condition is satisfied (TRUE)."""
        return self.value == TriBool.TRUE

    @property
    def is_recognized(self) -> bool:
        """Check if the condition name was recognised."""
        return self.value.is_known()
