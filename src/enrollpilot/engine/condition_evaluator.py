"""
EnrollPilot Condition Evaluator

Evaluates named conditions against an applicant context.

Key features:
- Closed set of condition kinds, each backed by a typed predicate
- TriBool evaluation: unrecognised names are UNKNOWN, never an exception
- Configurable handling of UNKNOWN (fail open or fail closed)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..exceptions import ConditionEvaluationError
from ..models import (
    ApplicantContext,
    ConditionKind,
    ConditionRef,
    EvaluationResult,
    TriBool,
    UnknownRulePolicy,
    normalize_token,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Predicates
# =============================================================================

def has_prior_coverage(ref: ConditionRef, context: ApplicantContext) -> bool:
    """True only when prior coverage is explicitly reported."""
    return context.has_prior_coverage is True


def employee_count_over(ref: ConditionRef, context: ApplicantContext) -> bool:
    """True when the employee count exceeds the threshold (unset counts as 0)."""
    return (context.employee_count or 0) > (ref.threshold or 0)


def document_missing(ref: ConditionRef, context: ApplicantContext) -> bool:
    """True when no uploaded type matches the referenced document."""
    wanted = normalize_token(ref.document_type or "")
    return not any(
        normalize_token(uploaded) == wanted
        for uploaded in context.uploaded_document_types
    )


Predicate = Callable[[ConditionRef, ApplicantContext], bool]

PREDICATES: dict[ConditionKind, Predicate] = {
    ConditionKind.HAS_PRIOR_COVERAGE: has_prior_coverage,
    ConditionKind.EMPLOYEE_COUNT_OVER: employee_count_over,
    ConditionKind.DOCUMENT_MISSING: document_missing,
}


def check_predicates(predicates: dict[ConditionKind, Predicate]) -> None:
    """Raise ConditionEvaluationError unless every ConditionKind has a predicate."""
    missing = sorted(kind.value for kind in ConditionKind if kind not in predicates)
    if missing:
        raise ConditionEvaluationError(
            message=f"No predicate registered for: {', '.join(missing)}",
            details={"missing": missing},
        )


check_predicates(PREDICATES)


# =============================================================================
# Condition Evaluator
# =============================================================================

@dataclass(frozen=True)
class ConditionEvaluator:
    """
    Evaluates named conditions against an applicant context.

    Usage:
        evaluator = ConditionEvaluator()
        if evaluator.evaluate("hasPriorCoverage", context):
            ...

        result = evaluator.evaluate_detailed("employeeCount > 50", context)
        print(result.explanation)

    An unrecognised condition name evaluates to UNKNOWN. evaluate() maps
    UNKNOWN to False under FAIL_OPEN (the default) and to True under
    FAIL_CLOSED.
    """

    unknown_policy: UnknownRulePolicy = UnknownRulePolicy.FAIL_OPEN

    def evaluate(self, condition_name: str, context: ApplicantContext) -> bool:
        """
        Evaluate a condition name to a plain bool.

        Args:
            condition_name: Name as written in the catalog
            context: The applicant context

        Returns:
            True if the condition holds (or is unknown under FAIL_CLOSED)
        """
        result = self.evaluate_detailed(condition_name, context)
        if result.value == TriBool.UNKNOWN:
            return self.unknown_policy == UnknownRulePolicy.FAIL_CLOSED
        return result.value == TriBool.TRUE

    def evaluate_detailed(
        self,
        condition_name: str,
        context: ApplicantContext,
    ) -> EvaluationResult:
        """
        Evaluate a condition name with three-valued logic.

        Returns:
            EvaluationResult with TriBool value and explanation
        """
        ref = ConditionRef.parse(condition_name)
        if ref is None:
            logger.warning(
                "Unrecognized condition %r, applying %s",
                condition_name,
                self.unknown_policy.value,
            )
            return EvaluationResult(
                condition_name=condition_name,
                value=TriBool.UNKNOWN,
                explanation=f"{condition_name}: UNKNOWN (unrecognized condition)",
            )

        value = TriBool.from_bool(PREDICATES[ref.kind](ref, context))
        outcome = "PASSED" if value == TriBool.TRUE else "FAILED"
        return EvaluationResult(
            condition_name=condition_name,
            value=value,
            explanation=f"{ref.describe()}: {outcome}",
            kind=ref.kind,
        )

    def is_recognized(self, condition_name: str) -> bool:
        """Check whether a condition name parses to a known kind."""
        return ConditionRef.parse(condition_name) is not None

    def unrecognized(self, condition_names: Iterable[Optional[str]]) -> list[str]:
        """
        Get the names that do not parse, in input order.

        None entries (unconditional items) are skipped.
        """
        return [
            name for name in condition_names
            if name is not None and not self.is_recognized(name)
        ]


# =============================================================================
# Convenience Functions
# =============================================================================

def evaluate_condition(
    condition_name: str,
    context: ApplicantContext,
    unknown_policy: UnknownRulePolicy = UnknownRulePolicy.FAIL_OPEN,
) -> bool:
    """
    Evaluate a condition name.

    Convenience function that creates a temporary evaluator.
    """
    return ConditionEvaluator(unknown_policy=unknown_policy).evaluate(
        condition_name, context
    )
