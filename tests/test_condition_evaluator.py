"""
Tests for EnrollPilot Condition Evaluator

Tests cover:
- Condition name parsing and normalisation
- Predicates for prior coverage, employee count and missing documents
- TriBool evaluation of unrecognised names
- Unknown-condition policy
"""
import pytest

from enrollpilot.engine.condition_evaluator import (
    PREDICATES,
    ConditionEvaluator,
    check_predicates,
    evaluate_condition,
)
from enrollpilot.exceptions import ConditionEvaluationError
from enrollpilot.models import (
    ConditionKind,
    ConditionRef,
    TriBool,
    UnknownRulePolicy,
)

from tests.conftest import make_context


# =============================================================================
# Parsing
# =============================================================================

class TestConditionParsing:
    """Condition names parse to a closed set of kinds."""

    @pytest.mark.parametrize("name", [
        "hasPriorCoverage",
        "has prior coverage",
        "has_prior_coverage",
        "HAS-PRIOR-COVERAGE",
    ])
    def test_prior_coverage_spellings(self, name):
        ref = ConditionRef.parse(name)
        assert ref is not None
        assert ref.kind == ConditionKind.HAS_PRIOR_COVERAGE

    @pytest.mark.parametrize("name,threshold", [
        ("employeeCount > 50", 50),
        ("employeeCount>100", 100),
        ("employee count over 50", 50),
        ("employee_count greater than 20", 20),
    ])
    def test_employee_count_spellings(self, name, threshold):
        ref = ConditionRef.parse(name)
        assert ref.kind == ConditionKind.EMPLOYEE_COUNT_OVER
        assert ref.threshold == threshold

    @pytest.mark.parametrize("name,document", [
        ("missingDE9C", "DE9C"),
        ("missing DE-9C", "DE-9C"),
        ("document DE-9C still missing", "DE-9C"),
        ("document Business License missing", "Business License"),
    ])
    def test_missing_document_spellings(self, name, document):
        ref = ConditionRef.parse(name)
        assert ref.kind == ConditionKind.DOCUMENT_MISSING
        assert ref.document_type == document

    @pytest.mark.parametrize("name", ["", "   ", "isNonprofit", "employeeCount < 5"])
    def test_unrecognized(self, name):
        assert ConditionRef.parse(name) is None


# =============================================================================
# Predicates
# =============================================================================

class TestPredicates:
    """Recognised conditions evaluate against the context."""

    @pytest.fixture
    def evaluator(self):
        return ConditionEvaluator()

    @pytest.mark.parametrize("value,expected", [(True, True), (False, False), (None, False)])
    def test_prior_coverage(self, evaluator, value, expected):
        context = make_context(has_prior_coverage=value)
        assert evaluator.evaluate("hasPriorCoverage", context) is expected

    @pytest.mark.parametrize("count,expected", [(None, False), (0, False), (50, False), (51, True)])
    def test_employee_count(self, evaluator, count, expected):
        context = make_context(employee_count=count)
        assert evaluator.evaluate("employeeCount > 50", context) is expected

    def test_missing_document_true_without_upload(self, evaluator):
        assert evaluator.evaluate("missingDE9C", make_context()) is True

    @pytest.mark.parametrize("uploaded", ["DE-9C", "DE9C", "de 9c"])
    def test_missing_document_matches_loosely(self, evaluator, uploaded):
        context = make_context(uploaded={uploaded})
        assert evaluator.evaluate("missingDE9C", context) is False

    def test_detailed_explanation(self, evaluator):
        result = evaluator.evaluate_detailed("employeeCount > 50", make_context(employee_count=60))
        assert result.value == TriBool.TRUE
        assert result.is_satisfied
        assert result.kind == ConditionKind.EMPLOYEE_COUNT_OVER
        assert result.explanation == "employee count over 50: PASSED"


# =============================================================================
# Unknown Conditions
# =============================================================================

class TestUnknownConditions:
    """Unrecognised names are UNKNOWN and resolved by policy."""

    def test_detailed_is_unknown(self):
        result = ConditionEvaluator().evaluate_detailed("isNonprofit", make_context())
        assert result.value == TriBool.UNKNOWN
        assert not result.is_recognized
        assert not result.is_satisfied

    def test_fail_open_is_false(self):
        assert ConditionEvaluator().evaluate("isNonprofit", make_context()) is False

    def test_fail_closed_is_true(self):
        evaluator = ConditionEvaluator(unknown_policy=UnknownRulePolicy.FAIL_CLOSED)
        assert evaluator.evaluate("isNonprofit", make_context()) is True

    def test_fail_closed_does_not_change_known_conditions(self):
        evaluator = ConditionEvaluator(unknown_policy=UnknownRulePolicy.FAIL_CLOSED)
        assert evaluator.evaluate("hasPriorCoverage", make_context(has_prior_coverage=False)) is False

    def test_unknown_is_logged(self, caplog):
        with caplog.at_level("WARNING", logger="enrollpilot.engine.condition_evaluator"):
            ConditionEvaluator().evaluate("isNonprofit", make_context())
        assert "isNonprofit" in caplog.text

    def test_unrecognized_names(self):
        names = ["hasPriorCoverage", None, "isNonprofit", "missingDE9C", "bogus"]
        assert ConditionEvaluator().unrecognized(names) == ["isNonprofit", "bogus"]

    def test_convenience_function(self):
        context = make_context(has_prior_coverage=True)
        assert evaluate_condition("hasPriorCoverage", context) is True
        assert evaluate_condition(
            "isNonprofit", context, unknown_policy=UnknownRulePolicy.FAIL_CLOSED
        ) is True


# =============================================================================
# TriBool and Predicate Table
# =============================================================================

class TestTriBool:
    """Three-valued outcomes."""

    @pytest.mark.parametrize("value,expected", [
        (True, TriBool.TRUE),
        (False, TriBool.FALSE),
        (None, TriBool.UNKNOWN),
    ])
    def test_from_bool(self, value, expected):
        assert TriBool.from_bool(value) == expected

    def test_is_known(self):
        assert TriBool.TRUE.is_known()
        assert TriBool.FALSE.is_known()
        assert not TriBool.UNKNOWN.is_known()


class TestPredicateTable:
    """Every condition kind has a predicate."""

    def test_every_kind_registered(self):
        assert set(PREDICATES) == set(ConditionKind)

    def test_missing_predicate_rejected(self):
        partial = {k: v for k, v in PREDICATES.items() if k != ConditionKind.DOCUMENT_MISSING}
        with pytest.raises(ConditionEvaluationError) as exc_info:
            check_predicates(partial)
        assert exc_info.value.details["missing"] == ["document_missing"]
