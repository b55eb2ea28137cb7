"""
Tests for EnrollPilot Models

Tests cover:
- DocumentRequirement carrier scope
- RequirementGroup helpers
- ApplicantContext validation and upload transitions
- ValidationResult construction and serialisation
- Exception serialisation
"""
import pytest
from dataclasses import FrozenInstanceError

from enrollpilot.exceptions import (
    ApplicantContextError,
    EnrollPilotError,
    OverrideNotPermittedError,
)
from enrollpilot.models import (
    ApplicantContext,
    DocumentState,
    OverrideRecord,
    ValidationResult,
    ValidationStatus,
)

from tests.conftest import make_context, make_group, make_requirement


class TestDocumentRequirement:
    """Tests for DocumentRequirement."""

    def test_unscoped_applies_to_every_carrier(self):
        req = make_requirement("DE-9C")
        assert req.applies_to_carrier("Kaiser")
        assert req.applies_to_carrier(None)

    def test_scoped_applies_only_to_listed_carriers(self):
        req = make_requirement("Kaiser-GroupApp", carriers=["Kaiser"])
        assert req.applies_to_carrier("Kaiser")
        assert not req.applies_to_carrier("Anthem")
        assert not req.applies_to_carrier(None)

    def test_display_label_falls_back_to_type(self):
        req = make_requirement("DE-9C")
        assert req.display_label == "DE-9C"

    def test_is_immutable(self):
        req = make_requirement("DE-9C")
        with pytest.raises(FrozenInstanceError):
            req.required = False


class TestRequirementGroup:
    """Tests for RequirementGroup."""

    def test_list_requirements_become_tuple(self):
        group = make_group("businessDocs", ["Business License"])
        assert isinstance(group.requirements, tuple)
        assert hash(group)

    def test_required_types(self):
        group = make_group(
            "priorCoverage",
            requirements=[
                make_requirement("Current Carrier Bill"),
                make_requirement("Prior Carrier Renewal", required=False),
            ],
        )
        assert group.document_types == ("Current Carrier Bill", "Prior Carrier Renewal")
        assert group.required_types == ("Current Carrier Bill",)

    def test_get_requirement(self):
        group = make_group("payProof", ["DE-9C", "Payroll Register"])
        assert group.get_requirement("Payroll Register").type == "Payroll Register"
        assert group.get_requirement("W-2") is None

    def test_conditional_flag(self):
        assert make_group("priorCoverage", ["X"], condition="hasPriorCoverage").is_conditional
        assert not make_group("payProof", ["X"]).is_conditional


class TestApplicantContext:
    """Tests for ApplicantContext."""

    def test_negative_employee_count_rejected(self):
        with pytest.raises(ApplicantContextError) as exc_info:
            make_context(employee_count=-1)
        assert exc_info.value.code == "EP_APPLICANT_CONTEXT_ERROR"
        assert exc_info.value.company_id == "42"

    def test_uploads_coerced_to_frozenset(self):
        context = ApplicantContext(uploaded_document_types=["DE-9C", "DE-9C"])
        assert context.uploaded_document_types == frozenset({"DE-9C"})

    def test_blank_carrier_is_no_carrier(self):
        assert make_context(selected_carrier="  ").selected_carrier is None

    def test_from_uploads(self):
        context = ApplicantContext.from_uploads(
            [{"type": "DE-9C", "id": 1}, {"type": "Business License"}, {"name": "stray.pdf"}],
            selected_carrier="Kaiser",
        )
        assert context.uploaded_document_types == frozenset({"DE-9C", "Business License"})
        assert context.selected_carrier == "Kaiser"

    def test_upload_transitions(self):
        context = make_context()
        assert context.document_state("DE-9C") == DocumentState.NOT_UPLOADED

        uploaded = context.with_upload("DE-9C")
        assert uploaded.document_state("DE-9C") == DocumentState.UPLOADED
        assert context.document_state("DE-9C") == DocumentState.NOT_UPLOADED

        removed = uploaded.without_upload("DE-9C")
        assert removed.document_state("DE-9C") == DocumentState.NOT_UPLOADED

    def test_transitions_are_noops_when_unchanged(self):
        context = make_context(uploaded={"DE-9C"})
        assert context.with_upload("DE-9C") is context
        assert context.without_upload("W-2") is context


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_from_status(self):
        group = make_group("businessDocs", ["Business License"], label="Business Documentation")
        status = ValidationStatus(
            is_complete=False,
            satisfied_group_count=1,
            total_group_count=2,
            missing_groups=(group,),
        )
        result = ValidationResult.from_status(status)
        assert result.is_valid is False
        assert result.missing_requirements == ["Business Documentation"]
        assert result.errors == ["Missing required documents: Business Documentation"]
        assert result.satisfied_groups == 1
        assert result.total_groups == 2
        assert not result.is_overridden

    def test_to_dict_with_override(self):
        record = OverrideRecord(role="admin", reason="EDD delay", company_id="42")
        result = ValidationResult(is_valid=True, override=record)
        data = result.to_dict()
        assert data["is_valid"] is True
        assert data["override"]["role"] == "admin"
        assert data["override"]["overridden_at"] == record.overridden_at.isoformat()


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_to_dict(self):
        exc = OverrideNotPermittedError(
            message="Insufficient permissions for override",
            details={"role": "employee"},
            company_id="42",
        )
        assert isinstance(exc, EnrollPilotError)
        assert exc.to_dict() == {
            "code": "EP_OVERRIDE_NOT_PERMITTED",
            "message": "Insufficient permissions for override",
            "details": {"role": "employee"},
            "company_id": "42",
        }

    def test_str(self):
        exc = EnrollPilotError(message="boom")
        assert str(exc) == "[EP_INTERNAL_ERROR] boom"
