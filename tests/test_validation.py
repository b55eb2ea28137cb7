"""
Tests for EnrollPilot Document Validation

Tests cover:
- Validation results and error messages
- Feature flags
- Override permissions by role
- Validation with override
- Applying overrides
- Settings from environment
"""
from pathlib import Path

import pytest

from enrollpilot.config import DEFAULT_CATALOG_PATH, EngineSettings, FeatureFlags
from enrollpilot.engine import (
    CARRIER_GROUP_ID,
    DocumentValidator,
    RequirementResolver,
    can_override,
    validate_documents,
)
from enrollpilot.exceptions import (
    OverrideError,
    OverrideNotPermittedError,
    OverrideReasonRequiredError,
)
from enrollpilot.models import UnknownRulePolicy, UserRole

from tests.conftest import make_catalog, make_context, make_group


def make_validator(catalog=None, **flags) -> DocumentValidator:
    return DocumentValidator(
        resolver=RequirementResolver(catalog or make_catalog()),
        flags=FeatureFlags(**flags),
    )


COMPLETE_UPLOADS = {"DE-9C", "Business License"}


# =============================================================================
# Validation
# =============================================================================

class TestValidate:
    """Server-side validation of uploads."""

    def test_missing_groups_reported_by_label(self):
        result = make_validator().validate(make_context(uploaded={"DE-9C"}))
        assert result.is_valid is False
        assert result.missing_requirements == ["Business Documentation"]
        assert result.errors == ["Missing required documents: Business Documentation"]
        assert result.satisfied_groups == 1
        assert result.total_groups == 2

    def test_complete_uploads_are_valid(self):
        result = make_validator().validate(make_context(uploaded=COMPLETE_UPLOADS))
        assert result.is_valid is True
        assert result.errors == []

    def test_smart_documents_off_is_vacuously_valid(self):
        validator = make_validator(smart_documents=False)
        result = validator.validate(make_context())
        assert result.is_valid is True
        assert result.total_groups == 0
        assert result.satisfied_groups == 0

    def test_document_status_when_smart_documents_off(self):
        validator = make_validator(smart_documents=False)
        status = validator.document_status(make_context(), "DE-9C")
        assert status.is_required is False

    def test_carrier_group_counts(self):
        context = make_context(selected_carrier="Kaiser", uploaded=COMPLETE_UPLOADS)
        result = make_validator().validate(context)
        assert result.is_valid is False
        assert result.missing_requirements == ["Kaiser Requirements"]

    def test_from_settings_applies_flags_and_policies(self):
        catalog = make_catalog(
            conditional=[make_group("nonprofit", ["501c3 Letter"], condition="isNonprofit")],
        )
        settings = EngineSettings(
            unknown_condition_policy=UnknownRulePolicy.FAIL_CLOSED,
            flags=FeatureFlags(carrier_specific_documents=False),
        )
        validator = DocumentValidator.from_settings(catalog, settings)
        groups = validator.required_groups(make_context(selected_carrier="Kaiser"))
        ids = [g.id for g in groups]
        assert "nonprofit" in ids
        assert CARRIER_GROUP_ID not in ids
        assert validator.catalog is catalog

    def test_convenience_function(self):
        result = validate_documents(make_catalog(), make_context(uploaded=COMPLETE_UPLOADS))
        assert result.is_valid is True


# =============================================================================
# Override Permissions
# =============================================================================

class TestCanOverride:
    """Who may override missing documents."""

    @pytest.mark.parametrize("role,expected", [
        ("admin", True),
        ("owner", True),
        ("staff", True),
        ("employer", False),
        ("employee", False),
        ("auditor", False),
        (None, False),
        (UserRole.ADMIN, True),
        (" Admin ", True),
    ])
    def test_default_flags(self, role, expected):
        assert can_override(role, FeatureFlags()) is expected

    def test_admin_needs_admin_flag(self):
        flags = FeatureFlags(admin_override=False)
        assert can_override("admin", flags) is False
        assert can_override("owner", flags) is True

    def test_broker_needs_broker_flag(self):
        flags = FeatureFlags(broker_override=False)
        assert can_override("owner", flags) is False
        assert can_override("staff", flags) is False
        assert can_override("admin", flags) is True


# =============================================================================
# Validation With Override
# =============================================================================

class TestValidateWithOverride:
    """Overrides turn an invalid result valid."""

    def test_override_applied(self):
        result = make_validator().validate_with_override(
            make_context(), role="staff", reason="EDD letter on file", overridden_by="7"
        )
        assert result.is_valid is True
        assert result.is_overridden
        assert result.errors == ["Override applied by staff: EDD letter on file"]
        assert result.missing_requirements == ["Proof of Payroll", "Business Documentation"]
        assert result.override.overridden_by == "7"
        assert result.override.company_id == "42"

    @pytest.mark.parametrize("role,reason", [
        ("employer", "please"),
        ("admin", ""),
        ("admin", "   "),
        ("admin", None),
    ])
    def test_override_not_applied(self, role, reason):
        result = make_validator().validate_with_override(make_context(), role=role, reason=reason)
        assert result.is_valid is False
        assert result.override is None
        assert result.errors[0].startswith("Missing required documents:")

    def test_override_not_needed_when_valid(self):
        result = make_validator().validate_with_override(
            make_context(uploaded=COMPLETE_UPLOADS), role="admin", reason="not needed"
        )
        assert result.is_valid is True
        assert result.override is None

    def test_override_disabled_by_flag(self):
        validator = make_validator(admin_override=False)
        result = validator.validate_with_override(make_context(), role="admin", reason="x")
        assert result.is_valid is False


# =============================================================================
# Applying Overrides
# =============================================================================

class TestApplyOverride:
    """Recorded overrides and their errors."""

    def test_record(self, caplog):
        with caplog.at_level("INFO", logger="enrollpilot.engine.validation"):
            record = make_validator().apply_override(
                "admin", "  Carrier accepted late DE-9C  ", overridden_by="1", company_id="42"
            )
        assert record.role == "admin"
        assert record.reason == "Carrier accepted late DE-9C"
        assert record.company_id == "42"
        assert "Carrier accepted late DE-9C" in caplog.text

    def test_not_permitted(self):
        with pytest.raises(OverrideNotPermittedError) as exc_info:
            make_validator().apply_override("employee", "reason", company_id="42")
        assert exc_info.value.code == "EP_OVERRIDE_NOT_PERMITTED"
        assert isinstance(exc_info.value, OverrideError)

    def test_permission_checked_before_reason(self):
        with pytest.raises(OverrideNotPermittedError):
            make_validator().apply_override("employee", "")

    @pytest.mark.parametrize("reason", ["", "   ", None])
    def test_reason_required(self, reason):
        with pytest.raises(OverrideReasonRequiredError):
            make_validator().apply_override("owner", reason)


# =============================================================================
# Settings
# =============================================================================

class TestEngineSettings:
    """Settings read from EP_* variables."""

    def test_defaults(self):
        settings = EngineSettings.from_env({})
        assert settings.catalog_path == DEFAULT_CATALOG_PATH
        assert settings.unknown_condition_policy == UnknownRulePolicy.FAIL_OPEN
        assert settings.unknown_carrier_policy == UnknownRulePolicy.FAIL_OPEN
        assert settings.strict_conditions is False
        assert settings.log_level == "INFO"
        assert settings.flags == FeatureFlags()

    def test_default_catalog_exists(self):
        assert DEFAULT_CATALOG_PATH.exists()

    def test_from_env(self):
        settings = EngineSettings.from_env({
            "EP_CATALOG_PATH": "/tmp/pack.yaml",
            "EP_UNKNOWN_CONDITION_POLICY": "FAIL_CLOSED",
            "EP_UNKNOWN_CARRIER_POLICY": "fail_closed",
            "EP_STRICT_CONDITIONS": "yes",
            "EP_LOG_LEVEL": "debug",
            "EP_SMART_DOCUMENTS": "false",
            "EP_BROKER_OVERRIDE": "0",
            "EP_CORS_ORIGINS": "https://app.example.com, http://localhost:3000",
        })
        assert settings.catalog_path == Path("/tmp/pack.yaml")
        assert settings.unknown_condition_policy == UnknownRulePolicy.FAIL_CLOSED
        assert settings.unknown_carrier_policy == UnknownRulePolicy.FAIL_CLOSED
        assert settings.strict_conditions is True
        assert settings.log_level == "DEBUG"
        assert settings.flags.smart_documents is False
        assert settings.flags.broker_override is False
        assert settings.flags.admin_override is True
        assert settings.cors_origins == ("https://app.example.com", "http://localhost:3000")

    def test_bad_policy(self):
        with pytest.raises(ValueError):
            EngineSettings.from_env({"EP_UNKNOWN_CARRIER_POLICY": "maybe"})
