"""
EnrollPilot Document Validation

Server-side validation of an applicant's uploads, with role-based
overrides for brokers and administrators.

Key features:
- Feature-flagged validation (disabled = vacuously valid)
- Missing-group labels and error messages for the enrollment flow
- Override permission by role and flag
- Audit logging of applied overrides
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Optional, Union

from ..config import EngineSettings, FeatureFlags
from ..exceptions import OverrideNotPermittedError, OverrideReasonRequiredError
from ..models import (
    ApplicantContext,
    DocumentStatus,
    OverrideRecord,
    RequirementGroup,
    UserRole,
    ValidationResult,
    ValidationStatus,
)
from .catalog import RequirementCatalog
from .condition_evaluator import ConditionEvaluator
from .resolver import RequirementResolver
from .satisfaction import document_status, status

logger = logging.getLogger(__name__)

_BROKER_ROLES = {UserRole.OWNER, UserRole.STAFF}


def _as_role(role: Union[str, UserRole, None]) -> Optional[UserRole]:
    if role is None or isinstance(role, UserRole):
        return role
    try:
        return UserRole(role.strip().lower())
    except ValueError:
        return None


def can_override(role: Union[str, UserRole, None], flags: FeatureFlags) -> bool:
    """
    Check whether a role may override missing document requirements.

    Admins need the admin_override flag; broker owners and staff need
    the broker_override flag. Every other role is refused.
    """
    parsed = _as_role(role)
    if parsed == UserRole.ADMIN:
        return flags.admin_override
    if parsed in _BROKER_ROLES:
        return flags.broker_override
    return False


@dataclass(frozen=True)
class DocumentValidator:
    """
    Validates uploads against the resolved requirements.

    Usage:
        validator = DocumentValidator.from_settings(catalog, settings)
        result = validator.validate(context)
        if not result.is_valid:
            print(result.errors)
    """
    resolver: RequirementResolver
    flags: FeatureFlags = field(default_factory=FeatureFlags)

    @classmethod
    def from_settings(
        cls,
        catalog: RequirementCatalog,
        settings: EngineSettings,
    ) -> DocumentValidator:
        """Wire a resolver and validator from engine settings."""
        resolver = RequirementResolver(
            catalog=catalog,
            evaluator=ConditionEvaluator(
                unknown_policy=settings.unknown_condition_policy
            ),
            unknown_carrier_policy=settings.unknown_carrier_policy,
            carrier_documents_enabled=settings.flags.carrier_specific_documents,
        )
        return cls(resolver=resolver, flags=settings.flags)

    @property
    def catalog(self) -> RequirementCatalog:
        return self.resolver.catalog

    def required_groups(self, context: ApplicantContext) -> tuple[RequirementGroup, ...]:
        """Resolve the groups for a context (empty when validation is off)."""
        if not self.flags.smart_documents:
            return ()
        return self.resolver.resolve(context)

    def status(self, context: ApplicantContext) -> ValidationStatus:
        """Compute the completion status for a context."""
        return status(self.required_groups(context), context.uploaded_document_types)

    def document_status(self, context: ApplicantContext, doc_type: str) -> DocumentStatus:
        """Get the status of one document type for a context."""
        return document_status(
            doc_type,
            self.required_groups(context),
            context.uploaded_document_types,
        )

    def validate(self, context: ApplicantContext) -> ValidationResult:
        """
        Validate an applicant's uploads.

        Returns a valid result with zero groups when smart document
        validation is disabled.
        """
        return ValidationResult.from_status(self.status(context))

    def can_override(self, role: Union[str, UserRole, None]) -> bool:
        """Check whether a role may override requirements."""
        return can_override(role, self.flags)

    def validate_with_override(
        self,
        context: ApplicantContext,
        role: Union[str, UserRole, None],
        reason: Optional[str] = None,
        overridden_by: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate, applying an override when one is allowed.

        An invalid result becomes valid only if the role may override and
        a non-blank reason is given. Otherwise the plain result is returned.
        """
        result = self.validate(context)
        if result.is_valid or not self.can_override(role) or not (reason and reason.strip()):
            return result

        record = self._record_override(role, reason, overridden_by, context.company_id)
        return replace(
            result,
            is_valid=True,
            errors=[f"Override applied by {record.role}: {record.reason}"],
            override=record,
        )

    def apply_override(
        self,
        role: Union[str, UserRole, None],
        reason: Optional[str],
        overridden_by: Optional[str] = None,
        company_id: Optional[str] = None,
    ) -> OverrideRecord:
        """
        Record an override of a company's document requirements.

        Raises:
            OverrideNotPermittedError: If the role may not override
            OverrideReasonRequiredError: If the reason is blank
        """
        if not self.can_override(role):
            raise OverrideNotPermittedError(
                message="Insufficient permissions for override",
                details={"role": str(getattr(role, "value", role))},
                company_id=company_id,
            )
        if not reason or not reason.strip():
            raise OverrideReasonRequiredError(
                message="Override reason is required",
                company_id=company_id,
            )
        return self._record_override(role, reason, overridden_by, company_id)

    def _record_override(
        self,
        role: Union[str, UserRole, None],
        reason: str,
        overridden_by: Optional[str],
        company_id: Optional[str],
    ) -> OverrideRecord:
        parsed = _as_role(role)
        record = OverrideRecord(
            role=parsed.value if parsed else str(role),
            reason=reason.strip(),
            overridden_by=overridden_by,
            company_id=company_id,
        )
        logger.info(
            "Document requirements overridden: %s",
            record.reason,
            extra={
                "company_id": company_id,
                "role": record.role,
                "overridden_by": overridden_by,
            },
        )
        return record


# =============================================================================
# Convenience Functions
# =============================================================================

def validate_documents(
    catalog: RequirementCatalog,
    context: ApplicantContext,
    settings: Optional[EngineSettings] = None,
) -> ValidationResult:
    """
    Validate an applicant's uploads.

    Convenience function that creates a temporary validator.
    """
    validator = DocumentValidator.from_settings(catalog, settings or EngineSettings())
    return validator.validate(context)
