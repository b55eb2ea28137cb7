"""
EnrollPilot Requirement Resolver

Produces the ordered list of requirement groups that apply to one
applicant.

Output order is fixed:
1. Base groups (catalog order)
2. Conditional groups whose condition holds (catalog order)
3. The carrier group, if a carrier is selected and has addenda
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..models import (
    ApplicantContext,
    DocumentRequirement,
    RequirementGroup,
    SatisfactionMode,
    UnknownRulePolicy,
)
from .catalog import RequirementCatalog
from .condition_evaluator import ConditionEvaluator

logger = logging.getLogger(__name__)

CARRIER_GROUP_ID = "carrierSpecific"


def build_carrier_group(
    carrier: str,
    requirements: tuple[DocumentRequirement, ...],
) -> RequirementGroup:
    """Build the group holding a carrier's addenda."""
    return RequirementGroup(
        id=CARRIER_GROUP_ID,
        label=f"{carrier} Requirements",
        description=f"Additional documents required by {carrier}",
        requirements=requirements,
        satisfaction_mode=SatisfactionMode.ALL_REQUIRED,
        carrier=carrier,
    )


@dataclass(frozen=True)
class RequirementResolver:
    """
    Resolves the requirement groups applicable to an applicant.

    Usage:
        resolver = RequirementResolver(catalog)
        groups = resolver.resolve(context)

    Attributes:
        catalog: Injected requirement catalog
        evaluator: Condition evaluator for conditional groups and addenda
        unknown_carrier_policy: FAIL_OPEN omits the carrier group for unknown
            carriers; FAIL_CLOSED uses the catalog's fallback requirements
        carrier_documents_enabled: When False, no carrier group is appended
    """
    catalog: RequirementCatalog
    evaluator: ConditionEvaluator = field(default_factory=ConditionEvaluator)
    unknown_carrier_policy: UnknownRulePolicy = UnknownRulePolicy.FAIL_OPEN
    carrier_documents_enabled: bool = True

    def resolve(self, context: ApplicantContext) -> tuple[RequirementGroup, ...]:
        """
        Resolve the requirement groups for an applicant.

        Args:
            context: The applicant context (read-only)

        Returns:
            Ordered tuple of applicable requirement groups
        """
        groups: list[RequirementGroup] = list(self.catalog.base_groups())

        for group in self.catalog.conditional_groups():
            if group.condition is None:
                continue
            if self.evaluator.evaluate(group.condition, context):
                groups.append(group)

        carrier_group = self._resolve_carrier_group(context)
        if carrier_group is not None:
            groups.append(carrier_group)

        logger.debug(
            "Resolved %d requirement groups for company %s: %s",
            len(groups),
            context.company_id,
            [g.id for g in groups],
        )
        return tuple(groups)

    def _resolve_carrier_group(
        self,
        context: ApplicantContext,
    ) -> Optional[RequirementGroup]:
        carrier = context.selected_carrier
        if carrier is None or not self.carrier_documents_enabled:
            return None

        def applies(requirement: DocumentRequirement) -> bool:
            return self.evaluator.evaluate(requirement.condition, context)

        if self.catalog.has_carrier(carrier):
            requirements = self.catalog.carrier_addenda(carrier, applies)
        elif self.unknown_carrier_policy == UnknownRulePolicy.FAIL_CLOSED:
            logger.warning(
                "Unknown carrier %r, applying fallback requirements", carrier
            )
            requirements = self.catalog.unknown_carrier_requirements(applies)
        else:
            logger.info("Unknown carrier %r, no carrier requirements", carrier)
            requirements = ()

        if not requirements:
            return None
        return build_carrier_group(carrier, requirements)


# =============================================================================
# Convenience Functions
# =============================================================================

def resolve_requirements(
    catalog: RequirementCatalog,
    context: ApplicantContext,
) -> tuple[RequirementGroup, ...]:
    """
    Resolve requirement groups with default settings.

    Convenience function that creates a temporary resolver.
    """
    return RequirementResolver(catalog).resolve(context)
