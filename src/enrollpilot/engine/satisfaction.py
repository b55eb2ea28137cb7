"""
EnrollPilot Satisfaction Checker

Evaluates resolved requirement groups against uploaded document types.

Rules:
- ANY_ONE: satisfied when any requirement type has been uploaded
- ALL_REQUIRED: satisfied when every required type has been uploaded;
  non-required entries never block
- No groups means nothing is required: the status is complete
"""
from __future__ import annotations

from typing import AbstractSet, Sequence

from ..models import (
    DocumentStatus,
    RequirementGroup,
    SatisfactionMode,
    ValidationStatus,
)


def is_group_satisfied(group: RequirementGroup, uploaded: AbstractSet[str]) -> bool:
    """
    Check whether uploads satisfy one group.

    Args:
        group: A resolved requirement group
        uploaded: Uploaded document types

    Returns:
        True if the group's satisfaction rule is met
    """
    if group.satisfaction_mode == SatisfactionMode.ANY_ONE:
        return any(doc_type in uploaded for doc_type in group.document_types)
    return all(doc_type in uploaded for doc_type in group.required_types)


def status(
    groups: Sequence[RequirementGroup],
    uploaded: AbstractSet[str],
) -> ValidationStatus:
    """
    Compute the completion status of resolved groups.

    Args:
        groups: Resolved groups, in resolution order
        uploaded: Uploaded document types

    Returns:
        ValidationStatus with unsatisfied groups in input order
    """
    missing = tuple(g for g in groups if not is_group_satisfied(g, uploaded))
    return ValidationStatus(
        is_complete=not missing,
        satisfied_group_count=len(groups) - len(missing),
        total_group_count=len(groups),
        missing_groups=missing,
    )


def document_status(
    doc_type: str,
    groups: Sequence[RequirementGroup],
    uploaded: AbstractSet[str],
) -> DocumentStatus:
    """Get upload and requirement status of a single document type."""
    return DocumentStatus(
        document_type=doc_type,
        is_uploaded=doc_type in uploaded,
        is_required=any(doc_type in g.document_types for g in groups),
    )


class SatisfactionChecker:
    """
    Object wrapper over the satisfaction functions.

    Usage:
        checker = SatisfactionChecker()
        result = checker.status(groups, context.uploaded_document_types)
        if not result.is_complete:
            print("Missing:", result.missing_labels)
    """

    def is_group_satisfied(
        self,
        group: RequirementGroup,
        uploaded: AbstractSet[str],
    ) -> bool:
        """Check whether uploads satisfy one group."""
        return is_group_satisfied(group, uploaded)

    def status(
        self,
        groups: Sequence[RequirementGroup],
        uploaded: AbstractSet[str],
    ) -> ValidationStatus:
        """Compute the completion status of resolved groups."""
        return status(groups, uploaded)

    def document_status(
        self,
        doc_type: str,
        groups: Sequence[RequirementGroup],
        uploaded: AbstractSet[str],
    ) -> DocumentStatus:
        """Get upload and requirement status of a single document type."""
        return document_status(doc_type, groups, uploaded)
