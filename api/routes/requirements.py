"""Requirement resolution and status endpoints."""

from fastapi import APIRouter

from api.routes.catalog import group_summary
from api.schemas.requests import ApplicantContextInput, DocumentStatusRequest
from api.schemas.responses import (
    DocumentStatusResponse, GroupStatus, ResolveResponse, StatusResponse
)
from enrollpilot.engine import DocumentValidator, is_group_satisfied, status

router = APIRouter(prefix="/requirements", tags=["Requirements"])

# Shared validator and catalog hash (set by main.py)
validator: DocumentValidator = None
catalog_hash: str = ""


def set_validator(v: DocumentValidator, c_hash: str):
    global validator, catalog_hash
    validator = v
    catalog_hash = c_hash


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_requirements(request: ApplicantContextInput):
    """
    Resolve the requirement groups that apply to an applicant.

    Groups come back in a fixed order: base groups, then conditional
    groups whose condition holds, then the selected carrier's group.
    """
    context = request.to_context()
    groups = validator.required_groups(context)
    return ResolveResponse(
        catalog_id=validator.catalog.id,
        catalog_hash=catalog_hash,
        groups=[group_summary(g) for g in groups],
    )


@router.post("/status", response_model=StatusResponse)
async def requirement_status(request: ApplicantContextInput):
    """Get completion status of an applicant's uploads, group by group."""
    context = request.to_context()
    groups = validator.required_groups(context)
    uploaded = context.uploaded_document_types
    result = status(groups, uploaded)

    return StatusResponse(
        **result.to_dict(),
        groups=[
            GroupStatus(
                id=g.id,
                label=g.label,
                satisfied=is_group_satisfied(g, uploaded),
            )
            for g in groups
        ],
    )


@router.post("/document-status", response_model=DocumentStatusResponse)
async def document_status(request: DocumentStatusRequest):
    """Get upload and requirement status of one document type."""
    result = validator.document_status(request.context.to_context(), request.document_type)
    return DocumentStatusResponse(
        document_type=result.document_type,
        is_uploaded=result.is_uploaded,
        is_required=result.is_required,
    )
