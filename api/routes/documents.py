"""Server-side document validation and override endpoints."""

import logging

from fastapi import APIRouter

from api.schemas.requests import OverrideRequest, ValidateDocumentsRequest
from api.schemas.responses import OverrideInfo, OverrideResponse, ValidationResponse
from enrollpilot.engine import DocumentValidator

router = APIRouter(tags=["Documents"])

logger = logging.getLogger("enrollpilot.api")

# Shared validator (set by main.py)
validator: DocumentValidator = None


def set_validator(v: DocumentValidator):
    global validator
    validator = v


@router.post("/validate-documents", response_model=ValidationResponse)
async def validate_documents(request: ValidateDocumentsRequest):
    """
    Validate an applicant's uploads before submission.

    When role and override_reason are given and the role may override,
    an invalid result is returned as valid with the override noted in
    errors.
    """
    context = request.context.to_context()
    if request.role and request.override_reason:
        result = validator.validate_with_override(
            context,
            role=request.role,
            reason=request.override_reason,
            overridden_by=request.overridden_by,
        )
    else:
        result = validator.validate(context)

    logger.info(
        "Validated documents: %s",
        "valid" if result.is_valid else "incomplete",
        extra={
            "company_id": context.company_id,
            "satisfied_groups": result.satisfied_groups,
            "total_groups": result.total_groups,
        },
    )
    return ValidationResponse(**result.to_dict())


@router.post("/admin/document-override", response_model=OverrideResponse)
async def document_override(request: OverrideRequest):
    """
    Override a company's document requirements.

    Returns 403 when the role may not override and 400 when the reason
    is blank.
    """
    record = validator.apply_override(
        role=request.role,
        reason=request.reason,
        overridden_by=request.overridden_by,
        company_id=request.company_id,
    )
    return OverrideResponse(
        success=True,
        message="Document requirements overridden successfully",
        override=OverrideInfo(**record.to_dict()),
    )
