"""Catalog pack endpoints."""

from fastapi import APIRouter

from api.schemas.responses import (
    CarrierSummary, CatalogSummary, GroupSummary, RequirementSummary
)
from enrollpilot.engine import RequirementCatalog
from enrollpilot.exceptions import CatalogNotFoundError
from enrollpilot.models import DocumentRequirement, RequirementGroup

router = APIRouter(prefix="/catalog", tags=["Catalog"])

# Shared catalog (set by main.py)
catalog: RequirementCatalog = None
catalog_hash: str = ""


def set_catalog(c: RequirementCatalog, c_hash: str):
    global catalog, catalog_hash
    catalog = c
    catalog_hash = c_hash


def requirement_summary(r: DocumentRequirement) -> RequirementSummary:
    return RequirementSummary(
        type=r.type,
        label=r.display_label,
        description=r.description,
        required=r.required,
        carriers=sorted(r.carrier_scope) if r.carrier_scope is not None else None,
        condition=r.condition,
    )


def group_summary(g: RequirementGroup) -> GroupSummary:
    return GroupSummary(
        id=g.id,
        label=g.label,
        description=g.description,
        satisfaction_mode=g.satisfaction_mode.value,
        condition=g.condition,
        carrier=g.carrier,
        requirements=[requirement_summary(r) for r in g.requirements],
    )


@router.get("", response_model=CatalogSummary)
async def get_catalog():
    """Get the loaded catalog pack with all base and conditional groups."""
    return CatalogSummary(
        id=catalog.id,
        name=catalog.name,
        version=catalog.version,
        catalog_hash=catalog_hash,
        base_groups=[group_summary(g) for g in catalog.base_groups()],
        conditional_groups=[group_summary(g) for g in catalog.conditional_groups()],
        carriers=catalog.carriers(),
        document_types=catalog.document_types(),
    )


@router.get("/carriers", response_model=list[CarrierSummary])
async def list_carriers():
    """List carriers with their addenda, conditional entries included."""
    return [
        CarrierSummary(
            carrier=carrier,
            requirements=[requirement_summary(r) for r in catalog.carrier_addenda(carrier)],
        )
        for carrier in catalog.carriers()
    ]


@router.get("/groups/{group_id}", response_model=GroupSummary)
async def get_group(group_id: str):
    """Get one base or conditional group."""
    group = catalog.find_group(group_id)
    if group is None:
        raise CatalogNotFoundError(
            message=f"Group '{group_id}' not found",
            details={"group_id": group_id, "catalog_id": catalog.id},
        )
    return group_summary(group)
