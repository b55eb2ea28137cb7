"""
Pytest configuration and fixtures for EnrollPilot tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
import pytest
from pathlib import Path

from enrollpilot.engine import RequirementCatalog
from enrollpilot.models import (
    ApplicantContext,
    DocumentRequirement,
    RequirementGroup,
    SatisfactionMode,
)


PACKS_DIR = Path(__file__).parent.parent / "packs"
CA_SMALL_GROUP_PACK = PACKS_DIR / "enrollment" / "ca_small_group.yaml"


# =============================================================================
# Factory Helpers
# =============================================================================

def make_requirement(
    type: str,
    label: str = None,
    required: bool = True,
    carriers: list = None,
    condition: str = None,
) -> DocumentRequirement:
    """Create a DocumentRequirement with required fields."""
    return DocumentRequirement(
        type=type,
        label=label or type,
        description=f"{type} document",
        required=required,
        carrier_scope=frozenset(carriers) if carriers is not None else None,
        condition=condition,
    )


def make_group(
    id: str,
    types: list = None,
    requirements: list = None,
    label: str = None,
    mode: SatisfactionMode = SatisfactionMode.ALL_REQUIRED,
    condition: str = None,
) -> RequirementGroup:
    """Create a RequirementGroup from document types or requirements."""
    if requirements is None:
        requirements = [make_requirement(t) for t in (types or [])]
    return RequirementGroup(
        id=id,
        label=label or id,
        description=f"{id} group",
        requirements=requirements,
        satisfaction_mode=mode,
        condition=condition,
    )


def make_context(
    has_prior_coverage: bool = None,
    selected_carrier: str = None,
    employee_count: int = None,
    uploaded: set = None,
    company_id: str = "42",
) -> ApplicantContext:
    """Create an ApplicantContext."""
    return ApplicantContext(
        has_prior_coverage=has_prior_coverage,
        selected_carrier=selected_carrier,
        employee_count=employee_count,
        uploaded_document_types=frozenset(uploaded or ()),
        company_id=company_id,
    )


def make_catalog(
    base: list = None,
    conditional: list = None,
    addenda: dict = None,
    unknown_carrier: list = None,
) -> RequirementCatalog:
    """
    Create a RequirementCatalog.

    Defaults to the example catalog: payProof and businessDocs (any one),
    priorCoverage when hasPriorCoverage, and Anthem/Kaiser addenda.
    """
    if base is None:
        base = [
            make_group(
                "payProof", ["DE-9C", "Payroll Register"],
                label="Proof of Payroll", mode=SatisfactionMode.ANY_ONE,
            ),
            make_group(
                "businessDocs", ["Business License", "Articles of Incorporation"],
                label="Business Documentation", mode=SatisfactionMode.ANY_ONE,
            ),
        ]
    if conditional is None:
        conditional = [
            make_group(
                "priorCoverage", ["Current Carrier Bill"],
                label="Prior Coverage", condition="hasPriorCoverage",
            ),
        ]
    if addenda is None:
        addenda = {
            "Anthem": [make_requirement("Anthem-Group-App", carriers=["Anthem"])],
            "Kaiser": [make_requirement("Kaiser-GroupApp", carriers=["Kaiser"])],
        }
    return RequirementCatalog(
        id="TEST-CATALOG",
        name="Test Catalog",
        version="2024.1",
        base=base,
        conditional=conditional,
        addenda=addenda,
        unknown_carrier_fallback=unknown_carrier or [],
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def catalog():
    """The example catalog."""
    return make_catalog()


@pytest.fixture
def pack_path():
    """Path to the bundled California small group pack."""
    return CA_SMALL_GROUP_PACK
