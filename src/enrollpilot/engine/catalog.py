"""
EnrollPilot Requirement Catalog

Holds the configured requirement groups for one catalog pack:
- base groups, always included
- conditional groups, gated by a named condition
- carrier addenda, extra requirements per carrier

The catalog is plain data. It is built by the pack loader (or directly in
tests) and passed to the resolver, so carriers and document rules can
change without touching the engine.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Optional

from ..models import DocumentRequirement, RequirementGroup


def _freeze_addenda(
    addenda: Mapping[str, Iterable[DocumentRequirement]],
) -> dict[str, tuple[DocumentRequirement, ...]]:
    return {carrier: tuple(reqs) for carrier, reqs in addenda.items()}


@dataclass(frozen=True)
class RequirementCatalog:
    """
    Static requirement definitions for one catalog pack.

    Usage:
        catalog = RequirementCatalog(
            id="CA-SMALL-GROUP",
            base=[pay_proof, business_docs],
            conditional=[prior_coverage],
            addenda={"Kaiser": [kaiser_app]},
        )
        catalog.carrier_addenda("Kaiser")
    """
    id: str = "inline"
    name: str = ""
    version: str = ""
    base: tuple[RequirementGroup, ...] = ()
    conditional: tuple[RequirementGroup, ...] = ()
    addenda: dict[str, tuple[DocumentRequirement, ...]] = field(default_factory=dict)
    unknown_carrier_fallback: tuple[DocumentRequirement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", tuple(self.base))
        object.__setattr__(self, "conditional", tuple(self.conditional))
        object.__setattr__(self, "addenda", _freeze_addenda(self.addenda))
        object.__setattr__(
            self, "unknown_carrier_fallback", tuple(self.unknown_carrier_fallback)
        )

    def base_groups(self) -> tuple[RequirementGroup, ...]:
        """Always-applicable groups, in catalog order."""
        return self.base

    def conditional_groups(self) -> tuple[RequirementGroup, ...]:
        """Condition-gated groups, in catalog order."""
        return self.conditional

    def carriers(self) -> list[str]:
        """Carriers with addenda, in catalog order."""
        return list(self.addenda.keys())

    def has_carrier(self, carrier: Optional[str]) -> bool:
        """Check whether the catalog knows a carrier."""
        return carrier is not None and carrier in self.addenda

    def carrier_addenda(
        self,
        carrier: str,
        applies: Optional[Callable[[DocumentRequirement], bool]] = None,
    ) -> tuple[DocumentRequirement, ...]:
        """
        Get the carrier-specific requirements for a carrier.

        Requirements scoped to other carriers are dropped. When applies is
        given, requirements carrying a condition are kept only if
        applies(requirement) is True.

        Returns an empty tuple for an unknown carrier.
        """
        return self._filter(self.addenda.get(carrier, ()), carrier, applies)

    def unknown_carrier_requirements(
        self,
        applies: Optional[Callable[[DocumentRequirement], bool]] = None,
    ) -> tuple[DocumentRequirement, ...]:
        """Requirements used for carriers the catalog does not know."""
        return self._filter(self.unknown_carrier_fallback, None, applies)

    @staticmethod
    def _filter(
        requirements: Iterable[DocumentRequirement],
        carrier: Optional[str],
        applies: Optional[Callable[[DocumentRequirement], bool]],
    ) -> tuple[DocumentRequirement, ...]:
        kept: list[DocumentRequirement] = []
        for requirement in requirements:
            if carrier is not None and not requirement.applies_to_carrier(carrier):
                continue
            if requirement.condition and applies is not None and not applies(requirement):
                continue
            kept.append(requirement)
        return tuple(kept)

    def find_group(self, group_id: str) -> Optional[RequirementGroup]:
        """Get a base or conditional group by ID."""
        for group in self.base + self.conditional:
            if group.id == group_id:
                return group
        return None

    def document_types(self) -> list[str]:
        """Every document type the catalog can request, first occurrence order."""
        seen: dict[str, None] = {}
        for group in self.base + self.conditional:
            for doc_type in group.document_types:
                seen.setdefault(doc_type, None)
        for requirements in self.addenda.values():
            for requirement in requirements:
                seen.setdefault(requirement.type, None)
        for requirement in self.unknown_carrier_fallback:
            seen.setdefault(requirement.type, None)
        return list(seen)

    def condition_names(self) -> list[str]:
        """Every condition name referenced by the catalog."""
        names: list[str] = [g.condition for g in self.conditional if g.condition]
        for requirements in self.addenda.values():
            names.extend(r.condition for r in requirements if r.condition)
        names.extend(r.condition for r in self.unknown_carrier_fallback if r.condition)
        return names
