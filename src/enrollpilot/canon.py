"""
Canonical JSON Serialization

Provides deterministic JSON serialization for hashing and comparison.
Based on RFC 8785 (JSON Canonicalization Scheme) principles:
- Sorted keys (lexicographic)
- No whitespace
- UTF-8 encoding

Used to fingerprint catalog packs so a validation result can be tied to
the exact requirement rules it was computed from.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any


def _default_serializer(obj: Any) -> Any:
    """
    Custom JSON serializer for non-standard types.

    Handles:
    - datetime/date: ISO 8601 format
    - Enum: value
    - dataclass: dict
    - set/frozenset: sorted list
    """
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        default=_default_serializer,
        ensure_ascii=False,
    )


def canonical_json_bytes(obj: Any) -> bytes:
    """Serialize object to canonical JSON as UTF-8 bytes."""
    return canonical_json(obj).encode("utf-8")


def content_hash(obj: Any) -> str:
    """
    Compute SHA-256 hash of canonical JSON representation.

    Returns:
        Hex-encoded SHA-256 hash string (64 characters)
    """
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()


def _serialize_requirement(requirement: Any) -> dict:
    return {
        "type": requirement.type,
        "required": requirement.required,
        "carrier_scope": sorted(requirement.carrier_scope) if requirement.carrier_scope else None,
        "condition": requirement.condition,
    }


def _serialize_group(group: Any) -> dict:
    return {
        "id": group.id,
        "satisfaction_mode": group.satisfaction_mode.value,
        "condition": group.condition,
        "requirements": [_serialize_requirement(r) for r in group.requirements],
    }


def compute_catalog_hash(catalog: Any) -> str:
    """
    Compute SHA-256 hash of a requirement catalog's rules.

    Only rule-bearing fields are hashed: labels and descriptions can change
    without changing the hash. Group and requirement order is kept, since
    it is part of the resolved output.

    Args:
        catalog: A RequirementCatalog instance

    Returns:
        Hex-encoded SHA-256 hash string (64 characters)
    """
    catalog_dict = {
        "id": catalog.id,
        "version": catalog.version,
        "base_groups": [_serialize_group(g) for g in catalog.base_groups()],
        "conditional_groups": [_serialize_group(g) for g in catalog.conditional_groups()],
        "carrier_addenda": {
            carrier: [_serialize_requirement(r) for r in requirements]
            for carrier, requirements in catalog.addenda.items()
        },
        "unknown_carrier_requirements": [
            _serialize_requirement(r) for r in catalog.unknown_carrier_fallback
        ],
    }
    return content_hash(catalog_dict)
