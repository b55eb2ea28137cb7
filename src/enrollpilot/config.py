"""
EnrollPilot Configuration

Settings are read from EP_* environment variables:

    EP_CATALOG_PATH                 Catalog pack to load (default: bundled pack)
    EP_UNKNOWN_CONDITION_POLICY     fail_open | fail_closed (default: fail_open)
    EP_UNKNOWN_CARRIER_POLICY       fail_open | fail_closed (default: fail_open)
    EP_STRICT_CONDITIONS            Reject packs with unparseable conditions
    EP_LOG_LEVEL                    Logging level (default: INFO)
    EP_SMART_DOCUMENTS              Enable document validation
    EP_CARRIER_SPECIFIC_DOCUMENTS   Append carrier addenda
    EP_ADMIN_OVERRIDE               Admins may override requirements
    EP_BROKER_OVERRIDE              Broker owners/staff may override
    EP_CORS_ORIGINS                 Comma-separated allowed origins
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from .models import UnknownRulePolicy


DEFAULT_CATALOG_PATH = (
    Path(__file__).resolve().parent.parent.parent
    / "packs" / "enrollment" / "ca_small_group.yaml"
)

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5000",
)


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_policy(env: Mapping[str, str], name: str) -> UnknownRulePolicy:
    raw = env.get(name, UnknownRulePolicy.FAIL_OPEN.value)
    try:
        return UnknownRulePolicy(raw.strip().lower())
    except ValueError:
        raise ValueError(
            f"{name} must be one of "
            f"{[p.value for p in UnknownRulePolicy]}, got {raw!r}"
        )


# =============================================================================
# Feature Flags
# =============================================================================

@dataclass(frozen=True)
class FeatureFlags:
    """
    Feature switches of the enrollment application.

    Attributes:
        smart_documents: Validate uploads against resolved requirements
        carrier_specific_documents: Append carrier addenda groups
        admin_override: Admins may override missing documents
        broker_override: Broker owners and staff may override
    """
    smart_documents: bool = True
    carrier_specific_documents: bool = True
    admin_override: bool = True
    broker_override: bool = True


# =============================================================================
# Engine Settings
# =============================================================================

@dataclass(frozen=True)
class EngineSettings:
    """Runtime settings for the engine and the API service."""
    catalog_path: Path = DEFAULT_CATALOG_PATH
    unknown_condition_policy: UnknownRulePolicy = UnknownRulePolicy.FAIL_OPEN
    unknown_carrier_policy: UnknownRulePolicy = UnknownRulePolicy.FAIL_OPEN
    strict_conditions: bool = False
    log_level: str = "INFO"
    flags: FeatureFlags = field(default_factory=FeatureFlags)
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> EngineSettings:
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Raises:
            ValueError: If a policy variable holds an unknown value
        """
        env = os.environ if env is None else env

        catalog_path = env.get("EP_CATALOG_PATH")
        cors = env.get("EP_CORS_ORIGINS")

        return cls(
            catalog_path=Path(catalog_path) if catalog_path else DEFAULT_CATALOG_PATH,
            unknown_condition_policy=_env_policy(env, "EP_UNKNOWN_CONDITION_POLICY"),
            unknown_carrier_policy=_env_policy(env, "EP_UNKNOWN_CARRIER_POLICY"),
            strict_conditions=_env_flag(env, "EP_STRICT_CONDITIONS", False),
            log_level=env.get("EP_LOG_LEVEL", "INFO").upper(),
            flags=FeatureFlags(
                smart_documents=_env_flag(env, "EP_SMART_DOCUMENTS", True),
                carrier_specific_documents=_env_flag(
                    env, "EP_CARRIER_SPECIFIC_DOCUMENTS", True
                ),
                admin_override=_env_flag(env, "EP_ADMIN_OVERRIDE", True),
                broker_override=_env_flag(env, "EP_BROKER_OVERRIDE", True),
            ),
            cors_origins=(
                tuple(o.strip() for o in cors.split(",") if o.strip())
                if cors else DEFAULT_CORS_ORIGINS
            ),
        )
