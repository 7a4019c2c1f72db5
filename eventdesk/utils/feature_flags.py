"""Feature flag helpers for runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Literal, TypedDict, cast


FeatureFlagKey = Literal[
    "email_notifications_enabled",
    "csv_export_enabled",
    "organizer_signup_enabled",
]


class FeatureFlagValues(TypedDict):
    email_notifications_enabled: bool
    csv_export_enabled: bool
    organizer_signup_enabled: bool


@dataclass(frozen=True)
class FeatureFlagDefinition:
    env_var: str
    default: bool


_FEATURE_FLAG_DEFINITIONS: Dict[FeatureFlagKey, FeatureFlagDefinition] = {
    "email_notifications_enabled": FeatureFlagDefinition("EMAIL_NOTIFICATIONS_ENABLED", True),
    "csv_export_enabled": FeatureFlagDefinition("FEATURE_CSV_EXPORT_ENABLED", True),
    "organizer_signup_enabled": FeatureFlagDefinition("ALLOW_ORGANIZER_SIGNUP", True),
}


def _normalize_bool(value: str | None, default: bool = True) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


@lru_cache(maxsize=None)
def get_feature_flags() -> FeatureFlagValues:
    """Return the cached feature flag state sourced from the environment."""
    values: Dict[FeatureFlagKey, bool] = {}
    for key, definition in _FEATURE_FLAG_DEFINITIONS.items():
        values[key] = _normalize_bool(os.getenv(definition.env_var), default=definition.default)
    return cast(FeatureFlagValues, values)


def is_feature_enabled(flag: FeatureFlagKey) -> bool:
    """Return whether the supplied feature flag evaluates to true."""
    return get_feature_flags()[flag]


def email_notifications_enabled() -> bool:
    """Send QR confirmation emails after registration."""
    return is_feature_enabled("email_notifications_enabled")


def csv_export_enabled() -> bool:
    """Expose the attendance CSV download."""
    return is_feature_enabled("csv_export_enabled")


def organizer_signup_enabled() -> bool:
    """Allow self-service signup with the organizer role."""
    return is_feature_enabled("organizer_signup_enabled")


def refresh_feature_flag_cache() -> None:
    """Invalidate cached feature flag values (useful for tests)."""
    get_feature_flags.cache_clear()
