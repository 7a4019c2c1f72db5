import pytest

from eventdesk.utils.feature_flags import (
    FeatureFlagKey,
    csv_export_enabled,
    email_notifications_enabled,
    get_feature_flags,
    is_feature_enabled,
    organizer_signup_enabled,
    refresh_feature_flag_cache,
)

_ENV_FLAG_MAPPING = {
    "EMAIL_NOTIFICATIONS_ENABLED": "email_notifications_enabled",
    "FEATURE_CSV_EXPORT_ENABLED": "csv_export_enabled",
    "ALLOW_ORGANIZER_SIGNUP": "organizer_signup_enabled",
}


@pytest.fixture(autouse=True)
def reset_flags(monkeypatch):
    """Clear env + cached values for each test to avoid cross-contamination."""
    for env_name in _ENV_FLAG_MAPPING:
        monkeypatch.delenv(env_name, raising=False)
    refresh_feature_flag_cache()
    yield
    refresh_feature_flag_cache()


def test_get_feature_flags_defaults_true():
    assert get_feature_flags() == {
        "email_notifications_enabled": True,
        "csv_export_enabled": True,
        "organizer_signup_enabled": True,
    }


@pytest.mark.parametrize("env_name,flag_key", list(_ENV_FLAG_MAPPING.items()))
def test_individual_flag_disabled_via_env(monkeypatch, env_name: str, flag_key: FeatureFlagKey):
    monkeypatch.setenv(env_name, "false")
    refresh_feature_flag_cache()

    assert get_feature_flags()[flag_key] is False
    assert is_feature_enabled(flag_key) is False


@pytest.mark.parametrize("raw_value", ["maybe", "junk", "2"])
def test_invalid_value_falls_back_to_default(monkeypatch, raw_value):
    monkeypatch.setenv("FEATURE_CSV_EXPORT_ENABLED", raw_value)
    refresh_feature_flag_cache()

    assert csv_export_enabled() is True


def test_refresh_feature_flag_cache_forces_reload(monkeypatch):
    monkeypatch.setenv("EMAIL_NOTIFICATIONS_ENABLED", "off")
    refresh_feature_flag_cache()
    assert email_notifications_enabled() is False

    # Env changed without clearing the cache: stale value
    monkeypatch.setenv("EMAIL_NOTIFICATIONS_ENABLED", "on")
    assert email_notifications_enabled() is False

    refresh_feature_flag_cache()
    assert email_notifications_enabled() is True


def test_organizer_signup_flag(monkeypatch):
    monkeypatch.setenv("ALLOW_ORGANIZER_SIGNUP", "0")
    refresh_feature_flag_cache()
    assert organizer_signup_enabled() is False
