"""
DEV_MODE guard.

With DEV_MODE on, every request acts as the dev organizer and no identity
header is needed. That is only acceptable for a check-in desk served from a
local machine, so the desk host in ``APP_BASE_URL`` decides whether the flag
is honoured.
"""
import os
from urllib.parse import urlparse

DEV_USER_EMAIL = "dev@localhost"
DEV_USER_NAME = "Development User"

LOCAL_DESK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


def _flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() == "true"


def _desk_hostname() -> str | None:
    base = (os.getenv("APP_BASE_URL") or "").strip()
    if not base:
        return None
    return urlparse(base if "://" in base else f"http://{base}").hostname


def _local_desk_hosts() -> frozenset[str]:
    extra = os.getenv("DEV_MODE_ALLOWED_HOSTS", "")
    return LOCAL_DESK_HOSTS | {host.strip().lower() for host in extra.split(",") if host.strip()}


def dev_mode_active() -> bool:
    """Return True when DEV_MODE is on for a local desk; raise when it is on anywhere else.

    Without ``APP_BASE_URL`` the desk host is unknown and ``ALLOW_DEV_MODE=true``
    must vouch for it instead.
    """
    if not _flag("DEV_MODE"):
        return False

    host = _desk_hostname()
    if host is None:
        if _flag("ALLOW_DEV_MODE") or os.getenv("PYTEST_CURRENT_TEST"):
            return True
        raise RuntimeError(
            "DEV_MODE=true needs APP_BASE_URL pointing at the local check-in desk "
            "or ALLOW_DEV_MODE=true."
        )

    allowed = _local_desk_hosts()
    if host.lower() not in allowed:
        raise RuntimeError(
            f"DEV_MODE=true is refused for the check-in desk at '{host}'. "
            f"Local desk hosts: {sorted(allowed)}"
        )
    return True
