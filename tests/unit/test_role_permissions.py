from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from eventdesk.api.deps import FORBIDDEN_DETAIL, require_capability
from eventdesk.utils.role_permissions import (
    CAN_CHECK_IN,
    CAN_EXPORT,
    CAN_MANAGE_EVENTS,
    CAN_VIEW_DASHBOARD,
    ROLE_PERMISSIONS,
    role_allows,
    role_allows_check_in,
    role_allows_manage,
    role_satisfies,
    validate_role,
)


class TestRolePermissions:
    """Unit tests for the role capability table."""

    def test_organizer_has_every_capability(self):
        assert all(ROLE_PERMISSIONS["organizer"].values())

    def test_volunteer_can_scan_but_not_manage(self):
        assert role_allows("volunteer", CAN_CHECK_IN) is True
        assert role_allows("volunteer", CAN_VIEW_DASHBOARD) is True
        assert role_allows("volunteer", CAN_MANAGE_EVENTS) is False
        assert role_allows("volunteer", CAN_EXPORT) is False

    def test_participant_has_no_staff_capabilities(self):
        assert not any(ROLE_PERMISSIONS["participant"].values())

    def test_validate_role(self):
        for role in ("organizer", "volunteer", "participant"):
            validate_role(role)
        with pytest.raises(ValueError, match="Invalid role 'guest'"):
            validate_role("guest")


@pytest.mark.parametrize(
    "user_role,required,expected",
    [
        ("organizer", "volunteer", True),
        ("organizer", "participant", True),
        ("volunteer", "volunteer", True),
        ("volunteer", "organizer", False),
        ("participant", "volunteer", False),
        ("participant", "participant", True),
        (None, "participant", False),
    ],
)
def test_role_satisfies_matches_route_guard(user_role, required, expected):
    assert role_satisfies(user_role, required) is expected


def test_role_allows_helpers():
    assert role_allows_check_in("volunteer") is True
    assert role_allows_check_in("participant") is False
    assert role_allows_manage("organizer") is True
    assert role_allows_manage("volunteer") is False
    assert role_allows("nobody", CAN_CHECK_IN) is False
    assert role_allows("organizer", "can_fly") is False


@pytest.mark.parametrize(
    "role,capability,allowed",
    [
        ("organizer", CAN_EXPORT, True),
        ("volunteer", CAN_EXPORT, False),
        ("volunteer", CAN_VIEW_DASHBOARD, True),
        ("participant", CAN_CHECK_IN, False),
    ],
)
def test_require_capability_guard(role, capability, allowed):
    guard = require_capability(capability)
    user_context = (SimpleNamespace(role=role), {})
    if allowed:
        assert guard(user_context=user_context) is user_context
    else:
        with pytest.raises(HTTPException) as exc:
            guard(user_context=user_context)
        assert exc.value.status_code == 403
        assert exc.value.detail == FORBIDDEN_DETAIL
