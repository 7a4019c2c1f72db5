"""
Role-based permission utilities for event staff and attendees.

Every user carries a single plaintext role flag. Route guards ask for a
capability (scan tickets, watch the dashboard, export attendance, manage
events) and this module answers it from the role table, so no route compares
role names itself.
"""

from typing import Dict


ROLE_ORGANIZER = "organizer"
ROLE_VOLUNTEER = "volunteer"
ROLE_PARTICIPANT = "participant"

CAN_MANAGE_EVENTS = "can_manage_events"
CAN_CHECK_IN = "can_check_in"
CAN_VIEW_DASHBOARD = "can_view_dashboard"
CAN_EXPORT = "can_export"

ROLE_PERMISSIONS: Dict[str, Dict[str, bool]] = {
    ROLE_ORGANIZER: {
        CAN_MANAGE_EVENTS: True,
        CAN_CHECK_IN: True,
        CAN_VIEW_DASHBOARD: True,
        CAN_EXPORT: True,
    },
    ROLE_VOLUNTEER: {
        CAN_MANAGE_EVENTS: False,
        CAN_CHECK_IN: True,
        CAN_VIEW_DASHBOARD: True,
        CAN_EXPORT: False,
    },
    ROLE_PARTICIPANT: {
        CAN_MANAGE_EVENTS: False,
        CAN_CHECK_IN: False,
        CAN_VIEW_DASHBOARD: False,
        CAN_EXPORT: False,
    },
}

ALLOWED_ROLES = set(ROLE_PERMISSIONS.keys())


def validate_role(role: str) -> None:
    """
    Validate that a role is allowed.

    Raises:
        ValueError: If role is not allowed
    """
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role '{role}'. Allowed roles: {sorted(ALLOWED_ROLES)}")


def role_satisfies(user_role: str | None, required_role: str) -> bool:
    """Return True if ``user_role`` may access something guarded by ``required_role``.

    Organizers pass every guard; otherwise the roles must match exactly.
    """
    if not user_role:
        return False
    return user_role == required_role or user_role == ROLE_ORGANIZER


def role_allows(role: str | None, capability: str) -> bool:
    """Return True if the role grants ``capability``; unknown roles grant nothing."""
    if role not in ROLE_PERMISSIONS:
        return False
    return bool(ROLE_PERMISSIONS[role].get(capability, False))


def role_allows_check_in(role: str | None) -> bool:
    return role_allows(role, CAN_CHECK_IN)


def role_allows_manage(role: str | None) -> bool:
    return role_allows(role, CAN_MANAGE_EVENTS)
