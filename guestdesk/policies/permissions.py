#guestdesk/policies/permissions.py
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional, Union

from guestdesk.models.enums import UserRole


@dataclass(frozen=True)
class Principal:
    """Authenticated identity for the current request."""

    user_id: str
    email: str
    name: str
    role: str


@dataclass(frozen=True)
class PermissionSet:
    can_view_dashboard: bool = False
    can_view_events: bool = False
    can_manage_events: bool = False
    can_view_lists: bool = False
    can_manage_lists: bool = False
    can_view_guests: bool = False
    can_submit_guests: bool = False
    can_moderate_guests: bool = False
    can_delete_guests: bool = False
    can_check_in: bool = False
    can_view_reports: bool = False
    can_export_reports: bool = False
    can_manage_users: bool = False
    can_view_logs: bool = False
    can_manage_settings: bool = False
    can_manage_list_types: bool = False
    can_manage_sectors: bool = False
    has_full_access: bool = False

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class PermissionDenied(Exception):
    def __init__(self, capability: str):
        super().__init__(f"Access denied: missing permission {capability}.")
        self.capability = capability


NO_PERMISSIONS = PermissionSet()

ALL_PERMISSIONS = PermissionSet(**{f.name: True for f in fields(PermissionSet)})

PORTARIA_PERMISSIONS = PermissionSet(
    can_view_dashboard=True,
    can_view_events=True,
    can_view_lists=True,
    can_manage_lists=True,
    can_view_guests=True,
    can_submit_guests=True,
    can_check_in=True,
    can_view_reports=True,
    can_export_reports=True,
)

USER_PERMISSIONS = PermissionSet(
    can_view_events=True,
    can_view_lists=True,
    can_submit_guests=True,
)

_ROLE_TABLE = {
    UserRole.ADMIN.value: ALL_PERMISSIONS,
    UserRole.PORTARIA.value: PORTARIA_PERMISSIONS,
    UserRole.USER.value: USER_PERMISSIONS,
}


def resolve_permissions(role: Optional[Union[str, UserRole]]) -> PermissionSet:
    """
    Pure RBAC: the fixed capability set of a role.
    Unknown or missing roles get nothing.
    """
    if isinstance(role, UserRole):
        role = role.value
    if not isinstance(role, str):
        return NO_PERMISSIONS
    return _ROLE_TABLE.get(role, NO_PERMISSIONS)


def permissions_for(principal: Optional[Principal]) -> PermissionSet:
    if principal is None:
        return NO_PERMISSIONS
    return resolve_permissions(principal.role)


def require(principal: Optional[Principal], capability: str) -> None:
    perms = permissions_for(principal)
    if not getattr(perms, capability):
        raise PermissionDenied(capability)
