"""Permission evaluation over an explicit session snapshot.

PermissionEvaluator is a plain policy object: build one per snapshot, ask it
questions, throw it away. It never raises and never caches across
snapshots.

Two tables drive it, with deliberately different defaults:

* RESOURCE_PERMISSIONS is exhaustive. An unknown resource type or action is
  a lookup miss and is denied.
* ROUTE_PERMISSIONS registers every console page as either PUBLIC or
  requiring one permission. A key missing from the table is allowed, and
  logged so the omission shows up.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Final, Literal

from gatekeeper.auth import roles as role_helpers
from gatekeeper.auth.menu import MENU_ITEMS, MenuItem
from gatekeeper.auth.views import resolve_view
from gatekeeper.schemas.session import SessionSnapshot

logger = logging.getLogger(__name__)

Action = Literal["create", "update", "delete"]
ACTIONS: tuple[Action, ...] = ("create", "update", "delete")

RESOURCE_TYPES: tuple[str, ...] = (
    "user",
    "order",
    "partner",
    "courier",
    "zone",
    "label",
    "pricing-rule",
    "role",
)

ASSIGN_ROLES = "assign-roles"

# Route entry meaning "any authenticated user".
PUBLIC: Final = ""


def _crud(plural: str) -> dict[str, str]:
    return {action: f"{action}-{plural}" for action in ACTIONS}


RESOURCE_PERMISSIONS: dict[str, dict[str, str]] = {
    "user": _crud("users"),
    "order": _crud("orders"),
    "partner": _crud("partners"),
    "courier": _crud("couriers"),
    "zone": _crud("zones"),
    "label": _crud("labels"),
    "pricing-rule": _crud("pricing-rules"),
    # One grant covers every role mutation.
    "role": dict.fromkeys(ACTIONS, ASSIGN_ROLES),
}

ROUTE_PERMISSIONS: dict[str, str] = {
    "/": PUBLIC,
    "/profile": PUBLIC,
    "/settings": PUBLIC,
    "/notifications": PUBLIC,
    "/users": "view-users",
    "/orders": "view-orders",
    "/partners": "view-partners",
    "/partner/tracking": "partner.tracking.view",
    "/couriers": "view-couriers",
    "/assignments": "view-assignments",
    "/reconciliation": "view-reconciliation",
    "/pricing": "view-pricing",
    "/zones": "view-zones",
    "/labels": "view-labels",
    "/routes": "view-routes",
    "/audit": "view-audit",
    "/permissions": "view-permissions",
    "/reporting": "view-reporting",
    "/integrations": "integration.view",
    "/admin/integrations": "integration.view",
}


def unregistered_routes(route_keys: Iterable[str]) -> list[str]:
    """Return the keys that have no entry in ROUTE_PERMISSIONS."""
    return sorted({k for k in route_keys if k not in ROUTE_PERMISSIONS})


class PermissionEvaluator:
    def __init__(
        self,
        snapshot: SessionSnapshot,
        resource_permissions: dict[str, dict[str, str]] | None = None,
        route_permissions: dict[str, str] | None = None,
    ) -> None:
        self.snapshot = snapshot
        self.resource_permissions = (
            RESOURCE_PERMISSIONS if resource_permissions is None else resource_permissions
        )
        self.route_permissions = (
            ROUTE_PERMISSIONS if route_permissions is None else route_permissions
        )

    def is_super_admin(self) -> bool:
        return role_helpers.is_super_admin(self.snapshot.roles)

    def has_permission(self, name: str) -> bool:
        if self.is_super_admin():
            return True
        return name in self.snapshot.permission_names

    # ── Resource actions ───────────────────────────────────────────────────────

    def can(self, action: Action, resource_type: str) -> bool:
        if self.is_super_admin():
            return True
        permission = self.resource_permissions.get(resource_type, {}).get(action)
        if not permission:
            logger.warning("No %s permission registered for resource type %r", action, resource_type)
            return False
        return self.has_permission(permission)

    def can_create(self, resource_type: str) -> bool:
        return self.can("create", resource_type)

    def can_update(self, resource_type: str) -> bool:
        return self.can("update", resource_type)

    def can_delete(self, resource_type: str) -> bool:
        return self.can("delete", resource_type)

    def capabilities(self) -> dict[str, dict[str, bool]]:
        """Full action matrix, one row per known resource type."""
        return {
            resource: {action: self.can(action, resource) for action in ACTIONS}
            for resource in self.resource_permissions
        }

    # ── Pages ──────────────────────────────────────────────────────────────────

    def can_access(self, route_key: str) -> bool:
        if self.is_super_admin():
            return True
        if route_key not in self.route_permissions:
            logger.warning("Route %r is not registered; allowing by default", route_key)
            return True
        permission = self.route_permissions[route_key]
        if permission == PUBLIC:
            return True
        return self.has_permission(permission)

    def can_view(self, path: str) -> bool:
        """Page guard answer for a concrete console path such as /users/42.

        Paths that match no registered view are refused.
        """
        view = resolve_view(path)
        if view is None:
            return False
        if view.required_page is None:
            return True
        return self.can_access(view.required_page)

    def visible_menu(self, items: Iterable[MenuItem] = MENU_ITEMS) -> list[MenuItem]:
        """Menu entries filtered with the same rule the page guard applies."""
        partner = role_helpers.is_partner(self.snapshot.roles)
        visible = []
        for item in items:
            if partner and item.partner_path:
                item = replace(item, path=item.partner_path, partner_path=None)
            if self.can_view(item.path):
                visible.append(item)
        return visible
