"""Tests for PermissionEvaluator: super-admin bypass, resource tables, route table."""

import logging

import pytest

from gatekeeper.auth.menu import MENU_ITEMS
from gatekeeper.auth.views import resolve_view
from gatekeeper.auth.permissions import (
    PUBLIC,
    RESOURCE_PERMISSIONS,
    RESOURCE_TYPES,
    ROUTE_PERMISSIONS,
    PermissionEvaluator,
    unregistered_routes,
)
from gatekeeper.schemas.session import Permission, Role, SessionSnapshot, SessionUser

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _snapshot(roles=(), permissions=(), flagged: bool = False) -> SessionSnapshot:
    user = SessionUser(
        uuid="u-1",
        name="alice",
        roles=[Role(name=r, is_super_admin=flagged) for r in roles],
        permissions=[Permission(name=p) for p in permissions],
    )
    return SessionSnapshot.for_user(user)


def _evaluator(**kwargs) -> PermissionEvaluator:
    return PermissionEvaluator(_snapshot(**kwargs))


# ---------------------------------------------------------------------------
# has_permission
# ---------------------------------------------------------------------------


class TestHasPermission:
    def test_member_of_consolidated_set(self):
        ev = _evaluator(roles=["admin"], permissions=["view-users"])
        assert ev.has_permission("view-users")
        assert not ev.has_permission("delete-users")

    def test_empty_set_denies(self):
        assert not _evaluator(roles=["admin"]).has_permission("view-users")

    def test_super_admin_has_every_permission_without_any_grants(self):
        ev = _evaluator(roles=["super_admin"])
        assert ev.has_permission("view-users")
        assert ev.has_permission("anything-at-all")

    def test_flagged_super_admin_bypasses(self):
        assert _evaluator(roles=["owner"], flagged=True).has_permission("delete-orders")

    def test_role_names_alone_grant_nothing(self):
        # Only super-admin bypasses; "admin" still needs grants.
        assert not _evaluator(roles=["admin"]).can_create("user")

    def test_unauthenticated_snapshot_denies(self):
        ev = PermissionEvaluator(SessionSnapshot.anonymous())
        assert not ev.has_permission("view-users")
        assert not ev.can_delete("order")


# ---------------------------------------------------------------------------
# Resource actions
# ---------------------------------------------------------------------------


class TestResourceActions:
    def test_table_covers_every_resource_type(self):
        assert set(RESOURCE_PERMISSIONS) == set(RESOURCE_TYPES)

    @pytest.mark.parametrize("resource", ["user", "order", "zone", "pricing-rule"])
    def test_each_action_needs_its_own_grant(self, resource):
        permission = RESOURCE_PERMISSIONS[resource]["update"]
        ev = _evaluator(permissions=[permission])
        assert ev.can_update(resource)
        assert not ev.can_create(resource)
        assert not ev.can_delete(resource)

    def test_assign_roles_enables_all_role_actions_together(self):
        granted = _evaluator(permissions=["assign-roles"])
        assert granted.can_create("role")
        assert granted.can_update("role")
        assert granted.can_delete("role")

        revoked = _evaluator(permissions=[])
        assert not revoked.can_create("role")
        assert not revoked.can_update("role")
        assert not revoked.can_delete("role")

    def test_unknown_resource_type_denies(self, caplog):
        ev = _evaluator(permissions=["create-widgets"])
        with caplog.at_level(logging.WARNING):
            assert not ev.can_create("widget")
        assert "widget" in caplog.text

    def test_super_admin_allowed_on_unknown_resource(self):
        assert _evaluator(roles=["super_admin"]).can_delete("widget")

    def test_capabilities_matrix(self):
        ev = _evaluator(permissions=["create-orders", "assign-roles"])
        matrix = ev.capabilities()
        assert set(matrix) == set(RESOURCE_TYPES)
        assert matrix["order"] == {"create": True, "update": False, "delete": False}
        assert matrix["role"] == {"create": True, "update": True, "delete": True}
        assert matrix["user"] == {"create": False, "update": False, "delete": False}


# ---------------------------------------------------------------------------
# Page access
# ---------------------------------------------------------------------------


class TestCanAccess:
    def test_public_route_open_without_roles_or_permissions(self):
        ev = _evaluator()
        assert ev.can_access("/profile")
        assert ev.can_access("/settings")

    def test_protected_route_needs_permission(self):
        assert not _evaluator(roles=["admin"]).can_access("/users")
        assert _evaluator(permissions=["view-users"]).can_access("/users")

    def test_unregistered_route_is_allowed_and_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert _evaluator().can_access("/brand-new-page")
        assert "/brand-new-page" in caplog.text

    def test_super_admin_accesses_everything(self):
        ev = _evaluator(roles=["super_admin"])
        assert all(ev.can_access(route) for route in ROUTE_PERMISSIONS)

    def test_injected_route_table(self):
        ev = PermissionEvaluator(_snapshot(), route_permissions={"/open": PUBLIC, "/x": "view-x"})
        assert ev.can_access("/open")
        assert not ev.can_access("/x")

    def test_unregistered_routes_helper(self):
        assert unregistered_routes(["/users", "/nowhere", "/profile"]) == ["/nowhere"]


# ---------------------------------------------------------------------------
# Concrete console paths
# ---------------------------------------------------------------------------


class TestCanView:
    def test_create_and_detail_views_need_the_list_permission(self):
        ev = _evaluator()
        assert not ev.can_view("/users")
        assert not ev.can_view("/users/new")
        assert not ev.can_view("/users/42")
        assert _evaluator(permissions=["view-users"]).can_view("/users/new")

    def test_borrowed_page_keys(self):
        assert not _evaluator().can_view("/roles/abc")
        assert _evaluator(permissions=["view-permissions"]).can_view("/roles/abc")
        assert not _evaluator().can_view("/pricing-rules/42")
        assert _evaluator(permissions=["view-pricing"]).can_view("/pricing-rules/42")

    def test_login_free_views_need_nothing(self):
        assert _evaluator().can_view("/profile")
        assert _evaluator().can_view("/login")

    def test_unknown_path_is_refused_even_for_super_admin(self):
        assert not _evaluator().can_view("/users/42/secret")
        assert not _evaluator(roles=["super_admin"]).can_view("/nowhere")


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------


class TestVisibleMenu:
    def test_every_menu_entry_links_to_a_view(self):
        paths = [item.path for item in MENU_ITEMS]
        paths += [item.partner_path for item in MENU_ITEMS if item.partner_path]
        assert all(resolve_view(path) is not None for path in paths)

    def test_sub_views_share_the_list_page_rule(self):
        menu = _evaluator(permissions=["view-pricing", "view-permissions"]).visible_menu()
        assert [item.path for item in menu] == ["/", "/pricing-rules", "/roles", "/permissions"]

    def test_integration_entry_depends_on_partner_role(self):
        admin = _evaluator(roles=["admin"], permissions=["integration.view"]).visible_menu()
        partner = _evaluator(roles=["partner"], permissions=["integration.view"]).visible_menu()
        assert admin[-1].path == "/admin/integrations"
        assert partner[-1].path == "/integrations"
        assert partner[-1].partner_path is None

    def test_menu_matches_page_access(self):
        ev = _evaluator(permissions=["view-orders", "view-labels"])
        paths = [item.path for item in ev.visible_menu()]
        assert paths == ["/", "/orders", "/labels"]

    def test_super_admin_sees_full_menu(self):
        assert _evaluator(roles=["super_admin"]).visible_menu() == list(MENU_ITEMS)
