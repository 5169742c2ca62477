"""Sidebar entries of the admin console.

Visibility is never declared here: an entry is shown exactly when the view
it links to passes the page guard, so the menu and the guard cannot disagree.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MenuItem:
    label: str
    path: str
    icon: str = ""
    # Partners are sent here instead of `path`.
    partner_path: str | None = None


MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem("Dashboard", "/", "dashboard"),
    MenuItem("Orders", "/orders", "package"),
    MenuItem("Delivery tracking", "/partner/tracking", "map-marker"),
    MenuItem("Users", "/users", "account-group"),
    MenuItem("Partners", "/partners", "domain"),
    MenuItem("Couriers", "/couriers", "bike"),
    MenuItem("Assignments", "/assignments", "clipboard-list"),
    MenuItem("Reconciliation", "/reconciliation", "check-all"),
    MenuItem("Pricing grid", "/pricing-rules", "cash"),
    MenuItem("Delivery zones", "/zones", "map"),
    MenuItem("Labels", "/labels", "label"),
    MenuItem("Routes", "/routes", "routes"),
    MenuItem("Audit", "/audit", "history"),
    MenuItem("Roles", "/roles", "account-key"),
    MenuItem("Permissions", "/permissions", "lock"),
    MenuItem("Reporting", "/reporting", "chart-line"),
    MenuItem("Integrations", "/admin/integrations", "puzzle", partner_path="/integrations"),
)
