"""Console views and the page key each one is guarded by.

Detail and form views share the key of their list page (/users/:uuid is
guarded by /users), and some views borrow another page's key outright
(/roles* by /permissions, /pricing-rules* by /pricing). Path lookups resolve
through this table; a path that matches no view is not a console page.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class View:
    pattern: str
    # None: any authenticated user.
    required_page: str | None = None
    requires_login: bool = True

    def matches(self, path: str) -> bool:
        expected = _segments(self.pattern)
        actual = _segments(path)
        if len(expected) != len(actual):
            return False
        return all(e.startswith(":") or e == a for e, a in zip(expected, actual))


def _segments(path: str) -> list[str]:
    return [s for s in path.split("?", 1)[0].split("/") if s]


def _crud_views(base: str, required_page: str, edit_suffix: bool = False) -> list[View]:
    detail = f"{base}/:uuid/edit" if edit_suffix else f"{base}/:uuid"
    return [View(base, required_page), View(f"{base}/new", required_page), View(detail, required_page)]


VIEWS: tuple[View, ...] = (
    View("/login", requires_login=False),
    View("/forgot-password", requires_login=False),
    View("/verify-otp", requires_login=False),
    View("/reset-password", requires_login=False),
    View("/"),
    View("/notifications"),
    View("/profile"),
    View("/settings"),
    *_crud_views("/users", "/users"),
    *_crud_views("/orders", "/orders"),
    View("/orders/:uuid/edit", "/orders"),
    *_crud_views("/partners", "/partners"),
    *_crud_views("/couriers", "/couriers"),
    View("/assignments", "/assignments"),
    View("/reconciliation", "/reconciliation"),
    View("/pricing", "/pricing"),
    View("/labels", "/labels"),
    View("/routes", "/routes"),
    View("/reporting", "/reporting"),
    View("/audit", "/audit"),
    View("/permissions", "/permissions"),
    *_crud_views("/roles", "/permissions"),
    *_crud_views("/pricing-rules", "/pricing"),
    *_crud_views("/zones", "/zones", edit_suffix=True),
    View("/partner/tracking", "/partner/tracking"),
    View("/integrations", "/integrations"),
    View("/admin/integrations", "/admin/integrations"),
)


def resolve_view(path: str, views: tuple[View, ...] = VIEWS) -> View | None:
    for view in views:
        if view.matches(path):
            return view
    return None


def required_pages(views: tuple[View, ...] = VIEWS) -> set[str]:
    return {v.required_page for v in views if v.required_page is not None}
