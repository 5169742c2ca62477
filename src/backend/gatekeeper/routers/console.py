"""Console router -- decisions the admin UI renders from.

GET  /api/v1/console/me              profile, primary role, menu, action matrix
GET  /api/v1/console/pages?path=...  page guard outcome for a console path
POST /api/v1/console/zone-selection  replay selection edits, return state + signals
GET  /api/v1/console/preferences     sidebar/theme flags
PUT  /api/v1/console/preferences     change sidebar/theme flags (written through)
"""

from fastapi import APIRouter, Depends, Query

from gatekeeper.auth import roles as role_helpers
from gatekeeper.auth.dependencies import enforce, get_preferences, get_session, require_page
from gatekeeper.auth.permissions import PermissionEvaluator
from gatekeeper.auth.views import resolve_view
from gatekeeper.errors import NotFoundError
from gatekeeper.preferences import Preferences, UIPreferences
from gatekeeper.schemas.console import (
    ConsoleProfile,
    MenuItemResponse,
    PageAccessResponse,
    UpdatePreferencesRequest,
)
from gatekeeper.schemas.session import SessionSnapshot
from gatekeeper.schemas.zones import ZoneSelectionRequest, ZoneSelectionResponse
from gatekeeper.selection import SelectionWithPrimary

router = APIRouter(prefix="/api/v1/console", tags=["console"])


@router.get("/me", response_model=ConsoleProfile)
async def me(snapshot: SessionSnapshot = Depends(require_page())) -> ConsoleProfile:
    evaluator = PermissionEvaluator(snapshot)
    roles = snapshot.roles
    primary = role_helpers.get_primary_role(roles)
    return ConsoleProfile(
        name=snapshot.user.name if snapshot.user else "",
        primary_role=primary,
        primary_badge=role_helpers.role_badge(primary) if primary else None,
        role_names=role_helpers.get_all_role_names(roles),
        is_super_admin=evaluator.is_super_admin(),
        menu=[
            MenuItemResponse(label=item.label, path=item.path, icon=item.icon)
            for item in evaluator.visible_menu()
        ],
        capabilities=evaluator.capabilities(),
    )


@router.get("/pages", response_model=PageAccessResponse)
async def page_access(
    path: str = Query(..., min_length=1),
    snapshot: SessionSnapshot = Depends(get_session),
) -> PageAccessResponse:
    view = resolve_view(path)
    if view is None:
        raise NotFoundError(f"No console page matches '{path}'")
    if view.requires_login:
        enforce(snapshot, view.required_page)
    return PageAccessResponse(path=path, state="admitted", required_page=view.required_page)


@router.post("/zone-selection", response_model=ZoneSelectionResponse)
async def zone_selection(
    body: ZoneSelectionRequest,
    _: SessionSnapshot = Depends(require_page("/couriers")),
) -> ZoneSelectionResponse:
    selection = SelectionWithPrimary(body.selected, body.primary, required=body.required)
    for operation in body.operations:
        if operation.op == "toggle":
            selection.toggle(operation.id)
        else:
            selection.set_primary(operation.id)
    return ZoneSelectionResponse(
        selected=list(selection.selected),
        primary=selection.primary,
        required_but_empty=selection.required_but_empty,
        multiple_without_primary=selection.multiple_without_primary,
    )


@router.get("/preferences", response_model=UIPreferences)
async def read_preferences(
    _: SessionSnapshot = Depends(require_page()),
    prefs: Preferences = Depends(get_preferences),
) -> UIPreferences:
    return prefs.current


@router.put("/preferences", response_model=UIPreferences)
async def update_preferences(
    body: UpdatePreferencesRequest,
    _: SessionSnapshot = Depends(require_page()),
    prefs: Preferences = Depends(get_preferences),
) -> UIPreferences:
    if body.sidebar_collapsed is not None:
        prefs.set_sidebar_collapsed(body.sidebar_collapsed)
    if body.theme is not None:
        prefs.set_theme(body.theme)
    return prefs.current
