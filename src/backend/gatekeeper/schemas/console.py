"""Pydantic schemas for the console decision endpoints."""

from pydantic import BaseModel

from gatekeeper.preferences import Theme
from gatekeeper.schemas.session import Role


class MenuItemResponse(BaseModel):
    label: str
    path: str
    icon: str


class ConsoleProfile(BaseModel):
    name: str
    primary_role: Role | None
    primary_badge: str | None
    role_names: str
    is_super_admin: bool
    menu: list[MenuItemResponse]
    capabilities: dict[str, dict[str, bool]]


class PageAccessResponse(BaseModel):
    path: str
    state: str
    required_page: str | None = None


class UpdatePreferencesRequest(BaseModel):
    sidebar_collapsed: bool | None = None
    theme: Theme | None = None
