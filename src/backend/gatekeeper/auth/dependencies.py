"""FastAPI dependencies that put the decision engine in front of routes.

Usage:
    @router.get("/users")
    async def users(snapshot: SessionSnapshot = Depends(require_page("/users"))):
        ...

Every page passed to require_page() is recorded in GUARDED_PAGES; the app
refuses to start if one of them is missing from the route table.
"""

from collections import OrderedDict

import httpx
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from gatekeeper.auth.guard import GuardState, evaluate_guard
from gatekeeper.auth.session import SessionContext
from gatekeeper.config import settings
from gatekeeper.errors import AccessDeniedError, LoginRequired, SessionUnavailableError
from gatekeeper.preferences import Preferences
from gatekeeper.schemas.session import SessionSnapshot

_bearer = HTTPBearer(auto_error=False)

GUARDED_PAGES: set[str] = set()


class SessionRegistry:
    """Keeps one SessionContext per token so a failed refresh can fall back
    on that token's last known-good snapshot."""

    def __init__(self, max_sessions: int = 1024) -> None:
        self.max_sessions = max_sessions
        self._sessions: OrderedDict[str, SessionContext] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, token: str, http_client: httpx.AsyncClient) -> SessionContext:
        ctx = self._sessions.get(token)
        if ctx is None:
            ctx = SessionContext(http_client, token)
            self._sessions[token] = ctx
            while len(self._sessions) > self.max_sessions:
                self._sessions.popitem(last=False)
        else:
            self._sessions.move_to_end(token)
        return ctx


_registry = SessionRegistry()


def get_session_registry() -> SessionRegistry:
    return _registry


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_preferences(request: Request) -> Preferences:
    return request.app.state.preferences


async def get_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    registry: SessionRegistry = Depends(get_session_registry),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> SessionSnapshot:
    if credentials is None:
        return SessionSnapshot.anonymous()
    ctx = registry.get(credentials.credentials, http_client)
    return await ctx.refresh()


def enforce(snapshot: SessionSnapshot, page: str | None) -> SessionSnapshot:
    """Run the page guard and turn a non-admitting decision into an exception."""
    decision = evaluate_guard(snapshot, page, login_path=settings.LOGIN_PATH)
    if decision.state is GuardState.LOADING:
        raise SessionUnavailableError("Session is still loading")
    if decision.state is GuardState.REDIRECT:
        raise LoginRequired(decision.redirect_to or settings.LOGIN_PATH)
    if decision.state is GuardState.DENIED:
        raise AccessDeniedError(decision.message or "")
    return snapshot


def require_page(page: str | None = None):
    """Dependency factory: authenticated session, plus access to `page` if given."""
    if page is not None:
        GUARDED_PAGES.add(page)

    async def _require_page(snapshot: SessionSnapshot = Depends(get_session)) -> SessionSnapshot:
        return enforce(snapshot, page)

    return _require_page
