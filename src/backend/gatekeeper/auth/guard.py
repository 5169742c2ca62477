"""Page guard for protected console views.

evaluate_guard() is a pure function of the current snapshot and the page the
view declares. It is called on every navigation; nothing is memoised.

    loading          -> LOADING   (wait, no decision yet)
    unauthenticated  -> REDIRECT  (to the login page, terminal)
    authenticated    -> ADMITTED  (no page declared, or page accessible)
                     -> DENIED    (rendered in the shell, location unchanged)
"""

import logging
from dataclasses import dataclass
from enum import Enum

from gatekeeper.auth.permissions import PermissionEvaluator
from gatekeeper.schemas.session import SessionSnapshot

logger = logging.getLogger(__name__)

ACCESS_DENIED_MESSAGE = "You do not have the permissions required to access this page."


class GuardState(str, Enum):
    LOADING = "loading"
    REDIRECT = "redirect"
    ADMITTED = "admitted"
    DENIED = "denied"


@dataclass(frozen=True)
class GuardDecision:
    state: GuardState
    redirect_to: str | None = None
    message: str | None = None

    @property
    def in_shell(self) -> bool:
        """True when the outcome is rendered inside the authenticated layout."""
        return self.state in (GuardState.ADMITTED, GuardState.DENIED)


def evaluate_guard(
    snapshot: SessionSnapshot,
    required_page: str | None = None,
    login_path: str = "/login",
) -> GuardDecision:
    if snapshot.status == "loading":
        return GuardDecision(GuardState.LOADING)
    if snapshot.status != "authenticated" or snapshot.user is None:
        return GuardDecision(GuardState.REDIRECT, redirect_to=login_path)
    if required_page is None:
        return GuardDecision(GuardState.ADMITTED)

    if PermissionEvaluator(snapshot).can_access(required_page):
        return GuardDecision(GuardState.ADMITTED)

    logger.debug("Access to %s denied for %s", required_page, snapshot.user.name)
    return GuardDecision(GuardState.DENIED, message=ACCESS_DENIED_MESSAGE)
