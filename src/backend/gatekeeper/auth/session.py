"""Session context: fetches the current user from the console API.

The decision layer only ever reads SessionContext.snapshot. Refreshing is the
one I/O operation and lives here. When a refresh fails for any reason other
than the API rejecting the token, the last known-good snapshot is kept:
stale permissions are preferred over flapping between allow and deny.
"""

import logging

import httpx

from gatekeeper.config import settings
from gatekeeper.errors import SessionUnavailableError
from gatekeeper.schemas.session import SessionSnapshot, SessionUser

logger = logging.getLogger(__name__)

_REJECTED_STATUSES = frozenset({401, 403})


class SessionContext:
    def __init__(self, http_client: httpx.AsyncClient, token: str | None = None) -> None:
        self.http_client = http_client
        self.token = token
        self._snapshot = SessionSnapshot.loading()

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    async def refresh(self) -> SessionSnapshot:
        """Reload the user and replace the snapshot wholesale.

        Raises SessionUnavailableError only when the fetch fails and there is
        no earlier snapshot to fall back on.
        """
        if not self.token:
            self._snapshot = SessionSnapshot.anonymous()
            return self._snapshot

        try:
            response = await self.http_client.get(
                f"{settings.API_BASE_URL}/auth/me",
                headers={"Authorization": f"Bearer {self.token}"},
                timeout=settings.API_TIMEOUT_SECONDS,
            )
            if response.status_code in _REJECTED_STATUSES:
                self._snapshot = SessionSnapshot.anonymous()
                return self._snapshot
            response.raise_for_status()
            user = SessionUser.model_validate(response.json()["data"])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            if self._snapshot.status == "loading":
                raise SessionUnavailableError("Could not load the current session") from exc
            logger.warning("Session refresh failed, keeping last known snapshot: %s", exc)
            return self._snapshot

        self._snapshot = SessionSnapshot.for_user(user)
        return self._snapshot

    def logout(self) -> None:
        self.token = None
        self._snapshot = SessionSnapshot.anonymous()
