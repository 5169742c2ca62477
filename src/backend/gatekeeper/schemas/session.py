"""Pydantic records for the session boundary.

The upstream /auth/me payload is loosely shaped; these frozen models close
it down so the decision layer only ever sees validated, immutable data.
Unknown keys (email, timestamps, files...) are ignored.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

SessionStatus = Literal["loading", "authenticated", "unauthenticated"]


class Permission(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    uuid: str | None = None
    name: str
    display_name: str | None = None


class Role(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    uuid: str | None = None
    name: str
    display_name: str | None = None
    is_super_admin: bool = False

    @field_validator("is_super_admin", mode="before")
    @classmethod
    def _null_flag_is_false(cls, value: object) -> object:
        return False if value is None else value


class SessionUser(BaseModel):
    """The current user as delivered by the session collaborator.

    ``permissions`` is the consolidated set: already flattened across every
    assigned role. It is read as-is and never recomputed here.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    uuid: str | None = None
    name: str = ""
    email: str | None = None
    roles: tuple[Role, ...] = ()
    permissions: tuple[Permission, ...] = ()

    @field_validator("roles", "permissions", mode="before")
    @classmethod
    def _missing_is_empty(cls, value: object) -> object:
        return () if value is None else value

    @property
    def permission_names(self) -> frozenset[str]:
        return frozenset(p.name for p in self.permissions)


class SessionSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: SessionStatus = "loading"
    user: SessionUser | None = None

    @classmethod
    def loading(cls) -> "SessionSnapshot":
        return cls(status="loading")

    @classmethod
    def anonymous(cls) -> "SessionSnapshot":
        return cls(status="unauthenticated")

    @classmethod
    def for_user(cls, user: SessionUser) -> "SessionSnapshot":
        return cls(status="authenticated", user=user)

    @property
    def roles(self) -> tuple[Role, ...]:
        return self.user.roles if self.user is not None else ()

    @property
    def permission_names(self) -> frozenset[str]:
        return self.user.permission_names if self.user is not None else frozenset()
