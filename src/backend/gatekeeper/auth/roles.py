"""Role helpers shared by the evaluator, the guard and display code.

super_admin is detected by name *or* by the is_super_admin flag: the API
has shipped both encodings of the same fact. Every helper is total; a
missing or empty role set simply answers False / None.
"""

from collections.abc import Collection, Iterable, Sequence

from gatekeeper.schemas.session import Role

SUPER_ADMIN_ROLE = "super_admin"
ADMIN_ROLE = "admin"
PARTNER_ROLE = "partner"
COURIER_ROLE = "courier"

NO_ROLE_LABEL = "No role"

_BADGE_TONES: dict[str, str] = {
    SUPER_ADMIN_ROLE: "purple",
    ADMIN_ROLE: "red",
    PARTNER_ROLE: "blue",
    COURIER_ROLE: "green",
}
_DEFAULT_TONE = "gray"


def _names(roles: Iterable[Role] | None) -> set[str]:
    return {r.name for r in roles or ()}


def _as_names(names: Collection[str] | str) -> Collection[str]:
    # A bare string is one role name, not a collection of characters.
    return (names,) if isinstance(names, str) else names


def has_role(roles: Iterable[Role] | None, name: str) -> bool:
    return name in _names(roles)


def has_any_role(roles: Iterable[Role] | None, names: Collection[str] | str) -> bool:
    return not _names(roles).isdisjoint(_as_names(names))


def has_all_roles(roles: Iterable[Role] | None, names: Collection[str] | str) -> bool:
    # An empty role set holds nothing, not even the empty requirement.
    assigned = _names(roles)
    if not assigned:
        return False
    return assigned.issuperset(_as_names(names))


def _is_super_admin_role(role: Role) -> bool:
    return role.name == SUPER_ADMIN_ROLE or role.is_super_admin


def is_super_admin(roles: Iterable[Role] | None) -> bool:
    """Return True if any role is super_admin by name or by flag."""
    return any(_is_super_admin_role(r) for r in roles or ())


def is_admin(roles: Iterable[Role] | None) -> bool:
    """super_admin is implicitly an admin."""
    return has_role(roles, ADMIN_ROLE) or is_super_admin(roles)


def is_partner(roles: Iterable[Role] | None) -> bool:
    return has_role(roles, PARTNER_ROLE)


def is_courier(roles: Iterable[Role] | None) -> bool:
    return has_role(roles, COURIER_ROLE)


def get_primary_role(roles: Sequence[Role] | None) -> Role | None:
    """Pick the role shown in compact displays.

    Precedence: super-admin (wherever it sits) > admin > first assigned.
    """
    if not roles:
        return None
    for role in roles:
        if _is_super_admin_role(role):
            return role
    for role in roles:
        if role.name == ADMIN_ROLE:
            return role
    return roles[0]


def format_role_name(role: Role) -> str:
    return role.display_name or role.name[:1].upper() + role.name[1:]


def get_all_role_names(roles: Sequence[Role] | None) -> str:
    if not roles:
        return NO_ROLE_LABEL
    return ", ".join(format_role_name(r) for r in roles)


def role_badge(role: Role) -> str:
    """Badge tone for a role; super-admin by flag gets the super-admin tone."""
    if _is_super_admin_role(role):
        return _BADGE_TONES[SUPER_ADMIN_ROLE]
    return _BADGE_TONES.get(role.name, _DEFAULT_TONE)
