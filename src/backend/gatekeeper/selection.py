"""Select N of M entities and mark at most one of them as primary.

Used by assignment forms (courier coverage zones). The invariant is that the
primary, when set, is always a member of the current selection.

Asking for a non-selected primary is a caller bug. In strict mode (the
development default) it raises PreconditionError; otherwise it is logged and
ignored. In both cases the state is left exactly as it was.
"""

import logging
from collections.abc import Iterable

from gatekeeper.config import settings
from gatekeeper.errors import PreconditionError
from gatekeeper.schemas.zones import ZoneAssignment

logger = logging.getLogger(__name__)


class SelectionWithPrimary:
    def __init__(
        self,
        selected: Iterable[str] = (),
        primary: str | None = None,
        *,
        required: bool = False,
        disabled: bool = False,
        strict: bool | None = None,
    ) -> None:
        self._selected: list[str] = list(dict.fromkeys(selected))
        if primary is not None and primary not in self._selected:
            raise PreconditionError(f"Primary '{primary}' is not part of the selection")
        self._primary = primary
        self.required = required
        self.disabled = disabled
        self.strict = settings.strict_preconditions if strict is None else strict

    def __repr__(self) -> str:
        return f"SelectionWithPrimary(selected={self._selected!r}, primary={self._primary!r})"

    @property
    def selected(self) -> tuple[str, ...]:
        return tuple(self._selected)

    @property
    def primary(self) -> str | None:
        return self._primary

    def is_selected(self, item_id: str) -> bool:
        return item_id in self._selected

    def toggle(self, item_id: str) -> None:
        if self.disabled:
            return
        if item_id in self._selected:
            self._selected.remove(item_id)
            if self._primary == item_id:
                self._primary = None
        else:
            self._selected.append(item_id)

    def set_primary(self, item_id: str) -> None:
        if self.disabled:
            return
        if item_id == self._primary:
            self._primary = None
        elif item_id in self._selected:
            self._primary = item_id
        elif self.strict:
            raise PreconditionError(f"Cannot make '{item_id}' primary: it is not selected")
        else:
            logger.warning("Ignoring set_primary(%r): id is not selected", item_id)

    # ── Derived signals ────────────────────────────────────────────────────────

    @property
    def required_but_empty(self) -> bool:
        return self.required and not self._selected

    @property
    def multiple_without_primary(self) -> bool:
        """Advisory: several items and no primary. Never blocks submission."""
        return len(self._selected) > 1 and self._primary is None

    def to_assignment(self) -> ZoneAssignment:
        return ZoneAssignment(zone_ids=list(self._selected), primary_zone_id=self._primary)
