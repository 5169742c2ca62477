"""Persisted console chrome flags (sidebar collapse, theme).

Preferences is handed its store explicitly. It reads once at construction
and writes through on every change; there is no module-level instance.
"""

import json
import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from gatekeeper.errors import ValidationError

logger = logging.getLogger(__name__)

Theme = Literal["light", "dark"]


class UIPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    sidebar_collapsed: bool = False
    theme: Theme = "light"


class PreferenceStore:
    """JSON file holding one UIPreferences document."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> UIPreferences:
        if not self.path.exists():
            return UIPreferences()
        try:
            return UIPreferences.model_validate(json.loads(self.path.read_text()))
        except (OSError, json.JSONDecodeError, PydanticValidationError) as exc:
            logger.warning("Ignoring unreadable preferences at %s: %s", self.path, exc)
            return UIPreferences()

    def save(self, prefs: UIPreferences) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(prefs.model_dump_json())


class Preferences:
    def __init__(self, store: PreferenceStore) -> None:
        self.store = store
        self._current = store.load()

    @property
    def current(self) -> UIPreferences:
        return self._current

    @property
    def sidebar_collapsed(self) -> bool:
        return self._current.sidebar_collapsed

    @property
    def theme(self) -> Theme:
        return self._current.theme

    def _write(self, **changes: object) -> UIPreferences:
        self._current = self._current.model_copy(update=changes)
        self.store.save(self._current)
        return self._current

    def set_sidebar_collapsed(self, collapsed: bool) -> UIPreferences:
        return self._write(sidebar_collapsed=collapsed)

    def toggle_sidebar(self) -> UIPreferences:
        return self._write(sidebar_collapsed=not self._current.sidebar_collapsed)

    def set_theme(self, theme: Theme) -> UIPreferences:
        if theme not in ("light", "dark"):
            raise ValidationError(f"Unknown theme '{theme}'")
        return self._write(theme=theme)

    def toggle_theme(self) -> UIPreferences:
        return self._write(theme="dark" if self._current.theme == "light" else "light")
