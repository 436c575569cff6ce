"""
Design (preferences.py)
- Purpose: Remember the chosen view mode between sessions (JSON on disk).
- Inputs: Path (defaults to get_preferences_path()), ViewMode for save.
- Outputs: ViewMode on load; None on save.
- Side effects: Reads/writes one small file. Load failures fall back to the
                default mode; save failures are logged and ignored.
- Scope: One file per signed-in user (for_user), so one user's choice never
         becomes another user's default. The unnamed file is for the CLI.
- Thread-safety: Call from the UI thread only.
"""

import hashlib
import json
import logging
from pathlib import Path

from .config import PREFERENCE_KEY, PREFERENCES_DIR, PREFERENCES_FILENAME
from .models import ViewMode

logger = logging.getLogger(__name__)


def get_preferences_path(user: str | None = None) -> Path:
    """Resolve the preferences file (COACH_DASHBOARD_HOME or ~/.coach_dashboard).

    With a user, the file lives under users/ and is named by a hash of the
    trimmed, lower-cased email so any address maps to a safe filename.
    """
    if user is None:
        return PREFERENCES_DIR / PREFERENCES_FILENAME
    key = hashlib.sha256(user.strip().lower().encode("utf-8")).hexdigest()[:32]
    return PREFERENCES_DIR / "users" / f"{key}.json"


class PreferenceStore:
    def __init__(self, path: Path | str | None = None, default: ViewMode = ViewMode.NORMAL):
        self.path = Path(path) if path is not None else get_preferences_path()
        self.default = default

    @classmethod
    def for_user(cls, user: str, base_dir: Path | str | None = None) -> "PreferenceStore":
        """Store private to `user`, optionally rooted somewhere other than PREFERENCES_DIR."""
        path = get_preferences_path(user)
        if base_dir is not None:
            path = Path(base_dir) / "users" / path.name
        return cls(path)

    def load(self) -> ViewMode:
        """
        Return the saved view mode, or the default when the file is missing,
        unreadable, or holds anything other than a known mode.
        """
        if not self.path.exists():
            return self.default
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.warning("Could not read preferences from %s", self.path)
            return self.default
        if not isinstance(data, dict):
            return self.default
        mode = ViewMode.parse(data.get(PREFERENCE_KEY))
        return mode if mode is not None else self.default

    def save(self, mode: ViewMode) -> None:
        """
        Persist `mode`, overwriting any previous value. Ignores OSError
        (e.g. read-only home directory).
        """
        mode = ViewMode(mode)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({PREFERENCE_KEY: mode.value}, f, indent=2)
        except OSError:
            logger.warning("Could not save preferences to %s", self.path)
