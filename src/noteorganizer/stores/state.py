"""Persisted user state in data/state.json: the draft, the API key, preferences."""

from __future__ import annotations

import contextlib
import json
import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DRAFT_KEY = "note-organizer-text"
DRAFT_SAVED_AT_KEY = "note-organizer-saved-at"
CREDENTIAL_KEY = "GEMINI_API_KEY"
SMART_MODE_KEY = "smart-mode"

_STATE_FILE = "state.json"


class StateStore:
    """Key-value state persisted as one JSON file.

    Each key holds a single value: there is one draft, one credential and
    one smart-mode flag. Writes replace the file atomically.
    """

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path
        self.state_file = data_path / _STATE_FILE

    def _load(self) -> dict[str, Any]:
        if not self.state_file.exists():
            return {}
        try:
            with open(self.state_file, encoding="utf-8") as f:
                state = json.load(f)
        except (json.JSONDecodeError, OSError):
            logger.warning("State file corrupt or unreadable, starting empty", exc_info=True)
            return {}
        if not isinstance(state, dict):
            logger.warning("State file does not hold an object, starting empty")
            return {}
        return state

    def _save(self, state: dict[str, Any]) -> None:
        self.data_path.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.data_path), suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(state, f, indent=2)
                f.write("\n")
            os.replace(tmp_path, str(self.state_file))
        except BaseException:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
            raise

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        state = self._load()
        state[key] = value
        self._save(state)

    def delete(self, key: str) -> None:
        state = self._load()
        if key in state:
            del state[key]
            self._save(state)

    # --- Draft ---

    def get_draft(self) -> str:
        draft = self.get(DRAFT_KEY, "")
        return draft if isinstance(draft, str) else ""

    def get_draft_saved_at(self) -> str | None:
        saved_at = self.get(DRAFT_SAVED_AT_KEY)
        return saved_at if isinstance(saved_at, str) else None

    def save_draft(self, text: str) -> str:
        """Persist the draft and return the ISO timestamp it was saved at."""
        saved_at = datetime.now(UTC).isoformat()
        state = self._load()
        state[DRAFT_KEY] = text
        state[DRAFT_SAVED_AT_KEY] = saved_at
        self._save(state)
        return saved_at

    def clear_draft(self) -> None:
        state = self._load()
        state.pop(DRAFT_KEY, None)
        state.pop(DRAFT_SAVED_AT_KEY, None)
        self._save(state)

    # --- Credential ---

    def get_credential(self) -> str | None:
        key = self.get(CREDENTIAL_KEY)
        return key if isinstance(key, str) and key else None

    def save_credential(self, api_key: str) -> None:
        self.set(CREDENTIAL_KEY, api_key)

    def clear_credential(self) -> None:
        self.delete(CREDENTIAL_KEY)

    # --- Preferences ---

    def get_smart_mode(self, default: bool = False) -> bool:
        value = self.get(SMART_MODE_KEY)
        return value if isinstance(value, bool) else default

    def set_smart_mode(self, enabled: bool) -> None:
        self.set(SMART_MODE_KEY, enabled)
