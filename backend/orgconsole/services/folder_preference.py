"""Persisted folder selection — the console's single client preference."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from orgconsole.config import settings
from orgconsole.utils.drive import ROOT_FOLDER_ID

logger = logging.getLogger(__name__)


class FolderPreferenceStore:
    """Load/save hooks for the selected folder id, backed by a JSON file."""

    def __init__(self, path: str | None = None):
        self._path = Path(path or settings.folder_preference_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> str | None:
        """Stored folder id, or None when nothing usable is on disk."""
        if not self._path.exists():
            return None

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            folder_id = data["folder_id"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning("Failed to load folder preference, ignoring: %s", e)
            return None
        return folder_id or None

    def save(self, folder_id: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "folder_id": folder_id,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Saved folder preference: %s", folder_id)

    def load_or_default(self) -> str:
        return self.load() or ROOT_FOLDER_ID
