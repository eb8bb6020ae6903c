"""File-backed key/value storage for the tracker document."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from calorie_tracker.services.tracker import TrackerStorage

_logger = logging.getLogger(__name__)


@dataclass
class LocalFileStorage(TrackerStorage):
    """Stores documents by key in a single JSON file, like browser localStorage."""

    path: Path
    key: str

    def read(self) -> str | None:
        """Return the document stored under the key."""
        value = self._load_items().get(self.key)
        return value if isinstance(value, str) else None

    def write(self, document: str) -> None:
        """Store the document under the key, keeping other keys."""
        items = self._load_items()
        items[self.key] = document
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(items), encoding="utf-8")
        tmp_path.replace(self.path)

    def _load_items(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            items = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            _logger.warning("Ignoring unreadable storage file %s", self.path)
            return {}
        return items if isinstance(items, dict) else {}
