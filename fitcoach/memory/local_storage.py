"""Local device storage: one JSON document per key under the data directory."""

import json
import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.environ.get("FITCOACH_DATA_DIR") or Path(__file__).parent.parent.parent / "data")
STORAGE_DIR = DATA_DIR / "local"

# Fixed keys, one per artifact
PLAN_KEY = "generated_plan"
USER_GOALS_KEY = "user_goals"
PROFILE_KEY = "profile"

_SAFE_KEY = re.compile(r"^[a-z0-9_\-]+$")


def wods_key(sport: str) -> str:
    """Storage key for a sport's weekly WOD notes, e.g. ``crossfit_wods``."""
    return "_".join(sport.lower().split()) + "_wods"


class LocalStorage:
    """Key-value persistence for plan, goals, WODs and profile caches.

    A missing or unreadable document is "no data yet", never an error.
    """

    def __init__(self, storage_dir: str | Path | None = None):
        self._dir = Path(storage_dir) if storage_dir else STORAGE_DIR

    @property
    def storage_dir(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def get(self, key: str, default=None):
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Unreadable local document %s, ignoring: %s", path.name, e)
            return default

    def set(self, key: str, value) -> Path:
        """Serialize ``value`` and write it under ``key``. Returns the path."""
        path = self._path(key)
        self._dir.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(value, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
        return path

    def remove(self, key: str) -> bool:
        """Delete the document. Returns False if there was nothing to delete."""
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def has(self, key: str) -> bool:
        return self._path(key).exists()
