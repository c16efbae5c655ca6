"""Per-sport weekly WOD notes (CrossFit, Hyrox, Hybrid boxes)."""

import logging

from fitcoach.memory.local_storage import LocalStorage, wods_key
from fitcoach.tools.reconcile import clear_wod_day, set_wod_field

logger = logging.getLogger(__name__)


class WodStore:
    """The WOD map of one sport: weekday key -> {strength, wod, notes}.

    Edits stay in memory until ``save``.
    """

    def __init__(self, sport: str, storage: LocalStorage | None = None):
        self.sport = sport.strip().lower()
        self.storage = storage or LocalStorage()
        loaded = self.storage.get(wods_key(self.sport), {})
        self.wods: dict = loaded if isinstance(loaded, dict) else {}

    def set_field(self, day: str, field: str, value: str) -> dict:
        self.wods = set_wod_field(self.wods, day, field, value)
        return self.wods

    def clear_day(self, day: str) -> dict:
        self.wods = clear_wod_day(self.wods, day)
        return self.wods

    def save(self, plan_store=None) -> bool:
        """Persist the map; with a plan store, also copy it into the plan.

        Returns whether the plan copy was written (False without a store
        or when there is no plan yet).
        """
        self.storage.set(wods_key(self.sport), self.wods)
        logger.info("Saved %s WODs (%d days)", self.sport, len(self.wods))
        if plan_store is None:
            return False
        return plan_store.set_sport_wods(self.sport, self.wods)
