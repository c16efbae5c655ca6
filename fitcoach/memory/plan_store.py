"""Observable store for the active user's generated plan.

One ``PlanStore`` per process holds the plan in memory. Every change goes
through ``commit``: local document first, then subscribers, then the remote
replica (best effort). Reconciliation wrappers do a read-modify-write of
the whole plan and report whether anything changed.
"""

import logging
from typing import Callable

from fitcoach.agent.generator import generate_complete_plan
from fitcoach.memory.local_storage import PLAN_KEY, LocalStorage, wods_key
from fitcoach.memory.profile import save_profile
from fitcoach.tools import reconcile, shopping

logger = logging.getLogger(__name__)

Subscriber = Callable[[dict | None], None]


class PlanStore:
    """Single source of truth for the plan shared by every view.

    Args:
        storage: Local document storage (authoritative copy)
        replica: Optional object with ``schedule(plan)``, e.g. ``ProfileSync``
    """

    def __init__(self, storage: LocalStorage | None = None, replica=None):
        self.storage = storage or LocalStorage()
        self.replica = replica
        self._plan: dict | None = None
        self._loaded = False
        self._subscribers: list[Subscriber] = []

    def get(self) -> dict | None:
        """The current plan, loaded from local storage on first access."""
        if not self._loaded:
            loaded = self.storage.get(PLAN_KEY)
            if loaded is not None and not isinstance(loaded, dict):
                logger.warning("Stored plan is not an object, ignoring it")
                loaded = None
            self._plan = loaded
            self._loaded = True
        return self._plan

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback(plan)``. Returns a function that unsubscribes."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, plan: dict | None):
        for callback in list(self._subscribers):
            try:
                callback(plan)
            except Exception:
                logger.exception("Plan subscriber %r failed", callback)

    def commit(self, plan: dict) -> dict:
        """Persist ``plan`` locally, notify subscribers, then replicate."""
        self.storage.set(PLAN_KEY, plan)
        self._plan = plan
        self._loaded = True
        self._notify(plan)

        if self.replica is not None:
            try:
                self.replica.schedule(plan)
            except Exception as e:
                logger.warning("Could not schedule plan replication: %s", e)
        return plan

    def update(self, fn: Callable[[dict], dict]) -> dict | None:
        """Replace the plan with ``fn(plan)``.

        No commit happens when there is no plan or when ``fn`` hands back
        the same object (a rejected operation). Returns the resulting plan.
        """
        current = self.get()
        if current is None:
            logger.info("No plan to update")
            return None
        updated = fn(current)
        if updated is None or updated is current:
            return current
        return self.commit(updated)

    def delete(self) -> bool:
        """Remove the local copy. The backend row is left as it is."""
        removed = self.storage.remove(PLAN_KEY)
        self._plan = None
        self._loaded = True
        self._notify(None)
        return removed

    # ── Reconciliation wrappers ─────────────────────────────────────

    def _apply(self, fn: Callable[[dict], dict]) -> bool:
        before = self.get()
        return before is not None and self.update(fn) is not before

    def swap_days(self, i: int, j: int) -> bool:
        return self._apply(lambda plan: reconcile.swap_days(plan, i, j))

    def toggle_shopping_item(self, index: int) -> bool:
        def toggle(plan):
            items = plan.get("shopping_list") or []
            if not 0 <= index < len(items):
                logger.info("Shopping item %d out of range (%d items)", index, len(items))
                return plan
            return {**plan, "shopping_list": shopping.toggle_shopping_item(items, index)}

        return self._apply(toggle)

    def set_shopping_list(self, items: list[dict]) -> bool:
        return self._apply(lambda plan: {**plan, "shopping_list": [dict(i) for i in items]})

    def set_sport_wods(self, sport: str, wods: dict) -> bool:
        """Copy a sport's WOD map into the plan under ``<sport>_wods``."""
        field = wods_key(sport)
        return self._apply(lambda plan: {**plan, field: {k: dict(v) for k, v in wods.items()}})


_default_store: PlanStore | None = None


def get_plan_store() -> PlanStore:
    """The process-wide store, created on first use."""
    global _default_store
    if _default_store is None:
        _default_store = PlanStore()
    return _default_store


def set_plan_store(store: PlanStore | None):
    global _default_store
    _default_store = store


class PlanService:
    """Generates plans and commits them through a ``PlanStore``."""

    def __init__(self, store: PlanStore, settings_sync=None):
        self.store = store
        self.settings_sync = settings_sync

    async def generate(self, goals: dict, training_types: list[str], profile_data: dict | None = None) -> dict:
        plan = await generate_complete_plan(goals, training_types, profile_data)
        logger.info("Committing %s plan", plan.get("source", "ai"))
        return self.store.commit(plan)

    async def regenerate(self, goals: dict, training_types: list[str], profile_data: dict | None = None) -> dict:
        """Save changed settings, then generate and commit a fresh plan."""
        save_profile(self.store.storage, goals, training_types, profile_data)
        if self.settings_sync is not None:
            await self.settings_sync.push_settings(goals, training_types, profile_data)
        return await self.generate(goals, training_types, profile_data)
