"""Supabase ``profiles`` row access and the best-effort plan replica.

The local plan document is authoritative; the backend row is a replica.
Writes go through ``ProfileSync``, which retries with exponential backoff
and drops retries that a newer commit has superseded.
"""

import asyncio
import logging
import os
from datetime import datetime, timezone

from supabase import Client, create_client

from fitcoach.memory.profile import split_profile_row, to_backend_goals

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"

SYNC_MAX_ATTEMPTS = 3
SYNC_BASE_DELAY = 0.5  # seconds, doubled per retry


def has_backend_config() -> bool:
    return bool(os.environ.get("SUPABASE_URL") and os.environ.get("SUPABASE_KEY"))


def get_supabase_client() -> Client:
    """Create a Supabase client from SUPABASE_URL / SUPABASE_KEY."""
    url = os.environ.get("SUPABASE_URL")
    key = os.environ.get("SUPABASE_KEY")
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set in environment")
    return create_client(url, key)


async def fetch_profile(client: Client, user_id: str) -> dict | None:
    """Load and normalize the user's ``profiles`` row. None if missing."""
    response = await asyncio.to_thread(
        lambda: client.table(PROFILES_TABLE).select("*").eq("id", user_id).maybe_single().execute()
    )
    row = getattr(response, "data", None) if response is not None else None
    if not row:
        return None
    return split_profile_row(row)


async def update_profile(client: Client, user_id: str, fields: dict) -> None:
    """Update columns of the user's row. Raises on backend errors."""
    await asyncio.to_thread(
        lambda: client.table(PROFILES_TABLE).update(fields).eq("id", user_id).execute()
    )


def plan_row_fields(plan: dict) -> dict:
    return {
        "generated_plan": plan,
        "plan_generated_at": plan.get("generated_at") or datetime.now(timezone.utc).isoformat(),
    }


def settings_row_fields(goals: dict, training_types: list[str], profile_data: dict | None = None) -> dict:
    """Row columns for a settings change, with profile data re-nested."""
    return {
        "goals": to_backend_goals(goals, profile_data),
        "training_types": list(training_types),
    }


class ProfileSync:
    """Replicates committed plans to the user's ``profiles`` row.

    ``push_plan`` is fire-and-forget safe: failures are retried
    ``SYNC_MAX_ATTEMPTS`` times with exponential backoff and then logged,
    never raised. Each push takes a sequence number; a retry whose number
    is no longer the latest stops, so the newest commit wins.
    """

    def __init__(self, client: Client, user_id: str, base_delay: float = SYNC_BASE_DELAY):
        self.client = client
        self.user_id = user_id
        self.base_delay = base_delay
        self._seq = 0
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_env(cls, user_id: str) -> "ProfileSync | None":
        """Build a sync from environment config, or None when unconfigured."""
        if not has_backend_config() or not user_id:
            return None
        return cls(get_supabase_client(), user_id)

    async def push_plan(self, plan: dict) -> bool:
        """Write ``plan`` to the row. Returns True once the backend accepted it."""
        self._seq += 1
        seq = self._seq
        fields = plan_row_fields(plan)

        for attempt in range(1, SYNC_MAX_ATTEMPTS + 1):
            if seq != self._seq:
                logger.info("Plan sync #%d superseded by #%d", seq, self._seq)
                return False
            try:
                await update_profile(self.client, self.user_id, fields)
                logger.info("Plan synced to backend (attempt %d)", attempt)
                return True
            except Exception as e:
                logger.warning("Plan sync attempt %d/%d failed: %s", attempt, SYNC_MAX_ATTEMPTS, e)
                if attempt < SYNC_MAX_ATTEMPTS:
                    await asyncio.sleep(self.base_delay * 2 ** (attempt - 1))

        logger.error("Plan sync gave up after %d attempts; local copy kept", SYNC_MAX_ATTEMPTS)
        return False

    async def push_settings(self, goals: dict, training_types: list[str], profile_data: dict | None = None) -> bool:
        try:
            await update_profile(self.client, self.user_id, settings_row_fields(goals, training_types, profile_data))
        except Exception as e:
            logger.warning("Settings sync failed: %s", e)
            return False
        return True

    def schedule(self, plan: dict):
        """Start ``push_plan`` in the background.

        Inside a running event loop this returns the task; with no loop
        (plain CLI code) the push runs to completion before returning.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.push_plan(plan))

        task = loop.create_task(self.push_plan(plan))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self):
        """Wait for every scheduled push to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
