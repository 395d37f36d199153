"""
Auth-gated background sync.

While a user is signed in the coordinator polls each collection on an
interval, mirrors the results into the :class:`LocalStore` and tells
listeners which collection changed. Signing out cancels the polls and wipes
the cache.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterable, Awaitable, Callable, Dict, List, Optional, Sequence

from .api import LockInClient
from .local_store import LocalStore

logger = logging.getLogger(__name__)

GOALS = "goals"
GOAL_TODOS = "goal_todos"
TODOS = "todos"
PARTNERS = "partners"
COLLECTIONS: Sequence[str] = (GOALS, GOAL_TODOS, TODOS, PARTNERS)

Listener = Callable[[str], None]


class SyncCoordinator:
    """Keeps a :class:`LocalStore` in step with the API while signed in.

    Args:
        client: API client authenticated as the signed-in user.
        store: Cache to mirror into.
        poll_interval: Seconds between polls of one collection.
    """

    def __init__(self, client: LockInClient, store: LocalStore, *, poll_interval: float = 30.0) -> None:
        self.client = client
        self.store = store
        self.poll_interval = poll_interval
        self._listeners: List[Listener] = []
        self._tasks: Dict[str, "asyncio.Task[None]"] = {}
        self._fetchers: Dict[str, Callable[[], Awaitable[int]]] = {
            GOALS: self._sync_goals,
            GOAL_TODOS: self._sync_goal_todos,
            TODOS: self._sync_todos,
            PARTNERS: self._sync_partners,
        }

    @property
    def is_running(self) -> bool:
        return bool(self._tasks)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, collection: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(collection)
            except Exception as e:
                logger.error(f"Sync listener failed for {collection}: {e}", exc_info=True)

    async def _sync_goals(self) -> int:
        goals = await self.client.list_goals()
        return await asyncio.to_thread(self.store.sync_goals, goals)

    async def _sync_goal_todos(self) -> int:
        todos = await self.client.list_all_goal_todos()
        return await asyncio.to_thread(self.store.sync_goal_todos, todos)

    async def _sync_todos(self) -> int:
        todos = await self.client.list_todos()
        return await asyncio.to_thread(self.store.sync_todos, todos)

    async def _sync_partners(self) -> int:
        partners = await self.client.list_partners()
        return await asyncio.to_thread(self.store.sync_partners, partners)

    async def refresh(self, collection: str) -> int:
        """Fetch one collection now, mirror it and notify listeners."""
        count = await self._fetchers[collection]()
        self._notify(collection)
        return count

    async def refresh_study_sessions(self, goal_id: str) -> int:
        """Fetch one goal's study sessions; they are loaded on demand rather than polled."""
        sessions = await self.client.list_study_sessions(goal_id=goal_id)
        count = await asyncio.to_thread(self.store.sync_study_sessions, sessions, goal_id=goal_id)
        self._notify(f"study_sessions:{goal_id}")
        return count

    async def _poll(self, collection: str) -> None:
        while True:
            try:
                await self.refresh(collection)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.warning(f"Sync of {collection} failed, retrying in {self.poll_interval}s: {e}")
            await asyncio.sleep(self.poll_interval)

    def start(self) -> None:
        """Start one polling task per collection; no-op when already running."""
        if self._tasks:
            return
        logger.info("Starting sync")
        for collection in COLLECTIONS:
            self._tasks[collection] = asyncio.create_task(self._poll(collection), name=f"lockin-sync-{collection}")

    async def stop(self, *, clear: bool = True) -> None:
        """Cancel polling and, by default, wipe the local cache."""
        tasks = list(self._tasks.values())
        self._tasks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        if clear:
            await asyncio.to_thread(self.store.clear_all)
        if tasks or clear:
            logger.info(f"Sync stopped (cache cleared: {clear})")

    async def run(self, auth_states: AsyncIterable[Optional[bool]]) -> None:
        """Follow an auth-state stream: truthy starts syncing, falsy stops it and clears the cache."""
        try:
            async for signed_in in auth_states:
                if signed_in:
                    self.start()
                else:
                    await self.stop(clear=True)
        finally:
            await self.stop(clear=False)
