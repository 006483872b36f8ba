"""Injectable query cache for server collections.

Every server resource the board reads is cached under a typed ``QueryKey``.
Mutation handlers invalidate the keys they affect; subscribers (the board,
the GUI) refetch on invalidation. Fetch failures never raise out of
``fetch``: the caller gets the last good data, or the supplied default.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from creatorhub.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class QueryKey:
    resource: str
    params: Tuple[Any, ...] = ()

    def __str__(self) -> str:
        if not self.params:
            return self.resource
        return f"{self.resource}:{'/'.join(str(p) for p in self.params)}"


class Keys:
    """Factory for the cache keys of each resource collection."""

    @staticmethod
    def active_company() -> QueryKey:
        return QueryKey("active-company")

    @staticmethod
    def stages(company_id: int) -> QueryKey:
        return QueryKey("workflow-stages", (company_id,))

    @staticmethod
    def applications() -> QueryKey:
        return QueryKey("applications")

    @staticmethod
    def active_applications() -> QueryKey:
        return QueryKey("applications-active")

    @staticmethod
    def campaigns() -> QueryKey:
        return QueryKey("campaigns")

    @staticmethod
    def creators() -> QueryKey:
        return QueryKey("creators")

    @staticmethod
    def deliverables(application_id: int) -> QueryKey:
        return QueryKey("deliverables", (application_id,))

    @staticmethod
    def messages(application_id: int) -> QueryKey:
        return QueryKey("messages", (application_id,))

    @staticmethod
    def creator_stats(campaign_id: int, creator_id: int) -> QueryKey:
        return QueryKey("creator-stats", (campaign_id, creator_id))

    @staticmethod
    def leaderboard(campaign_id: int) -> QueryKey:
        return QueryKey("leaderboard", (campaign_id,))


@dataclass
class QueryState:
    data: Any = None
    has_data: bool = False
    error: Optional[BaseException] = None
    stale: bool = True
    updated_at: Optional[float] = None

    @property
    def status(self) -> str:
        if self.error is not None:
            return "error"
        if not self.has_data:
            return "loading"
        return "stale" if self.stale else "success"


class QueryCache:
    """Thread-safe cache of server collections keyed by ``QueryKey``."""

    def __init__(self):
        self._entries: Dict[QueryKey, QueryState] = {}
        self._subscribers: List[Callable[[QueryKey], None]] = []
        self._lock = threading.RLock()

    def fetch(self, key: QueryKey, loader: Callable[[], Any], default: Any = None, *, force_refresh: bool = False) -> Any:
        """Return cached data for ``key``, loading it when missing or stale."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.has_data and not entry.stale and not force_refresh:
                return entry.data

        try:
            data = loader()
        except Exception as exc:
            logger.warning("fetch %s failed: %s", key, exc)
            with self._lock:
                entry = self._entries.setdefault(key, QueryState())
                entry.error = exc
                entry.stale = True
                return entry.data if entry.has_data else default

        with self._lock:
            entry = self._entries.setdefault(key, QueryState())
            entry.data = data
            entry.has_data = True
            entry.error = None
            entry.stale = False
            entry.updated_at = time.time()
        return data

    def peek(self, key: QueryKey, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not entry.has_data:
                return default
            return entry.data

    def state(self, key: QueryKey) -> QueryState:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return QueryState()
            return QueryState(entry.data, entry.has_data, entry.error, entry.stale, entry.updated_at)

    def set_data(self, key: QueryKey, data: Any) -> None:
        """Write data directly (optimistic updates, rollbacks)."""
        with self._lock:
            entry = self._entries.setdefault(key, QueryState())
            entry.data = data
            entry.has_data = True
            entry.error = None
            entry.stale = False
            entry.updated_at = time.time()

    def invalidate(self, key: QueryKey) -> None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                entry.stale = True
        self._notify(key)

    def invalidate_resource(self, resource: str) -> None:
        with self._lock:
            keys = [k for k in self._entries if k.resource == resource]
            for k in keys:
                self._entries[k].stale = True
        for k in keys:
            self._notify(k)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def subscribe(self, callback: Callable[[QueryKey], None]) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, key: QueryKey) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(key)
