"""In-process cache for list reads, invalidated per query group on write."""

from threading import RLock
from typing import Any, Awaitable, Callable, Dict, Hashable, Tuple

from components.core.config import get_settings
from components.core.utils import get_logger

logger = get_logger("cache")

CacheKey = Tuple[str, int, Hashable]


class QueryCache:
    """Holds query results keyed by (group, user_id, params).

    A write to one group drops that group's entries for the writing
    household only; other groups are left alone.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._entries: Dict[CacheKey, Any] = {}
        self._lock = RLock()

    async def get_or_load(
        self,
        group: str,
        user_id: int,
        params: Hashable,
        loader: Callable[[], Awaitable[Any]],
    ) -> Any:
        key = (group, user_id, params)
        if self.enabled:
            with self._lock:
                if key in self._entries:
                    return self._entries[key]
        value = await loader()
        if self.enabled:
            with self._lock:
                self._entries[key] = value
        return value

    def invalidate(self, group: str, user_id: int) -> None:
        with self._lock:
            stale = [key for key in self._entries if key[0] == group and key[1] == user_id]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached '{group}' reads for user {user_id}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


query_cache = QueryCache(enabled=get_settings().QUERY_CACHE_ENABLED)
