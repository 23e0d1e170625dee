"""
Fragment cache

Strategies may cache the markup of individual nodes between renders. The
cache belongs to the caller and is strictly best-effort: a miss, an expired
entry or a failing backend all mean "render it again".
"""

import hashlib
import json
import time
from typing import Any, Dict, Optional, Tuple

from ..models.node import MenuNode


class FragmentCache:
    """Interface for fragment caches; this base class never stores anything"""

    def get(self, key: str) -> Optional[str]:
        return None

    def set(self, key: str, value: str, ttl: int = 0) -> None:
        return None

    def delete(self, key: str) -> None:
        return None

    def purge(self, prefix: str) -> int:
        return 0

    def purgeAll(self) -> int:
        return 0


class NullFragmentCache(FragmentCache):
    """Explicit no-op cache"""
    pass


class MemoryFragmentCache(FragmentCache):
    """
    In-process cache with per-entry TTL.

    Expired entries are dropped when read, and in bulk once the cache
    reaches ``max_entries``; if it is still full the oldest entries go.

    Args:
        default_ttl: Lifetime in seconds for entries stored with ttl=0
            (0 keeps entries until purged)
        max_entries: Size bound (0 = unbounded)
        clock: Time source, replaceable in tests
    """

    def __init__(self, default_ttl: int = 3600, max_entries: int = 1000, clock=time.monotonic) -> None:
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self.clock = clock
        self.entries: Dict[str, Tuple[float, str]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self.entries.get(key)
        if entry is None:
            return None
        expires, value = entry
        if expires and expires <= self.clock():
            del self.entries[key]
            return None
        return value

    def set(self, key: str, value: str, ttl: int = 0) -> None:
        ttl = ttl or self.default_ttl
        expires = self.clock() + ttl if ttl else 0.0
        self.entries.pop(key, None)
        if self.max_entries and len(self.entries) >= self.max_entries:
            self.expired_evict()
            while len(self.entries) >= self.max_entries:
                del self.entries[next(iter(self.entries))]
        self.entries[key] = (expires, value)

    def expired_evict(self) -> int:
        """Remove every expired entry; returns the count removed"""
        now = self.clock()
        keys = [key for key, (expires, _) in self.entries.items() if expires and expires <= now]
        for key in keys:
            del self.entries[key]
        return len(keys)

    def delete(self, key: str) -> None:
        self.entries.pop(key, None)

    def purge(self, prefix: str) -> int:
        """Remove entries whose key starts with ``prefix``; returns the count removed"""
        keys = [key for key in self.entries if key.startswith(prefix)]
        for key in keys:
            del self.entries[key]
        return len(keys)

    def purgeAll(self) -> int:
        count = len(self.entries)
        self.entries.clear()
        return count

    def __len__(self) -> int:
        return len(self.entries)


def cacheKey_make(variant: str, node: MenuNode, options_fingerprint: str) -> str:
    """
    Key for one node's fragment: ``variant:node-id:depth:digest``.

    The digest covers the node's fields and the resolved options, so edits
    to either produce a new key rather than a stale hit.
    """
    payload = json.dumps(
        {"node": node.asdict(), "options": options_fingerprint}, sort_keys=True, default=str
    )
    digest = hashlib.md5(payload.encode("utf-8")).hexdigest()[:16]
    return f"{variant}:{node.id}:{node.depth}:{digest}"
