"""Persistent cache pools for CCU data.

This module provides named pools of time-limited items. Each pool is kept
in memory and, if a cache directory is configured, persisted to one JSON
file per pool. Items can be saved immediately or deferred; deferred items
are visible right away but only written to disk on commit().
"""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from core.exceptions import CacheError

_LOGGER = logging.getLogger(__name__)

# Lifetime of structural data and name indexes
STRUCTURE_TTL = timedelta(days=31)
# Lifetime of parameter and variable values
STATE_TTL = timedelta(hours=1)


def _normalize_key(key) -> str:
    """Convert a cache key to the string stored in the pool file."""
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise CacheError(f"invalid cache key {key!r}")
    key = str(key)
    if not key:
        raise CacheError("cache key must not be empty")
    return key


class CacheItemPool:
    """A keyed store of items with an absolute expiry time."""

    def __init__(self, name: str, directory: Path | None = None):
        self.name = name
        self.file = Path(directory) / f'{name}.json' if directory is not None else None
        self._items: dict[str, dict] = {}
        self._deferred: dict[str, dict] = {}
        self._load()

    def _load(self):
        if self.file is None or not self.file.exists():
            return
        try:
            with open(self.file, 'r') as f:
                stored = json.load(f)
            now = datetime.now()
            self._items = {
                key: item for key, item in stored.items()
                if datetime.fromisoformat(item['expires']) > now
            }
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise CacheError(f"corrupt cache file {self.file}: {e}") from e
        _LOGGER.debug("Loaded %d items into cache pool %s", len(self._items), self.name)

    def _write(self):
        if self.file is None:
            return
        self.file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.file, 'w') as f:
            json.dump(self._items, f, indent=2)

    def _lookup(self, key: str) -> dict | None:
        for store in (self._deferred, self._items):
            item = store.get(key)
            if item is None:
                continue
            if datetime.fromisoformat(item['expires']) > datetime.now():
                return item
            del store[key]
        return None

    @staticmethod
    def _make_item(value: Any, ttl: timedelta) -> dict:
        return {'value': value, 'expires': (datetime.now() + ttl).isoformat()}

    def has(self, key) -> bool:
        """Check whether an unexpired item exists for key."""
        return self._lookup(_normalize_key(key)) is not None

    def get(self, key) -> Any:
        """Return the value stored for key.

        Raises:
            CacheError: If there is no unexpired item for key
        """
        item = self._lookup(_normalize_key(key))
        if item is None:
            raise CacheError(f"no item {key!r} in cache pool {self.name}")
        return item['value']

    def save(self, key, value: Any, ttl: timedelta):
        """Store an item and persist the pool immediately."""
        key = _normalize_key(key)
        self._deferred.pop(key, None)
        self._items[key] = self._make_item(value, ttl)
        self._write()

    def save_deferred(self, key, value: Any, ttl: timedelta):
        """Store an item that is persisted on the next commit()."""
        self._deferred[_normalize_key(key)] = self._make_item(value, ttl)

    def has_pending(self) -> bool:
        return bool(self._deferred)

    def commit(self):
        """Persist all deferred items of this pool."""
        if not self._deferred:
            return
        _LOGGER.debug("Committing %d items of cache pool %s", len(self._deferred), self.name)
        self._items.update(self._deferred)
        self._deferred = {}
        self._write()

    def clear(self):
        """Drop every item, including the pool file."""
        self._items = {}
        self._deferred = {}
        if self.file is not None and self.file.exists():
            self.file.unlink()

    def __len__(self) -> int:
        now = datetime.now()
        merged = {**self._items, **self._deferred}
        return sum(1 for item in merged.values() if datetime.fromisoformat(item['expires']) > now)


class CacheManager:
    """Opens and keeps track of the cache pools of one session."""

    def __init__(self, directory: Path | None = None):
        self.directory = Path(directory) if directory is not None else None
        self._pools: dict[str, CacheItemPool] = {}

    def get_item_pool(self, name: str) -> CacheItemPool:
        """Return the pool with the given name, opening it on first use."""
        if name not in self._pools:
            self._pools[name] = CacheItemPool(name, self.directory)
        return self._pools[name]

    def is_opened(self, name: str) -> bool:
        return name in self._pools

    def commit(self):
        """Commit every opened pool with pending deferred writes."""
        for pool in self._pools.values():
            if pool.has_pending():
                pool.commit()

    def clear(self):
        """Drop all cached data, including pools not opened in this session."""
        if self.directory is not None and self.directory.exists():
            for file in self.directory.glob('*.json'):
                self.get_item_pool(file.stem)
        for pool in self._pools.values():
            pool.clear()

    def get_cache_info(self) -> dict:
        """Get information about the persisted cache.

        Returns:
            Dictionary with the cache directory and the number of unexpired
            items per pool
        """
        if self.directory is not None and self.directory.exists():
            for file in sorted(self.directory.glob('*.json')):
                self.get_item_pool(file.stem)
        return {
            'directory': self.directory,
            'persistent': self.directory is not None,
            'counts': {name: len(pool) for name, pool in sorted(self._pools.items())},
        }
