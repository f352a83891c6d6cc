import threading
from typing import Any, Callable, Dict

from wiregraph.domain import ISingletonCache


class SingletonCache(ISingletonCache):
    """Holds singleton instances shared by every resolution of one resolver.

    First construction of each key runs under a per-key lock so that
    concurrent first use builds the instance at most once. Locks are taken
    along dependency edges, which never form a cycle, so nested singleton
    construction cannot deadlock.

    Attributes:
        _instances: Cached instances keyed by concrete type.
        _key_locks: One lock per key, created lazily.
        _guard: Protects ``_key_locks``.
    """

    def __init__(self, thread_safe: bool = True) -> None:
        self._thread_safe = thread_safe
        self._instances: Dict[Any, Any] = {}
        self._key_locks: Dict[Any, threading.RLock] = {}
        self._guard = threading.Lock()

    def get(self, key: Any) -> Any:
        return self._instances[key]

    def __contains__(self, key: Any) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def get_or_create(self, key: Any, factory: Callable[[], Any]) -> Any:
        """Return the cached instance for ``key``, creating it at most once.

        Exceptions raised by ``factory`` propagate and nothing is cached.
        """
        if key in self._instances:
            return self._instances[key]

        if not self._thread_safe:
            instance = factory()
            self._instances[key] = instance
            return instance

        with self._lock_for(key):
            # Another thread may have finished while we waited.
            if key in self._instances:
                return self._instances[key]
            instance = factory()
            self._instances[key] = instance
            return instance

    def clear(self) -> None:
        with self._guard:
            self._instances.clear()
            self._key_locks.clear()

    def _lock_for(self, key: Any) -> threading.RLock:
        with self._guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.RLock()
            return lock
