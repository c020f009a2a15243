"""
Authorization
The set of developer ids allowed to run privileged commands
"""

import threading
from typing import FrozenSet, Hashable

from utils.logger import get_logger


class DeveloperRegistry:
    """
    Lock-guarded set of developer user ids.

    Starts empty and is seeded with the application owner once per
    process. The lock only ever covers the set operation itself, never
    an await.
    """

    def __init__(self):
        self.logger = get_logger("Authorization")
        self._lock = threading.Lock()
        self._ids: set = set()
        self._seeded = False
        self._connections = 0

    def record_connection(self) -> int:
        """Count a connection-established event and return the new total."""
        with self._lock:
            self._connections += 1
            return self._connections

    @property
    def connections(self) -> int:
        with self._lock:
            return self._connections

    @property
    def is_seeded(self) -> bool:
        with self._lock:
            return self._seeded

    def seed_once(self, owner_id: Hashable) -> bool:
        """
        Add the owner id if the registry has never been seeded.

        Returns:
            True if this call seeded the registry, False if it already was
        """
        with self._lock:
            if self._seeded:
                return False
            self._ids.add(owner_id)
            self._seeded = True

        self.logger.info(f"Developer access granted to {owner_id}")
        return True

    def ids(self) -> FrozenSet:
        with self._lock:
            return frozenset(self._ids)

    def __contains__(self, user_id: Hashable) -> bool:
        with self._lock:
            return user_id in self._ids
