# async_spider/crawler/visited.py
"""
Concurrency-safe set of claimed path identifiers.
"""
from __future__ import annotations

import threading
from typing import Set


class VisitedSet:
    """Set of paths with an atomic insert-if-absent operation."""

    def __init__(self) -> None:
        self._paths: Set[str] = set()
        self._lock = threading.Lock()

    def claim(self, path: str) -> bool:
        """Insert *path* and return True, or return False if it was already claimed."""
        with self._lock:
            if path in self._paths:
                return False
            self._paths.add(path)
            return True

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)
