# File: async_spider/aggregator.py
"""async_spider.aggregator: Сбор сообщений во время обхода и итоговый отчёт."""

from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


class MessageAggregator:
    """Append-only collection of messages shared by all crawl tasks."""

    def __init__(self) -> None:
        self._messages: List[str] = []
        self._lock = threading.Lock()

    def append(self, message: str) -> None:
        with self._lock:
            self._messages.append(message)

    def drain_sorted(self) -> List[str]:
        """Return every appended message in ascending code point order, duplicates kept."""
        with self._lock:
            return sorted(self._messages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)


@dataclass(slots=True)
class CrawlReport:
    """Результат завершённого обхода."""

    messages: List[str] = field(default_factory=list)
    visited: int = 0
    unavailable: List[str] = field(default_factory=list)
    duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Словарь для сериализации; длительность округляется до миллисекунд."""
        data = asdict(self)
        data["duration"] = round(self.duration, 3)
        return data

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["MessageAggregator", "CrawlReport"]
