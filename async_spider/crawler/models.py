# async_spider/crawler/models.py
"""
Data models for the AsyncSpider crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True, slots=True)
class Node:
    """Decoded resource: optional message and the paths it points to."""

    message: Optional[str] = None
    successors: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_message(self) -> bool:
        """True when the message is present and not blank."""
        return self.message is not None and bool(self.message.strip())
