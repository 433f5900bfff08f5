# === FILE: async_spider/parser/node_parser.py ===
"""Narrow extraction of a resource node from a raw response body.

The server answers with a small JSON-like document; only two fields matter:

* ``message``    — a string, may be absent;
* ``successors`` — an array of strings, may be absent or empty.

This is **not** a JSON parser. Fields are located with regular expressions,
the first occurrence wins, field order does not matter and everything else in
the body is ignored. String values are matched with escape awareness so that
``\\"`` does not terminate a value, but unescaping covers only ``\\"`` and
``\\\\``; any other escape sequence is kept verbatim. A malformed or truncated
body simply yields missing fields.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import List, Optional

from async_spider.crawler.models import Node

__all__: Sequence[str] = ("decode", "unescape")

_STRING = r'"((?:[^"\\]|\\.)*)"'

_MESSAGE_RE = re.compile(r'"message"\s*:\s*' + _STRING, re.DOTALL)
_SUCCESSORS_RE = re.compile(
    r'"successors"\s*:\s*\[((?:[^\]"]|"(?:[^"\\]|\\.)*")*)\]', re.DOTALL
)
_ITEM_RE = re.compile(_STRING, re.DOTALL)
_ESCAPE_RE = re.compile(r'\\(["\\])')


def unescape(value: str) -> str:
    """Replace ``\\"`` with ``"`` and ``\\\\`` with ``\\``; leave other sequences as is."""
    return _ESCAPE_RE.sub(r"\1", value)


def _find_message(body: str) -> Optional[str]:
    match = _MESSAGE_RE.search(body)
    if match is None:
        return None
    return unescape(match.group(1))


def _find_successors(body: str) -> List[str]:
    match = _SUCCESSORS_RE.search(body)
    if match is None:
        return []
    return [unescape(item.group(1)) for item in _ITEM_RE.finditer(match.group(1))]


def decode(body: str) -> Node:
    """Decode *body* into a :class:`Node`. Never raises on bad input."""
    if not body:
        return Node()
    return Node(message=_find_message(body), successors=tuple(_find_successors(body)))
