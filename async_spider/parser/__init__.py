# File: async_spider/parser/__init__.py
"""async_spider.parser: Извлечение полей узла из тела ответа."""

from .node_parser import decode, unescape

__all__ = ["decode", "unescape"]
