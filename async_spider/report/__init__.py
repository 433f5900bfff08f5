# File: async_spider/report/__init__.py
"""async_spider.report: Сохранение отчёта об обходе."""

from .json_report import render_json

__all__ = ["render_json"]
