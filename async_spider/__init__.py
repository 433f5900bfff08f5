# async_spider/__init__.py
"""
AsyncSpider package initializer.
Defines package version; the CLI lives in :mod:`async_spider.cli`.
"""
__version__ = "0.1.0"
