# File: async_spider/crawler/__init__.py
"""async_spider.crawler: Обход графа ресурсов: загрузка узлов и оркестрация задач."""
