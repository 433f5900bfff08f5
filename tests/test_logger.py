# File: tests/test_logger.py
"""Тесты для async_spider.logger: обработчики, повторная настройка и общий логгер."""
import logging
import sys
from logging.handlers import RotatingFileHandler

from async_spider.config import SpiderConfig
from async_spider.crawler.crawler import AsyncSpider
from async_spider.crawler.fetcher import Fetcher
from async_spider.logger import LOGGER_NAME, configure, logger


def test_console_handler_writes_to_stderr():
    configured = configure(level="INFO")
    assert configured is logger
    assert configured.name == LOGGER_NAME
    assert configured.level == logging.INFO
    assert configured.propagate is False
    assert len(configured.handlers) == 1
    assert configured.handlers[0].stream is sys.stderr


def test_reconfigure_replaces_handlers(tmp_path):
    configure(log_file=tmp_path / "first.log")
    first = list(logger.handlers)
    configure()
    assert len(logger.handlers) == 1
    assert not any(h in logger.handlers for h in first)


def test_log_file_receives_records(tmp_path):
    log_file = tmp_path / "spider.log"
    configure(level="DEBUG", log_file=log_file)
    assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

    logger.debug("Visited %s", "/a")
    configure()  # closes the file handler

    text = log_file.read_text(encoding="utf-8")
    assert "Visited /a" in text
    assert "DEBUG" in text


def test_components_share_project_logger():
    config = SpiderConfig()
    assert Fetcher(session=None, config=config).logger is logger  # type: ignore[arg-type]
    assert AsyncSpider(config).logger is logger
