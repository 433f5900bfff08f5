# === FILE: async_spider/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска обходчика AsyncSpider через командную строку.

Использование:
  async-spider [BASE_URL] [START_PATH]

Аргументы:
  BASE_URL            Базовый адрес сервера (default: http://localhost:8080)
  START_PATH          Путь, с которого начинается обход (default: /)

Опции:
  --config PATH       YAML/JSON-конфиг (значения по умолчанию, если не указан)
  --crawl-timeout SEC Общий таймаут обхода (default: 180)
  --json PATH         Дополнительно сохранить JSON-отчёт в файл
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --version, -v       Показать версию AsyncSpider

Найденные сообщения печатаются в stdout по одному в строке, в лексикографическом
порядке. При ошибке или истечении таймаута ничего не печатается, код выхода 1.

Пример:
  async-spider http://localhost:8080 / --crawl-timeout 60
"""
import asyncio
import sys
from pathlib import Path

import click

from async_spider import __version__
from async_spider.config import SpiderConfig, load_config
from async_spider.engine import start_crawl
from async_spider.errors import CrawlTimeoutError
from async_spider.logger import init_logging
from async_spider.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='AsyncSpider, version %(version)s')
@click.argument('base_url', required=False, default=None)
@click.argument('start_path', required=False, default=None)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут всего обхода (секунд), по умолчанию из конфига.'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
def cli(base_url, start_path, config_path, crawl_timeout, json_output, log_level, log_file):
    """Обойти граф ресурсов и напечатать найденные сообщения."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)

    try:
        cfg = load_config(config_path)
        overrides = {}
        if base_url is not None:
            overrides['base_url'] = base_url
        if start_path is not None:
            overrides['start_path'] = start_path
        if overrides:
            cfg = SpiderConfig(**{**cfg.model_dump(), **overrides})
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    timeout = crawl_timeout if crawl_timeout is not None else cfg.crawl_timeout
    try:
        report = asyncio.run(start_crawl(cfg, timeout=timeout))
    except CrawlTimeoutError:
        print_error(f'Обход не завершён за {timeout:g} секунд')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if json_output:
        try:
            render_json(report, json_output)
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    for message in report.messages:
        click.echo(message)


if __name__ == "__main__":
    cli()
