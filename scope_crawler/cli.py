#!/usr/bin/env python3
"""
Точка входа для запуска краулера ScopeCrawler через командную строку.

Команды:
  crawl     Выполнить обход и сохранить output.jsonl / config.jsonl
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда crawl опции:
  --start-url URL     Стартовый URL и префикс области обхода
  --max-depth INT     Максимальная глубина
  --output-dir DIR    Каталог для результатов
  --workers INT       Максимум одновременных загрузок
  --link-delay SEC    Пауза перед каждой дочерней ссылкой
  --timeout SEC       Таймаут одного запроса

Пример:
  scope-crawler crawl --start-url https://note.com --max-depth 1 --output-dir ./data
"""
import sys
import asyncio
import json
from pathlib import Path

import click
from pydantic import ValidationError

from scope_crawler import __version__
from scope_crawler.config import load_config
from scope_crawler.errors import FatalSetupError
from scope_crawler.logger import DEFAULT_FORMAT, configure
from scope_crawler.engine import start_crawl

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='ScopeCrawler, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд ScopeCrawler CLI."""
    configure(level=log_level, log_file=log_file, log_format=log_format)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.option('--start-url', '--startURL', 'start_url', default=None, help='Стартовый URL (префикс области обхода)')
@click.option('--max-depth', '--maxDepth', 'max_depth', type=int, default=None, help='Максимальная глубина обхода')
@click.option(
    '--output-dir', '--outputDirPath', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог для результатов'
)
@click.option('--workers', 'worker_limit', type=int, default=None, help='Максимум одновременных загрузок')
@click.option('--link-delay', 'link_delay', type=float, default=None, help='Пауза перед каждой дочерней ссылкой (секунд)')
@click.option('--timeout', 'timeout', type=float, default=None, help='Таймаут одного запроса (секунд)')
@click.pass_context
def crawl(ctx, start_url, max_depth, output_dir, worker_limit, link_delay, timeout):
    """Выполнить обход и записать результаты в каталог запуска."""
    try:
        cfg = ctx.obj['config'].override(
            base_url=start_url,
            max_depth=max_depth,
            output_dir=output_dir,
            worker_limit=worker_limit,
            link_delay=link_delay,
            timeout=timeout,
        )
    except ValidationError as e:
        print_error(f'Некорректные параметры: {e}')

    click.echo(f'Starting crawl: {cfg.base_url} (max depth {cfg.max_depth})')
    try:
        result = asyncio.run(start_crawl(cfg))
    except FatalSetupError as e:
        print_error(f'Ошибка подготовки вывода: {e}')
    except Exception as e:
        print_error(f'Ошибка при обходе: {e}')

    if result.run_dir is not None:
        click.echo(f'Run directory: {result.run_dir}')
    click.echo(json.dumps(result.as_record(), ensure_ascii=False))


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
