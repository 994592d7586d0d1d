# === FILE: axe_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска аудита AxeScout через командную строку.

Команды:
  run       Выполнить аудит и записать отчёт
  plan      Показать дерево зарегистрированных наборов и тестов
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: axe-scout.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда run опции:
  --spec PATH         Python-файл с функцией register(audit)
  --html PATH         Путь HTML-отчёта (override report_file)
  --json PATH         Сохранить также JSON-отчёт
  --run-timeout SEC   Таймаут всего прогона (секунд)

Пример:
  axe-scout --config axe-scout.yaml run --spec audits/menu.py --json reports/axe-report.json
"""
import asyncio
import sys
from pathlib import Path

import click

from axe_scout import __version__
from axe_scout.audit.suite import render_tree
from axe_scout.config import load_config
from axe_scout.engine import Engine
from axe_scout.logger import init_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='AxeScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default='axe-scout.yaml',
    show_default=True,
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
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд AxeScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('run', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--spec', '-s', 'spec_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Python-файл спецификации с функцией register(audit)'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь HTML-отчёта (вместо report_file из конфига)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--run-timeout', 'run_timeout',
    type=float,
    default=None,
    help='Таймаут всего прогона (секунд)'
)
@click.pass_context
def run(ctx, spec_path, html_output, json_output, run_timeout):
    """Выполнить аудит и сгенерировать отчёт."""
    cfg = ctx.obj['config']
    overrides = {}
    if html_output:
        overrides['report_file'] = html_output
    if json_output:
        overrides['json_report'] = json_output
    if overrides:
        cfg = cfg.model_copy(update=overrides)

    click.echo(f'Starting audit of {cfg.site_url} ({cfg.conformance})')
    engine = Engine(cfg)
    try:
        report = engine.start_audit(spec_path, run_timeout=run_timeout)
    except asyncio.TimeoutError:
        print_error(f'Аудит не завершён за {run_timeout} секунд')
    except Exception as e:
        print_error(f'Ошибка при аудите: {e}')

    click.echo(f'Site summary: {report.totals.describe()}')
    click.echo(f'HTML report: {cfg.report_file}')
    if cfg.json_report:
        click.echo(f'JSON report: {cfg.json_report}')
    if report.summary.failed:
        ctx.exit(1)


@cli.command('plan', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--spec', '-s', 'spec_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Python-файл спецификации с функцией register(audit)'
)
@click.pass_context
def show_plan(ctx, spec_path):
    """Показать зарегистрированные наборы и тесты без запуска браузера."""
    engine = Engine(ctx.obj['config'])
    try:
        plan = engine.build_plan(spec_path)
    except Exception as e:
        print_error(f'Ошибка в спецификации аудита: {e}')
    for line in render_tree(plan):
        click.echo(line)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
