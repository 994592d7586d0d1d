# File: axe_scout/report/html_report.py
"""axe_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from datetime import timezone
from pathlib import Path
from typing import Any, Final, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from axe_scout import __version__
from axe_scout.aggregator import SiteReport
from axe_scout.ids import relation_id

__all__ = ["render_html_string", "render_html", "favicon"]

TEMPLATE_NAME: Final[str] = "report.html.j2"
PROJECT_URL: Final[str] = "https://pypi.org/project/axe-scout/"
PLAYWRIGHT_URL: Final[str] = "https://playwright.dev/python/"
AXE_CORE_URL: Final[str] = "https://github.com/dequelabs/axe-core"
DEFAULT_TEMPLATE_DIR: Final[Path] = Path(__file__).resolve().parent.parent / "templates"

_EMOJI: Final[dict[bool, str]] = {True: "🍏", False: "🍎"}


def favicon(failures: int) -> str:
    """Эмодзи вкладки: зелёное яблоко, если упавших тестов нет."""
    return _EMOJI[not failures]


def _environment(template_dir: Union[Path, str, None]) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(template_dir or DEFAULT_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "html.j2"]),
    )
    env.globals["next_id"] = relation_id
    return env


def render_html_string(report: SiteReport, template_dir: Union[Path, str, None] = None) -> str:
    """Возвращает самодостаточный HTML-документ для report.

    Весь интерполированный текст экранируется (autoescape), поэтому
    разметка из HTML-фрагментов нарушений не интерпретируется браузером.
    """
    template = _environment(template_dir).get_template(TEMPLATE_NAME)
    ended = report.summary.ended_at.astimezone(timezone.utc)

    context: dict[str, Any] = {
        "report": report,
        "emoji": favicon(report.summary.failed),
        "tool_version": __version__,
        "project_url": PROJECT_URL,
        "runner_url": PLAYWRIGHT_URL,
        "axe_core_url": AXE_CORE_URL,
        "ended_iso": ended.isoformat(),
        "ended_date": ended.strftime("%Y-%m-%d"),
        "ended_time": ended.strftime("%H:%M:%S"),
    }
    return template.render(**context)


def render_html(
    report: SiteReport,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт и сохраняет его по указанному пути.

    Args:
        report: объект SiteReport.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория со своими Jinja2-шаблонами (по умолчанию встроенные).

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from axe_scout.report.html_report import render_html
    html_path = render_html(report, 'reports/axe-report.html')
    ```
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_html_string(report, template_dir), encoding="utf-8")
    return output_path
