# File: axe_scout/report/__init__.py
"""axe_scout.report: Сборка и запись итогового отчёта в конце прогона."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from axe_scout.accumulator import ReportAccumulator
from axe_scout.aggregator import RunSummary, SiteReport, aggregate
from axe_scout.logger import logger
from axe_scout.report.html_report import render_html, render_html_string
from axe_scout.report.json_report import render_json

DEFAULT_REPORT_FILE = Path("reports/axe-report.html")


def flush(
    accumulator: ReportAccumulator,
    summary: RunSummary,
    report_file: Union[str, Path] = DEFAULT_REPORT_FILE,
    json_file: Optional[Union[str, Path]] = None,
    template_dir: Optional[Union[str, Path]] = None,
) -> SiteReport:
    """Агрегирует накопленные сканирования и записывает HTML (и при желании JSON)."""
    report = aggregate(accumulator, summary)
    logger.info("Site summary: %s", report.totals.describe())

    html_path = render_html(report, report_file, template_dir)
    logger.info("HTML report: %s", html_path)
    if json_file is not None:
        json_path = render_json(report, json_file)
        logger.info("JSON report: %s", json_path)
    return report


__all__ = ["DEFAULT_REPORT_FILE", "flush", "render_html", "render_html_string", "render_json"]
