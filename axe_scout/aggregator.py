# File: axe_scout/aggregator.py
"""axe_scout.aggregator: Агрегация результатов сканирования в отчёт по сайту."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from axe_scout.accumulator import ReportAccumulator
from axe_scout.errors import ClassificationError
from axe_scout.models import ScanResult, Violation
from axe_scout.scanner import plural
from axe_scout.wcag import WCAG21_SUCCESS_CRITERIA, WCAG21_URL

__all__ = [
    "RunSummary",
    "RuleOccurrence",
    "PageReport",
    "SiteTotals",
    "SiteReport",
    "merge_page_reports",
    "errors_first",
    "success_criterion",
    "classify",
    "rule_position",
    "site_totals",
    "aggregate_results",
    "aggregate",
]

_CRITERION_RE = re.compile(r"^wcag(\d)(\d)(\d+)$")
_SC_TAG_RE = re.compile(r"^wcag\d+$")

IMPACT_ORDER: Dict[str, int] = {"critical": 0, "serious": 1, "moderate": 2, "minor": 3}

STATIC_POSITION = "Static page content"


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Метаданные завершённого прогона."""

    browser: str
    base_url: str
    runner_version: str
    started_at: datetime
    ended_at: datetime
    duration: float
    passed: int = 0
    failed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed


@dataclass(frozen=True, slots=True)
class RuleOccurrence:
    """Одно нарушение правила в конкретном сканировании страницы."""

    violation: Violation
    scan_index: int
    position: str
    criterion: str
    criterion_url: str


@dataclass(slots=True)
class PageReport:
    """Все сканирования одного URL: индекс 0 – статическая страница, далее фрагменты."""

    url: str
    scans: List[ScanResult] = field(default_factory=list)
    label: str = ""
    rules: List[RuleOccurrence] = field(default_factory=list)

    @property
    def violations(self) -> List[Violation]:
        return [v for scan in self.scans for v in scan.violations]

    @property
    def has_violations(self) -> bool:
        return any(scan.violations for scan in self.scans)

    @property
    def status(self) -> str:
        return "fail" if self.has_violations else "pass"

    @property
    def violation_count(self) -> int:
        return sum(v.node_count for v in self.violations)

    @property
    def rule_ids(self) -> List[str]:
        return list(dict.fromkeys(v.id for v in self.violations))

    @property
    def rule_count(self) -> int:
        return len(self.rule_ids)


@dataclass(frozen=True, slots=True)
class SiteTotals:
    violations: int = 0
    rules: int = 0
    pages: int = 0

    def describe(self) -> str:
        if not self.violations:
            return "No violations found 🎉"
        return (
            f"{plural('violation', self.violations)} of {plural('rule', self.rules)}"
            f" in {plural('page', self.pages)}"
        )


@dataclass(slots=True)
class SiteReport:
    """Итоговый отчёт: страницы (сначала с нарушениями), итоги и метаданные."""

    pages: List[PageReport]
    totals: SiteTotals
    conformance: str
    engine_version: str
    summary: RunSummary

    @property
    def base_url(self) -> str:
        return self.summary.base_url

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conformance": self.conformance,
            "engine_version": self.engine_version,
            "base_url": self.base_url,
            "browser": self.summary.browser,
            "runner_version": self.summary.runner_version,
            "started_at": self.summary.started_at.isoformat(),
            "ended_at": self.summary.ended_at.isoformat(),
            "duration": self.summary.duration,
            "tests": {
                "passed": self.summary.passed,
                "failed": self.summary.failed,
                "skipped": self.summary.skipped,
            },
            "totals": {
                "violations": self.totals.violations,
                "rules": self.totals.rules,
                "pages": self.totals.pages,
            },
            "pages": [
                {
                    "url": page.url,
                    "status": page.status,
                    "violations": page.violation_count,
                    "rules": page.rule_count,
                    "occurrences": [
                        {
                            "rule": occ.violation.id,
                            "position": occ.position,
                            "criterion": occ.criterion,
                            "impact": occ.violation.impact,
                            "nodes": occ.violation.node_count,
                        }
                        for occ in page.rules
                    ],
                    "scans": [scan.to_dict() for scan in page.scans],
                }
                for page in self.pages
            ],
        }


def merge_page_reports(scans: Iterable[ScanResult]) -> List[PageReport]:
    """Группирует сканирования по URL, сохраняя порядок первого появления и добавления."""
    by_url: Dict[str, PageReport] = {}
    for scan in scans:
        page = by_url.get(scan.url)
        if page is None:
            page = by_url[scan.url] = PageReport(url=scan.url)
        page.scans.append(scan)
    return list(by_url.values())


def errors_first(pages: Sequence[PageReport]) -> List[PageReport]:
    """Стабильно переносит страницы с нарушениями в начало."""
    return [p for p in pages if p.has_violations] + [p for p in pages if not p.has_violations]


def success_criterion(tag: str) -> str:
    """``"wcag143"`` → ``"1.4.3"``."""
    match = _CRITERION_RE.match(tag)
    if match is None:
        raise ClassificationError(f"Not a success criterion tag: {tag}")
    principle, guideline, criterion = match.groups()
    return f"{principle}.{guideline}.{criterion}"


def classify(violation: Violation) -> Tuple[str, str]:
    """Возвращает код критерия успеха и ссылку на его описание в WCAG 2.1."""
    aliases = [tag for tag in violation.tags if _SC_TAG_RE.match(tag)]
    if not aliases:
        raise ClassificationError(
            f"Rule {violation.id!r} has no WCAG success criterion tag: {list(violation.tags)}"
        )
    criterion = success_criterion(aliases[0])
    anchor = WCAG21_SUCCESS_CRITERIA.get(criterion)
    if anchor is None:
        raise ClassificationError(f"Unknown WCAG 2.1 success criterion {criterion} (rule {violation.id!r})")
    return criterion, f"{WCAG21_URL}#{anchor}"


def rule_position(scan_index: int, scan_count: int) -> str:
    if scan_count > 1 and scan_index > 0:
        return f"Page fragment {scan_index} of {scan_count - 1}"
    return STATIC_POSITION


def _impact_rank(violation: Violation) -> int:
    return IMPACT_ORDER.get(violation.impact or "", len(IMPACT_ORDER))


def _rule_occurrences(page: PageReport) -> List[RuleOccurrence]:
    occurrences: List[RuleOccurrence] = []
    scan_count = len(page.scans)
    for index, scan in enumerate(page.scans):
        position = rule_position(index, scan_count)
        for violation in sorted(scan.violations, key=_impact_rank):
            criterion, criterion_url = classify(violation)
            occurrences.append(RuleOccurrence(violation, index, position, criterion, criterion_url))
    return occurrences


def site_totals(pages: Sequence[PageReport]) -> SiteTotals:
    rules: Dict[str, None] = {}
    violations = 0
    failing = 0
    for page in pages:
        if page.has_violations:
            failing += 1
        violations += page.violation_count
        rules.update(dict.fromkeys(page.rule_ids))
    return SiteTotals(violations=violations, rules=len(rules), pages=failing)


def _page_label(url: str, base_url: str) -> str:
    base = base_url.rstrip("/")
    if base and url.startswith(base):
        return url.removeprefix(base) or "/"
    return url or "/"


def aggregate_results(
    scans: Sequence[ScanResult],
    summary: RunSummary,
    *,
    conformance: Optional[str] = None,
    engine_version: str = "N/A",
) -> SiteReport:
    """Собирает SiteReport; ClassificationError прерывает построение отчёта."""
    pages = errors_first(merge_page_reports(scans))
    for page in pages:
        page.label = _page_label(page.url, summary.base_url)
        page.rules = _rule_occurrences(page)
    return SiteReport(
        pages=pages,
        totals=site_totals(pages),
        conformance=conformance or "WCAG",
        engine_version=engine_version,
        summary=summary,
    )


def aggregate(accumulator: ReportAccumulator, summary: RunSummary) -> SiteReport:
    return aggregate_results(
        accumulator.scans,
        summary,
        conformance=accumulator.conformance,
        engine_version=accumulator.engine_version,
    )
