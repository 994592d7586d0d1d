# File: tests/conftest.py
import copy
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from axe_scout.accumulator import ReportAccumulator
from axe_scout.aggregator import RunSummary
from axe_scout.models import ScanResult

BASE_URL = "http://example.com"


def make_violation(
    rule_id: str = "color-contrast",
    nodes: int = 1,
    impact: str = "serious",
    tags: Tuple[str, ...] = ("cat.color", "wcag2aa", "wcag143"),
    help: str = "Elements must meet minimum color contrast ratio thresholds",
) -> Dict[str, Any]:
    """Violation in the shape returned by axe.run."""
    return {
        "id": rule_id,
        "impact": impact,
        "tags": list(tags),
        "description": f"Description of {rule_id}",
        "help": help,
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}?application=axeAPI",
        "nodes": [
            {
                "html": f'<p class="n{i}">Low contrast</p>',
                "target": [f".n{i}"],
                "any": [
                    {
                        "id": rule_id,
                        "impact": impact,
                        "message": "Element has insufficient color contrast of 2.5",
                        "data": {
                            "fgColor": "#777777",
                            "bgColor": "#ffffff",
                            "contrastRatio": 2.5,
                            "fontSize": "12.0pt (16px)",
                            "fontWeight": "normal",
                            "expectedContrastRatio": "4.5:1",
                        },
                    }
                ],
                "all": [],
                "failureSummary": "Fix any of the following:\n  Element has insufficient color contrast",
            }
            for i in range(nodes)
        ],
    }


def make_scan(url: str, *violations: Dict[str, Any], fragment: Optional[str] = None) -> ScanResult:
    return ScanResult.from_axe(
        {"url": url, "violations": list(violations)},
        engine_version="4.9.1",
        conformance="WCAG 2.1 Level AA",
        fragment=fragment,
    )


class FakeDriver:
    """In-memory ScanDriver: records calls, returns canned axe results.

    ``results`` maps ``(visited_url, context)`` to a list of violations.
    """

    def __init__(self, results: Optional[Dict[Tuple[str, Optional[str]], List[Dict[str, Any]]]] = None):
        self.results = results or {}
        self.calls: List[Tuple[Any, ...]] = []
        self.axe_version = "N/A"
        self.browser_name = "fake"
        self.visited: Optional[str] = None
        self.dom_ready = True

    async def reset(self) -> None:
        self.calls.append(("reset",))
        self.visited = None

    async def visit(self, url: str) -> None:
        self.calls.append(("visit", url))
        self.visited = url

    async def inject_axe(self) -> str:
        self.calls.append(("inject_axe",))
        self.axe_version = "4.9.1"
        return self.axe_version

    async def click(self, selector: str) -> None:
        self.calls.append(("click", selector))

    async def click_and_wait_for_request(self, selector: str, pattern: str, alias: str) -> None:
        self.calls.append(("click_and_wait", selector, pattern, alias))

    async def stub(self, content_type: str, url_glob: str) -> None:
        self.calls.append(("stub", content_type, url_glob))

    async def run_axe(self, context, options) -> Dict[str, Any]:
        self.calls.append(("run_axe", context, options, self.dom_ready))
        violations = self.results.get((self.visited, context), [])
        return {"url": f"{BASE_URL}{self.visited}", "violations": copy.deepcopy(violations)}

    async def close(self) -> None:
        self.calls.append(("close",))

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture()
def fake_driver() -> FakeDriver:
    return FakeDriver()


@pytest.fixture()
def accumulator() -> ReportAccumulator:
    return ReportAccumulator()


@pytest.fixture()
def run_summary() -> RunSummary:
    return RunSummary(
        browser="chromium",
        base_url=BASE_URL,
        runner_version="1.44.0",
        started_at=datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc),
        ended_at=datetime(2024, 5, 1, 10, 1, 30, tzinfo=timezone.utc),
        duration=90.0,
        passed=3,
        failed=1,
    )


@pytest.fixture()
def axe_core_file(tmp_path: Path) -> Path:
    """Stand-in for axe.min.js: the config only checks that the file exists."""
    path = tmp_path / "axe.min.js"
    path.write_text("window.axe = {version: '4.9.1'};", encoding="utf-8")
    return path
