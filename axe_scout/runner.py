# axe_scout/runner.py
"""
Sequential runner for a registered audit plan.

Tests run one at a time against a single driver. Every test starts from a
fresh browser state (``driver.reset()``), runs its inherited
``before_each`` hooks and then its body. A failing test is recorded and
logged; it never stops the run or touches the accumulator's earlier scans.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from axe_scout.accumulator import ReportAccumulator
from axe_scout.aggregator import RunSummary
from axe_scout.audit.suite import PlannedCase, RunContext, Suite, iter_cases
from axe_scout.errors import AccessibilityViolationError
from axe_scout.logger import logger
from axe_scout.scanner import ScanDriver

__all__ = ["CaseOutcome", "Runner", "PASSED", "FAILED", "SKIPPED"]

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class CaseOutcome:
    title: str
    state: str
    error: Optional[str] = None


class Runner:
    """Executes every planned case in registration order."""

    def __init__(self, driver: ScanDriver, accumulator: ReportAccumulator) -> None:
        self.driver = driver
        self.accumulator = accumulator
        self.outcomes: List[CaseOutcome] = []

    async def run(self, plan: Suite, *, base_url: str = "", runner_version: str = "N/A") -> RunSummary:
        started_at = datetime.now(timezone.utc)
        t0 = time.monotonic()

        for planned in iter_cases(plan):
            if planned.skipped:
                logger.info("- %s (skipped)", planned.title)
                self.outcomes.append(CaseOutcome(planned.title, SKIPPED))
                continue
            self.outcomes.append(await self._run_case(planned))

        summary = RunSummary(
            browser=self.driver.browser_name,
            base_url=base_url,
            runner_version=runner_version,
            started_at=started_at,
            ended_at=datetime.now(timezone.utc),
            duration=time.monotonic() - t0,
            passed=self._count(PASSED),
            failed=self._count(FAILED),
            skipped=self._count(SKIPPED),
        )
        logger.info(
            "Run finished in %.1fs: %d passed, %d failed, %d skipped",
            summary.duration,
            summary.passed,
            summary.failed,
            summary.skipped,
        )
        return summary

    def _count(self, state: str) -> int:
        return sum(1 for o in self.outcomes if o.state == state)

    async def _run_case(self, planned: PlannedCase) -> CaseOutcome:
        ctx = RunContext(driver=self.driver, accumulator=self.accumulator)
        logger.info("▶ %s", planned.title)
        try:
            await self.driver.reset()
            for hook in planned.hooks:
                await hook(ctx)
            await planned.case.body(ctx)
        except AccessibilityViolationError as exc:
            logger.error("✖ %s: %s", planned.title, exc)
            return CaseOutcome(planned.title, FAILED, str(exc))
        except Exception as exc:
            logger.error("✖ %s: %s", planned.title, exc, exc_info=True)
            return CaseOutcome(planned.title, FAILED, f"{type(exc).__name__}: {exc}")
        logger.info("✔ %s", planned.title)
        return CaseOutcome(planned.title, PASSED)
