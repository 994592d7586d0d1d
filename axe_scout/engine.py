# File: axe_scout/engine.py
"""axe_scout.engine: Orchestration layer: план аудита, прогон в браузере и отчёт."""

from __future__ import annotations

import asyncio
import importlib.util
from importlib.metadata import version
from pathlib import Path
from typing import Optional, Union

from axe_scout.accumulator import ReportAccumulator
from axe_scout.aggregator import SiteReport
from axe_scout.audit.interpreter import Auditor, wcag
from axe_scout.audit.suite import Suite
from axe_scout.browser import PlaywrightDriver
from axe_scout.config import AuditConfig, load_config
from axe_scout.logger import logger
from axe_scout.report import flush
from axe_scout.runner import Runner

__all__ = ["Engine", "load_spec"]

SPEC_ENTRY_POINT = "register"


def load_spec(path: Union[str, Path], auditor: Auditor) -> None:
    """Импортирует Python-файл спецификации и вызывает его ``register(audit)``.

    Так в очередь попадают именованные функции-действия, которые нельзя
    описать в YAML.
    """
    path = Path(path)
    module_spec = importlib.util.spec_from_file_location(f"axe_scout_spec_{path.stem}", path)
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Cannot load audit specification from {path}")
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)

    register = getattr(module, SPEC_ENTRY_POINT, None)
    if not callable(register):
        raise AttributeError(f"{path} must define {SPEC_ENTRY_POINT}(audit)")
    register(auditor)


class Engine:
    """Фасад для CLI и тестов: конфиг → план → прогон → отчёт."""

    @staticmethod
    def load_config(path: Optional[str]) -> AuditConfig:
        """Загружает конфиг из YAML/JSON."""
        return load_config(path)

    def __init__(self, config: AuditConfig) -> None:
        self.config = config
        self.accumulator = ReportAccumulator()

    def build_plan(self, spec_path: Union[str, Path, None] = None) -> Suite:
        """Регистрирует очередь из конфига и (необязательно) из Python-спецификации."""
        auditor = wcag(self.config.conformance, self.config.interceptors)
        if self.config.queue:
            auditor(self.config.queue)
        if spec_path is not None:
            load_spec(spec_path, auditor)
        logger.info("Audit plan: %d tests", auditor.plan.count_cases())
        return auditor.plan

    def create_driver(self) -> PlaywrightDriver:
        return PlaywrightDriver(
            base_url=self.config.site_url,
            axe_core_path=self.config.axe_core_path,
            browser=self.config.browser,
            headless=self.config.headless,
            timeout=self.config.timeout,
        )

    async def run_plan(self, plan: Suite) -> SiteReport:
        """Выполняет план и записывает отчёт. Накопитель создаётся заново на каждый прогон."""
        self.accumulator = ReportAccumulator()
        async with self.create_driver() as driver:
            runner = Runner(driver, self.accumulator)
            summary = await runner.run(
                plan,
                base_url=self.config.site_url,
                runner_version=version("playwright"),
            )
        return flush(self.accumulator, summary, self.config.report_file, self.config.json_report)

    def start_audit(
        self,
        spec_path: Union[str, Path, None] = None,
        run_timeout: Optional[float] = None,
    ) -> SiteReport:
        """Строит план, запускает прогон (с общим таймаутом) и возвращает SiteReport."""
        logger.info("Starting audit of %s (%s)…", self.config.site_url, self.config.conformance)
        plan = self.build_plan(spec_path)

        try:
            return asyncio.run(asyncio.wait_for(self.run_plan(plan), timeout=run_timeout))
        except asyncio.TimeoutError:
            logger.error("Audit did not finish within %s seconds", run_timeout)
            raise
        except Exception as exc:
            logger.error("Audit failed: %s", exc)
            raise
