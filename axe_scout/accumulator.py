# File: axe_scout/accumulator.py
"""axe_scout.accumulator: Накопитель результатов сканирования за один прогон."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from axe_scout.logger import logger
from axe_scout.models import ScanResult

__all__ = ["ReportAccumulator"]


@dataclass(slots=True)
class ReportAccumulator:
    """Все ScanResult одного прогона в порядке добавления.

    Создаётся пустым в начале прогона, передаётся по ссылке каждому
    сканированию и читается один раз агрегатором после завершения.
    Индексация по страницам откладывается до агрегации.
    """

    engine_version: str = "N/A"
    conformance: Optional[str] = None
    scans: List[ScanResult] = field(default_factory=list)

    def record_meta(self, engine_version: str, conformance: str) -> None:
        """Запоминает версию axe-core и уровень соответствия (последний побеждает)."""
        self.engine_version = engine_version
        self.conformance = conformance

    def append(self, scan: ScanResult) -> None:
        self.scans.append(scan)
        logger.debug(
            "Recorded scan #%d for %s (%d violations)",
            len(self.scans),
            scan.url,
            len(scan.violations),
        )

    def ingest(self, payload: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Командная точка входа: ``{engine_version, conformance, result[, fragment]}``.

        Возвращает сырой список нарушений для последующей проверки в тесте.
        """
        engine_version = payload.get("engine_version") or "N/A"
        conformance = payload["conformance"]
        result = payload["result"]
        self.record_meta(engine_version, conformance)
        self.append(
            ScanResult.from_axe(
                result,
                engine_version=engine_version,
                conformance=conformance,
                fragment=payload.get("fragment"),
            )
        )
        return list(result.get("violations", []))

    def __len__(self) -> int:
        return len(self.scans)
