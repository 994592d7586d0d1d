# File: axe_scout/conformance.py
"""axe_scout.conformance: Предустановки уровней соответствия WCAG 2.1 для axe-core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Final, List, Tuple

from axe_scout.errors import ConformanceError

__all__ = ["Conformance", "PRESETS", "resolve_conformance"]

WCAG_21_A: Final[Tuple[str, ...]] = ("wcag2a", "wcag21a")
WCAG_21_AA: Final[Tuple[str, ...]] = (*WCAG_21_A, "wcag2aa", "wcag21aa")
WCAG_21_AAA: Final[Tuple[str, ...]] = (*WCAG_21_AA, "wcag2aaa", "wcag21aaa")

PRESETS: Final[Dict[str, Tuple[str, ...]]] = {
    "2.1 A": WCAG_21_A,
    "2.1 AA": WCAG_21_AA,
    "2.1 AAA": WCAG_21_AAA,
}


@dataclass(frozen=True, slots=True)
class Conformance:
    """Выбранный уровень: идентификатор, подпись для отчёта и фильтр тегов axe."""

    identifier: str
    label: str
    tags: Tuple[str, ...]

    def axe_options(self) -> Dict[str, Any]:
        """Опции ``axe.run``: только нарушения и только правила уровня."""
        run_only: List[str] = list(self.tags)
        return {"resultTypes": ["violations"], "runOnly": run_only}


def resolve_conformance(identifier: str) -> Conformance:
    """Возвращает Conformance для ``"2.1 A"``, ``"2.1 AA"`` или ``"2.1 AAA"``."""
    try:
        tags = PRESETS[identifier]
    except KeyError:
        raise ConformanceError(f"unsupported conformance: {identifier}") from None
    version, level = identifier.split(" ")
    return Conformance(identifier=identifier, label=f"WCAG {version} Level {level}", tags=tags)
