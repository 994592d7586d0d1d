# === FILE: axe_scout/scanner.py ===
"""
Scan executor: runs axe-core through a driver, records the result and
asserts that the scanned page (or fragment) has no violations.

The browser itself sits behind :class:`ScanDriver`; see
:mod:`axe_scout.browser` for the Playwright implementation.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from axe_scout.accumulator import ReportAccumulator
from axe_scout.conformance import Conformance
from axe_scout.errors import AccessibilityViolationError
from axe_scout.logger import logger

__all__ = ["ScanDriver", "run_scan", "format_node", "violation_summary", "plural"]

_FONT_SIZE_RE = re.compile(r"\((\d+(?:\.\d+)?px)\)$")
_FIX_ALL_PREFIX = re.compile(r"^Fix all of the following:")


@runtime_checkable
class ScanDriver(Protocol):
    """Browser automation boundary used by the runner and the scan executor."""

    axe_version: str
    browser_name: str

    async def reset(self) -> None: ...

    async def visit(self, url: str) -> None: ...

    async def inject_axe(self) -> str: ...

    async def click(self, selector: str) -> None: ...

    async def click_and_wait_for_request(self, selector: str, pattern: str, alias: str) -> None: ...

    async def stub(self, content_type: str, url_glob: str) -> None: ...

    async def run_axe(self, context: Optional[str], options: Mapping[str, Any]) -> Dict[str, Any]: ...

    async def close(self) -> None: ...


def plural(word: str, count: int) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def violation_summary(violations: Sequence[Mapping[str, Any]]) -> str:
    """``"3 violations of 2 rules"`` for a raw axe violation list."""
    total = sum(len(v.get("nodes", [])) for v in violations)
    return f"{plural('violation', total)} of {plural('rule', len(violations))}"


def _failure_message(checks: Sequence[Mapping[str, Any]], fallback: str) -> str:
    if checks:
        return checks[0].get("message", "")
    defixed = _FIX_ALL_PREFIX.sub("", fallback).strip()
    return defixed[:1].upper() + defixed[1:]


def _contrast_payload(checks: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    data = checks[0].get("data") or {}
    font_size = str(data.get("fontSize", ""))
    match = _FONT_SIZE_RE.search(font_size)
    return {
        "Actual contrast": f"{data.get('contrastRatio')}:1",
        "Minimum contrast": data.get("expectedContrastRatio"),
        "CSS": {
            "color": data.get("fgColor"),
            "background-color": data.get("bgColor"),
            "font-size": match.group(1) if match else font_size,
            "font-weight": data.get("fontWeight"),
        },
    }


def format_node(rule_id: str, node: Mapping[str, Any], index: int) -> Dict[str, Any]:
    """Diagnostic entries for one offending node (1-based *index*)."""
    prefix = f"Node {index}"
    checks = node.get("any", [])
    if rule_id == "color-contrast" and checks:
        details = {f"{prefix} {k}": v for k, v in _contrast_payload(checks).items()}
    else:
        details = {f"{prefix} message": _failure_message(checks, node.get("failureSummary", ""))}
    details[f"{prefix} selector"] = ",".join(node.get("target", []))
    details[f"{prefix} HTML"] = node.get("html", "")
    return details


def _log_violation(violation: Mapping[str, Any]) -> None:
    nodes = violation.get("nodes", [])
    selectors = ",".join(t for n in nodes for t in n.get("target", []))
    wcag_tags = [t for t in violation.get("tags", []) if t.startswith("wcag")]
    logger.warning(
        "%s (%s|%s) %s",
        violation.get("help", violation.get("id")),
        violation.get("impact"),
        "|".join(wcag_tags),
        selectors,
    )
    logger.debug("  url: %s", violation.get("helpUrl", "").split("?")[0])
    for index, node in enumerate(nodes, start=1):
        for key, value in format_node(violation.get("id", ""), node, index).items():
            logger.debug("  %s: %s", key, value)


async def run_scan(
    driver: ScanDriver,
    accumulator: ReportAccumulator,
    conformance: Conformance,
    context: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Сканирует страницу или поддерево *context* и проверяет отсутствие нарушений.

    Результат записывается в *accumulator* до проверки, поэтому упавший
    тест всё равно попадает в отчёт.
    """
    result = await driver.run_axe(context, conformance.axe_options())
    violations = accumulator.ingest(
        {
            "engine_version": driver.axe_version,
            "conformance": conformance.label,
            "result": result,
            "fragment": context,
        }
    )

    for violation in violations:
        _log_violation(violation)

    if violations:
        raise AccessibilityViolationError(violation_summary(violations), violations)
    return violations
