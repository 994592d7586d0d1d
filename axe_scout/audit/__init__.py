# File: axe_scout/audit/__init__.py
"""axe_scout.audit: Интерпретатор декларативной очереди аудита."""

from axe_scout.audit.interpreter import STATIC_CONTENT, Auditor, wcag
from axe_scout.audit.suite import AuditCase, PlannedCase, Registrar, RunContext, Suite, iter_cases
from axe_scout.audit.triggers import (
    ActionGroup,
    ClickSelector,
    FragmentSpec,
    NamedAction,
    PageEntry,
    PageURL,
    ResourceMap,
    parse_queue,
)

__all__ = [
    "STATIC_CONTENT",
    "Auditor",
    "wcag",
    "AuditCase",
    "PlannedCase",
    "Registrar",
    "RunContext",
    "Suite",
    "iter_cases",
    "ActionGroup",
    "ClickSelector",
    "FragmentSpec",
    "NamedAction",
    "PageEntry",
    "PageURL",
    "ResourceMap",
    "parse_queue",
]
