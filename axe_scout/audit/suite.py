# axe_scout/audit/suite.py
"""
Suite/test registration tree executed by :class:`axe_scout.runner.Runner`.

Registration order is execution order. Hooks registered with
:meth:`Registrar.before_each` run before every test of their suite and of
all nested suites, outermost first.
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, Iterator, List, Tuple, Union

if TYPE_CHECKING:
    from axe_scout.accumulator import ReportAccumulator
    from axe_scout.scanner import ScanDriver

__all__ = ["RunContext", "AuditCase", "Suite", "PlannedCase", "Registrar", "iter_cases", "render_tree"]

NORMAL = "normal"
ONLY = "only"
SKIP = "skip"
MODES = (NORMAL, ONLY, SKIP)


@dataclass(slots=True)
class RunContext:
    """Passed to every hook and test body: the driver and the run's accumulator."""

    driver: "ScanDriver"
    accumulator: "ReportAccumulator"


Step = Callable[[RunContext], Awaitable[None]]


@dataclass(slots=True)
class AuditCase:
    title: str
    body: Step
    mode: str = NORMAL


@dataclass(slots=True)
class Suite:
    title: str
    mode: str = NORMAL
    hooks: List[Step] = field(default_factory=list)
    children: List[Union["Suite", AuditCase]] = field(default_factory=list)

    def count_cases(self) -> int:
        return sum(c.count_cases() if isinstance(c, Suite) else 1 for c in self.children)


@dataclass(frozen=True, slots=True)
class PlannedCase:
    path: Tuple[str, ...]
    hooks: Tuple[Step, ...]
    case: AuditCase
    skipped: bool

    @property
    def title(self) -> str:
        return " > ".join(self.path)


class Registrar:
    """describe/before_each/it in the style of a BDD test runner."""

    def __init__(self, root: Suite | None = None) -> None:
        self.root = root if root is not None else Suite("")
        self._stack: List[Suite] = [self.root]

    @property
    def current(self) -> Suite:
        return self._stack[-1]

    @contextmanager
    def describe(self, title: str, mode: str = NORMAL) -> Iterator[Suite]:
        if mode not in MODES:
            raise ValueError(f"Unknown suite mode: {mode}")
        suite = Suite(title, mode)
        self.current.children.append(suite)
        self._stack.append(suite)
        try:
            yield suite
        finally:
            self._stack.pop()

    def before_each(self, hook: Step) -> None:
        self.current.hooks.append(hook)

    def it(self, title: str, body: Step, mode: str = NORMAL) -> AuditCase:
        case = AuditCase(title, body, mode)
        self.current.children.append(case)
        return case


def _has_only(suite: Suite) -> bool:
    for child in suite.children:
        if child.mode == ONLY:
            return True
        if isinstance(child, Suite) and _has_only(child):
            return True
    return False


def iter_cases(root: Suite) -> Iterator[PlannedCase]:
    """Обходит дерево в порядке регистрации, учитывая режимы only/skip."""
    exclusive = _has_only(root)

    def walk(
        suite: Suite, path: Tuple[str, ...], hooks: Tuple[Step, ...], only: bool, skip: bool
    ) -> Iterator[PlannedCase]:
        for child in suite.children:
            child_only = only or child.mode == ONLY
            child_skip = skip or child.mode == SKIP
            if isinstance(child, Suite):
                yield from walk(
                    child,
                    path + ((child.title,) if child.title else ()),
                    hooks + tuple(child.hooks),
                    child_only,
                    child_skip,
                )
            else:
                skipped = child_skip or (exclusive and not child_only)
                yield PlannedCase(path + (child.title,), hooks, child, skipped)

    yield from walk(root, (root.title,) if root.title else (), tuple(root.hooks), root.mode == ONLY, root.mode == SKIP)


def render_tree(root: Suite, indent: str = "  ") -> List[str]:
    """Текстовое дерево зарегистрированных наборов и тестов (для ``axe-scout plan``)."""
    lines: List[str] = []

    def walk(suite: Suite, depth: int) -> None:
        for child in suite.children:
            marker = "" if child.mode == NORMAL else f" [{child.mode}]"
            if isinstance(child, Suite):
                lines.append(f"{indent * depth}{child.title}{marker}")
                walk(child, depth + 1)
            else:
                lines.append(f"{indent * depth}- {child.title}{marker}")

    walk(root, 0)
    return lines
