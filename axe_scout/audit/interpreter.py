# File: axe_scout/audit/interpreter.py
"""axe_scout.audit.interpreter: Превращает очередь аудита в дерево наборов и тестов.

Пример::

    from axe_scout.audit import wcag

    async def open_menu(driver):
        await driver.click("#menu-toggle")

    audit = wcag("2.1 AA", interceptors={"text/javascript": ["**/analytics.js"]})
    audit([
        "/",
        "/contact",
        {"#menu": open_menu, "#search": {"#search button": "**/api/search*"}},
    ])
    plan = audit.plan
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Sequence, Union

from axe_scout.audit.suite import NORMAL, ONLY, SKIP, Registrar, RunContext, Step, Suite
from axe_scout.audit.triggers import (
    ActionGroup,
    ClickSelector,
    NamedAction,
    PageEntry,
    ResourceMap,
    Trigger,
    parse_queue,
)
from axe_scout.conformance import Conformance, resolve_conformance
from axe_scout.errors import UnsupportedTriggerError
from axe_scout.ids import alias_id
from axe_scout.logger import logger
from axe_scout.scanner import ScanDriver, run_scan

__all__ = ["Auditor", "wcag", "STATIC_CONTENT"]

STATIC_CONTENT = "Static content"

Action = Callable[[ScanDriver], Awaitable[None]]
Interceptors = Mapping[str, Union[str, Sequence[str]]]


def _normalize_interceptors(interceptors: Optional[Interceptors]) -> Dict[str, List[str]]:
    if not interceptors:
        return {}
    return {
        content_type: [globs] if isinstance(globs, str) else list(globs)
        for content_type, globs in interceptors.items()
    }


class _TriggerRegistration:
    """Рекурсивный обход Trigger для одного фрагмента страницы."""

    def __init__(self, auditor: Auditor, fragment: str) -> None:
        self.auditor = auditor
        self.registrar = auditor.registrar
        self.fragment = fragment

    def visit(self, trigger: Trigger, nested: bool = False) -> None:
        if isinstance(trigger, ActionGroup):
            self.visit_group(trigger)
        elif isinstance(trigger, NamedAction):
            self.visit_named(trigger)
        elif isinstance(trigger, ResourceMap):
            self.visit_resources(trigger, nested)
        elif isinstance(trigger, ClickSelector):
            self.visit_click(trigger, nested)
        else:
            raise UnsupportedTriggerError(f"Unsupported action: {type(trigger).__name__}")

    def visit_group(self, group: ActionGroup) -> None:
        with self.registrar.describe(self.fragment):
            for member in group.members:
                self.visit(member, nested=True)

    def visit_named(self, trigger: NamedAction) -> None:
        async def act(driver: ScanDriver) -> None:
            result = trigger.action(driver)
            if inspect.isawaitable(result):
                await result

        self.registrar.it(f"{trigger.name}()", self.interaction(act))

    def visit_resources(self, trigger: ResourceMap, nested: bool) -> None:
        if nested:
            self._register_resources(trigger)
        else:
            with self.registrar.describe(self.fragment):
                self._register_resources(trigger)

    def _register_resources(self, trigger: ResourceMap) -> None:
        for selector, pattern in trigger.requests:

            async def act(driver: ScanDriver, selector: str = selector, pattern: str = pattern) -> None:
                alias = alias_id()
                logger.debug("Waiting for %s (%s) after clicking %s", pattern, alias, selector)
                await driver.click_and_wait_for_request(selector, pattern, alias)

            self.registrar.it(selector, self.interaction(act))

    def visit_click(self, trigger: ClickSelector, nested: bool) -> None:
        async def act(driver: ScanDriver) -> None:
            await driver.click(trigger.selector)

        self.registrar.it(trigger.selector if nested else self.fragment, self.interaction(act))

    def interaction(self, action: Action) -> Step:
        conformance = self.auditor.conformance
        fragment = self.fragment

        async def body(ctx: RunContext) -> None:
            await action(ctx.driver)
            # race condition guard: let synchronous DOM updates settle (best effort)
            await asyncio.sleep(0)
            await run_scan(ctx.driver, ctx.accumulator, conformance, fragment)

        return body


class Auditor:
    """Регистрирует аудит очереди страниц для одного уровня соответствия.

    Вызывается как функция (``audit(queue)``); ``audit.only(queue)`` и
    ``audit.skip(queue)`` регистрируют наборы страниц в режимах only/skip.
    """

    def __init__(
        self,
        conformance: Conformance,
        interceptors: Optional[Interceptors] = None,
        registrar: Optional[Registrar] = None,
    ) -> None:
        self.conformance = conformance
        self.interceptors = _normalize_interceptors(interceptors)
        self.registrar = registrar if registrar is not None else Registrar()

    @property
    def plan(self) -> Suite:
        return self.registrar.root

    def __call__(self, queue: Sequence[Any]) -> List[PageEntry]:
        return self._audit(queue, NORMAL)

    def only(self, queue: Sequence[Any]) -> List[PageEntry]:
        return self._audit(queue, ONLY)

    def skip(self, queue: Sequence[Any]) -> List[PageEntry]:
        return self._audit(queue, SKIP)

    def _audit(self, queue: Sequence[Any], mode: str) -> List[PageEntry]:
        # The whole queue is validated before the first registration.
        entries = parse_queue(queue)

        with self.registrar.describe(self.conformance.label):
            if self.interceptors:
                self.registrar.before_each(self._install_interceptors)
            for entry in entries:
                self._audit_page(entry, mode)

        logger.debug(
            "Registered %d pages (%d tests) for %s",
            len(entries),
            self.plan.count_cases(),
            self.conformance.label,
        )
        return entries

    async def _install_interceptors(self, ctx: RunContext) -> None:
        for content_type, globs in self.interceptors.items():
            for url_glob in globs:
                await ctx.driver.stub(content_type, url_glob)

    def _audit_page(self, entry: PageEntry, mode: str) -> None:
        url = entry.page.url
        conformance = self.conformance

        async def setup(ctx: RunContext) -> None:
            await ctx.driver.visit(url)
            await ctx.driver.inject_axe()

        async def audit_static(ctx: RunContext) -> None:
            await run_scan(ctx.driver, ctx.accumulator, conformance)

        with self.registrar.describe(f"URL: {url}", mode=mode):
            self.registrar.before_each(setup)
            self.registrar.it(STATIC_CONTENT, audit_static)
            if entry.fragments is not None:
                for fragment, trigger in entry.fragments.entries:
                    _TriggerRegistration(self, fragment).visit(trigger)


def wcag(
    identifier: str,
    interceptors: Optional[Interceptors] = None,
    registrar: Optional[Registrar] = None,
) -> Auditor:
    """Создаёт Auditor для уровня ``"2.1 A"``, ``"2.1 AA"`` или ``"2.1 AAA"``.

    Неизвестный уровень – ConformanceError до регистрации чего-либо.
    """
    return Auditor(resolve_conformance(identifier), interceptors, registrar)
