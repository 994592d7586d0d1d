# File: tests/test_runner.py
"""Последовательный прогон плана с фиктивным драйвером."""
from __future__ import annotations

import asyncio

import pytest
from conftest import BASE_URL, FakeDriver, make_violation

from axe_scout.accumulator import ReportAccumulator
from axe_scout.audit import wcag
from axe_scout.runner import FAILED, PASSED, SKIPPED, Runner


async def run_queue(driver: FakeDriver, queue, **kwargs):
    audit = wcag("2.1 AA", **kwargs)
    audit(queue)
    accumulator = ReportAccumulator()
    runner = Runner(driver, accumulator)
    summary = await runner.run(audit.plan, base_url=BASE_URL, runner_version="1.44.0")
    return runner, accumulator, summary


@pytest.mark.asyncio()
async def test_static_pages_pass(fake_driver: FakeDriver):
    runner, accumulator, summary = await run_queue(fake_driver, ["/", "/about"])

    assert [o.state for o in runner.outcomes] == [PASSED, PASSED]
    assert (summary.passed, summary.failed, summary.total) == (2, 0, 2)
    assert summary.browser == "fake"
    assert [scan.url for scan in accumulator.scans] == [f"{BASE_URL}/", f"{BASE_URL}/about"]
    assert accumulator.engine_version == "4.9.1"
    assert accumulator.conformance == "WCAG 2.1 Level AA"


@pytest.mark.asyncio()
async def test_each_test_resets_visits_and_injects(fake_driver: FakeDriver):
    await run_queue(fake_driver, ["/", {"#menu": "#toggle"}])

    assert fake_driver.names() == [
        "reset", "visit", "inject_axe", "run_axe",
        "reset", "visit", "inject_axe", "click", "run_axe",
    ]
    run_axe_calls = [c for c in fake_driver.calls if c[0] == "run_axe"]
    assert run_axe_calls[0][1] is None
    assert run_axe_calls[1][1] == "#menu"
    assert run_axe_calls[1][2]["runOnly"] == ["wcag2a", "wcag21a", "wcag2aa", "wcag21aa"]


@pytest.mark.asyncio()
async def test_interceptors_are_installed_before_visit(fake_driver: FakeDriver):
    await run_queue(
        fake_driver,
        ["/"],
        interceptors={"text/css": ["**/fonts.css"], "application/javascript": ["**/ads.js", "**/gtm.js"]},
    )

    assert fake_driver.calls[:5] == [
        ("reset",),
        ("stub", "text/css", "**/fonts.css"),
        ("stub", "application/javascript", "**/ads.js"),
        ("stub", "application/javascript", "**/gtm.js"),
        ("visit", "/"),
    ]


@pytest.mark.asyncio()
async def test_violations_fail_only_their_test(fake_driver: FakeDriver):
    fake_driver.results[("/", "#menu")] = [make_violation(nodes=2), make_violation("link-name", tags=("wcag2a", "wcag244"))]

    runner, accumulator, summary = await run_queue(fake_driver, ["/", {"#menu": "#toggle"}, "/next"])

    assert [o.state for o in runner.outcomes] == [PASSED, FAILED, PASSED]
    assert runner.outcomes[1].error == "3 violations of 2 rules"
    assert (summary.passed, summary.failed) == (2, 1)
    assert len(accumulator) == 3
    assert accumulator.scans[1].fragment == "#menu"
    assert len(accumulator.scans[1].violations) == 2


@pytest.mark.asyncio()
async def test_action_errors_are_recorded_and_run_continues(fake_driver: FakeDriver):
    async def broken(driver):
        raise RuntimeError("element detached")

    runner, accumulator, summary = await run_queue(fake_driver, ["/", {"#menu": broken}, "/next"])

    assert [o.state for o in runner.outcomes] == [PASSED, FAILED, PASSED]
    assert runner.outcomes[1].error == "RuntimeError: element detached"
    assert len(accumulator) == 2


@pytest.mark.asyncio()
async def test_named_actions_sync_and_async(fake_driver: FakeDriver):
    seen = []

    def sync_action(driver):
        seen.append("sync")

    async def async_action(driver):
        await driver.click("#open")
        seen.append("async")

    runner, _, _ = await run_queue(fake_driver, ["/", {"#panel": [sync_action, async_action]}])

    assert seen == ["sync", "async"]
    assert [o.title.rsplit(" > ", 1)[-1] for o in runner.outcomes] == [
        "Static content",
        "sync_action()",
        "async_action()",
    ]


@pytest.mark.asyncio()
async def test_scan_waits_for_one_scheduling_yield(fake_driver: FakeDriver):
    def reveal(driver):
        driver.dom_ready = False
        asyncio.get_running_loop().call_soon(setattr, driver, "dom_ready", True)

    await run_queue(fake_driver, ["/", {"#panel": reveal}])

    fragment_scan = [c for c in fake_driver.calls if c[0] == "run_axe"][-1]
    assert fragment_scan[3] is True


@pytest.mark.asyncio()
async def test_resource_map_clicks_and_waits_with_unique_aliases(fake_driver: FakeDriver):
    await run_queue(fake_driver, ["/", {"#results": {"#search": "**/api/search*", "#more": "**/api/more*"}}])

    waits = [c for c in fake_driver.calls if c[0] == "click_and_wait"]
    assert [(c[1], c[2]) for c in waits] == [("#search", "**/api/search*"), ("#more", "**/api/more*")]
    aliases = [c[3] for c in waits]
    assert all(alias.startswith("alias_") for alias in aliases)
    assert len(set(aliases)) == 2


@pytest.mark.asyncio()
async def test_skipped_suites_do_not_touch_the_driver(fake_driver: FakeDriver):
    audit = wcag("2.1 AA")
    audit.skip(["/"])
    runner = Runner(fake_driver, ReportAccumulator())

    summary = await runner.run(audit.plan, base_url=BASE_URL)

    assert [o.state for o in runner.outcomes] == [SKIPPED]
    assert summary.skipped == 1
    assert summary.total == 0
    assert fake_driver.calls == []
