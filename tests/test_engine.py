# File: tests/test_engine.py
import pytest
from conftest import BASE_URL, FakeDriver, make_violation

from axe_scout.browser import credentials_from_env
from axe_scout.config import AuditConfig
from axe_scout.engine import Engine, load_spec
from axe_scout.audit import wcag


@pytest.fixture()
def config(tmp_path, axe_core_file) -> AuditConfig:
    return AuditConfig(
        base_url=BASE_URL,
        axe_core_path=axe_core_file,
        report_file=tmp_path / "out" / "axe-report.html",
        json_report=tmp_path / "out" / "axe-report.json",
        queue=["/", {"#menu": "#toggle"}],
    )


def test_build_plan_from_config(config):
    plan = Engine(config).build_plan()
    assert plan.count_cases() == 2


def test_load_spec_requires_register(tmp_path):
    spec = tmp_path / "empty_spec.py"
    spec.write_text("QUEUE = ['/']\n", encoding="utf-8")
    with pytest.raises(AttributeError):
        load_spec(spec, wcag("2.1 AA"))


@pytest.mark.asyncio()
async def test_run_plan_with_fake_driver(config, monkeypatch):
    driver = FakeDriver({("/", "#menu"): [make_violation()]})
    monkeypatch.setattr(Engine, "create_driver", lambda self: _Managed(driver))
    monkeypatch.setattr("axe_scout.engine.version", lambda name: "1.44.0")

    engine = Engine(config)
    report = await engine.run_plan(engine.build_plan())

    assert report.summary.passed == 1
    assert report.summary.failed == 1
    assert report.totals.violations == 1
    assert report.pages[0].rules[0].position == "Page fragment 1 of 1"
    assert config.report_file.exists()
    assert config.json_report.exists()
    assert driver.calls[-1] == ("close",)


class _Managed:
    """Async context manager around a FakeDriver, like PlaywrightDriver."""

    def __init__(self, driver: FakeDriver) -> None:
        self.driver = driver

    async def __aenter__(self) -> FakeDriver:
        return self.driver

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.driver.close()


@pytest.mark.parametrize(
    "environ,expected",
    [
        ({"AXE_SCOUT_USERNAME": "qa", "AXE_SCOUT_PASSWORD": "secret"}, {"username": "qa", "password": "secret"}),
        ({"AXE_SCOUT_USERNAME": "qa"}, None),
        ({}, None),
    ],
)
def test_credentials_from_env(environ, expected):
    assert credentials_from_env(environ) == expected
