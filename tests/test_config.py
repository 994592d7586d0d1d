# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from axe_scout.config import AuditConfig, load_config
from axe_scout.conformance import resolve_conformance
from axe_scout.errors import ConformanceError


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("base_url: http://example.com\naxe_core_path: {axe}", None),
        (json.dumps({"base_url": "http://example.com", "axe_core_path": "{axe}"}), None),
        ("{}", ValidationError),
        ("not: a: mapping", ValueError),
        ("::invalid yaml", TypeError),
    ],
)
def test_load_config_variants(tmp_path, axe_core_file, content, expect_exc):
    content = content.replace("{axe}", str(axe_core_file))
    suffix = ".yaml" if not content.strip().startswith("{") else ".json"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, AuditConfig)
        assert cfg.site_url == "http://example.com"
        assert cfg.conformance == "2.1 AA"
        assert cfg.report_file == Path("reports/axe-report.html")


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_file(tmp_path, "base_url = 1", ".toml"))


def test_axe_core_file_not_found(tmp_path):
    cfg_path = write_file(tmp_path, "base_url: http://example.com\naxe_core_path: missing.js", ".yaml")
    with pytest.raises(FileNotFoundError):
        load_config(cfg_path)


def test_queue_and_interceptors(axe_core_file):
    cfg = AuditConfig(
        base_url="http://example.com/",
        axe_core_path=axe_core_file,
        conformance="2.1 AAA",
        queue=["/", "/search", {"#results": {"#go": "**/api/search*"}}],
        interceptors={"text/javascript": ["**/analytics.js"]},
    )
    assert cfg.queue[2] == {"#results": {"#go": "**/api/search*"}}
    assert cfg.browser == "chromium"


@pytest.mark.parametrize(
    "overrides",
    [
        {"conformance": "2.2 AA"},
        {"queue": [{"#menu": "#toggle"}]},
        {"browser": "safari"},
        {"timeout": 0},
        {"unknown": True},
    ],
)
def test_invalid_values(axe_core_file, overrides):
    with pytest.raises(ValidationError):
        AuditConfig(base_url="http://example.com", axe_core_path=axe_core_file, **overrides)


@pytest.mark.parametrize(
    "identifier,label,size",
    [("2.1 A", "WCAG 2.1 Level A", 2), ("2.1 AA", "WCAG 2.1 Level AA", 4), ("2.1 AAA", "WCAG 2.1 Level AAA", 6)],
)
def test_conformance_presets_are_nested(identifier, label, size):
    conformance = resolve_conformance(identifier)
    assert conformance.label == label
    assert len(conformance.tags) == size
    assert set(resolve_conformance("2.1 A").tags) <= set(conformance.tags)


def test_unknown_conformance_identifier():
    with pytest.raises(ConformanceError, match="unsupported conformance"):
        resolve_conformance("AA")
