# === FILE: axe_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации аудита AxeScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
    model_validator,
)

from axe_scout.audit.triggers import parse_queue
from axe_scout.conformance import resolve_conformance

QueueValue = Union[str, Dict[str, Any], List[Any]]


class AuditConfig(BaseModel):
    """Конфигурация одного прогона аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Корневой URL проверяемого сайта.")
    conformance: str = Field("2.1 AA", description="Уровень соответствия: 2.1 A, 2.1 AA, 2.1 AAA.")
    queue: List[QueueValue] = Field(
        default_factory=list, description="URL страниц и спецификации фрагментов."
    )
    interceptors: Dict[str, List[str]] = Field(
        default_factory=dict, description="content-type → шаблоны URL, отвечающие пустым телом."
    )
    report_file: Path = Field(Path("reports/axe-report.html"), description="Путь HTML-отчёта.")
    json_report: Optional[Path] = Field(None, description="Путь JSON-отчёта (необязательно).")
    axe_core_path: Path = Field(
        Path("node_modules/axe-core/axe.min.js"), description="Локальный файл axe-core."
    )
    browser: Literal["chromium", "firefox", "webkit"] = Field("chromium", description="Браузер Playwright.")
    headless: bool = Field(True, description="Запуск браузера без окна.")
    timeout: float = Field(30.0, gt=0, description="Таймаут одного действия браузера (секунд).")

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("conformance")
    def _check_conformance(cls, v: str) -> str:
        resolve_conformance(v)
        return v

    @field_validator("queue")
    def _check_queue_shape(cls, v: List[QueueValue]) -> List[QueueValue]:
        parse_queue(v)
        return v

    @model_validator(mode="after")
    def _check_axe_core_exists(self) -> AuditConfig:
        if not self.axe_core_path.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(self.axe_core_path))
        return self

    @property
    def site_url(self) -> str:
        """base_url без завершающего слеша (HttpUrl добавляет его сам)."""
        return str(self.base_url).rstrip("/")


_DEFAULT_CFG = Path("axe-scout.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.
    При отсутствии файла конфига или файла axe-core бросает FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return AuditConfig(**data)


__all__ = ["AuditConfig", "ValidationError", "load_config"]
