# File: axe_scout/errors.py
"""axe_scout.errors: Иерархия исключений AxeScout.

Ошибки спецификации и классификации фатальны. Нарушения доступности
ошибками не являются: они превращаются в одно AssertionError на тест.
"""

from __future__ import annotations

from typing import Any, List, Sequence

__all__ = [
    "SpecificationError",
    "QueueShapeError",
    "DuplicateActionError",
    "AnonymousActionError",
    "UnsupportedTriggerError",
    "ConformanceError",
    "ClassificationError",
    "AccessibilityViolationError",
]


class SpecificationError(ValueError):
    """План аудита нельзя представить: регистрация тестов невозможна."""


class QueueShapeError(SpecificationError):
    """Фрагмент в очереди не следует сразу за URL страницы."""


class DuplicateActionError(SpecificationError):
    """Две функции в одной группе действий имеют одинаковое имя."""


class AnonymousActionError(SpecificationError):
    """Функция-действие без имени (lambda, partial и т.п.)."""


class UnsupportedTriggerError(SpecificationError, TypeError):
    """Значение триггера не относится ни к одному из поддерживаемых видов."""


class ConformanceError(SpecificationError):
    """Неизвестный уровень соответствия WCAG."""


class ClassificationError(ValueError):
    """Нарушение невозможно привязать к критерию успеха WCAG."""


class AccessibilityViolationError(AssertionError):
    """Единственная проверка теста: на странице нет нарушений."""

    def __init__(self, message: str, violations: Sequence[Any]) -> None:
        super().__init__(message)
        self.violations: List[Any] = list(violations)
