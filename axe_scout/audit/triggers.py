# File: axe_scout/audit/triggers.py
"""axe_scout.audit.triggers: Типизированное описание очереди аудита.

Очередь состоит из URL страниц и спецификаций фрагментов. Фрагмент
сопоставляет селектор (контекст сканирования) с триггером одного из
четырёх видов:

* ``NamedAction`` – именованная функция, получающая драйвер;
* ``ActionGroup`` – упорядоченный список триггеров;
* ``ClickSelector`` – селектор, по которому нужно кликнуть;
* ``ResourceMap`` – ``{селектор: шаблон URL}``: клик должен вызвать запрос.

Сырые значения Python (str, callable, list, dict) превращаются в эти типы
только в :func:`coerce_trigger`; дальше код работает с готовым union.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, Union

from axe_scout.errors import (
    AnonymousActionError,
    DuplicateActionError,
    QueueShapeError,
    UnsupportedTriggerError,
)

__all__ = [
    "NamedAction",
    "ActionGroup",
    "ClickSelector",
    "ResourceMap",
    "Trigger",
    "PageURL",
    "FragmentSpec",
    "PageEntry",
    "action_name",
    "coerce_trigger",
    "coerce_fragment_spec",
    "parse_queue",
]


@dataclass(frozen=True, slots=True)
class NamedAction:
    action: Callable[..., Any]
    name: str


@dataclass(frozen=True, slots=True)
class ClickSelector:
    selector: str


@dataclass(frozen=True, slots=True)
class ResourceMap:
    requests: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True, slots=True)
class ActionGroup:
    members: Tuple["Trigger", ...]

    def __post_init__(self) -> None:
        names = [m.name for m in self.members if isinstance(m, NamedAction)]
        if len(names) != len(set(names)):
            raise DuplicateActionError(f"sibling functions must have a unique name: {names}")


Trigger = Union[NamedAction, ActionGroup, ClickSelector, ResourceMap]


@dataclass(frozen=True, slots=True)
class PageURL:
    url: str


@dataclass(frozen=True, slots=True)
class FragmentSpec:
    entries: Tuple[Tuple[str, Trigger], ...]


@dataclass(frozen=True, slots=True)
class PageEntry:
    """Страница и (необязательная) спецификация её фрагментов."""

    page: PageURL
    fragments: Optional[FragmentSpec] = None


def action_name(action: Callable[..., Any]) -> str:
    name = getattr(action, "__name__", "") or ""
    if not name or name == "<lambda>":
        raise AnonymousActionError(f"functions must have a name: {action!r}")
    return name


def coerce_trigger(value: Any) -> Trigger:
    """Строит вариант Trigger из сырого значения или бросает SpecificationError."""
    if isinstance(value, (NamedAction, ActionGroup, ClickSelector, ResourceMap)):
        return value
    if isinstance(value, str):
        return ClickSelector(value)
    if isinstance(value, Mapping):
        requests: List[Tuple[str, str]] = []
        for selector, pattern in value.items():
            if not isinstance(selector, str) or not isinstance(pattern, str):
                raise UnsupportedTriggerError(
                    f"Unsupported resource map entry: {selector!r} -> {type(pattern).__name__}"
                )
            requests.append((selector, pattern))
        return ResourceMap(tuple(requests))
    if isinstance(value, (list, tuple)):
        return ActionGroup(tuple(coerce_trigger(member) for member in value))
    if callable(value):
        return NamedAction(value, action_name(value))
    raise UnsupportedTriggerError(f"Unsupported action: {type(value).__name__}")


def coerce_fragment_spec(value: Any) -> FragmentSpec:
    """Mapping ``{fragment: trigger}`` или последовательность пар → FragmentSpec."""
    if isinstance(value, FragmentSpec):
        return value
    if isinstance(value, Mapping):
        pairs: Sequence[Any] = list(value.items())
    elif isinstance(value, (list, tuple)):
        pairs = value
    else:
        raise UnsupportedTriggerError(f"Unsupported fragment specification: {type(value).__name__}")

    entries: List[Tuple[str, Trigger]] = []
    for pair in pairs:
        if not (isinstance(pair, (list, tuple)) and len(pair) == 2 and isinstance(pair[0], str)):
            raise UnsupportedTriggerError(f"Fragment entries must be (selector, trigger) pairs: {pair!r}")
        entries.append((pair[0], coerce_trigger(pair[1])))
    return FragmentSpec(tuple(entries))


def _is_page(value: Any) -> bool:
    return isinstance(value, (str, PageURL))


def _as_page(value: Any) -> PageURL:
    return value if isinstance(value, PageURL) else PageURL(value)


def parse_queue(queue: Sequence[Any]) -> List[PageEntry]:
    """Проверяет форму всей очереди и разбирает её на PageEntry.

    Элемент допустим, если это URL, либо если перед ним стоит URL.
    Ошибка в любом месте очереди возникает до регистрации первого теста.
    """
    items = list(queue)
    for index, value in enumerate(items):
        previous = items[index - 1] if index > 0 else None
        if not (_is_page(value) or _is_page(previous)):
            raise QueueShapeError(f"Bad test queue shape at position {index}: {type(value).__name__}")

    entries: List[PageEntry] = []
    for index, value in enumerate(items):
        if _is_page(value):
            if index + 1 == len(items) or _is_page(items[index + 1]):
                entries.append(PageEntry(_as_page(value)))
        else:
            entries.append(PageEntry(_as_page(items[index - 1]), coerce_fragment_spec(value)))
    return entries
