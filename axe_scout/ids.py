# File: axe_scout/ids.py
"""axe_scout.ids: Генератор уникальных в пределах процесса идентификаторов."""

from __future__ import annotations

import itertools

__all__ = ["IdGenerator", "relation_id", "alias_id"]


class IdGenerator:
    """Выдаёт строки вида ``<prefix>_<n>``, n начинается с 1."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


# Связи aria-labelledby в HTML-отчёте (достаточно для самодостаточной страницы)
relation_id = IdGenerator("RELATION")
# Имена ожиданий сетевых запросов в тестах ResourceMap
alias_id = IdGenerator("alias")
