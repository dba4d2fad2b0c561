"""Classified items produced by the grammar engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable


class ItemType(Enum):
    KEY = "Key"
    VALUE = "Value"
    CLOSED = "Closed"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Item:
    path: tuple[str, ...]  # enclosing keys, outermost first
    text: str
    kind: ItemType

    @property
    def depth(self) -> int:
        return len(self.path)


# (path, item, kind) -> True to stop parsing
Visitor = Callable[[tuple[str, ...], str, ItemType], bool]
