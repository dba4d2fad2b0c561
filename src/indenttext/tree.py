"""Tree loading: builds Group / Entry objects from the item stream."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from .grammar import Source, iter_parse
from .items import ItemType


@dataclass
class Group:
    """A compound group: an ordered list of keyed and unnamed entries."""

    entries: list["Entry"] = field(default_factory=list)

    def keys(self) -> list[str]:
        return [e.key for e in self.entries if e.key is not None]

    def values(self) -> list["EntryValue"]:
        """Unnamed entries, in document order."""
        return [e.value for e in self.entries if e.key is None]

    def get(self, key: str, default=None):
        for e in self.entries:
            if e.key == key:
                return e.value
        return default


@dataclass
class Entry:
    key: str | None  # None = plain value line
    value: "EntryValue"


EntryValue = Union[str, Group]


def load(source: Source, **options) -> Group:
    """Parse *source* into a root :class:`Group`.

    Options are passed to :func:`indenttext.iter_parse`; parse errors
    propagate unchanged.
    """
    root = Group()
    open_groups = [root]

    for item in iter_parse(source, **options):
        if item.kind is ItemType.KEY:
            child = Group()
            open_groups[-1].entries.append(Entry(key=item.text, value=child))
            open_groups.append(child)
        elif item.kind is ItemType.VALUE:
            open_groups[-1].entries.append(Entry(key=None, value=item.text))
        else:
            open_groups.pop()

    return root


def to_python(value: EntryValue):
    """Convert a loaded tree to plain lists, dicts and strings.

    - A group holding a single unnamed value → that string
    - Only unnamed values → list
    - Only keyed entries → dict; a repeated key collects into a list
    - Mixed → list, keyed entries as one-item dicts
    """
    if isinstance(value, str):
        return value

    entries = value.entries
    if len(entries) == 1 and entries[0].key is None:
        return to_python(entries[0].value)
    if all(e.key is None for e in entries):
        return [to_python(e.value) for e in entries]
    if all(e.key is not None for e in entries):
        result: dict = {}
        repeated: set[str] = set()
        for e in entries:
            converted = to_python(e.value)
            if e.key not in result:
                result[e.key] = converted
            elif e.key in repeated:
                result[e.key].append(converted)
            else:
                result[e.key] = [result[e.key], converted]
                repeated.add(e.key)
        return result
    return [
        to_python(e.value) if e.key is None else {e.key: to_python(e.value)}
        for e in entries
    ]
