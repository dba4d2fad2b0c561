"""indenttext — streaming decoder for indentation-delimited text."""

from .errors import ErrorKind, IndentTextError
from .grammar import Parser, iter_parse, parse
from .items import Item, ItemType, Visitor
from .reader import DEFAULT_MAX_LINE_LENGTH, LineReader
from .tree import Entry, Group, load, to_python

__all__ = [
    "parse",
    "iter_parse",
    "load",
    "to_python",
    "Parser",
    "LineReader",
    "Item",
    "ItemType",
    "Visitor",
    "Group",
    "Entry",
    "ErrorKind",
    "IndentTextError",
    "DEFAULT_MAX_LINE_LENGTH",
]
