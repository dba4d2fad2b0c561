"""Tests for load() and to_python()."""

import pytest

from indenttext import Entry, ErrorKind, Group, IndentTextError, load, to_python


class TestLoad:
    def test_pairs(self):
        root = load("name: Joe\nage: 36")
        assert root.keys() == ["name", "age"]
        assert root.get("name") == Group([Entry(None, "Joe")])

    def test_values(self):
        root = load("a\nb\n# skipped\nc")
        assert root.values() == ["a", "b", "c"]
        assert root.keys() == []

    def test_nested(self):
        root = load("outer:\n  inner:\n    x\n  :\n:")
        inner = root.get("outer").get("inner")
        assert inner.values() == ["x"]

    def test_get_default(self):
        assert load("a: 1").get("missing", "dflt") == "dflt"

    def test_errors_propagate(self):
        with pytest.raises(IndentTextError) as exc_info:
            load("a:\n  b")
        assert exc_info.value.kind is ErrorKind.UNTERMINATED_GROUP

    def test_options_passed_through(self):
        with pytest.raises(IndentTextError) as exc_info:
            load("x" * 100, max_line_length=10)
        assert exc_info.value.kind is ErrorKind.LINE_TOO_LONG


class TestToPython:
    def test_dict_of_scalars(self):
        assert to_python(load("name: Joe\nage: 36")) == {"name": "Joe", "age": "36"}

    def test_list(self):
        assert to_python(load("items:\n  1\n  2\n:")) == {"items": ["1", "2"]}

    def test_empty_group(self):
        assert to_python(load("a:\n:")) == {"a": []}

    def test_repeated_keys_collect(self):
        assert to_python(load("k: 1\nk: 2\nk: 3")) == {"k": ["1", "2", "3"]}

    def test_anonymous_groups(self):
        source = "':\n  1\n:\n':\n  2\n  3\n:"
        assert to_python(load(source)) == {"": ["1", ["2", "3"]]}

    def test_mixed(self):
        assert to_python(load("a\nb: c")) == ["a", {"b": "c"}]

    def test_string(self):
        assert to_python("plain") == "plain"

    def test_empty_document(self):
        assert to_python(load("")) == []
