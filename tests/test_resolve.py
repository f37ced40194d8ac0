"""Tests for dot-path resolution, truthiness, and text conversion."""

from __future__ import annotations

import math

import pytest

from pagesmith import is_truthy, resolve_path, stringify
from pagesmith.resolve import is_sequence, iteration_context


class TestResolvePath:
    def test_nested_mapping(self) -> None:
        assert resolve_path({"a": {"b": "x"}}, "a.b") == "x"

    def test_missing_key(self) -> None:
        assert resolve_path({"a": {"b": "x"}}, "a.c") is None

    def test_missing_intermediate_short_circuits(self) -> None:
        assert resolve_path({}, "a.b.c") == ""

    def test_none_intermediate_short_circuits(self) -> None:
        assert resolve_path({"a": None}, "a.b") == ""

    def test_none_leaf(self) -> None:
        assert resolve_path({"a": None}, "a") is None

    def test_falsy_values_are_kept(self) -> None:
        context = {"zero": 0, "empty": "", "no": False, "none": []}
        assert resolve_path(context, "zero") == 0
        assert resolve_path(context, "empty") == ""
        assert resolve_path(context, "no") is False
        assert resolve_path(context, "none") == []

    def test_sequence_index(self) -> None:
        context = {"xs": [{"n": 1}, {"n": 2}]}
        assert resolve_path(context, "xs.1.n") == 2
        assert resolve_path(context, "xs.5") is None
        assert resolve_path(context, "xs.5.n") == ""

    def test_length(self) -> None:
        assert resolve_path({"xs": [1, 2, 3]}, "xs.length") == 3
        assert resolve_path({"name": "Ada"}, "name.length") == 3

    def test_length_key_in_mapping_wins(self) -> None:
        assert resolve_path({"race": {"length": "5k"}}, "race.length") == "5k"

    def test_lookup_on_scalar(self) -> None:
        assert resolve_path({"n": 5}, "n.x") is None
        assert resolve_path({"xs": [1]}, "xs.first") is None

    def test_reserved_names(self) -> None:
        assert resolve_path({"@index": 2}, "@index") == 2

    def test_never_raises_on_odd_paths(self) -> None:
        for path in ("", ".", "..", "a..b", "@", "0"):
            resolve_path({"a": {"b": 1}}, path)


class TestTruthiness:
    @pytest.mark.parametrize(
        "value", [0, 0.0, "", None, [], (), False, math.nan], ids=repr
    )
    def test_falsy(self, value: object) -> None:
        assert not is_truthy(value)

    @pytest.mark.parametrize(
        "value", [1, -1, 0.5, "s", "0", "false", [1], [None], True, {"k": 1}, {}], ids=repr
    )
    def test_truthy(self, value: object) -> None:
        assert is_truthy(value)

    def test_opaque_objects_are_truthy(self) -> None:
        assert is_truthy(object())


class TestStringify:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("text", "text"),
            (7, "7"),
            (-3, "-3"),
            (3.0, "3"),
            (2.5, "2.5"),
            (True, "true"),
            (False, "false"),
            (math.nan, "NaN"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            ([1, "a", None], "1,a,"),
            ([[1, 2], 3], "1,2,3"),
            ({"a": 1, "b": [True]}, '{"a":1,"b":[true]}'),
            ({"name": "Zoë"}, '{"name":"Zoë"}'),
        ],
        ids=repr,
    )
    def test_values(self, value: object, expected: str) -> None:
        assert stringify(value) == expected


class TestIterationContext:
    def test_bindings(self) -> None:
        outer = {"site": "S", "this": "outer"}
        ctx = iteration_context(outer, "item", 0, 2)
        assert ctx["this"] == "item"
        assert ctx["@index"] == 0
        assert ctx["@first"] is True
        assert ctx["@last"] is False
        assert ctx["site"] == "S"

    def test_last(self) -> None:
        ctx = iteration_context({}, "item", 2, 3)
        assert ctx["@first"] is False
        assert ctx["@last"] is True

    def test_outer_context_untouched(self) -> None:
        outer = {"this": "outer"}
        iteration_context(outer, "item", 0, 1)
        assert outer == {"this": "outer"}


class TestIsSequence:
    def test_lists_and_tuples(self) -> None:
        assert is_sequence([])
        assert is_sequence((1,))

    def test_strings_and_mappings_are_not(self) -> None:
        assert not is_sequence("abc")
        assert not is_sequence(b"abc")
        assert not is_sequence({"a": 1})
        assert not is_sequence(None)
