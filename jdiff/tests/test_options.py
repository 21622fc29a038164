# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import pytest

from jdiff import InvalidOptionDirective
from jdiff.diff_format import SET_MARKER, LIST_MARKER, KeyedIdentity
from jdiff.options import (
    Option, Directive, ArrayMode, DEFAULT_MODE, parse_options, options_to_json,
    resolve, path_is_prefix, diffing_enabled_below)


def test_parse_options_empty():
    assert parse_options(None) == []
    assert parse_options([]) == []
    assert parse_options("[]") == []


def test_parse_options_named():
    assert parse_options(["SET", "MERGE"]) == [Option("SET"), Option("MERGE")]
    assert parse_options('["COLOR"]') == [Option("COLOR")]


def test_parse_options_values():
    options = parse_options([{"precision": 0.5}, {"setkeys": ["id", "name"]}])
    assert options == [
        Option(Directive.PRECISION, 0.5),
        Option(Directive.SETKEYS, ("id", "name")),
    ]


def test_parse_options_scoped():
    options = parse_options([
        {"@": ["a"], "^": ["SET", {"precision": 1}]},
        {"@": ["b", {}], "^": "MULTISET"},
        {"@": ["c"], "^": [{"@": [[[]], "d"], "^": ["DIFF_OFF"]}]},
    ])
    assert options == [
        Option("SET", at=("a",)),
        Option(Directive.PRECISION, 1, at=("a",)),
        Option("MULTISET", at=("b", SET_MARKER)),
        Option("DIFF_OFF", at=("c", LIST_MARKER, "d")),
    ]


def test_parse_options_passes_parsed_through():
    options = parse_options(["SET"])
    assert parse_options(options) == options


@pytest.mark.parametrize("raw", [
    ["BOGUS"],
    [{"precision": -1}],
    [{"precision": "1"}],
    [{"setkeys": "id"}],
    [{"setkeys": [1]}],
    [{"@": ["a"]}],
    [{"@": "a", "^": ["SET"]}],
    [{"unknown": 1}],
    [42],
    "not json",
    {"SET": True},
])
def test_parse_options_invalid(raw):
    with pytest.warns(InvalidOptionDirective):
        assert parse_options(raw) == []


def test_parse_options_keeps_valid_directives():
    with pytest.warns(InvalidOptionDirective):
        options = parse_options(["SET", "BOGUS", "MERGE"])
    assert options == [Option("SET"), Option("MERGE")]


def test_options_to_json():
    raw = ["SET", {"precision": 0.5}, {"@": ["a", 0], "^": [{"setkeys": ["id"]}]}]
    assert options_to_json(parse_options(raw)) == raw
    assert parse_options(options_to_json(parse_options(raw))) == parse_options(raw)


def test_path_is_prefix():
    assert path_is_prefix((), ("a",))
    assert path_is_prefix(("a",), ("a",))
    assert path_is_prefix(("a",), ("a", 1))
    assert not path_is_prefix(("a", 1), ("a",))
    assert not path_is_prefix(("a",), ("b",))
    assert not path_is_prefix((0,), ("0",))
    assert path_is_prefix(("a", LIST_MARKER), ("a", 3, "b"))
    assert path_is_prefix((LIST_MARKER,), (KeyedIdentity({"id": 1}),))
    assert not path_is_prefix((LIST_MARKER,), ("a",))


def test_resolve_defaults():
    assert resolve([], ()) == DEFAULT_MODE
    mode = resolve([], ("a", 1))
    assert mode.diffing_enabled
    assert mode.precision == 1e-15
    assert mode.array_mode == ArrayMode.NORMAL
    assert mode.setkeys is None
    assert not mode.merge
    assert not mode.color


def test_resolve_scoped():
    options = parse_options([{"@": ["a"], "^": ["SET"]}])
    assert resolve(options, ("a",)).array_mode == ArrayMode.SET
    assert resolve(options, ("a", "b")).array_mode == ArrayMode.SET
    assert resolve(options, ("b",)).array_mode == ArrayMode.NORMAL
    assert resolve(options, ()).array_mode == ArrayMode.NORMAL


def test_resolve_deepest_wins():
    options = parse_options([
        {"@": ["a"], "^": [{"precision": 0.1}]},
        {"precision": 0.2},
    ])
    assert resolve(options, ()).precision == 0.2
    assert resolve(options, ("a",)).precision == 0.1
    assert resolve(options, ("b",)).precision == 0.2


def test_resolve_later_wins_at_equal_depth():
    options = parse_options([{"precision": 0.1}, {"precision": 0.2}])
    assert resolve(options, ()).precision == 0.2
    options = parse_options(["SET", "MULTISET"])
    assert resolve(options, ()).array_mode == ArrayMode.MULTISET
    options = parse_options([
        {"@": ["a"], "^": ["MULTISET"]},
        {"@": ["a"], "^": ["SET"]},
    ])
    assert resolve(options, ("a",)).array_mode == ArrayMode.SET


def test_resolve_fields_independent():
    options = parse_options([
        "MERGE", {"precision": 0.5},
        {"@": ["a"], "^": [{"setkeys": ["id"]}]},
    ])
    mode = resolve(options, ("a",))
    assert mode.merge
    assert mode.precision == 0.5
    assert mode.setkeys == ("id",)


def test_resolve_list_marker():
    options = parse_options([{"@": ["items", [[]]], "^": [{"precision": 0.1}]}])
    assert resolve(options, ("items", 0)).precision == 0.1
    assert resolve(options, ("items", 5, "x")).precision == 0.1
    assert resolve(options, ("items",)).precision == 1e-15


def test_resolve_diff_on_off():
    options = parse_options(["DIFF_OFF"])
    assert not resolve(options, ()).diffing_enabled

    options = parse_options([{"@": ["a"], "^": ["DIFF_OFF"]}])
    assert resolve(options, ()).diffing_enabled
    assert not resolve(options, ("a", "b")).diffing_enabled

    # Any DIFF_ON switches the default off
    options = parse_options([{"@": ["a"], "^": ["DIFF_ON"]}])
    assert not resolve(options, ()).diffing_enabled
    assert not resolve(options, ("b",)).diffing_enabled
    assert resolve(options, ("a",)).diffing_enabled
    assert resolve(options, ("a", 1)).diffing_enabled

    options = parse_options([
        {"@": ["a"], "^": ["DIFF_ON"]},
        {"@": ["a", "b"], "^": ["DIFF_OFF"]},
    ])
    assert resolve(options, ("a", "c")).diffing_enabled
    assert not resolve(options, ("a", "b")).diffing_enabled


def test_diffing_enabled_below():
    options = parse_options([{"@": ["a", "b"], "^": ["DIFF_ON"]}])
    assert diffing_enabled_below(options, ())
    assert diffing_enabled_below(options, ("a",))
    assert not diffing_enabled_below(options, ("a", "b"))
    assert not diffing_enabled_below(options, ("c",))

    options = parse_options([{"@": ["a", [[]], "b"], "^": ["DIFF_ON"]}])
    assert diffing_enabled_below(options, ("a", 2))
