# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json

import pytest

from jdiff import (
    diff, patch, render_diff, parse_diff, translate, to_patch, from_patch,
    to_merge, from_merge, VOID, OPEN, CLOSE,
    ContextMismatch, InvalidPath, ParseError, UnsupportedPatchOperation,
    UnsupportedTranslation)
from jdiff.diff_format import SET_MARKER, make_element
from jdiff.translation import path_to_pointer, pointer_to_path


def test_path_to_pointer():
    assert path_to_pointer(()) == ""
    assert path_to_pointer(("a", "b/c", "d~e", 0)) == "/a/b~1c/d~0e/0"
    assert path_to_pointer(("a", -1)) == "/a/-"
    with pytest.raises(UnsupportedPatchOperation):
        path_to_pointer(("a", SET_MARKER))


def test_pointer_to_path():
    assert pointer_to_path("") == ()
    assert pointer_to_path("/a/b~1c/d~0e/0") == ("a", "b/c", "d~e", 0)
    assert pointer_to_path("/a/-") == ("a", -1)
    assert pointer_to_path("/01") == ("01",)
    assert pointer_to_path("/") == ("",)
    with pytest.raises(InvalidPath):
        pointer_to_path("a")


def test_to_patch_object():
    d = diff({"a": 1, "c": 0}, {"a": 2, "b": 3})
    assert to_patch(d) == [
        {"op": "test", "path": "/c", "value": 0},
        {"op": "remove", "path": "/c", "value": 0},
        {"op": "test", "path": "/a", "value": 1},
        {"op": "remove", "path": "/a", "value": 1},
        {"op": "add", "path": "/a", "value": 2},
        {"op": "add", "path": "/b", "value": 3},
    ]


def test_to_patch_window():
    d = diff({"foo": ["bar", "baz"]}, {"foo": ["bar", "boom"]})
    assert to_patch(d) == [
        {"op": "test", "path": "/foo/0", "value": "bar"},
        {"op": "test", "path": "/foo/1", "value": "baz"},
        {"op": "remove", "path": "/foo/1", "value": "baz"},
        {"op": "add", "path": "/foo/1", "value": "boom"},
    ]

    d = diff([1, 3], [1, 2, 3])
    assert to_patch(d) == [
        {"op": "test", "path": "/0", "value": 1},
        {"op": "test", "path": "/1", "value": 3},
        {"op": "add", "path": "/1", "value": 2},
    ]

    d = diff([1], [1, 2, 3])
    assert to_patch(d) == [
        {"op": "test", "path": "/0", "value": 1},
        {"op": "add", "path": "/-", "value": 2},
        {"op": "add", "path": "/-", "value": 3},
    ]

    d = diff([], [1, 2])
    assert to_patch(d) == [
        {"op": "add", "path": "/0", "value": 1},
        {"op": "add", "path": "/1", "value": 2},
    ]


def test_to_patch_merge():
    d = diff({"a": 1, "b": 2}, {"a": 3}, ["MERGE"])
    assert to_patch(d) == [
        {"op": "remove", "path": "/b"},
        {"op": "add", "path": "/a", "value": 3},
    ]


def test_to_patch_unsupported():
    d = diff({"s": [1]}, {"s": [2]}, ["SET"])
    with pytest.raises(UnsupportedPatchOperation):
        to_patch(d)
    with pytest.warns(UnsupportedTranslation):
        assert to_patch(d, strict=False) == []


def test_from_patch_spec_example():
    ops = [
        {"op": "replace", "path": "/a", "value": 2},
        {"op": "add", "path": "/b", "value": 3},
    ]
    d = from_patch(ops)
    assert d == [
        make_element(("a",), add=[2], merge=True),
        make_element(("b",), add=[3]),
    ]
    assert patch({"a": 1}, ops) == {"a": 2, "b": 3}


def test_from_patch_regroups_elements():
    for a, b in [
            ({"a": 1, "c": 0}, {"a": 2, "b": 3}),
            ({"foo": ["bar", "baz"]}, {"foo": ["bar", "boom"]}),
            ([1, 3], [1, 2, 3]),
            ([1, 2], [2]),
            ([], [1, 2]),
            ([1], [1, 2, 3]),
            ]:
        d = diff(a, b)
        ops = to_patch(d)
        d2 = from_patch(ops)
        assert len(d2) == len(d)
        assert patch(a, d2) == b
        assert patch(a, ops) == b


def test_from_patch_context():
    d = from_patch([
        {"op": "test", "path": "/0", "value": 1},
        {"op": "test", "path": "/1", "value": 3},
        {"op": "add", "path": "/1", "value": 2},
    ])
    assert d == [make_element((1,), before=[1], add=[2], after=[3])]

    d = from_patch([
        {"op": "test", "path": "/0", "value": 1},
        {"op": "add", "path": "/-", "value": 2},
    ])
    assert d == [make_element((1,), before=[1], add=[2], after=[CLOSE])]

    d = from_patch([
        {"op": "test", "path": "/0", "value": 1},
        {"op": "remove", "path": "/0"},
        {"op": "test", "path": "/0", "value": 2},
    ])
    assert d == [make_element((0,), before=[OPEN], remove=[1], after=[2])]

    # A context test before a change without one after ends the array
    d = from_patch([
        {"op": "test", "path": "/0", "value": None},
        {"op": "test", "path": "/1", "value": 2},
        {"op": "remove", "path": "/1"},
    ])
    assert d == [make_element((1,), before=[None], remove=[2], after=[CLOSE])]

    # Adds without context tests keep plain JSON Patch semantics
    d = from_patch([{"op": "add", "path": "/0", "value": 1}])
    assert d == [make_element((0,), before=[OPEN], add=[1])]
    assert patch([5, 6], d) == [1, 5, 6]


def test_from_patch_bare_remove():
    d = from_patch([{"op": "remove", "path": "/a"}])
    assert d == [make_element(("a",), add=[VOID], merge=True)]
    assert patch({"a": 1, "b": 2}, d) == {"b": 2}


def test_from_patch_json_text():
    d = from_patch('[{"op": "add", "path": "/a", "value": 1}]')
    assert d == [make_element(("a",), add=[1])]


@pytest.mark.parametrize("ops", [
    [{"op": "move", "from": "/a", "path": "/b"}],
    [{"op": "copy", "from": "/a", "path": "/b"}],
    [{"op": "test", "path": "/a", "value": 1}],
])
def test_from_patch_unsupported(ops):
    with pytest.raises(UnsupportedPatchOperation):
        from_patch(ops)


@pytest.mark.parametrize("ops", [
    {"op": "add", "path": "/a", "value": 1},
    [{"op": "add", "path": "/a"}],
    [{"op": "bogus", "path": "/a"}],
    [{"op": "move", "path": "/a"}],
    [{"path": "/a", "value": 1}],
    "[{",
])
def test_from_patch_malformed(ops):
    with pytest.raises(ParseError):
        from_patch(ops)


def test_to_merge():
    d = diff({"a": 1, "b": {"c": 2, "d": 1}}, {"b": {"c": 3, "d": 1}}, ["MERGE"])
    assert to_merge(d) == {"a": None, "b": {"c": 3}}
    assert to_merge([]) == {}
    assert to_merge(diff({"a": 1}, 5, ["MERGE"])) == 5


def test_to_merge_drops_array_elements():
    d = diff({"a": [1], "b": 1}, {"a": [2], "b": 2})
    with pytest.warns(UnsupportedTranslation):
        assert to_merge(d) == {"b": 2}


def test_from_merge():
    d = from_merge({"a": {"b": None, "c": 1}, "d": [1]})
    assert d == [
        make_element(("a", "b"), add=[VOID], merge=True),
        make_element(("a", "c"), add=[1], merge=True),
        make_element(("d",), add=[[1]], merge=True),
    ]
    assert from_merge({}) == []
    assert from_merge({"a": {}}) == []
    assert from_merge(5) == [make_element((), add=[5], merge=True)]
    assert from_merge('{"a": null}') == [make_element(("a",), add=[VOID], merge=True)]


def test_merge_patch_semantics():
    assert patch({"a": {"b": 2}}, {"a": {"b": None, "c": 1}}) == {"a": {"c": 1}}
    # Missing parents are created
    assert patch({}, {"a": {"c": 1}}) == {"a": {"c": 1}}
    assert patch({"a": 1}, {"a": {"c": 1}}) == {"a": {"c": 1}}
    assert patch([1], {"a": 1}) == {"a": 1}
    assert patch({"a": 1}, {"b": None}) == {"a": 1}


def test_translate_identity():
    text = '@ ["a"]\n+ 1\n'
    assert translate(text, "jd", "jd") is text
    with pytest.raises(ValueError):
        translate(text, "jd", "yaml")
    with pytest.raises(ValueError):
        translate(text, "yaml", "yaml")


def test_translate_jd_patch_roundtrip():
    for a, b in [
            ({"a": 1}, {"a": 2, "b": 3}),
            ({"x": {"y": [1, 3]}}, {"x": {"y": [1, 2, 3]}}),
            ([1, 2], [2]),
            ([1], [1, 2]),
            ]:
        text = render_diff(diff(a, b))
        ops = translate(text, "jd", "patch")
        assert translate(ops, "patch", "jd") == text


def test_translate_jd_patch_keeps_closing_context():
    text = '@ ["foo",1]\n  "bar"\n- "baz"\n+ "boom"\n]\n'
    ops = translate(text, "jd", "patch")
    assert translate(ops, "patch", "jd") == text
    doc = {"foo": ["bar", "baz"]}
    assert patch(doc, ops) == patch(doc, text) == {"foo": ["bar", "boom"]}
    extra = {"foo": ["bar", "baz", "extra"]}
    with pytest.raises(ContextMismatch):
        patch(extra, text)
    with pytest.raises(ContextMismatch):
        patch(extra, ops)


def test_translate_merge_jd():
    text = translate({"a": 1, "b": None}, "merge", "jd")
    assert text == '^ "MERGE"\n@ ["a"]\n+ 1\n@ ["b"]\n+\n'
    assert parse_diff(text)[0].merge
    assert translate(text, "jd", "merge") == {"a": 1, "b": None}


def test_translate_json_text():
    ops = translate('{"a": 1}', "merge", "patch")
    assert ops == [{"op": "add", "path": "/a", "value": 1}]
    assert translate(json.dumps(ops), "patch", "merge") == {"a": 1}


def test_translate_lossy_patch_warns():
    text = '^ "SET"\n@ ["s",{}]\n- 1\n+ 2\n@ ["a"]\n+ 1\n'
    with pytest.warns(UnsupportedTranslation):
        ops = translate(text, "jd", "patch")
    assert ops == [{"op": "add", "path": "/a", "value": 1}]
