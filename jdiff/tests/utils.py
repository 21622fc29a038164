# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from jdiff import patch, diff, equal, render_diff, parse_diff
from jdiff.diff_format import is_valid_diff


def nested(value, depth):
    "Wrap value in depth levels of single item arrays."
    for _ in range(depth):
        value = [value]
    return value


def hunk(e):
    """The parts of a diff element written to jd text.

    Options are left out, as option headers are shared by all
    following hunks. Merge hunks have no removed values.
    """
    remove = [] if e.merge else e.remove
    return (e.path, e.merge, e.before, remove, e.add, e.after)


def check_diff_and_patch(a, b, options=None):
    "Check that patch(a, diff(a,b)) reproduces b, also through jd text."
    d = diff(a, b, options)
    assert is_valid_diff(d)
    results = [patch(a, d), patch(a, render_diff(d))]
    for result in results:
        if options is None:
            assert result == b
        else:
            assert equal(result, b, options)
    parsed = parse_diff(render_diff(d))
    assert [hunk(e) for e in parsed] == [hunk(e) for e in d]


def check_symmetric_diff_and_patch(a, b, options=None):
    "Check that patch(a, diff(a,b)) reproduces b and vice versa."
    check_diff_and_patch(a, b, options)
    check_diff_and_patch(b, a, options)
