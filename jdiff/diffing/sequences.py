# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Array diffing strategies.

A normal array diff is a single window: the common prefix and
suffix of the two arrays are trimmed (using tolerant equality)
and the remaining span is replaced. No matching of items in the
middle of the window is attempted.

Set and multiset diffs compare items by their canonical json text,
so the precision option does not apply to them.
"""

from collections import Counter, OrderedDict

from ..diff_format import make_element, OPEN, CLOSE, SET_MARKER, MULTISET_MARKER
from ..options import Directive
from ..utils import canonical_key

from .comparing import values_equal

__all__ = ["diff_lists_window", "diff_lists_set", "diff_lists_multiset", "diff_lists_merge",
           "common_prefix_suffix"]


def common_prefix_suffix(a, b, mode, max_depth=None):
    """Find the length of the common prefix and suffix of a and b.

    The suffix never overlaps the prefix in either sequence.
    """
    la, lb = len(a), len(b)
    p = 0
    while p < la and p < lb and values_equal(a[p], b[p], mode, max_depth):
        p += 1
    s = 0
    while (s < la - p and s < lb - p and
           values_equal(a[la - 1 - s], b[lb - 1 - s], mode, max_depth)):
        s += 1
    return p, s


def diff_lists_window(a, b, path, mode, max_depth=None):
    "Diff two arrays as a single replaced window between common prefix and suffix."
    p, s = common_prefix_suffix(a, b, mode, max_depth)
    la, lb = len(a), len(b)
    if p + s == la and p + s == lb:
        return []

    before = [a[p - 1]] if p > 0 else [OPEN]
    after = [a[la - s]] if s > 0 else [CLOSE]
    return [make_element(
        path + (p,),
        before=before,
        remove=a[p:la - s],
        add=b[p:lb - s],
        after=after,
    )]


def _distinct(values):
    "Map canonical keys to the first value with that key, in order of appearance."
    d = OrderedDict()
    for v in values:
        k = canonical_key(v)
        if k not in d:
            d[k] = v
    return d


def diff_lists_set(a, b, path, mode):
    "Diff two arrays as sets of distinct values."
    da = _distinct(a)
    db = _distinct(b)
    remove = [v for k, v in da.items() if k not in db]
    add = [v for k, v in db.items() if k not in da]
    if not remove and not add:
        return []
    return [make_element(path + (SET_MARKER,), remove=remove, add=add,
                         options=[Directive.SET])]


def diff_lists_multiset(a, b, path, mode):
    "Diff two arrays as multisets, counting repeated values."
    da = _distinct(a)
    db = _distinct(b)
    ca = Counter(canonical_key(v) for v in a)
    cb = Counter(canonical_key(v) for v in b)
    remove = []
    add = []
    for k in sorted(set(ca) | set(cb)):
        n = ca[k] - cb[k]
        if n > 0:
            remove.extend([da[k]] * n)
        elif n < 0:
            add.extend([db[k]] * -n)
    if not remove and not add:
        return []
    return [make_element(path + (MULTISET_MARKER,), remove=remove, add=add,
                         options=[Directive.MULTISET])]


def diff_lists_merge(a, b, path, mode):
    "Replace the whole array, merge patches cannot address array items."
    return [make_element(path, remove=[a], add=[b], merge=True)]
