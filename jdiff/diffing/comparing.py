# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from fractions import Fraction

from ..errors import StackDepthExceeded
from ..options import DEFAULT_MODE
from ..utils import value_kind, NUMBER, ARRAY, OBJECT, VOID_KIND

__all__ = ["values_equal", "numbers_close"]


def numbers_close(a, b, precision):
    "Compare two numbers with an absolute tolerance."
    if a == b:
        return True
    try:
        return abs(a - b) <= precision
    except OverflowError:
        # Ints beyond float range against a float, compare exactly
        return abs(Fraction(a) - Fraction(b)) <= Fraction(precision)


def values_equal(a, b, mode=None, max_depth=None, _depth=0):
    """Compare two json-like values under an effective mode.

    Numbers are compared with the mode precision, objects by key set
    and values (ignoring key order), arrays pairwise in order. Array
    modes (set, multiset, setkeys) are not applied here, they are
    handled by the differ at the array's own path.
    """
    if mode is None:
        mode = DEFAULT_MODE
    if max_depth is not None and _depth > max_depth:
        raise StackDepthExceeded(
            "Value nesting exceeds maximum depth {}".format(max_depth))

    ka = value_kind(a)
    kb = value_kind(b)
    if ka != kb:
        return False
    if ka == VOID_KIND:
        return True
    elif ka == NUMBER:
        return numbers_close(a, b, mode.precision)
    elif ka == OBJECT:
        if len(a) != len(b) or set(a.keys()) != set(b.keys()):
            return False
        return all(values_equal(a[k], b[k], mode, max_depth, _depth + 1) for k in a)
    elif ka == ARRAY:
        if len(a) != len(b):
            return False
        return all(values_equal(x, y, mode, max_depth, _depth + 1) for x, y in zip(a, b))
    else:
        # null, boolean, string and anything unknown
        return a == b
