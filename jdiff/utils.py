# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import json
import math
import re
from decimal import Decimal

from .diff_format import VOID
from .errors import StackDepthExceeded


# Kinds of json-like values, see value_kind
VOID_KIND = "void"
NULL = "null"
BOOLEAN = "boolean"
NUMBER = "number"
STRING = "string"
ARRAY = "array"
OBJECT = "object"
UNKNOWN = "unknown"

CONTAINER_KINDS = (ARRAY, OBJECT)


def value_kind(x):
    """Classify a json-like value.

    Note that bool is checked before numbers since bool is
    a subclass of int in Python, but never a number in JSON.
    """
    if x is VOID:
        return VOID_KIND
    elif x is None:
        return NULL
    elif isinstance(x, bool):
        return BOOLEAN
    elif isinstance(x, (int, float)):
        return NUMBER
    elif isinstance(x, str):
        return STRING
    elif isinstance(x, (list, tuple)):
        return ARRAY
    elif isinstance(x, dict):
        return OBJECT
    return UNKNOWN


def is_number(x):
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def normalize_value(x, max_depth=None, _depth=0):
    """Return a copy of x suitable for canonical json serialization.

    Integral floats are turned into ints so that they render
    without a trailing '.0', and tuples become lists.
    """
    if max_depth is not None and _depth > max_depth:
        raise StackDepthExceeded(
            "Value nesting exceeds maximum depth {}".format(max_depth))
    if isinstance(x, float) and x.is_integer():
        return int(x)
    elif isinstance(x, dict):
        return {k: normalize_value(v, max_depth, _depth + 1) for k, v in x.items()}
    elif isinstance(x, (list, tuple)):
        return [normalize_value(v, max_depth, _depth + 1) for v in x]
    return x


def format_number(x):
    """Render a number as json text.

    Non-integral floats are written in plain decimal notation,
    without an exponent (0.00001, not 1e-05).
    """
    if isinstance(x, float) and not x.is_integer() and math.isfinite(x):
        # repr gives the shortest digits that round-trip
        return format(Decimal(repr(x)), "f")
    return json.dumps(x)


def _render(x):
    if isinstance(x, dict):
        return "{" + ",".join(
            json.dumps(k, ensure_ascii=False) + ":" + _render(x[k])
            for k in sorted(x)) + "}"
    elif isinstance(x, list):
        return "[" + ",".join(_render(v) for v in x) + "]"
    elif is_number(x):
        return format_number(x)
    return json.dumps(x, ensure_ascii=False)


def render_value(x, max_depth=None):
    """Render a value as compact canonical json.

    Object keys are sorted, there are no spaces after separators,
    integral numbers have no fractional part, other numbers have
    no exponent and non-ascii characters are kept as-is.
    """
    if x is VOID:
        return ""
    try:
        return _render(normalize_value(x, max_depth))
    except RecursionError:
        raise StackDepthExceeded("Value nesting too deep to render")


def canonical_key(x):
    "Hashable key of a value, equal for values with the same canonical json text."
    if x is VOID:
        return None
    return render_value(x)


def load_json(text):
    "Parse json text, raising ValueError on malformed input."
    return json.loads(text)


_index_re = re.compile(r"^(0|[1-9][0-9]*)$")

def is_index_segment(segment):
    "Check if a JSON pointer segment addresses an array position."
    return bool(_index_re.match(segment))
