# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..diff_format import VOID, make_element, validate_diff
from ..utils import value_kind, VOID_KIND, ARRAY, OBJECT
from ..options import ArrayMode

from .comparing import values_equal
from .config import DiffConfig
from .sequences import diff_lists_window, diff_lists_set, diff_lists_multiset, diff_lists_merge
from .keyed import diff_lists_keyed

__all__ = ["diff", "diff_text", "equal"]


FORMATS = ("jd", "patch", "merge")


def diff(a, b, options=None, format=None, config=None):
    """Compute the structural diff of two json-like values.

    Either value may be VOID to represent absence.

    Returns a list of DiffElements, or when `format` is given the
    diff rendered as jd text ("jd"), a JSON Patch ("patch") or a
    JSON Merge Patch ("merge").
    """
    if config is None:
        config = DiffConfig(options=options)

    d = diff_values(a, b, (), config, 0)

    # We can turn this off for performance after the library has been well tested:
    validate_diff(d)

    if format is None:
        return d
    elif format == "jd":
        from ..jdtext import render_diff
        return render_diff(d)
    elif format == "patch":
        from ..translation import to_patch
        return to_patch(d)
    elif format == "merge":
        from ..translation import to_merge
        return to_merge(d)
    raise ValueError("Invalid diff format %r. Valid values are %r." % (format, FORMATS))


def diff_text(a, b, options=None, color=None, config=None):
    """Compute the diff of a and b rendered as jd text.

    Colors are used when the COLOR option is active at the root,
    or when `color` is given as True.
    """
    if config is None:
        config = DiffConfig(options=options)
    if color is None:
        from ..config import build_config
        color = config.mode_at(()).color or build_config('diff')['color']
    from ..jdtext import render_diff
    return render_diff(diff(a, b, config=config), color=color)


def equal(a, b, options=None):
    "Return True if a and b have no differences under the given options."
    return not diff(a, b, options=options)


def _element(path, a, b, mode, options=()):
    remove = [] if a is VOID else [a]
    if mode.merge:
        return make_element(path, remove=remove, add=[b], merge=True)
    add = [] if b is VOID else [b]
    return make_element(path, remove=remove, add=add, options=options)


def diff_values(a, b, path, config, depth):
    "Recursively diff a and b at path."
    config.check_depth(depth, path)
    mode = config.mode_at(path)

    if not mode.diffing_enabled and not config.recurse_disabled(path):
        return []

    if values_equal(a, b, mode, config.max_depth, depth):
        return []

    ka = value_kind(a)
    kb = value_kind(b)

    if ka == OBJECT and kb == OBJECT:
        return diff_dicts(a, b, path, config, depth)

    # Everything below is atomic at this path
    if not mode.diffing_enabled:
        return []

    if ka == VOID_KIND or kb == VOID_KIND:
        return [_element(path, a, b, mode)]

    if ka == ARRAY and kb == ARRAY:
        return diff_lists(a, b, path, config, depth)

    # Scalar changes or type changes
    return [_element(path, a, b, mode)]


def diff_lists(a, b, path, config, depth):
    """Compute diff of two lists using the array mode active at path."""
    mode = config.mode_at(path)
    if mode.merge:
        # Merge patches cannot address array items
        return diff_lists_merge(a, b, path, mode)
    elif mode.setkeys is not None:
        return diff_lists_keyed(a, b, path, config, depth)
    elif mode.array_mode == ArrayMode.SET:
        return diff_lists_set(a, b, path, mode)
    elif mode.array_mode == ArrayMode.MULTISET:
        return diff_lists_multiset(a, b, path, mode)
    elif mode.array_mode == ArrayMode.NORMAL:
        return diff_lists_window(a, b, path, mode, config.max_depth)
    # Replace the whole array for anything unknown
    return [_element(path, a, b, mode)]


def diff_dicts(a, b, path, config, depth):
    """Compute diff of two dicts.

    Removed keys come first, then keys in both a and b,
    then added keys, each group sorted by key to get a
    deterministic diff result.
    """
    if not isinstance(a, dict) or not isinstance(b, dict):
        raise TypeError('Arguments to diff_dicts need to be dicts, got %r and %r' % (a, b))
    akeys = set(a.keys())
    bkeys = set(b.keys())

    d = []
    for key in sorted(akeys - bkeys):
        d.extend(diff_values(a[key], VOID, path + (key,), config, depth + 1))

    for key in sorted(akeys & bkeys):
        d.extend(diff_values(a[key], b[key], path + (key,), config, depth + 1))

    for key in sorted(bkeys - akeys):
        d.extend(diff_values(VOID, b[key], path + (key,), config, depth + 1))

    return d
