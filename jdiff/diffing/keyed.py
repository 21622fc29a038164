# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Diffing of arrays of objects matched by identity keys (setkeys).

Each object item is projected onto the setkeys to form a KeyedIdentity.
Items whose identity exists on one side only are removed or added as a
whole. Items present on both sides are diffed one level deep: only the
direct fields of the matched pair are compared, fields holding objects
or arrays are replaced as a whole rather than diffed recursively.
"""

from collections import OrderedDict

from ..diff_format import VOID, KeyedIdentity, make_element
from ..log import debug

from .comparing import values_equal
from .sequences import diff_lists_window

__all__ = ["diff_lists_keyed"]


def _group_by_identity(values, keys):
    "Map identities to the list of (index, item) occurrences, in order of appearance."
    groups = OrderedDict()
    for i, v in enumerate(values):
        ident = KeyedIdentity.from_item(v, keys)
        groups.setdefault(ident, []).append((i, v))
    return groups


def diff_lists_keyed(a, b, path, config, depth):
    mode = config.mode_at(path)
    keys = mode.setkeys

    if not all(isinstance(v, dict) for v in a) or not all(isinstance(v, dict) for v in b):
        debug("Array at %r has non-object items, falling back to normal array diff", path)
        return diff_lists_window(a, b, path, mode, config.max_depth)

    options = [{"setkeys": list(keys)}]
    ga = _group_by_identity(a, keys)
    gb = _group_by_identity(b, keys)

    surplus_removed = []
    surplus_added = []
    removed = []
    added = []
    matched = []

    for ident, items in ga.items():
        if ident not in gb:
            for i, v in items:
                removed.append(make_element(path + (ident,), remove=[v], options=options))
        else:
            matched.append(ident)
            n = len(gb[ident])
            for i, v in items[n:]:
                surplus_removed.append((i, v))

    for ident, items in gb.items():
        if ident not in ga:
            for i, v in items:
                added.append(make_element(path + (ident,), add=[v], options=options))
        else:
            n = len(ga[ident])
            for i, v in items[n:]:
                surplus_added.append((i, v))

    d = []
    # Surplus occurrences are addressed by index, remove from the back
    # so earlier indices stay valid
    for i, v in sorted(surplus_removed, key=lambda x: x[0], reverse=True):
        d.append(make_element(path + (i,), remove=[v], options=options))
    d.extend(removed)
    d.extend(added)

    for ident in sorted(matched, key=lambda x: x._key()):
        aitem = ga[ident][0][1]
        bitem = gb[ident][0][1]
        d.extend(diff_keyed_fields(aitem, bitem, path + (ident,), config, depth + 1, options))

    # Index -1 appends, item order is not significant under setkeys
    for i, v in sorted(surplus_added, key=lambda x: x[0]):
        d.append(make_element(path + (-1,), add=[v], options=options))
    return d


def diff_keyed_fields(a, b, path, config, depth, options):
    "Diff the direct fields of two matched objects, without recursing further."
    config.check_depth(depth, path)
    akeys = set(a.keys())
    bkeys = set(b.keys())
    keys = (sorted(akeys - bkeys) + sorted(akeys & bkeys) + sorted(bkeys - akeys))

    d = []
    for key in keys:
        subpath = path + (key,)
        mode = config.mode_at(subpath)
        if not mode.diffing_enabled:
            continue
        avalue = a.get(key, VOID)
        bvalue = b.get(key, VOID)
        if values_equal(avalue, bvalue, mode, config.max_depth, depth):
            continue
        remove = [] if avalue is VOID else [avalue]
        add = [] if bvalue is VOID else [bvalue]
        d.append(make_element(subpath, remove=remove, add=add, options=options))
    return d
