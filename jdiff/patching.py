# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import copy

from .diff_format import (
    VOID, OPEN, CLOSE, SET_MARKER, MULTISET_MARKER, LIST_MARKER,
    KeyedIdentity, DiffElement, validate_diff)
from .diffing.comparing import values_equal
from .errors import InvalidPath, ValueMismatch, ContextMismatch, StackDepthExceeded
from .log import debug
from .utils import canonical_key, render_value


__all__ = ["patch", "patch_element"]


FORMATS = ("elements", "jd", "patch", "merge")


def _is_index(p):
    return isinstance(p, int) and not isinstance(p, bool)


def _same(a, b):
    return values_equal(a, b)


def _find_identity(lst, identity, path, value=VOID):
    "Return the index of the first item with identity (and equal to value if given)."
    for i, item in enumerate(lst):
        if identity.matches(item) and (value is VOID or _same(item, value)):
            return i
    if value is VOID:
        raise InvalidPath("No array item with identity {}".format(
            render_value(identity.fields)), path=path)
    raise ValueMismatch("No array item with identity {} equal to {}".format(
        render_value(identity.fields), render_value(value)), path=path)


def _addressable(value, p):
    "Check if path element p can address into value without replacing it."
    if isinstance(value, list):
        return not isinstance(p, str)
    return isinstance(value, dict)


def _child(container, p, path, create, nxt=None):
    "Get the child of container addressed by path element p."
    if isinstance(container, dict):
        key = str(p) if _is_index(p) else p
        if not isinstance(key, str):
            raise InvalidPath("Cannot address object with {!r}".format(p), path=path)
        if create and not _addressable(container.get(key), nxt):
            container[key] = {}
        if key not in container:
            raise InvalidPath("Missing object key {!r}".format(key), path=path)
        return container[key]
    elif isinstance(container, list):
        if _is_index(p):
            if not 0 <= p < len(container):
                raise InvalidPath("Array index {} out of range".format(p), path=path)
            return container[p]
        elif isinstance(p, KeyedIdentity):
            return container[_find_identity(container, p, path)]
        raise InvalidPath("Cannot address array with {!r}".format(p), path=path)
    raise InvalidPath("Cannot address into scalar value {}".format(
        render_value(container)), path=path)


def _resolve_parent(doc, path, create):
    """Walk to the container holding the last path element.

    Merge elements create missing parents as objects, and replace
    parents that cannot be addressed by the next path element.
    Returns the (possibly replaced) document and the parent.
    """
    if create and not _addressable(doc, path[0]):
        doc = {}
    parent = doc
    for i, p in enumerate(path[:-1]):
        parent = _child(parent, p, path[:i + 1], create, path[i + 1])
    return doc, parent


def _patch_key(obj, key, e, must_exist=False):
    if not isinstance(obj, dict):
        raise InvalidPath("Cannot patch key {!r} of non-object".format(key), path=e.path)
    if e.merge:
        if must_exist and key not in obj:
            raise InvalidPath("Missing object key {!r}".format(key), path=e.path)
        v = e.add[-1]
        if v is VOID:
            obj.pop(key, None)
        else:
            obj[key] = copy.deepcopy(v)
        return
    if e.remove:
        if key not in obj:
            raise ValueMismatch("Expected {} but key is missing".format(
                render_value(e.remove[0])), path=e.path)
        if not _same(obj[key], e.remove[0]):
            raise ValueMismatch("Expected {} but found {}".format(
                render_value(e.remove[0]), render_value(obj[key])), path=e.path)
    if e.add:
        obj[key] = copy.deepcopy(e.add[0])
    else:
        del obj[key]


def _patch_index(lst, index, e, must_exist=False):
    if isinstance(lst, dict):
        return _patch_key(lst, str(index), e, must_exist)
    if not isinstance(lst, list):
        raise InvalidPath("Cannot patch index {} of non-array".format(index), path=e.path)
    if index < 0:
        # Addresses the end of the array
        index = len(lst)
    if index > len(lst):
        raise InvalidPath("Array index {} out of range".format(index), path=e.path)

    if e.merge:
        if must_exist and index == len(lst):
            raise InvalidPath("Array index {} out of range".format(index), path=e.path)
        v = e.add[-1]
        if index == len(lst):
            if v is not VOID:
                lst.append(copy.deepcopy(v))
        elif v is VOID:
            del lst[index]
        else:
            lst[index] = copy.deepcopy(v)
        return

    if e.before:
        ctx = e.before[-1]
        if ctx is OPEN:
            if index != 0:
                raise ContextMismatch("Expected start of array before index {}".format(index),
                                      path=e.path)
        elif index == 0 or not _same(lst[index - 1], ctx):
            found = render_value(lst[index - 1]) if index > 0 else "start of array"
            raise ContextMismatch("Expected {} before change but found {}".format(
                render_value(ctx), found), path=e.path)

    end = index + len(e.remove)
    actual = lst[index:end]
    if len(actual) != len(e.remove) or not all(
            _same(x, y) for x, y in zip(actual, e.remove)):
        raise ValueMismatch("Expected {} but found {}".format(
            render_value(e.remove), render_value(actual)), path=e.path)

    if e.after:
        ctx = e.after[0]
        if ctx is CLOSE:
            if end != len(lst):
                raise ContextMismatch("Expected end of array after change", path=e.path)
        elif end >= len(lst) or not _same(lst[end], ctx):
            found = render_value(lst[end]) if end < len(lst) else "end of array"
            raise ContextMismatch("Expected {} after change but found {}".format(
                render_value(ctx), found), path=e.path)

    lst[index:end] = copy.deepcopy(e.add)


def _require_list(lst, e):
    if not isinstance(lst, list):
        raise InvalidPath("Cannot patch set of non-array", path=e.path)


def _patch_set(lst, e):
    _require_list(lst, e)
    for v in e.remove:
        k = canonical_key(v)
        keep = [x for x in lst if canonical_key(x) != k]
        if len(keep) == len(lst):
            raise ValueMismatch("Set has no value {}".format(render_value(v)), path=e.path)
        lst[:] = keep
    present = set(canonical_key(x) for x in lst)
    for v in e.add:
        if canonical_key(v) not in present:
            lst.append(copy.deepcopy(v))
            present.add(canonical_key(v))


def _patch_multiset(lst, e):
    _require_list(lst, e)
    for v in e.remove:
        k = canonical_key(v)
        for i, x in enumerate(lst):
            if canonical_key(x) == k:
                del lst[i]
                break
        else:
            raise ValueMismatch("Multiset has no value {}".format(render_value(v)), path=e.path)
    lst.extend(copy.deepcopy(e.add))


def _patch_keyed(lst, identity, e):
    _require_list(lst, e)
    if e.remove:
        i = _find_identity(lst, identity, e.path, e.remove[0])
        if e.add:
            lst[i] = copy.deepcopy(e.add[0])
        else:
            del lst[i]
    else:
        lst.append(copy.deepcopy(e.add[0]))


def _patch_root(doc, e):
    if e.merge:
        return copy.deepcopy(e.add[-1])
    if e.remove and not _same(doc, e.remove[0]):
        raise ValueMismatch("Expected {} but found {}".format(
            render_value(e.remove[0]), render_value(doc)), path=e.path)
    if e.add:
        return copy.deepcopy(e.add[0])
    return VOID


def patch_element(doc, e, must_exist=False):
    """Apply a single diff element to doc, in place where possible.

    Merge elements create missing parents, unless `must_exist` is set.
    Then the target of a merge element and all its parents must exist,
    as for the replace and remove operations of JSON Patch.

    Returns the patched document.
    """
    if not e.path:
        return _patch_root(doc, e)

    doc, parent = _resolve_parent(doc, e.path, e.merge and not must_exist)
    last = e.path[-1]
    if isinstance(last, str):
        _patch_key(parent, last, e, must_exist)
    elif _is_index(last):
        _patch_index(parent, last, e, must_exist)
    elif last is SET_MARKER:
        _patch_set(parent, e)
    elif last is MULTISET_MARKER:
        _patch_multiset(parent, e)
    elif isinstance(last, KeyedIdentity):
        _patch_keyed(parent, last, e)
    elif last is LIST_MARKER:
        raise InvalidPath("List markers only address option paths", path=e.path)
    else:
        raise InvalidPath("Invalid path element {!r}".format(last), path=e.path)
    return doc


def _detect_format(diff):
    if isinstance(diff, (str, bytes)):
        return "jd"
    elif isinstance(diff, dict):
        return "merge"
    elif isinstance(diff, (list, tuple)):
        if all(isinstance(e, DiffElement) for e in diff):
            return "elements"
        return "patch"
    raise ValueError("Cannot detect diff format of {!r}".format(type(diff).__name__))


def as_elements(diff, format=None):
    "Convert a diff in any supported format to a list of diff elements."
    if format is None:
        format = _detect_format(diff)
    if format == "elements":
        d = list(diff)
        validate_diff(d)
        return d
    elif format == "jd":
        from .jdtext import parse_diff
        if isinstance(diff, bytes):
            diff = diff.decode("utf8")
        return parse_diff(diff)
    elif format == "patch":
        from .translation import from_patch
        return from_patch(diff)
    elif format == "merge":
        from .translation import from_merge
        return from_merge(diff)
    raise ValueError("Invalid diff format %r. Valid values are %r." % (format, FORMATS))


def _check_depth(diff, max_depth):
    for e in diff:
        if len(e.path) > max_depth:
            raise StackDepthExceeded(
                "Diff path exceeds maximum depth {}".format(max_depth), path=e.path)


def patch(document, diff, format=None, max_depth=None):
    """Produce a patched version of document with the given diff.

    The diff can be a list of diff elements, jd text, a JSON Patch
    operation list or a JSON Merge Patch object. The format is
    detected from the type of `diff` unless given explicitly.

    Elements are applied in order to a copy of the document, so the
    input is never modified and a failing element (raising
    ContextMismatch, ValueMismatch or InvalidPath) leaves no partial
    result behind. A patch that erases the root returns VOID.

    JSON Patch replace and remove operations raise InvalidPath when
    their target does not exist, merge patches create missing parents.
    """
    if max_depth is None:
        from .config import build_config
        max_depth = build_config('patch')['max_depth']

    if format is None:
        format = _detect_format(diff)
    d = as_elements(diff, format)
    _check_depth(d, max_depth)
    # JSON Patch replace and remove never create their targets
    must_exist = format == "patch"

    try:
        doc = copy.deepcopy(document)
    except RecursionError:
        raise StackDepthExceeded("Document nesting too deep to patch")
    for e in d:
        doc = patch_element(doc, e, must_exist)
    debug("Applied %d diff elements", len(d))
    return doc
