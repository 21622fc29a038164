# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Conversion of diffs between jd, JSON Patch and JSON Merge Patch.

JSON Patch (RFC 6902) cannot address set, multiset or keyed array
items, and JSON Merge Patch (RFC 7386) cannot address array items
at all. Translations to these formats drop what they cannot express,
with a warning.
"""

import warnings

from jsonpointer import JsonPointer, JsonPointerException

from .diff_format import (
    VOID, OPEN, CLOSE, make_element, validate_diff, DiffElement)
from .errors import (
    InvalidPath, UnsupportedPatchOperation, UnsupportedTranslation)
from .jdtext import render_diff, parse_diff
from .log import debug
from .utils import is_index_segment
from .validation import parse_patch_document, parse_merge_document

__all__ = ["to_patch", "from_patch", "to_merge", "from_merge", "translate",
           "path_to_pointer", "pointer_to_path"]


FORMATS = ("jd", "patch", "merge")

# Path element standing for the end of an array, '-' in JSON pointers
APPEND_INDEX = -1


def _is_index(p):
    return isinstance(p, int) and not isinstance(p, bool)


def path_to_pointer(path):
    "Convert a path of keys and indices into a JSON pointer."
    parts = []
    for p in path:
        if isinstance(p, str):
            parts.append(p)
        elif _is_index(p):
            parts.append("-" if p == APPEND_INDEX else str(p))
        else:
            raise UnsupportedPatchOperation(
                "JSON pointers cannot address {!r}".format(p), path=path)
    return JsonPointer.from_parts(parts).path


def pointer_to_path(pointer):
    "Convert a JSON pointer into a path, numeric segments become indices."
    try:
        parts = JsonPointer(pointer).parts
    except JsonPointerException as e:
        raise InvalidPath("Invalid JSON pointer {!r}: {}".format(pointer, e))
    path = []
    for part in parts:
        if part == "-":
            path.append(APPEND_INDEX)
        elif is_index_segment(part):
            path.append(int(part))
        else:
            path.append(part)
    return tuple(path)


def _op(op, path, *value):
    d = {"op": op, "path": path_to_pointer(path)}
    if value:
        d["value"] = value[0]
    return d


def _window_to_patch(e):
    parent = e.path[:-1]
    p = e.path[-1]
    ops = []
    if e.merge:
        v = e.add[-1]
        if v is VOID:
            return [_op("remove", e.path)]
        return [_op("replace", e.path, v)]

    has_before = bool(e.before) and e.before[-1] is not OPEN
    if has_before:
        ops.append(_op("test", parent + (p - 1,), e.before[-1]))
    for v in e.remove:
        ops.append(_op("test", e.path, v))
        ops.append(_op("remove", e.path, v))
    if e.after and e.after[0] is not CLOSE:
        ops.append(_op("test", e.path, e.after[0]))
    tail = (not e.remove and has_before and
            bool(e.after) and e.after[0] is CLOSE)
    for j, v in enumerate(e.add):
        index = APPEND_INDEX if tail else p + j
        ops.append(_op("add", parent + (index,), v))
    return ops


def _element_to_patch(e):
    if e.path and _is_index(e.path[-1]):
        return _window_to_patch(e)

    # Raises for marker path elements
    path_to_pointer(e.path)
    if e.merge:
        v = e.add[-1]
        if v is VOID:
            return [_op("remove", e.path)]
        return [_op("add", e.path, v)]

    if len(e.remove) > 1 or len(e.add) > 1:
        raise UnsupportedPatchOperation(
            "Multiple values at a key path", path=e.path)
    ops = []
    for v in e.remove:
        ops.append(_op("test", e.path, v))
        ops.append(_op("remove", e.path, v))
    for v in e.add:
        ops.append(_op("add", e.path, v))
    return ops


def to_patch(diff, strict=True):
    """Convert diff elements into a JSON Patch (RFC 6902) operation list.

    Elements that cannot be expressed raise UnsupportedPatchOperation,
    or are skipped with a warning if `strict` is False.
    """
    ops = []
    for e in diff:
        try:
            ops.extend(_element_to_patch(e))
        except UnsupportedPatchOperation as err:
            if strict:
                raise
            warnings.warn(UnsupportedTranslation(
                "Skipping diff element in patch translation: {}".format(err)),
                stacklevel=2)
    return ops


class _PatchReader(object):
    "Cursor over patch operations with their paths parsed."

    def __init__(self, ops):
        self.ops = [(op["op"], pointer_to_path(op["path"]), op) for op in ops]
        self.i = 0

    def peek(self, offset=0):
        i = self.i + offset
        if i < len(self.ops):
            return self.ops[i]
        return None, None, None

    def at(self, kind, path, offset=0):
        k, p, _ = self.peek(offset)
        return k == kind and p == path

    def done(self):
        return self.i >= len(self.ops)


def _sibling(path, index):
    return path[:-1] + (index,)


def _read_group(reader, path, before=VOID):
    """Read a run of test/remove pairs, an optional context test and adds at path.

    `before` is the value of a context test preceding the run. Patches
    written by to_patch leave out the context test after a change only
    at the end of an array, so a run with a context test before it and
    none after it closes the array.
    """
    remove = []
    after = []
    add = []
    while reader.at("test", path) and reader.at("remove", path, 1):
        remove.append(reader.peek()[2]["value"])
        reader.i += 2

    is_index = bool(path) and _is_index(path[-1])
    if is_index and reader.at("test", path):
        after.append(reader.peek()[2]["value"])
        reader.i += 1

    tail = False
    while True:
        kind, p, op = reader.peek()
        if kind != "add":
            break
        if is_index:
            if p[:-1] != path[:-1]:
                break
            if p[-1] == APPEND_INDEX and not remove and not after:
                tail = True
            elif p[-1] != path[-1] + len(add) or tail:
                break
        elif p != path or add:
            break
        add.append(op["value"])
        reader.i += 1

    if not remove and not add:
        raise UnsupportedPatchOperation(
            "Test operation without a following change", path=path)

    if is_index:
        if tail or (before is not VOID and not after):
            after = [CLOSE]
        if before is VOID and path[-1] == 0:
            before = OPEN
    return make_element(path, remove=remove, add=add,
                        before=[] if before is VOID else [before], after=after)


def from_patch(ops):
    """Convert a JSON Patch (RFC 6902) document into diff elements.

    Runs of test/remove/add operations on the same path become one element,
    test operations next to an array change are kept as context. Operations
    without a preceding test (replace, bare remove) cannot be verified and
    become merge elements.
    """
    reader = _PatchReader(parse_patch_document(ops))
    d = []
    while not reader.done():
        kind, path, op = reader.peek()
        if kind in ("move", "copy"):
            raise UnsupportedPatchOperation(
                "Unsupported patch operation {!r}".format(kind), path=path)
        elif kind == "replace":
            d.append(make_element(path, add=[op["value"]], merge=True))
            reader.i += 1
        elif kind == "remove":
            d.append(make_element(path, add=[VOID], merge=True))
            reader.i += 1
        elif kind == "add":
            d.append(_read_group(reader, path))
        elif kind == "test":
            before = VOID
            if path and _is_index(path[-1]) and path[-1] != APPEND_INDEX:
                nkind, npath, _ = reader.peek(1)
                nxt = _sibling(path, path[-1] + 1)
                if npath == nxt or (nkind == "add" and npath == _sibling(path, APPEND_INDEX)):
                    before = op["value"]
                    reader.i += 1
                    if npath != nxt:
                        # Appending after the tested item
                        path = nxt
                    else:
                        path = npath
            d.append(_read_group(reader, path, before))
        else:
            raise UnsupportedPatchOperation(
                "Unknown patch operation {!r}".format(kind), path=path)
    validate_diff(d)
    return d


def to_merge(diff):
    """Convert diff elements into a JSON Merge Patch (RFC 7386) document.

    Only elements addressing object keys contribute, elements inside
    arrays are dropped with a warning. Removals become null.
    """
    result = VOID
    dropped = 0
    for e in diff:
        if not all(isinstance(p, str) for p in e.path):
            debug("Dropping diff element at %r from merge patch", e.path)
            dropped += 1
            continue
        value = e.add[-1] if e.add else VOID
        if value is VOID:
            value = None
        if not e.path:
            result = value
            continue
        if not isinstance(result, dict):
            result = {}
        target = result
        for key in e.path[:-1]:
            if not isinstance(target.get(key), dict):
                target[key] = {}
            target = target[key]
        target[e.path[-1]] = value
    if dropped:
        warnings.warn(UnsupportedTranslation(
            "Merge patches cannot address array items, "
            "dropped {} diff element(s)".format(dropped)), stacklevel=2)
    if result is VOID:
        return {}
    return result


def from_merge(obj, path=()):
    """Convert a JSON Merge Patch (RFC 7386) document into diff elements.

    Nested objects are merged recursively, null deletes a key
    and any other value replaces it.
    """
    obj = parse_merge_document(obj) if not path else obj
    if not isinstance(obj, dict):
        return [make_element(path, add=[obj], merge=True)]
    d = []
    for key in sorted(obj):
        value = obj[key]
        subpath = path + (key,)
        if isinstance(value, dict):
            d.extend(from_merge(value, subpath))
        elif value is None:
            d.append(make_element(subpath, add=[VOID], merge=True))
        else:
            d.append(make_element(subpath, add=[value], merge=True))
    return d


def _to_elements(content, format):
    if format == "jd":
        if isinstance(content, list) and all(isinstance(e, DiffElement) for e in content):
            return content
        return parse_diff(content)
    elif format == "patch":
        return from_patch(content)
    elif format == "merge":
        return from_merge(content)
    raise ValueError("Invalid format %r. Valid values are %r." % (format, FORMATS))


def translate(content, from_format, to_format):
    """Translate a diff between the jd, patch and merge formats.

    jd content is text, patch and merge content are json values
    (or json text).
    """
    for format in (from_format, to_format):
        if format not in FORMATS:
            raise ValueError("Invalid format %r. Valid values are %r." % (format, FORMATS))
    if from_format == to_format:
        return content
    d = _to_elements(content, from_format)
    if to_format == "jd":
        return render_diff(d)
    elif to_format == "patch":
        return to_patch(d, strict=False)
    else:
        return to_merge(d)
