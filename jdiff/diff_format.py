# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .errors import DiffFormatError, InvalidPath


class _Sentinel(object):
    """Named singleton, preserved by copy and deepcopy."""

    def __init__(self, name):
        self.name = name

    def __repr__(self):
        return self.name

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return self.name


# Sentinel for the absence of a value, distinct from json null
VOID = _Sentinel("VOID")

# Context markers for the start and end of an array
OPEN = _Sentinel("OPEN")
CLOSE = _Sentinel("CLOSE")

# Path elements addressing an array as a whole
SET_MARKER = _Sentinel("SET_MARKER")
MULTISET_MARKER = _Sentinel("MULTISET_MARKER")
LIST_MARKER = _Sentinel("LIST_MARKER")

MARKERS = (SET_MARKER, MULTISET_MARKER, LIST_MARKER)


class KeyedIdentity(object):
    """Path element matching array items by the values of some keys.

    Two identities are equal when their canonical json text is equal.
    """
    __slots__ = ("fields",)

    def __init__(self, fields):
        self.fields = dict(fields)

    def _key(self):
        from .utils import render_value
        return render_value(self.fields)

    def __eq__(self, other):
        return isinstance(other, KeyedIdentity) and self._key() == other._key()

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return "KeyedIdentity({!r})".format(self.fields)

    def matches(self, item):
        "Check if an array item has this identity."
        from .utils import canonical_key
        if not isinstance(item, dict):
            return False
        return all(canonical_key(item.get(k)) == canonical_key(v)
                   for k, v in self.fields.items())

    @classmethod
    def from_item(cls, item, keys):
        "Project an object onto keys, missing keys project to null."
        return cls((k, item.get(k)) for k in keys)


def path_to_json(path):
    "Convert a path into its json form, as used in jd text and option paths."
    out = []
    for p in path:
        if isinstance(p, str):
            out.append(p)
        elif isinstance(p, int) and not isinstance(p, bool):
            out.append(p)
        elif p is SET_MARKER:
            out.append({})
        elif p is MULTISET_MARKER:
            out.append([])
        elif p is LIST_MARKER:
            out.append([[]])
        elif isinstance(p, KeyedIdentity):
            out.append(dict(p.fields))
        else:
            raise InvalidPath("Invalid path element {!r}.".format(p))
    return out


def path_from_json(raw):
    "Convert the json form of a path into a path tuple."
    if not isinstance(raw, list):
        raise InvalidPath("Path must be a json array, not {!r}.".format(raw))
    path = []
    for p in raw:
        if isinstance(p, bool):
            raise InvalidPath("Invalid path element {!r}.".format(p))
        elif isinstance(p, str):
            path.append(p)
        elif isinstance(p, int):
            path.append(p)
        elif isinstance(p, float) and p.is_integer():
            path.append(int(p))
        elif isinstance(p, dict):
            path.append(KeyedIdentity(p) if p else SET_MARKER)
        elif p == []:
            path.append(MULTISET_MARKER)
        elif p == [[]]:
            path.append(LIST_MARKER)
        else:
            raise InvalidPath("Invalid path element {!r}.".format(p))
    return tuple(path)


class DiffElement(dict):
    """A single hunk of a structural diff.

    Minimal class providing attribute access to element keys:

        path    tuple of path elements the hunk applies to
        merge   True for merge patch semantics (no verification)
        options raw option directives describing the hunk context
        before  context values before the change (or OPEN)
        remove  values removed at path
        add     values added at path (VOID for merge deletion)
        after   context values after the change (or CLOSE)
    """
    def __getattr__(self, name):
        if name.startswith("__") and name.endswith("__"):
            return self.__getattribute__(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    def __setattr__(self, name, value):
        self[name] = value


def make_element(path, remove=(), add=(), before=(), after=(), merge=False, options=()):
    "Create a diff element."
    options = list(options)
    if merge and "MERGE" not in options:
        options.append("MERGE")
    return DiffElement(
        path=tuple(path),
        merge=merge,
        options=options,
        before=list(before),
        remove=list(remove),
        add=list(add),
        after=list(after),
    )


def is_valid_diff(diff):
    """Checks wheter a diff (list of diff elements) is well formed.

    Returns a boolean indicating the well-formedness of the diff.
    """
    try:
        validate_diff(diff)
    except DiffFormatError:
        return False
    return True


def validate_diff(diff):
    """Check wheter a diff (list of diff elements) is well formed.

    Raises a DiffFormatError if not well formed.
    """
    if not isinstance(diff, list):
        raise DiffFormatError("Diff must be a list.")
    for e in diff:
        validate_diff_element(e)


def validate_diff_element(e):
    """Check that e is a well formed diff element.

    Raises a DiffFormatError if not well formed.
    """
    if not isinstance(e, DiffElement):
        raise DiffFormatError("Diff element '{}' is not a diff type.".format(e))
    for key in ("before", "remove", "add", "after", "options"):
        if not isinstance(e.get(key), list):
            raise DiffFormatError("Diff element field {} must be a list.".format(key))
    if not isinstance(e.get("path"), tuple):
        raise DiffFormatError("Diff element path must be a tuple.")
    # Raises InvalidPath on bad elements
    path_to_json(e.path)
    if not e.remove and not e.add:
        raise DiffFormatError("Diff element has neither removals nor additions.",
                              path=e.path)
    if VOID in e.remove:
        raise DiffFormatError("Void cannot be removed.", path=e.path)
    if VOID in e.add and (not e.merge or len(e.add) != 1):
        raise DiffFormatError("Void can only be added by a merge element.",
                              path=e.path)
    if CLOSE in e.before or OPEN in e.after:
        raise DiffFormatError("Misplaced array context marker.", path=e.path)
    if OPEN in e.before[:-1] or CLOSE in e.after[1:]:
        raise DiffFormatError("Array context markers must be adjacent to the change.",
                              path=e.path)
