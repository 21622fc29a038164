# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Option directives and their resolution at a path.

Options are given as a json list in the jd format, e.g.

    ["SET", {"precision": 0.001},
     {"@": ["items"], "^": [{"setkeys": ["id"]}]}]

Global directives apply everywhere. Path-scoped directives `{"@": path,
"^": [...]}` apply at any path of which `path` is a prefix, and can be
nested. For each setting the deepest applicable directive wins, ties
at equal depth are broken by declaration order (later wins).
"""

from collections import namedtuple
import json
import warnings

from .diff_format import path_from_json, path_to_json, LIST_MARKER, KeyedIdentity
from .errors import InvalidOptionDirective, InvalidPath
from .log import debug
from .utils import is_number


class Directive:
    "Collection of valid directive names."
    SET = "SET"
    MULTISET = "MULTISET"
    MERGE = "MERGE"
    COLOR = "COLOR"
    DIFF_ON = "DIFF_ON"
    DIFF_OFF = "DIFF_OFF"
    PRECISION = "precision"
    SETKEYS = "setkeys"

    NAMED = (SET, MULTISET, MERGE, COLOR, DIFF_ON, DIFF_OFF)


class ArrayMode:
    NORMAL = "Normal"
    SET = "Set"
    MULTISET = "Multiset"


DEFAULT_PRECISION = 1e-15

EffectiveMode = namedtuple("EffectiveMode", (
    "diffing_enabled",
    "precision",
    "array_mode",
    "setkeys",
    "merge",
    "color",
))

DEFAULT_MODE = EffectiveMode(
    diffing_enabled=True,
    precision=DEFAULT_PRECISION,
    array_mode=ArrayMode.NORMAL,
    setkeys=None,
    merge=False,
    color=False,
)


class Option(object):
    """A single directive, possibly scoped to a path.

    `at` is the path prefix where the directive applies,
    the empty path for global directives.
    """
    __slots__ = ("kind", "value", "at")

    def __init__(self, kind, value=None, at=()):
        self.kind = kind
        self.value = value
        self.at = tuple(at)

    @property
    def depth(self):
        return len(self.at)

    def to_json(self):
        if self.kind == Directive.PRECISION:
            d = {"precision": self.value}
        elif self.kind == Directive.SETKEYS:
            d = {"setkeys": list(self.value)}
        else:
            d = self.kind
        if self.at:
            return {"@": path_to_json(self.at), "^": [d]}
        return d

    def __eq__(self, other):
        return (isinstance(other, Option) and self.kind == other.kind and
                self.value == other.value and self.at == other.at)

    def __hash__(self):
        return hash((self.kind, self.at))

    def __repr__(self):
        return "Option({!r}, {!r}, at={!r})".format(self.kind, self.value, self.at)


def _invalid(raw, reason):
    warnings.warn(InvalidOptionDirective(
        "Ignoring option directive {}: {}".format(json.dumps(raw, default=repr), reason)),
        stacklevel=3)


def _parse_directive(raw, at, out):
    if isinstance(raw, str):
        if raw in Directive.NAMED:
            out.append(Option(raw, at=at))
        else:
            _invalid(raw, "unknown directive")
    elif isinstance(raw, dict):
        if "@" in raw or "^" in raw:
            if "@" not in raw or "^" not in raw:
                _invalid(raw, "path options need both '@' and '^'")
                return
            try:
                sub = path_from_json(raw["@"])
            except InvalidPath as e:
                _invalid(raw, str(e))
                return
            then = raw["^"]
            if not isinstance(then, list):
                then = [then]
            for d in then:
                _parse_directive(d, at + sub, out)
        elif "precision" in raw:
            p = raw["precision"]
            if is_number(p) and p >= 0:
                out.append(Option(Directive.PRECISION, p, at=at))
            else:
                _invalid(raw, "precision must be a non-negative number")
        elif "setkeys" in raw:
            keys = raw["setkeys"]
            if isinstance(keys, list) and all(isinstance(k, str) for k in keys):
                out.append(Option(Directive.SETKEYS, tuple(keys), at=at))
            else:
                _invalid(raw, "setkeys must be a list of strings")
        else:
            _invalid(raw, "unknown directive")
    else:
        _invalid(raw, "directives are strings or objects")


def parse_options(raw):
    """Parse a raw json options list into a flat list of Options.

    Malformed directives are ignored with an InvalidOptionDirective warning.
    Already parsed options are passed through.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            _invalid(raw, "not valid json")
            return []
    if not isinstance(raw, (list, tuple)):
        _invalid(raw, "options must be a list")
        return []
    out = []
    for d in raw:
        if isinstance(d, Option):
            out.append(d)
        else:
            _parse_directive(d, (), out)
    return out


def options_to_json(options):
    "Convert parsed options back into their json form."
    return [o.to_json() for o in options]


def _element_matches(pattern, p):
    if pattern is LIST_MARKER:
        return (isinstance(p, int) and not isinstance(p, bool)) or isinstance(p, KeyedIdentity)
    if type(pattern) is not type(p):
        return False
    return pattern == p


def path_is_prefix(prefix, path):
    "Check if prefix is a prefix of path (or equal to it)."
    if len(prefix) > len(path):
        return False
    return all(_element_matches(q, p) for q, p in zip(prefix, path))


def resolve(options, path=()):
    """Compute the effective mode at path.

    Returns an EffectiveMode.
    """
    path = tuple(path)
    settings = DEFAULT_MODE._asdict()
    depths = {}
    any_on = False
    diffing = None

    def update(field, value, depth):
        if depth >= depths.get(field, 0):
            settings[field] = value
            depths[field] = depth

    for o in options:
        if o.kind == Directive.DIFF_ON:
            any_on = True
        if not path_is_prefix(o.at, path):
            continue
        if o.kind in (Directive.DIFF_ON, Directive.DIFF_OFF):
            if diffing is None or o.depth >= diffing[0]:
                diffing = (o.depth, o.kind == Directive.DIFF_ON)
        elif o.kind == Directive.SET:
            update("array_mode", ArrayMode.SET, o.depth)
        elif o.kind == Directive.MULTISET:
            update("array_mode", ArrayMode.MULTISET, o.depth)
        elif o.kind == Directive.MERGE:
            update("merge", True, o.depth)
        elif o.kind == Directive.COLOR:
            update("color", True, o.depth)
        elif o.kind == Directive.PRECISION:
            update("precision", o.value, o.depth)
        elif o.kind == Directive.SETKEYS:
            update("setkeys", o.value, o.depth)
        else:
            debug("Skipping unknown option kind %r", o.kind)

    if diffing is not None:
        settings["diffing_enabled"] = diffing[1]
    else:
        settings["diffing_enabled"] = not any_on
    return EffectiveMode(**settings)


def diffing_enabled_below(options, path=()):
    """Check if a DIFF_ON directive scoped strictly below path exists.

    Used to keep recursing into values where diffing is off,
    since diffing may be switched back on deeper down.
    """
    path = tuple(path)
    n = len(path)
    for o in options:
        if o.kind != Directive.DIFF_ON or len(o.at) <= n:
            continue
        if all(_element_matches(q, p) or _element_matches(p, q)
               for q, p in zip(o.at, path)):
            return True
    return False
