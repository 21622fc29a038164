# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Rendering and parsing of the native jd diff notation.

A diff is a sequence of hunks, optionally preceded by option headers:

    ^ "SET"
    @ ["tags",{}]
    - "red"
    + "green"

Each hunk starts with an `@` line holding the json path, followed by
context lines before the change (two-space indented json, or `[` for
the start of an array), removed values (`- `), added values (`+ `, a
bare `+` adds void in merge diffs) and context lines after the change
(or `]` for the end of an array).

Option headers are shared by all following hunks, until the next
group of headers replaces them. Under a "MERGE" header, only hunks
without removed values and context are merge hunks.
"""

from collections import namedtuple

import colorama

from .diff_format import (
    VOID, OPEN, CLOSE, make_element, path_to_json, path_from_json, validate_diff)
from .errors import ParseError, InvalidPath
from .options import Directive
from .utils import render_value, load_json

__all__ = ["render_diff", "parse_diff", "render_value"]


ColoredConstants = namedtuple('ColoredConstants', (
    'HEADER',
    'PATH',
    'REMOVE',
    'ADD',
    'RESET',
))


col_const = {
    True: ColoredConstants(
        HEADER = colorama.Fore.YELLOW,
        PATH   = colorama.Fore.BLUE + colorama.Style.BRIGHT,
        REMOVE = colorama.Fore.RED,
        ADD    = colorama.Fore.GREEN,
        RESET  = colorama.Style.RESET_ALL,
    ),

    False: ColoredConstants(
        HEADER = '',
        PATH   = '',
        REMOVE = '',
        ADD    = '',
        RESET  = '',
    )
}


def render_path(path):
    "Render a path as a compact json array."
    return render_value(path_to_json(path))


def render_context(value):
    if value is OPEN:
        return "["
    elif value is CLOSE:
        return "]"
    return "  " + render_value(value)


def render_element(e, header, color=False):
    "Render the lines of one diff element, with header lines when given."
    c = col_const[bool(color)]
    lines = []
    for h in header:
        lines.append(c.HEADER + "^ " + render_value(h) + c.RESET)
    lines.append(c.PATH + "@ " + render_path(e.path) + c.RESET)
    for v in e.before:
        lines.append(render_context(v))
    if not e.merge:
        for v in e.remove:
            lines.append(c.REMOVE + "- " + render_value(v) + c.RESET)
    for v in e.add:
        if v is VOID:
            lines.append(c.ADD + "+" + c.RESET)
        else:
            lines.append(c.ADD + "+ " + render_value(v) + c.RESET)
    for v in e.after:
        lines.append(render_context(v))
    return lines


def render_diff(diff, color=False):
    """Render a list of diff elements as jd text.

    Option headers are written before the first element needing them,
    i.e. when the options of an element are set and differ from the
    currently active header.
    """
    lines = []
    active = []
    for e in diff:
        header = []
        if e.options and e.options != active:
            active = header = list(e.options)
        lines.extend(render_element(e, header, color=color))
    return "".join(line + "\n" for line in lines)


# Parser states
BEFORE = "before"
REMOVING = "removing"
ADDING = "adding"
AFTER = "after"


class _DiffParser(object):

    def __init__(self):
        self.elements = []
        self.header = []
        self.pending_header = None
        self.current = None
        self.state = BEFORE
        self.lineno = 0
        self.line = None

    def error(self, msg):
        raise ParseError(msg, lineno=self.lineno, line=self.line)

    def value(self, text):
        try:
            return load_json(text)
        except ValueError:
            self.error("Invalid json value")

    def finish_element(self):
        e = self.current
        if e is None:
            return
        if not e.remove and not e.add:
            self.error("Hunk at {} has no changes".format(render_path(e.path)))
        if Directive.MERGE in e.options:
            if e.remove or e.before or e.after:
                # Verified hunk following merge hunks
                e.options = [o for o in e.options if o != Directive.MERGE]
            else:
                e.merge = True
        if VOID in e.add and not e.merge:
            self.error("Void can only be added in a merge diff")
        self.elements.append(e)
        self.current = None

    def need_element(self):
        if self.current is None:
            self.error("Expected '@' line before diff lines")
        return self.current

    def feed(self, line):
        self.lineno += 1
        self.line = line
        if line.startswith("^ "):
            self.finish_element()
            if self.pending_header is None:
                self.pending_header = []
            self.pending_header.append(self.value(line[2:]))
        elif line.startswith("@ "):
            self.finish_element()
            if self.pending_header is not None:
                self.header = self.pending_header
                self.pending_header = None
            try:
                path = path_from_json(self.value(line[2:]))
            except InvalidPath as e:
                self.error(str(e))
            self.current = make_element(path, options=self.header)
            self.state = BEFORE
        elif line.startswith("- "):
            e = self.need_element()
            if self.state not in (BEFORE, REMOVING):
                self.error("Removed value after added value or context")
            self.state = REMOVING
            e.remove.append(self.value(line[2:]))
        elif line == "+" or line.startswith("+ "):
            e = self.need_element()
            if self.state == AFTER:
                self.error("Added value after context")
            self.state = ADDING
            if line == "+":
                if Directive.MERGE not in e.options:
                    self.error("Void can only be added in a merge diff")
                e.add.append(VOID)
            else:
                e.add.append(self.value(line[2:]))
        elif line.startswith("  ") or line in ("[", "]"):
            e = self.need_element()
            if line == "[":
                if self.state != BEFORE:
                    self.error("Array start marker after changes")
                e.before.append(OPEN)
            elif line == "]":
                if self.state == BEFORE:
                    self.error("Array end marker before changes")
                self.state = AFTER
                e.after.append(CLOSE)
            else:
                v = self.value(line[2:])
                if self.state == BEFORE:
                    if OPEN in e.before:
                        self.error("Context after array start marker")
                    e.before.append(v)
                else:
                    if CLOSE in e.after:
                        self.error("Context after array end marker")
                    self.state = AFTER
                    e.after.append(v)
        else:
            self.error("Invalid diff line")

    def close(self):
        self.finish_element()
        if self.pending_header is not None:
            self.error("Option header without following hunk")
        return self.elements


def parse_diff(text):
    """Parse jd text into a list of diff elements.

    Raises ParseError with the offending line number and text
    for malformed input.
    """
    parser = _DiffParser()
    # Not splitlines, json strings may contain unicode line separators
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for line in lines:
        parser.feed(line.rstrip("\r"))
    d = parser.close()
    validate_diff(d)
    return d
