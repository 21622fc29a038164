# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ..errors import StackDepthExceeded
from ..options import parse_options, resolve, diffing_enabled_below, Directive


class DiffConfig:
    """Set of options/limits to pass around during a diff.

    Effective modes are resolved lazily per path and cached,
    so the directive list is only walked once per visited path.
    """

    def __init__(self, *, options=None, max_depth=None):
        if max_depth is None:
            from ..config import build_config
            max_depth = build_config('diff')['max_depth']

        self.options = parse_options(options)
        self.max_depth = max_depth
        self._modes = {}
        self._has_diff_on = any(o.kind == Directive.DIFF_ON for o in self.options)

    def mode_at(self, path):
        "Return the EffectiveMode at path."
        try:
            return self._modes[path]
        except KeyError:
            mode = self._modes[path] = resolve(self.options, path)
            return mode

    def recurse_disabled(self, path):
        "Return True if diffing is off at path but may be turned on below it."
        return self._has_diff_on and diffing_enabled_below(self.options, path)

    def check_depth(self, depth, path):
        if depth > self.max_depth:
            raise StackDepthExceeded(
                "Diff recursion exceeds maximum depth {}".format(self.max_depth),
                path=path)

    def __copy__(self):
        return DiffConfig(options=list(self.options), max_depth=self.max_depth)
