# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from ._version import __version__

from .diff_format import VOID, OPEN, CLOSE
from .diffing import diff, diff_text, equal
from .errors import (
    JdError, DiffFormatError, InvalidPath, ParseError, UnsupportedPatchOperation,
    ContextMismatch, ValueMismatch, StackDepthExceeded,
    InvalidOptionDirective, UnsupportedTranslation)
from .jdtext import render_diff, parse_diff
from .options import parse_options, resolve
from .patching import patch
from .translation import translate, to_patch, from_patch, to_merge, from_merge


__all__ = [
    "__version__",
    "VOID", "OPEN", "CLOSE",
    "diff", "diff_text", "equal",
    "patch",
    "render_diff", "parse_diff",
    "translate", "to_patch", "from_patch", "to_merge", "from_merge",
    "parse_options", "resolve",
    "JdError", "DiffFormatError", "InvalidPath", "ParseError",
    "UnsupportedPatchOperation", "ContextMismatch", "ValueMismatch",
    "StackDepthExceeded", "InvalidOptionDirective", "UnsupportedTranslation",
    ]
