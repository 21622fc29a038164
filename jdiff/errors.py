# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Error and warning types raised by jdiff.

Every fatal error derives from `JdError`, which carries a short `kind`
name plus optional path or line context, so callers can react to the
structured kind rather than parsing messages.

Non-fatal conditions (ignored option directives, lossy translations)
are issued as warnings and never interrupt the operation.
"""


class JdError(ValueError):
    kind = "JdError"

    def __init__(self, message, path=None, lineno=None, line=None):
        super(JdError, self).__init__(message)
        self.message = message
        self.path = path
        self.lineno = lineno
        self.line = line

    def __str__(self):
        msg = self.message
        if self.lineno is not None:
            msg = "line {}: {}".format(self.lineno, msg)
            if self.line is not None:
                msg += " ({!r})".format(self.line)
        if self.path is not None:
            msg += " at path {}".format(_format_path(self.path))
        return msg


class DiffFormatError(JdError):
    "A diff element does not satisfy the diff element invariants."
    kind = "DiffFormatError"


class InvalidPath(JdError):
    kind = "InvalidPath"


class ParseError(JdError):
    "Malformed jd diff text or patch document."
    kind = "ParseError"


class UnsupportedPatchOperation(JdError):
    kind = "UnsupportedPatchOperation"


class ContextMismatch(JdError):
    kind = "ContextMismatch"


class ValueMismatch(JdError):
    kind = "ValueMismatch"


class StackDepthExceeded(JdError):
    kind = "StackDepthExceeded"


class InvalidOptionDirective(UserWarning):
    "An option directive was malformed and has been ignored."
    kind = "InvalidOptionDirective"


class UnsupportedTranslation(UserWarning):
    "Part of a diff cannot be expressed in the target format and was dropped."
    kind = "UnsupportedTranslation"


def _format_path(path):
    # Imported late, diff_format imports this module
    from .diff_format import path_to_json
    from .utils import render_value
    try:
        return render_value(path_to_json(path))
    except (TypeError, ValueError):
        return repr(path)
