# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

from .generic import diff, diff_text, equal
from .comparing import values_equal
from .config import DiffConfig

__all__ = ["diff", "diff_text", "equal", "values_equal", "DiffConfig"]
