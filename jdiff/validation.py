# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

"""Parsing of external inputs into validated values.

These functions are only used where data enters the library
(patch documents, merge documents, json text), the diff and
patch algorithms assume well formed input.
"""

import io
import json
import os

from jsonschema import Draft4Validator as Validator
from jsonschema.exceptions import best_match

from .errors import ParseError

__all__ = ["parse_json_document", "parse_patch_document", "parse_merge_document"]


schema_dir = os.path.abspath(os.path.dirname(__file__))

_validators = {}
def _validator(name):
    if name not in _validators:
        schema_path = os.path.join(schema_dir, name)
        with io.open(schema_path, encoding="utf8") as f:
            schema = json.load(f)
        _validators[name] = Validator(schema)
    return _validators[name]


def parse_json_document(content):
    "Decode json text, values that are not str are returned as-is."
    if isinstance(content, (bytes, bytearray)):
        content = content.decode("utf8")
    if isinstance(content, str):
        try:
            return json.loads(content)
        except ValueError as e:
            raise ParseError("Invalid json document: {}".format(e))
    return content


def parse_patch_document(content):
    """Parse and validate a JSON Patch (RFC 6902) document.

    Returns the list of operations, raises ParseError if malformed.
    """
    ops = parse_json_document(content)
    if isinstance(ops, tuple):
        ops = list(ops)
    error = best_match(_validator("patch_format.schema.json").iter_errors(ops))
    if error is not None:
        location = "/".join(str(p) for p in error.absolute_path)
        raise ParseError("Invalid JSON patch at /{}: {}".format(location, error.message))
    return ops


def parse_merge_document(content):
    "Parse a JSON Merge Patch (RFC 7386) document, any json value is valid."
    return parse_json_document(content)
