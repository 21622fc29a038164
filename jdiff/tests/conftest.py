# -*- coding: utf-8 -*-

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import io
import json
import os

from jsonschema import Draft4Validator as Validator
from pytest import fixture, skip

from jdiff.config import load_disk_config


pjoin = os.path.join

schema_dir = os.path.abspath(pjoin(os.path.dirname(__file__), ".."))


@fixture
def slow(request):
    if request.config.getoption('--quick', default=False):
        skip('skipping slow test')


@fixture
def reset_disk_config(monkeypatch):
    """Fixture dropping the cached jdiff_config.json contents after a test"""
    yield
    # Leave any temporary working directory before reading config again
    monkeypatch.undo()
    load_disk_config(reload=True)


@fixture(scope='session')
def json_schema_patch(request):
    schema_path = pjoin(schema_dir, "patch_format.schema.json")
    with io.open(schema_path, encoding="utf8") as f:
        schema_json = json.load(f)
    return schema_json


@fixture
def patch_validator(json_schema_patch):
    return Validator(json_schema_patch)
