#!/usr/bin/env python
# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.
from setuptools import setup, find_packages
import pathlib
import re

HERE = pathlib.Path(__file__).parent.absolute()

JDIFF_PATH = HERE / "jdiff"


def get_version(path):
    with open(path) as f:
        return re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)


VERSION = get_version(JDIFF_PATH / '_version.py')

LONG_DESCRIPTION = """\
Structural diff and patch for JSON values.

jdiff computes structural diffs of JSON documents, renders them in
the human readable jd notation, applies them as patches and
translates them to and from JSON Patch (RFC 6902) and JSON Merge
Patch (RFC 7386).
"""


if __name__ == '__main__':
    setup(
      name="jdiff",
      version=VERSION,
      description="Structural diff and patch for JSON values",
      long_description=LONG_DESCRIPTION,
      license="BSD",
      python_requires=">=3.7",
      packages=find_packages(exclude=["*.tests", "*.tests.*"]) + ["jdiff.tests"],
      package_data={
          "jdiff": ["*.schema.json"],
      },
      install_requires=[
          "colorama",
          "jsonpointer",
          "jsonschema",
          "jupyter_core",
          "traitlets>=5",
      ],
      extras_require={
          "test": [
              "pytest>=6.0",
          ],
      },
      classifiers=[
          "Intended Audience :: Developers",
          "License :: OSI Approved :: BSD License",
          "Programming Language :: Python :: 3",
      ],
    )
