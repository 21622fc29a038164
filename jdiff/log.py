# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import logging


def init_logging(level=logging.INFO):
    """Sets up logging for applications embedding jdiff.

    jdiff only logs at debug level: array diffs falling back to
    positional windows, diff elements dropped from merge patches and
    the number of elements applied by a patch. Option directives that
    are ignored and lossy translations are reported as warnings,
    which are routed through logging here.

    `level` may be a level number or name. If given as `None`, the
    level configured as `Global.log_level` in jdiff_config.json is
    used. The level is set on the jdiff logger as well, so it applies
    when the application has already configured logging.
    """
    if level is None:
        from .config import build_config
        level = build_config('global')['log_level']
    format = '[%(levelname)1.1s %(module)s:%(lineno)d] %(message)s'
    logging.basicConfig(format=format, level=level)
    logging.captureWarnings(True)
    set_jdiff_log_level(level, set_main=False)


def set_jdiff_log_level(level, set_main=True):
    """Set a log level for jdiff loggers, and the root logger if `set_main`"""
    logger.setLevel(level)
    if set_main:
        logging.getLogger().setLevel(level)


logger = logging.getLogger('jdiff')

debug = logger.debug
info = logger.info
warning = logger.warning
error = logger.error
exception = logger.exception
critical = logger.critical
