# coding: utf-8

# Copyright (c) Jupyter Development Team.
# Distributed under the terms of the Modified BSD License.

import os

from jupyter_core.paths import jupyter_config_path

from traitlets import Enum, Integer, Bool, HasTraits
from traitlets.config.loader import JSONFileConfigLoader, ConfigFileNotFound


class JdiffConfigurable(HasTraits):

    def configured_traits(self, cls):
        traits = cls.class_own_traits(config=True)
        c = {}
        for name, _ in traits.items():
            c[name] = getattr(self, name)
        return c


_config_cache = {}
def config_instance(cls):
    if cls in _config_cache:
        return _config_cache[cls]
    instance = _config_cache[cls] = cls()
    return instance


def _load_config_files(basefilename, path=None):
    """Load config files (json) by filename and path.

    yield each config object in turn.
    """

    if not isinstance(path, list):
        path = [path]
    for path in path[::-1]:
        # path list is in descending priority order, so load files backwards:
        loader = JSONFileConfigLoader(basefilename+'.json', path=path)
        config = None
        try:
            config = loader.load_config()
        except ConfigFileNotFound:
            pass
        if config:
            yield config


def recursive_update(target, new, include_none):
    """Recursively update one dictionary using another.

    None values will delete their keys.
    """
    for k, v in new.items():
        if isinstance(v, dict):
            if k not in target:
                target[k] = {}
            recursive_update(target[k], v, include_none)
            if not include_none and not target[k]:
                # Prune empty subdicts
                del target[k]

        elif not include_none and v is None:
            target.pop(k, None)

        else:
            target[k] = v


_disk_config = None
def load_disk_config(reload=False):
    """Read jdiff_config.json files from the jupyter config path and cwd.

    The result is cached for the lifetime of the process,
    pass `reload=True` to read the files again.
    """
    global _disk_config
    if _disk_config is None or reload:
        disk_config = {}
        path = jupyter_config_path()
        path.insert(0, os.getcwd())
        for c in _load_config_files('jdiff_config', path=path):
            recursive_update(disk_config, c, False)
        _disk_config = disk_config
    return _disk_config


def build_config(entrypoint, include_none=False):
    if entrypoint not in entrypoint_configurables:
        raise ValueError('Config for entrypoint name %r is not defined! Accepted values are %r.' % (
            entrypoint, list(entrypoint_configurables.keys())
        ))

    disk_config = load_disk_config()

    config = {}
    configurable = entrypoint_configurables[entrypoint]
    for c in reversed(configurable.mro()):
        if issubclass(c, JdiffConfigurable):
            recursive_update(config, config_instance(c).configured_traits(c), include_none)
            if (c.__name__ in disk_config):
                recursive_update(config, disk_config[c.__name__], include_none)

    return config


class Global(JdiffConfigurable):

    log_level = Enum(
        ('DEBUG', 'INFO', 'WARN', 'ERROR', 'CRITICAL'),
        'INFO',
        help="Set the log level by name.",
    ).tag(config=True)


class _Guarded(JdiffConfigurable):

    max_depth = Integer(
        256,
        help="Maximum nesting depth of values and paths processed before "
             "failing with StackDepthExceeded.",
    ).tag(config=True)


class Diffing(_Guarded):
    pass


class Patching(_Guarded):
    pass


class Rendering(JdiffConfigurable):

    color = Bool(
        False,
        help="Render jd text with ANSI colors even when the COLOR option "
             "is not given.",
    ).tag(config=True)


class Diff(Global, Diffing, Rendering):
    pass


class Patch(Global, Patching):
    pass


class Translate(Global, Rendering):
    pass


entrypoint_configurables = {
    'global': Global,
    'diff': Diff,
    'patch': Patch,
    'translate': Translate,
}
