# This file is part of the MapView project.
# Copyright (C) 2024 Omniscale <http://omniscale.de>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Configuration of the map core.
"""
import copy

from mapview.util.yaml import load_yaml_file

class ConfigurationError(Exception):
    pass

class Options(dict):
    """
    Dictionary with attribute style access.

    >>> o = Options(bar='foo')
    >>> o.bar
    'foo'
    """
    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, dict.__repr__(self))

    def __getattr__(self, name):
        if name in self:
            return self[name]
        else:
            raise AttributeError(name)

    __setattr__ = dict.__setitem__

    def __delattr__(self, name):
        if name in self:
            del self[name]
        else:
            raise AttributeError(name)

    def update(self, other=None, **kw):
        """
        Update nested `Options` recursively instead of replacing them.
        """
        items = list((other or {}).items()) + list(kw.items())
        for key, value in items:
            if key in self and isinstance(self[key], Options) and isinstance(value, dict):
                self[key].update(value)
            else:
                self[key] = _to_options_map(value)

    def __deepcopy__(self, memo):
        return Options(copy.deepcopy(list(self.items()), memo))

def _to_options_map(mapping):
    if isinstance(mapping, dict):
        opt = Options()
        for key, value in mapping.items():
            opt[key] = _to_options_map(value)
        return opt
    elif isinstance(mapping, list):
        return [_to_options_map(m) for m in mapping]
    else:
        return mapping

def load_default_config():
    from mapview.config import defaults
    config_dict = {}
    for k, v in defaults.__dict__.items():
        if k.startswith('_'): continue
        config_dict[k] = v
    return _to_options_map(copy.deepcopy(config_dict))

def load_config(config_file=None, conf=None):
    """
    Load the configuration with the defaults for all missing values.

    :param config_file: file name or file object of a YAML configuration
    :param conf: configuration dictionary, overrides `config_file`
    """
    config = load_default_config()
    if config_file is not None:
        config.update(load_yaml_file(config_file))
    if conf is not None:
        config.update(conf)
    validate_config(config)
    return config

def validate_config(config):
    """
    Raise `ConfigurationError` for invalid cache and HTTP options.

    >>> validate_config(load_default_config())
    >>> validate_config(Options(cache=Options(pool_size=0)))
    Traceback (most recent call last):
    ...
    mapview.config.config.ConfigurationError: cache.pool_size must be >= 1, got 0
    """
    checks = [
        ('cache', 'pool_size', 1),
        ('cache', 'queue_capacity', 1),
        ('cache', 'dispose_timeout', 0),
        ('cache', 'memory_size', 0),
    ]
    for section, key, minimum in checks:
        value = config.get(section, {}).get(key)
        if value is None:
            continue
        if not isinstance(value, (int, float)) or value < minimum:
            raise ConfigurationError('%s.%s must be >= %s, got %r' % (
                section, key, minimum, value))
    timeout = config.get('http', {}).get('client_timeout')
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ConfigurationError('http.client_timeout must be > 0, got %r' % (timeout, ))
    sources = config.get('sources', {})
    default_source = config.get('default_source')
    if default_source is not None and sources and default_source not in sources:
        raise ConfigurationError('default_source %r is not configured' % (default_source, ))

def cache_options(conf=None, **overrides):
    """
    Options for `mapview.cache.tile.TileCache`.

    `overrides` replace single values, e.g. a ``pool_factory`` for tests.
    """
    from mapview.image import default_waiting_image
    from mapview.util.async_ import WorkerPool

    if conf is None:
        conf = load_default_config()
    options = Options(
        cache_dir=conf.cache.base_dir,
        download_allowed=conf.cache.download_allowed,
        pool_size=conf.cache.pool_size,
        queue_capacity=conf.cache.queue_capacity,
        dispose_timeout=conf.cache.dispose_timeout,
        memory_size=conf.cache.memory_size,
        user_agent=conf.http.user_agent,
        accept=conf.http.accept,
        client_timeout=conf.http.client_timeout,
        waiting_image=default_waiting_image,
        pool_factory=WorkerPool,
    )
    options.update(overrides)
    return options
