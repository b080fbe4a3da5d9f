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

import logging

import pytest

from mapview.config import (
    ConfigurationError,
    Options,
    cache_options,
    load_config,
    load_default_config,
)
from mapview.image import default_waiting_image
from mapview.util.async_ import WorkerPool
from mapview.util.log import setup_logging
from mapview.util.yaml import YAMLError, load_yaml, load_yaml_file


class TestLoadYAMLFile(object):
    def yaml_file(self, tmpdir, content):
        f = tmpdir.join('mapview.yaml')
        f.write(content)
        return f.strpath

    def test_load_yaml_file(self, tmpdir):
        f = self.yaml_file(tmpdir, "hello:\n - 1\n - 2")
        with open(f) as fp:
            assert load_yaml_file(fp) == {"hello": [1, 2]}
        assert load_yaml_file(f) == {"hello": [1, 2]}

    def test_load_yaml_with_tabs(self, tmpdir):
        f = self.yaml_file(tmpdir, "hello:\n\t- world")
        with pytest.raises(YAMLError) as excinfo:
            load_yaml_file(f)
        assert "line 2" in str(excinfo.value)

    def test_missing_file(self, tmpdir):
        with pytest.raises(YAMLError):
            load_yaml_file(tmpdir.join('missing.yaml').strpath)

    def test_not_a_dict(self):
        with pytest.raises(YAMLError):
            load_yaml("- 1\n- 2")

    def test_empty(self):
        assert load_yaml("") == {}


class TestOptions(object):
    def test_attribute_access(self):
        o = Options(foo=1)
        assert o.foo == 1
        o.bar = 2
        assert o['bar'] == 2
        del o.bar
        with pytest.raises(AttributeError):
            o.bar

    def test_nested_update(self):
        o = Options(cache=Options(pool_size=10, queue_capacity=1000))
        o.update({'cache': {'pool_size': 2}})
        assert o.cache.pool_size == 2
        assert o.cache.queue_capacity == 1000


class TestLoadConfig(object):
    def test_defaults(self):
        conf = load_default_config()
        assert conf.cache.pool_size == 10
        assert conf.cache.queue_capacity == 1000
        assert conf.cache.dispose_timeout == 10
        assert conf.cache.download_allowed is True
        assert conf.http.user_agent == 'curl/8.7.1'
        assert conf.default_source == 'OpenStreetMap'
        assert sorted(conf.sources) == ['OpenStreetMap', 'OpenTopoMap']

    def test_defaults_are_copies(self):
        conf = load_default_config()
        conf.cache.pool_size = 1
        assert load_default_config().cache.pool_size == 10

    def test_load_yaml(self, tmpdir):
        f = tmpdir.join('mapview.yaml')
        f.write(
            "cache:\n"
            "  pool_size: 4\n"
            "  base_dir: %s\n"
            "sources:\n"
            "  local:\n"
            "    url: http://localhost/%%(z)d/%%(x)d/%%(y)d.png\n" % (tmpdir.strpath, )
        )
        conf = load_config(f.strpath)
        assert conf.cache.pool_size == 4
        assert conf.cache.queue_capacity == 1000
        assert conf.cache.base_dir == tmpdir.strpath
        assert 'local' in conf.sources
        assert 'OpenStreetMap' in conf.sources

    def test_dict_overrides_file(self, tmpdir):
        f = tmpdir.join('mapview.yaml')
        f.write("cache:\n  pool_size: 4\n")
        conf = load_config(f.strpath, conf={'cache': {'pool_size': 2}})
        assert conf.cache.pool_size == 2

    @pytest.mark.parametrize('conf', [
        {'cache': {'pool_size': 0}},
        {'cache': {'queue_capacity': -1}},
        {'cache': {'dispose_timeout': -1}},
        {'cache': {'pool_size': 'ten'}},
        {'http': {'client_timeout': 0}},
        {'default_source': 'unknown'},
    ])
    def test_invalid(self, conf):
        with pytest.raises(ConfigurationError):
            load_config(conf=conf)


class TestCacheOptions(object):
    def test_defaults(self):
        options = cache_options()
        assert options.pool_size == 10
        assert options.queue_capacity == 1000
        assert options.pool_factory is WorkerPool
        assert options.waiting_image is default_waiting_image
        assert options.cache_dir == load_default_config().cache.base_dir

    def test_overrides(self, tmpdir):
        conf = load_config(conf={'cache': {'download_allowed': False}})
        options = cache_options(conf, cache_dir=tmpdir.strpath, pool_size=1)
        assert options.cache_dir == tmpdir.strpath
        assert options.pool_size == 1
        assert options.download_allowed is False


def test_setup_logging():
    log = setup_logging(level=logging.DEBUG)
    try:
        assert log.name == 'mapview'
        assert log.level == logging.DEBUG
        assert any(isinstance(h, logging.StreamHandler) for h in log.handlers)
    finally:
        for h in list(log.handlers):
            log.removeHandler(h)
        log.setLevel(logging.NOTSET)


def test_setup_logging_twice():
    log = setup_logging()
    try:
        handlers = list(log.handlers)
        assert setup_logging(level=logging.INFO) is log
        assert log.handlers == handlers
        assert log.level == logging.INFO
    finally:
        for h in list(log.handlers):
            log.removeHandler(h)
        log.setLevel(logging.NOTSET)


def test_version():
    from mapview.version import version, __version__
    assert version == __version__
    assert isinstance(version, str) and version
