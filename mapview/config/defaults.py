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

import tempfile as _tempfile

cache = dict(
    base_dir = _tempfile.gettempdir(),
    download_allowed = True,
    # number of concurrent downloads
    pool_size = 10,
    # pending tile requests, further requests are dropped
    queue_capacity = 1000,
    # seconds to wait for running downloads on dispose
    dispose_timeout = 10,
    # decoded tiles that are kept in memory
    memory_size = 256,
)

http = dict(
    user_agent = 'curl/8.7.1',
    accept = '*/*',
    client_timeout = 60,
)

default_source = 'OpenStreetMap'

sources = dict(
    OpenStreetMap = dict(
        url = 'https://tile.openstreetmap.org/%(z)d/%(x)d/%(y)d.png',
        projection = 'wgs84_pseudo_mercator',
        min_zoom = 1,
        max_zoom = 19,
        default_zoom = 9,
        tile_size = 256,
        display_name = 'OpenStreetMap',
        cache_prefix = 'OpenStreetMap',
    ),
    OpenTopoMap = dict(
        url = 'https://tile.opentopomap.org/%(z)d/%(x)d/%(y)d.png',
        projection = 'wgs84_pseudo_mercator',
        min_zoom = 1,
        max_zoom = 17,
        default_zoom = 9,
        tile_size = 256,
        display_name = 'OpenTopoMap',
        cache_prefix = 'OpenTopoMap',
    ),
)
