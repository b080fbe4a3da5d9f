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

import os

import pytest

from mapview.cache.path import crc16, mangle, tile_location


@pytest.mark.parametrize('data,expected', [
    (b'123456789', 0xbb3d),
    (b'', 0),
    (b'17/68647/47546.png', 0xa1ee),
    (b'tile.openstreetmap.org/17/68647/47546.png', 0xc7ed),
    (b'/tile.openstreetmap.org/17/68647/47546.png', 0x4357),
])
def test_crc16(data, expected):
    assert crc16(data) == expected


class TestMangle(object):
    def test_https(self):
        assert mangle('https://tile.openstreetmap.org/17/68647/47546.png') == (
            '43/57/tile.openstreetmap.org/17/68647/47546.png')

    def test_http_strips_host(self):
        assert mangle('http://tile.openstreetmap.org/17/68647/47546.png') == (
            'a1/ee/17/68647/47546.png')

    def test_strips_query(self):
        assert mangle('http://tile.openstreetmap.org/17/68647/47546.png?apikey=123') == (
            mangle('http://tile.openstreetmap.org/17/68647/47546.png'))

    def test_deterministic(self):
        url = 'https://tile.opentopomap.org/12/2173/1473.png'
        assert mangle(url) == mangle(url)
        assert mangle(url) != mangle('https://tile.opentopomap.org/12/2173/1474.png')

    def test_shard_directories(self):
        first, second, rest = mangle('https://tile.opentopomap.org/12/2173/1473.png').split('/', 2)
        assert len(first) == len(second) == 2
        int(first + second, 16)
        assert rest == 'tile.opentopomap.org/12/2173/1473.png'


def test_tile_location():
    location = tile_location('https://tile.openstreetmap.org/17/68647/47546.png',
        '/tmp/cache', 'OpenStreetMap')
    assert location == os.path.join('/tmp/cache', 'OpenStreetMap', '43', '57',
        'tile.openstreetmap.org', '17', '68647', '47546.png')
