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
Location of cached tiles on disk.

Tiles are spread over 65536 directories by the CRC-16 of their URL path,
e.g. ``<cache_dir>/<cache_prefix>/43/57/tile.openstreetmap.org/17/68647/47546.png``.
"""

import os


def _crc16_table():
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ 0xA001
            else:
                crc >>= 1
        table.append(crc)
    return table

_CRC16_TABLE = _crc16_table()

def crc16(data):
    """
    CRC-16/ARC checksum (polynomial 0x8005, reflected, initial value 0).

    >>> '%04x' % crc16(b'123456789')
    'bb3d'
    """
    crc = 0
    for byte in bytearray(data):
        crc = (crc >> 8) ^ _CRC16_TABLE[(crc ^ byte) & 0xFF]
    return crc

def mangle(url):
    """
    Return the relative cache path for the tile `url`.

    The scheme and host part is removed, as well as any query string.
    The hex digits of the CRC-16 of the remaining path form two levels
    of directories.

    >>> mangle('https://tile.openstreetmap.org/17/68647/47546.png')
    '43/57/tile.openstreetmap.org/17/68647/47546.png'
    >>> mangle('http://tile.example.org/17/68647/47546.png?key=secret')
    'a1/ee/17/68647/47546.png'
    """
    # only the length of 'http://' is skipped, https URLs keep the host
    path = url[len('http://'):]
    idx = path.find('/')
    if idx > 0:
        path = path[idx + 1:]
    idx = path.rfind('?')
    if idx >= 0:
        path = path[:idx]
    crc = '%04x' % crc16(path.encode('utf-8'))
    return '/'.join([crc[:2], crc[2:], path.lstrip('/')])

def tile_location(url, cache_dir, cache_prefix):
    """
    Return the absolute file name for the tile `url`.

    >>> tile_location('https://tile.openstreetmap.org/1/0/0.png', '/tmp/cache', 'OSM').startswith('/tmp/cache/OSM/')
    True
    """
    return os.path.join(cache_dir, cache_prefix, *mangle(url).split('/'))
