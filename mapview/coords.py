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
Immutable value types for geographic and pixel positions.

`MapPoint` is a position in the world bitmap at some zoom level,
`ViewPoint` is a position relative to the top-left of the viewport and
`Offset` is a pixel translation. All three have the same shape but
are distinct types to keep the units apart.
"""

from collections import namedtuple


class Coordinates(namedtuple('Coordinates', 'latitude longitude')):
    """
    Geographic position in degrees.

    >>> Coordinates(44.4, 8.95).to_formatted_string()
    '44.400000, 8.950000'
    """
    __slots__ = ()

    def to_formatted_string(self, decimals=6):
        return '%.*f, %.*f' % (decimals, self.latitude, decimals, self.longitude)


class _Pixel(object):
    __slots__ = ()

    def translated(self, dx, dy):
        return self.__class__(self.x + dx, self.y + dy)


class MapPoint(_Pixel, namedtuple('MapPoint', 'x y')):
    """
    >>> MapPoint(10, 20).translated(-5, 5)
    MapPoint(x=5, y=25)
    """
    __slots__ = ()


class ViewPoint(_Pixel, namedtuple('ViewPoint', 'x y')):
    __slots__ = ()


class Offset(_Pixel, namedtuple('Offset', 'x y')):
    __slots__ = ()


TilePos = namedtuple('TilePos', 'column row')
