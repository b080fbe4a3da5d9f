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
Geographic rectangles.
"""

from mapview.coords import Coordinates
from mapview.proj import normalize_longitude


class MapAreaError(ValueError):
    pass


class MapArea(object):
    """
    Rectangle bounded by two latitudes and two longitudes, in degrees.

    The area crosses the antimeridian when `east` is smaller than `west`.

    >>> MapArea(50, 8, 40, 4).center()
    Coordinates(latitude=45.0, longitude=6.0)
    >>> MapArea(60, -150, 50, 150).is_across_antimeridian()
    True
    """
    def __init__(self, north, east, south, west):
        self._check_latitude('north', north)
        self._check_latitude('south', south)
        self._check_longitude('east', east)
        self._check_longitude('west', west)
        if north < south:
            raise MapAreaError('north (%s) is south of south (%s)' % (north, south))
        self.north = north
        self.east = east
        self.south = south
        self.west = west

    @staticmethod
    def _check_latitude(name, value):
        if not -90.0 <= value <= 90.0:
            raise MapAreaError('%s latitude %s not within [-90, 90]' % (name, value))

    @staticmethod
    def _check_longitude(name, value):
        if not -180.0 < value <= 180.0:
            raise MapAreaError('%s longitude %s not within (-180, 180]' % (name, value))

    @classmethod
    def from_corners(cls, north_west, south_east):
        return cls(north_west.latitude, south_east.longitude,
                   south_east.latitude, north_west.longitude)

    def is_across_antimeridian(self):
        return self.east < self.west

    def center(self):
        lat = (self.north + self.south) / 2.0
        lon = (self.east + self.west) / 2.0
        if self.is_across_antimeridian():
            lon = normalize_longitude(lon - 180.0)
        return Coordinates(lat, lon)

    def contains(self, other):
        """
        Returns ``True`` if the `other` `Coordinates` or `MapArea` is within
        this area.

        Areas are compared side by side and both areas are expected to
        use the same longitude convention.

        >>> area = MapArea(60, -150, 50, 150)
        >>> area.contains(Coordinates(55, 179)), area.contains(Coordinates(55, 0))
        (True, False)
        """
        if isinstance(other, MapArea):
            return (self.north >= other.north and self.south <= other.south
                and self.west <= other.west and self.east >= other.east)

        if not self.south <= other.latitude <= self.north:
            return False
        if self.is_across_antimeridian():
            return other.longitude >= self.west or other.longitude <= self.east
        return self.west <= other.longitude <= self.east

    def __contains__(self, other):
        return self.contains(other)

    def __eq__(self, other):
        if not isinstance(other, MapArea):
            return NotImplemented
        return (self.north, self.east, self.south, self.west) == (
            other.north, other.east, other.south, other.west)

    def __ne__(self, other):
        if not isinstance(other, MapArea):
            return NotImplemented
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self.north, self.east, self.south, self.west))

    def __repr__(self):
        return '%s(n=%.6f, e=%.6f, s=%.6f, w=%.6f)' % (
            self.__class__.__name__, self.north, self.east, self.south, self.west)
