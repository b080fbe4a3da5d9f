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
Conversions between geographic coordinates and world pixels.

Both projections map the world into a square bitmap of
``2**zoom * tile_size`` pixels with the origin in the north-west corner.
"""

import math

from mapview.coords import Coordinates, MapPoint

EARTH_RADIUS = 6378137.0
EARTH_CIRCUMFERENCE = 2 * math.pi * EARTH_RADIUS

#: latitude where the web mercator world bitmap becomes square
MAX_LATITUDE = 85.05112877980655


def normalize_longitude(lon):
    """
    Wrap `lon` into the interval (-180, 180].

    >>> normalize_longitude(190.0)
    -170.0
    >>> normalize_longitude(-180.0)
    180.0
    >>> normalize_longitude(540.0)
    180.0
    """
    while lon > 180.0:
        lon -= 360.0
    while lon <= -180.0:
        lon += 360.0
    return lon

def _log_tangent(sin_lat):
    # the poles are outside of the projection domain
    if sin_lat >= 1.0:
        return float('inf')
    if sin_lat <= -1.0:
        return float('-inf')
    return math.log((1 + sin_lat) / (1 - sin_lat))

def _inverse_log_tangent(exponent):
    try:
        e = math.exp(exponent)
    except OverflowError:
        return 90.0
    if math.isinf(e):
        return 90.0
    return math.degrees(math.asin((e - 1) / (e + 1)))


class Projection(object):
    """
    Base class of the map projections.

    Latitudes outside the projection domain are not rejected, the
    results are mathematically degenerate.
    """
    name = None

    def __init__(self, tile_size=256):
        self.tile_size = tile_size

    def world_size(self, zoom):
        """
        Width and height of the world bitmap in pixels.

        >>> MercatorProjection().world_size(2)
        1024.0
        """
        return 2.0 ** zoom * self.tile_size

    def coordinates_to_point(self, coordinates, zoom):
        raise NotImplementedError

    def point_to_coordinates(self, point, zoom):
        raise NotImplementedError

    def meters_per_pixel(self, coordinates, zoom):
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, Projection):
            return NotImplemented
        return self.name == other.name and self.tile_size == other.tile_size

    def __ne__(self, other):
        equals = self.__eq__(other)
        if equals is NotImplemented:
            return equals
        return not equals

    def __hash__(self):
        return hash((self.name, self.tile_size))

    def __repr__(self):
        return '%s(tile_size=%r)' % (self.__class__.__name__, self.tile_size)


class MercatorProjection(Projection):
    """
    Spherical Mercator with a fixed earth radius, calculated in meters.
    """
    name = 'mercator'

    def _arc(self, zoom):
        return EARTH_CIRCUMFERENCE / self.world_size(zoom)

    def coordinates_to_point(self, coordinates, zoom):
        arc = self._arc(zoom)
        sin_lat = math.sin(math.radians(coordinates.latitude))
        x = (coordinates.longitude + 180.0) / 360.0 * self.world_size(zoom)
        y = (EARTH_CIRCUMFERENCE / 2.0 - EARTH_RADIUS / 2.0 * _log_tangent(sin_lat)) / arc
        return MapPoint(x, y)

    def point_to_coordinates(self, point, zoom):
        arc = self._arc(zoom)
        meters_y = EARTH_CIRCUMFERENCE / 2.0 - point.y * arc
        # linear in degrees, the east edge maps back to exactly 180
        lon = normalize_longitude(point.x * 360.0 / self.world_size(zoom) - 180.0)
        lat = _inverse_log_tangent(meters_y / (EARTH_RADIUS / 2.0))
        return Coordinates(lat, lon)

    def meters_per_pixel(self, coordinates, zoom):
        return self._arc(zoom) * math.cos(math.radians(coordinates.latitude))


class WGS84PseudoMercatorProjection(Projection):
    """
    Web Mercator as used by the common tile servers (EPSG:3857),
    calculated in radians. Valid for latitudes within +/-`MAX_LATITUDE`.
    """
    name = 'wgs84_pseudo_mercator'

    def _radians_per_pixel(self, zoom):
        return 2 * math.pi / self.world_size(zoom)

    def coordinates_to_point(self, coordinates, zoom):
        rpp = self._radians_per_pixel(zoom)
        sin_lat = math.sin(math.radians(coordinates.latitude))
        x = (coordinates.longitude + 180.0) / 360.0 * self.world_size(zoom)
        y = (math.pi - 0.5 * _log_tangent(sin_lat)) / rpp
        return MapPoint(x, y)

    def point_to_coordinates(self, point, zoom):
        rpp = self._radians_per_pixel(zoom)
        lon = normalize_longitude(point.x * 360.0 / self.world_size(zoom) - 180.0)
        lat = _inverse_log_tangent(2 * (math.pi - point.y * rpp))
        return Coordinates(lat, lon)

    def meters_per_pixel(self, coordinates, zoom):
        return (EARTH_RADIUS * self._radians_per_pixel(zoom)
            * math.cos(math.radians(coordinates.latitude)))


_projections = {
    MercatorProjection.name: MercatorProjection,
    WGS84PseudoMercatorProjection.name: WGS84PseudoMercatorProjection,
}

def projection_for_name(name, tile_size=256):
    """
    >>> projection_for_name('mercator', 512)
    MercatorProjection(tile_size=512)
    """
    try:
        return _projections[name](tile_size)
    except KeyError:
        raise ValueError('unknown projection %r, expected one of %s'
            % (name, ', '.join(sorted(_projections))))
