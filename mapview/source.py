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
Tile sources: where tiles come from and how they are addressed.
"""

from mapview.proj import WGS84PseudoMercatorProjection, projection_for_name


class TileSourceError(Exception):
    pass


class TileSource(object):
    """
    Configuration of a tile server.

    `url_template` is a Python format string with the ``%(x)d``,
    ``%(y)d`` and ``%(z)d`` placeholders for the column, row and zoom
    level of a tile.

    >>> OPEN_STREET_MAP.tile_uri(68647, 47546, 17)
    'https://tile.openstreetmap.org/17/68647/47546.png'
    """
    def __init__(self, url_template, projection=None, min_zoom=1, max_zoom=19,
                 default_zoom=9, tile_size=256, display_name=None, cache_prefix=None):
        if tile_size <= 0:
            raise TileSourceError('tile_size must be positive, got %r' % (tile_size, ))
        if not 0 <= min_zoom <= max_zoom:
            raise TileSourceError('invalid zoom range %r-%r' % (min_zoom, max_zoom))
        if not min_zoom <= default_zoom <= max_zoom:
            raise TileSourceError('default_zoom %r not within %r-%r' % (
                default_zoom, min_zoom, max_zoom))
        if projection is None:
            projection = WGS84PseudoMercatorProjection(tile_size)
        elif projection.tile_size != tile_size:
            raise TileSourceError('projection tile size %r does not match %r' % (
                projection.tile_size, tile_size))
        self.url_template = url_template
        self.projection = projection
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self.default_zoom = default_zoom
        self.tile_size = tile_size
        self.display_name = display_name or url_template
        self.cache_prefix = cache_prefix or self.display_name

    def tile_uri(self, column, row, zoom):
        return self.url_template % {'x': column, 'y': row, 'z': zoom}

    def clamp_zoom(self, zoom):
        """
        >>> OPEN_TOPO_MAP.clamp_zoom(19), OPEN_TOPO_MAP.clamp_zoom(0)
        (17, 1)
        """
        return max(self.min_zoom, min(self.max_zoom, zoom))

    def coordinates_to_point(self, coordinates, zoom):
        return self.projection.coordinates_to_point(coordinates, zoom)

    def point_to_coordinates(self, point, zoom):
        return self.projection.point_to_coordinates(point, zoom)

    def meters_per_pixel(self, coordinates, zoom):
        return self.projection.meters_per_pixel(coordinates, zoom)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.display_name)


OPEN_STREET_MAP = TileSource(
    'https://tile.openstreetmap.org/%(z)d/%(x)d/%(y)d.png',
    min_zoom=1, max_zoom=19, default_zoom=9, tile_size=256,
    display_name='OpenStreetMap', cache_prefix='OpenStreetMap',
)

OPEN_TOPO_MAP = TileSource(
    'https://tile.opentopomap.org/%(z)d/%(x)d/%(y)d.png',
    min_zoom=1, max_zoom=17, default_zoom=9, tile_size=256,
    display_name='OpenTopoMap', cache_prefix='OpenTopoMap',
)


def tile_source_from_conf(name, conf):
    """
    Create a `TileSource` from a configuration dictionary.

    >>> tile_source_from_conf('osm', {
    ...     'url': 'https://example.org/%(z)d/%(x)d/%(y)d.png',
    ...     'max_zoom': 12})
    TileSource('osm')
    """
    if 'url' not in conf:
        raise TileSourceError('missing url for tile source %s' % (name, ))
    tile_size = conf.get('tile_size', 256)
    try:
        projection = projection_for_name(
            conf.get('projection', WGS84PseudoMercatorProjection.name), tile_size)
    except ValueError as ex:
        raise TileSourceError('tile source %s: %s' % (name, ex))
    return TileSource(
        conf['url'],
        projection=projection,
        min_zoom=conf.get('min_zoom', 1),
        max_zoom=conf.get('max_zoom', 19),
        default_zoom=conf.get('default_zoom', 9),
        tile_size=tile_size,
        display_name=conf.get('display_name', name),
        cache_prefix=conf.get('cache_prefix', conf.get('display_name', name)),
    )

def load_tile_sources(conf):
    """
    Create all tile sources of the ``sources`` configuration.
    Returns a dictionary with the source names as keys.
    """
    sources = {}
    for name, source_conf in (conf.get('sources') or {}).items():
        sources[name] = tile_source_from_conf(name, source_conf)
    return sources
