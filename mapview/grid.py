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
Tile grid calculations for a map view.
"""

import math
from collections import namedtuple

from mapview.area import MapArea
from mapview.coords import Coordinates, MapPoint, ViewPoint, Offset, TilePos
from mapview.source import OPEN_STREET_MAP

import logging
log = logging.getLogger('mapview.grid')

#: extra ring of tiles around the visible tiles
GRID_MARGIN = 1


class GridError(Exception):
    pass


def greater_odd(n):
    """
    Returns `n` if it is odd, else the next odd number.

    >>> greater_odd(4), greater_odd(7), greater_odd(0)
    (5, 7, 1)
    """
    return n + 1 if n % 2 == 0 else n

def grid_dimension(size, tile_size):
    """
    Number of tiles needed along one axis of the viewport, including the
    margin. Always odd, so that the grid has a center tile.

    >>> grid_dimension(256, 256), grid_dimension(257, 256), grid_dimension(800, 256)
    (3, 5, 7)
    """
    return greater_odd(int(math.ceil(size / float(tile_size)))) + 2 * GRID_MARGIN


GridState = namedtuple('GridState', [
    'zoom', 'exact_zoom', 'center', 'center_point', 'tile_center', 'tile_offset',
    'grid_offset', 'columns', 'rows', 'viewport_width', 'viewport_height',
])

def compute_grid_state(tile_source, center, zoom, viewport_width=None, viewport_height=None):
    """
    Calculate the grid of `tile_source` for a view of the given size.

    `center` is either `Coordinates` or a `MapPoint` at `zoom`. The zoom
    level is kept as given for the projection of the center and rounded
    down to the next integer for the tile addressing. Without a viewport
    size the grid has no columns and rows.
    """
    exact_zoom = zoom
    zoom = int(math.floor(zoom))
    if zoom < 0:
        raise GridError('invalid zoom level %r' % (zoom, ))
    if viewport_width is not None and (viewport_width < 0 or viewport_height < 0):
        raise GridError('invalid viewport size %rx%r' % (viewport_width, viewport_height))

    if isinstance(center, MapPoint):
        center_point = center
        center = tile_source.point_to_coordinates(center_point, exact_zoom)
    else:
        center_point = tile_source.coordinates_to_point(center, exact_zoom)

    tile_size = tile_source.tile_size
    tile_center = TilePos(
        int(math.floor(center_point.x / tile_size)),
        int(math.floor(center_point.y / tile_size)),
    )
    tile_offset = Offset(center_point.x % tile_size, center_point.y % tile_size)

    if viewport_width is None:
        columns = rows = 0
        width = height = 0
    else:
        columns = grid_dimension(viewport_width, tile_size)
        rows = grid_dimension(viewport_height, tile_size)
        width, height = viewport_width, viewport_height

    grid_offset = Offset(
        -tile_offset.x - tile_size * columns / 2.0 + width / 2.0 + tile_size / 2.0,
        -tile_offset.y - tile_size * rows / 2.0 + height / 2.0 + tile_size / 2.0,
    )
    return GridState(zoom, exact_zoom, center, center_point, tile_center, tile_offset,
        grid_offset, columns, rows, viewport_width, viewport_height)


class TileGridEngine(object):
    """
    Holds the tile grid of a single map view.

    Every change of the tile source, the center, the zoom level or the
    viewport size recalculates the complete `GridState`.
    Not thread-safe.
    """
    def __init__(self, tile_source=None, center=None, zoom=None):
        self.tile_source = tile_source or OPEN_STREET_MAP
        self._anchor = center or Coordinates(0.0, 0.0)
        self._zoom = self.tile_source.default_zoom if zoom is None else zoom
        self._viewport = None, None
        self.state = None
        self.recompute()

    zoom = property(lambda self: self.state.zoom)
    exact_zoom = property(lambda self: self.state.exact_zoom)
    center = property(lambda self: self.state.center)
    center_point = property(lambda self: self.state.center_point)
    tile_center = property(lambda self: self.state.tile_center)
    tile_offset = property(lambda self: self.state.tile_offset)
    grid_offset = property(lambda self: self.state.grid_offset)
    columns = property(lambda self: self.state.columns)
    rows = property(lambda self: self.state.rows)
    viewport_width = property(lambda self: self.state.viewport_width)
    viewport_height = property(lambda self: self.state.viewport_height)

    def set_tile_source(self, tile_source):
        """
        Switch to another tile source. The zoom level is limited
        to the zoom levels of the new source.
        """
        self._update(tile_source=tile_source, anchor=self.state.center,
            zoom=tile_source.clamp_zoom(self.state.exact_zoom))

    def set_center_and_zoom(self, center, zoom):
        """
        Move the view to `center` (`Coordinates` or a `MapPoint` at `zoom`).
        """
        self._update(anchor=center, zoom=zoom)

    def update_grid_size(self, viewport_width, viewport_height):
        """
        Set the viewport size. Returns ``True`` if the number of
        columns or rows changed and the tiles need to be rebuilt.
        """
        old = self.state
        self._update(viewport=(viewport_width, viewport_height))
        return (old.columns, old.rows) != (self.state.columns, self.state.rows)

    def recompute(self):
        return self._update()

    def _update(self, tile_source=None, anchor=None, zoom=None, viewport=None):
        # invalid input leaves the current state untouched
        tile_source = tile_source or self.tile_source
        anchor = self._anchor if anchor is None else anchor
        zoom = self._zoom if zoom is None else zoom
        viewport = viewport or self._viewport
        self.state = compute_grid_state(tile_source, anchor, zoom, *viewport)
        self.tile_source = tile_source
        self._anchor = anchor
        self._zoom = zoom
        self._viewport = viewport
        return self.state

    def iterate_on_grid(self, visit):
        """
        Call ``visit(pos, uri)`` for each cell of the grid, row by row
        from top to bottom and left to right. `pos` is the `TilePos` of
        the cell within the grid, `uri` addresses the tile in the cell.
        Tiles outside of the world wrap around on both axes.
        """
        state = self.state
        tiles_per_axis = 2 ** state.zoom
        left = state.tile_center.column - state.columns // 2
        top = state.tile_center.row - state.rows // 2
        for row in range(state.rows):
            tile_row = (top + row) % tiles_per_axis
            for column in range(state.columns):
                tile_column = (left + column) % tiles_per_axis
                visit(TilePos(column, row),
                      self.tile_source.tile_uri(tile_column, tile_row, state.zoom))

    def tiles(self):
        """
        Returns a list of all ``(pos, uri)`` pairs of `iterate_on_grid`.
        """
        result = []
        self.iterate_on_grid(lambda pos, uri: result.append((pos, uri)))
        return result

    def compute_fitting_zoom(self, area):
        """
        Returns the highest zoom level of the tile source where the
        complete `area` is visible in the current viewport, or 1
        if there is none.
        """
        center = area.center()
        source = self.tile_source
        for zoom in range(source.max_zoom, source.min_zoom - 1, -1):
            state = compute_grid_state(source, center, zoom, *self._viewport)
            if _visible_area(source, state).contains(area):
                log.debug('fitting zoom for %r is %d', area, zoom)
                return zoom
        log.info('no zoom level of %r fits %r', source, area)
        return 1

    def area(self):
        """
        The geographic area that is visible in the viewport.
        """
        return _visible_area(self.tile_source, self.state)

    def coordinates_to_view_point(self, coordinates):
        return _map_to_view(self.state,
            self.tile_source.coordinates_to_point(coordinates, self.state.zoom))

    def view_point_to_coordinates(self, view_point):
        return self.tile_source.point_to_coordinates(
            _view_to_map(self.state, view_point), self.state.zoom)

    def meters_per_pixel(self):
        """
        Ground resolution at the center of the view.
        """
        return self.tile_source.meters_per_pixel(self.state.center, self.state.zoom)

    def __repr__(self):
        return '%s(%r, center=%s, zoom=%d, grid=%dx%d)' % (
            self.__class__.__name__, self.tile_source,
            self.state.center.to_formatted_string(), self.state.zoom,
            self.state.columns, self.state.rows)


def _viewport_translation(state):
    return (
        (state.viewport_width or 0) / 2.0 - state.center_point.x,
        (state.viewport_height or 0) / 2.0 - state.center_point.y,
    )

def _map_to_view(state, point):
    dx, dy = _viewport_translation(state)
    return ViewPoint(point.x + dx, point.y + dy)

def _view_to_map(state, view_point):
    dx, dy = _viewport_translation(state)
    return MapPoint(view_point.x - dx, view_point.y - dy)

def _visible_area(tile_source, state):
    north_west = tile_source.point_to_coordinates(
        _view_to_map(state, ViewPoint(0, 0)), state.zoom)
    south_east = tile_source.point_to_coordinates(
        _view_to_map(state, ViewPoint(state.viewport_width or 0, state.viewport_height or 0)),
        state.zoom)
    return MapArea.from_corners(north_west, south_east)
