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

import pytest

from mapview.area import MapArea, MapAreaError
from mapview.coords import Coordinates, MapPoint, ViewPoint, Offset, TilePos


class TestCoordinates(object):
    def test_fields(self):
        c = Coordinates(44.4, 8.95)
        assert c.latitude == 44.4
        assert c.longitude == 8.95
        assert c == Coordinates(44.4, 8.95)

    def test_formatted_string(self):
        assert Coordinates(-33.8688, 151.2093).to_formatted_string(2) == '-33.87, 151.21'

    def test_translated_keeps_type(self):
        assert MapPoint(1, 2).translated(1, 1) == MapPoint(2, 3)
        assert isinstance(ViewPoint(1, 2).translated(0, 0), ViewPoint)
        assert isinstance(Offset(1, 2).translated(0, 0), Offset)
        assert repr(Offset(1, 2)) == 'Offset(x=1, y=2)'

    def test_tile_pos(self):
        pos = TilePos(3, 4)
        assert (pos.column, pos.row) == (3, 4)


class TestMapArea(object):
    @pytest.mark.parametrize('bounds', [
        (91, 0, 0, 0),
        (0, 0, -91, 0),
        (10, 181, 0, 0),
        (10, 0, 0, -180),
        (0, 0, 10, 0),
    ])
    def test_invalid(self, bounds):
        with pytest.raises(MapAreaError):
            MapArea(*bounds)

    def test_invalid_is_value_error(self):
        with pytest.raises(ValueError):
            MapArea(-10, 0, 10, 0)

    def test_valid_edges(self):
        area = MapArea(90, 180, -90, 180)
        assert area.north == 90
        assert area.east == 180
        assert area.south == -90
        assert area.west == 180

    @pytest.mark.parametrize('bounds,center', [
        ((50, 8, 40, 4), (45, 6)),
        ((60, -150, 50, 150), (55, 180)),
        ((60, -150, 50, 160), (55, -175)),
        ((60, -160, 50, 150), (55, 175)),
    ])
    def test_center(self, bounds, center):
        result = MapArea(*bounds).center()
        assert result.latitude == pytest.approx(center[0])
        assert result.longitude == pytest.approx(center[1])

    def test_across_antimeridian(self):
        assert MapArea(60, -150, 50, 150).is_across_antimeridian()
        assert not MapArea(50, 8, 40, 4).is_across_antimeridian()
        assert not MapArea(50, 8, 40, 8).is_across_antimeridian()

    def test_contains_coordinates(self):
        area = MapArea(50, 8, 40, 4)
        assert area.contains(Coordinates(45, 6))
        assert area.contains(Coordinates(50, 8))
        assert not area.contains(Coordinates(51, 6))
        assert not area.contains(Coordinates(45, 9))
        assert not area.contains(Coordinates(45, 3))

    def test_contains_coordinates_across_antimeridian(self):
        area = MapArea(60, -150, 50, 150)
        assert area.contains(Coordinates(55, 180))
        assert area.contains(Coordinates(55, 160))
        assert area.contains(Coordinates(55, -160))
        assert not area.contains(Coordinates(55, 0))
        assert not area.contains(Coordinates(55, 140))
        assert not area.contains(Coordinates(45, 170))
        assert Coordinates(55, 175) in area

    def test_contains_area(self):
        area = MapArea(50, 10, 40, 0)
        assert area.contains(area)
        assert area.contains(MapArea(45, 5, 42, 2))
        assert not area.contains(MapArea(51, 5, 42, 2))
        assert not area.contains(MapArea(45, 11, 42, 2))
        assert not MapArea(45, 5, 42, 2).contains(area)

    def test_eq(self):
        assert MapArea(50, 8, 40, 4) == MapArea(50, 8, 40, 4)
        assert MapArea(50, 8, 40, 4) != MapArea(50, 8, 40, 5)
        assert len(set([MapArea(50, 8, 40, 4), MapArea(50, 8, 40, 4)])) == 1
        assert MapArea(50, 8, 40, 4) != (50, 8, 40, 4)

    def test_repr(self):
        assert repr(MapArea(50, 8, 40, 4)) == (
            'MapArea(n=50.000000, e=8.000000, s=40.000000, w=4.000000)')

    def test_from_corners(self):
        area = MapArea.from_corners(Coordinates(50, 4), Coordinates(40, 8))
        assert area == MapArea(50, 8, 40, 4)
