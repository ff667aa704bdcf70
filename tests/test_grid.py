"""Grid placement: box keys, coordinates and board metadata."""

import pytest

from talent_engine import grid
from talent_engine.grid import InvalidCoordinate


class TestBoxKeys:

    @pytest.mark.parametrize("performance", grid.LEVELS)
    @pytest.mark.parametrize("potential", grid.LEVELS)
    def test_coordinates_map_back_to_labels(self, performance, potential):
        x, y = grid.grid_position(performance, potential)
        assert grid.from_grid_coordinates(x, y) == (performance, potential)
        assert grid.to_box_key(performance, potential) == f"{x}-{y}"

    def test_star_box(self):
        a = grid.build_assessment("high", "high")
        assert a.box_key == "3-3"
        assert grid.box_metadata(a.box_key)["title"] == "Stars"

    def test_box_key_is_performance_first(self):
        assert grid.to_box_key("low", "high") == "1-3"
        assert grid.from_box_key("1-3") == ("low", "high")

    def test_partial_assessment_has_no_box(self):
        assert grid.build_assessment("high", None).box_key is None
        assert grid.box_metadata(None)["title"] == "Needs Placement"

    def test_render_order_covers_every_cell_once(self):
        assert len(grid.BOX_RENDER_ORDER) == 10
        assert set(grid.BOX_RENDER_ORDER) == set(grid.BOX_METADATA)
        assert grid.BOX_RENDER_ORDER[0] == "3-3"
        assert grid.BOX_RENDER_ORDER[-1] == "unassigned"


class TestInvalidCoordinates:

    @pytest.mark.parametrize("x,y", [(0, 1), (4, 2), (2, -1), (1, 9)])
    def test_out_of_range(self, x, y):
        with pytest.raises(InvalidCoordinate):
            grid.from_grid_coordinates(x, y)

    @pytest.mark.parametrize("x,y", [(True, 1), (1.0, 2), ("2", 2)])
    def test_non_integers(self, x, y):
        with pytest.raises(InvalidCoordinate):
            grid.from_grid_coordinates(x, y)

    @pytest.mark.parametrize("key", ["", "3", "a-b", "0-3", "3-3-3"])
    def test_malformed_box_key(self, key):
        with pytest.raises(InvalidCoordinate):
            grid.from_box_key(key)

    def test_is_a_value_error(self):
        assert issubclass(InvalidCoordinate, ValueError)
