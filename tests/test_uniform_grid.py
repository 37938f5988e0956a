import pytest

from pcms.uniform_grid import UniformGrid


@pytest.fixture
def grid():
    return UniformGrid(edge_length=(10, 12), bot_left=(0, 0), divisions=(10, 12))


def test_num_cells(grid):
    assert grid.num_cells() == 120


@pytest.mark.parametrize(
    "point, expected",
    [
        ((0, 0), 0),
        ((-5, -5), 0),
        ((1.5, 0), 1),
        ((10, 12), 119),
        ((9.5, 11.5), 119),
        ((100, 100), 119),
    ],
)
def test_closest_cell_id(grid, point, expected):
    assert grid.closest_cell_id(point) == expected


def test_cell_bbox(grid):
    bboxes = [grid.cell_bbox(0), grid.cell_bbox(1), grid.cell_bbox(119)]
    assert bboxes[0].center == pytest.approx((0.5, 0.5))
    assert bboxes[1].center == pytest.approx((1.5, 0.5))
    assert bboxes[2].center == pytest.approx((9.5, 11.5))
    for bbox in bboxes:
        for i in range(bbox.dim):
            assert bbox.half_width[i] == pytest.approx(0.5)


def test_two_d_cell_index(grid):
    assert grid.two_d_cell_index(0) == (0, 0)
    assert grid.two_d_cell_index(119) == (11, 9)


def test_cell_index(grid):
    assert grid.cell_index(0, 0) == 0
    assert grid.cell_index(11, 9) == 119


def test_cell_index_round_trip(grid):
    for idx in range(grid.num_cells()):
        assert grid.cell_index(*grid.two_d_cell_index(idx)) == idx


def test_cell_center_maps_to_own_cell(grid):
    for idx in range(grid.num_cells()):
        assert grid.closest_cell_id(grid.cell_bbox(idx).center) == idx


@pytest.mark.parametrize("i, j", [(-1, 0), (0, -1), (12, 0), (0, 10)])
def test_cell_index_out_of_range(grid, i, j):
    with pytest.raises(IndexError):
        grid.cell_index(i, j)