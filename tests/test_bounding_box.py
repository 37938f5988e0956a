import pytest

from pcms.bounding_box import AABBox, intersects

UNIT_SQUARE = AABBox(center=(0, 0), half_width=(0.5, 0.5))


def shifted(y):
    return AABBox(center=(0, y), half_width=(0.5, 0.5))


def test_self_intersection():
    assert intersects(UNIT_SQUARE, UNIT_SQUARE)


def test_shifted_sequence():
    assert intersects(UNIT_SQUARE, shifted(0.4))
    assert intersects(UNIT_SQUARE, shifted(0.8))
    assert not intersects(UNIT_SQUARE, shifted(1.6))
    # negative side
    assert not intersects(UNIT_SQUARE, shifted(-1.6))
    assert intersects(UNIT_SQUARE, shifted(-0.8))


def test_intersection_is_symmetric():
    other = shifted(0.8)
    assert intersects(UNIT_SQUARE, other) == intersects(other, UNIT_SQUARE)


def test_dimension_and_bounds():
    box = AABBox.from_bounds((0, 0), (2, 4))
    assert box.dim == 2
    assert box.center == (1.0, 2.0)
    assert box.half_width == (1.0, 2.0)


def test_mismatched_dimensions_raise():
    with pytest.raises(ValueError):
        intersects(UNIT_SQUARE, AABBox(center=(0, 0, 0), half_width=(1, 1, 1)))
    with pytest.raises(ValueError):
        AABBox(center=(0, 0), half_width=(1,))