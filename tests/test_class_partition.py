import pytest

from pcms.class_partition import (
    class_partition_from_classification,
    format_class_partition,
)


def test_faces_numbered_and_parts_monotone():
    dims = [1] * 12 + [0, 0]
    ids = [i // 2 for i in range(12)] + [5, 9]
    result = class_partition_from_classification(dims, ids, 3)
    assert [face for face, _ in result] == list(range(1, 7))
    parts = [part for _, part in result]
    assert parts[0] == 0
    assert all(b - a in (0, 1) for a, b in zip(parts, parts[1:]))


def test_single_part_keeps_everything_together():
    dims = [1, 1, 1, 1]
    ids = [8, 2, 2, 5]
    result = class_partition_from_classification(dims, ids, 1)
    assert {part for _, part in result} == {0}
    assert len(result) == len(set(ids))


def test_small_example():
    result = class_partition_from_classification([1, 1, 1, 1, 0], [5, 5, 7, 7, 3], 2)
    assert result == [(1, 0), (2, 0)]


def test_rejects_dimension_two():
    with pytest.raises(ValueError):
        class_partition_from_classification([1, 2], [1, 1], 2)


def test_rejects_bad_nparts_and_lengths():
    with pytest.raises(ValueError):
        class_partition_from_classification([1], [1], 0)
    with pytest.raises(ValueError):
        class_partition_from_classification([1, 1], [1], 1)


def test_rejects_no_faces():
    with pytest.raises(ValueError):
        class_partition_from_classification([0, 0], [1, 2], 1)


def test_format():
    assert format_class_partition([(1, 0), (2, 1)]) == "2\n1 0\n2 1\n"


def test_format_round_trip_line_count():
    dims = [1] * 10
    ids = list(range(10))
    text = format_class_partition(class_partition_from_classification(dims, ids, 4))
    lines = text.splitlines()
    assert int(lines[0]) == len(lines) - 1 == len(set(ids))