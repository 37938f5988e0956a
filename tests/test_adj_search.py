import numpy as np
import pytest

from pcms.adj_search import (
    FindSupports,
    SupportResults,
    calculate_distance,
    search_neighbors,
)
from pcms.point_search import GridPointSearch, TriangleMesh


def build_box(nx, ny, x=1.0, y=1.0):
    xs = np.linspace(0.0, x, nx + 1)
    ys = np.linspace(0.0, y, ny + 1)
    coords = [(xv, yv) for yv in ys for xv in xs]
    tris = []
    for row in range(ny):
        for col in range(nx):
            v00 = row * (nx + 1) + col
            v10 = v00 + 1
            v01 = v00 + nx + 1
            v11 = v01 + 1
            tris.append((v00, v10, v11))
            tris.append((v00, v11, v01))
    return TriangleMesh(np.array(coords), np.array(tris))


@pytest.fixture(scope="module")
def source():
    return build_box(10, 10)


@pytest.fixture(scope="module")
def target():
    return build_box(4, 4)


def test_calculate_distance_ignores_z_in_two_dimensions():
    assert calculate_distance((0, 0, 5), (3, 4, -5), 2) == 25.0
    assert calculate_distance((0, 0, 5), (3, 4, -5), 3) == 125.0


def test_calculate_distance_symmetric_and_zero():
    p, q = (0.3, 0.7), (0.9, 0.1)
    assert calculate_distance(p, q, 2) == calculate_distance(q, p, 2)
    assert calculate_distance(p, p, 2) == 0.0


def test_supports_within_cutoff_and_unique(source, target):
    cutoff = 0.04
    supports = FindSupports(source, target).adj_based_search(cutoff)
    assert len(supports) == target.nverts
    for t, found in enumerate(supports):
        assert len(found) == len(set(found))
        for v in found:
            assert calculate_distance(target.coords[t], source.coords[v], 2) <= cutoff


def test_containing_triangle_vertices_are_supports(source, target):
    cutoff = 0.04
    supports = FindSupports(source, target).adj_based_search(cutoff)
    results = GridPointSearch(source, 10, 10)(target.coords)
    for t, (found, result) in enumerate(zip(supports, results)):
        for v in source.triangles[result.tri_id].tolist():
            if calculate_distance(target.coords[t], source.coords[v], 2) <= cutoff:
                assert v in found


def test_large_cutoff_reaches_every_source_vertex(source, target):
    supports = FindSupports(source, target).adj_based_search(10.0)
    for found in supports:
        assert sorted(found) == list(range(source.nverts))


def test_zero_cutoff_on_identical_meshes(source):
    supports = FindSupports(source, source).adj_based_search(0.0)
    assert supports == [[v] for v in range(source.nverts)]


def test_search_neighbors_csr_layout(source, target):
    cutoff = 0.02
    result = search_neighbors(source, target, cutoff)
    assert isinstance(result, SupportResults)
    expected = FindSupports(source, target).adj_based_search(cutoff)
    ptr = result.supports_ptr
    assert len(ptr) == target.nverts + 1
    assert ptr[0] == 0
    assert ptr[-1] == len(result.supports_idx)
    assert np.all(np.diff(ptr) >= 0)
    for t, found in enumerate(expected):
        assert result.supports_idx[ptr[t]:ptr[t + 1]].tolist() == found


def test_target_outside_source_raises(source):
    outside = TriangleMesh(
        np.array([(5.0, 5.0), (6.0, 5.0), (5.0, 6.0)]), np.array([(0, 1, 2)])
    )
    with pytest.raises(ValueError):
        FindSupports(source, outside).adj_based_search(0.1)