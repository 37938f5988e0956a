# pcms

Building blocks for coupling physics codes that run on different meshes. The package covers geometry, bookkeeping and interpolation kernels. All of it works on in-memory arrays.

## Modules

- `pcms.value_types`: `ValueType` (`REAL`, `LO`, `GO`) with a numpy `dtype` for each. `type_enum_from_value` gives the kind of a Python scalar, a numpy value, an array or a dtype.
- `pcms.bounding_box`: `AABBox`, an axis-aligned box stored as a center and a half width. `AABBox.from_bounds` builds one from its corners. `intersects(a, b)` tests whether two boxes overlap. Boxes that only touch count as overlapping.
- `pcms.uniform_grid`: `UniformGrid`, a 2D grid over a rectangle. It has `num_cells()` and `closest_cell_id(point)`; a point outside the grid gets the nearest cell. It also has `cell_bbox(idx)`, `two_d_cell_index(idx)` and `cell_index(i, j)`. Cells are numbered row by row. `cell_index` raises `IndexError` for a cell outside the grid.
- `pcms.array_mask`: `ArrayMask` takes a mask of 0/1 flags. `apply(data, permutation=None)` returns the active entries. `to_full_array(filtered, output, permutation=None)` writes filtered data back into `output` in place. It also has `size()`, `is_empty()` and `index_map()`.
- `pcms.point_search`:
  - `TriangleMesh` holds vertex coordinates and triangle connectivity.
  - Geometry tests: `triangle_intersects_bbox`, `line_intersects_bbox`, `within_bbox`, `bbox_verts_within_triangle`, `triangle_bbox`, `barycentric_from_global`, `is_barycentric_inside` and `construct_intersection_map`.
  - `GridPointSearch(mesh, nx, ny)` lays a uniform grid over the mesh. Calling it returns a `SearchResult(tri_id, parametric_coords)` for each point. `tri_id` is `-1` when no triangle contains the point.
- `pcms.adj_search`: `search_neighbors(source_mesh, target_mesh, cutoff_distance)` returns the supports of each target vertex as compressed rows in `SupportResults(supports_ptr, supports_idx)`. The supports of a target vertex are the source vertices it reaches by a breadth-first walk over mesh adjacency, starting from the vertices of the triangle that contains it. The cutoff is compared with squared distances. A target vertex outside the source mesh raises `ValueError`. `FindSupports` and `calculate_distance` are also available.
- `pcms.reverse_classification`:
  - `ReverseClassificationVertex` maps geometric entities (`DimID(dim, id)`) to the ordered vertex ids on them. It has `insert`, `insert_many`, `query`, `serialize`, `deserialize` and `total_verts`, and supports iteration, equality and a text form through `str()`.
  - `read_reverse_classification_vertex` reads that text form from a path or a text stream.
  - `construct_rc_from_classification` builds one from per-vertex classification arrays, with `IndexBase.ZERO` or `IndexBase.ONE`.
- `pcms.field_communicator`: builds message layouts and permutations for exchanging field data between ranks. Functions: `OutMessage`, `construct_out_message`, `construct_out_message_from_layout`, `construct_permutation`, `construct_gid_permutation`, `count_entries` and `has_duplicates`.
- `pcms.dummy_field_adapter`: `DummyFieldAdapter`, an adapter with no entries. It has no gids and an empty partition map, and it serializes nothing.
- `pcms.class_partition`: `class_partition_from_classification` assigns dimension-1 model entities to parts so each part holds roughly the same number of vertices. `format_class_partition` writes the result as text: a count line, then one `face part` line per entity.
- `pcms.mls`: kernels for moving least squares. `sample_function`, `basis_poly`, `rbf`, `vandermonde_matrix`, `phi_vector`, `pt_phi_matrix`, `mat_mat_mul`, `mat_vec_mul`, `dot_product`, and `inverse_matrix`, which inverts a symmetric positive definite matrix through its Cholesky factor.
- `pcms.linear_interpolant`: locates points on a regular grid and gives their linear basis weights. `find_indices`, `find_limits`, `evaluate_parametric_coord`, `basis_function`, `parametric_indices` (returns a `ParametricResult`) and `sum_function`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from pcms.uniform_grid import UniformGrid

grid = UniformGrid(edge_length=(10.0, 12.0), bot_left=(0.0, 0.0), divisions=(10, 12))
grid.num_cells()                  # 120
grid.closest_cell_id((1.5, 0.0))  # 1
grid.cell_bbox(119).center        # (9.5, 11.5)
```

```python
import io
from pcms.reverse_classification import DimID, read_reverse_classification_vertex

text = "3\n0 1\n1 2 -1\n1 4\n3\n"
rc = read_reverse_classification_vertex(io.StringIO(text))
rc.query(DimID(0, 1))             # (0, 1)
rc.query(DimID(1, 4))             # (2,)
```

## What the package does not do

The package does no communication between processes. `pcms.field_communicator` computes the layouts and permutations but sends nothing. It does not read or write mesh files: meshes are passed in as `TriangleMesh` arrays. It has no command-line tools.