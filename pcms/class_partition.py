"""Split geometric model faces into parts holding roughly equal numbers of vertices."""

from __future__ import annotations

from itertools import accumulate
from typing import Iterable, Sequence


def class_partition_from_classification(
    class_dims: Sequence[int], class_ids: Sequence[int], nparts: int
) -> list[tuple[int, int]]:
    """Assign each model face to a part from per-vertex classification.

    Faces are the geometric entities of dimension 1, taken in ascending id
    order and numbered from 1. Parts are filled in order until the running
    vertex count exceeds the share of the next part. Returns ``(face, part)``
    pairs.
    """
    if len(class_dims) != len(class_ids):
        raise ValueError("class_dims and class_ids must have the same length")
    if nparts <= 0:
        raise ValueError("nparts must be positive")
    counts: list[dict[int, int]] = [{}, {}, {}]
    for dim, class_id in zip(class_dims, class_ids):
        if not 0 <= dim <= 2:
            raise ValueError(f"classification dimension {dim} is outside 0..2")
        per_dim = counts[dim]
        per_dim[class_id] = per_dim.get(class_id, 0) + 1
    if counts[2]:
        raise ValueError("vertices must not be classified on dimension 2")
    faces = sorted(counts[1])
    if not faces:
        raise ValueError("no vertices are classified on dimension 1")
    verts_per_face = list(accumulate(counts[1][face] for face in faces))
    verts_per_part = verts_per_face[-1] // nparts
    assignments = []
    part = 0
    for number, running in enumerate(verts_per_face, start=1):
        assignments.append((number, part))
        if running > verts_per_part * (part + 1):
            part += 1
    return assignments


def format_class_partition(assignments: Iterable[tuple[int, int]]) -> str:
    """Text form: the number of faces, then one ``face part`` line per face."""
    pairs = list(assignments)
    lines = [f"{len(pairs)}\n"]
    lines.extend(f"{face} {part}\n" for face, part in pairs)
    return "".join(lines)