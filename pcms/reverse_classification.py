"""Reverse classification: which mesh vertices lie on each geometric entity."""

from __future__ import annotations

import enum
import io
import os
import re
from dataclasses import dataclass
from typing import IO, Iterable, Iterator, Optional, Sequence, Union

_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True, order=True)
class DimID:
    """A geometric entity identified by its dimension and id."""

    dim: int
    id: int


class IndexBase(enum.IntEnum):
    """Whether vertex numbers start at zero or at one."""

    ZERO = 0
    ONE = 1


class ReverseClassificationVertex:
    """Sets of mesh vertex ids keyed by the geometric entity they are classified on.

    Vertex ids of each entity are kept ordered, so iteration yields them in
    ascending order.
    """

    def __init__(self) -> None:
        self._data: dict[DimID, set[int]] = {}
        self._total_verts = 0

    def insert(self, key: DimID, data: int) -> None:
        """Add one vertex to a geometric entity."""
        self._data.setdefault(key, set()).add(int(data))
        self._total_verts += 1

    def insert_many(self, key: DimID, data: Iterable[int]) -> None:
        """Add several vertices to a geometric entity."""
        for vertex in data:
            self.insert(key, vertex)

    def serialize(self) -> list[int]:
        """Flatten to ``[dim, id, count, vertices...]`` for each entity."""
        serialized: list[int] = []
        for key, verts in self:
            serialized.extend((key.dim, key.id, len(verts)))
            serialized.extend(verts)
        return serialized

    @classmethod
    def deserialize(cls, serialized_data: Sequence[int]) -> "ReverseClassificationVertex":
        """Rebuild a reverse classification from the output of :meth:`serialize`."""
        rc = cls()
        values = [int(v) for v in serialized_data]
        i = 0
        while i < len(values):
            if i + 3 > len(values):
                raise ValueError("serialized data ends inside an entity header")
            key = DimID(values[i], values[i + 1])
            nverts = values[i + 2]
            i += 3
            if nverts < 0 or i + nverts > len(values):
                raise ValueError("serialized data ends inside an entity's vertices")
            verts = rc._data.setdefault(key, set())
            verts.update(values[i : i + nverts])
            if len(verts) != nverts:
                raise ValueError(f"entity {key} has duplicate or repeated vertices")
            i += nverts
        rc._total_verts = sum(len(v) for v in rc._data.values())
        return rc

    def query(self, geometry: DimID) -> Optional[tuple[int, ...]]:
        """Ascending vertex ids on a geometric entity, or None if it is unknown."""
        verts = self._data.get(geometry)
        if verts is None:
            return None
        return tuple(sorted(verts))

    def total_verts(self) -> int:
        """Number of insertions made, counting repeated vertices."""
        return self._total_verts

    def __iter__(self) -> Iterator[tuple[DimID, tuple[int, ...]]]:
        for key, verts in self._data.items():
            yield key, tuple(sorted(verts))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReverseClassificationVertex):
            return NotImplemented
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        """Text form with one-based vertex numbers, as read by
        :func:`read_reverse_classification_vertex`."""
        out = [f"{self._total_verts}\n"]
        for key, verts in self:
            out.append(f"{key.dim} {key.id}\n")
            out.append("".join(f"{v + 1} " for v in verts))
            out.append("\n")
        return "".join(out)


def _leading_ints(line: str) -> Iterator[int]:
    pos = 0
    while True:
        match = _INT.match(line, pos)
        if match is None:
            return
        pos = match.end()
        yield int(match.group(1))


def _parse(text: str) -> ReverseClassificationVertex:
    rc = ReverseClassificationVertex()
    header = _INT.match(text, 0)
    if header is None:
        return rc
    pos = header.end()
    while True:
        dim_match = _INT.match(text, pos)
        if dim_match is None:
            break
        pos = dim_match.end()
        if pos == len(text):
            break
        id_match = _INT.match(text, pos)
        if id_match is None:
            break
        key = DimID(int(dim_match.group(1)), int(id_match.group(1)))
        pos = id_match.end()
        end = text.find("\n", pos)
        pos = len(text) if end < 0 else end + 1
        end = text.find("\n", pos)
        if end < 0:
            end = len(text)
        line = text[pos:end]
        pos = min(end + 1, len(text))
        for node in _leading_ints(line):
            # files number vertices from one
            if node >= 0:
                rc.insert(key, node - 1)
    return rc


def read_reverse_classification_vertex(
    source: Union[str, "os.PathLike[str]", IO[str]],
) -> ReverseClassificationVertex:
    """Read a reverse classification from a file path or an open text stream.

    The format is the total vertex count, then for each geometric entity a
    line ``dim id`` followed by a line of one-based vertex numbers. Negative
    numbers are skipped.
    """
    if isinstance(source, (str, os.PathLike)):
        with open(source, encoding="utf-8") as infile:
            return _parse(infile.read())
    if isinstance(source, io.TextIOBase) or hasattr(source, "read"):
        return _parse(source.read())
    raise TypeError("source must be a path or a text stream")


def construct_rc_from_classification(
    class_dims: Sequence[int],
    class_ids: Sequence[int],
    vertex_ids: Sequence[int],
    index_base: IndexBase = IndexBase.ONE,
) -> ReverseClassificationVertex:
    """Build a reverse classification from per-vertex classification arrays.

    With ``IndexBase.ONE`` the vertex ids must be positive and are shifted to
    start at zero.
    """
    if not len(class_dims) == len(class_ids) == len(vertex_ids):
        raise ValueError("classification arrays must have the same length")
    rc = ReverseClassificationVertex()
    for dim, class_id, vertex in zip(class_dims, class_ids, vertex_ids):
        key = DimID(int(dim), int(class_id))
        if index_base == IndexBase.ZERO:
            rc.insert(key, vertex)
        else:
            if vertex <= 0:
                raise ValueError("one-based vertex ids must be positive")
            rc.insert(key, vertex - 1)
    return rc