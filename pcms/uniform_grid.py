"""Two-dimensional uniform grid covering a rectangle."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .bounding_box import AABBox


@dataclass(frozen=True)
class UniformGrid:
    """Rectangle split into ``divisions[0]`` columns (x) and ``divisions[1]`` rows (y).

    Cells are numbered row by row: ``row * divisions[0] + column``.
    """

    edge_length: tuple[float, float]
    bot_left: tuple[float, float]
    divisions: tuple[int, int]

    dim = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, "edge_length", tuple(float(v) for v in self.edge_length))
        object.__setattr__(self, "bot_left", tuple(float(v) for v in self.bot_left))
        object.__setattr__(self, "divisions", tuple(int(v) for v in self.divisions))
        if not (len(self.edge_length) == len(self.bot_left) == len(self.divisions) == 2):
            raise ValueError("uniform grid is two dimensional")

    def num_cells(self) -> int:
        return math.prod(self.divisions)

    def closest_cell_id(self, point: Sequence[float]) -> int:
        """Id of the cell containing the point, or of the nearest cell if outside."""
        indexes = [0, 0]
        for i in range(self.dim):
            distance = point[i] - self.bot_left[i]
            # row/column order is the reverse of the x/y coordinate order
            if distance <= 0:
                index = 0
            elif distance >= self.edge_length[i]:
                index = self.divisions[i] - 1
            else:
                index = math.floor(distance * self.divisions[i] / self.edge_length[i])
            indexes[self.dim - (i + 1)] = index
        return self.cell_index(indexes[0], indexes[1])

    def cell_bbox(self, idx: int) -> AABBox:
        i, j = self.two_d_cell_index(idx)
        half_width = (
            self.edge_length[0] / (2.0 * self.divisions[0]),
            self.edge_length[1] / (2.0 * self.divisions[1]),
        )
        center = (
            (2.0 * j + 1.0) * half_width[0] + self.bot_left[0],
            (2.0 * i + 1.0) * half_width[1] + self.bot_left[1],
        )
        return AABBox(center=center, half_width=half_width)

    def two_d_cell_index(self, idx: int) -> tuple[int, int]:
        """Return ``(row, column)`` for a cell id."""
        return divmod(idx, self.divisions[0])

    def cell_index(self, i: int, j: int) -> int:
        """Cell id of row ``i`` and column ``j``."""
        if not (0 <= i < self.divisions[1] and 0 <= j < self.divisions[0]):
            raise IndexError(f"cell ({i}, {j}) is outside the grid")
        return i * self.divisions[0] + j