"""Axis-aligned bounding boxes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class AABBox:
    """Axis-aligned box given by its center and half width in each direction."""

    center: tuple[float, ...]
    half_width: tuple[float, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", tuple(float(c) for c in self.center))
        object.__setattr__(
            self, "half_width", tuple(float(h) for h in self.half_width)
        )
        if len(self.center) != len(self.half_width):
            raise ValueError("center and half_width must have the same dimension")

    @property
    def dim(self) -> int:
        return len(self.center)

    @classmethod
    def from_bounds(cls, lower: Sequence[float], upper: Sequence[float]) -> "AABBox":
        """Build a box from its lower and upper corners."""
        return cls(
            center=tuple((lo + hi) / 2.0 for lo, hi in zip(lower, upper)),
            half_width=tuple((hi - lo) / 2.0 for lo, hi in zip(lower, upper)),
        )


def intersects(a: AABBox, b: AABBox) -> bool:
    """True if the two boxes overlap or touch."""
    if a.dim != b.dim:
        raise ValueError("boxes must have the same dimension")
    return all(
        abs(ca - cb) <= ha + hb
        for ca, cb, ha, hb in zip(a.center, b.center, a.half_width, b.half_width)
    )