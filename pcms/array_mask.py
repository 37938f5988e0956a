"""Masks that select the active entries of an array."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import numpy as np

from .value_types import LO_DTYPE


class ArrayMask:
    """Maps a full array onto the compact array of its active entries.

    The mask holds 1 for entries to include and 0 for entries to exclude.
    Internally each active entry stores its one-based position in the
    filtered array, and inactive entries store 0.
    """

    def __init__(self, mask: Optional[Sequence[int]] = None) -> None:
        if mask is None:
            self._index_map = np.zeros(0, dtype=LO_DTYPE)
            self._num_active = 0
            return
        flags = np.asarray(mask)
        if flags.ndim != 1:
            raise ValueError("mask must be one dimensional")
        if not np.all((flags == 0) | (flags == 1)):
            raise ValueError("mask entries must be 0 or 1")
        active = flags.astype(LO_DTYPE)
        self._index_map = np.cumsum(active, dtype=LO_DTYPE) * active
        self._num_active = int(active.sum())

    def is_empty(self) -> bool:
        return self._num_active == 0

    def __bool__(self) -> bool:
        return not self.is_empty()

    def size(self) -> int:
        """Number of active entries."""
        return self._num_active

    def index_map(self) -> np.ndarray:
        """Read-only view: entry minus one is the filtered position, 0 if inactive."""
        view = self._index_map.view()
        view.flags.writeable = False
        return view

    def _positions(self) -> tuple[np.ndarray, np.ndarray]:
        active = np.nonzero(self._index_map)[0]
        return active, self._index_map[active] - 1

    @staticmethod
    def _permutation(permutation: Optional[Sequence[int]]) -> Optional[np.ndarray]:
        if permutation is None or len(permutation) == 0:
            return None
        return np.asarray(permutation, dtype=np.intp)

    def apply(
        self, data: Sequence[Any], permutation: Optional[Sequence[int]] = None
    ) -> np.ndarray:
        """Return the active entries of ``data``, optionally placed by ``permutation``."""
        if self.is_empty():
            raise ValueError("cannot apply an empty mask")
        values = np.asarray(data)
        if len(values) != len(self._index_map):
            raise ValueError("data size does not match mask size")
        filtered = np.zeros(self._num_active, dtype=values.dtype)
        active, idx = self._positions()
        perm = self._permutation(permutation)
        if perm is not None:
            idx = perm[idx]
        filtered[idx] = values[active]
        return filtered

    def to_full_array(
        self,
        filtered_data: Sequence[Any],
        output_array: Any,
        permutation: Optional[Sequence[int]] = None,
    ) -> Any:
        """Write filtered data back into the active entries of ``output_array``.

        ``output_array`` is modified in place and returned. With an empty mask
        the filtered data is copied over whole.
        """
        if self.is_empty():
            if filtered_data is not output_array:
                if len(output_array) != len(filtered_data):
                    raise ValueError("output size does not match filtered size")
                output_array[:] = filtered_data
            return output_array
        if len(output_array) != len(self._index_map):
            raise ValueError("output size does not match mask size")
        if len(filtered_data) != self._num_active:
            raise ValueError("filtered size does not match number of active entries")
        perm = self._permutation(permutation)
        if perm is not None and len(perm) != len(filtered_data):
            raise ValueError("permutation size does not match filtered size")
        values = np.asarray(filtered_data)
        active, idx = self._positions()
        if perm is not None:
            idx = perm[idx]
        if isinstance(output_array, np.ndarray):
            output_array[active] = values[idx]
        else:
            for position, value in zip(active.tolist(), values[idx].tolist()):
                output_array[position] = value
        return output_array