"""Field adapter for ranks that take part in a coupling but hold no data."""

from __future__ import annotations

from typing import Any, Optional, Sequence


class DummyFieldAdapter:
    """Adapter with no entries: no gids, no partition and nothing to serialize."""

    value_type = int

    def gids(self) -> list[int]:
        return []

    def reverse_partition_map(self, partition: Any) -> dict[int, list[int]]:
        """Map of destination rank to local indices; empty, since there are no entries."""
        reverse: dict[int, list[int]] = {}
        for index, gid in enumerate(self.gids()):
            reverse.setdefault(partition(gid), []).append(index)
        return reverse

    def serialize(
        self, buffer: Optional[Sequence[Any]] = None, permutation: Optional[Sequence[int]] = None
    ) -> int:
        """Number of values written, always zero."""
        return len(self.gids())

    def deserialize(
        self, buffer: Optional[Sequence[Any]] = None, permutation: Optional[Sequence[int]] = None
    ) -> int:
        """Accept incoming data and ignore it; returns the number of values used, zero."""
        return len(self.gids())