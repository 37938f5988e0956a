"""Message layouts and permutations for exchanging field data between ranks."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Mapping, Sequence

ReversePartitionMap = Mapping[int, Sequence[int]]


@dataclass
class OutMessage:
    """Destination ranks and the offset of each destination's block in the message."""

    dest: list[int] = field(default_factory=list)
    offset: list[int] = field(default_factory=list)


def construct_out_message(reverse_partition: ReversePartitionMap) -> OutMessage:
    """Layout that sends each rank's entries in ascending rank order."""
    out = OutMessage(offset=[0])
    for rank in sorted(reverse_partition):
        out.dest.append(rank)
        out.offset.append(out.offset[-1] + len(reverse_partition[rank]))
    return out


def count_entries(reverse_partition: ReversePartitionMap) -> int:
    """Total number of entries over all ranks."""
    return sum(len(indices) for indices in reverse_partition.values())


def construct_permutation(reverse_partition: ReversePartitionMap) -> list[int]:
    """Position in the outgoing message of each local entry.

    Entries are placed rank by rank in ascending rank order, each rank's
    entries in the order given.
    """
    num_entries = count_entries(reverse_partition)
    permutation = [0] * num_entries
    entry = 0
    for rank in sorted(reverse_partition):
        for idx in reverse_partition[rank]:
            if not 0 <= idx < num_entries:
                raise ValueError(f"index {idx} is outside 0..{num_entries - 1}")
            permutation[idx] = entry
            entry += 1
    return permutation


def construct_gid_permutation(
    local_gids: Sequence[int], received_gids: Sequence[int]
) -> list[int]:
    """Permutation ``p`` with ``local_gids[p[i]] == received_gids[i]``."""
    if len(local_gids) != len(received_gids):
        raise ValueError("local and received gids differ in length")
    if Counter(local_gids) != Counter(received_gids):
        raise ValueError("received gids are not a permutation of the local gids")
    global_to_local = {gid: i for i, gid in enumerate(local_gids)}
    return [global_to_local[gid] for gid in received_gids]


def construct_out_message_from_layout(
    rank: int, nproc: int, src_ranks: Sequence[int], offset: Sequence[int]
) -> OutMessage:
    """Reply layout built from the layout of an incoming message.

    ``src_ranks[i * nproc + r]`` is where sender ``i``'s data starts in rank
    ``r``'s incoming message and ``offset`` holds the start of each rank's
    message. Only senders that sent something become destinations.
    """
    if not src_ranks:
        raise ValueError("incoming layout has no source ranks")
    if nproc <= 0 or not 0 <= rank < nproc:
        raise ValueError("rank must lie in 0..nproc-1")
    n_app = len(src_ranks) // nproc
    if n_app == 0:
        raise ValueError("incoming layout has fewer source entries than ranks")
    sender_deg = [
        src_ranks[(i + 1) * nproc + rank] - src_ranks[i * nproc + rank]
        for i in range(n_app - 1)
    ]
    total = offset[rank + 1] - offset[rank]
    sender_deg.append(total - src_ranks[(n_app - 1) * nproc + rank])
    out = OutMessage()
    running = 0
    for sender, deg in enumerate(sender_deg):
        if deg > 0:
            out.dest.append(sender)
            out.offset.append(running)
            running += deg
    out.offset.append(running)
    return out


def has_duplicates(values: Sequence) -> bool:
    """True if any value occurs more than once."""
    ordered = sorted(values)
    return any(a == b for a, b in zip(ordered, ordered[1:]))