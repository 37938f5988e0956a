import pytest

from pcms.field_communicator import (
    construct_gid_permutation,
    construct_out_message,
    construct_out_message_from_layout,
    construct_permutation,
    count_entries,
    has_duplicates,
)

REVERSE = {3: [1, 4], 1: [0, 2, 5], 7: [3]}


def test_out_message_dest_sorted_and_offsets_match_counts():
    out = construct_out_message(REVERSE)
    assert out.dest == sorted(REVERSE)
    assert out.offset[0] == 0
    assert out.offset[-1] == count_entries(REVERSE)
    counts = [b - a for a, b in zip(out.offset, out.offset[1:])]
    assert counts == [len(REVERSE[r]) for r in out.dest]


def test_out_message_empty():
    out = construct_out_message({})
    assert out.dest == []
    assert out.offset == [0]


def test_count_entries():
    assert count_entries(REVERSE) == sum(len(v) for v in REVERSE.values())


def test_permutation_is_permutation_and_groups_by_rank():
    perm = construct_permutation(REVERSE)
    assert sorted(perm) == list(range(count_entries(REVERSE)))
    out = construct_out_message(REVERSE)
    for block, rank in enumerate(out.dest):
        positions = [perm[idx] for idx in REVERSE[rank]]
        assert positions == list(range(out.offset[block], out.offset[block + 1]))


def test_permutation_rejects_out_of_range():
    with pytest.raises(ValueError):
        construct_permutation({0: [0, 2]})


def test_gid_permutation_maps_received_to_local():
    local = [10, 40, 20, 30]
    received = [30, 10, 20, 40]
    perm = construct_gid_permutation(local, received)
    assert [local[p] for p in perm] == received


def test_gid_permutation_errors():
    with pytest.raises(ValueError):
        construct_gid_permutation([1, 2], [1])
    with pytest.raises(ValueError):
        construct_gid_permutation([1, 2], [1, 3])


def test_layout_two_senders_rank0():
    out = construct_out_message_from_layout(0, 2, [0, 0, 4, 8], [0, 9, 24])
    assert out.dest == [0, 1]
    assert out.offset == [0, 4, 9]


def test_layout_two_senders_rank1():
    out = construct_out_message_from_layout(1, 2, [0, 0, 4, 8], [0, 9, 24])
    assert out.dest == [0, 1]
    assert out.offset == [0, 8, 15]


def test_layout_skips_silent_sender():
    out = construct_out_message_from_layout(0, 2, [0, 0, 0, 3], [0, 5, 9])
    assert out.dest == [1]
    assert out.offset[0] == 0
    assert out.offset[-1] == 5


def test_layout_requires_sources():
    with pytest.raises(ValueError):
        construct_out_message_from_layout(0, 2, [], [0, 0, 0])


def test_has_duplicates():
    assert has_duplicates([3, 1, 2, 3])
    assert not has_duplicates([3, 1, 2])
    assert not has_duplicates([])