import pytest

from partsplit.libs.file_parts import (
    ExtraBytesPolicy,
    InvalidArgumentError,
    PartTooSmallError,
    SizeExceedsFileError,
    SplitByCount,
    SplitBySize,
    SplitPlan,
    plan_split,
)


@pytest.mark.parametrize(
    "file_size, request_, expected",
    [
        (10, SplitByCount(3), (4, 3, 3)),
        (11, SplitByCount(3), (4, 4, 3)),
        (12, SplitByCount(3), (4, 4, 4)),
        (10, SplitByCount(1), (10,)),
        (10, SplitByCount(10), (1,) * 10),
        (10, SplitBySize(3), (4, 3, 3)),
        (11, SplitBySize(3), (4, 4, 3)),
        (10, SplitBySize(4), (5, 5)),
        (29, SplitBySize(8), (10, 10, 9)),
        (10, SplitBySize(10), (10,)),
        (12, SplitBySize(4), (4, 4, 4)),
    ],
)
def test_distribute_spreads_remainder_front_loaded(file_size, request_, expected):
    plan = plan_split(file_size, request_)
    assert plan.part_sizes == expected
    assert plan.total_size == file_size


@pytest.mark.parametrize(
    "file_size, request_, expected",
    [
        (10, SplitByCount(3), (3, 3, 3, 1)),
        (12, SplitByCount(3), (4, 4, 4)),
        (10, SplitBySize(3), (3, 3, 3, 1)),
        (29, SplitBySize(8), (8, 8, 8, 5)),
        (16, SplitBySize(8), (8, 8)),
    ],
)
def test_new_file_appends_remainder_part(file_size, request_, expected):
    plan = plan_split(file_size, request_, ExtraBytesPolicy.NEW_FILE)
    assert plan.part_sizes == expected


def test_policy_accepts_string_value():
    assert plan_split(10, SplitByCount(3), "new_file").part_count == 4


def test_unknown_policy_is_rejected():
    with pytest.raises(InvalidArgumentError):
        plan_split(10, SplitByCount(3), "spread")


def test_large_file_by_count_scenario():
    file_size = 25 * 1024 * 1024
    base, remainder = divmod(file_size, 3)

    distributed = plan_split(file_size, SplitByCount(3))
    assert distributed.part_sizes == tuple(
        base + (1 if index < remainder else 0) for index in range(3)
    )

    new_file = plan_split(file_size, SplitByCount(3), ExtraBytesPolicy.NEW_FILE)
    assert new_file.part_sizes == (base, base, base, remainder)


def test_sizes_always_add_up_and_stay_fair():
    for file_size in range(1, 200):
        for count in range(1, file_size + 1, 7):
            for policy in ExtraBytesPolicy:
                plan = plan_split(file_size, SplitByCount(count), policy)
                assert sum(plan.part_sizes) == file_size
                assert all(size > 0 for size in plan.part_sizes)
        for size in range(1, file_size + 1, 5):
            plan = plan_split(file_size, SplitBySize(size))
            assert sum(plan.part_sizes) == file_size
            assert max(plan.part_sizes) - min(plan.part_sizes) <= 1
            assert list(plan.part_sizes) == sorted(plan.part_sizes, reverse=True)


def test_integral_float_is_accepted():
    assert plan_split(10, SplitByCount(2.0)).part_sizes == (5, 5)
    assert plan_split(10, SplitBySize(5.0)).part_sizes == (5, 5)


@pytest.mark.parametrize("count", [2.5, "2", True, None])
def test_non_integer_count_is_rejected(count):
    with pytest.raises(InvalidArgumentError, match="should be an integer"):
        plan_split(10, SplitByCount(count))


def test_non_integer_size_is_rejected():
    with pytest.raises(InvalidArgumentError, match="should be an integer"):
        plan_split(4096, SplitBySize(1024.5))


def test_zero_parts_is_rejected():
    with pytest.raises(InvalidArgumentError):
        plan_split(10, SplitByCount(0))


@pytest.mark.parametrize("size", [0, -1024])
def test_non_positive_size_is_rejected(size):
    with pytest.raises(InvalidArgumentError, match="negative or zero"):
        plan_split(10, SplitBySize(size))


def test_size_larger_than_file_is_rejected():
    with pytest.raises(SizeExceedsFileError, match="bigger than file size"):
        plan_split(10, SplitBySize(11))


def test_more_parts_than_bytes_is_rejected():
    with pytest.raises(PartTooSmallError, match="too large"):
        plan_split(10, SplitByCount(11))


def test_empty_file_cannot_be_planned():
    with pytest.raises(InvalidArgumentError):
        plan_split(0, SplitByCount(1))


def test_plan_rejects_zero_sized_part():
    with pytest.raises(PartTooSmallError):
        SplitPlan((3, 0, 2))
    with pytest.raises(InvalidArgumentError):
        SplitPlan(())


def test_plan_offsets():
    plan = SplitPlan((4, 3, 3))
    assert plan.part_count == 3
    assert plan.offsets() == (0, 4, 7)
