import numpy as np
import pytest

from utils.common.errors import InvalidParameterError
from utils.data import assemble_datasets, split_count


@pytest.mark.parametrize(
    "n, expected",
    [
        (0, (0, 0)),
        (1, (0, 1)),  # round(0.5) == 0
        (2, (1, 1)),
        (3, (2, 1)),  # round(1.5) == 2
        (5, (2, 3)),  # round(2.5) == 2
        (7, (4, 3)),  # round(3.5) == 4
        (60, (30, 30)),
    ],
)
def test_split_count_rounds_half_to_even(n, expected):
    first, second = split_count(n)
    assert (first, second) == expected
    assert first + second == n
    assert first == round(n / 2)


@pytest.mark.parametrize("n", [-1, 2.0, True])
def test_split_count_rejects_bad_counts(n):
    with pytest.raises(InvalidParameterError):
        split_count(n)


def test_dataset_sizes_and_prefix_relation():
    sets = assemble_datasets(11, 3, "A", "B", np.random.default_rng(5))

    assert [len(sets.normals1), len(sets.normals2)] == [6, 5]
    assert [len(sets.extremes1), len(sets.extremes2)] == [2, 1]

    without = sets.without_extremes
    with_ext = sets.with_extremes
    assert len(without) == 11
    assert len(with_ext) == 14
    assert with_ext[: len(without)] == without
    assert with_ext[11:13] == sets.extremes1
    assert with_ext[13:] == sets.extremes2


def test_subsets_carry_class_and_label():
    sets = assemble_datasets(20, 4, "Group 1", "Group 2", np.random.default_rng(0))

    for subset, value, label in [
        (sets.normals1, 0, "Group 1"),
        (sets.normals2, 1, "Group 2"),
        (sets.extremes1, 0, "Group 1"),
        (sets.extremes2, 1, "Group 2"),
    ]:
        assert all(obs.value == value for obs in subset)
        assert all(obs.group == label for obs in subset)


def test_extremes_sit_far_from_the_bulk():
    sets = assemble_datasets(60, 20, "Group 1", "Group 2", np.random.default_rng(2))

    assert np.all(sets.extremes1.coordinates()[:, 1] > 25)
    assert np.all(sets.extremes2.coordinates()[:, 1] < -5)
    assert np.all(np.abs(sets.normals1.coordinates()[:, 1] - 12) < 10)


def test_no_extremes_means_both_datasets_match():
    sets = assemble_datasets(10, 0, "A", "B", np.random.default_rng(0))
    assert sets.with_extremes == sets.without_extremes


def test_same_seed_same_datasets():
    a = assemble_datasets(60, 2, "Group 1", "Group 2", np.random.default_rng(11111))
    b = assemble_datasets(60, 2, "Group 1", "Group 2", np.random.default_rng(11111))
    assert a.with_extremes == b.with_extremes


def test_negative_extreme_count_raises():
    with pytest.raises(InvalidParameterError):
        assemble_datasets(10, -2, "A", "B", np.random.default_rng(0))
