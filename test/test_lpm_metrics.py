import pytest

from evaluation import misclassification_rate
from utils.common.errors import InvalidParameterError
from utils.data import Dataset, Observation
from utils.models import LinearFit


def test_counts_points_on_the_wrong_side():
    # predicts class 1 when y >= 0.5
    fit = LinearFit(bias=0.0, weight_x=0.0, weight_y=1.0, n_obs=4)
    ds = Dataset([
        Observation(0.0, 0.0, 0, "a"),
        Observation(0.0, 1.0, 1, "b"),
        Observation(0.0, 2.0, 0, "a"),  # wrong
        Observation(0.0, -1.0, 1, "b"),  # wrong
    ])

    assert misclassification_rate(fit, ds) == pytest.approx(0.5)


def test_empty_dataset_raises():
    fit = LinearFit(bias=0.0, weight_x=0.0, weight_y=1.0, n_obs=4)
    with pytest.raises(InvalidParameterError):
        misclassification_rate(fit, Dataset())
