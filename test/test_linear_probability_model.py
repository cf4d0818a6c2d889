import numpy as np
import pytest

from utils.common.errors import DegenerateFitError
from utils.data import Dataset, Observation, assemble_datasets
from utils.models import LinearFit, fit_linear_probability_model


def _dataset(xs, ys, values):
    return Dataset(Observation(float(x), float(y), int(v), "g") for x, y, v in zip(xs, ys, values))


def test_fit_matches_reference_least_squares():
    ds = assemble_datasets(40, 4, "A", "B", np.random.default_rng(10)).with_extremes
    fit = fit_linear_probability_model(ds)

    A = np.column_stack((np.ones(len(ds)), ds.coordinates()))
    ref, *_ = np.linalg.lstsq(A, ds.values().astype(float), rcond=None)

    np.testing.assert_allclose([fit.bias, fit.weight_x, fit.weight_y], ref, rtol=1e-8, atol=1e-9)
    assert fit.n_obs == 44


def test_fit_recovers_exact_linear_relation():
    # value == 1 - y for y in {0, 1}, independent of x
    ds = _dataset([0, 1, 2, 3], [1, 0, 1, 0], [0, 1, 0, 1])
    fit = fit_linear_probability_model(ds)

    assert fit.bias == pytest.approx(1.0)
    assert fit.weight_x == pytest.approx(0.0, abs=1e-12)
    assert fit.weight_y == pytest.approx(-1.0)


def test_too_few_observations_raise():
    ds = _dataset([0, 1], [0, 1], [0, 1])
    with pytest.raises(DegenerateFitError):
        fit_linear_probability_model(ds)


def test_collinear_predictors_raise():
    xs = np.arange(6, dtype=float)
    ds = _dataset(xs, 2 * xs + 1, [0, 0, 0, 1, 1, 1])
    with pytest.raises(DegenerateFitError):
        fit_linear_probability_model(ds)


def test_constant_predictor_raises():
    ds = _dataset([3, 3, 3, 3], [0, 1, 2, 3], [0, 0, 1, 1])
    with pytest.raises(DegenerateFitError):
        fit_linear_probability_model(ds)


def test_predict_thresholds_at_one_half():
    fit = LinearFit(bias=0.0, weight_x=0.0, weight_y=1.0, n_obs=3)
    X = np.array([[0.0, 0.2], [5.0, 0.5], [-1.0, 0.9]])

    np.testing.assert_allclose(fit.predict_proba(X), [0.2, 0.5, 0.9])
    np.testing.assert_array_equal(fit.predict(X), [0, 1, 1])
