import logging
from dataclasses import dataclass

import numpy as np

from utils.common.errors import DegenerateFitError
from utils.data.dataset_utils import Dataset

logger = logging.getLogger(__name__)

N_COEFFICIENTS = 3  # intercept, x, y


@dataclass(frozen=True)
class LinearFit:
    bias: float
    weight_x: float
    weight_y: float
    n_obs: int

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Fitted values bias + w_x * x + w_y * y for X of shape (N, 2). Not clipped to [0, 1]."""
        X = np.asarray(X, dtype=float).reshape(-1, 2)
        return self.bias + self.weight_x * X[:, 0] + self.weight_y * X[:, 1]

    def predict(self, X: np.ndarray) -> np.ndarray:
        return (self.predict_proba(X) >= 0.5).astype(int)


def _design_matrix(dataset: Dataset) -> np.ndarray:
    coords = dataset.coordinates()
    return np.column_stack((np.ones(len(coords)), coords))


def fit_linear_probability_model(dataset: Dataset) -> LinearFit:
    """
    Ordinary least squares of `value` on an intercept, `x` and `y`.

    Solved through a QR decomposition of the design matrix [1, x, y]
    rather than the normal equations.

    Raises
    ------
    DegenerateFitError
        If there are fewer observations than coefficients, the design
        matrix is rank deficient (e.g. collinear or constant predictors),
        or the solve produces non-finite coefficients.
    """
    n = len(dataset)
    if n < N_COEFFICIENTS:
        raise DegenerateFitError(
            f"Need at least {N_COEFFICIENTS} observations to fit, got {n}"
        )

    A = _design_matrix(dataset)
    b = dataset.values().astype(float)

    rank = np.linalg.matrix_rank(A)
    if rank < N_COEFFICIENTS:
        raise DegenerateFitError(
            f"Design matrix is rank deficient (rank {rank} < {N_COEFFICIENTS}); "
            "predictors are collinear or constant"
        )

    q, r = np.linalg.qr(A)
    coef = np.linalg.solve(r, q.T @ b)

    if not np.all(np.isfinite(coef)):
        raise DegenerateFitError(f"Least-squares solve produced non-finite coefficients: {coef}")

    fit = LinearFit(
        bias=float(coef[0]),
        weight_x=float(coef[1]),
        weight_y=float(coef[2]),
        n_obs=n,
    )
    logger.debug(
        "LPM fit on %d rows: bias=%.6f, w_x=%.6f, w_y=%.6f",
        n, fit.bias, fit.weight_x, fit.weight_y,
    )
    return fit
