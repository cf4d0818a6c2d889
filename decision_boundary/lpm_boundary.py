import logging
from dataclasses import dataclass, field
from typing import Optional

from utils.common.errors import DegenerateFitError
from utils.data.dataset_utils import Dataset
from utils.models.linear_probability_model import LinearFit, fit_linear_probability_model

logger = logging.getLogger(__name__)

WEIGHT_Y_EPS = 1e-12
DECISION_THRESHOLD = 0.5


@dataclass(frozen=True)
class BoundaryLine:
    x1: float
    y1: float
    x2: float
    y2: float
    slope: float
    intercept: float
    label: str
    fit: Optional[LinearFit] = field(default=None, compare=False, repr=False)

    @property
    def xs(self) -> tuple[float, float]:
        return self.x1, self.x2

    @property
    def ys(self) -> tuple[float, float]:
        return self.y1, self.y2


def boundary_from_fit(fit: LinearFit, x1: float, x2: float, label: str) -> BoundaryLine:
    """
    Segment of the line where the fitted value equals 0.5, spanning [x1, x2].

    Solving bias + w_x * x + w_y * y = 0.5 for y gives
    y = (0.5 - bias) / w_y - (w_x / w_y) * x.

    Args:
        fit: Fitted linear probability model.
        x1: x-coordinate of the first endpoint.
        x2: x-coordinate of the second endpoint.
        label: Name attached to the line (used as legend entry).

    Raises:
        DegenerateFitError: if the weight on y is zero, i.e. the boundary
            is vertical or undefined in (x, y) plot space.
    """
    if abs(fit.weight_y) < WEIGHT_Y_EPS:
        raise DegenerateFitError(
            f"Weight on y is zero ({fit.weight_y!r}); boundary cannot be expressed as y = f(x)"
        )

    slope = -fit.weight_x / fit.weight_y
    intercept = (DECISION_THRESHOLD - fit.bias) / fit.weight_y

    return BoundaryLine(
        x1=x1,
        y1=intercept + slope * x1,
        x2=x2,
        y2=intercept + slope * x2,
        slope=slope,
        intercept=intercept,
        label=label,
        fit=fit,
    )


def calculate_boundary(dataset: Dataset, x1: float, x2: float, label: str) -> BoundaryLine:
    """Fit the LPM on `dataset` and return its decision boundary over [x1, x2]."""
    fit = fit_linear_probability_model(dataset)
    line = boundary_from_fit(fit, x1, x2, label)
    logger.debug(
        "%s: y = %.4f + %.4f * x (fitted on %d rows)",
        label, line.intercept, line.slope, fit.n_obs,
    )
    return line
