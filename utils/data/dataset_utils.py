from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Tuple

import numpy as np
import pandas as pd

from utils.common.errors import InvalidParameterError
from utils.common.file_utils import atomic_output_path

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["x", "y", "value", "group"]


@dataclass(frozen=True)
class Observation:
    x: float
    y: float
    value: int
    group: str


@dataclass(frozen=True)
class SubsetParams:
    """
    Parameters of one bivariate normal subset.

    Parameters
    ----------
    count : int
        Number of observations to draw.
    mean_x, mean_y : float
        Means of the two coordinates.
    sd_x, sd_y : float
        Standard deviations of the two coordinates (must be > 0).
    rho : float
        Correlation between x and y, in [-1, 1].
    value : int
        Binary class (0/1) attached to every observation.
    label : str
        Group name attached to every observation.
    """

    count: int
    mean_x: float
    mean_y: float
    sd_x: float
    sd_y: float
    rho: float
    value: int
    label: str

    def validate(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, (int, np.integer)):
            raise InvalidParameterError(f"count must be an integer, got {self.count!r}")
        if self.count < 0:
            raise InvalidParameterError(f"count must be >= 0, got {self.count}")
        for name in ("mean_x", "mean_y"):
            if not math.isfinite(getattr(self, name)):
                raise InvalidParameterError(f"{name} must be finite, got {getattr(self, name)}")
        for name in ("sd_x", "sd_y"):
            sd = getattr(self, name)
            if not math.isfinite(sd) or sd <= 0:
                raise InvalidParameterError(f"{name} must be finite and > 0, got {sd}")
        if not math.isfinite(self.rho) or abs(self.rho) > 1:
            raise InvalidParameterError(
                f"rho must lie in [-1, 1], got {self.rho} (covariance not positive semi-definite)"
            )
        if self.value not in (0, 1):
            raise InvalidParameterError(f"value must be 0 or 1, got {self.value!r}")

    @property
    def mean(self) -> np.ndarray:
        return np.array([self.mean_x, self.mean_y], dtype=float)

    @property
    def covariance(self) -> np.ndarray:
        cov = self.rho * self.sd_x * self.sd_y
        return np.array(
            [[self.sd_x ** 2, cov],
             [cov, self.sd_y ** 2]],
            dtype=float,
        )


class Dataset:
    """Ordered, immutable sequence of observations."""

    def __init__(self, observations: Iterable[Observation] = ()):
        self._observations: Tuple[Observation, ...] = tuple(observations)

    def __len__(self) -> int:
        return len(self._observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self._observations)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Dataset(self._observations[index])
        return self._observations[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Dataset):
            return NotImplemented
        return self._observations == other._observations

    def __repr__(self) -> str:
        return f"Dataset(n={len(self)})"

    @property
    def observations(self) -> Tuple[Observation, ...]:
        return self._observations

    @classmethod
    def concat(cls, *datasets: "Dataset") -> "Dataset":
        rows = []
        for ds in datasets:
            rows.extend(ds.observations)
        return cls(rows)

    def coordinates(self) -> np.ndarray:
        """(N, 2) float array of (x, y)."""
        if not self._observations:
            return np.empty((0, 2), dtype=float)
        return np.array([(o.x, o.y) for o in self._observations], dtype=float)

    def values(self) -> np.ndarray:
        return np.array([o.value for o in self._observations], dtype=int)

    def groups(self) -> list[str]:
        return [o.group for o in self._observations]

    def to_frame(self) -> pd.DataFrame:
        coords = self.coordinates()
        return pd.DataFrame(
            {
                "x": coords[:, 0],
                "y": coords[:, 1],
                "value": self.values(),
                "group": self.groups(),
            },
            columns=CSV_COLUMNS,
        )


def generate_subset(params: SubsetParams, rng: np.random.Generator) -> Dataset:
    """
    Draw `params.count` observations from a bivariate normal distribution.

    Parameters
    ----------
    params : SubsetParams
        Distribution parameters, class value and group label.
    rng : np.random.Generator
        Caller-owned generator; it is advanced by the draw.

    Returns
    -------
    Dataset
        Exactly `params.count` observations, each carrying `params.value`
        and `params.label`.
    """
    params.validate()

    if params.count == 0:
        return Dataset()

    samples = rng.multivariate_normal(params.mean, params.covariance, size=int(params.count))
    logger.debug(
        "Generated %d points for %r (mean=(%s, %s), rho=%s)",
        params.count, params.label, params.mean_x, params.mean_y, params.rho,
    )

    value = int(params.value)
    return Dataset(
        Observation(x=float(px), y=float(py), value=value, group=params.label)
        for px, py in samples
    )


def save_dataset_to_csv(dataset: Dataset, csv_path: str | Path) -> Path:
    """
    Save a dataset to CSV with header `x,y,value,group` and no index column.

    An existing file at `csv_path` is replaced. The file is written to a
    temporary path first, so a failure never leaves a partial CSV behind.

    Returns
    -------
    Path
        Path to the saved CSV file.
    """
    csv_path = Path(csv_path)

    with atomic_output_path(csv_path) as tmp_path:
        dataset.to_frame().to_csv(tmp_path, index=False)

    logger.info("Wrote %d rows to %s", len(dataset), csv_path)
    return csv_path


def load_dataset_from_csv(csv_path: str | Path) -> Dataset:
    """
    Load a dataset written by `save_dataset_to_csv`.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Data file not found at {csv_path}")

    df = pd.read_csv(csv_path, dtype={"group": str}, float_precision="round_trip")

    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise InvalidParameterError(f"{csv_path} is missing columns: {missing}")

    return Dataset(
        Observation(x=float(row.x), y=float(row.y), value=int(row.value), group=str(row.group))
        for row in df[CSV_COLUMNS].itertuples(index=False)
    )
