from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Tuple

import numpy as np

from utils.common.errors import InvalidParameterError
from utils.data.dataset_utils import Dataset, SubsetParams, generate_subset

logger = logging.getLogger(__name__)

# Bulk of each class: two elongated, well separated clouds.
NORMALS_GROUP1 = SubsetParams(count=0, mean_x=1, mean_y=12, sd_x=1.5, sd_y=1, rho=0.8, value=0, label="")
NORMALS_GROUP2 = SubsetParams(count=0, mean_x=2, mean_y=7, sd_x=1.5, sd_y=1, rho=0.9, value=1, label="")

# High-leverage outliers, far out along the y axis on the "correct" side of each class.
EXTREMES_GROUP1 = SubsetParams(count=0, mean_x=3, mean_y=35, sd_x=1, sd_y=1, rho=-0.3, value=0, label="")
EXTREMES_GROUP2 = SubsetParams(count=0, mean_x=-1, mean_y=-15, sd_x=1, sd_y=1, rho=-0.3, value=1, label="")


@dataclass(frozen=True)
class AssembledDatasets:
    normals1: Dataset
    normals2: Dataset
    extremes1: Dataset
    extremes2: Dataset

    @property
    def without_extremes(self) -> Dataset:
        return Dataset.concat(self.normals1, self.normals2)

    @property
    def with_extremes(self) -> Dataset:
        return Dataset.concat(self.without_extremes, self.extremes1, self.extremes2)


def split_count(n: int) -> Tuple[int, int]:
    """
    Split `n` between two groups: the first gets round(n / 2), the second the rest.

    Uses Python's round(), i.e. ties go to the even integer
    (split_count(1) == (0, 1), split_count(3) == (2, 1)).
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidParameterError(f"count must be an integer, got {n!r}")
    if n < 0:
        raise InvalidParameterError(f"count must be >= 0, got {n}")

    first = int(round(n / 2))
    return first, int(n) - first


def assemble_datasets(
    normal_count: int,
    extreme_count: int,
    label1: str,
    label2: str,
    rng: np.random.Generator,
) -> AssembledDatasets:
    """
    Generate the four subsets (normals1, normals2, extremes1, extremes2) in that order.

    Parameters
    ----------
    normal_count : int
        Total number of regular points, split across both groups.
    extreme_count : int
        Total number of outliers, split across both groups.
    label1, label2 : str
        Group names for class 0 and class 1.
    rng : np.random.Generator
        Generator shared by all four draws.
    """
    normal1, normal2 = split_count(normal_count)
    extreme1, extreme2 = split_count(extreme_count)

    if extreme_count > normal_count:
        logger.warning(
            "extreme_count (%d) exceeds normal_count (%d); extremes will not behave as outliers",
            extreme_count, normal_count,
        )

    normals1 = generate_subset(replace(NORMALS_GROUP1, count=normal1, label=label1), rng)
    normals2 = generate_subset(replace(NORMALS_GROUP2, count=normal2, label=label2), rng)
    extremes1 = generate_subset(replace(EXTREMES_GROUP1, count=extreme1, label=label1), rng)
    extremes2 = generate_subset(replace(EXTREMES_GROUP2, count=extreme2, label=label2), rng)

    logger.debug(
        "Assembled subsets: normals=(%d, %d), extremes=(%d, %d)",
        normal1, normal2, extreme1, extreme2,
    )

    return AssembledDatasets(
        normals1=normals1,
        normals2=normals2,
        extremes1=extremes1,
        extremes2=extremes2,
    )
