"""
Generate a binary-labeled 2D dataset that a linear probability model (LPM)
classifies poorly because of a few high-leverage outliers, even though a
human can draw a perfect boundary by eye.

Writes the data (with the outliers) to CSV and a plot showing the LPM decision
boundary fitted without and with the outliers.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from decision_boundary.lpm_boundary import BoundaryLine, calculate_boundary
from evaluation.lpm_metrics import misclassification_rate
from utils.common.errors import InvalidParameterError
from utils.data.dataset_utils import Dataset, save_dataset_to_csv
from utils.data.lpm_dataset import assemble_datasets
from utils.visualization.dataset_plot import plot_dataset_with_boundaries

logger = logging.getLogger(__name__)

DEFAULT_SEED = 11111
DEFAULT_NORMAL_COUNT = 60
DEFAULT_EXTREME_COUNT = 2
DEFAULT_LABEL1 = "Group 1"
DEFAULT_LABEL2 = "Group 2"
DEFAULT_DATA_FILENAME = "dataset.csv"
DEFAULT_PLOT_FILENAME = "dataPlot.pdf"

LABEL_WITHOUT_EXTREMES = "Boundary Without Extremes"
LABEL_WITH_EXTREMES = "Boundary With Extremes"


@dataclass(frozen=True)
class GenerationResult:
    without_extremes: Dataset
    with_extremes: Dataset
    boundary_without_extremes: BoundaryLine
    boundary_with_extremes: BoundaryLine
    x_min: float
    x_max: float
    error_rate_without_extremes: float
    error_rate_with_extremes: float
    csv_path: Optional[Path] = None
    plot_path: Optional[Path] = None


def generate_dataset(
    normal_count: int,
    extreme_count: int,
    label1: str,
    label2: str,
    save_data: bool = True,
    save_plot: bool = True,
    rng: Optional[np.random.Generator] = None,
    out_dir: str | Path = ".",
    data_filename: str = DEFAULT_DATA_FILENAME,
    plot_filename: str = DEFAULT_PLOT_FILENAME,
) -> GenerationResult:
    """
    Generate normal and extreme points for two groups, fit LPM boundaries with
    and without the extremes, and optionally write the data and a plot.

    Parameters
    ----------
    normal_count : int
        Number of regular points, split across both groups.
    extreme_count : int
        Number of extreme points. If normal points far outnumber them, the
        extremes act as outliers.
    label1, label2 : str
        Labels of the first (class 0) and second (class 1) group.
    save_data : bool
        Write the "with extremes" data to `out_dir / data_filename`.
    save_plot : bool
        Write the plot to `out_dir / plot_filename`.
    rng : np.random.Generator or None
        Source of randomness. A fresh unseeded generator is used if None.
    out_dir : str or Path
        Existing directory for the output files.

    Returns
    -------
    GenerationResult
        Both datasets, both boundary lines, their error rates on the
        "with extremes" data and the paths of any files written.
    """
    if rng is None:
        rng = np.random.default_rng()

    subsets = assemble_datasets(normal_count, extreme_count, label1, label2, rng)
    without_extremes = subsets.without_extremes
    with_extremes = subsets.with_extremes

    if len(with_extremes) == 0:
        raise InvalidParameterError("normal_count + extreme_count must be > 0")

    # Both lines span every point the plot shows, not just the data they were fitted on.
    xs = with_extremes.coordinates()[:, 0]
    x_min, x_max = float(xs.min()), float(xs.max())

    boundary_without = calculate_boundary(without_extremes, x_min, x_max, LABEL_WITHOUT_EXTREMES)
    boundary_with = calculate_boundary(with_extremes, x_min, x_max, LABEL_WITH_EXTREMES)

    n_points = len(with_extremes)
    error_without = misclassification_rate(boundary_without.fit, with_extremes)
    error_with = misclassification_rate(boundary_with.fit, with_extremes)
    for line, rate in ((boundary_without, error_without), (boundary_with, error_with)):
        logger.info(
            "%s: y = %.4f + %.4f * x, misclassifies %d/%d points (%.1f%%)",
            line.label, line.intercept, line.slope, round(rate * n_points), n_points, 100 * rate,
        )

    out_dir = Path(out_dir)
    csv_path = None
    plot_path = None

    if save_data:
        csv_path = save_dataset_to_csv(with_extremes, out_dir / data_filename)

    if save_plot:
        plot_path = plot_dataset_with_boundaries(
            with_extremes,
            [boundary_without, boundary_with],
            save_path=out_dir / plot_filename,
        )

    return GenerationResult(
        without_extremes=without_extremes,
        with_extremes=with_extremes,
        boundary_without_extremes=boundary_without,
        boundary_with_extremes=boundary_with,
        x_min=x_min,
        x_max=x_max,
        error_rate_without_extremes=error_without,
        error_rate_with_extremes=error_with,
        csv_path=csv_path,
        plot_path=plot_path,
    )


def generate_troublesome_dataset(
    save_data: bool = True,
    save_plot: bool = True,
    out_dir: str | Path = ".",
    seed: int = DEFAULT_SEED,
) -> GenerationResult:
    """60 normal and 2 extreme points with a fixed seed: enough for the outliers to drag the LPM boundary."""
    rng = np.random.default_rng(seed)
    return generate_dataset(
        DEFAULT_NORMAL_COUNT,
        DEFAULT_EXTREME_COUNT,
        DEFAULT_LABEL1,
        DEFAULT_LABEL2,
        save_data=save_data,
        save_plot=save_plot,
        rng=rng,
        out_dir=out_dir,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a dataset that is troublesome for linear probability models")
    parser.add_argument("--out_dir", type=str, default=".", help="Output directory (must exist)")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed")
    parser.add_argument("--normal_count", type=int, default=DEFAULT_NORMAL_COUNT, help="Number of normal points")
    parser.add_argument("--extreme_count", type=int, default=DEFAULT_EXTREME_COUNT, help="Number of extreme points")
    parser.add_argument("--label1", type=str, default=DEFAULT_LABEL1, help="Label of the first group")
    parser.add_argument("--label2", type=str, default=DEFAULT_LABEL2, help="Label of the second group")
    parser.add_argument("--no_data", action="store_true", help="Do not write the CSV file")
    parser.add_argument("--no_plot", action="store_true", help="Do not write the plot")
    parser.add_argument("--log_level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level")

    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s: %(name)s: %(message)s")

    print(f"Generating {args.normal_count} normal + {args.extreme_count} extreme points (seed={args.seed})...")
    result = generate_dataset(
        args.normal_count,
        args.extreme_count,
        args.label1,
        args.label2,
        save_data=not args.no_data,
        save_plot=not args.no_plot,
        rng=np.random.default_rng(args.seed),
        out_dir=args.out_dir,
    )

    if result.csv_path is not None:
        print(f"Data saved to: {result.csv_path}")
    if result.plot_path is not None:
        print(f"Plot saved to: {result.plot_path}")

    return result


if __name__ == "__main__":
    main()
