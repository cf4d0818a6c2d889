from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from decision_boundary.lpm_boundary import BoundaryLine
from utils.common.file_utils import atomic_output_path
from utils.data.dataset_utils import Dataset

logger = logging.getLogger(__name__)

PLOT_TITLE = "Classification of Binary Data by LPM"
X_LABEL = "Var. X"
Y_LABEL = "Var. Y"
FIGSIZE = (8, 6)  # inches
DPI = 100


def build_dataset_figure(
    dataset: Dataset,
    boundaries: Sequence[BoundaryLine],
    title: str = PLOT_TITLE,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Scatter `dataset` coloured by group and overlay each boundary as a line segment.

    - No explicit colors: uses matplotlib defaults.
    - The caller owns the figure and must close it.
    """
    fig, ax = plt.subplots(figsize=FIGSIZE, dpi=DPI)

    coords = dataset.coordinates()
    groups = dataset.groups()

    # groups in order of first appearance
    for group in dict.fromkeys(groups):
        mask = np.asarray(groups, dtype=object) == group
        ax.scatter(coords[mask, 0], coords[mask, 1], s=14, label=group)

    for line in boundaries:
        ax.plot(line.xs, line.ys, linewidth=1.5, label=line.label)

    ax.set_title(title)
    ax.set_xlabel(X_LABEL)
    ax.set_ylabel(Y_LABEL)
    ax.legend(loc="best")

    return fig, ax


def plot_dataset_with_boundaries(
    dataset: Dataset,
    boundaries: Sequence[BoundaryLine],
    save_path: str | Path,
    title: str = PLOT_TITLE,
) -> Path:
    """
    Save the figure from `build_dataset_figure` at a fixed size.
    The format follows the suffix of `save_path`.
    """
    save_path = Path(save_path)

    fig, _ = build_dataset_figure(dataset, boundaries, title=title)
    try:
        with atomic_output_path(save_path) as tmp_path:
            fig.savefig(tmp_path, dpi=DPI)
    finally:
        plt.close(fig)

    logger.info("Plot saved to %s", save_path)
    return save_path
