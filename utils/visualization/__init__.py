from .dataset_plot import build_dataset_figure, plot_dataset_with_boundaries

__all__ = [
    "build_dataset_figure",
    "plot_dataset_with_boundaries",
]
