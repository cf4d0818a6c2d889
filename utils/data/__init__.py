from .dataset_utils import (
    CSV_COLUMNS,
    Dataset,
    Observation,
    SubsetParams,
    generate_subset,
    load_dataset_from_csv,
    save_dataset_to_csv,
)
from .lpm_dataset import AssembledDatasets, assemble_datasets, split_count

__all__ = [
    "CSV_COLUMNS",
    "Dataset",
    "Observation",
    "SubsetParams",
    "generate_subset",
    "load_dataset_from_csv",
    "save_dataset_to_csv",
    "AssembledDatasets",
    "assemble_datasets",
    "split_count",
]
