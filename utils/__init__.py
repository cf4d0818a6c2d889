from .data import (
    assemble_datasets,
    generate_subset,
    save_dataset_to_csv,
)

__all__ = [
    "assemble_datasets",
    "generate_subset",
    "save_dataset_to_csv",
]
