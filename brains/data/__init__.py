"""Dataset registry and built-in training sets."""

# Ensure built-in datasets register themselves when the package is imported.
from . import truth_tables as _truth_tables  # noqa: F401
from .registry import (
    DatasetSpec,
    DataSpec,
    available_datasets,
    get_dataset,
    register_dataset,
)
from .truth_tables import truth_table

__all__ = [
    "DataSpec",
    "DatasetSpec",
    "available_datasets",
    "get_dataset",
    "register_dataset",
    "truth_table",
]
