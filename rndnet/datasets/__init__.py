"""Datasets for evolving classifiers."""

from .iris import Dataset, DatasetError, load_iris

DATASETS = {
    'iris': load_iris,
}


def get_dataset(name: str) -> Dataset:
    """Load a dataset by name."""
    if name not in DATASETS:
        raise ValueError(f"Unknown dataset: {name}. Available: {list(DATASETS.keys())}")
    return DATASETS[name]()


__all__ = [
    'Dataset',
    'DatasetError',
    'load_iris',
    'DATASETS',
    'get_dataset',
]
