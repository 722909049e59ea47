"""
Fisher's Iris dataset: 150 flowers, 4 measurements, 3 species.

Loaded from the copy bundled with scikit-learn, so no network access is
needed. Records are read-only once loaded.
"""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np
from sklearn.datasets import load_iris as sklearn_load_iris


class DatasetError(RuntimeError):
    """The dataset could not be loaded or is malformed."""


@dataclass(frozen=True)
class Dataset:
    """
    Labeled feature vectors.

    Attributes:
        features: Array of shape (n_examples, n_features)
        labels: Integer class index per example
        label_names: Class name per index
    """
    features: np.ndarray
    labels: np.ndarray
    label_names: List[str]

    def __post_init__(self):
        if self.features.ndim != 2:
            raise DatasetError(f"features must be 2-D, got shape {self.features.shape}")
        if len(self.features) != len(self.labels):
            raise DatasetError(
                f"{len(self.features)} feature rows but {len(self.labels)} labels"
            )
        if len(self.labels) == 0:
            raise DatasetError("dataset is empty")
        if self.labels.min() < 0 or self.labels.max() >= len(self.label_names):
            raise DatasetError("labels fall outside the known classes")
        self.features.flags.writeable = False
        self.labels.flags.writeable = False

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def n_features(self) -> int:
        return self.features.shape[1]

    @property
    def n_classes(self) -> int:
        return len(self.label_names)

    @property
    def label_index(self) -> Dict[str, int]:
        """Map from class name to class index."""
        return {name: i for i, name in enumerate(self.label_names)}

    def one_hot(self) -> np.ndarray:
        """Expected output vectors, shape (n_examples, n_classes)."""
        expected = np.zeros((len(self), self.n_classes))
        expected[np.arange(len(self)), self.labels] = 1
        return expected


def load_iris() -> Dataset:
    """
    Load the Iris dataset.

    Raises:
        DatasetError: if the data is unavailable or unparseable
    """
    try:
        bunch = sklearn_load_iris()
    except (OSError, ValueError) as e:
        raise DatasetError(f"could not load the iris dataset: {e}") from e

    return Dataset(
        features=np.array(bunch.data, dtype=np.float64),
        labels=np.array(bunch.target, dtype=np.intp),
        label_names=[str(name) for name in bunch.target_names],
    )
