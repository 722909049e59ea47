"""
Fitness evaluation.

Two measures:
- fitness: per-example Euclidean distance between the output vector and the
  one-hot label, summed and normalized by n_examples * sqrt(output_width).
  Used to rank genomes every generation.
- quality: misclassification rate of the argmax output. Computed once, on
  the final best genome.
"""

from typing import List

import numpy as np

from ..core.networks import Network
from ..datasets.iris import Dataset
from .genome import Genome


def compute_fitness(network: Network, dataset: Dataset) -> float:
    """
    Normalized RMS error of a network over a dataset.

    For complex networks the per-example squares and square root are
    complex; the magnitude of the normalized complex sum is returned.

    Args:
        network: Network whose output width matches the class count
        dataset: Labeled examples

    Returns:
        Fitness (lower is better); NaN if the network overflowed
    """
    outputs = network.forward(dataset.features)
    expected = dataset.one_hot()

    with np.errstate(all='ignore'):
        diff = expected - outputs
        losses = np.sqrt(np.sum(diff * diff, axis=1))
        total = np.sum(losses) / (len(dataset) * np.sqrt(network.output_width))

    return float(np.abs(total))


def predict(network: Network, dataset: Dataset) -> np.ndarray:
    """
    Predicted class index per example.

    Uses output magnitude for complex networks. NaN outputs never win and
    ties go to the lowest index.
    """
    outputs = network.forward(dataset.features)
    scores = np.abs(outputs) if network.is_complex else outputs
    scores = np.where(np.isnan(scores), -np.inf, scores)
    return np.argmax(scores, axis=1)


def compute_quality(network: Network, dataset: Dataset) -> float:
    """
    Fraction of misclassified examples, in [0, 1].
    """
    misses = np.count_nonzero(predict(network, dataset) != dataset.labels)
    return misses / len(dataset)


def evaluate_population(genomes: List[Genome], dataset: Dataset) -> int:
    """
    Evaluate fitness for all unevaluated genomes.

    Fitness is a pure function of the network, so survivors keep theirs.

    Returns:
        Number of evaluations performed
    """
    evaluations = 0
    for genome in genomes:
        if not genome.evaluated:
            genome.fitness = compute_fitness(genome.network, dataset)
            evaluations += 1
    return evaluations
