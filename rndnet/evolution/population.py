"""
Population management for evolutionary search.

Handles:
- Initial population creation from a run seed
- Ranking with NaN-aware ordering
- Truncation back to the target size
"""

import math
from typing import List, Dict, Any, Sequence

import numpy as np

from ..core.stream import Stream
from ..core.variants import Variant, build_network
from .genome import Genome


def create_initial_population(
    variant: Variant,
    stream: Stream,
    seed: int,
    population_size: int = 256,
    widths: Sequence[int] = (4, 4, 3),
) -> List[Genome]:
    """
    Create the unevaluated initial population of a run.

    Args:
        variant: Network variant
        stream: The run's main stream (explicit weights are drawn from it)
        seed: Run seed (offsets every layer seed)
        population_size: Number of genomes
        widths: Input width, hidden widths, output width

    Returns:
        List of Genome objects forming the initial population
    """
    return [
        Genome(network=build_network(variant, stream, i, seed, population_size, widths))
        for i in range(population_size)
    ]


def rank_population(population: List[Genome]) -> List[Genome]:
    """Stable sort by ascending fitness; NaN sorts as worst."""
    return sorted(population, key=lambda g: g.rank_key)


def truncate_population(population: List[Genome], size: int) -> List[Genome]:
    """Rank the population and keep the `size` best genomes."""
    return rank_population(population)[:size]


def get_population_stats(population: List[Genome]) -> Dict[str, Any]:
    """
    Compute statistics about the population.

    Args:
        population: List of genomes

    Returns:
        Dictionary with population statistics
    """
    if not population:
        return {'size': 0}

    evaluated = [g.fitness for g in population if g.evaluated]
    finite = [f for f in evaluated if not math.isnan(f)]

    stats = {
        'size': len(population),
        'evaluated_count': len(evaluated),
        'nan_count': len(evaluated) - len(finite),
    }
    if finite:
        stats.update({
            'best_fitness': min(finite),
            'worst_fitness': max(finite),
            'mean_fitness': float(np.mean(finite)),
            'std_fitness': float(np.std(finite)),
        })
    return stats
