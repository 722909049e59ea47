"""
Evolutionary operators: selection, crossover, and mutation.

All randomness comes from the run's main stream, so a run is reproducible
from its seed. Crossover and mutation always work on deep copies and touch
exactly one explicit parameter (or one stream seed for weight-free layers).
"""

from typing import List, Tuple

from ..core.stream import Stream, draw_index
from .genome import Genome


# =============================================================================
# Selection Operators
# =============================================================================

def rejection_selection(
    population: List[Genome],
    stream: Stream,
    max_passes: int = 1024,
) -> int:
    """
    Sequential rejection-sampling selection.

    Scans the ranked population in order and accepts the first genome whose
    fitness is below a freshly drawn uniform number. Low-error genomes are
    accepted more often, and earlier (better-ranked) genomes get the first
    chance at a generous draw. NaN fitness is never accepted.

    Args:
        population: Ranked, evaluated population
        stream: Main stream
        max_passes: Full scans to attempt before settling on the best genome

    Returns:
        Index of the selected genome
    """
    for _ in range(max_passes):
        for i, genome in enumerate(population):
            if stream.next_unit_float() > genome.fitness:
                return i
    return 0


# =============================================================================
# Crossover Operators
# =============================================================================

def crossover(
    parent1: Genome,
    parent2: Genome,
    stream: Stream,
) -> Tuple[Genome, Genome]:
    """
    Single-parameter crossover.

    Both parents are deep-copied, one layer index is drawn, and the two
    copies of that layer exchange a single parameter.

    Returns:
        Tuple of two unevaluated child genomes
    """
    child1, child2 = parent1.copy(), parent2.copy()
    layers1, layers2 = child1.network.layers, child2.network.layers
    layer = draw_index(stream, min(len(layers1), len(layers2)))
    layers1[layer].exchange(layers2[layer], stream)
    return child1, child2


# =============================================================================
# Mutation Operators
# =============================================================================

def mutate(genome: Genome, stream: Stream) -> Genome:
    """
    Single-parameter mutation.

    Returns:
        New unevaluated genome (original is not modified)
    """
    child = genome.copy()
    layers = child.network.layers
    layers[draw_index(stream, len(layers))].mutate(stream)
    return child
