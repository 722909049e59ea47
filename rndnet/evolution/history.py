"""
In-memory record of an evolutionary run.

Per-generation statistics are kept for reporting and analysis only; nothing
is written to disk.
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any

from .genome import Genome
from .population import get_population_stats


@dataclass
class GenerationStats:
    """Statistics for a single generation, taken right after truncation."""
    generation: int
    best_fitness: float
    mean_fitness: float
    worst_fitness: float
    std_fitness: float
    nan_count: int
    population_size: int
    evaluations_this_gen: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class EvolutionHistory:
    """
    Tracks evolution progress over generations.
    """

    def __init__(self):
        self.generations: List[GenerationStats] = []
        self.fitness_trajectory: List[float] = []

    def record_generation(
        self,
        generation: int,
        population: List[Genome],
        evaluations: int,
    ) -> GenerationStats:
        """
        Record statistics for a ranked, truncated population.

        Args:
            generation: Generation number (0-based)
            population: Current population with fitness evaluated
            evaluations: Number of fitness evaluations this generation

        Returns:
            GenerationStats for this generation
        """
        stats = get_population_stats(population)
        nan = float('nan')

        record = GenerationStats(
            generation=generation,
            best_fitness=stats.get('best_fitness', nan),
            mean_fitness=stats.get('mean_fitness', nan),
            worst_fitness=stats.get('worst_fitness', nan),
            std_fitness=stats.get('std_fitness', nan),
            nan_count=stats.get('nan_count', 0),
            population_size=stats['size'],
            evaluations_this_gen=evaluations,
        )

        self.generations.append(record)
        self.fitness_trajectory.append(record.best_fitness)
        return record

    @property
    def total_evaluations(self) -> int:
        return sum(g.evaluations_this_gen for g in self.generations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generations': [g.to_dict() for g in self.generations],
            'fitness_trajectory': self.fitness_trajectory,
        }
