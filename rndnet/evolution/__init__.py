"""
Evolutionary training of stream-synthesized networks.

Instead of gradient descent, the few explicit parameters of each network are
tuned by a generational loop: evaluate, rank and truncate, then grow the
population with single-parameter crossover and mutation.

Key components:
- Genome: A network and its fitness
- compute_fitness / compute_quality: Normalized RMS error and error rate
- Operators: Rejection selection, crossover, mutation
- EvolutionEngine: Main evolutionary loop
- run_sweep: Parallel evaluation of many seeds

Example usage:
    from rndnet.evolution import EvolutionEngine, EvolutionConfig
    from rndnet.core import Variant

    config = EvolutionConfig(variant=Variant.DENSE, seed=0)
    result = EvolutionEngine(config).evolve()

    print(f"Best fitness: {result.best_fitness:.4f}, quality: {result.quality:.3f}")
"""

from .genome import Genome
from .fitness import compute_fitness, compute_quality, evaluate_population, predict
from .operators import rejection_selection, crossover, mutate
from .population import (
    create_initial_population,
    rank_population,
    truncate_population,
    get_population_stats,
)
from .history import EvolutionHistory, GenerationStats
from .engine import EvolutionEngine, EvolutionConfig, EvolutionResult, run_model
from .sweep import SweepResult, run_sweep

__all__ = [
    # Core classes
    'Genome',
    'EvolutionEngine',
    'EvolutionConfig',
    'EvolutionResult',
    'EvolutionHistory',
    'GenerationStats',
    'SweepResult',
    # Entry points
    'run_model',
    'run_sweep',
    # Fitness
    'compute_fitness',
    'compute_quality',
    'evaluate_population',
    'predict',
    # Operators
    'rejection_selection',
    'crossover',
    'mutate',
    # Population
    'create_initial_population',
    'rank_population',
    'truncate_population',
    'get_population_stats',
]
