"""
Main evolutionary optimization engine.

Orchestrates the evolution loop:
1. Initialize population from the run seed
2. Evaluate fitness of new genomes
3. Rank and truncate back to the population size
4. Create offspring via crossover (rejection-sampled parents)
5. Create offspring via mutation (one per surviving genome)
6. Repeat for a fixed number of generations

The whole run is single-threaded and deterministic for a given config.
Parallelism happens one level up, across seeds (see sweep.py).
"""

from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional, Callable
import time

from ..core.stream import Stream, LFSR_INIT
from ..core.variants import Variant
from ..datasets.iris import Dataset, load_iris
from .genome import Genome
from .fitness import evaluate_population, compute_quality
from .operators import rejection_selection, crossover, mutate
from .population import create_initial_population, truncate_population
from .history import EvolutionHistory


@dataclass
class EvolutionConfig:
    """Configuration for an evolution run."""
    variant: Variant = Variant.DENSE
    seed: int = 0

    # Loop parameters
    generations: int = 128
    population_size: int = 256
    crossovers: int = 256

    # Network shape between the dataset's input and output widths
    hidden_width: int = 4

    # Rejection selection gives up after this many full scans
    selection_max_passes: int = 1024

    def __post_init__(self):
        if not isinstance(self.variant, Variant):
            self.variant = Variant(self.variant)
        for name in ('generations', 'population_size', 'hidden_width', 'selection_max_passes'):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.crossovers < 0:
            raise ValueError(f"crossovers must be non-negative, got {self.crossovers}")

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d['variant'] = self.variant.value
        return d


@dataclass
class EvolutionResult:
    """Results from an evolution run."""
    config: EvolutionConfig
    best_genome: Genome
    best_fitness: float
    quality: float
    generations_completed: int
    total_evaluations: int
    history: EvolutionHistory
    final_population: List[Genome]
    runtime_seconds: float

    def summary(self) -> str:
        """Generate summary string."""
        lines = [
            f"Variant: {self.config.variant.value}",
            f"Seed: {self.config.seed}",
            f"Generations: {self.generations_completed}",
            f"Total evaluations: {self.total_evaluations}",
            f"Best fitness: {self.best_fitness:.6f}",
            f"Quality (misclassified): {self.quality:.4f}",
            f"Runtime: {self.runtime_seconds:.1f}s",
            f"Best network: {self.best_genome.network!r}",
        ]
        return '\n'.join(lines)


class EvolutionEngine:
    """
    Generational evolution of stream-synthesized networks.

    One engine runs one seed. It owns its population and its main stream;
    nothing is shared with other engines.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        dataset: Optional[Dataset] = None,
    ):
        """
        Initialize evolution engine.

        Args:
            config: Evolution configuration
            dataset: Labeled examples (the Iris dataset if not given)

        Raises:
            DatasetError: if the default dataset cannot be loaded
        """
        self.config = config
        self.dataset = dataset if dataset is not None else load_iris()

        self.stream = Stream(LFSR_INIT + config.seed)
        self.population: List[Genome] = []
        self.history = EvolutionHistory()
        self.generation = 0

    @property
    def widths(self) -> tuple:
        return (self.dataset.n_features, self.config.hidden_width, self.dataset.n_classes)

    def initialize_population(self) -> None:
        """Create the initial population."""
        self.population = create_initial_population(
            variant=self.config.variant,
            stream=self.stream,
            seed=self.config.seed,
            population_size=self.config.population_size,
            widths=self.widths,
        )
        self.generation = 0
        self.history = EvolutionHistory()

    def evaluate_and_select(self) -> int:
        """
        Evaluate new genomes, then rank and truncate.

        Returns:
            Number of evaluations performed
        """
        evaluations = evaluate_population(self.population, self.dataset)
        self.population = truncate_population(self.population, self.config.population_size)
        return evaluations

    def reproduce(self) -> None:
        """Append crossover offspring, then one mutant per kept genome."""
        parents = self.population
        offspring: List[Genome] = []

        for _ in range(self.config.crossovers):
            a = rejection_selection(parents, self.stream, self.config.selection_max_passes)
            b = rejection_selection(parents, self.stream, self.config.selection_max_passes)
            offspring.extend(crossover(parents[a], parents[b], self.stream))

        for genome in parents:
            offspring.append(mutate(genome, self.stream))

        self.population = parents + offspring

    def evolve(
        self,
        progress_callback: Optional[Callable[[int, int, Dict], None]] = None,
    ) -> EvolutionResult:
        """
        Run the full fixed-length evolution.

        Args:
            progress_callback: Optional callback(gen, total_gens, stats)

        Returns:
            EvolutionResult with the best genome and its quality
        """
        start_time = time.time()
        total = self.config.generations

        if not self.population:
            self.initialize_population()

        for gen in range(total):
            evaluations = self.evaluate_and_select()
            stats = self.history.record_generation(gen, self.population, evaluations)
            self.generation = gen + 1

            if progress_callback:
                progress_callback(gen, total, stats.to_dict())

            # No offspring after the final ranking
            if gen < total - 1:
                self.reproduce()

        best = self.population[0]
        quality = compute_quality(best.network, self.dataset)

        return EvolutionResult(
            config=self.config,
            best_genome=best,
            best_fitness=best.fitness,
            quality=quality,
            generations_completed=self.generation,
            total_evaluations=self.history.total_evaluations,
            history=self.history,
            final_population=self.population,
            runtime_seconds=time.time() - start_time,
        )


def print_progress(gen: int, total: int, stats: dict) -> None:
    """Print one progress line: generation index and best fitness."""
    print(gen, stats['best_fitness'], flush=True)


def run_model(
    seed: int,
    variant: Variant = Variant.DENSE,
    generations: int = 128,
    population_size: int = 256,
    dataset: Optional[Dataset] = None,
    verbose: bool = True,
) -> float:
    """
    Evolve one seed and return the misclassification rate of the best genome.

    Deterministic for a given set of arguments. With `verbose`, writes a
    line per generation and a final "<best fitness> <quality>" line.
    """
    config = EvolutionConfig(
        variant=variant,
        seed=seed,
        generations=generations,
        population_size=population_size,
    )
    engine = EvolutionEngine(config, dataset)
    result = engine.evolve(progress_callback=print_progress if verbose else None)
    if verbose:
        print(result.best_fitness, result.quality, flush=True)
    return result.quality
