"""
Seed sweep: evolve many seeds independently and keep the best one.

Each seed is a complete, independent run in a worker process. Results come
back as (seed, quality) pairs in completion order; the driver reduces them
to the best seed and a count of seeds at or below a quality threshold.
"""

from dataclasses import dataclass, field, replace
from multiprocessing import Pool, cpu_count
from typing import Dict, Iterable, Optional, Callable, Tuple

from ..datasets.iris import Dataset, load_iris
from .engine import EvolutionConfig, EvolutionEngine


@dataclass
class SweepResult:
    """Outcome of a seed sweep."""
    results: Dict[int, float] = field(default_factory=dict)  # seed -> quality
    threshold: float = 0.05

    @property
    def best_seed(self) -> Optional[int]:
        if not self.results:
            return None
        # Lowest seed wins ties so the answer does not depend on arrival order
        return min(self.results, key=lambda s: (self.results[s], s))

    @property
    def best_quality(self) -> Optional[float]:
        seed = self.best_seed
        return None if seed is None else self.results[seed]

    @property
    def below_threshold(self) -> int:
        """Number of seeds whose quality is at or below the threshold."""
        return sum(1 for q in self.results.values() if q <= self.threshold)

    def summary(self) -> str:
        return (
            f"Seeds: {len(self.results)} | "
            f"Best seed: {self.best_seed} | "
            f"Best quality: {self.best_quality} | "
            f"<= {self.threshold}: {self.below_threshold}"
        )


def run_sweep(
    seeds: Iterable[int],
    config: EvolutionConfig,
    n_workers: Optional[int] = None,
    threshold: float = 0.05,
    dataset: Optional[Dataset] = None,
    progress_callback: Optional[Callable[[int, float], None]] = None,
) -> SweepResult:
    """
    Run one independent evolution per seed on a process pool.

    Args:
        seeds: Seeds to evaluate
        config: Template configuration; its seed is replaced per run
        n_workers: Worker processes (default: cpu_count)
        threshold: Quality at or below which a seed counts as a hit
        dataset: Labeled examples (the Iris dataset if not given)
        progress_callback: Optional callback(seed, quality) per finished run

    Returns:
        SweepResult with every seed's quality
    """
    # Load once up front so a missing dataset fails before any worker starts
    if dataset is None:
        dataset = load_iris()

    n_workers = n_workers or cpu_count()
    args_list = [(replace(config, seed=seed), dataset) for seed in seeds]

    sweep = SweepResult(threshold=threshold)
    if not args_list:
        return sweep

    with Pool(n_workers) as pool:
        for seed, quality in pool.imap_unordered(_sweep_worker, args_list):
            sweep.results[seed] = quality
            if progress_callback:
                progress_callback(seed, quality)

    return sweep


def _sweep_worker(args: tuple) -> Tuple[int, float]:
    """
    Worker function for one seed.

    This is a module-level function to enable pickling for multiprocessing.
    """
    config, dataset = args
    result = EvolutionEngine(config, dataset).evolve()
    return config.seed, result.quality
