"""
Genome representation: a network paired with its fitness.

Fitness is a normalized RMS classification error, so lower is better. It is
None until the genome has been evaluated. A NaN fitness (from exp overflow)
always ranks behind any number.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.networks import Network


@dataclass
class Genome:
    """
    One candidate network.

    Attributes:
        network: The network (owned by this genome, never shared)
        fitness: Normalized error after evaluation, None before
    """
    network: Network
    fitness: Optional[float] = None

    @property
    def evaluated(self) -> bool:
        return self.fitness is not None

    @property
    def rank_key(self) -> Tuple[bool, float]:
        """Sort key: ascending fitness, NaN and unevaluated last."""
        if self.fitness is None or math.isnan(self.fitness):
            return (True, 0.0)
        return (False, self.fitness)

    def copy(self) -> 'Genome':
        """Deep copy with fitness reset, ready for in-place mutation."""
        return Genome(network=self.network.copy())

    def __repr__(self) -> str:
        fitness_str = f", fitness={self.fitness:.6f}" if self.evaluated else ""
        return f"Genome({self.network!r}{fitness_str})"
