"""
Network variants and the builder used to seed a population.

Genome i of a run seeded with `seed` gets layer seeds
LFSR_INIT + i + seed + (layer + 1) * population_size, so no two layers in a
population (or across consecutive seeds of a sweep) start from the same
stream. Explicit weights are drawn from the run's main stream.
"""

import math
from enum import Enum
from typing import Sequence

import numpy as np

from .stream import Stream, LFSR_INIT, UINT32_MAX
from .networks import (
    Network,
    RealLayer,
    ComplexLayer,
    SharedLayer,
    RandomLayer,
)


class Variant(Enum):
    """Parameter-storage shape of a network."""
    DENSE = 'dense'
    COMPLEX = 'complex'
    SHARED = 'shared'
    WEIGHT_FREE = 'weight-free'

    @classmethod
    def names(cls) -> list:
        return [v.value for v in cls]


# Size of the weight pool of a SharedLayer
SHARED_POOL_SIZE = 4


def layer_seed(index: int, seed: int, layer: int, population_size: int) -> int:
    """Stream seed for layer `layer` of genome `index`."""
    return (LFSR_INIT + index + seed + (layer + 1) * population_size) & UINT32_MAX


def build_network(
    variant: Variant,
    stream: Stream,
    index: int,
    seed: int,
    population_size: int,
    widths: Sequence[int] = (4, 4, 3),
) -> Network:
    """
    Build genome `index`'s network for a run.

    Args:
        variant: Which layer type to use
        stream: The run's main stream (explicit weights are drawn from it)
        index: Genome index within the initial population
        seed: Run seed
        population_size: Offsets the layer seeds of successive layers
        widths: Input width, hidden widths, output width

    Returns:
        A fresh Network with zero biases
    """
    if len(widths) < 2:
        raise ValueError(f"widths needs an input and an output width, got {widths}")

    layers = []
    for i in range(len(widths) - 1):
        columns, rows = widths[i], widths[i + 1]
        rand = layer_seed(index, seed, i, population_size)
        factor = math.sqrt(2 / rows)

        if variant is Variant.DENSE:
            weights = [stream.next_signed() * factor for _ in range(rows)]
            layer = RealLayer(columns, rand, weights, np.zeros(rows))
        elif variant is Variant.COMPLEX:
            weights = [
                complex(stream.next_signed() * factor, stream.next_signed() * factor)
                for _ in range(rows)
            ]
            layer = ComplexLayer(columns, rand, weights, np.zeros(rows))
        elif variant is Variant.SHARED:
            pool = [stream.next_signed() * factor for _ in range(SHARED_POOL_SIZE)]
            layer = SharedLayer(columns, rand, rows, pool)
        elif variant is Variant.WEIGHT_FREE:
            layer = RandomLayer(columns, rand, rows)
        else:
            raise ValueError(f"Unknown variant: {variant}")

        layers.append(layer)

    return Network(layers, output_width=widths[-1])
