"""Streams, layers and networks."""

from .stream import (
    Stream,
    LFSR_MASK,
    LFSR_INIT,
    advance,
    draw_index,
    index_mask,
    period,
    find_maximal_mask,
)
from .networks import (
    Layer,
    RealLayer,
    ComplexLayer,
    SharedLayer,
    RandomLayer,
    Network,
)
from .variants import Variant, build_network

__all__ = [
    'Stream',
    'LFSR_MASK',
    'LFSR_INIT',
    'advance',
    'draw_index',
    'index_mask',
    'period',
    'find_maximal_mask',
    'Layer',
    'RealLayer',
    'ComplexLayer',
    'SharedLayer',
    'RandomLayer',
    'Network',
    'Variant',
    'build_network',
]
