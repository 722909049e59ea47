"""
rndnet - classifiers whose weights come from a deterministic stream.

Most synapses are never stored: each layer replays an LFSR stream from a
fixed seed on every inference call. The few explicit parameters are tuned by
an evolutionary loop rather than gradient descent.
"""

from .core import Stream, Network, Variant
from .evolution import EvolutionConfig, EvolutionEngine, run_model, run_sweep

__version__ = '0.1.0'

__all__ = [
    'Stream',
    'Network',
    'Variant',
    'EvolutionConfig',
    'EvolutionEngine',
    'run_model',
    'run_sweep',
]
