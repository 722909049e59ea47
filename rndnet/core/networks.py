"""
Networks whose synapses are mostly regenerated rather than stored.

Every layer keeps a stream seed (`rand`). Inference starts a local stream
from that seed and replays it, so the synthesized synapses are identical on
every call; the stored seed itself is never advanced.

Layer types differ only in what is explicit and what is synthesized:
- RealLayer: one weight and one bias per output unit, the weight lands on a
  single stream-chosen input, every other synapse is noise
- ComplexLayer: same shape, complex arithmetic throughout
- SharedLayer: a small power-of-two pool indexed by the stream for every
  synapse and bias
- RandomLayer: nothing stored, every synapse and bias comes from the stream

Because the draws never depend on input values, a layer's effective weight
matrix is a pure function of its seed, shape and explicit parameters. That
lets a whole batch go through `Network.forward` as matrix products.
"""

import math
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np

from .stream import Stream, UINT32_MAX, draw_index, index_mask


# =============================================================================
# Synthesis (cached per seed and shape)
# =============================================================================

def _frozen(*arrays: np.ndarray) -> Tuple[np.ndarray, ...]:
    for array in arrays:
        array.flags.writeable = False
    return arrays


@lru_cache(maxsize=8192)
def _explicit_noise(
    rand: int,
    rows: int,
    columns: int,
    out_width: int,
    is_complex: bool,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Noise matrix and explicit-weight positions for Real/Complex layers.

    Per output unit: one draw picks the input that receives the explicit
    weight, then one draw (two for complex) per remaining input.
    """
    stream = Stream(rand)
    mask = index_mask(columns)
    factor = math.sqrt(2 / out_width)

    matrix = np.zeros((rows, columns), dtype=np.complex128 if is_complex else np.float64)
    positions = np.empty(rows, dtype=np.intp)

    for j in range(rows):
        index = stream.next_uint32() & mask
        positions[j] = index
        for k in range(columns):
            if k == index:
                continue
            if is_complex:
                real = stream.next_signed() * factor
                imag = stream.next_signed() * factor
                matrix[j, k] = complex(real, imag)
            else:
                matrix[j, k] = stream.next_signed() * factor

    return _frozen(matrix, positions)


@lru_cache(maxsize=8192)
def _pool_indices(
    rand: int,
    rows: int,
    columns: int,
    pool_size: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """Pool indices for SharedLayer: a bias index then one per input, per unit."""
    stream = Stream(rand)
    mask = pool_size - 1

    bias_indices = np.empty(rows, dtype=np.intp)
    weight_indices = np.empty((rows, columns), dtype=np.intp)

    for j in range(rows):
        bias_indices[j] = stream.next_uint32() & mask
        for k in range(columns):
            weight_indices[j, k] = stream.next_uint32() & mask

    return _frozen(weight_indices, bias_indices)


@lru_cache(maxsize=8192)
def _generated_weights(
    rand: int,
    rows: int,
    columns: int,
    out_width: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """Full weight matrix and biases for RandomLayer."""
    stream = Stream(rand)
    factor = math.sqrt(2 / out_width)

    matrix = np.empty((rows, columns), dtype=np.float64)
    biases = np.empty(rows, dtype=np.float64)

    for j in range(rows):
        biases[j] = stream.next_signed() * factor
        for k in range(columns):
            matrix[j, k] = stream.next_signed() * factor

    return _frozen(matrix, biases)


def clear_synthesis_cache() -> None:
    """Drop cached noise tables (mainly for tests and long sweeps)."""
    _explicit_noise.cache_clear()
    _pool_indices.cache_clear()
    _generated_weights.cache_clear()


# =============================================================================
# Layers
# =============================================================================

@dataclass
class Layer:
    """
    Base layer: an input width and a private stream seed.

    Subclasses provide `rows`, `synthesize`, and the two genome operations
    `exchange` (crossover) and `mutate`.
    """
    columns: int
    rand: int

    is_complex = False

    def __post_init__(self):
        if self.columns < 1:
            raise ValueError(f"columns must be positive, got {self.columns}")
        self.rand = int(self.rand) & UINT32_MAX

    @property
    def rows(self) -> int:
        raise NotImplementedError

    def synthesize(self, out_width: int) -> Tuple[np.ndarray, np.ndarray]:
        """Return the effective (rows x columns) weight matrix and biases."""
        raise NotImplementedError

    def vectors(self) -> List[np.ndarray]:
        """Explicit parameter vectors, in draw order."""
        return []

    def copy(self) -> 'Layer':
        # __post_init__ copies the arrays
        return replace(self)

    def exchange(self, other: 'Layer', stream: Stream) -> None:
        """Swap one explicit parameter with the matching layer of another network."""
        vectors, others = self.vectors(), other.vectors()
        choice = draw_index(stream, len(vectors))
        mine, theirs = vectors[choice], others[choice]
        slot_a = draw_index(stream, len(mine))
        slot_b = draw_index(stream, len(theirs))
        mine[slot_a], theirs[slot_b] = theirs[slot_b], mine[slot_a]

    def mutate(self, stream: Stream) -> None:
        """Add a value in [-1, 1] to one explicit parameter."""
        vectors = self.vectors()
        vector = vectors[draw_index(stream, len(vectors))]
        slot = draw_index(stream, len(vector))
        vector[slot] += self._perturbation(stream)

    def _perturbation(self, stream: Stream):
        return stream.next_signed()


@dataclass
class RealLayer(Layer):
    """Dense-explicit layer: one evolved weight and bias per output unit."""
    weights: np.ndarray
    biases: np.ndarray

    dtype = np.float64

    def __post_init__(self):
        super().__post_init__()
        self.weights = np.array(self.weights, dtype=self.dtype)
        self.biases = np.array(self.biases, dtype=self.dtype)
        if self.weights.ndim != 1 or self.weights.shape != self.biases.shape:
            raise ValueError(
                f"weights {self.weights.shape} and biases {self.biases.shape} "
                f"must be vectors of equal length"
            )

    @property
    def rows(self) -> int:
        return len(self.weights)

    def synthesize(self, out_width: int) -> Tuple[np.ndarray, np.ndarray]:
        noise, positions = _explicit_noise(
            self.rand, self.rows, self.columns, out_width, self.is_complex
        )
        matrix = noise.copy()
        matrix[np.arange(self.rows), positions] = self.weights
        return matrix, self.biases

    def vectors(self) -> List[np.ndarray]:
        return [self.weights, self.biases]


@dataclass
class ComplexLayer(RealLayer):
    """Complex-valued counterpart of RealLayer."""

    dtype = np.complex128
    is_complex = True

    def _perturbation(self, stream: Stream):
        part = stream.next_uint32() & 1
        delta = stream.next_signed()
        if part == 0:
            return complex(delta, 0)
        return complex(0, delta)


@dataclass
class SharedLayer(Layer):
    """Every synapse and bias is drawn from one small shared weight pool."""
    row_count: int
    weights: np.ndarray

    def __post_init__(self):
        super().__post_init__()
        self.weights = np.array(self.weights, dtype=np.float64)
        size = len(self.weights)
        if size < 1 or size & (size - 1):
            raise ValueError(f"weight pool size must be a power of two, got {size}")
        if self.row_count < 1:
            raise ValueError(f"row_count must be positive, got {self.row_count}")

    @property
    def rows(self) -> int:
        return self.row_count

    def synthesize(self, out_width: int) -> Tuple[np.ndarray, np.ndarray]:
        weight_indices, bias_indices = _pool_indices(
            self.rand, self.rows, self.columns, len(self.weights)
        )
        return self.weights[weight_indices], self.weights[bias_indices]

    def vectors(self) -> List[np.ndarray]:
        return [self.weights]


@dataclass
class RandomLayer(Layer):
    """Weight-free layer: only the stream seed is evolved."""
    row_count: int

    def __post_init__(self):
        super().__post_init__()
        if self.row_count < 1:
            raise ValueError(f"row_count must be positive, got {self.row_count}")

    @property
    def rows(self) -> int:
        return self.row_count

    def synthesize(self, out_width: int) -> Tuple[np.ndarray, np.ndarray]:
        return _generated_weights(self.rand, self.rows, self.columns, out_width)

    def exchange(self, other: 'Layer', stream: Stream) -> None:
        self.rand, other.rand = other.rand, self.rand

    def mutate(self, stream: Stream) -> None:
        # A zero seed would lock the register at zero
        rand = self.rand ^ stream.next_uint32()
        while rand == 0:
            rand = self.rand ^ stream.next_uint32()
        self.rand = rand


# =============================================================================
# Network
# =============================================================================

@dataclass
class Network:
    """
    Ordered layers plus the external output width.

    Layer i produces as many values as layer i+1 declares columns (or
    `output_width` for the last layer).
    """
    layers: List[Layer]
    output_width: int

    def __post_init__(self):
        if not self.layers:
            raise ValueError("a network needs at least one layer")
        for i, layer in enumerate(self.layers):
            width = self.width_after(i)
            if layer.rows != width:
                raise ValueError(
                    f"layer {i} produces {layer.rows} values but "
                    f"{width} are expected"
                )

    @property
    def input_width(self) -> int:
        return self.layers[0].columns

    @property
    def is_complex(self) -> bool:
        return any(layer.is_complex for layer in self.layers)

    @property
    def dtype(self):
        return np.complex128 if self.is_complex else np.float64

    def width_after(self, i: int) -> int:
        """Output width of layer i."""
        if i < len(self.layers) - 1:
            return self.layers[i + 1].columns
        return self.output_width

    def forward(self, batch: np.ndarray) -> np.ndarray:
        """
        Run a (n_examples, input_width) batch through the network.

        Returns:
            Array of shape (n_examples, output_width)
        """
        values = np.asarray(batch, dtype=self.dtype)
        if values.ndim != 2 or values.shape[1] != self.input_width:
            raise ValueError(
                f"expected a batch of width {self.input_width}, got shape {values.shape}"
            )

        # exp overflow shows up as NaN fitness, handled by ranking
        with np.errstate(all='ignore'):
            for i, layer in enumerate(self.layers):
                matrix, biases = layer.synthesize(self.width_after(i))
                e = np.exp(values @ matrix.T + biases)
                values = e / (e + 1)
        return values

    def inference(self, inputs: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Run a single input vector through the network.

        Args:
            inputs: Vector of length input_width
            out: Optional buffer of length output_width to copy the result into

        Returns:
            Output vector of length output_width
        """
        outputs = self.forward(np.asarray(inputs)[np.newaxis, :])[0]
        if out is not None:
            np.copyto(out, outputs, casting='unsafe')
        return outputs

    def copy(self) -> 'Network':
        """Fully independent deep copy."""
        return Network([layer.copy() for layer in self.layers], self.output_width)

    @property
    def total_params(self) -> int:
        """Number of explicit (evolved) parameters."""
        return sum(len(v) for layer in self.layers for v in layer.vectors())

    def __repr__(self) -> str:
        shape = '-'.join(
            [str(self.input_width)] + [str(self.width_after(i)) for i in range(len(self.layers))]
        )
        kind = type(self.layers[0]).__name__
        return f"Network({kind}, {shape}, params={self.total_params})"
