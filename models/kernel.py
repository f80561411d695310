"""Convolution kernel value type."""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class PostProcess(Enum):
    """How a weighted sum is mapped back into a byte."""

    CLAMP = 'clamp'
    # v * 2 + 128, for kernels whose sums are centered on zero
    BIAS_SCALE = 'bias_scale'


@dataclass(frozen=True, eq=False)
class Kernel:
    """Square, odd-sized weight matrix identified by name."""

    name: str
    weights: np.ndarray
    post_process: PostProcess = PostProcess.CLAMP

    def __post_init__(self):
        matrix = np.array(self.weights, dtype=np.float64)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"Kernel '{self.name}' must be square, got shape {matrix.shape}")
        if matrix.shape[0] % 2 == 0:
            raise ValueError(f"Kernel '{self.name}' must have odd size, got {matrix.shape[0]}")
        matrix.setflags(write=False)
        object.__setattr__(self, 'weights', matrix)

    @property
    def size(self) -> int:
        return self.weights.shape[0]

    @property
    def half(self) -> int:
        return self.size // 2

    def __eq__(self, other):
        if not isinstance(other, Kernel):
            return NotImplemented
        return (
            self.name == other.name
            and self.post_process == other.post_process
            and np.array_equal(self.weights, other.weights)
        )

    def __hash__(self):
        return hash((self.name, self.post_process, self.weights.tobytes()))
