"""Complex frequency field stored as interleaved float32 pairs."""

from dataclasses import dataclass

import numpy as np

from models.errors import DimensionMismatchError


@dataclass
class FrequencyField:
    """One complex bin per spatial pixel, row-major, [re, im, re, im, ...]."""

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        self.data = np.ascontiguousarray(self.data, dtype=np.float32).reshape(-1)
        expected = 2 * self.width * self.height
        if self.data.size != expected:
            raise DimensionMismatchError(
                f"Frequency field holds {self.data.size} values, expected {expected}"
            )

    @classmethod
    def from_complex(cls, bins: np.ndarray) -> 'FrequencyField':
        """Build from an (H, W) complex array."""
        height, width = bins.shape
        interleaved = np.empty((height, width, 2), dtype=np.float32)
        interleaved[..., 0] = bins.real
        interleaved[..., 1] = bins.imag
        return cls(width, height, interleaved)

    def to_complex(self) -> np.ndarray:
        """(H, W) complex128 view of the bins."""
        pairs = self.data.reshape(self.height, self.width, 2).astype(np.float64)
        return pairs[..., 0] + 1j * pairs[..., 1]

    def magnitude(self) -> np.ndarray:
        """(H, W) float64 magnitudes."""
        pairs = self.data.reshape(self.height, self.width, 2).astype(np.float64)
        return np.hypot(pairs[..., 0], pairs[..., 1])

    def __eq__(self, other):
        if not isinstance(other, FrequencyField):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )
