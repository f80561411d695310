"""RGBA pixel buffer and boundary conversion helpers."""

from typing import Tuple, Union

import cv2
import numpy as np

from models.errors import DimensionMismatchError
from models.kernel import Kernel

CHANNELS = 4

BufferLike = Union[bytes, bytearray, memoryview, np.ndarray, 'PixelBuffer']


def luminance(rgb: np.ndarray) -> np.ndarray:
    """ITU-R BT.601 luma of the last axis (R, G, B, ...)."""
    rgb = rgb.astype(np.float64)
    return 0.299 * rgb[..., 0] + 0.587 * rgb[..., 1] + 0.114 * rgb[..., 2]


def saturate(values: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255] and round half to even, like a clamped byte array."""
    return np.rint(np.clip(values, 0, 255)).astype(np.uint8)


def as_rgba(data: BufferLike, width: int, height: int) -> np.ndarray:
    """
    View caller data as an (H, W, 4) uint8 array.

    The result may share memory with the input and must be treated as
    read-only. A length that disagrees with width*height*4 raises
    DimensionMismatchError instead of truncating or padding.
    """
    if width < 0 or height < 0:
        raise DimensionMismatchError(f"Dimensions must be non-negative, got {width}x{height}")

    if isinstance(data, PixelBuffer):
        if (data.width, data.height) != (width, height):
            raise DimensionMismatchError(
                f"PixelBuffer is {data.width}x{data.height}, expected {width}x{height}"
            )
        return data.pixels

    if isinstance(data, np.ndarray):
        array = data if data.dtype == np.uint8 else np.clip(data, 0, 255).astype(np.uint8)
    elif len(data) == 0:
        array = np.zeros(0, dtype=np.uint8)
    else:
        array = np.frombuffer(data, dtype=np.uint8)

    expected = width * height * CHANNELS
    if array.size != expected:
        raise DimensionMismatchError(
            f"Buffer holds {array.size} bytes, expected {expected} for {width}x{height} RGBA"
        )
    return array.reshape(height, width, CHANNELS)


def flatten(rgba: np.ndarray) -> np.ndarray:
    """Return a fresh, contiguous, flat uint8 copy of an RGBA array."""
    return np.ascontiguousarray(rgba, dtype=np.uint8).reshape(-1).copy()


class PixelBuffer:
    """Row-major RGBA byte buffer with bounds-absorbing pixel access."""

    def __init__(self, width: int, height: int, data: BufferLike = None):
        if width < 0 or height < 0:
            raise DimensionMismatchError(f"Dimensions must be non-negative, got {width}x{height}")
        self._width = width
        self._height = height
        if data is None:
            self._pixels = np.zeros((height, width, CHANNELS), dtype=np.uint8)
        else:
            self._pixels = as_rgba(data, width, height).copy()

    @classmethod
    def from_bytes(cls, data: BufferLike, width: int, height: int) -> 'PixelBuffer':
        return cls(width, height, data)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """Underlying (H, W, 4) array."""
        return self._pixels

    @property
    def data(self) -> np.ndarray:
        """Flat view of the underlying bytes."""
        return self._pixels.reshape(-1)

    def __len__(self) -> int:
        return self._pixels.size

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Pixel at (x, y); (0, 0, 0, 0) outside the image."""
        if not self.in_bounds(x, y):
            return (0, 0, 0, 0)
        r, g, b, a = self._pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def set(self, x: int, y: int, r: float, g: float, b: float, a: float = 255) -> None:
        """Write a pixel; out-of-bounds writes are ignored and values saturate."""
        if not self.in_bounds(x, y):
            return
        self._pixels[y, x] = saturate(np.array([r, g, b, a], dtype=np.float64))

    def clear(self) -> None:
        self._pixels.fill(0)

    def clone(self) -> 'PixelBuffer':
        return PixelBuffer(self._width, self._height, self._pixels)

    def copy_from(self, other: 'PixelBuffer') -> None:
        if (other.width, other.height) != (self._width, self._height):
            raise DimensionMismatchError(
                f"Cannot copy {other.width}x{other.height} into {self._width}x{self._height}"
            )
        np.copyto(self._pixels, other.pixels)

    def to_grayscale(self) -> 'PixelBuffer':
        """New buffer with R=G=B=round(luma); alpha is kept."""
        gray = np.floor(luminance(self._pixels) + 0.5)
        gray = np.clip(gray, 0, 255).astype(np.uint8)
        result = PixelBuffer(self._width, self._height)
        result.pixels[..., 0] = gray
        result.pixels[..., 1] = gray
        result.pixels[..., 2] = gray
        result.pixels[..., 3] = self._pixels[..., 3]
        return result

    def apply_spatial_filter(self, weights) -> 'PixelBuffer':
        """
        Correlate RGB with a caller-supplied square matrix.

        Samples outside the image contribute nothing (zero padding), unlike
        the replicated edges of the named-kernel filters. Sums are clamped
        and the result is fully opaque.
        """
        kernel = Kernel('custom', weights)
        result = PixelBuffer(self._width, self._height)
        if self._pixels.size == 0:
            return result

        rgb = np.ascontiguousarray(self._pixels[..., :3], dtype=np.float32)
        sums = cv2.filter2D(
            rgb,
            ddepth=-1,
            kernel=kernel.weights.astype(np.float32),
            borderType=cv2.BORDER_CONSTANT
        )
        result.pixels[..., :3] = saturate(sums)
        result.pixels[..., 3] = 255
        return result

    def to_bytes(self) -> bytes:
        return self._pixels.tobytes()

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self._width == other.width
            and self._height == other.height
            and np.array_equal(self._pixels, other.pixels)
        )

    def __repr__(self):
        return f"PixelBuffer({self._width}x{self._height})"
