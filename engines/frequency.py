"""
Frequency-domain analysis: separable 2D DFT, spectrum views and masking filters.

The forward transform works on luminance only. With the default sampling
stride of 1 it is the exact DFT (computed with scipy.fft); a larger stride
evaluates the row and column sums over every `stride`-th spatial position
and scales the result by the stride, trading accuracy for speed.

Filters return a visualization of the masked spectrum, not a filtered
spatial-domain image.
"""

import logging
from typing import Optional

import numpy as np
from scipy import fft as sp_fft

from engines.parallel import run_row_blocks
from models.engine_config import EngineConfig, DEFAULT_CONFIG
from models.frequency_field import FrequencyField
from models.pixel_buffer import BufferLike, as_rgba, flatten, luminance, saturate
from models.operation_types import FrequencyFilterType

logger = logging.getLogger(__name__)


def default_cutoff(width: int, height: int) -> float:
    """Low/high-pass cutoff used when none is given."""
    return min(width, height) / 4


def default_band(width: int, height: int) -> tuple:
    """(low, high) band-pass cutoffs used when none are given."""
    smallest = min(width, height)
    return smallest / 8, smallest / 2


def _gray_levels(rgba: np.ndarray) -> np.ndarray:
    """Integer luma levels (round half up) as float64."""
    return np.clip(np.floor(luminance(rgba) + 0.5), 0, 255)


def _sampled_dft_rows(values: np.ndarray, stride: int, config: EngineConfig) -> np.ndarray:
    """
    1D DFT along axis 1 of a 2D array, summing every `stride`-th position.

    X[u] = stride * sum_{x in 0, s, 2s, ...} v[x] * exp(-2j*pi*u*x/N)
    """
    rows, n = values.shape
    positions = np.arange(0, n, stride)
    freqs = np.arange(n)
    basis = np.exp(-2j * np.pi * np.outer(positions, freqs) / n)
    sampled = values[:, positions]
    out = np.empty((rows, n), dtype=np.complex128)

    def _transform(lo: int, hi: int) -> None:
        out[lo:hi] = (sampled[lo:hi] @ basis) * stride

    run_row_blocks(_transform, rows, config)
    return out


def _separable_dft(gray: np.ndarray, config: EngineConfig) -> np.ndarray:
    stride = config.sample_stride
    if stride == 1:
        rows = sp_fft.fft(gray, axis=1, workers=config.workers)
        return sp_fft.fft(rows, axis=0, workers=config.workers)

    rows = _sampled_dft_rows(gray, stride, config)
    # column pass depends on the completed row pass
    return _sampled_dft_rows(np.ascontiguousarray(rows.T), stride, config).T


def forward_transform(
    data: BufferLike,
    width: int,
    height: int,
    config: Optional[EngineConfig] = None
) -> FrequencyField:
    """Luminance -> interleaved complex field of width*height bins."""
    config = config or DEFAULT_CONFIG
    rgba = as_rgba(data, width, height)
    if rgba.size == 0:
        return FrequencyField(width, height, np.zeros(0, dtype=np.float32))

    logger.debug("Forward transform %dx%d, stride %d", width, height, config.sample_stride)
    bins = _separable_dft(_gray_levels(rgba), config)
    return FrequencyField.from_complex(bins)


def inverse_transform(field: FrequencyField) -> np.ndarray:
    """
    Render a field as a centered log-magnitude spectrum.

    Each bin becomes log(1 + |z|) scaled so the largest value maps to 255,
    then quadrants are swapped so DC sits in the middle. Output is gray
    RGBA with opaque alpha.
    """
    result = np.empty((field.height, field.width, 4), dtype=np.uint8)
    if result.size == 0:
        return flatten(result)

    compressed = np.log1p(field.magnitude())
    peak = compressed.max()
    if peak > 0:
        levels = compressed / peak * 255.0
    else:
        levels = np.zeros_like(compressed)
    gray = saturate(sp_fft.fftshift(levels))

    result[..., 0] = gray
    result[..., 1] = gray
    result[..., 2] = gray
    result[..., 3] = 255
    return flatten(result)


def spectrum(
    data: BufferLike,
    width: int,
    height: int,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """Raw per-bin magnitudes (no log, no centering), length width*height."""
    field = forward_transform(data, width, height, config)
    return field.magnitude().astype(np.float32).reshape(-1)


def frequency_domain_view(
    data: BufferLike,
    width: int,
    height: int,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """Centered log-magnitude view of the unfiltered spectrum."""
    return inverse_transform(forward_transform(data, width, height, config))


def centered_distance(width: int, height: int) -> np.ndarray:
    """Distance of every bin from DC in the centered (quadrant-swapped) layout."""
    ys = np.arange(height) - height // 2
    xs = np.arange(width) - width // 2
    return np.hypot(xs[np.newaxis, :], ys[:, np.newaxis])


def retained_mask(
    width: int,
    height: int,
    filter_type,
    low: Optional[float] = None,
    high: Optional[float] = None
) -> np.ndarray:
    """
    Boolean (H, W) mask of bins kept by a filter, in raw transform layout.

    For low/high-pass `low` is the cutoff. Missing cutoffs take the
    defaults. An unknown filter type keeps every bin.
    """
    kind = FrequencyFilterType.from_tag(filter_type)
    dist = centered_distance(width, height)

    if kind is FrequencyFilterType.LOWPASS:
        cutoff = default_cutoff(width, height) if low is None else low
        centered = dist <= cutoff
    elif kind is FrequencyFilterType.HIGHPASS:
        cutoff = default_cutoff(width, height) if low is None else low
        centered = dist > cutoff
    elif kind is FrequencyFilterType.BANDPASS:
        band_low, band_high = default_band(width, height)
        band_low = band_low if low is None else low
        band_high = band_high if high is None else high
        centered = (dist >= band_low) & (dist <= band_high)
    else:
        centered = np.ones((height, width), dtype=bool)

    return sp_fft.ifftshift(centered)


def _masked_view(
    data: BufferLike,
    width: int,
    height: int,
    mask: np.ndarray,
    config: Optional[EngineConfig]
) -> np.ndarray:
    field = forward_transform(data, width, height, config)
    if field.data.size == 0:
        return inverse_transform(field)
    bins = field.to_complex()
    bins[~mask] = 0
    return inverse_transform(FrequencyField.from_complex(bins))


def low_pass(
    data: BufferLike,
    width: int,
    height: int,
    cutoff: Optional[float] = None,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """Spectrum view keeping bins within `cutoff` of DC."""
    mask = retained_mask(width, height, FrequencyFilterType.LOWPASS, cutoff)
    return _masked_view(data, width, height, mask, config)


def high_pass(
    data: BufferLike,
    width: int,
    height: int,
    cutoff: Optional[float] = None,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """Spectrum view keeping bins farther than `cutoff` from DC."""
    mask = retained_mask(width, height, FrequencyFilterType.HIGHPASS, cutoff)
    return _masked_view(data, width, height, mask, config)


def band_pass(
    data: BufferLike,
    width: int,
    height: int,
    low: Optional[float] = None,
    high: Optional[float] = None,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """Spectrum view keeping bins with low <= distance <= high."""
    mask = retained_mask(width, height, FrequencyFilterType.BANDPASS, low, high)
    return _masked_view(data, width, height, mask, config)


def apply_frequency_filter(
    data: BufferLike,
    width: int,
    height: int,
    filter_type,
    cutoff: Optional[float] = None,
    low: Optional[float] = None,
    high: Optional[float] = None,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """Dispatch on a filter tag; unrecognized tags return a copy of the input."""
    kind = FrequencyFilterType.from_tag(filter_type)

    if kind is FrequencyFilterType.LOWPASS:
        return low_pass(data, width, height, cutoff, config)
    if kind is FrequencyFilterType.HIGHPASS:
        return high_pass(data, width, height, cutoff, config)
    if kind is FrequencyFilterType.BANDPASS:
        return band_pass(data, width, height, low, high, config)

    logger.warning("Unknown frequency filter type %r, returning input unchanged", filter_type)
    return flatten(as_rgba(data, width, height))
