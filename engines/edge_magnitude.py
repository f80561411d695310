"""Gradient-magnitude heatmap from two directional edge passes."""

import logging
from typing import Optional

import numpy as np

from engines.kernel_registry import KernelRegistry, DEFAULT_REGISTRY
from engines.spatial_filter import convolve
from models.engine_config import EngineConfig
from models.pixel_buffer import BufferLike, as_rgba, flatten, saturate

logger = logging.getLogger(__name__)

HORIZONTAL_KERNEL = "Horizontal Edge"
VERTICAL_KERNEL = "Vertical Edge"


def gradient_magnitude(
    data: BufferLike,
    width: int,
    height: int,
    registry: Optional[KernelRegistry] = None,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """(H, W) float32 sqrt(h^2 + v^2) of the mean-RGB edge responses."""
    registry = registry if registry is not None else DEFAULT_REGISTRY
    rgba = as_rgba(data, width, height)

    horizontal = convolve(rgba, registry.get(HORIZONTAL_KERNEL), config)
    vertical = convolve(rgba, registry.get(VERTICAL_KERNEL), config)

    h_gray = horizontal[..., :3].astype(np.float64).mean(axis=-1)
    v_gray = vertical[..., :3].astype(np.float64).mean(axis=-1)
    return np.hypot(h_gray, v_gray).astype(np.float32)


def detect_blur(
    data: BufferLike,
    width: int,
    height: int,
    registry: Optional[KernelRegistry] = None,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """
    Red-channel sharpness heatmap.

    Magnitudes are min-max normalized over the whole image to [0, 255];
    green and blue are zero and alpha is opaque. A flat magnitude field
    renders as zero.
    """
    magnitude = gradient_magnitude(data, width, height, registry, config).astype(np.float64)
    result = np.zeros((height, width, 4), dtype=np.uint8)
    result[..., 3] = 255
    if magnitude.size == 0:
        return flatten(result)

    low, high = magnitude.min(), magnitude.max()
    logger.debug("Edge magnitude range %.3f..%.3f on %dx%d", low, high, width, height)
    if high > low:
        result[..., 0] = saturate((magnitude - low) / (high - low) * 255.0)
    return flatten(result)
