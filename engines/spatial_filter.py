"""2D convolution with named kernels and replicated edges."""

import logging
from typing import Optional

import cv2
import numpy as np

from engines.kernel_registry import KernelRegistry, DEFAULT_REGISTRY
from engines.parallel import run_row_blocks
from models.engine_config import EngineConfig
from models.kernel import Kernel, PostProcess
from models.pixel_buffer import BufferLike, as_rgba, flatten, saturate

logger = logging.getLogger(__name__)


def _weighted_sums(rgb: np.ndarray, kernel: Kernel, lo: int, hi: int) -> np.ndarray:
    """Kernel sums for output rows [lo, hi), reading a halo of kernel.half rows."""
    height = rgb.shape[0]
    start = max(0, lo - kernel.half)
    stop = min(height, hi + kernel.half)
    # filter2D correlates (no kernel flip), matching sum(src(x+kx-h, y+ky-h) * k[ky][kx])
    sums = cv2.filter2D(
        rgb[start:stop],
        ddepth=-1,
        kernel=kernel.weights.astype(np.float32),
        borderType=cv2.BORDER_REPLICATE
    )
    return sums[lo - start:hi - start]


def _post_process(sums: np.ndarray, mode: PostProcess) -> np.ndarray:
    if mode is PostProcess.BIAS_SCALE:
        sums = sums * 2.0 + 128.0
    return saturate(sums)


def convolve(rgba: np.ndarray, kernel: Kernel, config: Optional[EngineConfig] = None) -> np.ndarray:
    """Convolve an (H, W, 4) array; returns a new (H, W, 4) array with alpha copied."""
    height, width = rgba.shape[:2]
    result = np.empty_like(rgba, dtype=np.uint8)
    if rgba.size == 0:
        return result

    rgb = np.ascontiguousarray(rgba[..., :3], dtype=np.float32)

    def _filter_rows(lo: int, hi: int) -> None:
        sums = _weighted_sums(rgb, kernel, lo, hi)
        result[lo:hi, :, :3] = _post_process(sums, kernel.post_process)
        result[lo:hi, :, 3] = rgba[lo:hi, :, 3]

    run_row_blocks(_filter_rows, height, config)
    return result


def apply_filter(
    data: BufferLike,
    width: int,
    height: int,
    kernel_name: str,
    registry: Optional[KernelRegistry] = None,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """
    Apply a registered kernel to an RGBA buffer.

    Raises KernelNotFound for unregistered names and DimensionMismatchError
    when the buffer length disagrees with width and height.
    """
    registry = registry if registry is not None else DEFAULT_REGISTRY
    kernel = registry.get(kernel_name)
    rgba = as_rgba(data, width, height)
    logger.debug("Spatial filter '%s' (%dx%d) on %dx%d", kernel.name, kernel.size, kernel.size, width, height)
    return flatten(convolve(rgba, kernel, config))
