"""Metrics: PSNR, SSIM and runtime for engine outputs."""

import time
import numpy as np
from skimage.metrics import peak_signal_noise_ratio, structural_similarity
from typing import Dict

# structural_similarity's default window
_SSIM_MIN_SIDE = 7


def compute_psnr_ssim(original_rgba: np.ndarray, processed_rgba: np.ndarray) -> Dict[str, float]:
    """Compare RGB channels and BT.601 luma of two (H, W, 4) images."""
    original_rgb = original_rgba[..., :3]
    processed_rgb = processed_rgba[..., :3]

    original_y = 0.299 * original_rgb[:, :, 0] + 0.587 * original_rgb[:, :, 1] + 0.114 * original_rgb[:, :, 2]
    processed_y = 0.299 * processed_rgb[:, :, 0] + 0.587 * processed_rgb[:, :, 1] + 0.114 * processed_rgb[:, :, 2]

    psnr_rgb = peak_signal_noise_ratio(original_rgb, processed_rgb, data_range=255)
    psnr_y = peak_signal_noise_ratio(original_y, processed_y, data_range=255)

    if min(original_rgb.shape[:2]) >= _SSIM_MIN_SIDE:
        ssim_rgb = structural_similarity(original_rgb, processed_rgb, channel_axis=2, data_range=255)
        ssim_y = structural_similarity(original_y, processed_y, data_range=255)
    else:
        ssim_rgb = ssim_y = float('nan')

    return {
        'psnr_rgb': float(psnr_rgb),
        'ssim_rgb': float(ssim_rgb),
        'psnr_y': float(psnr_y),
        'ssim_y': float(ssim_y)
    }


class Timer:
    """Wall-clock timer for engine calls."""

    def __init__(self):
        self.elapsed_ms = 0.0

    def measure(self, func, *args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        self.elapsed_ms = (time.perf_counter() - start) * 1000.0
        return result
