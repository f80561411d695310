"""Shared utilities."""

from .constants import KERNEL_WEIGHTS, BIAS_SCALE_KERNELS
from .metrics import compute_psnr_ssim, Timer
from .test_images import generate_colored_checkerboard, generate_thin_stripes, generate_demo_image

__all__ = [
    'KERNEL_WEIGHTS',
    'BIAS_SCALE_KERNELS',
    'compute_psnr_ssim',
    'Timer',
    'generate_colored_checkerboard',
    'generate_thin_stripes',
    'generate_demo_image',
]
