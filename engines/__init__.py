"""Pixel-buffer engines - pure computation, no GUI dependencies."""

from models.errors import EngineError, KernelNotFound, DimensionMismatchError
from .kernel_registry import KernelRegistry, DEFAULT_REGISTRY, build_default_registry
from .parallel import split_ranges, run_row_blocks
from .spatial_filter import apply_filter, convolve
from .frequency import (
    forward_transform,
    inverse_transform,
    spectrum,
    frequency_domain_view,
    retained_mask,
    low_pass,
    high_pass,
    band_pass,
    apply_frequency_filter,
)
from .projection import (
    horizontal,
    vertical,
    radial,
    angular,
    isometric,
    apply_projection,
    apply_all_projections,
)
from .edge_magnitude import gradient_magnitude, detect_blur

__all__ = [
    'EngineError',
    'KernelNotFound',
    'DimensionMismatchError',
    'KernelRegistry',
    'DEFAULT_REGISTRY',
    'build_default_registry',
    'split_ranges',
    'run_row_blocks',
    'apply_filter',
    'convolve',
    'forward_transform',
    'inverse_transform',
    'spectrum',
    'frequency_domain_view',
    'retained_mask',
    'low_pass',
    'high_pass',
    'band_pass',
    'apply_frequency_filter',
    'horizontal',
    'vertical',
    'radial',
    'angular',
    'isometric',
    'apply_projection',
    'apply_all_projections',
    'gradient_magnitude',
    'detect_blur',
]
