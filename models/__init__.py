"""Data models for pixel buffers, kernels and engine settings."""

from .errors import EngineError, KernelNotFound, DimensionMismatchError
from .pixel_buffer import PixelBuffer, as_rgba, flatten, luminance, saturate
from .kernel import Kernel, PostProcess
from .frequency_field import FrequencyField
from .engine_config import EngineConfig, DEFAULT_CONFIG
from .operation_types import FrequencyFilterType, ProjectionType

__all__ = [
    'EngineError',
    'KernelNotFound',
    'DimensionMismatchError',
    'PixelBuffer',
    'as_rgba',
    'flatten',
    'luminance',
    'saturate',
    'Kernel',
    'PostProcess',
    'FrequencyField',
    'EngineConfig',
    'DEFAULT_CONFIG',
    'FrequencyFilterType',
    'ProjectionType',
]
