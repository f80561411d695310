"""Tests for the gradient-magnitude heatmap."""

import numpy as np
import pytest
from engines.edge_magnitude import detect_blur, gradient_magnitude
from engines.kernel_registry import KernelRegistry, DEFAULT_REGISTRY
from models.errors import KernelNotFound
from models.kernel import Kernel
from utils.test_images import generate_colored_checkerboard, generate_gradient


def step_image(width=4, height=4, value=100):
    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    rgba[:, width // 2:, :3] = value
    return rgba.reshape(-1)


def test_output_is_red_only_and_opaque():
    """Green and blue are zero; alpha is 255 everywhere."""
    image = generate_colored_checkerboard(32, block_size=8)
    out = detect_blur(image, 32, 32).reshape(32, 32, 4)
    assert out.size == 32 * 32 * 4
    assert not out[..., 1:3].any()
    assert np.all(out[..., 3] == 255)
    assert out[..., 0].max() == 255
    assert out[..., 0].min() == 0


def test_flat_image_gives_zero_heatmap():
    """No gradient anywhere means an all-black red channel."""
    image = np.full((6, 6, 4), 90, dtype=np.uint8)
    out = detect_blur(image, 6, 6).reshape(6, 6, 4)
    assert not out[..., :3].any()
    assert np.all(out[..., 3] == 255)


def test_vertical_step_highlights_edge_columns():
    """The step between columns 1 and 2 is the only bright region."""
    out = detect_blur(step_image(), 4, 4).reshape(4, 4, 4)
    assert np.all(out[:, 1:3, 0] == 255)
    assert np.all(out[:, [0, 3], 0] == 0)


def test_gradient_magnitude_values():
    """Raw magnitude is the hypot of the mean-RGB edge responses."""
    mag = gradient_magnitude(step_image(), 4, 4)
    assert mag.shape == (4, 4)
    assert mag.dtype == np.float32
    assert np.allclose(mag[:, 1:3], 255.0)
    assert np.allclose(mag[:, [0, 3]], 0.0)


def test_smooth_gradient_is_weaker_than_hard_edges():
    """A smooth ramp has lower mean raw magnitude than a checkerboard."""
    smooth = gradient_magnitude(generate_gradient(32), 32, 32)
    sharp = gradient_magnitude(generate_colored_checkerboard(32, block_size=4), 32, 32)
    assert smooth.mean() < sharp.mean()


def test_registry_must_provide_edge_kernels():
    """A registry without the edge kernels fails with KernelNotFound."""
    with pytest.raises(KernelNotFound):
        detect_blur(step_image(), 4, 4, registry=KernelRegistry())


def test_injected_edge_kernels_are_used():
    """Overriding the edge kernels changes the heatmap source."""
    zero = [[0, 0, 0], [0, 0, 0], [0, 0, 0]]
    registry = (
        DEFAULT_REGISTRY
        .with_kernel(Kernel("Horizontal Edge", zero))
        .with_kernel(Kernel("Vertical Edge", zero))
    )
    out = detect_blur(step_image(), 4, 4, registry=registry).reshape(4, 4, 4)
    assert not out[..., 0].any()


def test_empty_image():
    """0x0 input yields an empty heatmap."""
    assert detect_blur(b'', 0, 0).size == 0
