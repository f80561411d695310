"""Tests for projection analysis."""

import numpy as np
import pytest
from engines.projection import (
    horizontal,
    vertical,
    radial,
    angular,
    isometric,
    apply_projection,
    apply_all_projections,
)
from models.engine_config import EngineConfig
from models.errors import DimensionMismatchError
from models.operation_types import ProjectionType
from utils.constants import ISOMETRIC_BACKGROUND
from utils.test_images import generate_rings, generate_soft_disc

SAMPLE_2X2 = bytes([255, 0, 0, 255, 0, 255, 0, 255, 0, 0, 255, 255, 128, 128, 128, 255])


def uniform_rgba(width, height, value, alpha=255):
    rgba = np.full((height, width, 4), value, dtype=np.uint8)
    rgba[..., 3] = alpha
    return rgba.reshape(-1)


def test_horizontal_scenario_2x2():
    """Each row becomes its integer mean colour."""
    out = horizontal(SAMPLE_2X2, 2, 2).reshape(2, 2, 4)
    assert tuple(out[0, 0]) == (127, 127, 0, 255)
    assert tuple(out[0, 1]) == (127, 127, 0, 255)
    assert tuple(out[1, 0]) == (64, 64, 191, 255)
    assert tuple(out[1, 1]) == (64, 64, 191, 255)


def test_vertical_scenario_2x2():
    """Each column becomes its integer mean colour."""
    out = vertical(SAMPLE_2X2, 2, 2).reshape(2, 2, 4)
    assert tuple(out[0, 0]) == (127, 0, 127, 255)
    assert tuple(out[1, 0]) == (127, 0, 127, 255)
    assert tuple(out[0, 1]) == (64, 191, 64, 255)
    assert tuple(out[1, 1]) == (64, 191, 64, 255)


def test_projections_keep_alpha():
    """Row, column, radial and angular projections leave alpha per pixel."""
    image = generate_soft_disc(24)
    alpha = image[..., 3]
    for func in (horizontal, vertical, radial, angular):
        out = func(image, 24, 24).reshape(24, 24, 4)
        assert np.array_equal(out[..., 3], alpha), func.__name__


def test_radial_center_keeps_source():
    """The center pixel (distance 0) copies its source colour."""
    rgba = np.zeros((5, 5, 4), dtype=np.uint8)
    rgba[..., 3] = 255
    rgba[2, 2] = (10, 20, 30, 255)
    out = radial(rgba.reshape(-1), 5, 5).reshape(5, 5, 4)
    assert tuple(out[2, 2]) == (10, 20, 30, 255)


def test_radial_spiral_sums():
    """Samples along the perturbed path are summed and divided by distance."""
    out = radial(uniform_rgba(5, 5, 100), 5, 5).reshape(5, 5, 4)
    # distance 1: center + one ring sample -> 200 / 1
    assert tuple(out[2, 3, :3]) == (200, 200, 200)
    # distance 2: three samples -> 300 / 2
    assert tuple(out[2, 4, :3]) == (150, 150, 150)
    assert tuple(out[2, 2, :3]) == (100, 100, 100)


def test_radial_is_worker_independent():
    """Row fan-out does not change radial output."""
    image = generate_rings(21)
    parallel = EngineConfig(workers=3, min_rows_per_task=1)
    assert np.array_equal(radial(image, 21, 21), radial(image, 21, 21, parallel))


def test_angular_is_uniform():
    """Angular projection broadcasts one ring average to every pixel."""
    image = generate_rings(32)
    out = angular(image, 32, 32).reshape(32, 32, 4)
    rgb = out[..., :3].reshape(-1, 3)
    assert np.all(rgb == rgb[0])


def test_angular_ring_average():
    """A ring fully inside a flat image averages to the flat value."""
    out = angular(uniform_rgba(21, 21, 100), 21, 21).reshape(21, 21, 4)
    assert np.all(out[..., :3] == 100)


def test_angular_ring_outside_small_image():
    """Ring samples outside the image contribute nothing."""
    out = angular(uniform_rgba(3, 3, 200, alpha=9), 3, 3).reshape(3, 3, 4)
    assert not out[..., :3].any()
    assert np.all(out[..., 3] == 9)


def test_angular_average_is_truncated():
    """51 of the 360 ring samples hit a column of 25s: 1275 / 360 = 3.54 -> 3."""
    rgba = np.zeros((11, 11, 4), dtype=np.uint8)
    rgba[:, 10, :3] = 25
    rgba[..., 3] = 255
    out = angular(rgba.reshape(-1), 11, 11).reshape(11, 11, 4)
    assert np.all(out[..., :3] == 3)
    assert np.all(out[..., 3] == 255)


def test_isometric_single_point():
    """A black 8x8 image draws one shaded point at its projected position."""
    out = isometric(uniform_rgba(8, 8, 0), 8, 8).reshape(8, 8, 4)
    expected = np.empty_like(out)
    expected[...] = ISOMETRIC_BACKGROUND
    expected[0, 1] = (48, 54, 60, 255)
    assert np.array_equal(out, expected)


def test_isometric_offset_moves_points():
    """Offsets translate the projected cloud."""
    out = isometric(uniform_rgba(8, 8, 0), 8, 8, offset_x=2).reshape(8, 8, 4)
    assert tuple(out[0, 3]) == (48, 54, 60, 255)
    assert tuple(out[0, 1]) == ISOMETRIC_BACKGROUND


def test_isometric_rotation_changes_output():
    """Rotations about the Z axis re-map the point cloud."""
    image = generate_soft_disc(32, alpha_gradient=False)
    flat = isometric(image, 32, 32)
    rotated = isometric(image, 32, 32, rot_z=45)
    assert flat.size == rotated.size == 32 * 32 * 4
    assert not np.array_equal(flat, rotated)


def test_isometric_rotation_order_x_then_y_then_z():
    """One sampled point, quarter turns about X, Y then Z, lands at a known pixel."""
    # (x, y, z) = (-20, -20, 20) -> X: (-20, -20, -20) -> Y: (-20, -20, 20) -> Z: (20, -20, 20)
    # iso_x = floor(40 * 0.5 + 8 + 0.5) = 28, iso_y = floor(0 + 4 + 30.5 - 20) = 14
    config = EngineConfig(iso_sample_step=64)
    out = isometric(
        uniform_rgba(40, 40, 100), 40, 40,
        offset_x=0.5, offset_y=30.5, rot_x=90, rot_y=90, rot_z=90,
        config=config
    ).reshape(40, 40, 4)
    expected = np.empty_like(out)
    expected[...] = ISOMETRIC_BACKGROUND
    expected[14, 28] = (128, 144, 160, 255)
    assert np.array_equal(out, expected)


def test_isometric_background_when_nothing_visible():
    """Points projected off-canvas leave only the background."""
    out = isometric(uniform_rgba(8, 8, 0), 8, 8, offset_x=1000).reshape(8, 8, 4)
    assert np.all(out == ISOMETRIC_BACKGROUND)


@pytest.mark.parametrize("tag", ['horizontal', 'vertical', 'radial', 'angular', 'isometric'])
def test_dispatch_matches_direct_calls(tag):
    """String tags route to the matching projection."""
    image = generate_rings(16)
    direct = {
        'horizontal': horizontal,
        'vertical': vertical,
        'radial': radial,
        'angular': angular,
        'isometric': isometric,
    }[tag]
    assert np.array_equal(apply_projection(image, 16, 16, tag), direct(image, 16, 16))
    assert np.array_equal(
        apply_projection(image, 16, 16, ProjectionType(tag)), direct(image, 16, 16)
    )


def test_dispatch_isometric_parameters():
    """Offsets and rotations are forwarded to the isometric projection."""
    image = generate_rings(16)
    assert np.array_equal(
        apply_projection(image, 16, 16, 'isometric', 3, -2, 10, 20, 30),
        isometric(image, 16, 16, 3, -2, 10, 20, 30)
    )


def test_dispatch_unknown_returns_copy():
    """An unknown tag yields a byte-for-byte copy."""
    out = apply_projection(SAMPLE_2X2, 2, 2, 'bogus-type')
    assert out.tobytes() == SAMPLE_2X2
    out[:] = 0
    assert apply_projection(SAMPLE_2X2, 2, 2, 'Horizontal').tobytes() == SAMPLE_2X2


def test_all_projections_order():
    """all() returns horizontal, vertical, radial, angular."""
    image = generate_rings(12)
    results = apply_all_projections(image, 12, 12)
    assert len(results) == 4
    expected = [horizontal, vertical, radial, angular]
    for result, func in zip(results, expected):
        assert np.array_equal(result, func(image, 12, 12))


def test_dimension_mismatch_raises():
    """Projections reject buffers of the wrong length."""
    with pytest.raises(DimensionMismatchError):
        apply_projection(SAMPLE_2X2, 3, 3, 'horizontal')


def test_empty_image():
    """0x0 input gives empty output for every projection."""
    for tag in ['horizontal', 'vertical', 'radial', 'angular', 'isometric', 'bogus']:
        assert apply_projection(b'', 0, 0, tag).size == 0
