"""Intensity projections along rows, columns, radii, rings and an isometric height field."""

import logging
import math
from typing import List, Optional

import numpy as np

from engines.parallel import run_row_blocks
from models.engine_config import EngineConfig, DEFAULT_CONFIG
from models.pixel_buffer import BufferLike, as_rgba, flatten, luminance, saturate
from models.operation_types import ProjectionType
from utils.constants import (
    ANGULAR_RING_RADIUS,
    ISOMETRIC_BACKGROUND,
    ISOMETRIC_SCALE_X,
    ISOMETRIC_SCALE_Y,
    RADIAL_ANGLE_STEP,
)

logger = logging.getLogger(__name__)


def _round_half_up(values):
    return np.floor(np.asarray(values) + 0.5).astype(np.int64)


def _truncate(values: np.ndarray) -> np.ndarray:
    return np.floor(np.clip(values, 0, 255)).astype(np.uint8)


def _center(width: int, height: int):
    return width // 2, height // 2


def horizontal(data: BufferLike, width: int, height: int) -> np.ndarray:
    """Every pixel takes the integer mean R, G, B of its row."""
    rgba = as_rgba(data, width, height)
    result = rgba.copy()
    if rgba.size == 0:
        return flatten(result)

    sums = rgba[..., :3].astype(np.int64).sum(axis=1)
    result[..., :3] = (sums // width)[:, np.newaxis, :].astype(np.uint8)
    return flatten(result)


def vertical(data: BufferLike, width: int, height: int) -> np.ndarray:
    """Every pixel takes the integer mean R, G, B of its column."""
    rgba = as_rgba(data, width, height)
    result = rgba.copy()
    if rgba.size == 0:
        return flatten(result)

    sums = rgba[..., :3].astype(np.int64).sum(axis=0)
    result[..., :3] = (sums // height)[np.newaxis, :, :].astype(np.uint8)
    return flatten(result)


def radial(
    data: BufferLike,
    width: int,
    height: int,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """
    Walk a spiralling path from the center out to each pixel's radius.

    Step i samples the pixel at distance i along the pixel's own angle
    plus i * 0.1 rad; in-bounds samples are summed and divided by the
    pixel's distance. The center pixel keeps its source colour.
    Averages are truncated, which can read one level below a
    round-to-nearest byte store.
    """
    rgba = as_rgba(data, width, height)
    result = rgba.copy()
    if rgba.size == 0:
        return flatten(result)

    rgb = rgba[..., :3].astype(np.float64)
    cx, cy = _center(width, height)
    xs = np.arange(width)[np.newaxis, :] - cx

    def _project_rows(lo: int, hi: int) -> None:
        dy = np.arange(lo, hi)[:, np.newaxis] - cy
        dx = np.broadcast_to(xs, (hi - lo, width))
        dist = np.hypot(dx, dy)
        steps = np.floor(dist).astype(np.int64)
        base_angle = np.arctan2(dy, dx)
        sums = np.zeros((hi - lo, width, 3), dtype=np.float64)

        for i in range(int(steps.max()) + 1):
            angle = base_angle + i * RADIAL_ANGLE_STEP
            px = cx + _round_half_up(np.cos(angle) * i)
            py = cy + _round_half_up(np.sin(angle) * i)
            take = (steps >= i) & (px >= 0) & (px < width) & (py >= 0) & (py < height)
            if not take.any():
                continue
            sampled = rgb[np.clip(py, 0, height - 1), np.clip(px, 0, width - 1)]
            sums += sampled * take[..., np.newaxis]

        at_center = dist == 0
        safe_dist = np.where(at_center, 1.0, dist)
        projected = _truncate(sums / safe_dist[..., np.newaxis])
        projected[at_center] = rgba[lo:hi][at_center][:, :3]
        result[lo:hi, :, :3] = projected

    run_row_blocks(_project_rows, height, config)
    return flatten(result)


def angular(data: BufferLike, width: int, height: int) -> np.ndarray:
    """
    Broadcast the mean colour of a 5 px ring around the center.

    The ring is sampled at every integer degree; out-of-bounds samples add
    nothing but still count toward the 360 divisor. Output RGB is the same
    for every pixel, alpha is kept per pixel.
    The average is truncated, as in the radial projection.
    """
    rgba = as_rgba(data, width, height)
    result = rgba.copy()
    if rgba.size == 0:
        return flatten(result)

    cx, cy = _center(width, height)
    radians = np.deg2rad(np.arange(360))
    px = cx + _round_half_up(np.cos(radians) * ANGULAR_RING_RADIUS)
    py = cy + _round_half_up(np.sin(radians) * ANGULAR_RING_RADIUS)
    inside = (px >= 0) & (px < width) & (py >= 0) & (py < height)

    ring_sum = rgba[py[inside], px[inside], :3].astype(np.float64).sum(axis=0)
    result[..., :3] = _truncate(ring_sum / 360.0)
    return flatten(result)


def _rotate(x, y, z, rot_x: float, rot_y: float, rot_z: float):
    """Euler rotation X, then Y, then Z; angles in degrees."""
    ax, ay, az = (math.radians(a) for a in (rot_x, rot_y, rot_z))

    y, z = y * math.cos(ax) - z * math.sin(ax), y * math.sin(ax) + z * math.cos(ax)
    x, z = x * math.cos(ay) + z * math.sin(ay), -x * math.sin(ay) + z * math.cos(ay)
    x, y = x * math.cos(az) - y * math.sin(az), x * math.sin(az) + y * math.cos(az)
    return x, y, z


def isometric(
    data: BufferLike,
    width: int,
    height: int,
    offset_x: float = 0,
    offset_y: float = 0,
    rot_x: float = 0,
    rot_y: float = 0,
    rot_z: float = 0,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """
    Render luminance as a 2.5D height field seen through an isometric basis.

    Only every `iso_sample_step`-th pixel in each direction is drawn, so the
    output is a sparse point cloud over a dark blue background. Later
    points in row-major order overwrite earlier ones.
    """
    config = config or DEFAULT_CONFIG
    rgba = as_rgba(data, width, height)
    result = np.empty((height, width, 4), dtype=np.uint8)
    result[...] = ISOMETRIC_BACKGROUND
    if rgba.size == 0:
        return flatten(result)

    step = config.iso_sample_step
    grid_y, grid_x = np.meshgrid(
        np.arange(0, height, step), np.arange(0, width, step), indexing='ij'
    )
    grid_y = grid_y.reshape(-1)
    grid_x = grid_x.reshape(-1)
    brightness = luminance(rgba[grid_y, grid_x])

    x3d, y3d, z3d = _rotate(
        grid_x - width / 2,
        grid_y - height / 2,
        brightness * config.height_scale,
        rot_x, rot_y, rot_z
    )
    base_x = width * 0.2 + offset_x
    base_y = height * 0.1 + offset_y
    iso_x = np.floor((x3d - y3d) * ISOMETRIC_SCALE_X + base_x).astype(np.int64)
    iso_y = np.floor((x3d + y3d) * ISOMETRIC_SCALE_Y + base_y - z3d).astype(np.int64)

    visible = (iso_x >= 0) & (iso_x < width) & (iso_y >= 0) & (iso_y < height)
    iso_x, iso_y, brightness = iso_x[visible], iso_y[visible], brightness[visible]
    if iso_x.size == 0:
        return flatten(result)

    # last write wins at each destination
    flat = iso_y * width + iso_x
    _, first_from_end = np.unique(flat[::-1], return_index=True)
    keep = flat.size - 1 - first_from_end

    lightness = np.minimum(255.0, brightness[keep] + 60.0)
    shade = np.stack([lightness * 0.8, lightness * 0.9, lightness], axis=-1)
    result[iso_y[keep], iso_x[keep], :3] = saturate(shade)
    result[iso_y[keep], iso_x[keep], 3] = 255
    return flatten(result)


def apply_projection(
    data: BufferLike,
    width: int,
    height: int,
    projection_type,
    offset_x: float = 0,
    offset_y: float = 0,
    rot_x: float = 0,
    rot_y: float = 0,
    rot_z: float = 0,
    config: Optional[EngineConfig] = None
) -> np.ndarray:
    """Dispatch on a projection tag; unrecognized tags return a copy of the input."""
    kind = ProjectionType.from_tag(projection_type)
    logger.debug("Projection %s on %dx%d", kind.name, width, height)

    if kind is ProjectionType.HORIZONTAL:
        return horizontal(data, width, height)
    if kind is ProjectionType.VERTICAL:
        return vertical(data, width, height)
    if kind is ProjectionType.RADIAL:
        return radial(data, width, height, config)
    if kind is ProjectionType.ANGULAR:
        return angular(data, width, height)
    if kind is ProjectionType.ISOMETRIC:
        return isometric(data, width, height, offset_x, offset_y, rot_x, rot_y, rot_z, config)

    logger.warning("Unknown projection type %r, returning input unchanged", projection_type)
    return flatten(as_rgba(data, width, height))


def apply_all_projections(
    data: BufferLike,
    width: int,
    height: int,
    config: Optional[EngineConfig] = None
) -> List[np.ndarray]:
    """Horizontal, vertical, radial and angular results, in that order."""
    return [
        horizontal(data, width, height),
        vertical(data, width, height),
        radial(data, width, height, config),
        angular(data, width, height),
    ]
