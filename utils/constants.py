"""Stock convolution kernel weights."""

import numpy as np

GAUSSIAN_BLUR_5X5 = np.array([
    [1, 4, 7, 4, 1],
    [4, 16, 26, 16, 4],
    [7, 26, 41, 26, 7],
    [4, 16, 26, 16, 4],
    [1, 4, 7, 4, 1],
], dtype=np.float64) / 273.0

SHARPEN = np.array([
    [0, -1, 0],
    [-1, 5, -1],
    [0, -1, 0],
], dtype=np.float64)

MEAN_REMOVAL = np.array([
    [-1, -1, -1],
    [-1, 8, -1],
    [-1, -1, -1],
], dtype=np.float64) / 9.0

EMBOSS_LAPLACIAN = np.array([
    [-1, 0, -1],
    [0, 4, 0],
    [-1, 0, -1],
], dtype=np.float64)

SOBEL = np.array([
    [-1, -2, -1],
    [0, 0, 0],
    [1, 2, 1],
], dtype=np.float64)

HORIZONTAL_EDGE = np.array([
    [-1, 0, 1],
    [-2, 0, 2],
    [-1, 0, 1],
], dtype=np.float64)

VERTICAL_EDGE = np.array([
    [-1, -2, -1],
    [0, 0, 0],
    [1, 2, 1],
], dtype=np.float64)

IDENTITY = np.array([
    [0, 0, 0],
    [0, 1, 0],
    [0, 0, 0],
], dtype=np.float64)

# Selector names are part of the public contract; "Laplascian" is intentional.
KERNEL_WEIGHTS = {
    "Identity": IDENTITY,
    "Gaussian Blur": GAUSSIAN_BLUR_5X5,
    "Sharpen": SHARPEN,
    "Mean Removal": MEAN_REMOVAL,
    "Emboss Laplascian": EMBOSS_LAPLACIAN,
    "Sobel": SOBEL,
    "Horizontal Edge": HORIZONTAL_EDGE,
    "Vertical Edge": VERTICAL_EDGE,
}

BIAS_SCALE_KERNELS = frozenset({"Mean Removal"})

ISOMETRIC_BACKGROUND = (20, 20, 40, 255)
ISOMETRIC_SCALE_X = 0.5
ISOMETRIC_SCALE_Y = 0.3
ANGULAR_RING_RADIUS = 5
RADIAL_ANGLE_STEP = 0.1
