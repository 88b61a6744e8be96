"""Low-poly rendering: Delaunay triangulation filled with average colours."""

from __future__ import annotations

import numpy as np
from PIL import Image
from scipy.spatial import Delaunay, QhullError

# One triangulation point per this many pixels.
DENSITY = 500
# Never use fewer random points than this.
MIN_POINTS = 10

_BLACK = (0, 0, 0, 255)


def _triangle_mask(px, py, ax, ay, bx, by, cx, cy):
    """Barycentric inside test; works on scalars and numpy arrays alike."""
    p1x, p1y = cx - ax, cy - ay
    p2x, p2y = bx - ax, by - ay
    p3x, p3y = px - ax, py - ay

    dot0 = p1x * p1x + p1y * p1y
    dot1 = p1x * p2x + p1y * p2y
    dot2 = p1x * p3x + p1y * p3y
    dot3 = p2x * p2x + p2y * p2y
    dot4 = p2x * p3x + p2y * p3y

    denominator = (dot0 * dot3) - (dot1 * dot1)
    if denominator == 0:
        return np.zeros(np.shape(px), dtype=bool)

    inverted = 1 / denominator
    u = ((dot3 * dot2) - (dot1 * dot4)) * inverted
    v = ((dot0 * dot4) - (dot1 * dot2)) * inverted
    return (u >= 0) & (v >= 0) & (u + v <= 1)


def is_point_in_triangle(px, py, ax, ay, bx, by, cx, cy) -> bool:
    """Return whether (px, py) lies inside the triangle a, b, c."""
    return bool(_triangle_mask(px, py, ax, ay, bx, by, cx, cy))


def _bounding_grid(a, b, c):
    xs = (a[0], b[0], c[0])
    ys = (a[1], b[1], c[1])
    columns = np.arange(int(min(xs)), int(max(xs)) + 1, dtype=float)
    rows = np.arange(int(min(ys)), int(max(ys)) + 1, dtype=float)
    return np.meshgrid(columns, rows)


def _inside(pixels, a, b, c):
    """Grid coordinates inside the triangle and the in-bounds subset of them."""
    gx, gy = _bounding_grid(a, b, c)
    mask = _triangle_mask(gx, gy, a[0], a[1], b[0], b[1], c[0], c[1])
    height, width = pixels.shape[:2]
    in_bounds = mask & (gx >= 0) & (gx < width) & (gy >= 0) & (gy < height)
    rows = gy[in_bounds].astype(np.intp)
    cols = gx[in_bounds].astype(np.intp)
    return int(mask.sum()), rows, cols


def compute_average_color(image, a, b, c) -> tuple[int, int, int, int]:
    """Average RGBA colour of the pixels of an (H, W, 4) array inside a triangle.

    Pixels outside the array count as transparent black. A triangle that
    covers no pixel centre yields opaque black.
    """
    count, rows, cols = _inside(image, a, b, c)
    if count == 0:
        return _BLACK
    totals = image[rows, cols].astype(np.uint64).sum(axis=0) * 257
    return tuple(int(total // count) >> 8 for total in totals)


def fill_triangle(image, a, b, c, color) -> None:
    """Paint every pixel of an (H, W, 4) array inside the triangle with colour."""
    _, rows, cols = _inside(image, a, b, c)
    image[rows, cols] = color


def _premultiplied(image: Image.Image) -> np.ndarray:
    rgba = image.convert("RGBA").convert("RGBa")
    width, height = rgba.size
    data = np.frombuffer(rgba.tobytes(), dtype=np.uint8)
    return data.reshape(height, width, 4).copy()


def apply_low_poly(image: Image.Image, intensity: int, rng=None) -> Image.Image:
    """Return an RGBA low-poly rendering of image.

    intensity (1-100) scales the number of random triangulation points;
    rng is a numpy Generator used to place them.
    """
    width, height = image.size
    if width == 0 or height == 0:
        raise ValueError("cannot apply low-poly effect to an empty image")
    if rng is None:
        rng = np.random.default_rng()

    source = _premultiplied(image)
    out = source.copy()

    count = max((width * height // DENSITY) * intensity // 100, MIN_POINTS)
    random_points = rng.random((count, 2)) * np.array([width, height], dtype=float)
    corners = np.array(
        [[0, 0], [width - 1, 0], [0, height - 1], [width - 1, height - 1]],
        dtype=float,
    )
    points = np.vstack([random_points, corners])

    try:
        triangulation = Delaunay(points)
    except QhullError:
        triangulation = None

    if triangulation is not None:
        for simplex in triangulation.simplices:
            a, b, c = (tuple(float(v) for v in points[i]) for i in simplex)
            fill_triangle(out, a, b, c, compute_average_color(source, a, b, c))

    return Image.frombytes("RGBa", (width, height), out.tobytes()).convert("RGBA")