import numpy as np
import pytest
from PIL import Image

from lowpoly.poly import (
    apply_low_poly,
    compute_average_color,
    fill_triangle,
    is_point_in_triangle,
)


def test_vertex_is_inside():
    assert is_point_in_triangle(0.0, 0.0, 0.0, 0.0, 4.0, 0.0, 0.0, 4.0) is True


def test_centroid_is_inside():
    assert is_point_in_triangle(1.0, 1.0, 0.0, 0.0, 4.0, 0.0, 0.0, 4.0) is True


def test_point_beyond_hypotenuse_is_outside():
    assert is_point_in_triangle(3.0, 3.0, 0.0, 0.0, 4.0, 0.0, 0.0, 4.0) is False


def test_degenerate_triangle_contains_nothing():
    assert is_point_in_triangle(1.0, 1.0, 0.0, 0.0, 1.0, 1.0, 2.0, 2.0) is False


def test_average_of_uniform_region_is_that_color():
    pixels = np.zeros((10, 10, 4), dtype=np.uint8)
    pixels[:] = (12, 200, 77, 255)
    result = compute_average_color(pixels, (0.0, 0.0), (9.0, 0.0), (0.0, 9.0))
    assert result == (12, 200, 77, 255)


def test_average_without_covered_pixels_is_opaque_black():
    pixels = np.full((4, 4, 4), 255, dtype=np.uint8)
    result = compute_average_color(pixels, (0.2, 0.2), (0.8, 0.3), (0.5, 0.8))
    assert result == (0, 0, 0, 255)


def test_average_lies_between_extremes():
    pixels = np.zeros((10, 10, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    pixels[:, :5, 0] = 200
    pixels[:, 5:, 0] = 100
    r, g, b, a = compute_average_color(pixels, (0.0, 0.0), (9.0, 0.0), (0.0, 9.0))
    assert 100 <= r <= 200
    assert (g, b, a) == (0, 0, 255)


def test_fill_triangle_paints_inside_only():
    pixels = np.zeros((5, 5, 4), dtype=np.uint8)
    fill_triangle(pixels, (0.0, 0.0), (4.0, 0.0), (0.0, 4.0), (1, 2, 3, 4))
    assert tuple(pixels[0, 0]) == (1, 2, 3, 4)
    assert tuple(pixels[2, 1]) == (1, 2, 3, 4)
    assert tuple(pixels[4, 4]) == (0, 0, 0, 0)


def test_fill_triangle_ignores_out_of_bounds():
    pixels = np.zeros((3, 3, 4), dtype=np.uint8)
    fill_triangle(pixels, (0.0, 0.0), (10.0, 0.0), (0.0, 10.0), (9, 9, 9, 9))
    assert (pixels == 9).all()


def test_uniform_image_stays_uniform():
    image = Image.new("RGB", (40, 30), (10, 120, 230))
    result = apply_low_poly(image, 100, np.random.default_rng(1))
    assert result.size == (40, 30)
    assert result.mode == "RGBA"
    assert result.getcolors() == [(40 * 30, (10, 120, 230, 255))]


def test_same_seed_gives_same_output():
    gradient = np.tile(np.arange(64, dtype=np.uint8), (48, 1))
    image = Image.fromarray(np.stack([gradient, gradient[::-1], gradient], axis=-1))
    first = apply_low_poly(image, 50, np.random.default_rng(3))
    second = apply_low_poly(image, 50, np.random.default_rng(3))
    assert first.tobytes() == second.tobytes()


def test_output_uses_fewer_colors_than_gradient():
    gradient = np.tile(np.arange(0, 256, 4, dtype=np.uint8), (64, 1))
    image = Image.fromarray(np.stack([gradient, gradient.T, gradient], axis=-1))
    original_colors = len(image.getcolors(maxcolors=100000))
    result = apply_low_poly(image, 100, np.random.default_rng(5))
    assert len(result.getcolors(maxcolors=100000)) < original_colors


def test_empty_image_is_rejected():
    with pytest.raises(ValueError):
        apply_low_poly(Image.new("RGB", (0, 5)), 50)