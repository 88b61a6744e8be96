# lowpoly

Turn JPEG, PNG and animated GIF images into low-poly art. Random points
are scattered over the image, joined with the four image corners into a
Delaunay triangulation, and each triangle is filled with the average
colour of the pixels it covers.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command line

```
poly-convert [options] <input image>
```

The result is written next to the input with `-low-poly` added before the
extension, so `photo.jpg` becomes `photo-low-poly.jpg`.

Options (each can be written with one dash or two):

- `-resize WIDTHxHEIGHT`: resize before processing, e.g. `-resize 800x600`.
  Both numbers are required; a zero in either is reported as an error.
- `-intensity N`: how many triangulation points to use, from 1 to 100
  (default 100). Values outside that range are refused.
- `-showProgress`: show a progress bar while working.
- `-debug`: write `cpu.prof` (call counts and cumulative time per Python
  function, as tab-separated text) and `mem.prof` (a `tracemalloc`
  snapshot) to the current directory. An unexpected error is then
  reported with its stack trace instead of aborting.

Examples:

```
poly-convert photo.jpg
poly-convert -intensity 40 -resize 640x480 animation.gif
```

Supported inputs are `.jpg`, `.jpeg`, `.png` and `.gif` (matched without
regard to case). JPEG output is written at quality 95. For GIFs every
frame is processed and re-quantized, without dithering, to that frame's
own palette; frame durations and the loop count are kept. Any other
extension is rejected. The command exits with status 0 on success and 1
on any error.

## Library use

```python
import numpy as np
from lowpoly.poly import apply_low_poly
from lowpoly.processor import load_image, save_image, resize_image

image, fmt = load_image("photo.png", ".png")
image = resize_image(image, 400, 300)
result = apply_low_poly(image, 60, np.random.default_rng(1))
save_image(result, "photo-low-poly.png", fmt)
```

`apply_low_poly` returns an RGBA image; its optional third argument is a
numpy `Generator` that places the random points, so passing a seeded one
makes the output repeatable.

Animated GIFs use `load_gif`, `resize_gif` and `save_gif` from
`lowpoly.processor`, which work on a `GifAnimation` (its `frames`,
`width`, `height`, `durations` and `loop`). `resize_gif` accepts an
optional callable that is called with `1` after each frame, for example a
`tqdm` bar's `update`.

The lower-level pieces `is_point_in_triangle`, `compute_average_color`
and `fill_triangle` in `lowpoly.poly` work on plain coordinates and on
`(height, width, 4)` numpy arrays.

The density is one triangulation point per 500 pixels, scaled by the
intensity, with at least 10 points plus the four image corners.

## Limitations

The command line offers no seed option, so two runs over the same file
give different results. Only the formats listed above are read and
written; the output format always follows the input's extension.