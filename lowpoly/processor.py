"""Loading, saving and resizing of still images and animated GIFs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from PIL import Image, ImageSequence

from lowpoly.poly import apply_low_poly

_DECODERS = {".jpg": "jpeg", ".jpeg": "jpeg", ".png": "png"}
_JPEG_QUALITY = 95


@dataclass
class GifAnimation:
    """Paletted frames of an animated GIF with their timing and canvas size."""

    frames: list[Image.Image]
    width: int
    height: int
    durations: list[int] = field(default_factory=list)
    loop: Optional[int] = 0

    def __len__(self) -> int:
        return len(self.frames)


def _to_paletted(image: Image.Image, palette) -> Image.Image:
    rgb = image.convert("RGB")
    if not palette:
        return rgb.convert("P", palette=Image.Palette.ADAPTIVE)
    holder = Image.new("P", (1, 1))
    holder.putpalette(palette)
    return rgb.quantize(palette=holder, dither=Image.Dither.NONE)


def load_image(path, ext: str) -> tuple[Image.Image, str]:
    """Decode the image at path with the decoder chosen by ext; return it and its format."""
    with open(path, "rb") as handle:
        fmt = _DECODERS.get(ext)
        if fmt is None:
            raise ValueError(f"unsupported image format: {ext}")
        with Image.open(handle, formats=[fmt.upper()]) as image:
            image.load()
            return image.copy(), fmt


def load_gif(path) -> GifAnimation:
    """Decode every frame of the GIF at path."""
    with Image.open(path, formats=["GIF"]) as image:
        base_palette = image.getpalette()
        width, height = image.size
        loop = image.info.get("loop")
        frames = []
        durations = []
        for frame in ImageSequence.Iterator(image):
            palette = frame.getpalette() if frame.mode == "P" else None
            frames.append(_to_paletted(frame.convert("RGBA"), palette or base_palette))
            durations.append(int(frame.info.get("duration", 0)))
    return GifAnimation(frames, width, height, durations, loop)


def save_image(image: Image.Image, path, fmt: str) -> None:
    """Encode image to path as 'jpeg' (quality 95) or 'png'."""
    if fmt == "jpeg":
        image.convert("RGB").save(path, format="JPEG", quality=_JPEG_QUALITY)
    elif fmt == "png":
        image.save(path, format="PNG")
    else:
        raise ValueError(f"unsupported image format for saving: {fmt}")


def save_gif(animation: GifAnimation, path) -> None:
    """Encode all frames of animation to path as a GIF."""
    if not animation.frames:
        raise ValueError("animation has no frames")
    first, *rest = animation.frames
    options = {"save_all": True, "append_images": rest, "optimize": False}
    if animation.durations:
        options["duration"] = list(animation.durations)
    if animation.loop is not None:
        options["loop"] = animation.loop
    first.save(path, format="GIF", **options)


def resize_image(image: Image.Image, width: int, height: int) -> Image.Image:
    """Scale image to width x height with Catmull-Rom (bicubic) interpolation."""
    if width <= 0 or height <= 0:
        raise ValueError(f"invalid target size {width}x{height}")
    return image.convert("RGBA").resize((width, height), Image.Resampling.BICUBIC)


def resize_gif(
    animation: GifAnimation,
    width: int,
    height: int,
    intensity: int,
    progress: Optional[Callable[[int], object]] = None,
) -> GifAnimation:
    """Resize (when asked) and low-poly every frame, keeping each frame's palette.

    A zero width or height keeps the animation's own canvas size. progress,
    if given, is called with 1 after each frame.
    """
    if width > 0 and height > 0:
        new_size = (width, height)
    else:
        new_size = (animation.width, animation.height)
    animation.width, animation.height = new_size
    resize = width > 0 or height > 0

    processed_frames = []
    for frame in animation.frames:
        palette = frame.getpalette()
        image = frame
        if resize:
            image = _to_paletted(resize_image(frame, width, height), palette)
        processed = apply_low_poly(image, intensity)
        if processed.size != new_size:
            canvas = Image.new("RGBA", new_size)
            canvas.paste(processed, (0, 0))
            processed = canvas
        processed_frames.append(_to_paletted(processed, palette))
        if progress is not None:
            progress(1)
    animation.frames = processed_frames
    return animation