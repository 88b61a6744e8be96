"""Command-line entry point: turn an image or GIF into a low-poly version."""

from __future__ import annotations

import argparse
import os
import re
import sys
import time
import tracemalloc
import traceback
from collections import defaultdict

from tqdm import tqdm

from lowpoly.poly import apply_low_poly
from lowpoly.processor import (
    load_gif,
    load_image,
    resize_gif,
    resize_image,
    save_gif,
    save_image,
)

_RESIZE_PATTERN = re.compile(r"([0-9]+)x([0-9]+)")
_USAGE = "Usage: poly-convert [options] <input image>"


def parse_resize(dimensions: str) -> tuple[int, int]:
    """Parse 'WIDTHxHEIGHT'; an empty string means no resize, (0, 0)."""
    if dimensions == "":
        return 0, 0
    match = _RESIZE_PATTERN.fullmatch(dimensions)
    if match is None:
        raise ValueError("invalid resize format, expected WIDTHxHEIGHT (e.g., 800x600)")
    return int(match.group(1)), int(match.group(2))


def _split_extension(path: str) -> tuple[str, str, str]:
    directory, base = os.path.split(path)
    dot = base.rfind(".")
    if dot < 0:
        return directory, base, ""
    return directory, base[:dot], base[dot:]


def output_path_for(input_path: str) -> str:
    """Return the path beside input_path with '-low-poly' before the extension."""
    directory, name, extension = _split_extension(input_path)
    return os.path.join(directory, f"{name}-low-poly{extension}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="poly-convert")
    parser.add_argument(
        "-resize", "--resize", default="",
        help="Resize the image to the specified dimensions (e.g., 800x600)",
    )
    parser.add_argument(
        "-intensity", "--intensity", type=int, default=100,
        help="Set the intensity of the image processing (1-100)",
    )
    parser.add_argument(
        "-debug", "--debug", action="store_true",
        help="Enable debug mode (writes cpu.prof and mem.prof)",
    )
    parser.add_argument(
        "-showProgress", "--showProgress", dest="show_progress", action="store_true",
        help="Show progress bar during processing",
    )
    parser.add_argument("input", nargs="?", help="input image")
    return parser


def _process_gif(input_path, output_path, width, height, intensity, show_progress) -> int:
    try:
        animation = load_gif(input_path)
    except (OSError, ValueError) as exc:
        print("Error loading GIF:", exc)
        return 1
    bar = tqdm(total=len(animation), desc="Processing frames...") if show_progress else None
    try:
        resize_gif(animation, width, height, intensity, bar.update if bar else None)
    except ValueError as exc:
        print("Error processing GIF:", exc)
        return 1
    finally:
        if bar is not None:
            bar.close()
    try:
        save_gif(animation, output_path)
    except (OSError, ValueError) as exc:
        print("Error saving GIF:", exc)
        return 1
    print("GIF processed successfully")
    return 0


def _process_static(input_path, output_path, ext, width, height, intensity, show_progress) -> int:
    bar = tqdm(total=1, desc="Processing image...") if show_progress else None
    try:
        try:
            image, fmt = load_image(input_path, ext)
        except (OSError, ValueError) as exc:
            print("Error loading image:", exc)
            return 1
        if width > 0 or height > 0:
            print(f"Resizing image to {width}x{height}")
            try:
                image = resize_image(image, width, height)
            except ValueError as exc:
                print("Error resizing image:", exc)
                return 1
        result = apply_low_poly(image, intensity)
        if bar is not None:
            bar.update(1)
        try:
            save_image(result, output_path, fmt)
        except (OSError, ValueError) as exc:
            print("Error saving image:", exc)
            return 1
        return 0
    finally:
        if bar is not None:
            bar.close()


def _run(args) -> int:
    input_path = args.input
    output_path = output_path_for(input_path)
    ext = _split_extension(input_path)[2].lower()

    try:
        width, height = parse_resize(args.resize)
    except ValueError as exc:
        print("Error parsing resize dimensions:", exc)
        return 1

    intensity = args.intensity
    if not 1 <= intensity <= 100:
        print("Intensity must be between 1 and 100")
        return 1

    print(f"Processing image: {input_path}")
    print(f"Output will be saved to: {output_path}")

    if ext == ".gif":
        status = _process_gif(input_path, output_path, width, height, intensity, args.show_progress)
    elif ext in (".jpg", ".jpeg", ".png"):
        status = _process_static(
            input_path, output_path, ext, width, height, intensity, args.show_progress
        )
    else:
        print(f"Unsupported image format: {ext}")
        return 1
    if status:
        return status
    print("Image processing complete. Low-poly image saved successfully.")
    return 0


class _CallProfiler:
    """Collects call counts and cumulative time per Python function."""

    def __init__(self) -> None:
        self._calls: dict[tuple[str, int, str], int] = defaultdict(int)
        self._totals: dict[tuple[str, int, str], float] = defaultdict(float)
        self._stack: list[tuple[tuple[str, int, str], float]] = []

    def _hook(self, frame, event, arg) -> None:
        if event == "call":
            code = frame.f_code
            key = (code.co_filename, code.co_firstlineno, code.co_name)
            self._calls[key] += 1
            self._stack.append((key, time.perf_counter()))
        elif event == "return" and self._stack:
            key, started = self._stack.pop()
            self._totals[key] += time.perf_counter() - started

    def __enter__(self) -> "_CallProfiler":
        sys.setprofile(self._hook)
        return self

    def __exit__(self, *exc_info) -> None:
        sys.setprofile(None)

    def dump(self, path: str) -> None:
        ranked = sorted(self._totals.items(), key=lambda item: item[1], reverse=True)
        with open(path, "w", encoding="utf-8") as out:
            out.write("calls\tcumulative_s\tfunction\n")
            for (filename, line, name), total in ranked:
                out.write(f"{self._calls[(filename, line, name)]}\t{total:.6f}\t"
                          f"{filename}:{line}({name})\n")


def _run_with_profiling(args) -> int:
    profiler = _CallProfiler()
    tracemalloc.start()
    try:
        with profiler:
            status = _run(args)
    except Exception as exc:  # report and keep the profiles
        print("Recovered from panic:", exc)
        print("Stack trace:", traceback.format_exc())
        tracemalloc.stop()
        return 1
    finally:
        profiler.dump("cpu.prof")
    tracemalloc.take_snapshot().dump("mem.prof")
    tracemalloc.stop()
    return status


def main(argv=None) -> int:
    """Run the converter; return the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.input is None:
        print(_USAGE)
        parser.print_help(sys.stdout)
        return 1
    if args.debug:
        return _run_with_profiling(args)
    return _run(args)


if __name__ == "__main__":
    sys.exit(main())