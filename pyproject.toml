[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lowpoly"
version = "0.1.0"
description = "Turn photos and animated GIFs into low-poly art using Delaunay triangulation"
requires-python = ">=3.10"
keywords = ["low-poly", "delaunay", "image", "gif", "triangulation", "art"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]
dependencies = [
    "pillow",
    "numpy",
    "scipy",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
poly-convert = "lowpoly.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["lowpoly"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
