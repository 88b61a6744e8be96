"""Low-poly image and GIF conversion through Delaunay triangulation."""

__version__ = "0.1.0"
__all__ = ["__version__"]