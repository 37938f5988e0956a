"""Mesh coupling utilities: point search, reverse classification, message layouts and interpolation kernels."""

__version__ = "0.1.0"