"""Rendering components for the 3D boids simulation."""

from .flock_renderer import FlockRenderer
from .grid import Grid
from .text import TextRenderer

__all__ = ["FlockRenderer", "Grid", "TextRenderer"]
