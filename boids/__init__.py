"""Flocking simulation core."""

from .boid import Boid
from .clock import SimulationClock
from .engine import FlockEngine, StepConstants
from .flock import Flock
from .flock_config import FlockConfig

__all__ = ["Boid", "SimulationClock", "FlockEngine", "StepConstants", "Flock", "FlockConfig"]
