"""Live flock configuration shared between the simulation and its controls."""

import numpy as np
from dataclasses import dataclass, field, fields

from config import flock as defaults


def _default_extent() -> np.ndarray:
    return np.array(defaults.FLOCK["boundary_extent"], dtype=np.float64)


@dataclass
class FlockConfig:
    """
    Tunable flock parameters, read by the engine on every step.

    The engine never copies or mutates this object, so edits made between
    steps (by sliders, presets, tests) take effect on the next step.

    Preconditions, not checked at runtime:
        speed_min <= speed_max, non-negative radii, 0 <= boundary_threshold < 1.

    Attributes:
        boundary_extent: Half-dimensions of the bounding volume
        boundary_threshold: Fraction of the extent taken by the soft wall
        boundary_rate: Boundary steering gain per unit time
        cohesion_rate: Cohesion gain per unit time
        alignment_rate: Alignment gain per step (not time-scaled)
        separation_distance: Neighbors closer than this repel
        separation_rate: Repulsion gain
        vision_radius: Neighbors closer than this are flockmates
        speed_min: Minimum speed per unit time
        speed_max: Maximum speed per unit time
    """
    boundary_extent: np.ndarray = field(default_factory=_default_extent)
    boundary_threshold: float = defaults.FLOCK["boundary_threshold"]
    boundary_rate: float = defaults.FLOCK["boundary_rate"]
    cohesion_rate: float = defaults.FLOCK["cohesion_rate"]
    alignment_rate: float = defaults.FLOCK["alignment_rate"]
    separation_distance: float = defaults.FLOCK["separation_distance"]
    separation_rate: float = defaults.FLOCK["separation_rate"]
    vision_radius: float = defaults.FLOCK["vision_radius"]
    speed_min: float = defaults.FLOCK["speed_min"]
    speed_max: float = defaults.FLOCK["speed_max"]

    def __setattr__(self, name, value):
        # Any assigned extent is stored as a private float64 copy
        if name == "boundary_extent":
            value = np.array(value, dtype=np.float64)
        super().__setattr__(name, value)

    @property
    def soft_wall(self) -> np.ndarray:
        """Interior distance per axis at which boundary steering begins."""
        return self.boundary_extent * (1.0 - self.boundary_threshold)

    @classmethod
    def from_dict(cls, values: dict) -> "FlockConfig":
        """Build a config from a dict, ignoring keys that are not config fields."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in names})

    def update(self, values: dict):
        """Overwrite fields in place from a dict of overrides."""
        names = {f.name for f in fields(self)}
        for name, value in values.items():
            if name not in names:
                raise KeyError(f"Unknown flock setting: {name}")
            setattr(self, name, value)

    def to_dict(self) -> dict:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["boundary_extent"] = tuple(float(v) for v in self.boundary_extent)
        return out
