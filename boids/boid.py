"""Individual boid entity with position, velocity, and cached speed."""

import numpy as np
from dataclasses import dataclass, field

# Maximum starting velocity per axis
INITIAL_SPEED_MULTIPLIER = 2.0

# Cached speed of a freshly spawned boid, read by the first boundary check
INITIAL_SPEED = 1.0


@dataclass
class Boid:
    """
    A single boid (bird-oid object) in the simulation.

    Attributes:
        position: 3D position vector
        velocity: 3D velocity vector, a displacement per fixed step
        speed: |velocity| as of the last speed clamp
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    speed: float = INITIAL_SPEED

    @classmethod
    def spawn(cls, interior: np.ndarray, rng: np.random.Generator) -> "Boid":
        """
        Create a boid at a random point of the interior volume.

        Args:
            interior: Half-dimensions of the spawn volume (the soft wall)
            rng: Random source

        Returns:
            A boid with a random velocity bounded by INITIAL_SPEED_MULTIPLIER
        """
        position = (rng.random(3) * 2.0 - 1.0) * interior
        velocity = (rng.random(3) - 0.5) * 2.0 * INITIAL_SPEED_MULTIPLIER
        return cls(position=position, velocity=velocity, speed=INITIAL_SPEED)

    def heading(self) -> np.ndarray:
        """Unit vector along the velocity, or zero for a stationary boid."""
        mag = np.linalg.norm(self.velocity)
        if mag < 1e-4:
            return np.zeros(3)
        return self.velocity / mag
