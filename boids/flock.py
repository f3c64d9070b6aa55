"""Flock management: the active boid set and its lifecycle."""

import numpy as np
from typing import Iterator

from config import flock as config
from .boid import Boid
from .flock_config import FlockConfig


class Flock:
    """
    The active set of boids, stored as contiguous arrays for the engine.

    Boids have no identity beyond their slot. New boids are appended at the
    end and removal always pops the most recently added one, so resizing
    never disturbs the state of the boids that remain.
    """

    def __init__(self, flock_config: FlockConfig, count: int = None, seed: int = None):
        self.config = flock_config
        self.rng = np.random.default_rng(seed)

        # Boid data (float64 for physics accuracy)
        self.positions = np.zeros((0, 3), dtype=np.float64)
        self.velocities = np.zeros((0, 3), dtype=np.float64)
        self.speeds = np.zeros(0, dtype=np.float64)

        count = config.FLOCK["count"] if count is None else count
        self.set_count(count)
        print(f"[Flock] Initialized {self.num_boids:,} boids")

    @property
    def num_boids(self) -> int:
        return len(self.speeds)

    def __len__(self) -> int:
        return self.num_boids

    def __iter__(self) -> Iterator[Boid]:
        for i in range(self.num_boids):
            yield self.boid(i)

    def boid(self, index: int) -> Boid:
        """Snapshot of one boid's state, safe to keep across steps."""
        return Boid(
            position=self.positions[index].copy(),
            velocity=self.velocities[index].copy(),
            speed=float(self.speeds[index]),
        )

    def create_boid(self) -> Boid:
        """Spawn a boid inside the soft wall and append it to the flock."""
        boid = Boid.spawn(self.config.soft_wall, self.rng)
        self.positions = np.vstack([self.positions, boid.position[None, :]])
        self.velocities = np.vstack([self.velocities, boid.velocity[None, :]])
        self.speeds = np.append(self.speeds, boid.speed)
        return boid

    def destroy_boid(self) -> Boid:
        """Remove the most recently created boid and return its final state."""
        if self.num_boids == 0:
            raise IndexError("destroy_boid() on an empty flock")

        boid = self.boid(self.num_boids - 1)
        self.positions = self.positions[:-1].copy()
        self.velocities = self.velocities[:-1].copy()
        self.speeds = self.speeds[:-1].copy()
        return boid

    def set_count(self, count: int):
        """Grow or shrink the flock one boid at a time until it holds ``count``."""
        if count < 0:
            raise ValueError(f"Boid count must be non-negative, got {count}")

        while self.num_boids < count:
            self.create_boid()
        while self.num_boids > count:
            self.destroy_boid()

    def reset(self):
        """Replace every boid with a freshly spawned one."""
        count = self.num_boids
        self.set_count(0)
        self.set_count(count)
        print(f"[Flock] Reset {count:,} boids")
