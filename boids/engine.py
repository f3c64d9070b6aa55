"""Fixed-step flocking engine: steering rules, speed limits, and integration."""

import math
import numpy as np
from dataclasses import dataclass
from numba import njit

from .flock_config import FlockConfig

# Floor on |velocity| when rescaling up to the minimum speed
SPEED_EPSILON = 1e-4


# ============================================================================
# NUMBA JIT-COMPILED KERNELS
# ============================================================================

@njit(cache=True)
def compute_velocity_deltas(
    positions: np.ndarray,
    velocities: np.ndarray,
    speeds: np.ndarray,
    deltas: np.ndarray,
    soft_wall: np.ndarray,
    separation_distance: float,
    separation_rate: float,
    vision_radius: float,
    cohesion_force: float,
    alignment_rate: float,
    boundary_force: float,
    num_boids: int
):
    """
    Brute-force O(n²) steering for every boid.

    Reads only the input arrays and writes only ``deltas``, so every boid
    sees the same pre-step state of its neighbors.
    """
    for i in range(num_boids):
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]
        vx, vy, vz = velocities[i, 0], velocities[i, 1], velocities[i, 2]

        dvx, dvy, dvz = 0.0, 0.0, 0.0
        com_x, com_y, com_z = 0.0, 0.0, 0.0
        avg_x, avg_y, avg_z = 0.0, 0.0, 0.0
        neighbor_count = 0

        for j in range(num_boids):
            if i == j:
                continue

            ox, oy, oz = positions[j, 0], positions[j, 1], positions[j, 2]
            dx = px - ox
            dy = py - oy
            dz = pz - oz
            distance = math.sqrt(dx * dx + dy * dy + dz * dz)

            # Flat repulsion from anything inside the separation distance
            if distance < separation_distance:
                dvx -= (ox - px) * separation_rate
                dvy -= (oy - py) * separation_rate
                dvz -= (oz - pz) * separation_rate

            if distance < vision_radius:
                com_x += ox
                com_y += oy
                com_z += oz
                avg_x += velocities[j, 0]
                avg_y += velocities[j, 1]
                avg_z += velocities[j, 2]
                neighbor_count += 1

        # A lone boid is its own flock: nothing to steer toward or align to
        if neighbor_count == 0:
            com_x, com_y, com_z = px, py, pz
            avg_x, avg_y, avg_z = vx, vy, vz
            neighbor_count = 1

        com_x /= neighbor_count
        com_y /= neighbor_count
        com_z /= neighbor_count
        avg_x /= neighbor_count
        avg_y /= neighbor_count
        avg_z /= neighbor_count

        # Cohesion
        dvx += (com_x - px) * cohesion_force
        dvy += (com_y - py) * cohesion_force
        dvz += (com_z - pz) * cohesion_force

        # Alignment
        dvx += (avg_x - vx) * alignment_rate
        dvy += (avg_y - vy) * alignment_rate
        dvz += (avg_z - vz) * alignment_rate

        # Boundary avoidance, scaled by the boid's own cached speed
        push = boundary_force * speeds[i]
        if px > soft_wall[0]:
            dvx += (soft_wall[0] - px) * push
        elif px < -soft_wall[0]:
            dvx += (-soft_wall[0] - px) * push
        if py > soft_wall[1]:
            dvy += (soft_wall[1] - py) * push
        elif py < -soft_wall[1]:
            dvy += (-soft_wall[1] - py) * push
        if pz > soft_wall[2]:
            dvz += (soft_wall[2] - pz) * push
        elif pz < -soft_wall[2]:
            dvz += (-soft_wall[2] - pz) * push

        deltas[i, 0] = dvx
        deltas[i, 1] = dvy
        deltas[i, 2] = dvz


@njit(cache=True)
def integrate_numba(
    positions: np.ndarray,
    velocities: np.ndarray,
    speeds: np.ndarray,
    deltas: np.ndarray,
    min_speed: float,
    max_speed: float,
    num_boids: int
):
    """Apply velocity deltas, clamp speeds, and take an explicit Euler step."""
    for i in range(num_boids):
        velocities[i, 0] += deltas[i, 0]
        velocities[i, 1] += deltas[i, 1]
        velocities[i, 2] += deltas[i, 2]

        mag = math.sqrt(
            velocities[i, 0] ** 2 +
            velocities[i, 1] ** 2 +
            velocities[i, 2] ** 2
        )
        if mag > max_speed:
            scale = max_speed / mag
            velocities[i, 0] *= scale
            velocities[i, 1] *= scale
            velocities[i, 2] *= scale
            speeds[i] = max_speed
        elif mag < min_speed:
            scale = min_speed / max(mag, SPEED_EPSILON)
            velocities[i, 0] *= scale
            velocities[i, 1] *= scale
            velocities[i, 2] *= scale
            speeds[i] = min_speed
        else:
            speeds[i] = mag

        positions[i, 0] += velocities[i, 0]
        positions[i, 1] += velocities[i, 1]
        positions[i, 2] += velocities[i, 2]


# ============================================================================
# ENGINE
# ============================================================================

@dataclass(frozen=True, eq=False)
class StepConstants:
    """Per-step quantities derived from the config rates and the step size."""
    cohesion_force: float
    boundary_force: float
    min_speed: float
    max_speed: float
    soft_wall: np.ndarray

    @classmethod
    def derive(cls, config: FlockConfig, dt: float) -> "StepConstants":
        return cls(
            cohesion_force=config.cohesion_rate * dt,
            boundary_force=config.boundary_rate * dt,
            min_speed=config.speed_min * dt,
            max_speed=config.speed_max * dt,
            soft_wall=np.ascontiguousarray(config.soft_wall, dtype=np.float64),
        )


class FlockEngine:
    """
    Advances a whole flock by one fixed timestep.

    Stateless between calls: the flock arrays are the only state, and the
    config is read fresh on every step.
    """

    def __init__(self):
        self._warmup_numba()

    def _warmup_numba(self):
        """Pre-compile the kernels so the first real step does not stall."""
        n = 8
        pos = np.random.rand(n, 3) * 10.0
        vel = np.random.rand(n, 3)
        speeds = np.ones(n)
        deltas = np.zeros((n, 3))
        wall = np.full(3, 5.0)

        compute_velocity_deltas(pos, vel, speeds, deltas, wall, 2.0, 0.001, 4.0, 0.001, 0.01, 0.001, n)
        integrate_numba(pos, vel, speeds, deltas, 0.5, 2.0, n)

    def steering(self, flock, config: FlockConfig, dt: float) -> np.ndarray:
        """
        Velocity change each boid would receive this step.

        Returns:
            (n, 3) array of deltas; the flock is left untouched
        """
        return self._steering(flock, config, StepConstants.derive(config, dt))

    def _steering(self, flock, config: FlockConfig, k: StepConstants) -> np.ndarray:
        n = flock.num_boids
        deltas = np.zeros((n, 3), dtype=np.float64)
        if n == 0:
            return deltas

        compute_velocity_deltas(
            flock.positions,
            flock.velocities,
            flock.speeds,
            deltas,
            k.soft_wall,
            float(config.separation_distance),
            float(config.separation_rate),
            float(config.vision_radius),
            float(k.cohesion_force),
            float(config.alignment_rate),
            float(k.boundary_force),
            n
        )
        return deltas

    def step(self, flock, config: FlockConfig, dt: float):
        """Update every boid in place using the pre-step state of all boids."""
        n = flock.num_boids
        if n == 0:
            return

        k = StepConstants.derive(config, dt)
        deltas = self._steering(flock, config, k)
        integrate_numba(
            flock.positions,
            flock.velocities,
            flock.speeds,
            deltas,
            float(k.min_speed),
            float(k.max_speed),
            n
        )
