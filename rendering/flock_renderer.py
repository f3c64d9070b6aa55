"""Boid and shadow rendering with Numba-built vertex arrays and VBOs."""

import math
import numpy as np
from numba import njit
from OpenGL.GL import *
from OpenGL.arrays import vbo

from config import flock as config

VERTS_PER_BOID = 6


@njit(cache=True)
def build_vertices_numba(
    positions: np.ndarray,
    velocities: np.ndarray,
    vertices: np.ndarray,
    length: float,
    radius: float,
    num_boids: int
):
    """
    Two crossed triangles per boid, pointing along its velocity.

    Orientation is a presentation concern: a stationary boid (zero velocity)
    gets a guarded norm and points along +x instead of producing NaNs.
    """
    world_up_x, world_up_y, world_up_z = 0.0, 1.0, 0.0
    world_right_x, world_right_y, world_right_z = 1.0, 0.0, 0.0

    for i in range(num_boids):
        px, py, pz = positions[i, 0], positions[i, 1], positions[i, 2]

        vx, vy, vz = velocities[i, 0], velocities[i, 1], velocities[i, 2]
        speed = math.sqrt(vx * vx + vy * vy + vz * vz)
        if speed < 0.0001:
            fx, fy, fz = 1.0, 0.0, 0.0
        else:
            fx, fy, fz = vx / speed, vy / speed, vz / speed

        # Right = forward x world_up
        rx = fy * world_up_z - fz * world_up_y
        ry = fz * world_up_x - fx * world_up_z
        rz = fx * world_up_y - fy * world_up_x

        r_len = math.sqrt(rx * rx + ry * ry + rz * rz)
        if r_len < 0.1:
            # Flying straight up or down
            rx = fy * world_right_z - fz * world_right_y
            ry = fz * world_right_x - fx * world_right_z
            rz = fx * world_right_y - fy * world_right_x
            r_len = math.sqrt(rx * rx + ry * ry + rz * rz)

        if r_len > 0.0001:
            rx /= r_len
            ry /= r_len
            rz /= r_len

        # Up = right x forward
        ux = ry * fz - rz * fy
        uy = rz * fx - rx * fz
        uz = rx * fy - ry * fx

        tip_x = px + fx * length * 0.5
        tip_y = py + fy * length * 0.5
        tip_z = pz + fz * length * 0.5
        tail_x = px - fx * length * 0.5
        tail_y = py - fy * length * 0.5
        tail_z = pz - fz * length * 0.5

        base = i * VERTS_PER_BOID

        # Wings: tip, right, left
        vertices[base, 0] = tip_x
        vertices[base, 1] = tip_y
        vertices[base, 2] = tip_z
        vertices[base + 1, 0] = tail_x + rx * radius
        vertices[base + 1, 1] = tail_y + ry * radius
        vertices[base + 1, 2] = tail_z + rz * radius
        vertices[base + 2, 0] = tail_x - rx * radius
        vertices[base + 2, 1] = tail_y - ry * radius
        vertices[base + 2, 2] = tail_z - rz * radius

        # Body: tip, up, down
        vertices[base + 3, 0] = tip_x
        vertices[base + 3, 1] = tip_y
        vertices[base + 3, 2] = tip_z
        vertices[base + 4, 0] = tail_x + ux * radius * 0.4
        vertices[base + 4, 1] = tail_y + uy * radius * 0.4
        vertices[base + 4, 2] = tail_z + uz * radius * 0.4
        vertices[base + 5, 0] = tail_x - ux * radius * 0.4
        vertices[base + 5, 1] = tail_y - uy * radius * 0.4
        vertices[base + 5, 2] = tail_z - uz * radius * 0.4


class FlockRenderer:
    """Draws each boid as a small arrow plus its shadow on the floor."""

    def __init__(self):
        self.length = float(config.FLOCK["size"])
        self.radius = float(config.FLOCK["size"] * 0.6)
        self.color = np.array(config.COLORS["boid"], dtype=np.float32)
        self.color_fast = np.array(config.COLORS["boid_fast"], dtype=np.float32)
        self.shadow_color = config.COLORS["shadow"]

        self._vertices = np.zeros((0, 3), dtype=np.float32)
        self._shadow_vertices = np.zeros((0, 3), dtype=np.float32)
        self._vert_colors = np.zeros((0, 3), dtype=np.float32)

        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False
        self._warmup_numba()

    def _init_vbos(self):
        """Initialize VBOs for GPU-side vertex storage."""
        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._vert_colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as e:
            print(f"[Render] VBO init failed, using client arrays: {e}")
            self._vbos_initialized = False

    def _warmup_numba(self):
        """Pre-compile the vertex kernel."""
        n = 4
        pos = np.random.rand(n, 3) * 10.0
        vel = np.random.rand(n, 3)
        vel[0] = 0.0
        verts = np.zeros((n * VERTS_PER_BOID, 3), dtype=np.float64)
        build_vertices_numba(pos, vel, verts, self.length, self.radius, n)

    def _ensure_capacity(self, num_boids: int):
        size = num_boids * VERTS_PER_BOID
        if len(self._vertices) != size:
            self._vertices = np.zeros((size, 3), dtype=np.float32)
            self._vert_colors = np.zeros((size, 3), dtype=np.float32)

    def _build(self, flock, max_speed: float) -> int:
        n = flock.num_boids
        self._ensure_capacity(n)

        positions = np.ascontiguousarray(flock.positions, dtype=np.float64)
        velocities = np.ascontiguousarray(flock.velocities, dtype=np.float64)
        verts = np.zeros((n * VERTS_PER_BOID, 3), dtype=np.float64)
        build_vertices_numba(positions, velocities, verts, self.length, self.radius, n)
        self._vertices[:] = verts

        # Faster boids are drawn warmer
        t = np.clip(flock.speeds / max(max_speed, 1e-9), 0.0, 1.0).astype(np.float32)
        colors = self.color[None, :] + (self.color_fast - self.color)[None, :] * t[:, None]
        self._vert_colors[:] = np.repeat(colors, VERTS_PER_BOID, axis=0)
        return n * VERTS_PER_BOID

    def _draw_shadows(self, flock, floor_y: float, total_verts: int):
        """Flatten every boid above the floor onto it."""
        above = np.repeat(flock.positions[:, 1] > floor_y, VERTS_PER_BOID)
        if not above.any():
            return

        shadow = self._vertices[:total_verts][above].copy()
        shadow[:, 1] = floor_y

        glColor3f(*self.shadow_color)
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(3, GL_FLOAT, 0, shadow)
        glDrawArrays(GL_TRIANGLES, 0, len(shadow))
        glDisableClientState(GL_VERTEX_ARRAY)

    def draw(self, flock, flock_config, dt: float):
        """Render the flock's current state."""
        if flock.num_boids == 0:
            return

        total_verts = self._build(flock, flock_config.speed_max * dt)

        if not self._vbos_initialized:
            self._init_vbos()

        self._draw_shadows(flock, -float(flock_config.boundary_extent[1]), total_verts)

        if self._vbos_initialized:
            self._vbo_vertices.set_array(self._vertices)
            self._vbo_colors.set_array(self._vert_colors)

            self._vbo_vertices.bind()
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(3, GL_FLOAT, 0, None)

            self._vbo_colors.bind()
            glEnableClientState(GL_COLOR_ARRAY)
            glColorPointer(3, GL_FLOAT, 0, None)

            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            self._vbo_vertices.unbind()
            self._vbo_colors.unbind()
            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
        else:
            glEnableClientState(GL_VERTEX_ARRAY)
            glEnableClientState(GL_COLOR_ARRAY)

            glVertexPointer(3, GL_FLOAT, 0, self._vertices)
            glColorPointer(3, GL_FLOAT, 0, self._vert_colors)
            glDrawArrays(GL_TRIANGLES, 0, total_verts)

            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
