"""Orbital camera circling the flock's bounding volume."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *
from config import flock as config


class Camera:
    """Orbital camera with a slow automatic orbit and smooth zoom."""

    def __init__(self):
        self.radius = config.CAMERA["initial_radius"]
        self.target_radius = self.radius
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]
        self.target = np.array([0.0, 0.0, 0.0])
        self.zoom_smoothing = 8.0
        self.orbit_speed = config.CAMERA["orbit_speed"]
        self.auto_orbit = True

    def get_direction(self) -> np.ndarray:
        """Get the normalized direction vector from target to camera."""
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        x = math.cos(phi_rad) * math.cos(theta_rad)
        y = math.sin(phi_rad)
        z = math.cos(phi_rad) * math.sin(theta_rad)
        return np.array([x, y, z])

    def get_position(self) -> np.ndarray:
        """Get the camera's world position."""
        return self.radius * self.get_direction()

    def rotate(self, d_theta: float, d_phi: float):
        """Rotate the camera by the given angles in degrees."""
        self.theta = (self.theta + d_theta) % 360
        self.phi = max(
            config.CAMERA["min_phi"],
            min(config.CAMERA["max_phi"], self.phi + d_phi)
        )

    def zoom(self, delta: float):
        """Immediately zoom by the given amount."""
        self.radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.radius + delta)
        )
        self.target_radius = self.radius

    def zoom_smooth(self, delta: float):
        """Smoothly zoom by the given amount."""
        self.target_radius = max(
            config.CAMERA["min_radius"],
            min(config.CAMERA["max_radius"], self.target_radius + delta)
        )

    def update(self, dt: float):
        """Update camera state; dt is the frame time in seconds."""
        if self.auto_orbit:
            self.theta = (self.theta + self.orbit_speed * dt) % 360
        self.radius += (self.target_radius - self.radius) * min(1.0, self.zoom_smoothing * dt)

    def apply(self):
        """Apply the camera transformation to the OpenGL modelview matrix."""
        pos = self.get_position()
        glLoadIdentity()
        gluLookAt(
            pos[0], pos[1], pos[2],
            self.target[0], self.target[1], self.target[2],
            0, 1, 0
        )
