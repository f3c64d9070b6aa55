"""Wireframe of the flock's bounding volume."""

from OpenGL.GL import *
from config import flock as config


class Grid:
    """Draws the bounding box as a 3D wireframe, sized from the live config."""

    def __init__(self):
        self.color = config.GRID["color"]

    def draw(self, flock_config):
        """
        Draw the bounding box.

        Args:
            flock_config: Live config; its boundary_extent gives the half-dimensions
        """
        x, y, z = (float(v) for v in flock_config.boundary_extent)

        glBegin(GL_LINES)
        glColor3f(*self.color)

        # X-axis edges
        glVertex3f(-x, -y, -z); glVertex3f(x, -y, -z)
        glVertex3f(-x, y, -z); glVertex3f(x, y, -z)
        glVertex3f(-x, -y, z); glVertex3f(x, -y, z)
        glVertex3f(-x, y, z); glVertex3f(x, y, z)

        # Y-axis edges
        glVertex3f(-x, -y, -z); glVertex3f(-x, y, -z)
        glVertex3f(x, -y, -z); glVertex3f(x, y, -z)
        glVertex3f(-x, -y, z); glVertex3f(-x, y, z)
        glVertex3f(x, -y, z); glVertex3f(x, y, z)

        # Z-axis edges
        glVertex3f(-x, -y, -z); glVertex3f(-x, -y, z)
        glVertex3f(x, -y, -z); glVertex3f(x, -y, z)
        glVertex3f(-x, y, -z); glVertex3f(-x, y, z)
        glVertex3f(x, y, -z); glVertex3f(x, y, z)

        glEnd()
