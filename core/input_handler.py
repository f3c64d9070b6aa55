"""Input handling for camera movement and the flock's slider controls."""

import pygame
from pygame.locals import *
from config import flock as config

from boids.controls import SliderControls
from .camera import Camera

# Number keys select a slider, +/- move it
SLIDER_KEYS = {
    K_1: "cohesion",
    K_2: "alignment",
    K_3: "separation",
    K_4: "count",
    K_5: "speed_min",
    K_6: "speed_max",
    K_7: "sight",
}


class InputHandler:
    """Handles keyboard and mouse input for the camera and flock controls."""

    def __init__(self, camera: Camera, controls: SliderControls):
        self.camera = camera
        self.controls = controls
        self.selected = "cohesion"
        self.mouse_dragging = False
        self.last_mouse_pos = (0, 0)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            elif event.key in SLIDER_KEYS:
                self.selected = SLIDER_KEYS[event.key]
            elif event.key in (K_PLUS, K_EQUALS, K_KP_PLUS):
                self.controls.nudge(self.selected, 1)
            elif event.key in (K_MINUS, K_KP_MINUS):
                self.controls.nudge(self.selected, -1)
            elif event.key == K_r:
                if self.controls.flock is not None:
                    self.controls.flock.reset()
            elif event.key == K_o:
                self.camera.auto_orbit = not self.camera.auto_orbit
        elif event.type == MOUSEBUTTONDOWN:
            if event.button == 1:
                self.mouse_dragging = True
                self.last_mouse_pos = pygame.mouse.get_pos()
        elif event.type == MOUSEBUTTONUP:
            if event.button == 1:
                self.mouse_dragging = False
        elif event.type == MOUSEWHEEL:
            self.camera.zoom_smooth(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.25)

        return True

    def handle_continuous_input(self, dt: float):
        """Handle held keys and mouse drags; dt is the frame time in seconds."""
        keys = pygame.key.get_pressed()
        rot_speed = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom_speed = config.CAMERA["keyboard_zoom_speed"] * dt

        if keys[K_a]:
            self.camera.rotate(-rot_speed, 0)
        if keys[K_d]:
            self.camera.rotate(rot_speed, 0)
        if keys[K_w]:
            self.camera.rotate(0, rot_speed)
        if keys[K_s]:
            self.camera.rotate(0, -rot_speed)

        if keys[K_q]:
            self.camera.zoom(-zoom_speed)
        if keys[K_e]:
            self.camera.zoom(zoom_speed)

        if self.mouse_dragging:
            current_pos = pygame.mouse.get_pos()
            dx = current_pos[0] - self.last_mouse_pos[0]
            dy = current_pos[1] - self.last_mouse_pos[1]
            self.camera.rotate(
                dx * config.CAMERA["mouse_sensitivity"],
                -dy * config.CAMERA["mouse_sensitivity"]
            )
            self.last_mouse_pos = current_pos
