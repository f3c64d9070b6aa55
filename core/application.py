"""Main application class: the driver loop between the flock and the screen."""

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from config import flock as config
from .camera import Camera
from .input_handler import InputHandler
from rendering import FlockRenderer, Grid, TextRenderer
from boids import Flock, FlockEngine, SimulationClock
from boids.controls import SliderControls
from tools.presets import PRESETS, get_preset_config


class Application:
    """Main application managing the driver loop and rendering."""

    def __init__(self, count: int = None, preset: str = "default", seed: int = None):
        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])

        # Simulation
        self.flock_config = get_preset_config(preset)
        if count is None:
            count = PRESETS[preset]["num_boids"]
        self.flock = Flock(self.flock_config, count=count, seed=seed)
        self.engine = FlockEngine()
        self.sim_clock = SimulationClock(start_time=pygame.time.get_ticks())
        self.controls = SliderControls(self.flock_config, self.flock)

        # Core components
        self.camera = Camera()
        self.input_handler = InputHandler(self.camera, self.controls)

        # Rendering components
        self.grid = Grid()
        self.flock_renderer = FlockRenderer()
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0
        self.steps_last_frame = 0

        self._setup_gl()

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, frame_dt: float):
        """Run the physics steps due this frame, then update the view."""
        self.input_handler.handle_continuous_input(frame_dt)
        self.camera.update(frame_dt)

        steps = self.sim_clock.advance(pygame.time.get_ticks())
        for _ in range(steps):
            self.engine.step(self.flock, self.flock_config, self.sim_clock.dt)
        self.steps_last_frame = steps

    def _hud_lines(self) -> list:
        c = self.controls
        selected = self.input_handler.selected
        lines = [
            f"Boids: {self.flock.num_boids}  |  FPS: {self.fps:.0f}  |  Steps/frame: {self.steps_last_frame}",
        ]
        for key, name in enumerate(c.names, start=1):
            marker = ">" if name == selected else " "
            lines.append(f"{marker} [{key}] {name:<10} {c.value(name)}")
        lines.append("  +/- adjust  R reset  O orbit  ESC quit")
        return lines

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()

        self.grid.draw(self.flock_config)
        self.flock_renderer.draw(self.flock, self.flock_config, self.sim_clock.dt)

        screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        self.text_renderer.draw_lines(self._hud_lines(), 10, 10, screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            frame_dt = self.clock.tick() / 1000.0  # Uncapped FPS
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(frame_dt)
            self._render()

        pygame.quit()
