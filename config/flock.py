"""Configuration for the 3D boids flocking simulation.

All simulation rates are per millisecond: the fixed step ``dt`` and the
wall clock fed to the simulation clock are both in milliseconds.
"""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "3D Boids"
}

CAMERA = {
    "fov": 60.0,
    "near_clip": 1.0,
    "far_clip": 10000.0,
    "initial_radius": 1300.0,
    "initial_theta": 45.0,
    "initial_phi": 20.0,
    "min_radius": 200.0,
    "max_radius": 4000.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,   # degrees per second
    "keyboard_zoom_speed": 600.0,    # units per second
    "mouse_sensitivity": 0.3,
    "orbit_speed": 2.9,              # automatic orbit, degrees per second
}

GRID = {
    "color": (0.25, 0.25, 0.3)
}

FLOCK = {
    "count": 40,
    "size": 10.0,                    # Rendered boid length

    # Bounding volume (half-dimensions) and the soft wall inside it
    "boundary_extent": (600.0, 400.0, 600.0),
    "boundary_threshold": 0.30,      # Soft wall at extent * (1 - threshold)
    "boundary_rate": 0.00003,

    # Flocking behavior
    "vision_radius": 160.0,          # Line of sight for cohesion/alignment
    "separation_distance": 100.0,
    "separation_rate": 0.002,
    "cohesion_rate": 0.00005,
    "alignment_rate": 0.01,          # Not scaled by dt

    # Speed limits (per millisecond)
    "speed_min": 0.15,
    "speed_max": 0.35,
}

CLOCK = {
    "dt": 10.0,                      # Fixed physics step (ms)
    "max_tick_time": 30.0,           # Wall time consumed per frame at most (ms)
}

# Slider ranges of the flock controls: (min, max, step)
CONTROLS = {
    "cohesion": (0, 25, 1),
    "alignment": (0, 25, 1),
    "separation": (0, 25, 1),
    "count": (1, 200, 1),
    "speed_min": (0.5, 5.0, 0.5),
    "speed_max": (0.5, 5.0, 0.5),
    "sight": (2, 50, 2),
}

COLORS = {
    "background": (0.92, 0.93, 0.95, 1.0),
    "boid": (0.15, 0.15, 0.2),
    "boid_fast": (0.75, 0.2, 0.25),
    "shadow": (0.7, 0.7, 0.74),
    "text": (0.1, 0.1, 0.1)
}
