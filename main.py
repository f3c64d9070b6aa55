"""
3D Boids Simulation
===================

A flocking simulation running at a fixed physics rate with an orbital camera.

Controls:
    - W/S: Rotate camera up/down
    - A/D: Rotate camera left/right
    - Q/E: Zoom in/out
    - Mouse drag: Rotate camera
    - Mouse wheel: Zoom
    - O: Toggle automatic orbit
    - 1-7: Select a flock slider (cohesion, alignment, separation, count,
           min speed, max speed, sight)
    - +/-: Move the selected slider
    - R: Respawn the flock
    - ESC: Quit
"""

import argparse

from core import Application
from tools.presets import PRESETS


def main():
    parser = argparse.ArgumentParser(description="3D boids flocking simulation")
    parser.add_argument("--count", "-n", type=int, default=None, help="Override number of boids")
    parser.add_argument("--preset", type=str, default="default", choices=sorted(PRESETS))
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    app = Application(count=args.count, preset=args.preset, seed=args.seed)
    app.run()


if __name__ == "__main__":
    main()
