"""
Headless Flock Runner
=====================

Drives the flock without a window: a synthetic wall clock advances by a
fixed frame time, the simulation clock converts it into physics steps, and
flock statistics are printed (and optionally logged to CSV) as it runs.

Usage:
    python -m tools.headless                        # 600 frames of the default flock
    python -m tools.headless --preset murmuration   # Use a preset
    python -m tools.headless --frames 2000 --frame-time 33 --seed 7
    python -m tools.headless --log flock.csv        # Write statistics to CSV
    python -m tools.headless --list                 # List presets
"""

import argparse
import csv
from pathlib import Path
from typing import Optional

import numpy as np

from boids import Flock, FlockEngine, SimulationClock
from tools.presets import PRESETS, get_preset_config, print_preset_menu

_HEADER = ["frame", "steps", "boids", "mean_speed", "polarization", "spread", "outside_soft_wall"]


def flock_stats(flock: Flock) -> dict:
    """
    Summary statistics of the flock's current state.

    polarization is the length of the mean heading: 1 when every boid flies
    the same way, near 0 for a disordered swarm.
    """
    n = flock.num_boids
    if n == 0:
        return {
            "boids": 0,
            "mean_speed": 0.0,
            "polarization": 0.0,
            "centroid": (0.0, 0.0, 0.0),
            "spread": 0.0,
            "outside_soft_wall": 0,
        }

    centroid = flock.positions.mean(axis=0)
    spread = float(np.linalg.norm(flock.positions - centroid, axis=1).mean())
    headings = np.array([boid.heading() for boid in flock])
    polarization = float(np.linalg.norm(headings.mean(axis=0)))
    outside = int(np.any(np.abs(flock.positions) > flock.config.soft_wall, axis=1).sum())

    return {
        "boids": n,
        "mean_speed": float(flock.speeds.mean()),
        "polarization": polarization,
        "centroid": tuple(float(c) for c in centroid),
        "spread": spread,
        "outside_soft_wall": outside,
    }


def run_headless(
    frames: int = 600,
    frame_time: float = 16.0,
    count: Optional[int] = None,
    preset: str = "default",
    seed: Optional[int] = None,
    report_every: int = 0,
    log_path: Optional[Path] = None,
) -> dict:
    """
    Run the driver loop for a number of frames.

    Args:
        frames: Number of render ticks to simulate
        frame_time: Wall time between ticks (ms)
        count: Boid count (default: the preset's)
        preset: Preset name from tools.presets
        seed: Random seed for spawning
        report_every: Print statistics every N frames (0 disables)
        log_path: Optional CSV file receiving one row per report

    Returns:
        Final statistics plus the frame and step totals
    """
    flock_config = get_preset_config(preset)
    if count is None:
        count = PRESETS[preset]["num_boids"]

    flock = Flock(flock_config, count=count, seed=seed)
    engine = FlockEngine()
    clock = SimulationClock()

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    try:
        now = 0.0
        for frame in range(1, frames + 1):
            now += frame_time
            steps = clock.advance(now)
            for _ in range(steps):
                engine.step(flock, flock_config, clock.dt)

            if report_every and frame % report_every == 0:
                stats = flock_stats(flock)
                print(
                    f"[headless] frame {frame:>6} | steps {clock.steps_taken:>7} | "
                    f"speed {stats['mean_speed']:.3f} | "
                    f"polarization {stats['polarization']:.2f} | "
                    f"spread {stats['spread']:.1f} | "
                    f"outside {stats['outside_soft_wall']}"
                )
                if writer:
                    writer.writerow([
                        frame,
                        clock.steps_taken,
                        stats["boids"],
                        f"{stats['mean_speed']:.4f}",
                        f"{stats['polarization']:.4f}",
                        f"{stats['spread']:.2f}",
                        stats["outside_soft_wall"],
                    ])
    finally:
        if csv_file:
            csv_file.close()

    summary = flock_stats(flock)
    summary["frames"] = frames
    summary["steps"] = clock.steps_taken
    return summary


def main():
    parser = argparse.ArgumentParser(description="Headless 3D boids simulation")
    parser.add_argument("--frames", "-f", type=int, default=600, help="Number of frames to simulate")
    parser.add_argument("--frame-time", type=float, default=16.0, help="Wall time per frame in ms")
    parser.add_argument("--count", "-n", type=int, default=None, help="Override number of boids")
    parser.add_argument("--preset", type=str, default="default", help="Preset name (see --list)")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--report-every", type=int, default=60, help="Print statistics every N frames")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write statistics")
    parser.add_argument("--list", action="store_true", help="List presets")
    args = parser.parse_args()

    if args.list:
        print_preset_menu()
        return

    if args.preset not in PRESETS:
        print(f"[headless] Unknown preset: {args.preset}")
        print_preset_menu()
        return

    summary = run_headless(
        frames=args.frames,
        frame_time=args.frame_time,
        count=args.count,
        preset=args.preset,
        seed=args.seed,
        report_every=args.report_every,
        log_path=args.log,
    )

    print(f"\n[headless] Done: {summary['frames']} frames, {summary['steps']} steps, {summary['boids']} boids")
    cx, cy, cz = summary["centroid"]
    print(f"[headless] Centroid ({cx:.1f}, {cy:.1f}, {cz:.1f}) | spread {summary['spread']:.1f}")


if __name__ == "__main__":
    main()
