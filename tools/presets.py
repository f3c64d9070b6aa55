"""
Flock Presets Library
=====================

Named flock configurations, each a set of overrides applied on top of the
defaults in config/flock.py.

Categories:
- CLASSIC: The reference tunings
- FLOCKING: Strongly social flocks
- LOOSE: Weakly social or scattered flocks
"""

from typing import Dict, List, Tuple

from config import flock as config
from boids.flock_config import FlockConfig

PRESETS: Dict[str, dict] = {}

# -----------------------------------------------------------------------------
# CLASSIC PRESETS
# -----------------------------------------------------------------------------

PRESETS["default"] = {
    "name": "Default",
    "description": "The default tuning from config/flock.py",
    "category": "CLASSIC",
    "num_boids": config.FLOCK["count"],
    "settings": {},
}

PRESETS["classic"] = {
    "name": "Classic",
    "description": "Gentler cohesion and alignment, short separation range",
    "category": "CLASSIC",
    "num_boids": 40,
    "settings": {
        "separation_distance": 60.0,
        "separation_rate": 0.001,
        "cohesion_rate": 0.00002,
        "alignment_rate": 0.004,
        "vision_radius": 160.0,
    },
}

# -----------------------------------------------------------------------------
# FLOCKING PRESETS
# -----------------------------------------------------------------------------

PRESETS["murmuration"] = {
    "name": "Murmuration",
    "description": "Large, fast, tightly aligned flock",
    "category": "FLOCKING",
    "num_boids": 150,
    "settings": {
        "vision_radius": 220.0,
        "separation_distance": 60.0,
        "cohesion_rate": 0.0001,
        "alignment_rate": 0.02,
        "speed_min": 0.25,
        "speed_max": 0.5,
    },
}

PRESETS["school"] = {
    "name": "School",
    "description": "Slow, dense school that turns as one",
    "category": "FLOCKING",
    "num_boids": 80,
    "settings": {
        "vision_radius": 200.0,
        "separation_distance": 40.0,
        "separation_rate": 0.003,
        "cohesion_rate": 0.0002,
        "alignment_rate": 0.025,
        "speed_min": 0.1,
        "speed_max": 0.2,
    },
}

# -----------------------------------------------------------------------------
# LOOSE PRESETS
# -----------------------------------------------------------------------------

PRESETS["scatter"] = {
    "name": "Scatter",
    "description": "Strong separation, barely any cohesion",
    "category": "LOOSE",
    "num_boids": 60,
    "settings": {
        "separation_distance": 200.0,
        "separation_rate": 0.004,
        "cohesion_rate": 0.0,
        "alignment_rate": 0.002,
        "vision_radius": 250.0,
    },
}

PRESETS["loners"] = {
    "name": "Loners",
    "description": "No line of sight: every boid flies alone",
    "category": "LOOSE",
    "num_boids": 40,
    "settings": {
        "vision_radius": 0.0,
        "separation_distance": 0.0,
    },
}


def get_preset_list() -> List[Tuple[str, dict]]:
    """Get list of all presets sorted by category."""
    category_order = ["CLASSIC", "FLOCKING", "LOOSE"]

    sorted_presets = sorted(
        PRESETS.items(),
        key=lambda x: (category_order.index(x[1]["category"]) if x[1]["category"] in category_order else 99, x[0])
    )
    return sorted_presets


def print_preset_menu():
    """Print formatted preset list."""
    current_category = None

    print("\n" + "=" * 60)
    print("  FLOCK PRESETS")
    print("=" * 60)

    for key, preset in get_preset_list():
        if preset["category"] != current_category:
            current_category = preset["category"]
            print(f"\n{'─' * 60}")
            print(f"  {current_category}")
            print(f"{'─' * 60}")

        print(f"  {key:<14} {preset['name']:<14} {preset['num_boids']:>4} boids")
        print(f"       {preset['description']}")

    print("=" * 60)


def get_preset_config(key: str) -> FlockConfig:
    """Build a fresh FlockConfig from a preset's overrides."""
    if key not in PRESETS:
        raise KeyError(f"Unknown preset '{key}'. Available: {', '.join(sorted(PRESETS))}")

    flock_config = FlockConfig()
    flock_config.update(PRESETS[key]["settings"])
    return flock_config
