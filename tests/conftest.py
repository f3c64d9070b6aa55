import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from boids import Flock, FlockConfig  # noqa: E402


@pytest.fixture
def quiet_config() -> FlockConfig:
    """Config with every steering gain off and effectively no speed limits."""
    return FlockConfig(
        cohesion_rate=0.0,
        alignment_rate=0.0,
        separation_rate=0.0,
        boundary_rate=0.0,
        speed_min=0.0,
        speed_max=1e6,
    )


@pytest.fixture
def make_flock():
    """Build a flock with exact positions and velocities."""

    def _make(flock_config, positions, velocities, speeds=None):
        flock = Flock(flock_config, count=0)
        flock.positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3).copy()
        flock.velocities = np.asarray(velocities, dtype=np.float64).reshape(-1, 3).copy()
        if speeds is None:
            speeds = np.ones(len(flock.positions))
        flock.speeds = np.asarray(speeds, dtype=np.float64).copy()
        return flock

    return _make
