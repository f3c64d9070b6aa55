"""Slider controls mapping UI positions onto the live flock configuration."""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from config import flock as config
from .flock import Flock
from .flock_config import FlockConfig

# Slider units per config unit
COHESION_MULTIPLIER = 100000
ALIGNMENT_MULTIPLIER = 1000
SEPARATION_MULTIPLIER = 0.1
SPEED_MULTIPLIER = 10
SIGHT_MULTIPLIER = 0.1


@dataclass
class Slider:
    """A bounded, stepped slider bound to one flock setting."""
    name: str
    minimum: float
    maximum: float
    step: float
    read: Callable[[], float]
    write: Callable[[float], None]

    def snap(self, value: float) -> float:
        """Clamp ``value`` to the slider range and round it to a whole step."""
        value = max(self.minimum, min(self.maximum, value))
        value = self.minimum + round((value - self.minimum) / self.step) * self.step
        value = min(self.maximum, value)
        if isinstance(self.step, int) and isinstance(self.minimum, int):
            return int(value)
        return value


class SliderControls:
    """
    The flock's control panel, minus the widgets.

    Each slider reads its position back from the config (so presets and
    direct edits show up) and writes through to the config or the flock.
    """

    def __init__(self, flock_config: FlockConfig, flock: Optional[Flock] = None):
        self.config = flock_config
        self.flock = flock

        c = self.config
        bindings = {
            "cohesion": (
                lambda: c.cohesion_rate * COHESION_MULTIPLIER,
                lambda v: setattr(c, "cohesion_rate", v / COHESION_MULTIPLIER),
            ),
            "alignment": (
                lambda: c.alignment_rate * ALIGNMENT_MULTIPLIER,
                lambda v: setattr(c, "alignment_rate", v / ALIGNMENT_MULTIPLIER),
            ),
            "separation": (
                lambda: c.separation_distance * SEPARATION_MULTIPLIER,
                lambda v: setattr(c, "separation_distance", v / SEPARATION_MULTIPLIER),
            ),
            "count": (self._read_count, self._write_count),
            "speed_min": (
                lambda: c.speed_min * SPEED_MULTIPLIER,
                lambda v: setattr(c, "speed_min", v / SPEED_MULTIPLIER),
            ),
            "speed_max": (
                lambda: c.speed_max * SPEED_MULTIPLIER,
                lambda v: setattr(c, "speed_max", v / SPEED_MULTIPLIER),
            ),
            # Sight is measured beyond the separation distance
            "sight": (
                lambda: (c.vision_radius - c.separation_distance) * SIGHT_MULTIPLIER,
                lambda v: setattr(c, "vision_radius", v / SIGHT_MULTIPLIER + c.separation_distance),
            ),
        }

        self.sliders: Dict[str, Slider] = {}
        for name, (read, write) in bindings.items():
            lo, hi, step = config.CONTROLS[name]
            self.sliders[name] = Slider(name, lo, hi, step, read, write)

    @property
    def names(self):
        return list(self.sliders)

    def _slider(self, name: str) -> Slider:
        try:
            return self.sliders[name]
        except KeyError:
            raise KeyError(f"Unknown slider '{name}'. Available: {', '.join(self.sliders)}") from None

    def _require_flock(self) -> Flock:
        if self.flock is None:
            raise RuntimeError("The count slider needs a flock")
        return self.flock

    def _read_count(self) -> float:
        return self._require_flock().num_boids

    def _write_count(self, value: float):
        self._require_flock().set_count(int(value))

    def value(self, name: str) -> float:
        """Current slider position, derived from the config."""
        slider = self._slider(name)
        return slider.snap(slider.read())

    def set(self, name: str, value: float) -> float:
        """
        Move a slider and apply it.

        Returns:
            The snapped slider value that was applied
        """
        slider = self._slider(name)
        value = slider.snap(value)

        # The speed range slider keeps its two handles ordered
        if name == "speed_min":
            value = min(value, self.value("speed_max"))
        elif name == "speed_max":
            value = max(value, self.value("speed_min"))

        slider.write(value)
        print(f"[Controls] {name} = {value}")
        return value

    def nudge(self, name: str, steps: int) -> float:
        """Move a slider by a whole number of steps."""
        slider = self._slider(name)
        return self.set(name, self.value(name) + steps * slider.step)
