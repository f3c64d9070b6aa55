"""Fixed-timestep clock that turns wall time into whole physics steps."""

from config import flock as config


class SimulationClock:
    """
    Accumulator clock decoupling the physics rate from the frame rate.

    Each call to ``advance`` banks the wall time elapsed since the previous
    call and pays it out in whole ``dt`` steps. Frame time beyond
    ``max_tick_time`` is dropped, so a stalled frame slows the simulation
    down instead of triggering an unbounded burst of catch-up steps.
    """

    def __init__(self, dt: float = None, max_tick_time: float = None, start_time: float = 0.0):
        self.dt = float(dt if dt is not None else config.CLOCK["dt"])
        self.max_tick_time = float(
            max_tick_time if max_tick_time is not None else config.CLOCK["max_tick_time"]
        )
        self.last_wall_time = float(start_time)
        self.accumulator = 0.0
        self.steps_taken = 0

    def advance(self, now: float) -> int:
        """
        Bank the time since the last call and return the steps now due.

        Args:
            now: Current wall-clock time, in the same units as dt

        Returns:
            Number of fixed steps the caller must run, in order, before rendering
        """
        elapsed = now - self.last_wall_time
        self.last_wall_time = now

        # Clock moved backward
        if elapsed < 0.0:
            elapsed = 0.0
        if elapsed > self.max_tick_time:
            elapsed = self.max_tick_time

        self.accumulator += elapsed

        steps = 0
        while self.accumulator >= self.dt:
            self.accumulator -= self.dt
            steps += 1

        self.steps_taken += steps
        return steps

    @property
    def alpha(self) -> float:
        """Fraction of a step left in the accumulator, in [0, 1)."""
        return self.accumulator / self.dt

    def reset(self, now: float = 0.0):
        """Restart from ``now`` with an empty accumulator."""
        self.last_wall_time = float(now)
        self.accumulator = 0.0
