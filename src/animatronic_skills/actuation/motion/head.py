"""Head motion: macro moves, idle jitter, breathing and interpolation.

The planners only touch axis targets (baseline or breathing offset). The
AxisInterpolator is the only code that moves ``current`` and writes to the
head channels.
"""

import random
from typing import Dict, Optional

import numpy as np

from ...config import BreathingConfig, HeadConfig
from ..servos import ActuatorChannel
from .state import AxisState, Cadence, MotionState

__all__ = [
    "HeadMacroPlanner",
    "IdleJitter",
    "BreathingOscillator",
    "AxisInterpolator",
    "breathing_offset",
    "step_toward",
]


# =============================================================================
# Helpers
# =============================================================================

def step_toward(current: float, target: float, max_step: float) -> float:
    """Move ``current`` toward ``target`` by at most ``max_step``, never past it."""
    distance = target - current
    if abs(distance) <= max_step:
        return target
    return current + float(np.sign(distance)) * max_step


def breathing_offset(elapsed_ms: int, interval_ms: int, amplitude: float) -> float:
    """Sine offset for a point in the breathing cycle."""
    phase = (elapsed_ms % interval_ms) / interval_ms
    return float(amplitude * np.sin(2.0 * np.pi * phase))


# =============================================================================
# Target planners
# =============================================================================

class IdleJitter:
    """Random walk of the head targets while nothing is being said."""

    def __init__(self, config: HeadConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng or random.Random()
        self.cadence = Cadence(config.random_move_interval_ms)

    def reset(self, now_ms: int):
        self.cadence.reset(now_ms)

    def defer(self, now_ms: int):
        """Restart the jitter interval (called after a macro move)."""
        self.cadence.reset(now_ms)

    def update(self, state: MotionState, now_ms: int):
        if not state.phrase.is_idle:
            return
        if not self.cadence.due(now_ms):
            return
        self.cadence.fire(now_ms)

        spread = self.config.jitter_range
        for axis in state.axes.values():
            delta = self.rng.randint(-spread, spread) / 10.0
            axis.set_baseline(axis.baseline + delta)


class HeadMacroPlanner:
    """Picks a fresh random pose every ``head_move_duration_ms``."""

    def __init__(
        self,
        config: HeadConfig,
        rng: Optional[random.Random] = None,
        idle_jitter: Optional[IdleJitter] = None,
    ):
        self.config = config
        self.rng = rng or random.Random()
        self.idle_jitter = idle_jitter
        self.cadence = Cadence(config.head_move_duration_ms)

    def reset(self, now_ms: int):
        self.cadence.reset(now_ms)

    def update(self, state: MotionState, now_ms: int):
        if not self.cadence.due(now_ms):
            return
        self.cadence.fire(now_ms)

        axis_configs = self.config.axes
        for name, axis in state.axes.items():
            bounds = axis_configs[name]
            axis.set_baseline(self.rng.randint(bounds.min_angle, bounds.max_angle))

        # Keep jitter from fighting the new pose in the same tick
        if self.idle_jitter is not None:
            self.idle_jitter.defer(now_ms)


class BreathingOscillator:
    """Sinusoidal offset on the vertical axis."""

    axis_name = "vertical"

    def __init__(self, config: BreathingConfig):
        self.config = config
        self.cadence = Cadence(config.update_interval_ms)

    def reset(self, now_ms: int):
        self.cadence.reset(now_ms)

    def update(self, state: MotionState, now_ms: int):
        if not self.cadence.due(now_ms):
            return
        self.cadence.fire(now_ms)

        axis = state.axes[self.axis_name]
        axis.offset = breathing_offset(
            now_ms - state.started_at_ms,
            self.config.interval_ms,
            self.config.amplitude_deg,
        )


# =============================================================================
# Interpolation
# =============================================================================

class AxisInterpolator:
    """Moves each axis toward its target at a bounded angular speed.

    Rounded positions are written to the channel only when they change.
    """

    def __init__(self, config: HeadConfig, channels: Dict[str, ActuatorChannel]):
        self.config = config
        self.channels = channels
        self.cadence = Cadence(config.gradual_move_interval_ms)

    def reset(self, now_ms: int):
        self.cadence.reset(now_ms)

    def update(self, state: MotionState, now_ms: int):
        if not self.cadence.due(now_ms):
            return
        elapsed_s = self.cadence.fire(now_ms) / 1000.0

        axis_configs = self.config.axes
        for name, axis in state.axes.items():
            max_step = axis_configs[name].speed_deg_per_s * elapsed_s
            axis.current = axis.clamp(step_toward(axis.current, axis.target, max_step))
            self._write(name, axis)

    def _write(self, name: str, axis: AxisState):
        position = int(round(axis.current))
        if position == axis.last_written:
            return
        channel = self.channels.get(name)
        if channel is None:
            return
        channel.set_position(position)
        axis.last_written = position
