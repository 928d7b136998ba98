"""Shared motion state passed to every subsystem on each tick.

Write permissions:

    AxisState.baseline   HeadMacroPlanner, IdleJitter
    AxisState.offset     BreathingOscillator
    AxisState.current    AxisInterpolator (also the only head actuator writer)
    JawState.target      SpeechDriver
    JawState.current     JawSmoother (also the only jaw actuator writer)
    PhraseState          PhraseScheduler (start), SpeechDriver (advance, finish)

``AxisState.target`` is derived from baseline + offset, so breathing never
compounds on top of a previous tick's breathing.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from ...config import AxisConfig, Config, JawConfig

__all__ = ["Cadence", "AxisState", "JawState", "PhraseState", "MotionState"]


class Cadence:
    """Minimum interval between two activations of a subsystem."""

    def __init__(self, interval_ms: int, last_fired_ms: int = 0):
        self.interval_ms = interval_ms
        self.last_fired_ms = last_fired_ms

    def due(self, now_ms: int) -> bool:
        return now_ms - self.last_fired_ms >= self.interval_ms

    def fire(self, now_ms: int) -> int:
        """Mark the cadence as fired and return the ms elapsed since the last firing."""
        elapsed = now_ms - self.last_fired_ms
        self.last_fired_ms = now_ms
        return elapsed

    def reset(self, now_ms: int):
        self.last_fired_ms = now_ms

    def __repr__(self) -> str:
        return f"Cadence(interval_ms={self.interval_ms}, last_fired_ms={self.last_fired_ms})"


@dataclass
class AxisState:
    """Target and current position of one head axis, in degrees."""
    name: str
    min_angle: float
    max_angle: float
    baseline: float
    current: float
    offset: float = 0.0
    last_written: Optional[int] = None

    @classmethod
    def from_config(cls, name: str, config: AxisConfig) -> "AxisState":
        return cls(
            name=name,
            min_angle=float(config.min_angle),
            max_angle=float(config.max_angle),
            baseline=float(config.neutral),
            current=float(config.neutral),
        )

    def clamp(self, value: float) -> float:
        return float(np.clip(value, self.min_angle, self.max_angle))

    @property
    def target(self) -> float:
        """Where the axis is heading: baseline plus breathing offset, within bounds."""
        return self.clamp(self.baseline + self.offset)

    def set_baseline(self, value: float):
        self.baseline = self.clamp(value)


@dataclass
class JawState:
    """Jaw aperture; ``open_max`` is numerically lower than ``closed``."""
    closed: int
    open_max: int
    target: int
    current_aperture: int

    @classmethod
    def from_config(cls, config: JawConfig) -> "JawState":
        return cls(
            closed=config.closed,
            open_max=config.open_max,
            target=config.closed,
            current_aperture=config.closed,
        )

    def clamp(self, aperture: int) -> int:
        return int(np.clip(aperture, self.open_max, self.closed))


@dataclass
class PhraseState:
    """The phrase being spoken; empty text means idle."""
    text: str = ""
    letter_index: int = 0
    resume_at_ms: Optional[int] = None  # Set while holding a pause after a silent letter
    ended_at_ms: int = 0

    @property
    def is_idle(self) -> bool:
        return not self.text

    @property
    def finished(self) -> bool:
        return self.letter_index >= len(self.text)

    def start(self, text: str):
        self.text = text
        self.letter_index = 0
        self.resume_at_ms = None

    def finish(self, now_ms: int):
        self.text = ""
        self.letter_index = 0
        self.resume_at_ms = None
        self.ended_at_ms = now_ms


@dataclass
class MotionState:
    """Everything the subsystems share."""
    axes: Dict[str, AxisState]
    jaw: JawState
    phrase: PhraseState = field(default_factory=PhraseState)
    started_at_ms: int = 0

    @classmethod
    def from_config(cls, config: Config, now_ms: int = 0) -> "MotionState":
        return cls(
            axes={
                name: AxisState.from_config(name, axis)
                for name, axis in config.head.axes.items()
            },
            jaw=JawState.from_config(config.jaw),
            phrase=PhraseState(ended_at_ms=now_ms),
            started_at_ms=now_ms,
        )

    @property
    def is_speaking(self) -> bool:
        return not self.phrase.is_idle
