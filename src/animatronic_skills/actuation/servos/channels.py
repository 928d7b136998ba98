"""Actuator channel interface and an in-memory servo implementation."""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional

import numpy as np

from ...config import Config

__all__ = ["ActuatorChannel", "SimulatedServo", "ServoChannels"]


class ActuatorChannel(ABC):
    """Abstract base class for one actuator channel (an integer angle command)."""

    @abstractmethod
    def set_position(self, angle: int) -> None:
        """Command the channel to an angle."""
        pass

    @abstractmethod
    def get_position(self) -> int:
        """Return the last commanded angle."""
        pass


class SimulatedServo(ActuatorChannel):
    """Servo channel that only remembers what it was told.

    Commands are clipped to the servo's mechanical range. Useful without
    hardware and for tests: ``history`` keeps the most recent commands.
    """

    def __init__(
        self,
        name: str = "servo",
        position: int = 90,
        min_angle: int = 0,
        max_angle: int = 180,
        history_size: int = 1000,
    ):
        self.name = name
        self.min_angle = min_angle
        self.max_angle = max_angle
        self._position = int(np.clip(position, min_angle, max_angle))
        self.history: Deque[int] = deque(maxlen=history_size)
        self.write_count = 0

    def set_position(self, angle: int) -> None:
        self._position = int(np.clip(int(angle), self.min_angle, self.max_angle))
        self.history.append(self._position)
        self.write_count += 1

    def get_position(self) -> int:
        return self._position

    def __repr__(self) -> str:
        return f"SimulatedServo(name={self.name!r}, position={self._position})"


@dataclass
class ServoChannels:
    """The four channels of the head: three axes and the jaw."""
    rotation: ActuatorChannel
    horizontal: ActuatorChannel
    vertical: ActuatorChannel
    jaw: ActuatorChannel

    @property
    def head(self) -> Dict[str, ActuatorChannel]:
        """Head axis channels keyed by axis name."""
        return {
            "rotation": self.rotation,
            "horizontal": self.horizontal,
            "vertical": self.vertical,
        }

    @classmethod
    def simulated(cls, config: Optional[Config] = None) -> "ServoChannels":
        """Build four SimulatedServo channels resting at neutral / closed.

        Args:
            config: Optional Config used for the starting positions
        """
        config = config or Config()
        head = config.head
        return cls(
            rotation=SimulatedServo("rotation", int(round(head.rotation.neutral))),
            horizontal=SimulatedServo("horizontal", int(round(head.horizontal.neutral))),
            vertical=SimulatedServo("vertical", int(round(head.vertical.neutral))),
            jaw=SimulatedServo("jaw", config.jaw.closed),
        )

