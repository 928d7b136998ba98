"""Reachy Mini backend for the animatronic channels.

Maps the four animatronic channels onto a Reachy Mini:

    rotation   -> head yaw
    horizontal -> head roll
    vertical   -> head pitch
    jaw        -> antenna spread (a closed jaw keeps the antennas at rest)

Axis angles are servo-style degrees; the head pose is built from each axis'
offset from its neutral angle.

Usage:
    from reachy_mini import ReachyMini
    from animatronic_skills.actuation.servos.reachy import ReachyMiniRig

    rig = ReachyMiniRig(ReachyMini())
    controller = MotionController(rig.channels)
"""

import threading
from typing import Dict, Optional, Tuple

import numpy as np
from reachy_mini.utils import create_head_pose

from ...config import Config
from .channels import ActuatorChannel, ServoChannels

__all__ = ["ReachyMiniRig", "ReachyChannel"]


class ReachyChannel(ActuatorChannel):
    """One animatronic channel routed through a ReachyMiniRig."""

    def __init__(self, rig: "ReachyMiniRig", name: str):
        self.rig = rig
        self.name = name

    def set_position(self, angle: int) -> None:
        self.rig.command(self.name, angle)

    def get_position(self) -> int:
        return self.rig.position(self.name)


class ReachyMiniRig:
    """Holds the last commanded channel angles and sends them as one robot target."""

    def __init__(
        self,
        robot,
        config: Optional[Config] = None,
        antenna_deg_per_aperture: float = 1.0,
    ):
        """
        Args:
            robot: ReachyMini robot instance
            config: Optional Config providing axis neutrals and jaw range
            antenna_deg_per_aperture: Antenna swing per unit of jaw opening
        """
        self.robot = robot
        self.config = config or Config()
        self.antenna_deg_per_aperture = antenna_deg_per_aperture
        self._lock = threading.Lock()

        head = self.config.head
        self._positions: Dict[str, int] = {
            name: int(round(axis.neutral)) for name, axis in head.axes.items()
        }
        self._positions["jaw"] = self.config.jaw.closed

        self.channels = ServoChannels(
            rotation=ReachyChannel(self, "rotation"),
            horizontal=ReachyChannel(self, "horizontal"),
            vertical=ReachyChannel(self, "vertical"),
            jaw=ReachyChannel(self, "jaw"),
        )

    def position(self, name: str) -> int:
        with self._lock:
            return self._positions[name]

    def command(self, name: str, angle: int):
        """Record a channel angle and push the combined pose to the robot."""
        with self._lock:
            self._positions[name] = int(angle)
            head_pose = self._head_pose()
            antennas = self._antennas()

        try:
            self.robot.set_target(head=head_pose, antennas=antennas)
        except Exception as e:
            print(f"[Reachy] Robot error: {e}")

    def _head_pose(self):
        head = self.config.head
        return create_head_pose(
            x=0, y=0, z=0,
            roll=self._positions["horizontal"] - head.horizontal.neutral,
            pitch=self._positions["vertical"] - head.vertical.neutral,
            yaw=self._positions["rotation"] - head.rotation.neutral,
            degrees=True, mm=False,
        )

    def _antennas(self) -> Tuple[float, float]:
        # Inverted jaw scale: opening grows as the aperture drops below closed
        opening = self.config.jaw.closed - self._positions["jaw"]
        swing = float(np.deg2rad(opening * self.antenna_deg_per_aperture))
        return (swing, -swing)
