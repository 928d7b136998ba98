"""Servo module - Actuator channels for the head and jaw.

Usage:
    from animatronic_skills.actuation.servos import ServoChannels, SimulatedServo

    channels = ServoChannels.simulated()

The Reachy Mini backend lives in ``animatronic_skills.actuation.servos.reachy``
and needs the ``reachy_mini`` package.
"""

from .channels import ActuatorChannel, SimulatedServo, ServoChannels

__all__ = [
    "ActuatorChannel",
    "SimulatedServo",
    "ServoChannels",
]
