"""Actuation module - Head motion, jaw and actuator channels.

Usage:
    from animatronic_skills.actuation import motion, servos
    from animatronic_skills.actuation.motion import MotionController
    from animatronic_skills.actuation.servos import ServoChannels, SimulatedServo
"""

from .servos import ActuatorChannel, SimulatedServo, ServoChannels
from .motion import (
    MotionController,
    MotionState,
    SpeechDriver,
    JawSmoother,
    HeadMacroPlanner,
    IdleJitter,
    BreathingOscillator,
    AxisInterpolator,
    PhraseScheduler,
)

__all__ = [
    "ActuatorChannel",
    "SimulatedServo",
    "ServoChannels",
    "MotionController",
    "MotionState",
    "SpeechDriver",
    "JawSmoother",
    "HeadMacroPlanner",
    "IdleJitter",
    "BreathingOscillator",
    "AxisInterpolator",
    "PhraseScheduler",
]
