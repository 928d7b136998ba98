"""Animatronic Skills - Lifelike motion for a talking animatronic head.

Easy import patterns by category:

    # Actuator channels
    from animatronic_skills.actuation.servos import ServoChannels
    channels = ServoChannels.simulated()

    # Reachy Mini backend (needs reachy_mini)
    from animatronic_skills.actuation.servos.reachy import ReachyMiniRig

    # Scheduler
    from animatronic_skills import MotionController, Config
    controller = MotionController(channels, Config())
    controller.start()
"""

from .config import (
    Config,
    AxisConfig,
    HeadConfig,
    JawConfig,
    BreathingConfig,
    PhraseConfig,
    FeatureConfig,
    ControllerConfig,
    LETTER_APERTURES,
    SILENT_LETTERS,
    DEFAULT_PHRASES,
)

# Actuator channels
from .actuation.servos import ActuatorChannel, SimulatedServo, ServoChannels

# Motion
from .actuation.motion import (
    MotionController,
    MotionState,
    AxisState,
    JawState,
    PhraseState,
    Cadence,
    SpeechDriver,
    JawSmoother,
    HeadMacroPlanner,
    IdleJitter,
    BreathingOscillator,
    AxisInterpolator,
    PhraseScheduler,
    letter_to_aperture,
    step_toward,
    breathing_offset,
)

# Category modules
from .actuation import motion
from .actuation import servos

__all__ = [
    # Config
    "Config",
    "AxisConfig",
    "HeadConfig",
    "JawConfig",
    "BreathingConfig",
    "PhraseConfig",
    "FeatureConfig",
    "ControllerConfig",
    "LETTER_APERTURES",
    "SILENT_LETTERS",
    "DEFAULT_PHRASES",
    # Channels
    "ActuatorChannel",
    "SimulatedServo",
    "ServoChannels",
    # Motion
    "MotionController",
    "MotionState",
    "AxisState",
    "JawState",
    "PhraseState",
    "Cadence",
    "SpeechDriver",
    "JawSmoother",
    "HeadMacroPlanner",
    "IdleJitter",
    "BreathingOscillator",
    "AxisInterpolator",
    "PhraseScheduler",
    "letter_to_aperture",
    "step_toward",
    "breathing_offset",
    # Category modules
    "motion",
    "servos",
]
