"""Motion module - Speech, jaw, head and phrase behaviours.

Usage:
    from animatronic_skills.actuation.motion import MotionController
    from animatronic_skills.actuation.motion import SpeechDriver, JawSmoother
    from animatronic_skills.actuation.motion import letter_to_aperture, step_toward
"""

from .controller import MotionController, monotonic_ms
from .head import AxisInterpolator, BreathingOscillator, HeadMacroPlanner, IdleJitter, breathing_offset, step_toward
from .jaw import JawSmoother, SpeechDriver, is_silent, letter_to_aperture
from .phrases import PhraseScheduler, truncate_phrase
from .state import AxisState, Cadence, JawState, MotionState, PhraseState

__all__ = [
    # Primary exports
    "MotionController",
    "MotionState",
    # Subsystems
    "SpeechDriver",
    "JawSmoother",
    "HeadMacroPlanner",
    "IdleJitter",
    "BreathingOscillator",
    "AxisInterpolator",
    "PhraseScheduler",
    # State
    "AxisState",
    "JawState",
    "PhraseState",
    "Cadence",
    # Helpers
    "letter_to_aperture",
    "is_silent",
    "step_toward",
    "breathing_offset",
    "truncate_phrase",
    "monotonic_ms",
]
