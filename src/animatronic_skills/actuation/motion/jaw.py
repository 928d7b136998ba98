"""Speech-synchronised jaw motion.

SpeechDriver walks the active phrase one letter at a time and sets the jaw
target; JawSmoother moves the jaw channel toward that target.

Usage:
    from animatronic_skills.actuation.motion.jaw import letter_to_aperture

    letter_to_aperture("A", JawConfig())   # wide open
    letter_to_aperture(" ", JawConfig())   # closed
"""

from typing import Dict, Optional

from ...config import APERTURE_TABLE_MAX, LETTER_APERTURES, SILENT_LETTERS, JawConfig
from ..servos import ActuatorChannel
from .state import Cadence, MotionState

__all__ = ["SpeechDriver", "JawSmoother", "letter_to_aperture", "is_silent"]


def is_silent(letter: str) -> bool:
    """Whether the letter closes the jaw and holds a pause."""
    return letter in SILENT_LETTERS


def letter_to_aperture(
    letter: str,
    config: JawConfig,
    table: Optional[Dict[str, int]] = None,
) -> int:
    """
    Map a character to a jaw aperture in the actuator's range.

    The table value (0..APERTURE_TABLE_MAX) is remapped linearly onto
    [closed, open_max]. Characters missing from the table are closed.

    Args:
        letter: Single character; case-insensitive
        config: Jaw range
        table: Optional letter table, defaults to LETTER_APERTURES

    Returns:
        Aperture between open_max and closed (inclusive)
    """
    if table is None:
        table = LETTER_APERTURES

    value = table.get(letter.upper())
    if value is None:
        return config.closed

    span = config.open_max - config.closed
    return config.closed + int(round(value * span / APERTURE_TABLE_MAX))


class SpeechDriver:
    """Consumes the active phrase letter by letter and derives the jaw target."""

    def __init__(self, config: JawConfig, table: Optional[Dict[str, int]] = None):
        self.config = config
        self.table = table
        self.cadence = Cadence(config.letter_duration_ms)

    def reset(self, now_ms: int):
        self.cadence.reset(now_ms)

    def update(self, state: MotionState, now_ms: int):
        phrase = state.phrase
        if phrase.is_idle:
            state.jaw.target = self.config.closed
            return

        # Holding after a silent letter; everything else keeps running
        if phrase.resume_at_ms is not None:
            if now_ms < phrase.resume_at_ms:
                return
            phrase.resume_at_ms = None

        if not self.cadence.due(now_ms):
            return
        self.cadence.fire(now_ms)

        if phrase.finished:
            phrase.finish(now_ms)
            state.jaw.target = self.config.closed
            return

        letter = phrase.text[phrase.letter_index]
        state.jaw.target = letter_to_aperture(letter, self.config, self.table)
        if is_silent(letter):
            phrase.resume_at_ms = now_ms + self.config.silent_pause_ms
        phrase.letter_index += 1


class JawSmoother:
    """Moves the jaw channel toward the jaw target.

    Large moves (more than two steps) snap straight to the target so the jaw
    keeps up with fast speech; small moves step once per smoothing interval.
    """

    def __init__(self, config: JawConfig, channel: ActuatorChannel):
        self.config = config
        self.channel = channel
        self.cadence = Cadence(config.smoothing_interval_ms)

    def reset(self, now_ms: int):
        self.cadence.reset(now_ms)

    def update(self, state: MotionState, now_ms: int):
        jaw = state.jaw
        target = jaw.clamp(jaw.target)
        current = self.channel.get_position()
        delta = target - current

        if delta == 0:
            jaw.current_aperture = current
            return

        step = self.config.step
        if abs(delta) > 2 * step:
            position = target
        elif self.cadence.due(now_ms):
            self.cadence.fire(now_ms)
            position = current + max(-step, min(step, delta))
        else:
            return

        self.channel.set_position(position)
        jaw.current_aperture = position
