"""Configuration management for the animatronic head."""

import os
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean toggle from the environment ("1", "true", "yes", "on")."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AxisConfig:
    """Bounds and speed for one head axis (degrees)."""
    min_angle: int = 75
    max_angle: int = 115
    speed_deg_per_s: float = 8.0
    neutral: Optional[float] = None  # None = midpoint of the bounds

    def __post_init__(self):
        # Macro moves draw whole degrees between the bounds
        for name in ("min_angle", "max_angle"):
            value = getattr(self, name)
            if value != int(value):
                raise ValueError(f"{name} must be a whole number of degrees, got {value}")
            setattr(self, name, int(value))
        if self.min_angle > self.max_angle:
            raise ValueError(f"min_angle {self.min_angle} is above max_angle {self.max_angle}")
        if self.speed_deg_per_s < 0:
            raise ValueError("speed_deg_per_s must not be negative")
        if self.neutral is None:
            self.neutral = (self.min_angle + self.max_angle) / 2.0
        elif not self.min_angle <= self.neutral <= self.max_angle:
            raise ValueError(f"neutral {self.neutral} is outside [{self.min_angle}, {self.max_angle}]")

    def update(self, **kwargs) -> "AxisConfig":
        """Return a new config with updated values."""
        return replace(self, **kwargs)


@dataclass
class HeadConfig:
    """Head macro moves, idle jitter and interpolation."""
    rotation: AxisConfig = field(default_factory=lambda: AxisConfig(60, 120, 12.0))
    horizontal: AxisConfig = field(default_factory=lambda: AxisConfig(75, 115, 8.0))
    vertical: AxisConfig = field(default_factory=lambda: AxisConfig(70, 110, 10.0))

    head_move_duration_ms: int = 4000
    random_move_interval_ms: int = 600
    jitter_range: int = 15  # Tenths of a degree, symmetric
    gradual_move_interval_ms: int = 20

    def __post_init__(self):
        for name in ("head_move_duration_ms", "random_move_interval_ms", "gradual_move_interval_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.jitter_range < 0:
            raise ValueError("jitter_range must not be negative")

    @property
    def axes(self) -> Dict[str, AxisConfig]:
        """Axis configs keyed by axis name, in update order."""
        return {
            "rotation": self.rotation,
            "horizontal": self.horizontal,
            "vertical": self.vertical,
        }

    def update(self, **kwargs) -> "HeadConfig":
        """Return a new config with updated values."""
        return replace(self, **kwargs)


@dataclass
class JawConfig:
    """Jaw aperture range and speech timing.

    Apertures are inverted: ``open_max`` is numerically lower than ``closed``.
    """
    closed: int = 100
    open_max: int = 60
    step: int = 2
    smoothing_interval_ms: int = 10
    letter_duration_ms: int = 90
    silent_pause_ms: int = 150

    def __post_init__(self):
        if self.open_max > self.closed:
            raise ValueError(f"open_max {self.open_max} must not be above closed {self.closed}")
        if self.step <= 0:
            raise ValueError("step must be positive")
        if self.smoothing_interval_ms <= 0 or self.letter_duration_ms <= 0:
            raise ValueError("jaw intervals must be positive")
        if self.silent_pause_ms < 0:
            raise ValueError("silent_pause_ms must not be negative")

    def update(self, **kwargs) -> "JawConfig":
        """Return a new config with updated values."""
        return replace(self, **kwargs)


@dataclass
class BreathingConfig:
    """Breathing oscillation on the vertical axis."""
    interval_ms: int = 3000  # One full breath
    amplitude_deg: float = 2.0
    update_interval_ms: int = 20

    def __post_init__(self):
        if self.interval_ms <= 0 or self.update_interval_ms <= 0:
            raise ValueError("breathing intervals must be positive")

    def update(self, **kwargs) -> "BreathingConfig":
        """Return a new config with updated values."""
        return replace(self, **kwargs)


# Nominal jaw opening per letter, 0 (closed) to 50 (wide open)
APERTURE_TABLE_MAX = 50

LETTER_APERTURES: Dict[str, int] = {
    "A": 50, "B": 5, "C": 20, "D": 25, "E": 40, "F": 10, "G": 25,
    "H": 35, "I": 35, "J": 20, "K": 25, "L": 25, "M": 0, "N": 20,
    "O": 45, "P": 5, "Q": 30, "R": 25, "S": 15, "T": 20, "U": 30,
    "V": 10, "W": 30, "X": 20, "Y": 35, "Z": 15,
}

# Characters that close the jaw and hold a short pause
SILENT_LETTERS = frozenset(" .,!")

DEFAULT_PHRASES: List[str] = [
    "HELLO THERE.",
    "WELCOME, TRAVELER!",
    "WHO DARES DISTURB MY REST?",
    "I HAVE BEEN WAITING FOR YOU.",
    "DO NOT BE AFRAID, COME CLOSER.",
    "IT IS A FINE NIGHT FOR A CHAT.",
    "THE BONES REMEMBER EVERYTHING.",
    "HA HA HA!",
]


@dataclass
class PhraseConfig:
    """Automatic phrase selection."""
    phrase_duration_ms: int = field(
        default_factory=lambda: int(os.environ.get("ANIMATRONIC_PHRASE_DURATION_MS", "8000"))
    )
    max_length: int = 63  # Longer phrases are truncated
    phrases: List[str] = field(default_factory=lambda: list(DEFAULT_PHRASES))

    def __post_init__(self):
        if self.phrase_duration_ms < 0:
            raise ValueError("phrase_duration_ms must not be negative")
        if self.max_length <= 0:
            raise ValueError("max_length must be positive")

    def update(self, **kwargs) -> "PhraseConfig":
        """Return a new config with updated values."""
        return replace(self, **kwargs)


@dataclass
class FeatureConfig:
    """Feature toggles, read once when the controller is built.

    Each toggle can be set via ANIMATRONIC_JAW, ANIMATRONIC_HEAD,
    ANIMATRONIC_IDLE_JITTER, ANIMATRONIC_BREATHING and ANIMATRONIC_PHRASES.
    """
    jaw_enabled: bool = field(default_factory=lambda: _env_flag("ANIMATRONIC_JAW", True))
    head_movement_enabled: bool = field(default_factory=lambda: _env_flag("ANIMATRONIC_HEAD", True))
    idle_jitter_enabled: bool = field(default_factory=lambda: _env_flag("ANIMATRONIC_IDLE_JITTER", True))
    breathing_enabled: bool = field(default_factory=lambda: _env_flag("ANIMATRONIC_BREATHING", True))
    phrase_generation_enabled: bool = field(default_factory=lambda: _env_flag("ANIMATRONIC_PHRASES", True))

    def update(self, **kwargs) -> "FeatureConfig":
        """Return a new config with updated values."""
        return replace(self, **kwargs)


@dataclass
class ControllerConfig:
    """Control loop settings."""
    control_loop_frequency_hz: float = 200.0  # 0 = poll as fast as possible

    def update(self, **kwargs) -> "ControllerConfig":
        """Return a new config with updated values."""
        return replace(self, **kwargs)


@dataclass
class Config:
    """Main configuration container."""
    head: HeadConfig = field(default_factory=HeadConfig)
    jaw: JawConfig = field(default_factory=JawConfig)
    breathing: BreathingConfig = field(default_factory=BreathingConfig)
    phrases: PhraseConfig = field(default_factory=PhraseConfig)
    features: FeatureConfig = field(default_factory=FeatureConfig)
    controller: ControllerConfig = field(default_factory=ControllerConfig)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls()

    def update_head(self, **kwargs) -> "Config":
        """Return a new config with updated head settings."""
        return replace(self, head=self.head.update(**kwargs))

    def update_jaw(self, **kwargs) -> "Config":
        """Return a new config with updated jaw settings."""
        return replace(self, jaw=self.jaw.update(**kwargs))

    def update_breathing(self, **kwargs) -> "Config":
        """Return a new config with updated breathing settings."""
        return replace(self, breathing=self.breathing.update(**kwargs))

    def update_phrases(self, **kwargs) -> "Config":
        """Return a new config with updated phrase settings."""
        return replace(self, phrases=self.phrases.update(**kwargs))

    def update_features(self, **kwargs) -> "Config":
        """Return a new config with updated feature toggles."""
        return replace(self, features=self.features.update(**kwargs))

    def update_controller(self, **kwargs) -> "Config":
        """Return a new config with updated control loop settings."""
        return replace(self, controller=self.controller.update(**kwargs))
