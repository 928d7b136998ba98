"""Shared test fixtures and configuration for animatronic_skills tests.

This module provides:
- Mock classes for external collaborators (clock, random source, robot)
- Pytest fixtures for common test setups
- Markers for categorizing tests by skill type
"""

import random
from typing import Any, Dict, List, Optional

import numpy as np
import pytest

from animatronic_skills.config import (
    AxisConfig,
    BreathingConfig,
    Config,
    FeatureConfig,
    HeadConfig,
    JawConfig,
    PhraseConfig,
)
from animatronic_skills.actuation.servos import ServoChannels
from animatronic_skills.actuation.motion import MotionState


# =============================================================================
# Mock Classes
# =============================================================================

class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start_ms: int = 0):
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> int:
        self.now_ms += ms
        return self.now_ms


class ScriptedRandom(random.Random):
    """Random source that replays fixed randint/randrange results.

    Falls back to the seeded generator once the script runs out.
    """

    def __init__(self, randints: Optional[List[int]] = None, indices: Optional[List[int]] = None, seed: int = 0):
        super().__init__(seed)
        self.randints = list(randints or [])
        self.indices = list(indices or [])
        self.randint_calls: List[tuple] = []

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        if self.randints:
            return self.randints.pop(0)
        return super().randrange(a, b + 1)

    def randrange(self, *args, **kwargs):
        if self.indices:
            return self.indices.pop(0)
        return super().randrange(*args, **kwargs)


class MockRobot:
    """Mock Reachy Mini that records every target it receives."""

    def __init__(self, fail: bool = False):
        self._targets: List[Dict[str, Any]] = []
        self.fail = fail

    def set_target(self, head=None, antennas=None, body_yaw=None):
        if self.fail:
            raise RuntimeError("motor bus timeout")
        self._targets.append({"head": head, "antennas": antennas, "body_yaw": body_yaw})


# =============================================================================
# Pytest Fixtures
# =============================================================================

@pytest.fixture
def head_config() -> HeadConfig:
    """Head configuration with the horizontal axis from the worked examples."""
    return HeadConfig(
        rotation=AxisConfig(60, 120, 12.0),
        horizontal=AxisConfig(75, 115, 8.0),
        vertical=AxisConfig(70, 110, 10.0),
        head_move_duration_ms=4000,
        random_move_interval_ms=500,
        jitter_range=15,
        gradual_move_interval_ms=20,
    )


@pytest.fixture
def jaw_config() -> JawConfig:
    """Jaw configuration: closed at 100, wide open at 50."""
    return JawConfig(
        closed=100,
        open_max=50,
        step=2,
        smoothing_interval_ms=10,
        letter_duration_ms=100,
        silent_pause_ms=300,
    )


@pytest.fixture
def breathing_config() -> BreathingConfig:
    return BreathingConfig(interval_ms=3000, amplitude_deg=2.0, update_interval_ms=20)


@pytest.fixture
def phrase_config() -> PhraseConfig:
    return PhraseConfig(
        phrase_duration_ms=5000,
        max_length=63,
        phrases=["HELLO THERE", "BOO!"],
    )


@pytest.fixture
def config(head_config, jaw_config, breathing_config, phrase_config) -> Config:
    """Full configuration with every feature enabled."""
    return Config(
        head=head_config,
        jaw=jaw_config,
        breathing=breathing_config,
        phrases=phrase_config,
        features=FeatureConfig(
            jaw_enabled=True,
            head_movement_enabled=True,
            idle_jitter_enabled=True,
            breathing_enabled=True,
            phrase_generation_enabled=True,
        ),
    )


@pytest.fixture
def state(config) -> MotionState:
    """Fresh shared state starting at t=0."""
    return MotionState.from_config(config, now_ms=0)


@pytest.fixture
def channels(config) -> ServoChannels:
    """Simulated channels resting at neutral with the jaw closed."""
    return ServoChannels.simulated(config)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def mock_robot() -> MockRobot:
    """Provide a mock robot instance."""
    return MockRobot()


@pytest.fixture
def scripted_rng():
    """Factory for random sources with scripted randint/randrange results."""
    return ScriptedRandom


@pytest.fixture
def check_bounds():
    """Assert that every axis target and current position is inside its bounds."""
    def _check(state: MotionState):
        for axis in state.axes.values():
            assert axis.min_angle <= axis.target <= axis.max_angle, axis
            assert axis.min_angle <= axis.current <= axis.max_angle, axis
            assert axis.min_angle <= axis.baseline <= axis.max_angle, axis
            assert not np.isnan(axis.current)

    return _check


# =============================================================================
# Pytest Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "motion: Head motion skill tests")
    config.addinivalue_line("markers", "jaw: Speech and jaw skill tests")
    config.addinivalue_line("markers", "phrases: Phrase selection tests")
    config.addinivalue_line("markers", "controller: Scheduler and lifecycle tests")
    config.addinivalue_line("markers", "reachy: Reachy Mini backend tests")
    config.addinivalue_line("markers", "integration: Integration tests (threads, real timing)")
    config.addinivalue_line("markers", "slow: Slow tests")
