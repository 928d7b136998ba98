"""Motion controller for the animatronic head.

Cooperative scheduler that runs speech, jaw, head, jitter, breathing,
interpolation and phrase selection every tick. Each subsystem checks its own
cadence, so most calls return straight away and nothing ever blocks the loop.

Usage (background loop):
    from animatronic_skills.actuation.motion import MotionController
    from animatronic_skills.actuation.servos import ServoChannels

    controller = MotionController(ServoChannels.simulated())
    controller.start()

    controller.queue_phrase("GOOD EVENING.")

    controller.stop()

Usage (driving ticks yourself):
    controller = MotionController(channels, clock=my_clock)
    controller.reset()
    while True:
        controller.tick()
"""

import queue
import random
import threading
import time
from typing import Callable, List, Optional

from ...config import Config
from ..servos import ServoChannels
from .head import AxisInterpolator, BreathingOscillator, HeadMacroPlanner, IdleJitter
from .jaw import JawSmoother, SpeechDriver
from .phrases import PhraseScheduler
from .state import MotionState

__all__ = ["MotionController", "monotonic_ms"]


def monotonic_ms() -> int:
    """Default clock: monotonic milliseconds."""
    return int(time.monotonic() * 1000)


class MotionController:
    """
    Runs the animatronic behaviours over one shared MotionState.

    Subsystems run in a fixed order every tick:

        1. SpeechDriver         (jaw target from the current letter)
        2. JawSmoother          (jaw channel)
        3. HeadMacroPlanner     (new random pose)
        4. IdleJitter           (small nudges while idle)
        5. BreathingOscillator  (vertical offset)
        6. AxisInterpolator     (head channels)
        7. PhraseScheduler      (next phrase while idle)

    Feature toggles are read once, here, to decide which subsystems take part.
    """

    def __init__(
        self,
        channels: ServoChannels,
        config: Optional[Config] = None,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[random.Random] = None,
        catalog: Optional[List[str]] = None,
    ):
        """
        Initialize the controller.

        Args:
            channels: The four actuator channels
            config: Optional Config for customization
            clock: Callable returning monotonic milliseconds
            rng: Random source shared by every random behaviour
            catalog: Optional phrase list, defaults to config.phrases.phrases
        """
        self.channels = channels
        self.config = config or Config()
        self.clock = clock or monotonic_ms
        self.rng = rng or random.Random()

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._command_queue: queue.Queue = queue.Queue()
        self._lock = threading.Lock()

        self.features = features = self.config.features

        now_ms = self.clock()
        self.state = MotionState.from_config(self.config, now_ms)

        self.speech = SpeechDriver(self.config.jaw)
        self.jaw = JawSmoother(self.config.jaw, channels.jaw)
        self.idle_jitter = IdleJitter(self.config.head, self.rng)
        self.head_planner = HeadMacroPlanner(
            self.config.head,
            self.rng,
            idle_jitter=self.idle_jitter if features.idle_jitter_enabled else None,
        )
        self.breathing = BreathingOscillator(self.config.breathing)
        self.interpolator = AxisInterpolator(self.config.head, channels.head)
        self.phrase_scheduler = PhraseScheduler(
            self.config.phrases,
            self.rng,
            catalog=catalog,
            auto_select=features.phrase_generation_enabled,
        )

        # The speech driver always runs so queued phrases still finish with the jaw off
        self._subsystems = [self.speech]
        if features.jaw_enabled:
            self._subsystems.append(self.jaw)
        if features.head_movement_enabled:
            self._subsystems.append(self.head_planner)
        if features.idle_jitter_enabled:
            self._subsystems.append(self.idle_jitter)
        if features.breathing_enabled:
            self._subsystems.append(self.breathing)
        self._subsystems.append(self.interpolator)
        self._subsystems.append(self.phrase_scheduler)

        for subsystem in self._all_subsystems():
            subsystem.reset(now_ms)

        self._target_period = (
            1.0 / self.config.controller.control_loop_frequency_hz
            if self.config.controller.control_loop_frequency_hz > 0
            else 0.0
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def queue_phrase(self, text: str):
        """Speak ``text`` next, once any phrase in progress has finished."""
        self._command_queue.put(("queue_phrase", text))

    def get_state(self) -> dict:
        """Get current state of all toggles, axes, jaw and phrase."""
        with self._lock:
            phrase = self.state.phrase
            return {
                "jaw_enabled": self.features.jaw_enabled,
                "head_movement_enabled": self.features.head_movement_enabled,
                "idle_jitter_enabled": self.features.idle_jitter_enabled,
                "breathing_enabled": self.features.breathing_enabled,
                "phrase_generation_enabled": self.features.phrase_generation_enabled,
                "speaking": self.state.is_speaking,
                "phrase": phrase.text,
                "letter_index": phrase.letter_index,
                "pending_phrases": self.phrase_scheduler.pending + self._command_queue.qsize(),
                "jaw": {
                    "target": self.state.jaw.target,
                    "current": self.state.jaw.current_aperture,
                },
                "axes": {
                    name: {
                        "target": axis.target,
                        "current": axis.current,
                        "last_written": axis.last_written,
                    }
                    for name, axis in self.state.axes.items()
                },
                "running": self.is_running,
            }

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # =========================================================================
    # Scheduling
    # =========================================================================

    def reset(self, now_ms: Optional[int] = None):
        """Return every state to neutral and restart all cadences at ``now_ms``."""
        if now_ms is None:
            now_ms = self.clock()

        with self._lock:
            self.state = MotionState.from_config(self.config, now_ms)
            for subsystem in self._all_subsystems():
                subsystem.reset(now_ms)

            for name, axis in self.state.axes.items():
                position = int(round(axis.current))
                self.channels.head[name].set_position(position)
                axis.last_written = position
            self.channels.jaw.set_position(self.state.jaw.current_aperture)

    def tick(self, now_ms: Optional[int] = None):
        """Run every enabled subsystem once, in order."""
        if now_ms is None:
            now_ms = self.clock()

        with self._lock:
            self._process_commands()
            for subsystem in self._subsystems:
                subsystem.update(self.state, now_ms)

    def _all_subsystems(self):
        return [
            self.speech,
            self.jaw,
            self.head_planner,
            self.idle_jitter,
            self.breathing,
            self.interpolator,
        ]

    def _process_commands(self):
        """Process any pending commands from the queue."""
        while True:
            try:
                cmd, payload = self._command_queue.get_nowait()
            except queue.Empty:
                break

            if cmd == "queue_phrase":
                self.phrase_scheduler.queue(payload)
                print(f"[Controller] Queued phrase: {payload}")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def run(self):
        """Run the control loop in the calling thread until stop() is called."""
        print("[Controller] Control loop started")

        while not self._stop_event.is_set():
            loop_start = time.monotonic()

            try:
                self.tick()
            except Exception as e:
                print(f"[Controller] Tick error: {e}")

            # Maintain loop frequency
            if self._target_period > 0:
                elapsed = time.monotonic() - loop_start
                sleep_time = self._target_period - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        print("[Controller] Control loop stopped")

    def start(self):
        """Start the control loop on a background thread."""
        if self.is_running:
            print("[Controller] Already running")
            return

        print("[Controller] Starting...")

        self._stop_event.clear()
        self.reset()
        self._thread = threading.Thread(target=self.run, daemon=True)
        self._thread.start()

        print("[Controller] Started")

    def stop(self):
        """Stop the control loop and return the head to neutral with the jaw closed."""
        if not self.is_running:
            return

        print("[Controller] Stopping...")

        self._stop_event.set()
        self._thread.join(timeout=2.0)
        self._thread = None

        with self._lock:
            try:
                for name, axis_config in self.config.head.axes.items():
                    self.channels.head[name].set_position(int(round(axis_config.neutral)))
                self.channels.jaw.set_position(self.config.jaw.closed)
            except Exception as e:
                print(f"[Controller] Failed to reset to neutral: {e}")

        print("[Controller] Stopped")
