"""Phrase selection.

Picks what the head says next: a phrase queued by the application, or a
random one from the catalog once the head has been quiet long enough.
"""

import random
from collections import deque
from typing import Deque, List, Optional

from ...config import PhraseConfig
from .state import MotionState

__all__ = ["PhraseScheduler", "truncate_phrase"]


def truncate_phrase(text: str, max_length: int) -> str:
    """Cut a phrase down to the phrase buffer size."""
    return text[:max_length]


class PhraseScheduler:
    """Starts a new phrase whenever the head is idle and a phrase is due."""

    def __init__(
        self,
        config: PhraseConfig,
        rng: Optional[random.Random] = None,
        catalog: Optional[List[str]] = None,
        auto_select: bool = True,
    ):
        """
        Args:
            config: Phrase timing and buffer size
            rng: Random source for catalog selection
            catalog: Optional phrase list, defaults to config.phrases
            auto_select: Pick random catalog phrases when due
        """
        self.config = config
        self.rng = rng or random.Random()
        self.catalog = list(catalog) if catalog is not None else list(config.phrases)
        self.auto_select = auto_select
        self._pending: Deque[str] = deque()

    def queue(self, text: str):
        """Speak ``text`` as soon as the current phrase (if any) is finished."""
        self._pending.append(text)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def update(self, state: MotionState, now_ms: int):
        phrase = state.phrase
        if not phrase.is_idle:
            return

        if self._pending:
            self._start(state, self._pending.popleft(), now_ms)
            return

        if not self.auto_select or not self.catalog:
            return
        if now_ms - phrase.ended_at_ms < self.config.phrase_duration_ms:
            return

        index = self.rng.randrange(len(self.catalog))
        self._start(state, self.catalog[index], now_ms)

    def _start(self, state: MotionState, text: str, now_ms: int):
        text = truncate_phrase(text, self.config.max_length)
        if not text:
            # Nothing to say; wait a full phrase duration again
            state.phrase.ended_at_ms = now_ms
            return
        state.phrase.start(text)
        print(f"[Phrases] Speaking: {text}")
