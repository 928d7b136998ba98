"""Tests for phrase selection.

Run standalone:
    pytest tests/test_phrases.py -v
    pytest tests/test_phrases.py -v -m phrases
"""

import pytest

from animatronic_skills.actuation.motion import PhraseScheduler, truncate_phrase


@pytest.mark.phrases
class TestPhraseScheduler:
    """Tests for the PhraseScheduler."""

    def test_waits_for_phrase_duration(self, phrase_config, state, scripted_rng):
        scheduler = PhraseScheduler(phrase_config, scripted_rng(indices=[0]))

        scheduler.update(state, 4999)
        assert state.phrase.is_idle

        scheduler.update(state, 5000)
        assert state.phrase.text == "HELLO THERE"
        assert state.phrase.letter_index == 0

    def test_duration_counts_from_end_of_last_phrase(self, phrase_config, state, scripted_rng):
        scheduler = PhraseScheduler(phrase_config, scripted_rng(indices=[1]))
        state.phrase.ended_at_ms = 12000

        scheduler.update(state, 16999)
        assert state.phrase.is_idle

        scheduler.update(state, 17000)
        assert state.phrase.text == "BOO!"

    def test_announces_chosen_phrase(self, phrase_config, state, scripted_rng, capsys):
        scheduler = PhraseScheduler(phrase_config, scripted_rng(indices=[1]))

        scheduler.update(state, 5000)

        assert "[Phrases] Speaking: BOO!" in capsys.readouterr().out

    def test_no_new_phrase_mid_phrase(self, phrase_config, state, scripted_rng):
        scheduler = PhraseScheduler(phrase_config, scripted_rng(indices=[0]))
        state.phrase.start("STILL TALKING")
        state.phrase.letter_index = 4

        scheduler.update(state, 100000)

        assert state.phrase.text == "STILL TALKING"
        assert state.phrase.letter_index == 4

    def test_selection_covers_catalog(self, phrase_config, state, rng):
        scheduler = PhraseScheduler(phrase_config, rng)
        seen = set()
        now = 0
        for _ in range(50):
            now += phrase_config.phrase_duration_ms
            scheduler.update(state, now)
            seen.add(state.phrase.text)
            state.phrase.finish(now)

        assert seen == set(phrase_config.phrases)

    def test_long_phrase_truncated(self, phrase_config, state):
        config = phrase_config.update(max_length=5)
        scheduler = PhraseScheduler(config, catalog=["ABCDEFGHIJ"])

        scheduler.update(state, 5000)

        assert state.phrase.text == "ABCDE"

    def test_truncate_phrase(self):
        assert truncate_phrase("HELLO", 63) == "HELLO"
        assert truncate_phrase("X" * 100, 63) == "X" * 63

    def test_empty_catalog_stays_idle(self, phrase_config, state):
        scheduler = PhraseScheduler(phrase_config, catalog=[])

        scheduler.update(state, 50000)

        assert state.phrase.is_idle

    def test_empty_phrase_restarts_wait(self, phrase_config, state):
        scheduler = PhraseScheduler(phrase_config, catalog=[""])

        scheduler.update(state, 5000)

        assert state.phrase.is_idle
        assert state.phrase.ended_at_ms == 5000

    def test_queued_phrase_starts_without_waiting(self, phrase_config, state):
        scheduler = PhraseScheduler(phrase_config, auto_select=False)
        scheduler.queue("GOOD EVENING.")
        assert scheduler.pending == 1

        scheduler.update(state, 10)

        assert state.phrase.text == "GOOD EVENING."
        assert scheduler.pending == 0

    def test_queued_phrase_waits_for_current_phrase(self, phrase_config, state):
        scheduler = PhraseScheduler(phrase_config)
        state.phrase.start("FIRST")
        scheduler.queue("SECOND")

        scheduler.update(state, 10)
        assert state.phrase.text == "FIRST"

        state.phrase.finish(20)
        scheduler.update(state, 30)
        assert state.phrase.text == "SECOND"

    def test_auto_select_disabled(self, phrase_config, state):
        scheduler = PhraseScheduler(phrase_config, auto_select=False)

        scheduler.update(state, 60000)

        assert state.phrase.is_idle
