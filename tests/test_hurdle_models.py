"""Tests for completed hurdles, sessions and finished-round records."""

import pytest

from hurdle.exceptions import InvalidGuessCountError, InvalidHurdleNumberError, SessionClosedError
from hurdle.models.game import Guess
from hurdle.models.hurdle import CompletedHurdle, EndReason, FinishedRound, HurdleSession
from hurdle.models.stats import GameStats
from hurdle.services.feedback import generate_feedback


def _guesses(target, *words):
    return tuple(Guess(word, tuple(generate_feedback(word, target))) for word in words)


def _hurdle(number=1, target="crane", words=("crane",), score=None):
    guesses = _guesses(target, *words)
    if score is None:
        score = {1: 175, 2: 150, 3: 125, 4: 100}[len(guesses)] * number
    return CompletedHurdle(number, target, len(guesses), score, guesses)


class TestCompletedHurdle:
    def test_fields_and_multiplier(self):
        hurdle = _hurdle(2, "crane", ("slate", "crane"))
        assert hurdle.score == 300
        assert hurdle.multiplier == 1.5
        assert [guess.word for guess in hurdle.get_guesses()] == ["slate", "crane"]

    def test_is_immutable(self):
        hurdle = _hurdle()
        with pytest.raises(AttributeError):
            hurdle.score = 1

    def test_rejects_bad_hurdle_number(self):
        with pytest.raises(InvalidHurdleNumberError):
            CompletedHurdle(0, "crane", 1, 0, _guesses("crane", "crane"))

    def test_rejects_guess_count_without_multiplier(self):
        words = ("slate", "house", "light", "stone", "crane")
        with pytest.raises(InvalidGuessCountError):
            CompletedHurdle(1, "crane", 5, 100, _guesses("crane", *words))

    def test_guess_count_must_match_guesses(self):
        with pytest.raises(ValueError):
            CompletedHurdle(1, "crane", 2, 150, _guesses("crane", "crane"))

    def test_to_dict_includes_guesses(self):
        data = _hurdle().to_dict()
        assert data["hurdle_number"] == 1
        assert data["target_word"] == "crane"
        assert data["guesses"][0]["word"] == "crane"


class TestHurdleSession:
    def test_new_session(self):
        session = HurdleSession()
        assert session.is_active()
        assert session.current_hurdle_number == 1
        assert session.completed_hurdles_count == 0
        assert session.total_score == 0

    def test_session_ids_are_unique(self):
        assert HurdleSession().session_id != HurdleSession().session_id

    def test_add_completed_hurdle_accumulates(self):
        session = HurdleSession()
        session.add_completed_hurdle(_hurdle(1))
        session.add_completed_hurdle(_hurdle(2, "speed", ("slate", "speed")))
        assert session.completed_hurdles_count == 2
        assert session.total_score == 475

    def test_completed_hurdles_is_a_copy(self):
        session = HurdleSession()
        session.add_completed_hurdle(_hurdle())
        session.completed_hurdles.clear()
        assert session.completed_hurdles_count == 1

    @pytest.mark.parametrize("reason", ["failure", EndReason.MANUAL_STOP])
    def test_end_session(self, reason):
        session = HurdleSession()
        session.end_session(reason, "CRANE")
        assert not session.is_active()
        assert session.end_time is not None
        assert session.final_answer == "crane"

    def test_end_session_rejects_unknown_reason(self):
        session = HurdleSession()
        with pytest.raises(ValueError, match='"failure" or "manual-stop"'):
            session.end_session("timeout")
        assert session.is_active()

    def test_closed_session_cannot_end_again(self):
        session = HurdleSession()
        session.end_session("manual-stop")
        with pytest.raises(SessionClosedError):
            session.end_session("failure")

    def test_closed_session_rejects_hurdles(self):
        session = HurdleSession()
        session.end_session("failure")
        with pytest.raises(SessionClosedError):
            session.add_completed_hurdle(_hurdle())

    def test_to_dict(self):
        session = HurdleSession()
        session.add_completed_hurdle(_hurdle())
        session.end_session(EndReason.FAILURE, "speed")
        data = session.to_dict()
        assert data["end_reason"] == "failure"
        assert data["final_answer"] == "speed"
        assert data["completed_hurdles"][0]["score"] == 175


class TestFinishedRound:
    def test_from_words(self):
        record = FinishedRound.from_words("crane", _guesses("crane", "slate", "crane"), True, 12.5, 3)
        assert record.guesses == ("slate", "crane")
        assert record.attempts_used == 2
        assert record.won

    def test_to_document(self):
        record = FinishedRound.from_words("crane", _guesses("crane", "slate"), False, 1.0, 1)
        document = record.to_document()
        assert document["target_word"] == "crane"
        assert document["guesses"] == ["slate"]
        assert document["created_at"] == record.finished_at


class TestGameStats:
    def test_streaks_and_distribution(self):
        stats = GameStats()
        stats.record(True, 2)
        stats.record(True, 3)
        stats.record(False, 4)
        stats.record(True, 1)
        assert stats.total_games == 4
        assert stats.games_won == 3
        assert stats.current_streak == 1
        assert stats.max_streak == 2
        assert stats.guess_distribution["2"] == 1
        assert stats.guess_distribution["4"] == 0
        assert stats.win_percentage == 75

    def test_empty_win_percentage(self):
        assert GameStats().win_percentage == 0
