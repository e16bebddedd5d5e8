"""Tests for the chain controller that sequences hurdles."""

from typing import Optional

import pytest

from hurdle.exceptions import ChainSequenceError, SessionClosedError
from hurdle.models.game import LetterStatus, RoundStatus
from hurdle.services.chain_service import ChainController
from hurdle.services.stats_service import InMemoryStatsRepository, StatsRepository
from hurdle.services.word_provider import FrequencyRange
from hurdle.services.word_selection import WordSelectionStrategy, WordSelector


class RepeatingStrategy(WordSelectionStrategy):
    """Always returns the same word, ignoring the word to avoid."""

    def __init__(self, word: str):
        self.word = word

    async def select(self, avoid: Optional[str] = None,
                     frequency_range: Optional[FrequencyRange] = None) -> Optional[str]:
        return self.word


class BrokenStatsRepository(StatsRepository):
    def save_round(self, record):
        raise ConnectionError("database offline")

    def get_statistics(self):
        raise ConnectionError("database offline")

    def get_recent_rounds(self, limit=10):
        return []


@pytest.fixture
def make_controller(scripted_provider, stats_repository):
    def _make(*targets, **kwargs) -> ChainController:
        kwargs.setdefault("stats_repository", stats_repository)
        return ChainController(scripted_provider(*targets), **kwargs)
    return _make


async def _solve_first_hurdle(controller, *words):
    await controller.start_session()
    for word in words:
        result = await controller.submit_guess(word)
    assert result.status == RoundStatus.WON
    return controller.complete_round()


class TestStartSession:
    @pytest.mark.asyncio
    async def test_fresh_session(self, make_controller):
        controller = make_controller("crane")
        session = await controller.start_session()

        assert session.is_active()
        assert controller.is_active()
        assert controller.current_round.target_word == "crane"
        assert controller.current_round.get_remaining_attempts() == 4
        state = controller.get_state()
        assert state.session_id == session.session_id
        assert state.current_hurdle_number == 1
        assert state.total_score == 0
        assert state.round.answer is None

    @pytest.mark.asyncio
    async def test_three_attempt_budget(self, make_controller):
        controller = make_controller("crane")
        await controller.start_session(max_attempts=3)
        assert controller.current_round.get_remaining_attempts() == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempts", [0, 2, 5, 6, True])
    async def test_rejects_unsupported_budget(self, make_controller, attempts):
        with pytest.raises(ValueError):
            await make_controller("crane").start_session(max_attempts=attempts)

    @pytest.mark.asyncio
    async def test_forwards_difficulty_range(self, scripted_provider):
        provider = scripted_provider("crane")
        band = FrequencyRange.for_difficulty("hard")
        await ChainController(provider).start_session(difficulty_range=band)
        assert provider.requested_ranges == [band]

    @pytest.mark.asyncio
    async def test_restart_discards_previous_progress(self, make_controller):
        controller = make_controller("crane", "speed")
        await _solve_first_hurdle(controller, "crane")
        first_id = controller.session_id

        await controller.start_session()

        assert controller.session_id != first_id
        assert controller.chain_state.completed_count == 0
        assert controller.chain_state.current_hurdle_number == 1

    @pytest.mark.asyncio
    async def test_provider_outage_falls_back_to_word_list(self, failing_provider):
        controller = ChainController(failing_provider, fallback_words=["crane"])
        await controller.start_session()
        assert controller.current_round.target_word == "crane"


class TestHurdleChain:
    @pytest.mark.asyncio
    async def test_complete_round_scores_and_advances(self, make_controller):
        controller = make_controller("crane", "speed")
        transition = await _solve_first_hurdle(controller, "slate", "crane")

        assert transition.completed_hurdle.hurdle_number == 1
        assert transition.completed_hurdle.score == 150
        assert transition.next_hurdle_number == 2
        assert transition.auto_guess == "crane"
        assert transition.should_continue and transition.clear_board
        assert controller.session.current_hurdle_number == 2
        assert controller.session.total_score == 150

    @pytest.mark.asyncio
    async def test_next_round_starts_with_auto_guess(self, make_controller):
        controller = make_controller("crane", "speed")
        await _solve_first_hurdle(controller, "crane")

        round_state = await controller.start_next_round()

        assert round_state.target_word == "speed"
        guesses = round_state.get_guesses()
        assert len(guesses) == 1
        assert guesses[0].word == "crane"
        assert guesses[0].feedback[4].status == LetterStatus.PRESENT
        assert round_state.get_remaining_attempts() == 3
        assert round_state.status == RoundStatus.IN_PROGRESS

    @pytest.mark.asyncio
    async def test_auto_guess_skips_dictionary(self, scripted_provider):
        provider = scripted_provider("crane", "speed")
        controller = ChainController(provider)
        await _solve_first_hurdle(controller, "crane")
        calls_before = list(provider.validation_calls)

        await controller.start_next_round()

        assert provider.validation_calls == calls_before

    @pytest.mark.asyncio
    async def test_next_target_differs_from_previous_answer(self, make_controller):
        controller = make_controller("crane", "crane", "speed")
        await _solve_first_hurdle(controller, "crane")
        round_state = await controller.start_next_round()
        assert round_state.target_word == "speed"

    @pytest.mark.asyncio
    async def test_running_total_across_hurdles(self, make_controller, stats_repository):
        controller = make_controller("crane", "speed", "stone")
        await _solve_first_hurdle(controller, "crane")

        await controller.start_next_round()
        result = await controller.submit_guess("speed")
        assert result.status == RoundStatus.WON
        transition = controller.complete_round()

        assert transition.completed_hurdle.guess_count == 2
        assert transition.completed_hurdle.score == 300
        assert controller.calculate_final_score() == 475
        assert controller.chain_state.total_score == 475
        assert controller.get_state().solved_words == ["crane", "speed"]
        assert stats_repository.get_statistics().games_won == 2

    @pytest.mark.asyncio
    async def test_auto_guess_win_counts_as_one_guess(self, scripted_provider):
        selector = WordSelector([RepeatingStrategy("crane")])
        controller = ChainController(scripted_provider(), selector=selector)
        await _solve_first_hurdle(controller, "crane")

        round_state = await controller.start_next_round()
        assert round_state.status == RoundStatus.WON

        transition = controller.complete_round()
        assert transition.completed_hurdle.guess_count == 1
        assert transition.completed_hurdle.score == 350

    @pytest.mark.asyncio
    async def test_round_cannot_be_completed_twice(self, make_controller):
        controller = make_controller("crane", "speed")
        await _solve_first_hurdle(controller, "crane")
        with pytest.raises(ChainSequenceError):
            controller.complete_round()
        assert controller.chain_state.completed_count == 1

    @pytest.mark.asyncio
    async def test_only_won_rounds_complete(self, make_controller):
        controller = make_controller("crane")
        await controller.start_session()
        await controller.submit_guess("slate")
        with pytest.raises(ValueError, match="won rounds"):
            controller.complete_round()

    @pytest.mark.asyncio
    async def test_next_round_requires_completed_hurdle(self, make_controller):
        controller = make_controller("crane", "speed")
        await controller.start_session()
        with pytest.raises(ValueError):
            await controller.start_next_round("slate")

    @pytest.mark.asyncio
    async def test_next_round_requires_previous_answer(self, make_controller):
        controller = make_controller("crane")
        await controller.start_session()
        with pytest.raises(ValueError, match="Previous answer"):
            await controller.start_next_round()


class TestEndingSessions:
    @pytest.mark.asyncio
    async def test_lost_round_is_recorded(self, make_controller, stats_repository):
        controller = make_controller("crane")
        await controller.start_session(max_attempts=3)
        for word in ("slate", "house", "light"):
            result = await controller.submit_guess(word)

        assert result.status == RoundStatus.LOST
        assert controller.last_finished_round.won is False
        assert controller.last_finished_round.attempts_used == 3
        assert stats_repository.get_statistics().total_games == 1

    @pytest.mark.asyncio
    async def test_failure_ends_session_with_answer(self, make_controller):
        controller = make_controller("crane")
        await controller.start_session()
        session = controller.end_session("failure", "crane")

        assert not controller.is_active()
        assert session.end_reason.value == "failure"
        assert controller.get_state().final_answer == "crane"
        assert controller.current_round is None

    @pytest.mark.asyncio
    async def test_manual_stop_keeps_score(self, make_controller):
        controller = make_controller("crane", "speed")
        await _solve_first_hurdle(controller, "crane")
        controller.end_session("manual-stop")
        assert controller.calculate_final_score() == 175
        assert controller.get_state().end_reason == "manual-stop"

    @pytest.mark.asyncio
    async def test_invalid_reason(self, make_controller):
        controller = make_controller("crane")
        await controller.start_session()
        with pytest.raises(ValueError):
            controller.end_session("bored")
        assert controller.is_active()

    @pytest.mark.asyncio
    async def test_closed_session_rejects_progress(self, make_controller):
        controller = make_controller("crane", "speed")
        await _solve_first_hurdle(controller, "crane")
        controller.end_session("manual-stop")

        with pytest.raises(SessionClosedError):
            controller.end_session("failure")
        with pytest.raises(SessionClosedError):
            await controller.start_next_round()

    @pytest.mark.asyncio
    async def test_guess_without_round(self, make_controller):
        result = await make_controller("crane").submit_guess("crane")
        assert not result.success
        assert result.error == "No game in progress."

    def test_end_without_session(self, make_controller):
        with pytest.raises(ValueError):
            make_controller().end_session("failure")

    @pytest.mark.asyncio
    async def test_stats_failure_does_not_break_play(self, make_controller):
        controller = make_controller("crane", "speed", stats_repository=BrokenStatsRepository())
        transition = await _solve_first_hurdle(controller, "crane")
        assert transition.completed_hurdle.score == 175
        assert controller.last_finished_round.won


class TestHardModeChain:
    @pytest.mark.asyncio
    async def test_constraints_reset_between_hurdles(self, make_controller):
        controller = make_controller("crane", "speed")
        await controller.start_session(hard_mode=True)
        assert controller.get_state().hard_mode

        await controller.submit_guess("cigar")
        await controller.submit_guess("crane")
        controller.complete_round()

        round_state = await controller.start_next_round()
        assert len(round_state.get_guesses()) == 1

        result = await controller.submit_guess("light")
        assert result.error == "Guess must contain E"

        result = await controller.submit_guess("stone")
        assert result.success


class TestSessionIsolation:
    @pytest.mark.asyncio
    async def test_controllers_do_not_share_state(self, make_controller):
        first = make_controller("crane", "speed")
        second = make_controller("house")

        await _solve_first_hurdle(first, "crane")
        await second.start_session()

        assert first.chain_state.total_score == 175
        assert second.chain_state.total_score == 0
        assert second.get_state().current_hurdle_number == 1
        assert first.session_id != second.session_id
