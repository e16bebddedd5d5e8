"""
Chain Service

Sequences rounds into a hurdle session: starts sessions, scores solved
hurdles into the chain state, and opens each next hurdle with the
previous answer submitted as its first guess.
"""

import random
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ..config.game_settings import ALLOWED_MAX_ATTEMPTS, DEFAULT_MAX_ATTEMPTS, WORD_LIST
from ..exceptions import ChainSequenceError, ChainStateCorruptionError, HurdleError, SessionClosedError
from ..models.chain import ChainState
from ..models.game import GuessResult, HurdleGameState, RoundState, RoundStatus
from ..models.hurdle import CompletedHurdle, FinishedRound, HurdleSession
from ..utils.game_logger import game_logger
from .hard_mode import HardModeTracker
from .round_service import RoundController
from .scoring import calculate_final_score, calculate_hurdle_score
from .stats_service import StatsRepository
from .word_provider import FrequencyRange, WordProvider
from .word_selection import WordSelector


@dataclass(frozen=True)
class SessionConfig:
    """Settings fixed for the lifetime of one session."""
    max_attempts: int
    frequency_range: Optional[FrequencyRange]
    hard_mode: bool


@dataclass(frozen=True)
class HurdleTransition:
    """What the caller needs to move from a solved hurdle to the next one."""
    completed_hurdle: CompletedHurdle
    next_hurdle_number: int
    auto_guess: str
    should_continue: bool = True
    clear_board: bool = True

    def to_dict(self) -> Dict:
        return {
            "completed_hurdle": self.completed_hurdle.to_dict(),
            "next_hurdle_number": self.next_hurdle_number,
            "auto_guess": self.auto_guess,
            "should_continue": self.should_continue,
            "clear_board": self.clear_board,
            "show_score": self.completed_hurdle.score,
        }


class ChainController:
    """
    Top-level hurdle controller.

    Owns the chain state, the session record, the hard-mode tracker and
    the round controller. Only one round is active at a time; callers
    must await each operation before starting another.
    """

    def __init__(self,
                 word_provider: WordProvider,
                 stats_repository: Optional[StatsRepository] = None,
                 selector: Optional[WordSelector] = None,
                 fallback_words: Optional[Iterable[str]] = None,
                 provider_attempts: int = 3,
                 rng: Optional[random.Random] = None):
        """
        Args:
            word_provider: Word validity and random-word source
            stats_repository: Optional store for finished rounds
            selector: Custom selection chain; built from the provider when omitted
            fallback_words: In-memory list tried after the provider (defaults to the curated list)
            provider_attempts: Provider tries before falling back
            rng: Random source for the fallback list
        """
        if word_provider is None:
            raise ValueError("Word provider is required")

        self.word_provider = word_provider
        self.stats_repository = stats_repository
        self.selector = selector or WordSelector.default(
            word_provider,
            WORD_LIST if fallback_words is None else fallback_words,
            provider_attempts,
            rng,
        )
        self.chain_state = ChainState()
        self.hard_mode_tracker = HardModeTracker()
        self.session: Optional[HurdleSession] = None
        self.session_config: Optional[SessionConfig] = None
        self.round_controller: Optional[RoundController] = None
        self.previous_answer: Optional[str] = None
        self.last_finished_round: Optional[FinishedRound] = None
        self._completed_round: Optional[RoundState] = None

    @property
    def current_round(self) -> Optional[RoundState]:
        return self.round_controller.round_state if self.round_controller else None

    @property
    def session_id(self) -> Optional[str]:
        return self.session.session_id if self.session else None

    def is_active(self) -> bool:
        return self.session is not None and self.session.is_active()

    def _require_active_session(self) -> HurdleSession:
        if self.session is None:
            raise SessionClosedError("No session in progress")
        if not self.session.is_active():
            raise SessionClosedError("Session has already ended")
        return self.session

    def _begin_round(self, target_word: str) -> RoundState:
        return self.round_controller.start_round(target_word, self.session_config.max_attempts)

    async def start_session(self,
                            max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                            difficulty_range: Optional[FrequencyRange] = None,
                            hard_mode: bool = False) -> HurdleSession:
        """
        Starts a fresh session at hurdle 1, discarding any previous one.

        Raises:
            ValueError: If max_attempts is not an allowed budget
            ChainStateCorruptionError: If the new round does not offer the full budget
        """
        if isinstance(max_attempts, bool) or max_attempts not in ALLOWED_MAX_ATTEMPTS:
            raise ValueError(f"Max attempts must be one of {list(ALLOWED_MAX_ATTEMPTS)}")

        self.chain_state.reset()
        self.session = HurdleSession()
        self.session_config = SessionConfig(max_attempts, difficulty_range, bool(hard_mode))
        self.round_controller = RoundController(
            self.word_provider,
            self.hard_mode_tracker if hard_mode else None,
        )
        self.previous_answer = None
        self.last_finished_round = None
        self._completed_round = None

        target_word = await self.selector.select(None, difficulty_range)
        round_state = self._begin_round(target_word)

        if round_state.get_remaining_attempts() != max_attempts:
            raise ChainStateCorruptionError(
                f"First hurdle must have exactly {max_attempts} attempts available"
            )

        game_logger.log_game_event(
            self.session.session_id, 'session_started',
            max_attempts=max_attempts, hard_mode=bool(hard_mode)
        )
        return self.session

    async def submit_guess(self, word) -> GuessResult:
        """Passes a player guess to the active round."""
        if self.round_controller is None:
            return GuessResult(success=False, status=RoundStatus.IN_PROGRESS,
                               error="No game in progress.")

        result = await self.round_controller.submit_guess(word)

        if result.success and result.status == RoundStatus.LOST:
            self._record_finished_round(self.current_round)

        return result

    def complete_round(self, round_state: Optional[RoundState] = None) -> HurdleTransition:
        """
        Scores a won round and advances the chain to the next hurdle.

        Args:
            round_state: The won round; defaults to the active round

        Returns:
            HurdleTransition for the next hurdle

        Raises:
            ValueError: If the round is missing or not won
            ChainSequenceError: If the round was already completed
            SessionClosedError: If no session is active
        """
        session = self._require_active_session()
        round_state = round_state or self.current_round

        if round_state is None:
            raise ValueError("Round state is required")

        if round_state.status != RoundStatus.WON:
            raise ValueError("Can only complete won rounds")

        if round_state is self._completed_round:
            raise ChainSequenceError("This round has already been completed")

        hurdle_number = self.chain_state.current_hurdle_number
        guesses = round_state.get_guesses()
        score = calculate_hurdle_score(hurdle_number, len(guesses))

        completed_hurdle = CompletedHurdle(
            hurdle_number=hurdle_number,
            target_word=round_state.target_word,
            guess_count=len(guesses),
            score=score,
            guesses=tuple(guesses),
        )

        self.chain_state.add_completed_hurdle(completed_hurdle)
        session.add_completed_hurdle(completed_hurdle)
        self.chain_state.increment_hurdle_number()
        session.set_current_hurdle_number(self.chain_state.current_hurdle_number)

        self._completed_round = round_state
        self.previous_answer = round_state.target_word
        self._record_finished_round(round_state, hurdle_number)

        game_logger.log_game_event(
            session.session_id, 'hurdle_completed',
            hurdle_number=hurdle_number, guess_count=len(guesses),
            score=score, total_score=self.chain_state.total_score
        )

        return HurdleTransition(
            completed_hurdle=completed_hurdle,
            next_hurdle_number=self.chain_state.current_hurdle_number,
            auto_guess=round_state.target_word,
        )

    async def start_next_round(self, previous_answer: Optional[str] = None) -> RoundState:
        """
        Opens the next hurdle with a new target and auto-submits the
        previous answer as its first guess.

        The returned round may already be won; the caller completes it as a
        1-guess hurdle.

        Raises:
            ValueError: If there is no previous answer or the current hurdle is unfinished
            HurdleError: If the auto-guess is rejected
        """
        self._require_active_session()

        previous_answer = previous_answer or self.previous_answer
        if not previous_answer or not isinstance(previous_answer, str):
            raise ValueError("Previous answer is required for auto-guess")

        current = self.current_round
        if current is not None and current is not self._completed_round:
            raise ValueError("Current hurdle must be completed before starting the next one")

        previous_answer = previous_answer.lower()
        new_target = await self.selector.select(previous_answer, self.session_config.frequency_range)
        round_state = self._begin_round(new_target)

        result = await self.round_controller.submit_guess(previous_answer, auto_guess=True)
        if not result.success:
            raise HurdleError(f"Auto-guess failed: {result.error}")

        expected_remaining = self.session_config.max_attempts - 1
        if round_state.get_remaining_attempts() != expected_remaining:
            raise ChainStateCorruptionError(
                f"Auto-guess should leave exactly {expected_remaining} remaining attempts"
            )

        if result.status == RoundStatus.LOST:
            self._record_finished_round(round_state)

        game_logger.log_game_event(
            self.session.session_id, 'auto_guess',
            hurdle_number=self.chain_state.current_hurdle_number,
            auto_guess=previous_answer, status=result.status.value
        )
        return round_state

    def end_session(self, reason, final_answer: Optional[str] = None) -> HurdleSession:
        """
        Closes the session with 'failure' or 'manual-stop'.

        Raises:
            ValueError: For any other reason, or when no session exists
            SessionClosedError: If the session already ended
        """
        if self.session is None:
            raise ValueError("No active session to end")

        self.session.end_session(reason, final_answer)

        if self.round_controller is not None:
            self.round_controller.discard_round()

        game_logger.log_game_event(
            self.session.session_id, 'session_ended',
            reason=self.session.end_reason.value,
            final_answer=self.session.final_answer,
            hurdles_completed=self.chain_state.completed_count,
            total_score=self.chain_state.total_score
        )
        return self.session

    def calculate_final_score(self) -> int:
        if self.session is None:
            return 0
        return calculate_final_score(self.chain_state.get_completed_hurdles())

    def get_state(self) -> HurdleGameState:
        """Presentation snapshot; every collection in it is a copy."""
        current = self.current_round
        session = self.session
        return HurdleGameState(
            session_id=self.session_id,
            current_hurdle_number=self.chain_state.current_hurdle_number,
            completed_hurdles_count=self.chain_state.completed_count,
            total_score=self.chain_state.total_score,
            hard_mode=bool(self.session_config and self.session_config.hard_mode),
            is_active=self.is_active(),
            round=current.snapshot() if current else None,
            solved_words=self.chain_state.get_solved_words(),
            end_reason=session.end_reason.value if session and session.end_reason else None,
            final_answer=session.final_answer if session else None,
        )

    def _record_finished_round(self, round_state: RoundState, hurdle_number: Optional[int] = None) -> None:
        if hurdle_number is None:
            hurdle_number = self.chain_state.current_hurdle_number

        record = FinishedRound.from_words(
            target_word=round_state.target_word,
            guesses=round_state.get_guesses(),
            won=round_state.status == RoundStatus.WON,
            duration_seconds=round_state.duration_seconds(),
            hurdle_number=hurdle_number,
        )
        self.last_finished_round = record

        if self.stats_repository is None:
            return

        try:
            self.stats_repository.save_round(record)
        except Exception as e:
            game_logger.logger.error(f"Statistics repository failed to save round: {e}")
