"""
Round Service

Coordinates a single round: validates submitted guesses, generates
feedback, applies hard-mode rules and updates the round state.
"""

from typing import Optional

from ..config.game_settings import WORD_LENGTH
from ..models.game import Guess, GuessResult, RoundState, RoundStatus
from ..utils.game_logger import game_logger
from .feedback import generate_feedback
from .hard_mode import HardModeTracker
from .word_provider import WordProvider, is_well_formed

NO_GAME_IN_PROGRESS = "No game in progress."
GAME_IS_OVER = "Game is over."
ENTER_A_WORD = "Please enter a word."
WRONG_LENGTH = f"Word must be exactly {WORD_LENGTH} letters."
NOT_A_VALID_WORD = "Not a valid word."
ALREADY_GUESSED = "You have already guessed this word."
VALIDATION_UNAVAILABLE = "Unable to check that word right now. Please try again."


class RoundController:
    """
    Drives one round at a time.

    Hard mode is on when a tracker is supplied; the tracker is reset each
    time a round starts.
    """

    def __init__(self, word_provider: WordProvider, hard_mode_tracker: Optional[HardModeTracker] = None):
        if word_provider is None:
            raise ValueError("Word provider is required")

        self.word_provider = word_provider
        self.hard_mode_tracker = hard_mode_tracker
        self.round_state: Optional[RoundState] = None

    @property
    def hard_mode(self) -> bool:
        return self.hard_mode_tracker is not None

    def start_round(self, target_word: str, max_attempts: int) -> RoundState:
        """Replaces any current round with a fresh one for `target_word`."""
        self.round_state = RoundState(target_word, max_attempts)
        if self.hard_mode_tracker is not None:
            self.hard_mode_tracker.reset()
        return self.round_state

    def discard_round(self) -> None:
        self.round_state = None

    def _reject(self, error: str) -> GuessResult:
        status = self.round_state.status if self.round_state else RoundStatus.IN_PROGRESS
        return GuessResult(success=False, status=status, error=error)

    async def submit_guess(self, word, auto_guess: bool = False) -> GuessResult:
        """
        Validates and applies a guess. Rejections leave the round untouched.

        Args:
            word: Raw player input
            auto_guess: True for the carried-over answer, which skips the
                dictionary lookup since it was already a target word

        Returns:
            GuessResult with the new Guess and status, or the rejection reason
        """
        if self.round_state is None:
            return self._reject(NO_GAME_IN_PROGRESS)

        if self.round_state.is_over():
            return self._reject(GAME_IS_OVER)

        if not isinstance(word, str):
            return self._reject(ENTER_A_WORD)

        normalized_word = word.lower()

        if not is_well_formed(normalized_word):
            return self._reject(WRONG_LENGTH)

        if not auto_guess:
            try:
                is_valid = await self.word_provider.is_valid_word(normalized_word)
            except Exception as e:
                game_logger.logger.warning(f"Word validation failed for '{normalized_word}': {e}")
                return self._reject(VALIDATION_UNAVAILABLE)

            if not is_valid:
                return self._reject(NOT_A_VALID_WORD)

        if self.round_state.has_guessed(normalized_word):
            return self._reject(ALREADY_GUESSED)

        if self.hard_mode_tracker is not None:
            is_valid, error = self.hard_mode_tracker.validate_guess(normalized_word)
            if not is_valid:
                return self._reject(error)

        feedback = generate_feedback(normalized_word, self.round_state.target_word)
        guess = Guess(normalized_word, tuple(feedback))

        if self.hard_mode_tracker is not None:
            self.hard_mode_tracker.update_from_feedback(normalized_word, feedback)

        status = self.round_state.add_guess(guess)

        return GuessResult(success=True, status=status, guess=guess)
