"""
Round Data Models

Contains the per-round data structures: letter feedback, guesses and the
single-round state machine.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import WORD_LENGTH
from ..exceptions import GameOverError


class LetterStatus(Enum):
    """Per-letter feedback classification."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


class RoundStatus(Enum):
    """Round lifecycle. Only in-progress can change; won and lost are terminal."""
    IN_PROGRESS = "in-progress"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class LetterFeedback:
    """Feedback for one letter of a guess."""
    letter: str
    status: LetterStatus

    def to_dict(self) -> Dict[str, str]:
        return {"letter": self.letter, "status": self.status.value}


@dataclass(frozen=True)
class Guess:
    """
    A normalized guessed word paired with its feedback.

    Immutable once created; the word is stored lowercase and the feedback
    length must equal the word length.
    """
    word: str
    feedback: Tuple[LetterFeedback, ...]

    def __post_init__(self):
        if not isinstance(self.word, str):
            raise TypeError("Guess word must be a string")
        feedback = tuple(self.feedback)
        if len(self.word) != len(feedback):
            raise ValueError("Feedback length must match word length")
        object.__setattr__(self, "word", self.word.lower())
        object.__setattr__(self, "feedback", feedback)

    @property
    def is_solved(self) -> bool:
        return all(item.status == LetterStatus.CORRECT for item in self.feedback)

    def to_dict(self) -> Dict:
        return {
            "word": self.word,
            "feedback": [item.to_dict() for item in self.feedback],
        }


class RoundState:
    """
    Single-round state machine.

    Tracks the target word, guess history, attempt budget and status.
    Status moves from in-progress to won or lost and never back.
    """

    def __init__(self, target_word: str, max_attempts: int = 4):
        """
        Args:
            target_word: The 5-letter word to guess (any case)
            max_attempts: Attempt budget for the round, must be positive

        Raises:
            TypeError: If target_word is not a string
            ValueError: If the word length or attempt budget is invalid
        """
        if not isinstance(target_word, str):
            raise TypeError("Target word must be a string")

        if len(target_word) != WORD_LENGTH or not target_word.isalpha():
            raise ValueError(f"Target word must be exactly {WORD_LENGTH} letters")

        if isinstance(max_attempts, bool) or not isinstance(max_attempts, int) or max_attempts <= 0:
            raise ValueError("Max attempts must be a positive integer")

        self._target_word = target_word.lower()
        self._max_attempts = max_attempts
        self._guesses: List[Guess] = []
        self._status = RoundStatus.IN_PROGRESS
        self.started_at = time.time()
        self.finished_at: Optional[float] = None

    @property
    def target_word(self) -> str:
        return self._target_word

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @property
    def status(self) -> RoundStatus:
        return self._status

    def add_guess(self, guess: Guess) -> RoundStatus:
        """
        Appends a guess and advances the status.

        Args:
            guess: The Guess to record

        Returns:
            RoundStatus after the guess

        Raises:
            GameOverError: If the round already finished
        """
        if guess is None:
            raise ValueError("Guess cannot be None")

        if self.is_over():
            raise GameOverError("Cannot add guess: round is already over")

        self._guesses.append(guess)

        if guess.word == self._target_word:
            self._status = RoundStatus.WON
        elif len(self._guesses) >= self._max_attempts:
            self._status = RoundStatus.LOST

        if self.is_over():
            self.finished_at = time.time()

        return self._status

    def get_remaining_attempts(self) -> int:
        return max(0, self._max_attempts - len(self._guesses))

    def get_guesses(self) -> List[Guess]:
        """Copy of the guess history in submission order."""
        return list(self._guesses)

    def has_guessed(self, word: str) -> bool:
        normalized = word.lower()
        return any(guess.word == normalized for guess in self._guesses)

    def is_over(self) -> bool:
        return self._status != RoundStatus.IN_PROGRESS

    def duration_seconds(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.time()
        return round(end - self.started_at, 3)

    def snapshot(self) -> "RoundSnapshot":
        """Read-only view for presentation; the answer stays hidden until the round ends."""
        return RoundSnapshot(
            guesses=[guess.to_dict() for guess in self._guesses],
            guess_count=len(self._guesses),
            max_attempts=self._max_attempts,
            remaining_attempts=self.get_remaining_attempts(),
            status=self._status.value,
            answer=self._target_word if self.is_over() else None,
        )


@dataclass
class RoundSnapshot:
    """Serializable round view returned to callers."""
    guesses: List[Dict]
    guess_count: int
    max_attempts: int
    remaining_attempts: int
    status: str
    answer: Optional[str] = None  # Only included when the round is over


@dataclass
class GuessResult:
    """Outcome of a submitted guess; user mistakes surface here, never as exceptions."""
    success: bool
    status: RoundStatus
    error: Optional[str] = None
    guess: Optional[Guess] = None

    def to_dict(self) -> Dict:
        return {
            "success": self.success,
            "status": self.status.value,
            "error": self.error,
            "guess": self.guess.to_dict() if self.guess else None,
        }


@dataclass
class HurdleGameState:
    """Session-wide view for presentation: chain progress plus the active round."""
    session_id: Optional[str]
    current_hurdle_number: int
    completed_hurdles_count: int
    total_score: int
    hard_mode: bool
    is_active: bool
    round: Optional[RoundSnapshot] = None
    solved_words: List[str] = field(default_factory=list)
    end_reason: Optional[str] = None
    final_answer: Optional[str] = None
