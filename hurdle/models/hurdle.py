"""
Hurdle Data Models

Records that outlive a single round: completed hurdles, the play session
and the finished-round record handed to statistics storage.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.game_settings import GUESS_MULTIPLIERS, WORD_LENGTH
from ..exceptions import InvalidGuessCountError, InvalidHurdleNumberError, SessionClosedError
from .game import Guess


class EndReason(Enum):
    """Why a session closed."""
    FAILURE = "failure"
    MANUAL_STOP = "manual-stop"


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


@dataclass(frozen=True)
class CompletedHurdle:
    """Immutable snapshot of one solved hurdle and the points it earned."""
    hurdle_number: int
    target_word: str
    guess_count: int
    score: int
    guesses: Tuple[Guess, ...]
    completed_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if not _is_positive_int(self.hurdle_number):
            raise InvalidHurdleNumberError("Hurdle number must be a positive integer")

        if not isinstance(self.target_word, str) or len(self.target_word) != WORD_LENGTH:
            raise ValueError(f"Target word must be a {WORD_LENGTH}-letter string")

        if not _is_positive_int(self.guess_count) or self.guess_count not in GUESS_MULTIPLIERS:
            raise InvalidGuessCountError(
                f"Guess count must be between 1 and {max(GUESS_MULTIPLIERS)}"
            )

        if isinstance(self.score, bool) or not isinstance(self.score, int) or self.score < 0:
            raise ValueError("Score must be a non-negative integer")

        guesses = tuple(self.guesses)
        if len(guesses) != self.guess_count:
            raise ValueError("Guesses length must match guess count")

        object.__setattr__(self, "target_word", self.target_word.lower())
        object.__setattr__(self, "guesses", guesses)

    @property
    def multiplier(self) -> float:
        return GUESS_MULTIPLIERS[self.guess_count]

    def get_guesses(self) -> List[Guess]:
        return list(self.guesses)

    def summary(self) -> Dict:
        return {
            "hurdle_number": self.hurdle_number,
            "target_word": self.target_word,
            "guess_count": self.guess_count,
            "score": self.score,
            "multiplier": self.multiplier,
            "completed_at": self.completed_at.isoformat(),
        }

    def to_dict(self) -> Dict:
        data = self.summary()
        data["guesses"] = [guess.to_dict() for guess in self.guesses]
        return data


class HurdleSession:
    """
    Aggregate of one play session.

    Tracks completed hurdles and totals until the session closes with an
    end reason. A closed session is never reopened.
    """

    def __init__(self):
        self.session_id = str(uuid.uuid4())
        self.start_time = datetime.now()
        self.end_time: Optional[datetime] = None
        self.current_hurdle_number = 1
        self._completed_hurdles: List[CompletedHurdle] = []
        self.total_score = 0
        self.end_reason: Optional[EndReason] = None
        self.final_answer: Optional[str] = None

    @property
    def completed_hurdles(self) -> List[CompletedHurdle]:
        return list(self._completed_hurdles)

    @property
    def completed_hurdles_count(self) -> int:
        return len(self._completed_hurdles)

    def set_current_hurdle_number(self, hurdle_number: int) -> None:
        if not _is_positive_int(hurdle_number):
            raise InvalidHurdleNumberError("Hurdle number must be a positive integer")
        self.current_hurdle_number = hurdle_number

    def add_completed_hurdle(self, completed_hurdle: CompletedHurdle) -> None:
        if completed_hurdle is None:
            raise ValueError("Completed hurdle cannot be None")
        if not self.is_active():
            raise SessionClosedError("Cannot add a hurdle to a closed session")
        self._completed_hurdles.append(completed_hurdle)
        self.total_score += completed_hurdle.score

    def end_session(self, reason, final_answer: Optional[str] = None) -> None:
        """
        Closes the session.

        Args:
            reason: EndReason or its string value ('failure' or 'manual-stop')
            final_answer: The unsolved target word, if any

        Raises:
            ValueError: If the reason is not one of the two allowed values
            SessionClosedError: If the session already ended
        """
        try:
            end_reason = EndReason(reason.value if isinstance(reason, EndReason) else reason)
        except ValueError:
            raise ValueError('End reason must be either "failure" or "manual-stop"') from None

        if not self.is_active():
            raise SessionClosedError("Session has already ended")

        self.end_time = datetime.now()
        self.end_reason = end_reason
        self.final_answer = final_answer.lower() if final_answer else None

    def is_active(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> Dict:
        return {
            "session_id": self.session_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat() if self.end_time else None,
            "current_hurdle_number": self.current_hurdle_number,
            "completed_hurdles": [hurdle.summary() for hurdle in self._completed_hurdles],
            "total_score": self.total_score,
            "end_reason": self.end_reason.value if self.end_reason else None,
            "final_answer": self.final_answer,
        }


@dataclass(frozen=True)
class FinishedRound:
    """Finished-round record offered to statistics storage."""
    target_word: str
    guesses: Tuple[str, ...]
    attempts_used: int
    won: bool
    duration_seconds: float
    hurdle_number: int
    finished_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_words(cls, target_word: str, guesses: Sequence[Guess], won: bool,
                   duration_seconds: float, hurdle_number: int) -> "FinishedRound":
        return cls(
            target_word=target_word,
            guesses=tuple(guess.word for guess in guesses),
            attempts_used=len(guesses),
            won=won,
            duration_seconds=duration_seconds,
            hurdle_number=hurdle_number,
        )

    def to_document(self) -> Dict:
        return {
            "target_word": self.target_word,
            "guesses": list(self.guesses),
            "attempts_used": self.attempts_used,
            "won": self.won,
            "duration_seconds": self.duration_seconds,
            "hurdle_number": self.hurdle_number,
            "created_at": self.finished_at,
        }
