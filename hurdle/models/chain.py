"""
Chain State Model

The authoritative running total for a play session. Every mutation is
checked against the chain invariants; drift is repaired from the
completed-hurdle list, and an unrepairable mutation is rolled back from
a backup taken just before it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Tuple

from ..exceptions import ChainSequenceError, ChainStateCorruptionError
from ..utils.game_logger import game_logger
from .hurdle import CompletedHurdle

BACKUP_VERSION = 1


@dataclass(frozen=True)
class ChainStateBackup:
    """Immutable, versioned copy of a chain state taken before a mutation."""
    current_hurdle_number: int
    completed_count: int
    total_score: int
    completed_hurdles: Tuple[CompletedHurdle, ...]
    solved_words: Tuple[str, ...]
    awaiting_increment: bool
    version: int = BACKUP_VERSION
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class RecoveryResult:
    """What a recovery pass found and did."""
    success: bool = False
    corruption_detected: bool = False
    actions_performed: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class ChainState:
    """
    Session-wide progress: hurdle pointer, completed count, total score,
    completed hurdles and solved words.

    Invariants after every mutation:
    - completed_count == len(completed hurdles)
    - total_score == sum of hurdle scores
    - completed hurdle i carries hurdle number i + 1
    - solved words mirror the completed hurdles' target words
    - current_hurdle_number == len(completed hurdles) + 1, except between
      add_completed_hurdle and increment_hurdle_number where it still
      names the hurdle just recorded
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Return every field to session-start defaults."""
        self.current_hurdle_number = 1
        self.completed_count = 0
        self.total_score = 0
        self._completed_hurdles: List[CompletedHurdle] = []
        self._solved_words: List[str] = []
        self._awaiting_increment = False

    def get_completed_hurdles(self) -> List[CompletedHurdle]:
        return list(self._completed_hurdles)

    def get_solved_words(self) -> List[str]:
        return list(self._solved_words)

    @property
    def awaiting_increment(self) -> bool:
        return self._awaiting_increment

    def add_completed_hurdle(self, hurdle: CompletedHurdle) -> None:
        """
        Records a completed hurdle.

        Args:
            hurdle: The hurdle matching the current hurdle number

        Raises:
            ChainSequenceError: If the hurdle number skips or repeats
            ChainStateCorruptionError: If the resulting state cannot be repaired
        """
        if hurdle is None:
            raise ValueError("Hurdle cannot be None")

        if self._awaiting_increment:
            raise ChainSequenceError(
                f"Hurdle {self.current_hurdle_number} already recorded; "
                "advance the hurdle number before adding another"
            )

        if hurdle.hurdle_number != self.current_hurdle_number:
            raise ChainSequenceError(
                f"Expected hurdle number {self.current_hurdle_number}, but got {hurdle.hurdle_number}"
            )

        backup = self.create_backup()

        try:
            self._completed_hurdles.append(hurdle)
            self.completed_count += 1
            self.total_score += hurdle.score
            self._solved_words.append(hurdle.target_word)
            self._awaiting_increment = True

            if not self.validate_state():
                game_logger.logger.warning("Chain state corruption detected after adding hurdle, attempting recovery")
                recovery = self.detect_and_recover()
                if not recovery.success:
                    raise ChainStateCorruptionError(
                        "Failed to add hurdle due to state corruption: " + "; ".join(recovery.errors)
                    )
        except Exception:
            game_logger.logger.error(f"Restoring chain state from backup taken at {backup.created_at}")
            self.restore_from_backup(backup)
            raise

    def increment_hurdle_number(self) -> None:
        """Advance the pointer past the hurdle that was just recorded."""
        if not self._awaiting_increment:
            raise ChainSequenceError("No recorded hurdle to advance past")
        self.current_hurdle_number += 1
        self._awaiting_increment = False

    def _expected_hurdle_number(self) -> int:
        return len(self._completed_hurdles) + (0 if self._awaiting_increment else 1)

    def validate_state(self) -> bool:
        """True when every chain invariant holds."""
        if self.completed_count != len(self._completed_hurdles):
            return False

        if self.total_score != sum(hurdle.score for hurdle in self._completed_hurdles):
            return False

        for index, hurdle in enumerate(self._completed_hurdles):
            if hurdle.hurdle_number != index + 1:
                return False

        if self._solved_words != [hurdle.target_word for hurdle in self._completed_hurdles]:
            return False

        return self.current_hurdle_number == self._expected_hurdle_number()

    def detect_and_recover(self) -> RecoveryResult:
        """
        Recomputes derived fields from the completed-hurdle list.

        The completed hurdles themselves are never rewritten; a broken
        hurdle-number sequence is reported as an unrecoverable error.

        Returns:
            RecoveryResult describing the actions taken
        """
        result = RecoveryResult()

        if self.validate_state():
            result.success = True
            return result

        result.corruption_detected = True
        game_logger.logger.warning("Chain state corruption detected, attempting recovery")

        if self.completed_count != len(self._completed_hurdles):
            old_count = self.completed_count
            self.completed_count = len(self._completed_hurdles)
            result.actions_performed.append(
                f"Fixed completed hurdles count: {old_count} -> {self.completed_count}"
            )

        calculated_score = sum(hurdle.score for hurdle in self._completed_hurdles)
        if self.total_score != calculated_score:
            old_score = self.total_score
            self.total_score = calculated_score
            result.actions_performed.append(
                f"Recalculated total score: {old_score} -> {self.total_score}"
            )

        for index, hurdle in enumerate(self._completed_hurdles):
            if hurdle.hurdle_number != index + 1:
                result.errors.append(
                    f"Hurdle at index {index} has number {hurdle.hurdle_number}, expected {index + 1}"
                )

        expected_words = [hurdle.target_word for hurdle in self._completed_hurdles]
        if self._solved_words != expected_words:
            self._solved_words = expected_words
            result.actions_performed.append(
                f"Rebuilt solved words list ({len(self._solved_words)} words)"
            )

        expected_number = self._expected_hurdle_number()
        if self.current_hurdle_number != expected_number:
            old_number = self.current_hurdle_number
            self.current_hurdle_number = expected_number
            result.actions_performed.append(
                f"Fixed current hurdle number: {old_number} -> {self.current_hurdle_number}"
            )

        for action in result.actions_performed:
            game_logger.logger.info(f"Chain state recovery: {action}")

        if self.validate_state():
            result.success = True
            game_logger.logger.info("Chain state recovery successful")
        else:
            result.errors.append("Recovery failed - state still invalid")
            game_logger.logger.error("Chain state recovery failed: " + "; ".join(result.errors))

        return result

    def create_backup(self) -> ChainStateBackup:
        return ChainStateBackup(
            current_hurdle_number=self.current_hurdle_number,
            completed_count=self.completed_count,
            total_score=self.total_score,
            completed_hurdles=tuple(self._completed_hurdles),
            solved_words=tuple(self._solved_words),
            awaiting_increment=self._awaiting_increment,
        )

    def restore_from_backup(self, backup: ChainStateBackup) -> None:
        """
        Replaces the current state with a backup.

        Raises:
            ValueError: If the object is not a backup or has an unknown version
        """
        if not isinstance(backup, ChainStateBackup):
            raise ValueError("Invalid backup object")

        if backup.version != BACKUP_VERSION:
            raise ValueError(f"Unsupported backup version: {backup.version}")

        self.current_hurdle_number = backup.current_hurdle_number
        self.completed_count = backup.completed_count
        self.total_score = backup.total_score
        self._completed_hurdles = list(backup.completed_hurdles)
        self._solved_words = list(backup.solved_words)
        self._awaiting_increment = backup.awaiting_increment

    def session_summary(self) -> Dict[str, int]:
        return {
            "current_hurdle_number": self.current_hurdle_number,
            "completed_hurdles_count": self.completed_count,
            "total_score": self.total_score,
            "completed_hurdles": len(self._completed_hurdles),
            "solved_words": len(self._solved_words),
        }
