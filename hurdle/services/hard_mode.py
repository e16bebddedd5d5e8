"""
Hard Mode Service

Tracks the clues revealed during a round and checks that later guesses
respect them.
"""

from typing import Dict, Optional, Sequence, Set, Tuple

from ..models.game import LetterFeedback, LetterStatus


def get_ordinal_suffix(number: int) -> str:
    """Ordinal suffix for a position number: 1st, 2nd, 3rd, 4th, 11th, 21st."""
    last_digit = number % 10
    last_two = number % 100

    if last_digit == 1 and last_two != 11:
        return "st"
    if last_digit == 2 and last_two != 12:
        return "nd"
    if last_digit == 3 and last_two != 13:
        return "rd"
    return "th"


class HardModeTracker:
    """
    Accumulated hard-mode constraints.

    A letter marked included is never moved to the excluded set, so a
    duplicate guessed letter that is partly absent keeps its inclusion.
    """

    def __init__(self):
        self.correct_positions: Dict[int, str] = {}
        self.included_letters: Set[str] = set()
        self.excluded_letters: Set[str] = set()

    def update_from_feedback(self, guess: str, feedback: Sequence[LetterFeedback]) -> None:
        """Fold one guess's feedback into the constraint set."""
        for position, item in enumerate(feedback):
            letter = item.letter.lower()

            if item.status == LetterStatus.CORRECT:
                self.correct_positions[position] = letter
                self.included_letters.add(letter)
                self.excluded_letters.discard(letter)
            elif item.status == LetterStatus.PRESENT:
                self.included_letters.add(letter)
                self.excluded_letters.discard(letter)
            elif letter not in self.included_letters:
                self.excluded_letters.add(letter)

    def validate_guess(self, guess: str) -> Tuple[bool, Optional[str]]:
        """
        Checks a candidate against the revealed clues.

        Returns:
            Tuple of (is_valid, error_message)
        """
        candidate = guess.lower()

        for position in sorted(self.correct_positions):
            letter = self.correct_positions[position]
            if position >= len(candidate) or candidate[position] != letter:
                number = position + 1
                return False, f"{number}{get_ordinal_suffix(number)} letter must be {letter.upper()}"

        for letter in sorted(self.included_letters):
            if letter not in candidate:
                return False, f"Guess must contain {letter.upper()}"

        return True, None

    def reset(self) -> None:
        self.correct_positions.clear()
        self.included_letters.clear()
        self.excluded_letters.clear()

    def get_constraints(self) -> Dict:
        return {
            "correct_positions": dict(self.correct_positions),
            "included_letters": sorted(self.included_letters),
            "excluded_letters": sorted(self.excluded_letters),
        }
