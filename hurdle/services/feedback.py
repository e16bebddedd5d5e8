"""
Feedback Service

Implements the letter evaluation algorithm that compares a guess with the
target word.
"""

from typing import Dict, List

from ..exceptions import LengthMismatchError
from ..models.game import LetterFeedback, LetterStatus


def generate_feedback(guess: str, target_word: str) -> List[LetterFeedback]:
    """
    Compares a guess with the target word, case-insensitively.

    Exact matches are resolved before relocated ones so a letter is never
    marked correct or present more often than it occurs in the target.

    Args:
        guess: The guessed word
        target_word: The word to compare against

    Returns:
        List[LetterFeedback]: One entry per letter of the guess

    Raises:
        TypeError: If either argument is not a string
        LengthMismatchError: If the words differ in length
    """
    if not isinstance(guess, str) or not isinstance(target_word, str):
        raise TypeError("Both guess and target word must be strings")

    if len(guess) != len(target_word):
        raise LengthMismatchError("Guess and target word must have the same length")

    normalized_guess = guess.lower()
    normalized_target = target_word.lower()

    statuses = [LetterStatus.ABSENT] * len(normalized_guess)

    remaining: Dict[str, int] = {}
    for letter in normalized_target:
        remaining[letter] = remaining.get(letter, 0) + 1

    # First pass: exact position matches
    for i, letter in enumerate(normalized_guess):
        if letter == normalized_target[i]:
            statuses[i] = LetterStatus.CORRECT
            remaining[letter] -= 1

    # Second pass: letters present elsewhere, while unmatched copies remain
    for i, letter in enumerate(normalized_guess):
        if statuses[i] == LetterStatus.CORRECT:
            continue
        if remaining.get(letter, 0) > 0:
            statuses[i] = LetterStatus.PRESENT
            remaining[letter] -= 1

    return [LetterFeedback(letter, status) for letter, status in zip(normalized_guess, statuses)]
