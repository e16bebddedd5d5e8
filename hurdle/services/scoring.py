"""
Scoring Service

Score formula: hurdle_number x 100 x guess multiplier, rounded.
"""

from typing import Dict, Iterable

from ..config.game_settings import BASE_HURDLE_POINTS, GUESS_MULTIPLIERS
from ..exceptions import InvalidGuessCountError, InvalidHurdleNumberError


def get_guess_multiplier(guess_count: int) -> float:
    """
    Multiplier for the number of guesses used.

    Raises:
        InvalidGuessCountError: For anything other than 1-4 guesses
    """
    if isinstance(guess_count, bool) or guess_count not in GUESS_MULTIPLIERS:
        raise InvalidGuessCountError(
            f"Invalid guess count {guess_count!r}: must be between 1 and {max(GUESS_MULTIPLIERS)}"
        )
    return GUESS_MULTIPLIERS[guess_count]


def calculate_hurdle_score(hurdle_number: int, guess_count: int) -> int:
    """
    Points for solving a hurdle.

    Args:
        hurdle_number: 1-based hurdle number
        guess_count: Guesses used to solve it

    Returns:
        int: round(hurdle_number * 100 * multiplier)

    Raises:
        InvalidHurdleNumberError: If hurdle_number is below 1
        InvalidGuessCountError: If guess_count has no multiplier
    """
    if isinstance(hurdle_number, bool) or not isinstance(hurdle_number, int) or hurdle_number < 1:
        raise InvalidHurdleNumberError("Hurdle number must be a positive integer")

    multiplier = get_guess_multiplier(guess_count)
    return round(hurdle_number * BASE_HURDLE_POINTS * multiplier)


def calculate_final_score(completed_hurdles: Iterable) -> int:
    """Sum of the scores of completed hurdles; 0 when none were completed."""
    return sum(hurdle.score for hurdle in completed_hurdles)


def validate_score(hurdle_number: int, guess_count: int, actual_score: int) -> bool:
    try:
        return calculate_hurdle_score(hurdle_number, guess_count) == actual_score
    except ValueError:
        return False


def get_score_breakdown(hurdle_number: int, guess_count: int) -> Dict:
    """Score calculation broken into its parts for display."""
    base_score = hurdle_number * BASE_HURDLE_POINTS
    multiplier = get_guess_multiplier(guess_count)
    final_score = calculate_hurdle_score(hurdle_number, guess_count)

    return {
        "hurdle_number": hurdle_number,
        "guess_count": guess_count,
        "base_score": base_score,
        "multiplier": multiplier,
        "final_score": final_score,
        "formula": f"{hurdle_number} x {BASE_HURDLE_POINTS} x {multiplier} = {final_score}",
    }
