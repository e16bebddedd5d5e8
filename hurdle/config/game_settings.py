"""
Game Configuration Constants Module

All hurdle game parameters are centralized here: word length, attempt
budgets, scoring multipliers, difficulty ranges and the curated word list.
"""

import json
import os
from typing import Dict, Final, List, Tuple

WORD_LENGTH: Final[int] = 5

DEFAULT_MAX_ATTEMPTS: Final[int] = 4
"""Attempts per hurdle when the player does not choose a budget."""

ALLOWED_MAX_ATTEMPTS: Final[Tuple[int, ...]] = (3, 4)
"""
Attempt budgets a session accepts. Only 1-4 guesses carry a multiplier,
and the auto-guess spends one attempt of every hurdle after the first.
"""

GUESS_MULTIPLIERS: Final[Dict[int, float]] = {
    1: 1.75,
    2: 1.5,
    3: 1.25,
    4: 1.0,
}

BASE_HURDLE_POINTS: Final[int] = 100

# Word frequency (Zipf scale) bands per difficulty
DIFFICULTY_FREQUENCY_RANGES: Final[Dict[str, Tuple[float, float]]] = {
    'easy': (5.5, 7.0),
    'medium': (4.0, 5.49),
    'hard': (0.0, 4.0),
}

DEFAULT_DIFFICULTY: Final[str] = 'medium'

EMERGENCY_WORDS: Final[Tuple[str, ...]] = (
    'about', 'after', 'again', 'below', 'could',
    'every', 'first', 'found', 'great', 'group',
)


def _load_word_list() -> List[str]:
    """
    Load the curated word list from words.json.
    
    Returns:
        List[str]: Lowercase 5-letter words in file order
        
    Raises:
        FileNotFoundError: If words.json is missing
        ValueError: If the list is empty, malformed or holds invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'words.json')
    
    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in words.json: {e}") from e
    
    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")
    
    if not word_list:
        raise ValueError("Word list cannot be empty")
    
    lowercase_words = [word.lower() for word in word_list]
    
    for word in lowercase_words:
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")
    
    return lowercase_words


# Curated Word Database loaded from JSON file
WORD_LIST: Final[List[str]] = _load_word_list()


def validate_word_list_integrity(words: List[str] = WORD_LIST) -> bool:
    """
    Validates the integrity and consistency of a word database.
    
    Checks length, alphabetic characters, lowercase formatting and
    uniqueness.
    
    Returns:
        bool: True if the word list passes all validation checks
        
    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not words:
        raise ValueError("Word list cannot be empty")
    
    for index, word in enumerate(words):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")
        
        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")
        
        if not word.islower():
            raise ValueError(f"Word at index {index} '{word}' is not in lowercase format")
    
    if len(words) != len(set(words)):
        duplicates = sorted({word for word in words if words.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")
    
    return True


# Validate the curated list on import
validate_word_list_integrity(WORD_LIST)


def get_word_statistics(words: List[str] = WORD_LIST) -> dict:
    """
    Summarizes a word list for the health endpoint.
    
    Returns:
        dict: total_words, avg_vowel_count, letter_frequency and the five
        most common letters
    """
    if not words:
        return {"error": "Word list is empty"}
    
    vowels = set('aeiou')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in words)
    
    letter_frequency: Dict[str, int] = {}
    for word in words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1
    
    return {
        "total_words": len(words),
        "avg_vowel_count": round(total_vowels / len(words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }


def get_frequency_range(difficulty: str) -> Tuple[float, float]:
    """Frequency band for a difficulty name; unknown names fall back to medium."""
    return DIFFICULTY_FREQUENCY_RANGES.get(difficulty, DIFFICULTY_FREQUENCY_RANGES[DEFAULT_DIFFICULTY])
