"""
Word Provider Service

The two-method contract the engine depends on for word validity and word
selection, plus the in-memory implementation backed by the curated list.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Optional

from ..config.game_settings import WORD_LENGTH, WORD_LIST, get_frequency_range


@dataclass(frozen=True)
class FrequencyRange:
    """Word frequency band used to pick words by difficulty."""
    min: float
    max: float

    @classmethod
    def for_difficulty(cls, difficulty: str) -> "FrequencyRange":
        low, high = get_frequency_range(difficulty)
        return cls(low, high)


def is_well_formed(word) -> bool:
    """True for a string of exactly WORD_LENGTH ASCII letters."""
    return (
        isinstance(word, str)
        and len(word) == WORD_LENGTH
        and word.isascii()
        and word.isalpha()
    )


class WordProvider(ABC):
    """
    Source of word validity and random target words.

    Both calls may fail (for example a remote dictionary being down);
    implementations signal that with WordProviderError or any exception.
    """

    @abstractmethod
    async def is_valid_word(self, word: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def get_random_word(self, frequency_range: Optional[FrequencyRange] = None) -> str:
        raise NotImplementedError


class LocalWordProvider(WordProvider):
    """
    Provider over an in-memory word list.

    The list carries no frequency data, so the frequency range is accepted
    and ignored.
    """

    def __init__(self, words: Optional[Iterable[str]] = None, rng: Optional[random.Random] = None):
        source = WORD_LIST if words is None else words
        self.word_list: List[str] = sorted({word.lower() for word in source if is_well_formed(word)})
        if not self.word_list:
            raise ValueError("Word provider needs at least one 5-letter word")
        self._word_set = set(self.word_list)
        self._rng = rng or random.Random()

    async def is_valid_word(self, word: str) -> bool:
        if not is_well_formed(word):
            return False
        return word.lower() in self._word_set

    async def get_random_word(self, frequency_range: Optional[FrequencyRange] = None) -> str:
        return self._rng.choice(self.word_list)

    def size(self) -> int:
        return len(self.word_list)
