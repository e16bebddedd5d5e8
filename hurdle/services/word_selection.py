"""
Word Selection Service

Picks the next target word through an ordered chain of strategies, each
with a bounded number of attempts. The chain ends in a hardcoded list, so
a session is never left without a playable word.
"""

import random
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

from ..config.game_settings import EMERGENCY_WORDS
from ..exceptions import WordSelectionError
from ..utils.game_logger import game_logger
from .word_provider import FrequencyRange, WordProvider, is_well_formed


def _differs(word: str, avoid: Optional[str]) -> bool:
    return avoid is None or word.lower() != avoid.lower()


class WordSelectionStrategy(ABC):
    """One step of the selection chain."""

    name = "strategy"

    @abstractmethod
    async def select(self, avoid: Optional[str] = None,
                     frequency_range: Optional[FrequencyRange] = None) -> Optional[str]:
        """
        Returns a lowercase word different from `avoid`, or None when this
        strategy has nothing to offer.
        """
        raise NotImplementedError


class ProviderStrategy(WordSelectionStrategy):
    """Asks the word provider up to `max_attempts` times."""

    name = "provider"

    def __init__(self, provider: WordProvider, max_attempts: int = 3):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.provider = provider
        self.max_attempts = max_attempts

    async def select(self, avoid: Optional[str] = None,
                     frequency_range: Optional[FrequencyRange] = None) -> Optional[str]:
        for attempt in range(1, self.max_attempts + 1):
            try:
                candidate = await self.provider.get_random_word(frequency_range)
            except Exception as e:
                game_logger.logger.warning(f"Word provider attempt {attempt} failed: {e}")
                continue

            if not is_well_formed(candidate):
                game_logger.logger.warning(f"Word provider returned malformed word {candidate!r}")
                continue

            if _differs(candidate, avoid):
                return candidate.lower()

        return None


class WordListStrategy(WordSelectionStrategy):
    """Random pick from an in-memory list."""

    name = "word_list"

    def __init__(self, words: Iterable[str], rng: Optional[random.Random] = None):
        self.words: List[str] = [word.lower() for word in words if is_well_formed(word)]
        self._rng = rng or random.Random()

    async def select(self, avoid: Optional[str] = None,
                     frequency_range: Optional[FrequencyRange] = None) -> Optional[str]:
        options = [word for word in self.words if _differs(word, avoid)]
        if not options:
            return None
        return self._rng.choice(options)


class EmergencyWordStrategy(WordSelectionStrategy):
    """First entry of a small hardcoded list that differs from `avoid`."""

    name = "emergency"

    def __init__(self, words: Sequence[str] = EMERGENCY_WORDS):
        self.words: List[str] = [word.lower() for word in words if is_well_formed(word)]
        if len(set(self.words)) < 2:
            raise ValueError("Emergency word list needs at least two distinct words")

    async def select(self, avoid: Optional[str] = None,
                     frequency_range: Optional[FrequencyRange] = None) -> Optional[str]:
        for word in self.words:
            if _differs(word, avoid):
                game_logger.logger.warning(f"Using emergency fallback word: {word!r}")
                return word
        return None


class WordSelector:
    """Runs selection strategies in order until one yields a word."""

    def __init__(self, strategies: Sequence[WordSelectionStrategy]):
        if not strategies:
            raise ValueError("At least one selection strategy is required")
        self.strategies = list(strategies)

    @classmethod
    def default(cls, provider: WordProvider, fallback_words: Optional[Iterable[str]] = None,
                provider_attempts: int = 3, rng: Optional[random.Random] = None) -> "WordSelector":
        strategies: List[WordSelectionStrategy] = [ProviderStrategy(provider, provider_attempts)]
        if fallback_words is not None:
            strategies.append(WordListStrategy(fallback_words, rng))
        strategies.append(EmergencyWordStrategy())
        return cls(strategies)

    async def select(self, avoid: Optional[str] = None,
                     frequency_range: Optional[FrequencyRange] = None) -> str:
        """
        Args:
            avoid: Word the result must differ from (previous answer)
            frequency_range: Difficulty band passed through to the provider

        Raises:
            WordSelectionError: If every strategy came back empty
        """
        for strategy in self.strategies:
            word = await strategy.select(avoid, frequency_range)
            if word is not None:
                if strategy is not self.strategies[0]:
                    game_logger.logger.info(f"Word selected by fallback strategy '{strategy.name}'")
                return word

        raise WordSelectionError(f"No strategy produced a word different from {avoid!r}")
