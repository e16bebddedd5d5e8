"""Shared fixtures: deterministic word providers and a fresh hurdle service."""

from typing import Iterable, List, Optional

import pytest

from hurdle.exceptions import WordProviderError
from hurdle.services.hurdle_service import HurdleService
from hurdle.services.stats_service import InMemoryStatsRepository
from hurdle.services.word_provider import FrequencyRange, LocalWordProvider, WordProvider

TEST_WORDS = [
    "crane", "speed", "erase", "cigar", "react", "slate", "trace",
    "house", "plant", "stone", "heart", "light", "about", "audio", "world",
]


class ScriptedWordProvider(WordProvider):
    """Hands out targets in a fixed order and accepts a fixed vocabulary."""

    def __init__(self, targets: Iterable[str], vocabulary: Optional[Iterable[str]] = None):
        self.targets: List[str] = list(targets)
        self.vocabulary = set(vocabulary if vocabulary is not None else TEST_WORDS)
        self.requested_ranges: List[Optional[FrequencyRange]] = []
        self.validation_calls: List[str] = []

    async def is_valid_word(self, word: str) -> bool:
        self.validation_calls.append(word)
        return word.lower() in self.vocabulary

    async def get_random_word(self, frequency_range: Optional[FrequencyRange] = None) -> str:
        self.requested_ranges.append(frequency_range)
        if not self.targets:
            raise WordProviderError("No scripted targets left")
        return self.targets.pop(0)


class FailingWordProvider(WordProvider):
    """Every call fails, as if the dictionary service were down."""

    def __init__(self):
        self.calls = 0

    async def is_valid_word(self, word: str) -> bool:
        self.calls += 1
        raise WordProviderError("Dictionary service unavailable")

    async def get_random_word(self, frequency_range: Optional[FrequencyRange] = None) -> str:
        self.calls += 1
        raise WordProviderError("Dictionary service unavailable")


@pytest.fixture
def local_provider() -> LocalWordProvider:
    return LocalWordProvider(TEST_WORDS)


@pytest.fixture
def scripted_provider():
    def _make(*targets: str, vocabulary: Optional[Iterable[str]] = None) -> ScriptedWordProvider:
        return ScriptedWordProvider(targets, vocabulary)
    return _make


@pytest.fixture
def failing_provider() -> FailingWordProvider:
    return FailingWordProvider()


@pytest.fixture
def stats_repository() -> InMemoryStatsRepository:
    return InMemoryStatsRepository()


@pytest.fixture
def hurdle_service(stats_repository) -> HurdleService:
    provider = ScriptedWordProvider(["crane", "speed", "erase", "cigar", "stone"])
    return HurdleService(provider, stats_repository)
