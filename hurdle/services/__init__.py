"""
Services Package

Contains the hurdle engine and the session registry.
"""

from .feedback import generate_feedback
from .scoring import (
    get_guess_multiplier, calculate_hurdle_score, calculate_final_score,
    validate_score, get_score_breakdown
)
from .hard_mode import HardModeTracker, get_ordinal_suffix
from .word_provider import FrequencyRange, WordProvider, LocalWordProvider, is_well_formed
from .word_selection import (
    WordSelectionStrategy, ProviderStrategy, WordListStrategy,
    EmergencyWordStrategy, WordSelector
)
from .round_service import RoundController
from .chain_service import ChainController, HurdleTransition, SessionConfig
from .stats_service import StatsRepository, InMemoryStatsRepository, MongoStatsRepository
from .hurdle_service import HurdleService, get_hurdle_service, initialize_hurdle_service

__all__ = [
    'generate_feedback',
    'get_guess_multiplier', 'calculate_hurdle_score', 'calculate_final_score',
    'validate_score', 'get_score_breakdown',
    'HardModeTracker', 'get_ordinal_suffix',
    'FrequencyRange', 'WordProvider', 'LocalWordProvider', 'is_well_formed',
    'WordSelectionStrategy', 'ProviderStrategy', 'WordListStrategy',
    'EmergencyWordStrategy', 'WordSelector',
    'RoundController',
    'ChainController', 'HurdleTransition', 'SessionConfig',
    'StatsRepository', 'InMemoryStatsRepository', 'MongoStatsRepository',
    'HurdleService', 'get_hurdle_service', 'initialize_hurdle_service'
]
