"""
Data Models Package

Contains all data models used by the hurdle engine.
"""

from .game import (
    LetterStatus, RoundStatus, LetterFeedback, Guess, RoundState,
    RoundSnapshot, GuessResult, HurdleGameState
)
from .hurdle import CompletedHurdle, EndReason, HurdleSession, FinishedRound
from .chain import ChainState, ChainStateBackup, RecoveryResult
from .stats import GameStats

__all__ = [
    'LetterStatus', 'RoundStatus', 'LetterFeedback', 'Guess', 'RoundState',
    'RoundSnapshot', 'GuessResult', 'HurdleGameState',
    'CompletedHurdle', 'EndReason', 'HurdleSession', 'FinishedRound',
    'ChainState', 'ChainStateBackup', 'RecoveryResult',
    'GameStats'
]
