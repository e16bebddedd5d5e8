"""
Statistics Data Models

Contains the aggregated play statistics kept by statistics storage.
"""

from dataclasses import dataclass, field
from typing import Dict


def _empty_distribution() -> Dict[str, int]:
    return {str(guesses): 0 for guesses in range(1, 7)}


@dataclass
class GameStats:
    """Aggregated round statistics."""
    total_games: int = 0
    games_won: int = 0
    current_streak: int = 0
    max_streak: int = 0
    guess_distribution: Dict[str, int] = field(default_factory=_empty_distribution)

    @property
    def win_percentage(self) -> int:
        if self.total_games == 0:
            return 0
        return round(self.games_won / self.total_games * 100)

    def record(self, won: bool, attempts_used: int) -> None:
        """Fold one finished round into the totals."""
        self.total_games += 1
        if won:
            self.games_won += 1
            self.current_streak += 1
            key = str(attempts_used)
            if key in self.guess_distribution:
                self.guess_distribution[key] += 1
        else:
            self.current_streak = 0
        self.max_streak = max(self.max_streak, self.current_streak)

    def to_dict(self) -> Dict:
        return {
            "total_games": self.total_games,
            "games_won": self.games_won,
            "win_percentage": self.win_percentage,
            "current_streak": self.current_streak,
            "max_streak": self.max_streak,
            "guess_distribution": dict(self.guess_distribution),
        }
