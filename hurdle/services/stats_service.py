"""
Statistics Service

Repository interface for finished-round records and aggregated play
statistics, with an in-memory store and a MongoDB-backed store.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from pymongo import DESCENDING
from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..models.hurdle import FinishedRound
from ..models.stats import GameStats
from ..utils.game_logger import game_logger


class StatsRepository(ABC):
    """Where finished rounds go. The engine never depends on a concrete store."""

    @abstractmethod
    def save_round(self, record: FinishedRound) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_statistics(self) -> GameStats:
        raise NotImplementedError

    @abstractmethod
    def get_recent_rounds(self, limit: int = 10) -> List[Dict]:
        raise NotImplementedError


class InMemoryStatsRepository(StatsRepository):
    """Process-local store, used when no database is configured."""

    def __init__(self):
        self.rounds: List[FinishedRound] = []
        self.stats = GameStats()

    def save_round(self, record: FinishedRound) -> bool:
        self.rounds.append(record)
        self.stats.record(record.won, record.attempts_used)
        return True

    def get_statistics(self) -> GameStats:
        return GameStats(
            total_games=self.stats.total_games,
            games_won=self.stats.games_won,
            current_streak=self.stats.current_streak,
            max_streak=self.stats.max_streak,
            guess_distribution=dict(self.stats.guess_distribution),
        )

    def get_recent_rounds(self, limit: int = 10) -> List[Dict]:
        return [record.to_document() for record in reversed(self.rounds[-limit:])] if limit > 0 else []


class MongoStatsRepository(StatsRepository):
    """
    MongoDB store with a `games` collection of finished rounds and a
    single-document `statistics` collection.
    """

    STATS_KEY = "global"

    def __init__(self, mongo_uri: Optional[str] = None, database: str = "hurdle",
                 client: Optional[MongoClient] = None):
        """
        Args:
            mongo_uri: MongoDB connection string (ignored when client is given)
            database: Database name
            client: Pre-built client, mainly for tests
        """
        if client is None:
            if not mongo_uri:
                raise ValueError("MongoDB URI is required")
            client = MongoClient(mongo_uri, server_api=ServerApi('1'))

        self.client = client
        self.db = self.client[database]
        self.games_collection = self.db.games
        self.statistics_collection = self.db.statistics

        self.games_collection.create_index("created_at")
        self.games_collection.create_index("won")
        self.games_collection.create_index("target_word")

    def save_round(self, record: FinishedRound) -> bool:
        try:
            self.games_collection.insert_one(record.to_document())

            stats = self.get_statistics()
            stats.record(record.won, record.attempts_used)
            self.statistics_collection.replace_one(
                {"_id": self.STATS_KEY},
                {"_id": self.STATS_KEY, **stats.to_dict()},
                upsert=True
            )
            return True

        except Exception as e:
            game_logger.logger.error(f"Failed to save finished round: {e}")
            return False

    def get_statistics(self) -> GameStats:
        document = self.statistics_collection.find_one({"_id": self.STATS_KEY})
        if not document:
            return GameStats()

        stats = GameStats(
            total_games=document.get("total_games", 0),
            games_won=document.get("games_won", 0),
            current_streak=document.get("current_streak", 0),
            max_streak=document.get("max_streak", 0),
        )
        stats.guess_distribution.update(document.get("guess_distribution", {}))
        return stats

    def get_recent_rounds(self, limit: int = 10) -> List[Dict]:
        cursor = self.games_collection.find(
            {}, {"_id": 0}
        ).sort("created_at", DESCENDING).limit(limit)
        return list(cursor)

    def close_connection(self):
        """Close the MongoDB connection."""
        if self.client:
            self.client.close()
