"""Tests for statistics repositories."""

from unittest.mock import MagicMock

import pytest
from pymongo import DESCENDING

from hurdle.models.hurdle import FinishedRound
from hurdle.services.stats_service import InMemoryStatsRepository, MongoStatsRepository


def _record(target="crane", won=True, attempts=2):
    guesses = tuple(["slate", "house", "light", "stone"][:attempts - 1]) + (target,)
    return FinishedRound(
        target_word=target,
        guesses=guesses if won else guesses[:-1] + ("plant",),
        attempts_used=attempts,
        won=won,
        duration_seconds=3.5,
        hurdle_number=1,
    )


class TestInMemoryStatsRepository:
    def test_save_and_aggregate(self):
        repository = InMemoryStatsRepository()
        assert repository.save_round(_record(won=True, attempts=2))
        repository.save_round(_record(won=False, attempts=4))

        stats = repository.get_statistics()
        assert stats.total_games == 2
        assert stats.games_won == 1
        assert stats.current_streak == 0
        assert stats.max_streak == 1

    def test_statistics_are_a_copy(self):
        repository = InMemoryStatsRepository()
        repository.get_statistics().guess_distribution["1"] = 99
        assert repository.get_statistics().guess_distribution["1"] == 0

    def test_recent_rounds_newest_first(self):
        repository = InMemoryStatsRepository()
        for target in ("crane", "speed", "stone"):
            repository.save_round(_record(target))
        recent = repository.get_recent_rounds(limit=2)
        assert [document["target_word"] for document in recent] == ["stone", "speed"]
        assert repository.get_recent_rounds(limit=0) == []


@pytest.fixture
def mongo_client():
    client = MagicMock()
    database = client.__getitem__.return_value
    database.statistics.find_one.return_value = None
    return client


class TestMongoStatsRepository:
    def test_requires_uri_or_client(self):
        with pytest.raises(ValueError):
            MongoStatsRepository()

    def test_creates_indexes(self, mongo_client):
        repository = MongoStatsRepository(client=mongo_client, database="hurdle_test")
        mongo_client.__getitem__.assert_called_with("hurdle_test")
        indexed = [call.args[0] for call in repository.games_collection.create_index.call_args_list]
        assert indexed == ["created_at", "won", "target_word"]

    def test_save_round_inserts_and_upserts_statistics(self, mongo_client):
        repository = MongoStatsRepository(client=mongo_client)
        record = _record(attempts=3)

        assert repository.save_round(record)

        repository.games_collection.insert_one.assert_called_once_with(record.to_document())
        args, kwargs = repository.statistics_collection.replace_one.call_args
        assert args[0] == {"_id": "global"}
        assert args[1]["total_games"] == 1
        assert args[1]["guess_distribution"]["3"] == 1
        assert kwargs == {"upsert": True}

    def test_save_round_failure_returns_false(self, mongo_client):
        repository = MongoStatsRepository(client=mongo_client)
        repository.games_collection.insert_one.side_effect = RuntimeError("write failed")
        assert repository.save_round(_record()) is False

    def test_get_statistics_from_document(self, mongo_client):
        repository = MongoStatsRepository(client=mongo_client)
        repository.statistics_collection.find_one.return_value = {
            "_id": "global",
            "total_games": 5,
            "games_won": 4,
            "current_streak": 2,
            "max_streak": 3,
            "guess_distribution": {"2": 3, "4": 1},
        }
        stats = repository.get_statistics()
        assert stats.win_percentage == 80
        assert stats.guess_distribution["2"] == 3
        assert stats.guess_distribution["1"] == 0

    def test_recent_rounds_query(self, mongo_client):
        repository = MongoStatsRepository(client=mongo_client)
        cursor = repository.games_collection.find.return_value
        cursor.sort.return_value.limit.return_value = [{"target_word": "crane"}]

        assert repository.get_recent_rounds(5) == [{"target_word": "crane"}]
        repository.games_collection.find.assert_called_once_with({}, {"_id": 0})
        cursor.sort.assert_called_once_with("created_at", DESCENDING)
        cursor.sort.return_value.limit.assert_called_once_with(5)

    def test_close_connection(self, mongo_client):
        MongoStatsRepository(client=mongo_client).close_connection()
        mongo_client.close.assert_called_once()
