import json
import logging

import pytest

from app.core.exceptions import OnlineModeUnavailable
from app.core.game_config import STATS_KEY, HISTORY_KEY, HISTORY_LIMIT
from app.schemas.game import GameMode, Difficulty, MatchResult
from app.services.stats_service import StatsAggregator


class TestRecordMatch:

    def test_starts_from_zero(self, stats):
        assert stats.stats.total_games == 0
        assert stats.stats.streaks.current == 0
        assert stats.history == []

    def test_loss_to_hard_computer(self, stats):
        updated = stats.record_match("ai", "O-wins", "hard")
        assert updated.ai.hard.losses == 1
        assert updated.ai.hard.wins == 0
        assert updated.total_games == 1
        assert updated.streaks.current == 0
        assert updated.ai.easy.losses == 0

    def test_three_pvp_wins_build_a_streak(self, stats):
        for _ in range(3):
            stats.record_match(GameMode.PVP, MatchResult.X_WINS)
        assert stats.stats.streaks.current == 3
        assert stats.stats.streaks.best >= 3

    def test_draw_keeps_streak_and_loss_resets_it(self, stats):
        stats.record_match("pvp", "X-wins")
        stats.record_match("pvp", "X-wins")
        stats.record_match("pvp", "draw")
        assert stats.stats.streaks.current == 2

        stats.record_match("ai", "O-wins", "easy")
        assert stats.stats.streaks.current == 0
        assert stats.stats.streaks.best == 2

        stats.record_match("ai", "X-wins", "easy")
        assert stats.stats.streaks.current == 1
        assert stats.stats.streaks.best == 2

    def test_pvp_updates_both_sides(self, stats):
        stats.record_match("pvp", "O-wins")
        stats.record_match("pvp", "draw")
        pvp = stats.stats.pvp
        assert (pvp.player_o.wins, pvp.player_o.losses, pvp.player_o.draws) == (1, 0, 1)
        assert (pvp.player_x.wins, pvp.player_x.losses, pvp.player_x.draws) == (0, 1, 1)
        assert stats.stats.ai.medium.draws == 0

    def test_ai_updates_only_its_difficulty(self, stats):
        stats.record_match("ai", "X-wins", "medium")
        stats.record_match("ai", "draw", "medium")
        ai = stats.stats.ai
        assert (ai.medium.wins, ai.medium.losses, ai.medium.draws) == (1, 0, 1)
        assert ai.easy.wins == ai.hard.wins == 0
        assert stats.stats.pvp.player_x.wins == 0

    def test_ai_requires_difficulty(self, stats):
        with pytest.raises(ValueError):
            stats.record_match("ai", "X-wins")
        assert stats.stats.total_games == 0

    def test_online_is_rejected(self, stats):
        with pytest.raises(OnlineModeUnavailable):
            stats.record_match("online", "X-wins")

    def test_pvp_drops_difficulty(self, stats):
        stats.record_match("pvp", "X-wins", "hard")
        assert stats.history[0].difficulty is None
        assert stats.stats.ai.hard.wins == 0

    def test_history_is_most_recent_first(self, stats):
        stats.record_match("pvp", "X-wins", player_x_name="Ann", player_o_name="Bo")
        stats.record_match("ai", "draw", "hard", player_x_name="Ann", player_o_name="AI")
        first, second = stats.history
        assert first.mode == GameMode.AI
        assert first.difficulty == Difficulty.HARD
        assert first.result == MatchResult.DRAW
        assert second.player_o_name == "Bo"
        assert first.id != second.id
        assert first.timestamp >= second.timestamp

    def test_history_is_capped(self, stats):
        for i in range(HISTORY_LIMIT + 5):
            stats.record_match("pvp", "draw", player_x_name=f"p{i}")
        assert len(stats.history) == HISTORY_LIMIT
        assert stats.history[0].player_x_name == f"p{HISTORY_LIMIT + 4}"
        assert stats.stats.total_games == HISTORY_LIMIT + 5

    def test_stats_property_is_a_copy(self, stats):
        snapshot = stats.stats
        snapshot.total_games = 99
        snapshot.ai.hard.wins = 5
        assert stats.stats.total_games == 0
        assert stats.stats.ai.hard.wins == 0


class TestWinRate:

    def test_zero_without_games(self, stats):
        assert stats.win_rate("pvp") == 0
        assert stats.win_rate("ai", "hard") == 0
        assert stats.win_rate("ai") == 0

    def test_reflects_just_recorded_match(self, stats):
        stats.record_match("pvp", "X-wins")
        assert stats.win_rate("pvp") == 100
        stats.record_match("pvp", "O-wins")
        assert stats.win_rate("pvp") == 50
        stats.record_match("pvp", "draw")
        assert stats.win_rate("pvp") == 33

    def test_per_difficulty_and_overall(self, stats):
        stats.record_match("ai", "X-wins", "easy")
        stats.record_match("ai", "X-wins", "easy")
        stats.record_match("ai", "O-wins", "hard")
        stats.record_match("ai", "draw", "hard")
        assert stats.win_rate("ai", "easy") == 100
        assert stats.win_rate("ai", "hard") == 0
        assert stats.win_rate("ai", "medium") == 0
        assert stats.win_rate("ai") == 50

    def test_halves_round_up(self, stats):
        stats.record_match("pvp", "X-wins")
        for _ in range(7):
            stats.record_match("pvp", "O-wins")
        # 1 of 8 is 12.5%
        assert stats.win_rate("pvp") == 13

        stats.reset_stats()
        for result in ("X-wins", "O-wins", "O-wins", "O-wins", "O-wins", "O-wins", "O-wins", "O-wins"):
            stats.record_match("ai", result, "medium")
        stats.record_match("ai", "X-wins", "easy")
        stats.record_match("ai", "X-wins", "easy")
        stats.record_match("ai", "X-wins", "easy")
        # 3 of 8 is 37.5% for easy alone; 4 of 11 overall is 36.36%
        assert stats.win_rate("ai", "medium") == 13
        assert stats.win_rate("ai") == 36


class TestPersistence:

    def test_saves_after_every_match(self, store, stats):
        stats.record_match("ai", "O-wins", "hard")
        saved = json.loads(store.get(STATS_KEY))
        assert saved["ai"]["hard"]["losses"] == 1
        assert saved["total_games"] == 1
        history = json.loads(store.get(HISTORY_KEY))
        assert history[0]["result"] == "O-wins"
        assert history[0]["difficulty"] == "hard"

    def test_reloads_from_store(self, store, stats):
        stats.record_match("pvp", "X-wins", player_x_name="Ann")
        stats.record_match("pvp", "X-wins")

        reloaded = StatsAggregator(store)
        assert reloaded.stats == stats.stats
        assert reloaded.stats.streaks.best == 2
        assert [r.id for r in reloaded.history] == [r.id for r in stats.history]

    def test_save_failure_keeps_memory(self, failing_store, caplog):
        aggregator = StatsAggregator(failing_store(fail_set=True))
        with caplog.at_level(logging.ERROR):
            updated = aggregator.record_match("pvp", "X-wins")
        assert updated.total_games == 1
        assert aggregator.stats.streaks.current == 1
        assert len(aggregator.history) == 1
        assert "Failed to save stats" in caplog.text

    def test_load_failure_falls_back_to_defaults(self, failing_store):
        aggregator = StatsAggregator(failing_store(fail_get=True, fail_set=False))
        assert aggregator.stats.total_games == 0
        assert aggregator.history == []

    def test_corrupt_payload_falls_back_to_defaults(self, store):
        store.set(STATS_KEY, "{not json")
        store.set(HISTORY_KEY, json.dumps([{"id": "x"}]))
        aggregator = StatsAggregator(store)
        assert aggregator.stats.total_games == 0
        assert aggregator.history == []

    def test_reset_clears_memory_and_store(self, store, stats):
        stats.record_match("ai", "X-wins", "easy")
        cleared = stats.reset_stats()
        assert cleared.total_games == 0
        assert cleared.ai.easy.wins == 0
        assert stats.history == []
        assert store.get(STATS_KEY) is None
        assert store.get(HISTORY_KEY) is None
        assert StatsAggregator(store).stats.total_games == 0

    def test_reset_starts_fresh_streak(self, stats):
        stats.record_match("pvp", "X-wins")
        stats.reset_stats()
        stats.record_match("pvp", "X-wins")
        assert stats.stats.streaks.current == 1
        assert stats.stats.streaks.best == 1
