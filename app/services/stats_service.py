"""
Running win/loss/draw tallies, win streaks and match history.
"""
import json
import logging
import threading
import time
import uuid
from typing import List, Optional

from pydantic import ValidationError

from app.core.exceptions import OnlineModeUnavailable
from app.core.game_config import HISTORY_LIMIT, STATS_KEY, HISTORY_KEY
from app.schemas.game import GameMode, Difficulty, MatchResult
from app.schemas.stats import AggregateStats, MatchRecord, PlayerStats
from app.services.storage import KeyValueStore

logger = logging.getLogger(__name__)


class StatsAggregator:
    """
    Keeps aggregate statistics and the match history for one store.

    Player X moves first and is the tracked side for streaks. In ai mode
    X is the human, so every ai bucket is counted from the human's side.
    Memory is updated before anything is written; a failed write is
    logged and the in-memory state is kept.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._lock = threading.RLock()
        self._stats = self._load_stats()
        self._history = self._load_history()

    @property
    def stats(self) -> AggregateStats:
        return self._stats.model_copy(deep=True)

    @property
    def history(self) -> List[MatchRecord]:
        return list(self._history)

    def record_match(self, mode, result, difficulty=None,
                     player_x_name: str = "X", player_o_name: str = "O") -> AggregateStats:
        """Count one finished match and append it to the history."""
        if mode == "online":
            raise OnlineModeUnavailable("Online matches are not supported")
        mode = GameMode(mode)
        result = MatchResult(result)

        if mode == GameMode.AI:
            if difficulty is None:
                raise ValueError("Difficulty is required for ai matches")
            difficulty = Difficulty(difficulty)
        else:
            difficulty = None

        with self._lock:
            stats = self._stats.model_copy(deep=True)
            stats.total_games += 1

            if result == MatchResult.X_WINS:
                stats.streaks.current += 1
                if stats.streaks.current > stats.streaks.best:
                    stats.streaks.best = stats.streaks.current
            elif result == MatchResult.O_WINS:
                stats.streaks.current = 0

            if mode == GameMode.PVP:
                x, o = stats.pvp.player_x, stats.pvp.player_o
                if result == MatchResult.X_WINS:
                    x.wins += 1
                    o.losses += 1
                elif result == MatchResult.O_WINS:
                    o.wins += 1
                    x.losses += 1
                else:
                    x.draws += 1
                    o.draws += 1
            else:
                bucket = getattr(stats.ai, difficulty.value)
                if result == MatchResult.X_WINS:
                    bucket.wins += 1
                elif result == MatchResult.O_WINS:
                    bucket.losses += 1
                else:
                    bucket.draws += 1

            record = MatchRecord(
                id=uuid.uuid4().hex,
                timestamp=int(time.time() * 1000),
                mode=mode,
                difficulty=difficulty,
                result=result,
                player_x_name=player_x_name,
                player_o_name=player_o_name
            )

            self._stats = stats
            self._history = [record] + self._history[:HISTORY_LIMIT - 1]

            logger.info(
                f"Recorded {mode.value} match"
                f"{f' ({difficulty.value})' if difficulty else ''}: {result.value}, "
                f"total={stats.total_games}, streak={stats.streaks.current}"
            )

            self._save_stats()
            self._save_history()

            return self.stats

    def win_rate(self, mode, difficulty=None) -> int:
        """
        Player X's win percentage, rounded.

        For ai mode this is the human's rate against the given difficulty,
        or against all difficulties combined when none is given.
        """
        mode = GameMode(mode)

        if mode == GameMode.PVP:
            bucket = self._stats.pvp.player_x
        elif difficulty is not None:
            bucket = getattr(self._stats.ai, Difficulty(difficulty).value)
        else:
            ai = self._stats.ai
            bucket = PlayerStats(
                wins=ai.easy.wins + ai.medium.wins + ai.hard.wins,
                losses=ai.easy.losses + ai.medium.losses + ai.hard.losses,
                draws=ai.easy.draws + ai.medium.draws + ai.hard.draws
            )

        if bucket.total == 0:
            return 0
        # Halves round up
        return (200 * bucket.wins + bucket.total) // (2 * bucket.total)

    def reset_stats(self) -> AggregateStats:
        """Clear statistics and history."""
        with self._lock:
            self._stats = AggregateStats()
            self._history = []
            logger.info("Statistics reset")

            try:
                self.store.delete(STATS_KEY, HISTORY_KEY)
            except Exception as e:
                logger.error(f"Failed to clear stored statistics: {e}")

            return self.stats

    def _load_stats(self) -> AggregateStats:
        try:
            payload = self.store.get(STATS_KEY)
            if payload:
                return AggregateStats.model_validate_json(payload)
        except ValidationError as e:
            logger.warning(f"Stored statistics are invalid, starting from zero: {e}")
        except Exception as e:
            logger.error(f"Failed to load stats: {e}")
        return AggregateStats()

    def _load_history(self) -> List[MatchRecord]:
        try:
            payload = self.store.get(HISTORY_KEY)
            if payload:
                records = [MatchRecord.model_validate(item) for item in json.loads(payload)]
                return records[:HISTORY_LIMIT]
        except (ValidationError, ValueError, TypeError) as e:
            logger.warning(f"Stored match history is invalid, starting empty: {e}")
        except Exception as e:
            logger.error(f"Failed to load game history: {e}")
        return []

    def _save_stats(self) -> None:
        try:
            self.store.set(STATS_KEY, self._stats.model_dump_json())
        except Exception as e:
            logger.error(f"Failed to save stats: {e}")

    def _save_history(self) -> None:
        try:
            payload = json.dumps([record.model_dump(mode="json") for record in self._history])
            self.store.set(HISTORY_KEY, payload)
        except Exception as e:
            logger.error(f"Failed to save game record: {e}")
