"""
Statistics API endpoints.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_stats_aggregator
from app.schemas import stats as stats_schemas
from app.schemas.game import GameMode, Difficulty
from app.services.stats_service import StatsAggregator

router = APIRouter(
    prefix="/stats",
    tags=["stats"]
)


@router.get("", response_model=stats_schemas.AggregateStats)
def get_stats(aggregator: StatsAggregator = Depends(get_stats_aggregator)):
    """Win/loss/draw tallies per mode and difficulty, streaks and total games."""
    return aggregator.stats


@router.get("/history", response_model=List[stats_schemas.MatchRecord])
def get_history(aggregator: StatsAggregator = Depends(get_stats_aggregator)):
    """Most recent matches first, at most 50."""
    return aggregator.history


@router.get("/win-rate", response_model=stats_schemas.WinRateResponse)
def get_win_rate(
        mode: GameMode = Query(..., description="Game mode"),
        difficulty: Optional[Difficulty] = Query(None, description="ai difficulty, all combined when omitted"),
        aggregator: StatsAggregator = Depends(get_stats_aggregator)
):
    """
    Player X's win rate as a rounded percentage.

    In ai mode X is the human, so this is the human's rate against the
    computer.
    """
    return {
        "mode": mode,
        "difficulty": difficulty,
        "win_rate": aggregator.win_rate(mode, difficulty)
    }


@router.post("/matches", response_model=stats_schemas.AggregateStats)
def record_match(
        match: stats_schemas.MatchCreate,
        aggregator: StatsAggregator = Depends(get_stats_aggregator)
):
    """Record a finished match played outside a server-side session."""
    try:
        return aggregator.record_match(
            match.mode, match.result, match.difficulty,
            player_x_name=match.player_x_name,
            player_o_name=match.player_o_name
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("", response_model=stats_schemas.AggregateStats)
def reset_stats(aggregator: StatsAggregator = Depends(get_stats_aggregator)):
    """Clear all statistics and the match history."""
    return aggregator.reset_stats()
