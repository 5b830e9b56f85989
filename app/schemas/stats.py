from pydantic import BaseModel, Field
from typing import Optional

from app.schemas.game import GameMode, Difficulty, MatchResult


class PlayerStats(BaseModel):
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.draws


class PvpStats(BaseModel):
    player_x: PlayerStats = Field(default_factory=PlayerStats)
    player_o: PlayerStats = Field(default_factory=PlayerStats)


class AiStats(BaseModel):
    easy: PlayerStats = Field(default_factory=PlayerStats)
    medium: PlayerStats = Field(default_factory=PlayerStats)
    hard: PlayerStats = Field(default_factory=PlayerStats)


class Streaks(BaseModel):
    current: int = 0
    best: int = 0


class AggregateStats(BaseModel):
    pvp: PvpStats = Field(default_factory=PvpStats)
    ai: AiStats = Field(default_factory=AiStats)
    streaks: Streaks = Field(default_factory=Streaks)
    total_games: int = 0


class MatchRecord(BaseModel):
    id: str
    timestamp: int = Field(..., description="Epoch milliseconds")
    mode: GameMode
    difficulty: Optional[Difficulty] = None
    result: MatchResult
    player_x_name: str
    player_o_name: str

    class Config:
        frozen = True


class MatchCreate(BaseModel):
    mode: GameMode
    result: MatchResult
    difficulty: Optional[Difficulty] = None
    player_x_name: str = Field("X", max_length=50)
    player_o_name: str = Field("O", max_length=50)


class WinRateResponse(BaseModel):
    mode: GameMode
    difficulty: Optional[Difficulty] = None
    win_rate: int = Field(..., description="Percentage 0-100")
