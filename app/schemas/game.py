from pydantic import BaseModel, Field, validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from app.core.game_config import CELL_COUNT, MARK_X, MARK_O


class GameStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class GameMode(str, Enum):
    PVP = "pvp"
    AI = "ai"


class GameModeOption(str, Enum):
    """Modes offered to players. Online play is not available yet."""
    AI = "ai"
    PVP = "pvp"
    ONLINE = "online"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class MatchResult(str, Enum):
    X_WINS = "X-wins"
    O_WINS = "O-wins"
    DRAW = "draw"


def _validate_board(v):
    if len(v) != CELL_COUNT:
        raise ValueError(f"Board must have exactly {CELL_COUNT} cells")
    for cell in v:
        if cell not in (MARK_X, MARK_O, None):
            raise ValueError(f"Invalid cell value {cell!r}")
    return v


class GameCreate(BaseModel):
    mode: GameModeOption = Field(GameModeOption.AI, description="Game mode")
    difficulty: Optional[Difficulty] = Field(
        None, description="Computer difficulty, defaults to the saved setting (ai mode only)"
    )
    player_x_name: Optional[str] = Field(None, max_length=50)
    player_o_name: Optional[str] = Field(None, max_length=50)


class MoveCreate(BaseModel):
    index: int = Field(..., description="Cell index 0-8, row-major")
    mark: Optional[str] = Field(None, description="Mark being played, checked against the turn")


class MoveResponse(BaseModel):
    game_id: int
    index: int
    mark: str
    game_status: GameStatus
    winner: Optional[str] = None
    winning_line: Optional[List[int]] = None
    is_draw: bool = False


class GameState(BaseModel):
    id: int
    mode: GameMode
    difficulty: Optional[Difficulty] = None
    status: GameStatus
    board: List[Optional[str]]
    current_player: str
    winner: Optional[str] = None
    winning_line: Optional[List[int]] = None
    is_draw: bool = False
    player_x_name: str
    player_o_name: str
    moves_count: int
    computer_thinking: bool = False
    created_at: datetime
    ended_at: Optional[datetime] = None


class BoardRequest(BaseModel):
    board: List[Optional[str]]

    @validator("board")
    def check_board(cls, v):
        return _validate_board(v)


class OutcomeResponse(BaseModel):
    winner: Optional[str] = None
    winning_line: Optional[List[int]] = None
    is_draw: bool = False


class ComputerMoveRequest(BoardRequest):
    difficulty: Difficulty = Difficulty.HARD


class ComputerMoveResponse(BaseModel):
    index: Optional[int] = Field(None, description="Chosen cell, null when the board is full")
