"""
Board representation and outcome evaluation for a 3x3 board.

A board is a tuple of 9 cells in row-major order. Each cell holds
``MARK_X``, ``MARK_O`` or ``None``.
"""
from dataclasses import dataclass
from typing import Optional, Tuple, List

from app.core.game_config import (
    CELL_COUNT, MARK_X, MARK_O, WIN_LINES, is_valid_index
)

Board = Tuple[Optional[str], ...]


@dataclass(frozen=True)
class OutcomeResult:
    """Winner, winning line and draw flag for a board."""
    winner: Optional[str] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    is_draw: bool = False

    @property
    def is_over(self) -> bool:
        return self.winner is not None or self.is_draw


def empty_board() -> Board:
    return (None,) * CELL_COUNT


def _check_length(board) -> None:
    if len(board) != CELL_COUNT:
        raise ValueError(f"Board must have {CELL_COUNT} cells, got {len(board)}")


def evaluate(board) -> OutcomeResult:
    """
    Determine the winner, the winning line, or a draw.

    Lines are checked in table order (rows, columns, diagonals) and the
    first complete line is reported.
    """
    _check_length(board)

    for line in WIN_LINES:
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return OutcomeResult(winner=board[a], winning_line=line)

    return OutcomeResult(is_draw=all(cell is not None for cell in board))


def empty_cells(board) -> List[int]:
    """Indices of empty cells in ascending order."""
    return [i for i, cell in enumerate(board) if cell is None]


def place(board, index: int, mark: str) -> Board:
    """Return a new board with ``mark`` placed on an empty cell."""
    _check_length(board)
    if not is_valid_index(index):
        raise ValueError(f"Cell {index} is outside the board")
    if board[index] is not None:
        raise ValueError(f"Cell {index} is already occupied")
    return tuple(board[:index]) + (mark,) + tuple(board[index + 1:])


def opponent_of(mark: str) -> str:
    return MARK_O if mark == MARK_X else MARK_X
