"""
Stateless engine endpoints: evaluate a board, pick a computer move.
"""
from fastapi import APIRouter, Depends

from app.api.deps import get_move_selector
from app.schemas import game as game_schemas
from app.services.board_evaluator import evaluate
from app.services.move_selector import MoveSelector

router = APIRouter(tags=["engine"])


@router.post("/evaluate", response_model=game_schemas.OutcomeResponse)
def evaluate_board(request: game_schemas.BoardRequest):
    """Report the winner and winning line, or whether the board is a draw."""
    result = evaluate(request.board)
    return {
        "winner": result.winner,
        "winning_line": list(result.winning_line) if result.winning_line else None,
        "is_draw": result.is_draw
    }


@router.post("/ai/move", response_model=game_schemas.ComputerMoveResponse)
def select_computer_move(
        request: game_schemas.ComputerMoveRequest,
        selector: MoveSelector = Depends(get_move_selector)
):
    """
    Choose the computer's (O) move for a board.

    Returns a null index when the board is full.
    """
    return {"index": selector.select_move(request.board, request.difficulty)}
