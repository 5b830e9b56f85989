"""
Game session API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from app.api.deps import get_game_service
from app.core.exceptions import (
    GameNotFound, NotYourTurn, CellOccupied, GameEnded, InvalidMove,
    OnlineModeUnavailable
)
from app.schemas import game as game_schemas
from app.schemas.game import GameMode
from app.services.game_service import GameService

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"description": "Game not found"}}
)


@router.post("", response_model=game_schemas.GameState)
def create_game(
        game: game_schemas.GameCreate,
        service: GameService = Depends(get_game_service)
):
    """
    Create a new game session.

    Player X always moves first. In 'ai' mode the computer plays O and
    the difficulty falls back to the saved default. 'online' is not
    available yet.
    """
    try:
        session = service.create_game(
            game.mode, game.difficulty, game.player_x_name, game.player_o_name
        )
        return service.get_game_state(session.id)
    except OnlineModeUnavailable as e:
        raise HTTPException(
            status_code=400,
            detail=str(e),
            headers={"X-Error-Code": "ONLINE_MODE_UNAVAILABLE"}
        )


@router.get("/{game_id}", response_model=game_schemas.GameState)
def get_game_state(
        game_id: int,
        service: GameService = Depends(get_game_service)
):
    """
    Get the current state of a game.

    Returns:
    - Board and the player to move
    - Winner and winning line, or draw
    - Whether the computer is about to move
    """
    try:
        return service.get_game_state(game_id)
    except GameNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{game_id}/move", response_model=game_schemas.MoveResponse)
async def make_move(
        game_id: int,
        move: game_schemas.MoveCreate,
        service: GameService = Depends(get_game_service)
):
    """
    Make a human move.

    Validates:
    - Game exists and is not finished
    - It's the player's turn
    - The cell exists and is empty

    In 'ai' mode the computer answers after a short delay.
    """
    try:
        res = await run_in_threadpool(service.make_move, game_id, move.index, move.mark)
    except GameNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except NotYourTurn as e:
        raise HTTPException(
            status_code=400,
            detail=str(e),
            headers={"X-Error-Code": "NOT_YOUR_TURN"}
        )
    except CellOccupied as e:
        raise HTTPException(
            status_code=400,
            detail=str(e),
            headers={"X-Error-Code": "CELL_OCCUPIED"}
        )
    except GameEnded as e:
        raise HTTPException(
            status_code=400,
            detail=str(e),
            headers={"X-Error-Code": "GAME_ENDED"}
        )
    except InvalidMove as e:
        raise HTTPException(
            status_code=400,
            detail=str(e),
            headers={"X-Error-Code": "INVALID_MOVE"}
        )

    if service.get_game(game_id).mode == GameMode.AI:
        service.schedule_computer_move(game_id)
    return res


@router.post("/{game_id}/reset", response_model=game_schemas.GameState)
def reset_game(
        game_id: int,
        service: GameService = Depends(get_game_service)
):
    """Clear the board and cancel any pending computer move."""
    try:
        service.reset_game(game_id)
        return service.get_game_state(game_id)
    except GameNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
