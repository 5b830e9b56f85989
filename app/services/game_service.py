import asyncio
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from app.core.exceptions import (
    GameNotFound, GameEnded, NotYourTurn, CellOccupied, InvalidMove,
    OnlineModeUnavailable, GameException
)
from app.core.game_config import MARK_X, MARK_O, DEFAULT_AI_NAME, is_valid_index
from app.schemas.game import GameMode, GameModeOption, GameStatus, Difficulty, MatchResult
from app.services.board_evaluator import (
    Board, OutcomeResult, empty_board, evaluate, place, opponent_of
)
from app.services.move_selector import MoveSelector
from app.services.settings_service import SettingsStore
from app.services.stats_service import StatsAggregator

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    id: int
    mode: GameMode
    player_x_name: str
    player_o_name: str
    difficulty: Optional[Difficulty] = None
    board: Board = field(default_factory=empty_board)
    current_player: str = MARK_X
    outcome: OutcomeResult = field(default_factory=OutcomeResult)
    moves_count: int = 0
    # Bumped on every move and reset so a delayed computer move can spot a stale board
    version: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: Optional[datetime] = None
    pending_move: Optional[asyncio.Task] = None

    @property
    def status(self) -> GameStatus:
        return GameStatus.COMPLETED if self.outcome.is_over else GameStatus.ACTIVE


class GameService:
    """Runs in-memory game sessions and feeds finished matches to the statistics."""

    def __init__(self, stats: StatsAggregator, settings_store: SettingsStore,
                 move_selector: Optional[MoveSelector] = None, move_delay: float = 0.5):
        self.stats = stats
        self.settings_store = settings_store
        self.move_selector = move_selector or MoveSelector(computer_mark=MARK_O, opponent_mark=MARK_X)
        self.move_delay = move_delay
        self.sessions: Dict[int, GameSession] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def create_game(self, mode=GameModeOption.AI, difficulty=None,
                    player_x_name: Optional[str] = None,
                    player_o_name: Optional[str] = None) -> GameSession:
        if GameModeOption(mode) == GameModeOption.ONLINE:
            raise OnlineModeUnavailable("Online mode is not available yet")
        mode = GameMode(mode)
        settings = self.settings_store.settings

        if mode == GameMode.AI:
            difficulty = Difficulty(difficulty or settings.default_ai_difficulty)
            player_o_name = player_o_name or DEFAULT_AI_NAME
        else:
            difficulty = None
            player_o_name = player_o_name or settings.default_player_o_name

        with self._lock:
            session = GameSession(
                id=self._next_id,
                mode=mode,
                difficulty=difficulty,
                player_x_name=player_x_name or settings.default_player_x_name,
                player_o_name=player_o_name
            )
            self.sessions[session.id] = session
            self._next_id += 1

        logger.info(
            f"Game {session.id} created ({mode.value}"
            f"{f', {difficulty.value}' if difficulty else ''})"
        )
        return session

    def get_game(self, game_id: int) -> GameSession:
        session = self.sessions.get(game_id)
        if not session:
            raise GameNotFound(f"Game {game_id} not found")
        return session

    def make_move(self, game_id: int, index: int, mark: Optional[str] = None) -> dict:
        """Apply a human move."""
        with self._lock:
            session = self.get_game(game_id)

            if session.outcome.is_over:
                raise GameEnded(f"Game {game_id} has already ended")

            if mark is not None and mark != session.current_player:
                raise NotYourTurn(f"It's not player {mark}'s turn")

            if self._is_computer_turn(session):
                raise NotYourTurn(f"It's the computer's turn in game {game_id}")

            if not is_valid_index(index):
                raise InvalidMove(f"Cell {index} is outside the board")

            if session.board[index] is not None:
                raise CellOccupied(f"Cell {index} is already occupied")

            return self._apply_move(session, index)

    def play_computer_move(self, game_id: int) -> Optional[dict]:
        """Let the computer move now. Returns None when it has nothing to do."""
        return self._play_if_current(game_id)

    def schedule_computer_move(self, game_id: int) -> bool:
        """
        Start a task that plays the computer's move after ``move_delay``.

        Must be called from a running event loop. The search itself runs in
        a worker thread so the loop keeps serving requests. The task is
        cancelled by any later move or reset, and a search that finishes on
        a changed board is thrown away.
        """
        with self._lock:
            session = self.get_game(game_id)
            if not self._is_computer_turn(session):
                return False

            self._cancel_pending_move(session)
            session.pending_move = asyncio.create_task(
                self._delayed_computer_move(game_id, session.version)
            )
            return True

    def reset_game(self, game_id: int) -> GameSession:
        with self._lock:
            session = self.get_game(game_id)
            self._cancel_pending_move(session)

            session.board = empty_board()
            session.current_player = MARK_X
            session.outcome = OutcomeResult()
            session.moves_count = 0
            session.version += 1
            session.ended_at = None

        logger.info(f"Game {game_id} reset")
        return session

    def get_game_state(self, game_id: int) -> dict:
        with self._lock:
            session = self.get_game(game_id)
            outcome = session.outcome

            return {
                "id": session.id,
                "mode": session.mode,
                "difficulty": session.difficulty,
                "status": session.status,
                "board": list(session.board),
                "current_player": session.current_player,
                "winner": outcome.winner,
                "winning_line": list(outcome.winning_line) if outcome.winning_line else None,
                "is_draw": outcome.is_draw,
                "player_x_name": session.player_x_name,
                "player_o_name": session.player_o_name,
                "moves_count": session.moves_count,
                "computer_thinking": session.pending_move is not None,
                "created_at": session.created_at,
                "ended_at": session.ended_at
            }

    def _is_computer_turn(self, session: GameSession) -> bool:
        return (
            session.mode == GameMode.AI
            and session.current_player == MARK_O
            and not session.outcome.is_over
        )

    def _apply_move(self, session: GameSession, index: int, cancel_pending: bool = True) -> dict:
        if cancel_pending:
            self._cancel_pending_move(session)

        mark = session.current_player
        session.board = place(session.board, index, mark)
        session.moves_count += 1
        session.version += 1
        session.outcome = evaluate(session.board)

        if session.outcome.is_over:
            session.ended_at = datetime.now(timezone.utc)
            if session.outcome.winner:
                logger.info(f"Player {session.outcome.winner} won game {session.id}")
            else:
                logger.info(f"Game {session.id} ended in a draw")
            self._record_result(session)
        else:
            session.current_player = opponent_of(mark)

        outcome = session.outcome
        return {
            "game_id": session.id,
            "index": index,
            "mark": mark,
            "game_status": session.status,
            "winner": outcome.winner,
            "winning_line": list(outcome.winning_line) if outcome.winning_line else None,
            "is_draw": outcome.is_draw
        }

    def _record_result(self, session: GameSession) -> None:
        if session.outcome.winner == MARK_X:
            result = MatchResult.X_WINS
        elif session.outcome.winner == MARK_O:
            result = MatchResult.O_WINS
        else:
            result = MatchResult.DRAW

        try:
            self.stats.record_match(
                session.mode, result, session.difficulty,
                player_x_name=session.player_x_name,
                player_o_name=session.player_o_name
            )
        except Exception as e:
            # Don't fail the game completion if stats update fails
            logger.error(f"Failed to record result for game {session.id}: {e}")

    def _play_if_current(self, game_id: int, version: Optional[int] = None) -> Optional[dict]:
        """
        Search and play the computer's move.

        With a ``version`` the move is only applied while the board is still
        the one the move was scheduled for. The search runs without holding
        the lock; the board is checked again before the move is applied.
        """
        with self._lock:
            session = self.get_game(game_id)
            if not self._is_computer_turn(session):
                return None
            if version is not None and session.version != version:
                logger.info(f"Skipping stale computer move for game {game_id}")
                return None
            board, difficulty, searched_version = session.board, session.difficulty, session.version

        index = self.move_selector.select_move(board, difficulty)
        if index is None:
            return None

        with self._lock:
            if session.version != searched_version:
                logger.info(f"Board of game {game_id} changed during search, move dropped")
                return None
            return self._apply_move(session, index, cancel_pending=version is None)

    async def _delayed_computer_move(self, game_id: int, version: int) -> None:
        try:
            await asyncio.sleep(self.move_delay)
            await asyncio.to_thread(self._play_if_current, game_id, version)
        except GameException as e:
            logger.error(f"Computer move failed for game {game_id}: {e}")
        finally:
            with self._lock:
                session = self.sessions.get(game_id)
                if session is not None and session.pending_move is asyncio.current_task():
                    session.pending_move = None

    def _cancel_pending_move(self, session: GameSession) -> None:
        task = session.pending_move
        if task is None:
            return
        session.pending_move = None

        # Resets and human moves may arrive from a worker thread
        loop = task.get_loop()
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            task.cancel()
        elif not loop.is_closed():
            loop.call_soon_threadsafe(task.cancel)
