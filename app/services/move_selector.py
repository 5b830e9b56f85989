"""
Computer opponent move selection.
"""
import logging
import random
from typing import Optional

from app.core.game_config import MARK_X, MARK_O, RANDOM_MOVE_PROBABILITY
from app.schemas.game import Difficulty
from app.services.board_evaluator import empty_cells, place
from app.services.minimax import score

logger = logging.getLogger(__name__)


class MoveSelector:
    """
    Picks the computer's move for a difficulty tier.

    Easy and medium blend uniformly random moves into optimal play,
    hard always searches and never loses.
    """

    def __init__(self, computer_mark: str = MARK_O, opponent_mark: str = MARK_X,
                 rng: Optional[random.Random] = None):
        """
        Args:
            computer_mark: Mark the computer plays.
            opponent_mark: Mark the other side plays.
            rng: Source with ``random()`` and ``choice()``; a fresh
                ``random.Random`` when not given.
        """
        self.computer_mark = computer_mark
        self.opponent_mark = opponent_mark
        self.rng = rng or random.Random()

    def select_move(self, board, difficulty) -> Optional[int]:
        """Return the index to play, or None if the board is full."""
        available = empty_cells(board)
        if not available:
            return None

        probability = RANDOM_MOVE_PROBABILITY[Difficulty(difficulty).value]
        if probability > 0 and self.rng.random() < probability:
            move = self.rng.choice(available)
            logger.debug(f"Random move {move} at {Difficulty(difficulty).value} difficulty")
            return move

        return self.best_move(board)

    def best_move(self, board) -> Optional[int]:
        """Highest scoring cell; ties keep the lowest index."""
        best_score = None
        best_index = None

        for index in empty_cells(board):
            candidate = score(
                place(board, index, self.computer_mark), 0, False,
                self.computer_mark, self.opponent_mark
            )
            if best_score is None or candidate > best_score:
                best_score = candidate
                best_index = index

        logger.debug(f"Best move {best_index} scored {best_score}")
        return best_index
