"""
Exhaustive minimax search over 3x3 boards.
"""
from app.core.game_config import MARK_X, MARK_O, WIN_SCORE, DRAW_SCORE
from app.services.board_evaluator import evaluate, empty_cells, place


def score(board, depth: int, maximizing: bool,
          computer_mark: str = MARK_O, opponent_mark: str = MARK_X) -> int:
    """
    Score a board from the computer's point of view.

    Wins score ``10 - depth`` and losses ``depth - 10`` so the search
    prefers the fastest win and the slowest loss. The full tree is
    searched, without pruning.

    Args:
        board: Board to score.
        depth: Number of plies already played in this search.
        maximizing: True if the computer moves next.
        computer_mark: Mark the maximizing side plays.
        opponent_mark: Mark the minimizing side plays.
    """
    result = evaluate(board)

    if result.winner == computer_mark:
        return WIN_SCORE - depth
    if result.winner == opponent_mark:
        return depth - WIN_SCORE
    if result.is_draw:
        return DRAW_SCORE

    mark = computer_mark if maximizing else opponent_mark
    scores = [
        score(place(board, index, mark), depth + 1, not maximizing,
              computer_mark, opponent_mark)
        for index in empty_cells(board)
    ]

    return max(scores) if maximizing else min(scores)
