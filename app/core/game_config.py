"""
Configuration constants for the TicTacToe game engine.
"""

BOARD_SIZE = 3
CELL_COUNT = BOARD_SIZE * BOARD_SIZE

MARK_X = "X"
MARK_O = "O"

# Rows, then columns, then the two diagonals. Order is the tie-break when
# reporting the winning line.
WIN_LINES = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

# Minimax scores
WIN_SCORE = 10
DRAW_SCORE = 0

# Probability that the computer plays a random empty cell instead of searching
RANDOM_MOVE_PROBABILITY = {
    "easy": 0.70,
    "medium": 0.40,
    "hard": 0.0,
}

# Statistics
HISTORY_LIMIT = 50

# Persistence keys
STATS_KEY = "tic_tac_toe_stats"
HISTORY_KEY = "tic_tac_toe_history"
SETTINGS_KEY = "tic_tac_toe_settings"

DEFAULT_AI_NAME = "AI"


def is_valid_index(index: int) -> bool:
    """Check if a cell index is on the board."""
    return 0 <= index < CELL_COUNT
