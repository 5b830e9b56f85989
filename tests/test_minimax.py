from app.services.minimax import score


def board_from(rows):
    """Board from three strings like 'XO.'"""
    return tuple(None if ch == "." else ch for ch in "".join(rows))


class TestScore:

    def test_computer_win_scores_ten_minus_depth(self):
        board = board_from(["OOO", "XX.", "X.."])
        assert score(board, 0, True) == 10
        assert score(board, 3, False) == 7

    def test_opponent_win_scores_depth_minus_ten(self):
        board = board_from(["XXX", "OO.", "..."])
        assert score(board, 0, True) == -10
        assert score(board, 4, True) == -6

    def test_draw_scores_zero(self):
        board = board_from(["XOX", "XOO", "OXX"])
        assert score(board, 5, True) == 0

    def test_immediate_win_found_when_maximizing(self):
        board = board_from(["OO.", "XX.", "X.."])
        assert score(board, 0, True) == 9

    def test_opponent_takes_immediate_win_when_minimizing(self):
        board = board_from(["XX.", "OO.", "..."])
        assert score(board, 0, False) == -9

    def test_single_forced_move(self):
        # Only cell 8 left and it draws
        board = board_from(["XOX", "XOO", "OX."])
        assert score(board, 0, False) == 0

    def test_marks_can_be_swapped(self):
        board = board_from(["XX.", "OO.", "..."])
        assert score(board, 0, True, computer_mark="X", opponent_mark="O") == 9

    def test_perfect_play_from_center_opening_draws(self):
        board = board_from(["...", ".X.", "..."])
        assert score(board, 0, True) == 0

    def test_does_not_mutate_input(self):
        board = [None, "X", None, None, "O", None, None, None, None]
        snapshot = list(board)
        score(board, 0, True)
        assert board == snapshot

    def test_is_deterministic(self):
        board = board_from(["X..", ".O.", "..X"])
        assert score(board, 0, True) == score(board, 0, True)
