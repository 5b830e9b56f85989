class GameException(Exception):
    """Base exception for game-related errors."""
    pass


class GameNotFound(GameException):
    """Raised when a game is not found."""
    pass


class NotYourTurn(GameException):
    """Raised when a player tries to move out of turn."""
    pass


class CellOccupied(GameException):
    """Raised when trying to move to an occupied cell."""
    pass


class GameEnded(GameException):
    """Raised when trying to move in an ended game."""
    pass


class InvalidMove(GameException):
    """Raised when a move targets a cell outside the board."""
    pass


class OnlineModeUnavailable(GameException):
    """Raised when an online game is requested."""
    pass
