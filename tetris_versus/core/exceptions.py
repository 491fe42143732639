# Tetris Versus - Human and CPU Tetris engine
# exceptions.py - Custom exceptions for the Tetris game engine

class TetrisException(Exception):
    """Base class for contract violations raised by the engine."""
    pass

class CollisionException(TetrisException):
    """Raised when a piece is added over an occupied cell."""
    pass

class OutOfBoundsException(TetrisException):
    """Raised when a piece is added with a block outside the board."""
    pass

class InvalidPieceException(TetrisException):
    """Raised for an unknown piece type or rotation count."""
    pass

class InvalidConfigException(TetrisException):
    """Raised for an unknown difficulty, game mode or player setup."""
    pass
