class LevelError(Exception):
    """Base class for errors raised by the level domain."""


class SchemaError(LevelError, ValueError):
    """Raised when declared dimensions disagree with the actual grid, or a cell symbol is unknown."""


class OutOfRangeError(LevelError, IndexError):
    """Raised when a cell access targets coordinates outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"cell ({x}, {y}) outside {width}x{height} grid")
        self.x = x
        self.y = y


class IncompleteLevelError(LevelError):
    """Raised by expansion when the spawn or the goal cannot be resolved."""
