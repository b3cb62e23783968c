class LevelIOError(Exception):
    """Base class for level storage and serialization failures."""


class LevelDecodeError(LevelIOError):
    """Raised when a payload cannot be turned into a level record."""


class LevelEncodeError(LevelIOError):
    """Raised when a level record cannot be serialized."""


class LevelSaveError(LevelIOError):
    """Raised when a level cannot be written to disk."""
