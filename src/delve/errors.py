class DelveError(Exception):
    """Base error for the dungeon core."""


class ConfigurationError(DelveError, ValueError):
    """Raised when generation or display parameters cannot produce a playable level."""


class LevelGenerationError(ConfigurationError):
    """Raised when the generator accepted no rooms, leaving an all-wall map."""
