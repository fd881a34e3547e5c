"""Exceptions raised inside gottodo. None of them end the session."""


class GottodoError(Exception):
    """Base class for gottodo errors."""


class LoadError(GottodoError):
    """Persisted task file could not be read or parsed."""


class SaveError(GottodoError):
    """Persisted task file could not be written."""
