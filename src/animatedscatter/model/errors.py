"""Exceptions raised by the store, the loader and the renderer."""


class ScatterplotError(Exception):
    """Base class for all application errors."""


class DataIntegrityError(ScatterplotError):
    """Duplicate or malformed record for an (entity, year) pair."""


class InvalidYearError(ScatterplotError, ValueError):
    """A year outside the configured year range was requested."""

    def __init__(self, year: int, min_year: int, max_year: int) -> None:
        super().__init__(f"Year {year} is outside the range {min_year}-{max_year}.")
        self.year = year


class DoubleInitError(ScatterplotError, RuntimeError):
    """The store was initialized more than once."""


class NotInitializedError(ScatterplotError, RuntimeError):
    """The store was used before a dataset was loaded into it."""
