"""Exception types shared across the kanji app."""
from typing import Optional


class KanjiAppError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(KanjiAppError):
    """An environment variable holds a value we cannot use."""


class DatasetError(KanjiAppError):
    """The kanji dataset file is missing or malformed."""


class SeedError(KanjiAppError):
    """Seeding cannot run against the configured database."""


class ApiError(KanjiAppError):
    """A request to the kanji backend failed."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
