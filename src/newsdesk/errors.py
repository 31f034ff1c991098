"""Exception types raised by the content pipeline."""

from __future__ import annotations


class NewsdeskError(Exception):
    """Base class for all pipeline errors."""


class InvalidArticleError(NewsdeskError, ValueError):
    """Raised when an article identifier fails filename sanitation."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid article identifier: {value!r}")
        self.value = value


class ArticleUnavailableError(NewsdeskError):
    """Raised when an article's source text cannot be fetched."""

    def __init__(self, file: str, reason: object | None = None) -> None:
        message = f"Could not load article '{file}'"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.file = file


class ValidationRunError(NewsdeskError):
    """Raised when the validation command cannot run at all."""


class ConfigError(NewsdeskError, ValueError):
    """Raised for unreadable or malformed configuration files."""
