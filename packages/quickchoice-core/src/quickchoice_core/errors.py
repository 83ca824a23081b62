"""Exception hierarchy shared by every QuickChoice component."""

from __future__ import annotations


class QuickChoiceError(Exception):
    """Base class for all QuickChoice errors."""


class InvalidArgumentError(QuickChoiceError, ValueError):
    """Raised when a caller violates a precondition (bad interval, bad index...)."""


class NotFoundError(QuickChoiceError, LookupError):
    """Raised when a lookup misses."""


class ChoiceNotFoundError(NotFoundError):
    """Raised when no choice matches an id or a name."""

    def __init__(self, by: str, value: str):
        self.by = by
        self.value = value
        super().__init__(f"Choice {value} not found")


class TemplateNotFoundError(NotFoundError):
    """Raised when a template or prompt template cannot be resolved."""


class TargetNotFoundError(NotFoundError):
    """Raised when a capture target line is missing from the file."""


class ExternalRequestError(QuickChoiceError):
    """Raised when an AI request or a document store operation fails."""
