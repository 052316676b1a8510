"""Exceptions raised by BriefDeck domain services."""


class BriefDeckError(RuntimeError):
    """Base class for domain exceptions."""


class InvalidArgument(BriefDeckError, ValueError):
    """Raised when a caller passes a value the operation cannot accept."""


class NotFound(BriefDeckError, LookupError):
    """Raised when the requested entity or candidate set does not exist."""


class StaleBrief(NotFound):
    """Raised when an accepted brief uses a card that was removed from the catalog."""
