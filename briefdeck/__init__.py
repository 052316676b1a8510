"""BriefDeck public API."""

from .app import BriefApp
from .config import BriefDeckConfig
from .registry import BadgeRegistry, CardRegistry

__all__ = [
    "BriefApp",
    "BriefDeckConfig",
    "BadgeRegistry",
    "CardRegistry",
]
