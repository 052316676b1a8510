"""Telegram integration helpers."""

from .aiogram_router import build_router
from .deck import DeckState, DeckStateStore
from .filters import AdminFilter
from .keyboards import accept_keyboard, deck_keyboard, welcome_keyboard

__all__ = [
    "build_router",
    "AdminFilter",
    "DeckState",
    "DeckStateStore",
    "accept_keyboard",
    "deck_keyboard",
    "welcome_keyboard",
]
