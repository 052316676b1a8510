"""Keyboard helpers for BriefDeck bots."""

from __future__ import annotations

from typing import Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup

from ..domain.cards import CATEGORY_ICONS, CATEGORY_ORDER
from .deck import DeckState

CALLBACK_PREFIX = "briefdeck"


def deck_keyboard(state: DeckState) -> InlineKeyboardMarkup:
    rows: list[list[InlineKeyboardButton]] = []
    for category in CATEGORY_ORDER:
        if state.selected.get(category) is None:
            continue
        icon = CATEGORY_ICONS[category]
        flip_label = "🙈 Hide" if state.flipped[category] else "👀 Flip"
        rows.append(
            [
                InlineKeyboardButton(
                    text=f"{icon} {category.value}: {flip_label}",
                    callback_data=f"{CALLBACK_PREFIX}:flip:{category.value}",
                ),
                InlineKeyboardButton(
                    text="🔄 Reroll",
                    callback_data=f"{CALLBACK_PREFIX}:reroll:{category.value}",
                ),
            ]
        )
    rows.append(
        [InlineKeyboardButton(text="🔀 Draw new cards", callback_data=f"{CALLBACK_PREFIX}:draw")]
    )
    return InlineKeyboardMarkup(inline_keyboard=rows)


def accept_keyboard(timer_presets: Sequence[int]) -> InlineKeyboardMarkup:
    timers = [
        InlineKeyboardButton(
            text=f"⏱️ {_label(minutes)}",
            callback_data=f"{CALLBACK_PREFIX}:accept:{minutes}",
        )
        for minutes in timer_presets
    ]
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [InlineKeyboardButton(text="✅ Accept brief", callback_data=f"{CALLBACK_PREFIX}:accept:0")],
            timers,
            [InlineKeyboardButton(text="🔀 Draw new cards", callback_data=f"{CALLBACK_PREFIX}:draw")],
        ]
    )


def welcome_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [InlineKeyboardButton(text="🃏 Draw cards", callback_data=f"{CALLBACK_PREFIX}:draw")],
            [InlineKeyboardButton(text="📈 My progress", callback_data=f"{CALLBACK_PREFIX}:stats")],
        ]
    )


def _label(minutes: int) -> str:
    if minutes % 60 == 0:
        hours = minutes // 60
        return f"{hours} hour" if hours == 1 else f"{hours} hours"
    return f"{minutes} min"
