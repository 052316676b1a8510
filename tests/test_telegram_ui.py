from datetime import datetime, timedelta, timezone

from briefdeck.domain.badges import Badge, BadgeRequirement
from briefdeck.domain.cards import CATEGORY_ORDER, Card, Category
from briefdeck.domain.draw import DrawResult
from briefdeck.domain.levels import compute_stats
from briefdeck.domain.progress import EarnedBadge
from briefdeck.storage.base import AcceptedBriefRecord, DesignRecord
from briefdeck.telegram.aiogram_router import (
    format_badges_message,
    format_brief_status,
    format_deck_message,
    format_duration,
    format_gallery_message,
    format_stats_message,
)
from briefdeck.telegram.deck import DeckState, DeckStateStore
from briefdeck.telegram.keyboards import accept_keyboard, deck_keyboard


def full_draw() -> DrawResult:
    prompts = {
        Category.CLIENT: "Local coffee shop",
        Category.NEED: "Logo design",
        Category.CHALLENGE: "No stock images",
        Category.AUDIENCE: "Busy professionals",
    }
    return DrawResult(
        cards={
            category: Card(card_id=idx, category=category, prompt_text=prompts[category])
            for idx, category in enumerate(CATEGORY_ORDER, start=1)
        }
    )


def test_deck_state_flip_and_replace():
    state = DeckState()
    assert not state.has_cards()
    assert state.flip(Category.CLIENT) is False

    state.show(full_draw())
    for category in CATEGORY_ORDER:
        assert state.flip(category) is True
    assert state.all_flipped()

    state.replace(Card(card_id=9, category=Category.NEED, prompt_text="Poster"))
    assert not state.all_flipped()
    assert state.as_draw()[Category.NEED].card_id == 9


def test_deck_state_store_is_per_user():
    store = DeckStateStore()
    store.get(1).show(full_draw())
    assert store.get(1).has_cards()
    assert not store.get(2).has_cards()
    store.reset(1)
    assert not store.get(1).has_cards()


def test_format_deck_message_hides_face_down_cards():
    state = DeckState()
    state.show(full_draw())
    state.flip(Category.CLIENT)
    text = format_deck_message(state)
    assert "Local coffee shop" in text
    assert "Logo design" not in text
    assert text.count("❓") == 3


def test_format_deck_message_marks_empty_category():
    state = DeckState()
    state.show(DrawResult(cards={Category.CLIENT: full_draw()[Category.CLIENT]}))
    assert "Audience: no cards available" in format_deck_message(state)


def test_deck_keyboard_has_row_per_card_plus_draw():
    state = DeckState()
    state.show(full_draw())
    markup = deck_keyboard(state)
    assert len(markup.inline_keyboard) == 5
    flip, reroll = markup.inline_keyboard[0]
    assert flip.callback_data == "briefdeck:flip:Client"
    assert reroll.callback_data == "briefdeck:reroll:Client"
    assert markup.inline_keyboard[-1][0].callback_data == "briefdeck:draw"


def test_accept_keyboard_lists_timer_presets():
    markup = accept_keyboard((30, 60, 120))
    timers = markup.inline_keyboard[1]
    assert [button.callback_data for button in timers] == [
        "briefdeck:accept:30",
        "briefdeck:accept:60",
        "briefdeck:accept:120",
    ]
    assert [button.text for button in timers] == ["⏱️ 30 min", "⏱️ 1 hour", "⏱️ 2 hours"]


def test_format_stats_message():
    text = format_stats_message(compute_stats(50, 2, 3, 1, 12))
    assert "Level 2" in text
    assert "33%" in text
    assert "Badges: 1" in text
    assert "Likes received: 12" in text


def test_format_brief_status_shows_remaining_time():
    record = AcceptedBriefRecord(
        user_id=1,
        brief="Create a Logo design for a Bank",
        card_ids=[1, 2, 3, 4],
        accepted_at=datetime.now(timezone.utc) - timedelta(minutes=1),
        time_limit_minutes=120,
    )
    text = format_brief_status(record)
    assert "Create a Logo design for a Bank" in text
    assert "Time left: 1:5" in text


def test_format_duration():
    assert format_duration(59) == "00:59"
    assert format_duration(3600 + 61) == "1:01:01"


def test_format_badges_marks_earned():
    badges = [
        Badge(1, "Starting Strong", "Completed 5 challenges", "lightbulb", BadgeRequirement.CHALLENGES, 5),
        Badge(2, "Logo Legend", "Created 3 logos", "pen-tool", BadgeRequirement.LOGO_DESIGNS, 3),
    ]
    earned = [EarnedBadge(badge=badges[1], earned_at=datetime.now(timezone.utc))]
    text = format_badges_message(earned, badges)
    assert "✅ Logo Legend" in text
    assert "▫️ Starting Strong" in text
    assert format_badges_message([], []) == "No badges available yet."


def test_format_gallery_message():
    assert "empty" in format_gallery_message([])
    design = DesignRecord(
        user_id=1, title="Coffee mark", image_url="x", brief="b", card_ids=[1], likes=4, design_id=7
    )
    assert "#7 Coffee mark — ❤️ 4" in format_gallery_message([design])
