"""Factory helpers to wire BriefDeck services into aiogram."""

from __future__ import annotations

from typing import Iterable, Sequence

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, Message

from ..app import BriefApp
from ..domain.badges import Badge
from ..domain.briefs import compose_brief, remaining_seconds
from ..domain.cards import CATEGORY_ICONS, CATEGORY_ORDER, Category
from ..domain.designs import SubmissionOutcome
from ..domain.exceptions import InvalidArgument, NotFound, StaleBrief
from ..domain.levels import UserStats
from ..domain.progress import EarnedBadge
from ..storage.base import AcceptedBriefRecord, DesignRecord
from .api_utils import safe_answer, safe_callback_answer, safe_edit_text
from .deck import DeckState, DeckStateStore
from .keyboards import CALLBACK_PREFIX, accept_keyboard, deck_keyboard, welcome_keyboard


SUBMIT_USAGE = "Send the design as a photo with caption: /submit <title>"


def build_router(app: BriefApp, *, deck_states: DeckStateStore | None = None) -> Router:
    ensure_catalog_ready(app)

    router = Router()
    states = deck_states or DeckStateStore()
    progress = app.progress_service
    briefs = app.brief_service
    designs = app.design_service

    async def render_deck(message: Message | None, state: DeckState, *, edit: bool) -> None:
        text = format_deck_message(state)
        if state.all_flipped():
            brief = compose_brief(state.as_draw())
            if brief is not None:
                text = f"{text}\n\n📝 Brief:\n{brief.text}"
                markup = accept_keyboard(briefs.timer_presets())
            else:
                markup = deck_keyboard(state)
        else:
            markup = deck_keyboard(state)
        if edit:
            await safe_edit_text(message, text, reply_markup=markup)
        else:
            await safe_answer(message, text, reply_markup=markup)

    @router.message(Command("start"))
    async def handle_start(message: Message) -> None:
        user = message.from_user
        if not user:
            return
        await progress.ensure_user(user.id, user.username)
        await message.answer(render_help_message(), reply_markup=welcome_keyboard())

    @router.message(Command("help"))
    async def handle_help(message: Message) -> None:
        await message.answer(render_help_message(), reply_markup=welcome_keyboard())

    @router.message(Command("draw"))
    async def handle_draw(message: Message) -> None:
        user = message.from_user
        if not user:
            return
        await progress.ensure_user(user.id, user.username)
        state = states.get(user.id)
        state.show(app.draw())
        await render_deck(message, state, edit=False)

    @router.callback_query(F.data == f"{CALLBACK_PREFIX}:draw")
    async def handle_draw_callback(callback: CallbackQuery) -> None:
        user = callback.from_user
        await progress.ensure_user(user.id, user.username)
        state = states.get(user.id)
        state.show(app.draw())
        await render_deck(callback.message, state, edit=True)
        await safe_callback_answer(callback)

    @router.callback_query(F.data.startswith(f"{CALLBACK_PREFIX}:flip:"))
    async def handle_flip(callback: CallbackQuery) -> None:
        category = _callback_category(callback.data)
        state = states.get(callback.from_user.id)
        if category is None or state.selected.get(category) is None:
            await safe_callback_answer(callback, "Draw cards first.", show_alert=True)
            return
        state.flip(category)
        await render_deck(callback.message, state, edit=True)
        await safe_callback_answer(callback)

    @router.callback_query(F.data.startswith(f"{CALLBACK_PREFIX}:reroll:"))
    async def handle_reroll(callback: CallbackQuery) -> None:
        category = _callback_category(callback.data)
        state = states.get(callback.from_user.id)
        if category is None:
            await safe_callback_answer(callback, "Unknown category.", show_alert=True)
            return
        try:
            card = app.draw_engine.reroll(
                app.cards.catalog.grouped(), category, state.selected.get(category)
            )
        except (InvalidArgument, NotFound) as exc:
            await safe_callback_answer(callback, str(exc), show_alert=True)
            return
        state.replace(card)
        await render_deck(callback.message, state, edit=True)
        await safe_callback_answer(callback)

    @router.callback_query(F.data.startswith(f"{CALLBACK_PREFIX}:accept:"))
    async def handle_accept(callback: CallbackQuery) -> None:
        user = callback.from_user
        state = states.get(user.id)
        brief = compose_brief(state.as_draw())
        if brief is None or not state.all_flipped():
            await safe_callback_answer(callback, "Flip all four cards first.", show_alert=True)
            return
        minutes = _parse_id((callback.data or "").rsplit(":", 1)[-1])
        if minutes is None:
            await safe_callback_answer(callback, "Unknown timer.", show_alert=True)
            return
        await progress.ensure_user(user.id, user.username)
        try:
            record = await briefs.accept(user.id, brief, time_limit_minutes=minutes or None)
        except InvalidArgument as exc:
            await safe_callback_answer(callback, str(exc), show_alert=True)
            return
        except NotFound:
            states.reset(user.id)
            await safe_callback_answer(
                callback, "A card on the table was removed. Use /draw to redraw.", show_alert=True
            )
            return
        states.reset(user.id)
        await safe_answer(callback.message, format_brief_status(record))
        await safe_callback_answer(callback, "Brief accepted!")

    @router.callback_query(F.data == f"{CALLBACK_PREFIX}:stats")
    async def handle_stats_callback(callback: CallbackQuery) -> None:
        user = callback.from_user
        await progress.ensure_user(user.id, user.username)
        await safe_answer(callback.message, format_stats_message(await progress.stats(user.id)))
        await safe_callback_answer(callback)

    @router.message(Command("brief"))
    async def handle_brief(message: Message) -> None:
        user = message.from_user
        if not user:
            return
        record = await briefs.active(user.id)
        if record is None:
            await message.answer("No accepted brief. Use /draw to get one.")
            return
        await message.answer(format_brief_status(record))

    @router.message(Command("cancel"))
    async def handle_cancel(message: Message) -> None:
        user = message.from_user
        if not user:
            return
        try:
            after = await briefs.cancel(user.id)
        except NotFound:
            await message.answer("There is no accepted brief to cancel.")
            return
        penalty = app.config.progress.cancel_penalty
        await message.answer(
            f"Brief cancelled. -{penalty} XP. Now {after.points} XP, level {after.level}."
        )

    @router.message(Command("submit"), F.photo)
    async def handle_submit(message: Message, command: CommandObject) -> None:
        user = message.from_user
        if not user:
            return
        title = (command.args or "").strip()
        if not title:
            await message.answer(SUBMIT_USAGE)
            return
        image_url = f"tg://file/{message.photo[-1].file_id}"
        try:
            outcome = await briefs.complete(user.id, title=title, image_url=image_url)
        except StaleBrief:
            await message.answer(
                "A card of your brief was removed from the deck. "
                "The brief was dropped without penalty; use /draw for a new one."
            )
            return
        except NotFound:
            await message.answer("Accept a brief before submitting a design.")
            return
        except InvalidArgument as exc:
            await message.answer(f"Cannot submit: {exc}")
            return
        await message.answer(format_submission_message(outcome))

    @router.message(Command("submit"))
    async def handle_submit_without_photo(message: Message) -> None:
        await message.answer(SUBMIT_USAGE)

    @router.message(Command("stats"))
    async def handle_stats(message: Message) -> None:
        user = message.from_user
        if not user:
            return
        await progress.ensure_user(user.id, user.username)
        await message.answer(format_stats_message(await progress.stats(user.id)))

    @router.message(Command("badges"))
    async def handle_badges(message: Message) -> None:
        user = message.from_user
        if not user:
            return
        earned = await app.badge_service.earned(user.id)
        await message.answer(format_badges_message(earned, app.badges.catalog.all()))

    @router.message(Command("gallery"))
    async def handle_gallery(message: Message) -> None:
        await message.answer(format_gallery_message(await designs.gallery(limit=10)))

    @router.message(Command("like"))
    async def handle_like(message: Message, command: CommandObject) -> None:
        design_id = _parse_id(command.args)
        if design_id is None:
            await message.answer("Usage: /like <design_id>")
            return
        try:
            design = await designs.like(design_id)
        except NotFound:
            await message.answer(f"Design {design_id} not found.")
            return
        await message.answer(f"❤️ '{design.title}' now has {design.likes} likes.")

    @router.message(Command("comment"))
    async def handle_comment(message: Message, command: CommandObject) -> None:
        user = message.from_user
        if not user:
            return
        parts = (command.args or "").split(maxsplit=1)
        design_id = _parse_id(parts[0] if parts else None)
        if design_id is None or len(parts) < 2:
            await message.answer("Usage: /comment <design_id> <text>")
            return
        await progress.ensure_user(user.id, user.username)
        try:
            await designs.comment(design_id, user.id, parts[1])
        except NotFound:
            await message.answer(f"Design {design_id} not found.")
            return
        except InvalidArgument as exc:
            await message.answer(f"Cannot comment: {exc}")
            return
        await message.answer("💬 Comment added.")

    return router


def ensure_catalog_ready(app: BriefApp) -> None:
    if not list(app.cards.catalog.iter_cards()):
        raise RuntimeError(
            "No cards registered. "
            "Register cards with app.cards.prompt(...) or load_catalog_from_json."
        )


def render_help_message() -> str:
    lines = [
        "Hi! BriefDeck deals you a random design brief.",
        "",
        "Commands:",
        "• /draw — draw one card per category",
        "• /brief — show the accepted brief and its timer",
        "• /cancel — drop the accepted brief (costs XP)",
        "• /submit <title> — send a photo with this caption to complete the brief",
        "• /stats — points, level and progress",
        "• /badges — earned and available badges",
        "• /gallery — latest designs",
        "• /like <id>, /comment <id> <text> — react to a design",
        "",
        "Flip all four cards to reveal the brief.",
    ]
    return "\n".join(lines)


def format_deck_message(state: DeckState) -> str:
    if not state.has_cards():
        return "No cards on the table. Use /draw."
    lines = ["🃏 Your cards:"]
    for category in CATEGORY_ORDER:
        card = state.selected.get(category)
        icon = CATEGORY_ICONS[category]
        if card is None:
            lines.append(f"{icon} {category.value}: no cards available")
        elif state.flipped[category]:
            lines.append(f"{icon} {category.value}: {card.prompt_text}")
            if card.back_content:
                lines.append(f"   {card.back_content}")
        else:
            lines.append(f"{icon} {category.value}: ❓")
    return "\n".join(lines)


def format_duration(seconds: int) -> str:
    hours, rest = divmod(max(0, seconds), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def format_brief_status(record: AcceptedBriefRecord) -> str:
    lines = ["📝 Accepted brief:", record.brief]
    remaining = remaining_seconds(record)
    if remaining is None:
        lines.append("⏱️ No time limit.")
    elif remaining == 0:
        lines.append("⏱️ Time is up! You can still submit or /cancel.")
    else:
        lines.append(f"⏱️ Time left: {format_duration(remaining)}")
    return "\n".join(lines)


def format_stats_message(stats: UserStats) -> str:
    lines = [
        f"📈 Level {stats.level}",
        f"⭐ Points: {stats.points} / {stats.next_level_points}",
        f"Progress to next level: {stats.progress_to_next_level}%",
        "",
        f"🎨 Completed challenges: {stats.completed_challenges}",
        f"🏅 Badges: {stats.earned_badges}",
        f"❤️ Likes received: {stats.total_likes}",
    ]
    return "\n".join(lines)


def format_submission_message(outcome: SubmissionOutcome) -> str:
    lines = [
        f"✅ Design '{outcome.design.title}' submitted (#{outcome.design.design_id}).",
        f"📈 {outcome.progress.points} XP, level {outcome.progress.level}.",
    ]
    for badge in outcome.new_badges:
        lines.append(f"🏅 New badge: {badge.name}")
    return "\n".join(lines)


def format_badges_message(earned: Sequence[EarnedBadge], available: Iterable[Badge]) -> str:
    earned_ids = {item.badge.badge_id for item in earned}
    lines = ["🏅 Badges:"]
    for badge in available:
        mark = "✅" if badge.badge_id in earned_ids else "▫️"
        lines.append(f"{mark} {badge.name} — {badge.description}")
    if len(lines) == 1:
        return "No badges available yet."
    return "\n".join(lines)


def format_gallery_message(designs: Sequence[DesignRecord]) -> str:
    if not designs:
        return "The gallery is empty. Complete a brief with /submit."
    lines = ["🖼️ Latest designs:"]
    for design in designs:
        lines.append(f"#{design.design_id} {design.title} — ❤️ {design.likes}")
    return "\n".join(lines)


def _callback_category(data: str | None) -> Category | None:
    if not data:
        return None
    try:
        return Category.parse(data.rsplit(":", 1)[-1])
    except InvalidArgument:
        return None


def _parse_id(raw: str | None) -> int | None:
    if not raw:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None
