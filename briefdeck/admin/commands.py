"""Admin command wiring for aiogram."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from ..app import BriefApp
from ..domain.exceptions import InvalidArgument, NotFound
from ..telegram.filters import AdminFilter
from .service import AdminService


def build_admin_router(app: BriefApp) -> Router:
    router = Router()
    router.message.filter(AdminFilter(app.config, app.stores.users))
    service = app_admin_service(app)
    commands = app.config.admin.commands

    @router.message(Command(commands.add_card))
    async def handle_add_card(message: Message, command: CommandObject) -> None:
        parts = [part.strip() for part in (command.args or "").split("|")]
        if len(parts) < 2 or not parts[1]:
            await message.answer(
                f"Usage: /{commands.add_card} <category> | <prompt> [| back | difficulty]"
            )
            return
        back = parts[2] if len(parts) > 2 else ""
        difficulty = parts[3] if len(parts) > 3 and parts[3] else "Beginner"
        try:
            card = await service.create_card(parts[0], parts[1], back, difficulty)
        except InvalidArgument as exc:
            await message.answer(f"Card rejected: {exc}")
            return
        await message.answer(f"Card #{card.card_id} added to {card.category.value}.")

    @router.message(Command(commands.remove_card))
    async def handle_remove_card(message: Message, command: CommandObject) -> None:
        args = (command.args or "").split()
        if len(args) != 1 or not args[0].isdigit():
            await message.answer(f"Usage: /{commands.remove_card} <card_id>")
            return
        card_id = int(args[0])
        try:
            await service.remove_card(card_id)
        except NotFound:
            await message.answer(f"Card {card_id} not found.")
            return
        await message.answer(f"Card {card_id} removed.")

    @router.message(Command(commands.award_badge))
    async def handle_award_badge(message: Message, command: CommandObject) -> None:
        args = (command.args or "").split()
        if len(args) != 2 or not all(arg.isdigit() for arg in args):
            await message.answer(f"Usage: /{commands.award_badge} <user_id> <badge_id>")
            return
        user_id, badge_id = int(args[0]), int(args[1])
        try:
            awarded = await service.award_badge(user_id, badge_id)
        except NotFound as exc:
            await message.answer(str(exc))
            return
        if awarded:
            await message.answer(f"Badge {badge_id} awarded to {user_id}.")
        else:
            await message.answer(f"User {user_id} already has badge {badge_id}.")

    @router.message(Command(commands.grant_points))
    async def handle_grant_points(message: Message, command: CommandObject) -> None:
        args = (command.args or "").split()
        try:
            user_id, delta = int(args[0]), int(args[1])
        except (IndexError, ValueError):
            await message.answer(f"Usage: /{commands.grant_points} <user_id> <delta>")
            return
        try:
            after = await service.adjust_points(user_id, delta)
        except (InvalidArgument, NotFound) as exc:
            await message.answer(str(exc))
            return
        await message.answer(f"User {user_id}: {after.points} XP, level {after.level}.")

    @router.message(Command(commands.promote))
    async def handle_promote(message: Message, command: CommandObject) -> None:
        args = (command.args or "").split()
        if len(args) != 1 or not args[0].isdigit():
            await message.answer(f"Usage: /{commands.promote} <user_id>")
            return
        await service.set_admin(int(args[0]))
        await message.answer(f"User {args[0]} is now an admin.")

    return router


def app_admin_service(app: BriefApp) -> AdminService:
    return AdminService(
        catalog=app.cards.catalog,
        badge_service=app.badge_service,
        audit_store=app.stores.audit,
        progress=app.progress_service,
        event_bus=app.event_bus,
        config=app.config.admin,
    )
