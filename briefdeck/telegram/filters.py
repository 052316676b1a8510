"""Reusable aiogram filters for BriefDeck bots."""

from __future__ import annotations

from aiogram.filters import BaseFilter
from aiogram.types import Message

from ..config import BriefDeckConfig
from ..storage.base import UserStore


class AdminFilter(BaseFilter):
    """Pass configured admin ids and users promoted through the admin tools."""

    def __init__(self, config: BriefDeckConfig, users: UserStore | None = None) -> None:
        self._admins = set(config.admin.admin_ids)
        self._users = users

    async def __call__(self, message: Message) -> bool:
        user = message.from_user
        if not user:
            return False
        if user.id in self._admins:
            return True
        if self._users is None:
            return False
        record = await self._users.get(user.id)
        return bool(record and record.is_admin)
