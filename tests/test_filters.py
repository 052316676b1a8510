from types import SimpleNamespace

import pytest

from briefdeck.config import AdminConfig, BriefDeckConfig
from briefdeck.storage.memory import InMemoryUserStore
from briefdeck.telegram.filters import AdminFilter


def message_from(user_id: int | None):
    user = SimpleNamespace(id=user_id) if user_id is not None else None
    return SimpleNamespace(from_user=user)


@pytest.mark.asyncio()
async def test_admin_filter_accepts_configured_and_promoted_users():
    users = InMemoryUserStore()
    promoted = await users.get_or_create(20)
    promoted.is_admin = True
    await users.save(promoted)
    await users.get_or_create(30)

    admin_filter = AdminFilter(BriefDeckConfig(admin=AdminConfig(admin_ids={10})), users)
    assert await admin_filter(message_from(10))
    assert await admin_filter(message_from(20))
    assert not await admin_filter(message_from(30))
    assert not await admin_filter(message_from(40))
    assert not await admin_filter(message_from(None))
