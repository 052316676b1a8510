"""In-memory storage backend for BriefDeck."""

from __future__ import annotations

from collections import deque
from dataclasses import replace
from datetime import datetime, timezone
from typing import Deque, Sequence

from .base import (
    AcceptedBriefRecord,
    AuditStore,
    BadgeAwardStore,
    BriefStore,
    CommentRecord,
    CommentStore,
    DesignRecord,
    DesignStore,
    UserBadgeRecord,
    UserRecord,
    UserStore,
)


class InMemoryUserStore(UserStore):
    def __init__(self) -> None:
        self._records: dict[int, UserRecord] = {}

    async def get(self, user_id: int) -> UserRecord | None:
        record = self._records.get(user_id)
        return replace(record) if record else None

    async def get_or_create(self, user_id: int, username: str | None = None) -> UserRecord:
        if user_id not in self._records:
            self._records[user_id] = UserRecord(user_id=user_id, username=username)
        record = self._records[user_id]
        if username and record.username != username:
            record.username = username
        return replace(record)

    async def save(self, record: UserRecord) -> None:
        self._records[record.user_id] = replace(record)

    async def all(self) -> Sequence[UserRecord]:
        return [replace(record) for record in self._records.values()]


class InMemoryDesignStore(DesignStore):
    def __init__(self) -> None:
        self._records: dict[int, DesignRecord] = {}
        self._next_id = 1

    async def add(self, record: DesignRecord) -> DesignRecord:
        stored = replace(record, design_id=self._next_id, card_ids=list(record.card_ids))
        self._next_id += 1
        self._records[stored.design_id] = stored
        return replace(stored)

    async def get(self, design_id: int) -> DesignRecord | None:
        record = self._records.get(design_id)
        return replace(record) if record else None

    async def save(self, record: DesignRecord) -> None:
        if record.design_id is None:
            raise ValueError("Cannot save a design without an id")
        self._records[record.design_id] = replace(record)

    async def delete(self, design_id: int) -> bool:
        return self._records.pop(design_id, None) is not None

    async def for_user(self, user_id: int) -> Sequence[DesignRecord]:
        return [replace(rec) for rec in self._records.values() if rec.user_id == user_id]

    async def recent(self, limit: int = 20) -> Sequence[DesignRecord]:
        ordered = sorted(self._records.values(), key=lambda rec: rec.design_id, reverse=True)
        return [replace(rec) for rec in ordered[:limit]]


class InMemoryCommentStore(CommentStore):
    def __init__(self) -> None:
        self._records: list[CommentRecord] = []

    async def add(self, record: CommentRecord) -> CommentRecord:
        stored = replace(record, comment_id=len(self._records) + 1)
        self._records.append(stored)
        return replace(stored)

    async def for_design(self, design_id: int) -> Sequence[CommentRecord]:
        return [replace(rec) for rec in self._records if rec.design_id == design_id]

    async def count_for_user(self, user_id: int) -> int:
        return sum(1 for rec in self._records if rec.user_id == user_id)


class InMemoryBadgeAwardStore(BadgeAwardStore):
    def __init__(self) -> None:
        self._records: dict[tuple[int, int], UserBadgeRecord] = {}

    async def add(self, record: UserBadgeRecord) -> bool:
        key = (record.user_id, record.badge_id)
        if key in self._records:
            return False
        self._records[key] = record
        return True

    async def for_user(self, user_id: int) -> Sequence[UserBadgeRecord]:
        return [rec for (owner, _), rec in self._records.items() if owner == user_id]


class InMemoryBriefStore(BriefStore):
    def __init__(self) -> None:
        self._active: dict[int, AcceptedBriefRecord] = {}

    async def set_active(self, record: AcceptedBriefRecord) -> None:
        self._active[record.user_id] = record

    async def get_active(self, user_id: int) -> AcceptedBriefRecord | None:
        return self._active.get(user_id)

    async def clear(self, user_id: int) -> bool:
        return self._active.pop(user_id, None) is not None


class InMemoryAuditStore(AuditStore):
    def __init__(self, *, maxlen: int = 1000) -> None:
        self._entries: Deque[tuple[datetime, str, dict]] = deque(maxlen=maxlen)

    async def add_entry(self, action: str, payload: dict) -> None:
        self._entries.append((datetime.now(timezone.utc), action, payload))

    def dump(self) -> list[tuple[datetime, str, dict]]:
        return list(self._entries)
