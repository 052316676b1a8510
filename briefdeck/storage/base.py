"""Storage abstractions used by the BriefDeck services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol, Sequence


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class UserRecord:
    user_id: int
    username: str | None = None
    is_admin: bool = False
    points: int = 0
    level: int = 1
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class DesignRecord:
    user_id: int
    title: str
    image_url: str
    brief: str
    card_ids: Sequence[int]
    description: str = ""
    likes: int = 0
    design_id: int | None = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class CommentRecord:
    design_id: int
    user_id: int
    content: str
    comment_id: int | None = None
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class UserBadgeRecord:
    user_id: int
    badge_id: int
    earned_at: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class AcceptedBriefRecord:
    user_id: int
    brief: str
    card_ids: Sequence[int]
    accepted_at: datetime = field(default_factory=_utcnow)
    time_limit_minutes: int | None = None


class UserStore(Protocol):
    async def get(self, user_id: int) -> UserRecord | None:
        ...

    async def get_or_create(self, user_id: int, username: str | None = None) -> UserRecord:
        ...

    async def save(self, record: UserRecord) -> None:
        ...

    async def all(self) -> Sequence[UserRecord]:
        ...


class DesignStore(Protocol):
    async def add(self, record: DesignRecord) -> DesignRecord:
        ...

    async def get(self, design_id: int) -> DesignRecord | None:
        ...

    async def save(self, record: DesignRecord) -> None:
        ...

    async def delete(self, design_id: int) -> bool:
        ...

    async def for_user(self, user_id: int) -> Sequence[DesignRecord]:
        ...

    async def recent(self, limit: int = 20) -> Sequence[DesignRecord]:
        ...


class CommentStore(Protocol):
    async def add(self, record: CommentRecord) -> CommentRecord:
        ...

    async def for_design(self, design_id: int) -> Sequence[CommentRecord]:
        ...

    async def count_for_user(self, user_id: int) -> int:
        ...


class BadgeAwardStore(Protocol):
    async def add(self, record: UserBadgeRecord) -> bool:
        """Store the award; False when the user already holds the badge."""
        ...

    async def for_user(self, user_id: int) -> Sequence[UserBadgeRecord]:
        ...


class BriefStore(Protocol):
    async def set_active(self, record: AcceptedBriefRecord) -> None:
        ...

    async def get_active(self, user_id: int) -> AcceptedBriefRecord | None:
        ...

    async def clear(self, user_id: int) -> bool:
        ...


class AuditStore(Protocol):
    async def add_entry(self, action: str, payload: dict) -> None:
        ...
