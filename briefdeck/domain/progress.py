"""User progress: points, levels, stats and badges."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

from .badges import Badge, BadgeCatalog, BadgeRequirement
from .cards import Category, CardCatalog
from .events import (
    BADGE_AWARDED,
    LEVEL_CHANGED,
    POINTS_AWARDED,
    POINTS_PENALIZED,
    EventBus,
)
from .exceptions import NotFound
from .levels import UserProgress, UserStats, add_points, apply_penalty, compute_stats
from ..config import ProgressConfig
from ..storage.base import (
    BadgeAwardStore,
    CommentStore,
    DesignRecord,
    DesignStore,
    UserBadgeRecord,
    UserRecord,
    UserStore,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class EarnedBadge:
    badge: Badge
    earned_at: datetime


class ProgressService:
    """Apply the level curve to stored users."""

    def __init__(
        self,
        users: UserStore,
        designs: DesignStore,
        awards: BadgeAwardStore,
        event_bus: EventBus,
    ) -> None:
        self._users = users
        self._designs = designs
        self._awards = awards
        self._events = event_bus
        self._locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def ensure_user(self, user_id: int, username: str | None = None) -> UserRecord:
        async with self._locks[user_id]:
            return await self._users.get_or_create(user_id, username)

    async def fetch(self, user_id: int) -> UserProgress:
        record = await self._require(user_id)
        return UserProgress(points=record.points, level=record.level)

    async def award_points(self, user_id: int, delta: int) -> UserProgress:
        async with self._locks[user_id]:
            record = await self._require(user_id)
            before = UserProgress(points=record.points, level=record.level)
            after = add_points(before, delta)
            await self._store(record, after)
        await self._events.publish(
            POINTS_AWARDED, {"user_id": user_id, "delta": delta, "points": after.points}
        )
        await self._announce_level(user_id, before, after)
        return after

    async def penalize(self, user_id: int, amount: int) -> UserProgress:
        """Deduct points; the level is re-derived and may go down."""
        async with self._locks[user_id]:
            record = await self._require(user_id)
            before = UserProgress(points=record.points, level=record.level)
            after = apply_penalty(before, amount)
            await self._store(record, after)
        logger.info(
            "User %s penalized by %s points (%s -> %s)",
            user_id,
            amount,
            before.points,
            after.points,
        )
        await self._events.publish(
            POINTS_PENALIZED, {"user_id": user_id, "amount": amount, "points": after.points}
        )
        await self._announce_level(user_id, before, after)
        return after

    async def set_admin(self, user_id: int, is_admin: bool) -> UserRecord:
        async with self._locks[user_id]:
            record = await self._users.get_or_create(user_id)
            record.is_admin = is_admin
            await self._users.save(record)
            return record

    async def stats(self, user_id: int) -> UserStats:
        record = await self._require(user_id)
        designs = await self._designs.for_user(user_id)
        awards = await self._awards.for_user(user_id)
        return compute_stats(
            points=record.points,
            level=record.level,
            design_count=len(designs),
            badge_count=len(awards),
            total_likes=sum(design.likes for design in designs),
        )

    async def _require(self, user_id: int) -> UserRecord:
        record = await self._users.get(user_id)
        if record is None:
            raise NotFound(f"User {user_id} not found")
        return record

    async def _store(self, record: UserRecord, progress: UserProgress) -> None:
        record.points = progress.points
        record.level = progress.level
        await self._users.save(record)

    async def _announce_level(
        self, user_id: int, before: UserProgress, after: UserProgress
    ) -> None:
        if before.level == after.level:
            return
        logger.info("User %s moved from level %s to %s", user_id, before.level, after.level)
        await self._events.publish(
            LEVEL_CHANGED,
            {"user_id": user_id, "previous": before.level, "level": after.level},
        )


class BadgeService:
    """Evaluate badge requirements and award badges with their points."""

    def __init__(
        self,
        badges: BadgeCatalog,
        cards: CardCatalog,
        awards: BadgeAwardStore,
        designs: DesignStore,
        comments: CommentStore,
        progress: ProgressService,
        event_bus: EventBus,
        config: ProgressConfig,
    ) -> None:
        self._badges = badges
        self._cards = cards
        self._awards = awards
        self._designs = designs
        self._comments = comments
        self._progress = progress
        self._events = event_bus
        self._config = config

    async def earned(self, user_id: int) -> list[EarnedBadge]:
        earned: list[EarnedBadge] = []
        for record in await self._awards.for_user(user_id):
            try:
                badge = self._badges.get(record.badge_id)
            except NotFound:
                logger.warning("User %s holds unknown badge %s", user_id, record.badge_id)
                continue
            earned.append(EarnedBadge(badge=badge, earned_at=record.earned_at))
        return earned

    async def award(self, user_id: int, badge_id: int) -> bool:
        """Award a badge once. Returns False when the user already had it."""
        badge = self._badges.get(badge_id)
        if not await self._awards.add(UserBadgeRecord(user_id=user_id, badge_id=badge.badge_id)):
            return False
        logger.info("User %s earned badge %r", user_id, badge.name)
        if self._config.badge_points > 0:
            await self._progress.award_points(user_id, self._config.badge_points)
        await self._events.publish(
            BADGE_AWARDED, {"user_id": user_id, "badge_id": badge.badge_id}
        )
        return True

    async def evaluate(self, user_id: int) -> list[Badge]:
        """Award every badge whose requirement the user now meets."""
        counts = await self.requirement_counts(user_id)
        owned = [record.badge_id for record in await self._awards.for_user(user_id)]
        awarded: list[Badge] = []
        for badge in self._badges.eligible(counts, exclude=owned):
            if await self.award(user_id, badge.badge_id):
                awarded.append(badge)
        return awarded

    async def requirement_counts(self, user_id: int) -> dict[BadgeRequirement, int]:
        designs = await self._designs.for_user(user_id)
        return {
            BadgeRequirement.CHALLENGES: len(designs),
            BadgeRequirement.COLOR_CHALLENGES: self._count_using(
                designs, Category.CHALLENGE, "color"
            ),
            BadgeRequirement.LOGO_DESIGNS: self._count_using(designs, Category.NEED, "logo"),
            BadgeRequirement.COMMENTS: await self._comments.count_for_user(user_id),
            BadgeRequirement.LIKES: max((design.likes for design in designs), default=0),
        }

    def _count_using(
        self, designs: Sequence[DesignRecord], category: Category, keyword: str
    ) -> int:
        count = 0
        for design in designs:
            for card_id in design.card_ids:
                try:
                    card = self._cards.get_card(card_id)
                except NotFound:
                    continue
                if card.category is category and keyword in card.prompt_text.lower():
                    count += 1
                    break
        return count
