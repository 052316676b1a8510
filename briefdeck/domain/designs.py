"""Design submissions, likes and comments."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from .badges import Badge
from .cards import CardCatalog
from .events import DESIGN_SUBMITTED, EventBus
from .exceptions import InvalidArgument, NotFound
from .levels import UserProgress
from .progress import BadgeService, ProgressService
from ..config import ProgressConfig
from ..storage.base import CommentRecord, CommentStore, DesignRecord, DesignStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SubmissionOutcome:
    design: DesignRecord
    progress: UserProgress
    new_badges: Sequence[Badge] = field(default_factory=tuple)


class DesignService:
    def __init__(
        self,
        designs: DesignStore,
        comments: CommentStore,
        cards: CardCatalog,
        progress: ProgressService,
        badges: BadgeService,
        event_bus: EventBus,
        config: ProgressConfig,
    ) -> None:
        self._designs = designs
        self._comments = comments
        self._cards = cards
        self._progress = progress
        self._badges = badges
        self._events = event_bus
        self._config = config

    async def submit(
        self,
        user_id: int,
        *,
        title: str,
        image_url: str,
        brief: str,
        card_ids: Sequence[int],
        description: str = "",
    ) -> SubmissionOutcome:
        """Store a finished design and reward the designer."""
        if not title or not title.strip():
            raise InvalidArgument("Design title must not be empty")
        if not image_url or not image_url.strip():
            raise InvalidArgument("Design image reference must not be empty")
        if not card_ids:
            raise InvalidArgument("A design must reference the cards of its brief")
        for card_id in card_ids:
            self._cards.get_card(card_id)
        await self._progress.fetch(user_id)

        design = await self._designs.add(
            DesignRecord(
                user_id=user_id,
                title=title.strip(),
                image_url=image_url.strip(),
                brief=brief,
                card_ids=list(card_ids),
                description=description,
            )
        )
        logger.info("User %s submitted design %s", user_id, design.design_id)

        if self._config.design_points > 0:
            progress = await self._progress.award_points(user_id, self._config.design_points)
        else:
            progress = await self._progress.fetch(user_id)
        new_badges = await self._badges.evaluate(user_id)
        if new_badges:
            progress = await self._progress.fetch(user_id)

        await self._events.publish(
            DESIGN_SUBMITTED, {"user_id": user_id, "design_id": design.design_id}
        )
        return SubmissionOutcome(design=design, progress=progress, new_badges=tuple(new_badges))

    async def get(self, design_id: int) -> DesignRecord:
        design = await self._designs.get(design_id)
        if design is None:
            raise NotFound(f"Design {design_id} not found")
        return design

    async def gallery(self, limit: int = 20) -> Sequence[DesignRecord]:
        return await self._designs.recent(limit)

    async def for_user(self, user_id: int) -> Sequence[DesignRecord]:
        return await self._designs.for_user(user_id)

    async def like(self, design_id: int) -> DesignRecord:
        design = await self.get(design_id)
        design.likes += 1
        await self._designs.save(design)
        # Likes count towards the designer's badges.
        await self._badges.evaluate(design.user_id)
        return design

    async def comment(self, design_id: int, user_id: int, content: str) -> CommentRecord:
        await self.get(design_id)
        if not content or not content.strip():
            raise InvalidArgument("Comment must not be empty")
        await self._progress.fetch(user_id)
        comment = await self._comments.add(
            CommentRecord(design_id=design_id, user_id=user_id, content=content.strip())
        )
        await self._badges.evaluate(user_id)
        return comment

    async def comments(self, design_id: int) -> Sequence[CommentRecord]:
        return await self._comments.for_design(design_id)

    async def delete(self, design_id: int) -> None:
        if not await self._designs.delete(design_id):
            raise NotFound(f"Design {design_id} not found")
