"""Design briefs: composition, acceptance timers and cancellation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from .cards import CardCatalog, Category
from .designs import DesignService, SubmissionOutcome
from .draw import DrawResult
from .events import BRIEF_ACCEPTED, BRIEF_CANCELLED, EventBus
from .exceptions import InvalidArgument, NotFound, StaleBrief
from .levels import UserProgress
from .progress import ProgressService
from ..config import ProgressConfig
from ..storage.base import AcceptedBriefRecord, BriefStore

logger = logging.getLogger(__name__)

BRIEF_TEMPLATE = "Create a {need} for a {client} with {challenge}, targeting {audience}."


@dataclass(frozen=True, slots=True)
class Brief:
    text: str
    card_ids: tuple[int, ...]


def compose_brief(draw: DrawResult) -> Brief | None:
    """Build the brief sentence; None until every category has a card."""
    if not draw.is_complete():
        return None
    text = BRIEF_TEMPLATE.format(
        need=draw[Category.NEED].prompt_text,
        client=draw[Category.CLIENT].prompt_text,
        challenge=draw[Category.CHALLENGE].prompt_text,
        audience=draw[Category.AUDIENCE].prompt_text,
    )
    return Brief(text=text, card_ids=tuple(draw.card_ids()))


def remaining_seconds(record: AcceptedBriefRecord, now: datetime | None = None) -> int | None:
    if record.time_limit_minutes is None:
        return None
    now = now or datetime.now(timezone.utc)
    accepted_at = record.accepted_at
    if accepted_at.tzinfo is None:
        accepted_at = accepted_at.replace(tzinfo=timezone.utc)
    elapsed = int((now - accepted_at).total_seconds())
    return max(0, record.time_limit_minutes * 60 - elapsed)


class BriefService:
    """Server-side tracking of the brief a user is currently working on."""

    def __init__(
        self,
        briefs: BriefStore,
        cards: CardCatalog,
        progress: ProgressService,
        designs: DesignService,
        event_bus: EventBus,
        config: ProgressConfig,
    ) -> None:
        self._briefs = briefs
        self._cards = cards
        self._progress = progress
        self._designs = designs
        self._events = event_bus
        self._config = config

    async def accept(
        self,
        user_id: int,
        brief: Brief,
        *,
        time_limit_minutes: int | None = None,
    ) -> AcceptedBriefRecord:
        if time_limit_minutes is not None and not (
            0 < time_limit_minutes <= self._config.max_timer_minutes
        ):
            raise InvalidArgument(
                f"Timer must be between 1 and {self._config.max_timer_minutes} minutes"
            )
        for card_id in brief.card_ids:
            self._cards.get_card(card_id)
        await self._progress.fetch(user_id)
        record = AcceptedBriefRecord(
            user_id=user_id,
            brief=brief.text,
            card_ids=list(brief.card_ids),
            time_limit_minutes=time_limit_minutes,
        )
        await self._briefs.set_active(record)
        await self._events.publish(
            BRIEF_ACCEPTED,
            {"user_id": user_id, "card_ids": list(brief.card_ids), "minutes": time_limit_minutes},
        )
        return record

    async def active(self, user_id: int) -> AcceptedBriefRecord | None:
        return await self._briefs.get_active(user_id)

    async def cancel(self, user_id: int) -> UserProgress:
        """Drop the active brief and charge the cancellation penalty."""
        if not await self._briefs.clear(user_id):
            raise NotFound(f"User {user_id} has no accepted brief")
        logger.info("User %s cancelled their accepted brief", user_id)
        await self._events.publish(BRIEF_CANCELLED, {"user_id": user_id})
        if self._config.cancel_penalty > 0:
            return await self._progress.penalize(user_id, self._config.cancel_penalty)
        return await self._progress.fetch(user_id)

    async def complete(
        self,
        user_id: int,
        *,
        title: str,
        image_url: str,
        description: str = "",
    ) -> SubmissionOutcome:
        record = await self._briefs.get_active(user_id)
        if record is None:
            raise NotFound(f"User {user_id} has no accepted brief")
        removed = [card_id for card_id in record.card_ids if not self._has_card(card_id)]
        if removed:
            await self._briefs.clear(user_id)
            logger.info("Dropped brief of user %s; removed cards %s", user_id, removed)
            raise StaleBrief(
                f"Brief of user {user_id} uses removed cards: {', '.join(map(str, removed))}"
            )
        outcome = await self._designs.submit(
            user_id,
            title=title,
            image_url=image_url,
            brief=record.brief,
            card_ids=list(record.card_ids),
            description=description,
        )
        await self._briefs.clear(user_id)
        return outcome

    def timer_presets(self) -> Sequence[int]:
        return tuple(self._config.timer_presets)

    def _has_card(self, card_id: int) -> bool:
        try:
            self._cards.get_card(card_id)
        except NotFound:
            return False
        return True
