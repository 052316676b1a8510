"""Administrative operations for BriefDeck bots."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ..config import AdminConfig
from ..domain.cards import Card, CardCatalog, Category, Difficulty
from ..domain.events import EventBus
from ..domain.exceptions import InvalidArgument, NotFound
from ..domain.levels import UserProgress
from ..domain.progress import BadgeService, ProgressService
from ..storage.base import AuditStore

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        catalog: CardCatalog,
        badge_service: BadgeService,
        audit_store: AuditStore,
        progress: ProgressService,
        event_bus: EventBus,
        config: AdminConfig,
    ) -> None:
        self._catalog = catalog
        self._badges = badge_service
        self._audit_store = audit_store
        self._progress = progress
        self._events = event_bus
        self._config = config

    async def create_card(
        self,
        category: Category | str,
        prompt_text: str,
        back_content: str = "",
        difficulty: Difficulty | str = Difficulty.BEGINNER,
    ) -> Card:
        card = self._catalog.create_card(category, prompt_text, back_content, difficulty)
        await self._audit("create_card", {"card_id": card.card_id, "category": card.category.value})
        await self._events.publish("admin.card.created", {"card_id": card.card_id})
        return card

    async def update_card(self, card_id: int, **changes) -> Card:
        card = self._catalog.update_card(card_id, **changes)
        await self._audit("update_card", {"card_id": card_id, "fields": sorted(changes)})
        await self._events.publish("admin.card.updated", {"card_id": card_id})
        return card

    async def remove_card(self, card_id: int) -> None:
        if not self._catalog.remove_card(card_id):
            raise NotFound(f"Card {card_id} not found")
        await self._audit("remove_card", {"card_id": card_id})
        await self._events.publish("admin.card.removed", {"card_id": card_id})

    async def award_badge(self, user_id: int, badge_id: int) -> bool:
        await self._progress.fetch(user_id)
        awarded = await self._badges.award(user_id, badge_id)
        await self._audit("award_badge", {"user_id": user_id, "badge_id": badge_id, "awarded": awarded})
        return awarded

    async def adjust_points(self, user_id: int, delta: int) -> UserProgress:
        """Grant points for a positive delta, deduct them for a negative one."""
        if delta == 0:
            raise InvalidArgument("Delta must be non-zero")
        if delta > 0:
            after = await self._progress.award_points(user_id, delta)
        else:
            after = await self._progress.penalize(user_id, -delta)
        await self._audit("adjust_points", {"user_id": user_id, "delta": delta, "points": after.points})
        return after

    async def set_admin(self, user_id: int, is_admin: bool = True) -> None:
        await self._progress.set_admin(user_id, is_admin)
        logger.info("User %s admin flag set to %s", user_id, is_admin)
        await self._audit("set_admin", {"user_id": user_id, "is_admin": is_admin})
        await self._events.publish("admin.user.promoted", {"user_id": user_id, "is_admin": is_admin})

    async def _audit(self, action: str, payload: dict) -> None:
        if not self._config.enable_audit_logs:
            return
        await self._audit_store.add_entry(
            action,
            {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                **payload,
            },
        )
