"""Top level application object for BriefDeck."""

from __future__ import annotations

from dataclasses import dataclass
from random import Random
from typing import Any

from .config import BriefDeckConfig
from .domain.briefs import BriefService
from .domain.defaults import seed_sample_data
from .domain.designs import DesignService
from .domain.draw import CardDrawEngine, DrawResult
from .domain.events import EventBus
from .domain.progress import BadgeService, ProgressService
from .registry import BadgeRegistry, CardRegistry
from .storage.base import (
    AuditStore,
    BadgeAwardStore,
    BriefStore,
    CommentStore,
    DesignStore,
    UserStore,
)
from .storage.memory import (
    InMemoryAuditStore,
    InMemoryBadgeAwardStore,
    InMemoryBriefStore,
    InMemoryCommentStore,
    InMemoryDesignStore,
    InMemoryUserStore,
)
from .storage.sqlalchemy import AsyncSQLAlchemyStorage


@dataclass(slots=True)
class Stores:
    users: UserStore
    designs: DesignStore
    comments: CommentStore
    awards: BadgeAwardStore
    briefs: BriefStore
    audit: AuditStore


class BriefApp:
    """Central dependency container used by transports and tools."""

    def __init__(
        self,
        config: BriefDeckConfig,
        *,
        stores: Stores | None = None,
        event_bus: EventBus | None = None,
        rng: Random | None = None,
    ) -> None:
        self.config = config
        self.event_bus = event_bus or EventBus()
        self.cards = CardRegistry()
        self.badges = BadgeRegistry()
        if config.seed_sample_data:
            seed_sample_data(self.cards.catalog, self.badges.catalog)

        self._rng = rng or (Random(config.rng_seed) if config.rng_seed is not None else Random())
        self.draw_engine = CardDrawEngine(self._rng)

        self._sqlalchemy_storage: AsyncSQLAlchemyStorage | None = None
        self.stores = stores or self._wire_storage()

        progress_config = self.config.progress
        self.progress_service = ProgressService(
            self.stores.users,
            self.stores.designs,
            self.stores.awards,
            self.event_bus,
        )
        self.badge_service = BadgeService(
            self.badges.catalog,
            self.cards.catalog,
            self.stores.awards,
            self.stores.designs,
            self.stores.comments,
            self.progress_service,
            self.event_bus,
            progress_config,
        )
        self.design_service = DesignService(
            self.stores.designs,
            self.stores.comments,
            self.cards.catalog,
            self.progress_service,
            self.badge_service,
            self.event_bus,
            progress_config,
        )
        self.brief_service = BriefService(
            self.stores.briefs,
            self.cards.catalog,
            self.progress_service,
            self.design_service,
            self.event_bus,
            progress_config,
        )

    def _wire_storage(self) -> Stores:
        backend = self.config.storage.backend
        if backend == "memory":
            return Stores(
                users=InMemoryUserStore(),
                designs=InMemoryDesignStore(),
                comments=InMemoryCommentStore(),
                awards=InMemoryBadgeAwardStore(),
                briefs=InMemoryBriefStore(),
                audit=InMemoryAuditStore(),
            )
        if backend == "sqlalchemy":
            dsn = self.config.storage.resolve_dsn()
            if not dsn:
                raise ValueError("SQLAlchemy backend requires a DSN")
            storage = AsyncSQLAlchemyStorage(dsn, echo=self.config.storage.echo_sql)
            self._sqlalchemy_storage = storage
            return Stores(
                users=storage.user_store(),
                designs=storage.design_store(),
                comments=storage.comment_store(),
                awards=storage.badge_store(),
                briefs=storage.brief_store(),
                audit=storage.audit_store(),
            )
        raise ValueError(f"Unsupported storage backend {backend}")

    def draw(self) -> DrawResult:
        """Draw one card per category from the current catalog."""
        return self.draw_engine.draw_all(self.cards.catalog.grouped())

    def snapshot(self) -> dict[str, Any]:
        """Export current configuration for debugging."""
        grouped = self.cards.catalog.grouped()
        return {
            "storage": self.config.storage.backend,
            "cards": {category.value: len(cards) for category, cards in grouped.items()},
            "badges": [badge.name for badge in self.badges.catalog.all()],
            "progress": {
                "design_points": self.config.progress.design_points,
                "badge_points": self.config.progress.badge_points,
                "cancel_penalty": self.config.progress.cancel_penalty,
            },
        }

    async def init_backend(self) -> None:
        """Initialize storage backend resources (e.g., database tables)."""
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.init_models()

    async def close(self) -> None:
        if self._sqlalchemy_storage:
            await self._sqlalchemy_storage.dispose()
