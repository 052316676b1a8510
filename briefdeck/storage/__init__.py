"""Storage backends for BriefDeck."""

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
from .memory import (
    InMemoryAuditStore,
    InMemoryBadgeAwardStore,
    InMemoryBriefStore,
    InMemoryCommentStore,
    InMemoryDesignStore,
    InMemoryUserStore,
)
from .sqlalchemy import AsyncSQLAlchemyStorage

__all__ = [
    "AcceptedBriefRecord",
    "AuditStore",
    "BadgeAwardStore",
    "BriefStore",
    "CommentRecord",
    "CommentStore",
    "DesignRecord",
    "DesignStore",
    "UserBadgeRecord",
    "UserRecord",
    "UserStore",
    "InMemoryAuditStore",
    "InMemoryBadgeAwardStore",
    "InMemoryBriefStore",
    "InMemoryCommentStore",
    "InMemoryDesignStore",
    "InMemoryUserStore",
    "AsyncSQLAlchemyStorage",
]
