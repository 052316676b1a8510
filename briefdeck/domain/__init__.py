"""Domain models and services."""

from .badges import Badge, BadgeCatalog, BadgeRequirement
from .briefs import Brief, BriefService, compose_brief
from .cards import CATEGORY_ORDER, Card, CardCatalog, Category, Difficulty
from .designs import DesignService, SubmissionOutcome
from .draw import CardDrawEngine, DrawResult
from .exceptions import BriefDeckError, InvalidArgument, NotFound, StaleBrief
from .levels import (
    UserProgress,
    UserStats,
    add_points,
    apply_penalty,
    compute_stats,
    level_for_points,
    threshold,
)
from .progress import BadgeService, ProgressService

__all__ = [
    "Badge",
    "BadgeCatalog",
    "BadgeRequirement",
    "Brief",
    "BriefService",
    "compose_brief",
    "CATEGORY_ORDER",
    "Card",
    "CardCatalog",
    "Category",
    "Difficulty",
    "DesignService",
    "SubmissionOutcome",
    "CardDrawEngine",
    "DrawResult",
    "BriefDeckError",
    "InvalidArgument",
    "NotFound",
    "StaleBrief",
    "UserProgress",
    "UserStats",
    "add_points",
    "apply_penalty",
    "compute_stats",
    "level_for_points",
    "threshold",
    "BadgeService",
    "ProgressService",
]
