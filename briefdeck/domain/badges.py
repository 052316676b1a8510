"""Badge definitions and requirement evaluation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from .exceptions import InvalidArgument, NotFound


class BadgeRequirement(str, Enum):
    CHALLENGES = "challenges"
    COLOR_CHALLENGES = "color_challenges"
    LOGO_DESIGNS = "logo_designs"
    COMMENTS = "comments"
    LIKES = "likes"


@dataclass(frozen=True, slots=True)
class Badge:
    badge_id: int
    name: str
    description: str
    icon: str
    requirement: BadgeRequirement
    required_count: int

    def is_met(self, counts: Mapping[BadgeRequirement, int]) -> bool:
        return counts.get(self.requirement, 0) >= self.required_count

    def to_dict(self) -> dict:
        return {
            "id": self.badge_id,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "requirement": self.requirement.value,
            "requiredCount": self.required_count,
        }


class BadgeCatalog:
    """Registry of badges that users can earn."""

    def __init__(self) -> None:
        self._badges: dict[int, Badge] = {}
        self._next_id = 1

    def create_badge(
        self,
        name: str,
        description: str,
        icon: str,
        requirement: BadgeRequirement | str,
        required_count: int,
    ) -> Badge:
        try:
            requirement = BadgeRequirement(requirement)
        except ValueError as exc:
            raise InvalidArgument(f"Unknown badge requirement {requirement!r}") from exc
        if not isinstance(required_count, int) or required_count <= 0:
            raise InvalidArgument("Badge required_count must be a positive integer")
        badge = Badge(
            badge_id=self._next_id,
            name=name,
            description=description,
            icon=icon,
            requirement=requirement,
            required_count=required_count,
        )
        self.register_badge(badge)
        return badge

    def register_badge(self, badge: Badge) -> None:
        if badge.badge_id in self._badges:
            raise ValueError(f"Badge {badge.badge_id} already registered")
        self._badges[badge.badge_id] = badge
        self._next_id = max(self._next_id, badge.badge_id + 1)

    def get(self, badge_id: int) -> Badge:
        try:
            return self._badges[badge_id]
        except KeyError as exc:
            raise NotFound(f"Badge {badge_id} not found") from exc

    def all(self) -> list[Badge]:
        return list(self._badges.values())

    def eligible(
        self, counts: Mapping[BadgeRequirement, int], *, exclude: Iterable[int] = ()
    ) -> list[Badge]:
        """Badges whose requirement is met and which are not in ``exclude``."""
        skipped = set(exclude)
        return [
            badge
            for badge in self._badges.values()
            if badge.badge_id not in skipped and badge.is_met(counts)
        ]
