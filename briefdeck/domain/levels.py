"""Point-to-level curve and progress statistics.

The curve is ``level = 1 + floor(sqrt(points / 25))``: each level costs more
points than the previous one. ``threshold(n)`` is its exact inverse, the
smallest point total at which level ``n`` is reached.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

from .exceptions import InvalidArgument

POINTS_PER_LEVEL_STEP = 25


@dataclass(frozen=True, slots=True)
class UserProgress:
    points: int = 0
    level: int = 1

    @classmethod
    def from_points(cls, points: int) -> "UserProgress":
        return cls(points=points, level=level_for_points(points))


@dataclass(frozen=True, slots=True)
class UserStats:
    completed_challenges: int
    earned_badges: int
    total_likes: int
    points: int
    level: int
    next_level_points: int
    progress_to_next_level: int

    def to_dict(self) -> dict[str, int]:
        return {
            "completedChallenges": self.completed_challenges,
            "earnedBadges": self.earned_badges,
            "totalLikes": self.total_likes,
            "points": self.points,
            "level": self.level,
            "nextLevelPoints": self.next_level_points,
            "progressToNextLevel": self.progress_to_next_level,
        }


def level_for_points(points: Real) -> int:
    _check_points(points)
    # floor(sqrt(p / 25)) == isqrt(floor(p / 25)), without float rounding.
    return 1 + math.isqrt(int(points // POINTS_PER_LEVEL_STEP))


def threshold(level: int) -> int:
    """Minimum points at which ``level`` is reached."""
    _check_level(level)
    return POINTS_PER_LEVEL_STEP * (level - 1) ** 2


def compute_stats(
    points: Real,
    level: int,
    design_count: int,
    badge_count: int,
    total_likes: int,
) -> UserStats:
    _check_points(points)
    _check_level(level)
    for name, value in (
        ("design_count", design_count),
        ("badge_count", badge_count),
        ("total_likes", total_likes),
    ):
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidArgument(f"{name} must be a non-negative integer, got {value!r}")

    points_for_current_level = threshold(level)
    points_for_next_level = threshold(level + 1)
    points_needed = points_for_next_level - points_for_current_level
    current_progress = points - points_for_current_level
    percentage = int((current_progress * 100) // points_needed)

    return UserStats(
        completed_challenges=design_count,
        earned_badges=badge_count,
        total_likes=total_likes,
        points=points,
        level=level,
        next_level_points=points_needed,
        progress_to_next_level=min(100, max(0, percentage)),
    )


def add_points(progress: UserProgress, delta: int) -> UserProgress:
    """Award ``delta`` points and re-derive the level."""
    _check_delta(delta, "Points delta")
    return UserProgress.from_points(progress.points + delta)


def apply_penalty(progress: UserProgress, amount: int) -> UserProgress:
    """Deduct ``amount`` points (never below zero); the level may drop."""
    _check_delta(amount, "Penalty")
    return UserProgress.from_points(max(0, progress.points - amount))


def level_table(max_level: int) -> list[tuple[int, int]]:
    _check_level(max_level)
    return [(level, threshold(level)) for level in range(1, max_level + 1)]


def _check_points(points: Real) -> None:
    if isinstance(points, bool) or not isinstance(points, Real):
        raise InvalidArgument(f"Points must be a number, got {points!r}")
    if not math.isfinite(points) or points < 0:
        raise InvalidArgument(f"Points must be finite and non-negative, got {points!r}")


def _check_level(level: int) -> None:
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise InvalidArgument(f"Level must be an integer >= 1, got {level!r}")


def _check_delta(delta: int, label: str) -> None:
    if isinstance(delta, bool) or not isinstance(delta, Real):
        raise InvalidArgument(f"{label} must be a number, got {delta!r}")
    if not math.isfinite(delta) or delta <= 0:
        raise InvalidArgument(f"{label} must be positive, got {delta!r}")
