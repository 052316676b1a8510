"""Factories for tests and prototyping."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Iterable

from faker import Faker

from ..domain.cards import CATEGORY_ORDER, Card, Category, Difficulty
from ..domain.levels import level_for_points
from ..storage.base import UserRecord


@dataclass(slots=True)
class CardFactory:
    faker: Faker = field(default_factory=Faker)
    rng: Random = field(default_factory=Random)
    next_id: int = 1

    def build(self, category: Category | None = None, *, card_id: int | None = None) -> Card:
        category = category or self.rng.choice(CATEGORY_ORDER)
        if card_id is None:
            card_id = self.next_id
        self.next_id = max(self.next_id, card_id + 1)
        return Card(
            card_id=card_id,
            category=category,
            prompt_text=self.faker.unique.catch_phrase(),
            back_content=self.faker.sentence(),
            difficulty=self.rng.choice(list(Difficulty)),
        )

    def batch(self, count: int, category: Category | None = None) -> Iterable[Card]:
        for _ in range(count):
            yield self.build(category=category)

    def deck(self, per_category: int = 3) -> list[Card]:
        """A catalog with the same number of cards in every category."""
        cards: list[Card] = []
        for category in CATEGORY_ORDER:
            cards.extend(self.batch(per_category, category=category))
        return cards


@dataclass(slots=True)
class UserFactory:
    faker: Faker = field(default_factory=Faker)

    def build(self, user_id: int | None = None, *, points: int = 0) -> UserRecord:
        user_id = user_id or self.faker.random_int(min=1)
        return UserRecord(
            user_id=user_id,
            username=self.faker.user_name(),
            points=points,
            level=level_for_points(points),
        )
