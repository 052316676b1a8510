"""Card domain models and the catalog provider."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Mapping

from .exceptions import InvalidArgument, NotFound


class Category(str, Enum):
    CLIENT = "Client"
    NEED = "Need"
    CHALLENGE = "Challenge"
    AUDIENCE = "Audience"

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        """Accept an enum member or its value, case-insensitively."""
        if isinstance(value, Category):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise InvalidArgument(f"Unknown category {value!r}")


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise InvalidArgument(f"Unknown difficulty {value!r}")


CATEGORY_ORDER: tuple[Category, ...] = (
    Category.CLIENT,
    Category.NEED,
    Category.CHALLENGE,
    Category.AUDIENCE,
)

CATEGORY_ICONS: Mapping[Category, str] = {
    Category.CLIENT: "🏢",
    Category.NEED: "🎯",
    Category.CHALLENGE: "⚡",
    Category.AUDIENCE: "👥",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class Card:
    """A prompt card. Instances are never mutated once drawn."""

    card_id: int
    category: Category
    prompt_text: str
    back_content: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    created_at: datetime = field(default_factory=_utcnow, compare=False)
    updated_at: datetime = field(default_factory=_utcnow, compare=False)

    def to_dict(self) -> dict:
        return {
            "id": self.card_id,
            "category": self.category.value,
            "promptText": self.prompt_text,
            "backContent": self.back_content,
            "difficulty": self.difficulty.value,
        }


class CardCatalog:
    """Registry of cards, grouped by category on demand."""

    def __init__(self) -> None:
        self._cards: dict[int, Card] = {}
        self._next_id = 1

    def create_card(
        self,
        category: Category | str,
        prompt_text: str,
        back_content: str = "",
        difficulty: Difficulty | str = Difficulty.BEGINNER,
    ) -> Card:
        """Create a card with the next free id."""
        card = Card(
            card_id=self._next_id,
            category=Category.parse(category),
            prompt_text=_require_text(prompt_text, "prompt_text"),
            back_content=back_content or "",
            difficulty=Difficulty.parse(difficulty),
        )
        self.register_card(card)
        return card

    def register_card(self, card: Card) -> None:
        if card.card_id in self._cards:
            raise ValueError(f"Card {card.card_id} already registered")
        self._cards[card.card_id] = card
        self._next_id = max(self._next_id, card.card_id + 1)

    def register_cards(self, cards: Iterable[Card]) -> None:
        for card in cards:
            self.register_card(card)

    def update_card(self, card_id: int, **changes) -> Card:
        """Replace a card with an updated copy; unknown fields are rejected."""
        current = self.get_card(card_id)
        allowed = {"category", "prompt_text", "back_content", "difficulty"}
        unknown = set(changes) - allowed
        if unknown:
            raise InvalidArgument(f"Cannot update card fields: {', '.join(sorted(unknown))}")
        if "category" in changes:
            changes["category"] = Category.parse(changes["category"])
        if "difficulty" in changes:
            changes["difficulty"] = Difficulty.parse(changes["difficulty"])
        if "prompt_text" in changes:
            changes["prompt_text"] = _require_text(changes["prompt_text"], "prompt_text")
        updated = replace(current, updated_at=_utcnow(), **changes)
        self._cards[card_id] = updated
        return updated

    def remove_card(self, card_id: int) -> bool:
        return self._cards.pop(card_id, None) is not None

    def get_card(self, card_id: int) -> Card:
        try:
            return self._cards[card_id]
        except KeyError as exc:
            raise NotFound(f"Card {card_id} not found") from exc

    def iter_cards(self) -> Iterable[Card]:
        return self._cards.values()

    def by_category(self, category: Category | str) -> list[Card]:
        wanted = Category.parse(category)
        return [card for card in self._cards.values() if card.category is wanted]

    def grouped(self) -> dict[Category, list[Card]]:
        """Snapshot of the catalog with every category present."""
        groups: dict[Category, list[Card]] = {category: [] for category in CATEGORY_ORDER}
        for card in self._cards.values():
            groups[card.category].append(card)
        return groups

    def __len__(self) -> int:
        return len(self._cards)


def _require_text(value: str, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgument(f"Card {field_name} must be a non-empty string")
    return value.strip()
