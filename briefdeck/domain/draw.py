"""Card draw and reroll selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import Iterator, Mapping, Sequence

from .cards import CATEGORY_ORDER, Card, Category
from .exceptions import InvalidArgument, NotFound

CatalogSnapshot = Mapping[Category, Sequence[Card]]


@dataclass(frozen=True, slots=True)
class DrawResult:
    """One selected card (or None) per category."""

    cards: Mapping[Category, Card | None] = field(default_factory=dict)

    def __getitem__(self, category: Category) -> Card | None:
        return self.cards.get(Category.parse(category))

    def __iter__(self) -> Iterator[Category]:
        return iter(CATEGORY_ORDER)

    def is_complete(self) -> bool:
        return all(self[category] is not None for category in CATEGORY_ORDER)

    def card_ids(self) -> list[int]:
        return [card.card_id for card in (self[c] for c in CATEGORY_ORDER) if card is not None]

    def with_card(self, card: Card) -> "DrawResult":
        updated = dict(self.cards)
        updated[card.category] = card
        return DrawResult(cards=updated)


class CardDrawEngine:
    """Stateless uniform selection over a catalog snapshot."""

    def __init__(self, rng: Random | None = None) -> None:
        self._rng = rng or Random()

    def draw_all(self, catalog: CatalogSnapshot) -> DrawResult:
        selected: dict[Category, Card | None] = {}
        for category in CATEGORY_ORDER:
            candidates = catalog.get(category) or ()
            selected[category] = self._rng.choice(candidates) if candidates else None
        return DrawResult(cards=selected)

    def reroll(
        self,
        catalog: CatalogSnapshot,
        category: Category | str,
        current_card: Card | None,
    ) -> Card:
        """Pick a new card for ``category``, avoiding ``current_card`` when possible."""
        category = Category.parse(category)
        if category not in catalog:
            raise InvalidArgument(f"Category {category.value} is not part of the catalog")
        candidates = list(catalog[category])
        if not candidates:
            raise NotFound(f"No cards available in category {category.value}")
        if current_card is None:
            return self._rng.choice(candidates)
        if current_card.category is not category:
            raise InvalidArgument(
                f"Card {current_card.card_id} belongs to {current_card.category.value}, "
                f"not {category.value}"
            )

        alternatives = [card for card in candidates if card.card_id != current_card.card_id]
        # A single-card category has nothing to exclude.
        return self._rng.choice(alternatives or candidates)
