"""Per-user card table state owned by the chat UI."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..domain.cards import CATEGORY_ORDER, Card, Category
from ..domain.draw import DrawResult


def _empty_selection() -> dict[Category, Card | None]:
    return {category: None for category in CATEGORY_ORDER}


def _face_down() -> dict[Category, bool]:
    return {category: False for category in CATEGORY_ORDER}


@dataclass(slots=True)
class DeckState:
    """Which card is shown per category and whether it is face up."""

    selected: dict[Category, Card | None] = field(default_factory=_empty_selection)
    flipped: dict[Category, bool] = field(default_factory=_face_down)

    def show(self, draw: DrawResult) -> None:
        """Replace the table with a fresh draw, all cards face down."""
        self.selected = {category: draw[category] for category in CATEGORY_ORDER}
        self.flipped = _face_down()

    def replace(self, card: Card) -> None:
        self.selected[card.category] = card
        self.flipped[card.category] = False

    def flip(self, category: Category) -> bool:
        if self.selected.get(category) is None:
            return False
        self.flipped[category] = not self.flipped[category]
        return self.flipped[category]

    def all_flipped(self) -> bool:
        return all(self.flipped[category] for category in CATEGORY_ORDER)

    def has_cards(self) -> bool:
        return any(card is not None for card in self.selected.values())

    def as_draw(self) -> DrawResult:
        return DrawResult(cards=dict(self.selected))


class DeckStateStore:
    def __init__(self) -> None:
        self._states: dict[int, DeckState] = {}

    def get(self, user_id: int) -> DeckState:
        if user_id not in self._states:
            self._states[user_id] = DeckState()
        return self._states[user_id]

    def reset(self, user_id: int) -> None:
        self._states.pop(user_id, None)
